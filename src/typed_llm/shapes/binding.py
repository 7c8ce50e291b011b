"""
Binding of Python types to shape descriptors.

Turns type hints, pydantic models, dataclasses and TypedDicts into the
shape descriptors understood by the schema synthesizer.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
from collections.abc import Hashable
from decimal import Decimal
from typing import (
    Annotated,
    Any,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from pydantic import BaseModel
from typing_extensions import is_typeddict

from typed_llm.errors import UnsupportedShapeError
from typed_llm.shapes.descriptor import (
    BOOLEAN,
    DECIMAL,
    INTEGER,
    NULL,
    NUMBER,
    STRING,
    ArrayShape,
    FieldDescriptor,
    ObjectShape,
    Shape,
    union,
)

_SCALAR_TYPES: dict[Any, Shape] = {
    str: STRING,
    int: INTEGER,
    float: NUMBER,
    Decimal: DECIMAL,
    bool: BOOLEAN,
    type(None): NULL,
    None: NULL,
}

_SEQUENCE_ORIGINS = (
    list,
    tuple,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)


def shape_from_type(python_type: Any) -> Shape:
    """Build a shape descriptor from a Python type.

    Args:
        python_type: Type hint, pydantic model, dataclass or TypedDict

    Returns:
        Shape descriptor for the type

    Raises:
        UnsupportedShapeError: If the type has no shape equivalent

    On Python < 3.12, declare TypedDicts with ``typing_extensions.TypedDict``
    so replies can also be validated into them.

    Example:
        >>> describe_shape(shape_from_type(list[int] | None))
        'array<integer> | null'
    """
    return _convert(python_type, ())


def _convert(python_type: Any, seen: tuple[type, ...]) -> Shape:
    if isinstance(python_type, Hashable) and python_type in _SCALAR_TYPES:
        return _SCALAR_TYPES[python_type]

    origin = get_origin(python_type)
    args = get_args(python_type)

    if origin is Annotated:
        return _convert(args[0], seen)

    if origin is Union or origin is types.UnionType:
        return union(*(_convert(arg, seen) for arg in args))

    if origin in _SEQUENCE_ORIGINS:
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return ArrayShape(element=_convert(args[0], seen))
            raise UnsupportedShapeError(
                "Only variadic tuples (tuple[T, ...]) are supported",
                shape=python_type,
            )
        if len(args) != 1:
            raise UnsupportedShapeError(
                "Sequence types need an element type", shape=python_type
            )
        return ArrayShape(element=_convert(args[0], seen))

    if isinstance(python_type, type):
        if python_type in seen:
            raise UnsupportedShapeError(
                f"Recursive type {python_type.__name__} is not supported",
                shape=python_type,
            )
        if issubclass(python_type, BaseModel):
            return _from_pydantic(python_type, (*seen, python_type))
        if dataclasses.is_dataclass(python_type):
            return _from_dataclass(python_type, (*seen, python_type))
        if is_typeddict(python_type):
            return _from_typeddict(python_type, (*seen, python_type))

    raise UnsupportedShapeError(
        f"Type {python_type!r} cannot be represented as a shape",
        shape=python_type,
    )


def _from_pydantic(model: type[BaseModel], seen: tuple[type, ...]) -> ObjectShape:
    fields = []
    for name, info in model.model_fields.items():
        fields.append(
            FieldDescriptor(
                name=info.alias or name,
                shape=_convert(info.annotation, seen),
                optional=not info.is_required(),
            )
        )
    return ObjectShape(fields=tuple(fields), name=model.__name__)


def _from_dataclass(cls: type, seen: tuple[type, ...]) -> ObjectShape:
    hints = get_type_hints(cls)
    fields = []
    for f in dataclasses.fields(cls):
        has_default = (
            f.default is not dataclasses.MISSING
            or f.default_factory is not dataclasses.MISSING
        )
        fields.append(
            FieldDescriptor(
                name=f.name,
                shape=_convert(hints[f.name], seen),
                optional=has_default,
            )
        )
    return ObjectShape(fields=tuple(fields), name=cls.__name__)


def _from_typeddict(cls: type, seen: tuple[type, ...]) -> ObjectShape:
    hints = get_type_hints(cls)
    required_keys = getattr(cls, "__required_keys__", frozenset(hints))
    fields = [
        FieldDescriptor(
            name=name,
            shape=_convert(hint, seen),
            optional=name not in required_keys,
        )
        for name, hint in hints.items()
    ]
    return ObjectShape(fields=tuple(fields), name=cls.__name__)
