"""
Shape descriptors for target types.

A shape describes the data type a caller wants the model's answer decoded
into. Shapes are immutable tagged values:

- ScalarShape: string, integer, number, decimal, boolean or null
- ObjectShape: ordered named fields
- ArrayShape: homogeneous sequence
- UnionShape: alternatives; a null member makes the shape nilable
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class ScalarKind(str, Enum):
    """Scalar kinds supported by the schema synthesizer."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass(frozen=True)
class ScalarShape:
    """A scalar target type."""

    kind: ScalarKind

    def __str__(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class FieldDescriptor:
    """A named field of an object shape.

    Attributes:
        name: Property name in the JSON document
        shape: Shape of the field value
        optional: Whether the field was declared optional (may be omitted)
    """

    name: str
    shape: Shape
    optional: bool = False

    @property
    def required(self) -> bool:
        """Whether the field must be present in a conforming object."""
        from typed_llm.shapes.introspect import is_nilable

        return not (self.optional or is_nilable(self.shape))


@dataclass(frozen=True)
class ObjectShape:
    """A record with an ordered sequence of fields."""

    fields: tuple[FieldDescriptor, ...] = ()
    name: str | None = field(default=None, compare=False)

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


@dataclass(frozen=True)
class ArrayShape:
    """A sequence whose elements all share one shape."""

    element: Shape


@dataclass(frozen=True)
class UnionShape:
    """Alternatives; order is kept only for deterministic schema output."""

    members: tuple[Shape, ...]


Shape = Union[ScalarShape, ObjectShape, ArrayShape, UnionShape]

STRING = ScalarShape(ScalarKind.STRING)
INTEGER = ScalarShape(ScalarKind.INTEGER)
NUMBER = ScalarShape(ScalarKind.NUMBER)
DECIMAL = ScalarShape(ScalarKind.DECIMAL)
BOOLEAN = ScalarShape(ScalarKind.BOOLEAN)
NULL = ScalarShape(ScalarKind.NULL)


def scalar(kind: ScalarKind | str) -> ScalarShape:
    """Create a scalar shape from a kind or its name."""
    return ScalarShape(ScalarKind(kind))


def obj(*fields: FieldDescriptor, name: str | None = None) -> ObjectShape:
    """Create an object shape from field descriptors."""
    return ObjectShape(fields=tuple(fields), name=name)


def field_of(name: str, shape: Shape, *, optional: bool = False) -> FieldDescriptor:
    """Create a field descriptor."""
    return FieldDescriptor(name=name, shape=shape, optional=optional)


def array(element: Shape) -> ArrayShape:
    """Create an array shape."""
    return ArrayShape(element=element)


def union(*members: Shape) -> Shape:
    """Create a union shape.

    Nested unions are flattened and duplicates removed, keeping the order in
    which members were first seen. A single remaining member is returned
    as is.
    """
    flat: list[Shape] = []
    for member in members:
        inner = member.members if isinstance(member, UnionShape) else (member,)
        for m in inner:
            if m not in flat:
                flat.append(m)
    if len(flat) == 1:
        return flat[0]
    return UnionShape(members=tuple(flat))


def nullable(shape: Shape) -> Shape:
    """Make a shape nilable by adding the null scalar to it."""
    return union(shape, NULL)
