"""
Shape introspection.

Classifies shapes as simple (scalar/null) or structured and extracts the
pieces the schema synthesizer and the decoder need.
"""

from __future__ import annotations

from typing import Any

from typed_llm.errors import UnsupportedShapeError
from typed_llm.shapes.descriptor import (
    ArrayShape,
    ObjectShape,
    ScalarKind,
    ScalarShape,
    Shape,
    UnionShape,
)

_SHAPE_TYPES = (ScalarShape, ObjectShape, ArrayShape, UnionShape)

# decimal has no JSON Schema type of its own
_SCHEMA_TYPE_NAMES: dict[ScalarKind, str] = {
    ScalarKind.STRING: "string",
    ScalarKind.INTEGER: "integer",
    ScalarKind.NUMBER: "number",
    ScalarKind.DECIMAL: "number",
    ScalarKind.BOOLEAN: "boolean",
    ScalarKind.NULL: "null",
}


def ensure_shape(shape: Any) -> Shape:
    """Return ``shape`` if it is a supported shape descriptor.

    Raises:
        UnsupportedShapeError: If the value is not a shape descriptor
    """
    if not isinstance(shape, _SHAPE_TYPES):
        raise UnsupportedShapeError(
            f"Unsupported shape: {type(shape).__name__}", shape=shape
        )
    if isinstance(shape, UnionShape) and not shape.members:
        raise UnsupportedShapeError("Union has no members", shape=shape)
    return shape


def is_simple(shape: Shape) -> bool:
    """True iff the shape is a scalar or a union of scalars only."""
    ensure_shape(shape)
    if isinstance(shape, ScalarShape):
        return True
    if isinstance(shape, UnionShape):
        return all(isinstance(m, ScalarShape) for m in shape.members)
    return False


def is_null(shape: Shape) -> bool:
    return isinstance(shape, ScalarShape) and shape.kind is ScalarKind.NULL


def is_nilable(shape: Shape) -> bool:
    """True iff the shape admits ``null``."""
    ensure_shape(shape)
    if is_null(shape):
        return True
    if isinstance(shape, UnionShape):
        return any(is_null(m) for m in shape.members)
    return False


def non_null_members(shape: Shape) -> list[Shape]:
    """Members of a union other than null; ``[shape]`` for any other shape."""
    ensure_shape(shape)
    if isinstance(shape, UnionShape):
        return [m for m in shape.members if not is_null(m)]
    if is_null(shape):
        return []
    return [shape]


def scalar_name(shape: Shape) -> str:
    """Map a scalar shape to its JSON Schema type name.

    Raises:
        UnsupportedShapeError: If the shape is not a scalar
    """
    ensure_shape(shape)
    if not isinstance(shape, ScalarShape):
        raise UnsupportedShapeError(
            f"Expected a scalar shape, got {describe_shape(shape)}", shape=shape
        )
    return _SCHEMA_TYPE_NAMES[shape.kind]


def structured_member(shape: Shape) -> ObjectShape | ArrayShape:
    """Return the single structured (object/array) member of a shape.

    Unions may carry one structured member plus an optional null; anything
    else cannot be told apart in tool-call arguments without a discriminant.

    Raises:
        UnsupportedShapeError: If there is no single structured member
    """
    members = non_null_members(shape)
    structured = [m for m in members if isinstance(m, (ObjectShape, ArrayShape))]
    if len(structured) == 1 and len(members) == 1:
        return structured[0]
    if not members:
        raise UnsupportedShapeError("Union has no non-null member", shape=shape)
    if len(structured) > 1:
        raise UnsupportedShapeError(
            f"Union with more than one structured member is not supported: "
            f"{describe_shape(shape)}",
            shape=shape,
        )
    raise UnsupportedShapeError(
        f"Union mixing structured and scalar members is not supported: "
        f"{describe_shape(shape)}",
        shape=shape,
    )


def is_object_root(shape: Shape) -> bool:
    """True iff the shape is an object, ignoring a top-level null union."""
    members = non_null_members(shape)
    return len(members) == 1 and isinstance(members[0], ObjectShape)


def describe_shape(shape: Shape) -> str:
    """Render a shape for error messages.

    Example:
        >>> describe_shape(obj(field_of("title", STRING)))
        'object{title: string}'
    """
    if isinstance(shape, ScalarShape):
        return shape.kind.value
    if isinstance(shape, ArrayShape):
        return f"array<{describe_shape(shape.element)}>"
    if isinstance(shape, UnionShape):
        return " | ".join(describe_shape(m) for m in shape.members)
    if isinstance(shape, ObjectShape):
        inner = ", ".join(
            f"{f.name}{'?' if f.optional else ''}: {describe_shape(f.shape)}"
            for f in shape.fields
        )
        prefix = shape.name or "object"
        return f"{prefix}{{{inner}}}"
    return type(shape).__name__
