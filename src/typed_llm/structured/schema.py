"""
JSON Schema synthesis from shape descriptors.

Turns a target shape into the JSON Schema used as the parameters of the
forced response tool. Tool arguments must be an object, so non-object root
shapes are wrapped in a single-property object under ``RESULT_KEY``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from typed_llm.errors import UnsupportedShapeError
from typed_llm.shapes.descriptor import ArrayShape, ObjectShape, Shape
from typed_llm.shapes.introspect import (
    describe_shape,
    ensure_shape,
    is_nilable,
    is_object_root,
    is_simple,
    non_null_members,
    scalar_name,
    structured_member,
)

RESULT_KEY = "result"
"""Property holding the real answer when the root shape is wrapped."""

NULL_SCHEMA: dict[str, Any] = {"type": "null"}


@dataclass(frozen=True)
class ResponseSchema:
    """Synthesized schema plus the wrapping decision.

    Attributes:
        schema: JSON Schema for the tool-call arguments
        was_wrapped: Whether the answer lives under ``RESULT_KEY``
        shape: The original target shape, used when decoding
    """

    schema: dict[str, Any]
    was_wrapped: bool
    shape: Shape

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize the schema to JSON text."""
        return json.dumps(self.schema, indent=indent)


def synthesize(shape: Shape) -> ResponseSchema:
    """Synthesize the response schema for a target shape.

    Args:
        shape: Target shape descriptor

    Returns:
        ResponseSchema with the schema and the wrapping decision

    Raises:
        UnsupportedShapeError: If the shape cannot be represented

    Example:
        >>> synthesize(INTEGER).schema
        {'type': 'object', 'properties': {'result': {'type': 'integer'}}, 'required': ['result']}
    """
    ensure_shape(shape)
    node = schema_node(shape)

    if is_object_root(shape):
        return ResponseSchema(schema=node, was_wrapped=False, shape=shape)

    wrapped = {
        "type": "object",
        "properties": {RESULT_KEY: node},
        "required": [] if is_nilable(shape) else [RESULT_KEY],
    }
    return ResponseSchema(schema=wrapped, was_wrapped=True, shape=shape)


def schema_node(shape: Shape) -> dict[str, Any]:
    """Recursively build the JSON Schema node for a shape (no root wrapping)."""
    ensure_shape(shape)
    if is_simple(shape):
        return _simple_node(shape)

    target = structured_member(shape)
    if isinstance(target, ArrayShape):
        node = {"type": "array", "items": schema_node(target.element)}
    else:
        node = _object_node(target)

    if is_nilable(shape):
        return _or_null(node)
    return node


def _simple_node(shape: Shape) -> dict[str, Any]:
    members = non_null_members(shape)
    if not members:
        # only null is admitted
        return dict(NULL_SCHEMA)

    names: list[str] = []
    for m in members:
        name = scalar_name(m)
        if name not in names:
            names.append(name)
    # every integer is also a number; oneOf leaves must not overlap
    if "integer" in names and "number" in names:
        names.remove("integer")

    leaves = [{"type": name} for name in names]
    if len(leaves) == 1:
        node = leaves[0]
        return _or_null(node) if is_nilable(shape) else node

    if is_nilable(shape):
        leaves.append(dict(NULL_SCHEMA))
    return {"oneOf": leaves}


def _object_node(shape: ObjectShape) -> dict[str, Any]:
    properties: dict[str, Any] = {}
    required: list[str] = []
    for f in shape.fields:
        if f.name in properties:
            raise UnsupportedShapeError(
                f"Duplicate field '{f.name}' in {describe_shape(shape)}",
                shape=shape,
            )
        properties[f.name] = schema_node(f.shape)
        if f.required:
            required.append(f.name)
    return {"type": "object", "properties": properties, "required": required}


def _or_null(node: dict[str, Any]) -> dict[str, Any]:
    return {"oneOf": [node, dict(NULL_SCHEMA)]}


__all__ = [
    "NULL_SCHEMA",
    "RESULT_KEY",
    "ResponseSchema",
    "schema_node",
    "synthesize",
]
