"""
Shapes layer - target type descriptions.

This module provides:
- Shape descriptors (scalar, object, array, union) and constructors
- Introspection helpers (simple/nilable classification, schema type names)
- Binding of Python types (pydantic models, dataclasses, TypedDict) to shapes
"""

from typed_llm.shapes.binding import shape_from_type
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
    ScalarKind,
    ScalarShape,
    Shape,
    UnionShape,
    array,
    field_of,
    nullable,
    obj,
    scalar,
    union,
)
from typed_llm.shapes.introspect import (
    describe_shape,
    is_nilable,
    is_object_root,
    is_simple,
    non_null_members,
    scalar_name,
)

__all__ = [
    "ArrayShape",
    "BOOLEAN",
    "DECIMAL",
    "FieldDescriptor",
    "INTEGER",
    "NULL",
    "NUMBER",
    "ObjectShape",
    "STRING",
    "ScalarKind",
    "ScalarShape",
    "Shape",
    "UnionShape",
    "array",
    "describe_shape",
    "field_of",
    "is_nilable",
    "is_object_root",
    "is_simple",
    "non_null_members",
    "nullable",
    "obj",
    "scalar",
    "scalar_name",
    "shape_from_type",
    "union",
]
