"""Tests for response schema synthesis."""

import json

import pytest

from typed_llm.errors import UnsupportedShapeError
from typed_llm.shapes import (
    BOOLEAN,
    DECIMAL,
    INTEGER,
    NULL,
    NUMBER,
    STRING,
    UnionShape,
    array,
    field_of,
    nullable,
    obj,
    union,
)
from typed_llm.structured import RESULT_KEY, schema_node, synthesize


class TestSimpleNodes:
    """Tests for scalar schema nodes."""

    @pytest.mark.parametrize(
        ("shape", "expected"),
        [
            (STRING, {"type": "string"}),
            (INTEGER, {"type": "integer"}),
            (NUMBER, {"type": "number"}),
            (DECIMAL, {"type": "number"}),
            (BOOLEAN, {"type": "boolean"}),
            (NULL, {"type": "null"}),
        ],
    )
    def test_scalar_leaf(self, shape, expected) -> None:
        assert schema_node(shape) == expected

    def test_nilable_scalar(self) -> None:
        """Test a nilable scalar becomes oneOf leaf or null."""
        assert schema_node(nullable(STRING)) == {
            "oneOf": [{"type": "string"}, {"type": "null"}]
        }

    def test_multi_scalar_union(self) -> None:
        """Test a scalar union lists each leaf with null last."""
        node = schema_node(union(NULL, STRING, INTEGER))
        assert node == {
            "oneOf": [{"type": "string"}, {"type": "integer"}, {"type": "null"}]
        }

    def test_integer_folds_into_number(self) -> None:
        """Test oneOf leaves never overlap for int | float."""
        result = synthesize(union(INTEGER, NUMBER))
        assert result.schema["properties"][RESULT_KEY] == {"type": "number"}

    def test_overlapping_leaves_with_null(self) -> None:
        node = schema_node(union(STRING, INTEGER, NUMBER, DECIMAL, NULL))
        assert node == {
            "oneOf": [{"type": "string"}, {"type": "number"}, {"type": "null"}]
        }

    def test_nilable_int_or_float(self) -> None:
        assert schema_node(union(INTEGER, NUMBER, NULL)) == {
            "oneOf": [{"type": "number"}, {"type": "null"}]
        }


class TestStructuredNodes:
    """Tests for array and object schema nodes."""

    def test_array(self) -> None:
        assert schema_node(array(INTEGER)) == {
            "type": "array",
            "items": {"type": "integer"},
        }

    def test_nilable_array(self) -> None:
        assert schema_node(nullable(array(STRING))) == {
            "oneOf": [
                {"type": "array", "items": {"type": "string"}},
                {"type": "null"},
            ]
        }

    def test_array_of_nilable(self) -> None:
        assert schema_node(array(nullable(INTEGER))) == {
            "type": "array",
            "items": {"oneOf": [{"type": "integer"}, {"type": "null"}]},
        }

    def test_object_required_excludes_nilable_and_optional(self) -> None:
        shape = obj(
            field_of("title", STRING),
            field_of("subtitle", nullable(STRING)),
            field_of("tags", array(STRING), optional=True),
        )
        node = schema_node(shape)

        assert node["type"] == "object"
        assert list(node["properties"]) == ["title", "subtitle", "tags"]
        assert node["required"] == ["title"]
        assert "additionalProperties" not in node

    def test_nested_object(self) -> None:
        shape = obj(field_of("author", obj(field_of("name", STRING))))
        assert schema_node(shape)["properties"]["author"] == {
            "type": "object",
            "properties": {"name": {"type": "string"}},
            "required": ["name"],
        }

    def test_duplicate_field_names(self) -> None:
        shape = obj(field_of("a", STRING), field_of("a", INTEGER))
        with pytest.raises(UnsupportedShapeError, match="Duplicate"):
            schema_node(shape)


class TestUnsupportedUnions:
    """Tests for unions that cannot be synthesized."""

    def test_two_structured_members(self) -> None:
        with pytest.raises(UnsupportedShapeError, match="more than one structured"):
            schema_node(union(obj(field_of("a", STRING)), array(STRING)))

    def test_structured_and_scalar(self) -> None:
        with pytest.raises(UnsupportedShapeError, match="mixing"):
            schema_node(union(array(STRING), INTEGER))

    def test_empty_union(self) -> None:
        with pytest.raises(UnsupportedShapeError):
            synthesize(UnionShape(members=()))

    def test_not_a_shape(self) -> None:
        with pytest.raises(UnsupportedShapeError):
            synthesize(int)


class TestSynthesize:
    """Tests for root wrapping."""

    def test_integer_is_wrapped(self) -> None:
        result = synthesize(INTEGER)
        assert result.was_wrapped is True
        assert result.schema == {
            "type": "object",
            "properties": {RESULT_KEY: {"type": "integer"}},
            "required": [RESULT_KEY],
        }

    def test_object_is_not_wrapped(self) -> None:
        shape = obj(field_of("title", STRING), field_of("content", STRING))
        result = synthesize(shape)
        assert result.was_wrapped is False
        assert result.schema == {
            "type": "object",
            "properties": {
                "title": {"type": "string"},
                "content": {"type": "string"},
            },
            "required": ["title", "content"],
        }

    def test_array_of_objects_is_wrapped(self) -> None:
        result = synthesize(array(obj()))
        assert result.was_wrapped is True
        assert result.schema["properties"][RESULT_KEY] == {
            "type": "array",
            "items": {"type": "object", "properties": {}, "required": []},
        }

    def test_nilable_object_root(self) -> None:
        """Test a nilable object root stays unwrapped as oneOf object or null."""
        shape = nullable(obj(field_of("name", STRING)))
        result = synthesize(shape)
        assert result.was_wrapped is False
        assert result.schema == {
            "oneOf": [
                {
                    "type": "object",
                    "properties": {"name": {"type": "string"}},
                    "required": ["name"],
                },
                {"type": "null"},
            ]
        }

    def test_nilable_scalar_root_is_not_required(self) -> None:
        result = synthesize(nullable(BOOLEAN))
        assert result.was_wrapped is True
        assert result.schema["required"] == []
        assert result.schema["properties"][RESULT_KEY] == {
            "oneOf": [{"type": "boolean"}, {"type": "null"}]
        }

    def test_keeps_shape(self) -> None:
        result = synthesize(STRING)
        assert result.shape == STRING

    def test_to_json(self) -> None:
        result = synthesize(STRING)
        assert json.loads(result.to_json()) == result.schema
        assert "\n" not in result.to_json(indent=None)
