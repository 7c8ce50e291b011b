"""Tests for decoding forced tool-call arguments."""

import json
from decimal import Decimal

import pytest

from typed_llm.client.response import ChatResponse
from typed_llm.errors import (
    InvalidGenerationError,
    NoRelevantResponseError,
    ResponseParseError,
)
from typed_llm.shapes import (
    BOOLEAN,
    DECIMAL,
    INTEGER,
    NUMBER,
    STRING,
    array,
    field_of,
    nullable,
    obj,
    union,
)
from typed_llm.structured import (
    coerce,
    decode,
    extract_tool_arguments,
    parse_arguments,
    render_value,
    synthesize,
)

ARTICLE = obj(field_of("title", STRING), field_of("content", STRING))


class TestParseArguments:
    """Tests for parse_arguments."""

    def test_valid_json(self) -> None:
        assert parse_arguments('{"a": [1, 2]}') == {"a": [1, 2]}

    def test_invalid_json(self) -> None:
        with pytest.raises(ResponseParseError) as exc_info:
            parse_arguments("{not json")
        assert exc_info.value.raw == "{not json"


class TestDecodeWrapped:
    """Tests for decoding wrapped answers."""

    def test_integer(self) -> None:
        assert decode('{"result": 4}', synthesize(INTEGER)) == 4

    def test_empty_objects_array(self) -> None:
        schema = synthesize(array(obj()))
        assert decode('{"result": [{}, {}]}', schema) == [{}, {}]

    def test_missing_result(self) -> None:
        with pytest.raises(InvalidGenerationError, match="Missing 'result'"):
            decode("{}", synthesize(STRING))

    def test_missing_result_for_nilable(self) -> None:
        assert decode("{}", synthesize(nullable(STRING))) is None

    def test_explicit_null_for_nilable(self) -> None:
        assert decode('{"result": null}', synthesize(nullable(INTEGER))) is None

    def test_null_for_non_nilable(self) -> None:
        with pytest.raises(InvalidGenerationError) as exc_info:
            decode('{"result": null}', synthesize(INTEGER))
        assert exc_info.value.path == "result"

    def test_non_object_arguments(self) -> None:
        with pytest.raises(InvalidGenerationError):
            decode("[1, 2]", synthesize(array(INTEGER)))

    def test_wrong_type(self) -> None:
        with pytest.raises(InvalidGenerationError) as exc_info:
            decode('{"result": "four"}', synthesize(INTEGER))
        assert exc_info.value.expected == "integer"
        assert exc_info.value.received == "'four'"

    def test_malformed_json_is_chained(self) -> None:
        with pytest.raises(InvalidGenerationError) as exc_info:
            decode('{"result": ', synthesize(INTEGER))
        assert isinstance(exc_info.value.__cause__, ResponseParseError)


class TestDecodeUnwrapped:
    """Tests for decoding object roots."""

    def test_record(self) -> None:
        raw = json.dumps({"title": "Hello", "content": "World"})
        assert decode(raw, synthesize(ARTICLE)) == {"title": "Hello", "content": "World"}

    def test_wrongly_wrapped_object(self) -> None:
        """Test an object answer nested under result is rejected."""
        shape = obj(field_of("name", STRING))
        with pytest.raises(InvalidGenerationError) as exc_info:
            decode('{"result": {"name": "x", "extra": 1}}', synthesize(shape))
        assert exc_info.value.path == "name"

    def test_unknown_keys_dropped(self) -> None:
        shape = obj(field_of("name", STRING))
        assert decode('{"name": "x", "extra": 1}', synthesize(shape)) == {"name": "x"}

    def test_nilable_object_root(self) -> None:
        shape = nullable(obj(field_of("name", STRING)))
        schema = synthesize(shape)
        assert decode("null", schema) is None
        assert decode('{"name": "x"}', schema) == {"name": "x"}

    def test_absent_optional_fields_stay_absent(self) -> None:
        shape = obj(
            field_of("name", STRING),
            field_of("alias", STRING, optional=True),
            field_of("nickname", nullable(STRING), optional=True),
        )
        assert decode('{"name": "x"}', synthesize(shape)) == {"name": "x"}

    def test_absent_nilable_field_decodes_to_none(self) -> None:
        """Test a nilable field without a default is filled with None."""
        shape = obj(field_of("name", STRING), field_of("note", nullable(STRING)))
        schema = synthesize(shape)
        assert schema.schema["required"] == ["name"]
        assert decode('{"name": "x"}', schema) == {"name": "x", "note": None}

    def test_nested_absent_nilable_field(self) -> None:
        shape = obj(field_of("owner", obj(field_of("email", nullable(STRING)))))
        assert decode('{"owner": {}}', synthesize(shape)) == {"owner": {"email": None}}


class TestRoundTrip:
    """Tests that encoded values decode back unchanged.

    Decimal scalars are left out: they decode to ``Decimal(str(v))``, which
    does not compare equal to the binary float sent on the wire.
    """

    @pytest.mark.parametrize(
        ("shape", "value"),
        [
            (STRING, "hello"),
            (nullable(INTEGER), None),
            (union(INTEGER, NUMBER), 2.5),
            (array(ARTICLE), [{"title": "a", "content": "b"}]),
            (ARTICLE, {"title": "a", "content": "b"}),
        ],
    )
    def test_round_trip(self, shape, value) -> None:
        schema = synthesize(shape)
        arguments = {"result": value} if schema.was_wrapped else value
        assert decode(json.dumps(arguments), schema) == value

    def test_decimal_decodes_from_text_form(self) -> None:
        value = decode('{"result": 0.1}', synthesize(DECIMAL))
        assert value == Decimal("0.1")
        assert value != 0.1


class TestCoerce:
    """Tests for coerce."""

    def test_boolean_is_not_a_number(self) -> None:
        with pytest.raises(InvalidGenerationError):
            coerce(True, INTEGER)
        with pytest.raises(InvalidGenerationError):
            coerce(False, NUMBER)

    def test_integral_float_accepted_as_integer(self) -> None:
        value = coerce(3.0, INTEGER)
        assert value == 3
        assert isinstance(value, int)

    def test_fractional_float_rejected_as_integer(self) -> None:
        with pytest.raises(InvalidGenerationError):
            coerce(3.5, INTEGER)

    def test_decimal(self) -> None:
        assert coerce(0.1, DECIMAL) == Decimal("0.1")
        assert coerce(7, DECIMAL) == Decimal("7")

    def test_boolean(self) -> None:
        assert coerce(False, BOOLEAN) is False
        with pytest.raises(InvalidGenerationError):
            coerce("false", BOOLEAN)

    def test_union_first_match(self) -> None:
        shape = union(INTEGER, STRING)
        assert coerce("7", shape) == "7"
        assert coerce(7, shape) == 7

    def test_union_no_match(self) -> None:
        with pytest.raises(InvalidGenerationError, match="no union member"):
            coerce([1], union(INTEGER, STRING))

    def test_nested_path(self) -> None:
        shape = obj(field_of("items", array(obj(field_of("title", STRING)))))
        with pytest.raises(InvalidGenerationError) as exc_info:
            coerce({"items": [{"title": "a"}, {"title": 2}]}, shape)
        assert exc_info.value.path == "items[1].title"

    def test_missing_required_field(self) -> None:
        with pytest.raises(InvalidGenerationError, match="Missing required field 'content'"):
            coerce({"title": "x"}, ARTICLE)

    def test_array_expected(self) -> None:
        with pytest.raises(InvalidGenerationError, match="Expected an array"):
            coerce({"a": 1}, array(INTEGER))


class TestRenderValue:
    """Tests for render_value."""

    def test_json_values(self) -> None:
        assert render_value({"a": 1}) == '{"a": 1}'
        assert render_value(None) == "null"

    def test_truncation(self) -> None:
        text = render_value("x" * 1000)
        assert len(text) == 503
        assert text.endswith("...")


def _response(message: dict, choices: bool = True) -> ChatResponse:
    body = {"choices": [{"message": message, "finish_reason": "stop"}] if choices else []}
    return ChatResponse.from_openai_format(body)


class TestExtractToolArguments:
    """Tests for extract_tool_arguments."""

    def test_returns_raw_arguments(self) -> None:
        response = _response(
            {
                "tool_calls": [
                    {
                        "id": "call_1",
                        "type": "function",
                        "function": {"name": "generate_response", "arguments": '{"result": 4}'},
                    }
                ]
            }
        )
        assert extract_tool_arguments(response, "generate_response") == '{"result": 4}'

    def test_no_choices(self) -> None:
        with pytest.raises(NoRelevantResponseError):
            extract_tool_arguments(_response({}, choices=False), "generate_response")

    def test_plain_text_answer(self) -> None:
        with pytest.raises(NoRelevantResponseError) as exc_info:
            extract_tool_arguments(_response({"content": "yes"}), "generate_response")
        assert exc_info.value.content == "yes"
        assert exc_info.value.finish_reason == "stop"
        assert exc_info.value.context.hint is not None

    def test_other_tool_called(self) -> None:
        response = _response(
            {
                "tool_calls": [
                    {
                        "id": "call_1",
                        "type": "function",
                        "function": {"name": "search", "arguments": "{}"},
                    }
                ]
            }
        )
        with pytest.raises(NoRelevantResponseError, match="generate_response"):
            extract_tool_arguments(response, "generate_response")
