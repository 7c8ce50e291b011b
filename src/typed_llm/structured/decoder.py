"""
Decoding of forced tool-call replies.

Parses the tool-call arguments returned by the model, unwraps the synthetic
``result`` property when the schema was wrapped, and validates the value
against the original target shape.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from typed_llm.errors import (
    InvalidGenerationError,
    NoRelevantResponseError,
    ResponseParseError,
)
from typed_llm.shapes.descriptor import (
    ArrayShape,
    ObjectShape,
    ScalarKind,
    ScalarShape,
    Shape,
    UnionShape,
)
from typed_llm.shapes.introspect import describe_shape, is_nilable, non_null_members
from typed_llm.structured.schema import RESULT_KEY, ResponseSchema

if TYPE_CHECKING:
    from typed_llm.client.response import ChatResponse

_MAX_RENDER_LENGTH = 500


def parse_arguments(raw: str) -> Any:
    """Parse tool-call arguments as JSON text.

    Raises:
        ResponseParseError: If the text is not valid JSON
    """
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise ResponseParseError(
            f"Tool arguments are not valid JSON: {e}", raw=raw
        ) from e


def decode(raw_tool_arguments: str, response_schema: ResponseSchema) -> Any:
    """Decode tool-call arguments into a value matching the target shape.

    Args:
        raw_tool_arguments: JSON text of the tool-call arguments
        response_schema: Schema the request was built with

    Returns:
        Validated value (JSON-native: dict, list, str, int, float, bool,
        None; ``Decimal`` for decimal scalars)

    Raises:
        InvalidGenerationError: If the arguments are not valid JSON or do
            not match the target shape
    """
    shape = response_schema.shape
    try:
        parsed = parse_arguments(raw_tool_arguments)
    except ResponseParseError as e:
        raise InvalidGenerationError(
            "Model returned malformed tool arguments",
            expected=describe_shape(shape),
            received=render_value(raw_tool_arguments),
        ) from e

    if not response_schema.was_wrapped:
        return coerce(parsed, shape)

    if not isinstance(parsed, dict):
        raise InvalidGenerationError(
            f"Expected an object holding '{RESULT_KEY}'",
            expected=f"object{{{RESULT_KEY}: {describe_shape(shape)}}}",
            received=render_value(parsed),
        )
    if RESULT_KEY not in parsed:
        if is_nilable(shape):
            return None
        raise InvalidGenerationError(
            f"Missing '{RESULT_KEY}' property",
            expected=f"object{{{RESULT_KEY}: {describe_shape(shape)}}}",
            received=render_value(parsed),
        )
    return coerce(parsed[RESULT_KEY], shape, RESULT_KEY)


def coerce(value: Any, shape: Shape, path: str = "") -> Any:
    """Validate ``value`` against ``shape`` and return the coerced value.

    Unknown object keys are dropped. Absent optional fields stay absent;
    absent nilable fields that are not optional decode to ``None``. Integral
    floats are accepted for integers.

    Raises:
        InvalidGenerationError: On the first mismatch found
    """
    if isinstance(shape, ScalarShape):
        return _coerce_scalar(value, shape, path)
    if isinstance(shape, ArrayShape):
        return _coerce_array(value, shape, path)
    if isinstance(shape, ObjectShape):
        return _coerce_object(value, shape, path)
    if isinstance(shape, UnionShape):
        return _coerce_union(value, shape, path)
    raise InvalidGenerationError(
        f"Cannot decode into {type(shape).__name__}",
        received=render_value(value),
        path=path or None,
    )


def _mismatch(value: Any, shape: Shape, path: str, message: str) -> InvalidGenerationError:
    return InvalidGenerationError(
        message,
        expected=describe_shape(shape),
        received=render_value(value),
        path=path or None,
    )


def _coerce_scalar(value: Any, shape: ScalarShape, path: str) -> Any:
    kind = shape.kind
    is_number = isinstance(value, (int, float)) and not isinstance(value, bool)

    if kind is ScalarKind.NULL:
        if value is None:
            return None
    elif kind is ScalarKind.STRING:
        if isinstance(value, str):
            return value
    elif kind is ScalarKind.BOOLEAN:
        if isinstance(value, bool):
            return value
    elif kind is ScalarKind.INTEGER:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
    elif kind is ScalarKind.NUMBER:
        if is_number:
            return value
    elif kind is ScalarKind.DECIMAL:
        if is_number:
            return Decimal(str(value))

    raise _mismatch(value, shape, path, f"Expected {kind.value}")


def _coerce_array(value: Any, shape: ArrayShape, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise _mismatch(value, shape, path, "Expected an array")
    return [
        coerce(item, shape.element, f"{path}[{i}]")
        for i, item in enumerate(value)
    ]


def _coerce_object(value: Any, shape: ObjectShape, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise _mismatch(value, shape, path, "Expected an object")

    result: dict[str, Any] = {}
    for f in shape.fields:
        field_path = f"{path}.{f.name}" if path else f.name
        if f.name not in value:
            if f.required:
                raise _mismatch(
                    value, shape, field_path, f"Missing required field '{f.name}'"
                )
            if not f.optional:
                # nilable but declared without a default
                result[f.name] = None
            continue
        result[f.name] = coerce(value[f.name], f.shape, field_path)
    return result


def _coerce_union(value: Any, shape: UnionShape, path: str) -> Any:
    if value is None:
        if is_nilable(shape):
            return None
        raise _mismatch(value, shape, path, "Unexpected null")

    for member in non_null_members(shape):
        try:
            return coerce(value, member, path)
        except InvalidGenerationError:
            continue
    raise _mismatch(value, shape, path, "Value matches no union member")


def render_value(value: Any) -> str:
    """Render a received value for error messages, truncated."""
    if isinstance(value, str):
        text = repr(value)
    else:
        try:
            text = json.dumps(value, default=str)
        except (TypeError, ValueError):
            text = repr(value)
    if len(text) > _MAX_RENDER_LENGTH:
        text = text[:_MAX_RENDER_LENGTH] + "..."
    return text


def extract_tool_arguments(response: ChatResponse, tool_name: str) -> str:
    """Return the raw arguments of the forced tool call in a chat response.

    Raises:
        NoRelevantResponseError: If the reply has no choices, no tool calls,
            or no call to ``tool_name``
    """
    if not response.has_choices:
        raise NoRelevantResponseError("Model reply contained no choices")

    if not response.tool_calls:
        raise NoRelevantResponseError(
            "Model answered without invoking the response tool",
            finish_reason=response.finish_reason,
            content=response.content,
        ).with_hint("check that the model supports forced tool calls")

    for call in response.tool_calls:
        if call.function_name == tool_name:
            return call.arguments_raw
    raise NoRelevantResponseError(
        f"Model did not invoke '{tool_name}'",
        finish_reason=response.finish_reason,
        content=response.content,
    )
