"""
Request assembly for forced tool-call generation.

Builds the multi-part user message from a prompt template and wraps the
synthesized response schema into a single forced tool.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from pydantic import BaseModel

from typed_llm.errors import ValidationError
from typed_llm.prompt.template import PromptTemplate
from typed_llm.structured.schema import ResponseSchema
from typed_llm.types.content import DocumentContentPart, TextPart
from typed_llm.types.document import DOCUMENT_TYPES
from typed_llm.types.message import Message
from typed_llm.types.tool import ToolChoice, ToolDefinition

RESPONSE_TOOL_NAME = "generate_response"
RESPONSE_TOOL_DESCRIPTION = "Return the answer to the user's request."


def build_content_parts(
    template: PromptTemplate | str | Sequence[Any],
) -> list[DocumentContentPart]:
    """Convert a template into ordered content parts.

    Literal text and stringified scalars accumulate in one buffer, which is
    flushed into a text part before each document and after the last
    segment. Empty buffers are never emitted.

    Raises:
        ValidationError: If an embedded document is invalid or a sequence
            mixes documents with other values
    """
    template = PromptTemplate.coerce(template)
    parts: list[DocumentContentPart] = []
    buffer: list[str] = []

    def flush() -> None:
        text = "".join(buffer)
        buffer.clear()
        if text:
            parts.append(TextPart(text=text))

    for index, value in enumerate(template.parts):
        if isinstance(value, DOCUMENT_TYPES):
            flush()
            parts.append(value.to_part())
        elif _is_document_sequence(value, index):
            flush()
            parts.extend(doc.to_part() for doc in value)
        else:
            buffer.append(render_scalar(value))

    flush()
    return parts


def _is_document_sequence(value: Any, index: int) -> bool:
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        return False
    if not value:
        return True
    docs = [isinstance(item, DOCUMENT_TYPES) for item in value]
    if all(docs):
        return True
    if any(docs):
        raise ValidationError(
            "A sequence embedded in a template must hold only documents or none",
            field=f"parts[{index}]",
        )
    return False


def render_scalar(value: Any) -> str:
    """Stringify a value inserted into template text."""
    if isinstance(value, str):
        return value
    if value is None or isinstance(value, bool):
        return json.dumps(value)
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def build_tool_definition(
    response_schema: ResponseSchema,
    name: str = RESPONSE_TOOL_NAME,
) -> ToolDefinition:
    """Package the response schema as the single response tool."""
    return ToolDefinition.from_function(
        name=name,
        description=RESPONSE_TOOL_DESCRIPTION,
        parameters=response_schema.schema,
    )


def forced_tool_choice(name: str = RESPONSE_TOOL_NAME) -> ToolChoice:
    """Tool choice obliging the model to call ``name``."""
    return ToolChoice(name=name)


def build_chat_request(
    parts: list[DocumentContentPart],
    response_schema: ResponseSchema,
    *,
    temperature: float | None = None,
    max_tokens: int | None = None,
    model: str | None = None,
    tool_name: str = RESPONSE_TOOL_NAME,
) -> dict[str, Any]:
    """Build the chat completions payload with a forced tool call.

    Returns:
        Wire payload with ``messages``, ``tools``, ``tool_choice`` and the
        sampling parameters
    """
    tool = build_tool_definition(response_schema, tool_name)
    payload: dict[str, Any] = {
        "messages": [Message.user(parts).to_wire()],
        "tools": [tool.to_wire()],
        "tool_choice": forced_tool_choice(tool_name).to_wire(),
    }
    if model:
        payload["model"] = model
    if temperature is not None:
        payload["temperature"] = temperature
    if max_tokens is not None:
        payload["max_tokens"] = max_tokens
    return payload
