"""核心客户端实现：类型化结构输出的统一入口。

Core StructuredClient implementation.

``generate`` runs the whole pipeline for one request: shape resolution,
schema synthesis, request assembly, the HTTP call and response decoding.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.errors import PydanticSchemaGenerationError, PydanticUserError

from typed_llm.client.response import CallStats, ChatResponse
from typed_llm.config import ClientConfig
from typed_llm.errors import (
    InvalidGenerationError,
    TransportError,
    UnsupportedShapeError,
)
from typed_llm.prompt import (
    RESPONSE_TOOL_NAME,
    PromptTemplate,
    build_chat_request,
    build_content_parts,
)
from typed_llm.shapes import ArrayShape, ObjectShape, ScalarShape, Shape, UnionShape
from typed_llm.shapes.binding import shape_from_type
from typed_llm.shapes.introspect import describe_shape
from typed_llm.structured import (
    ResponseSchema,
    decode,
    extract_tool_arguments,
    render_value,
    synthesize,
)
from typed_llm.telemetry import (
    LogContext,
    LogLevel,
    get_logger,
    reset_log_context,
    set_log_context,
)
from typed_llm.transport import HttpTransport

_SHAPE_TYPES = (ScalarShape, ObjectShape, ArrayShape, UnionShape)

logger = get_logger("typed_llm.client")


class StructuredClient:
    """Client that asks a model for output of a declared shape.

    The model is forced to answer through a single tool whose parameters are
    the synthesized schema; the tool arguments are decoded and validated
    before being returned. Errors are raised to the caller and never retried.

    Example:
        >>> class Article(BaseModel):
        ...     title: str
        ...     content: str
        >>> async with StructuredClient(ClientConfig.from_env()) as client:
        ...     article = await client.generate(
        ...         PromptTemplate.of("Write a short article about ", topic),
        ...         Article,
        ...     )
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: HttpTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client configuration
            transport: Transport override; built from ``config`` when omitted
        """
        self._config = config
        self._transport = transport or HttpTransport(config)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def generate(
        self,
        template: PromptTemplate | str | Sequence[Any],
        target: Any,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> Any:
        """Generate a value of the target shape.

        Args:
            template: Prompt template, plain string, or sequence of parts
            target: Shape descriptor, or a Python type (pydantic model,
                dataclass, TypedDict, scalar, list, Optional/Union)
            temperature: Sampling temperature (defaults to config)
            max_tokens: Completion token limit (defaults to config)

        Returns:
            Decoded value; for Python type targets, an instance validated
            into that type

        Raises:
            UnsupportedShapeError: If the target cannot be represented
            ValidationError: If the template embeds invalid documents
            TransportError: On network failures (cause preserved)
            RemoteError: On HTTP error responses
            NoRelevantResponseError: If the model did not call the tool
            InvalidGenerationError: If the reply does not match the shape
        """
        python_type = None if isinstance(target, _SHAPE_TYPES) else target
        shape = target if python_type is None else shape_from_type(python_type)
        adapter = None if python_type is None else _build_adapter(python_type)

        response_schema = synthesize(shape)
        parts = build_content_parts(template)
        payload = build_chat_request(
            parts,
            response_schema,
            temperature=self._config.temperature if temperature is None else temperature,
            max_tokens=self._config.max_tokens if max_tokens is None else max_tokens,
            model=self._config.model,
        )

        stats = CallStats(model=self._config.model)
        token = set_log_context(
            LogContext(
                request_id=stats.client_request_id,
                model=self._config.model,
                tool=RESPONSE_TOOL_NAME,
            )
        )
        try:
            logger.debug(
                "Structured generation started",
                target=describe_shape(shape),
                wrapped=response_schema.was_wrapped,
                parts=len(parts),
            )
            if self._config.verbose and logger.is_enabled_for(LogLevel.DEBUG):
                logger.debug(
                    "Outbound request",
                    messages=json.dumps(payload["messages"]),
                    schema=response_schema.to_json(indent=None),
                )
            value = await self._execute(payload, response_schema, stats)
        finally:
            reset_log_context(token)

        if adapter is None:
            return value
        return _validate_into(adapter, value, shape)

    async def _execute(
        self,
        payload: dict[str, Any],
        response_schema: ResponseSchema,
        stats: CallStats,
    ) -> Any:
        """Send the request and decode the forced tool call."""
        stats.record_start()
        try:
            http_response = await self._transport.post(self._config.chat_path, json=payload)
        finally:
            stats.record_end()

        try:
            body = http_response.json()
        except ValueError as e:
            raise TransportError(
                "Response body is not valid JSON",
                url=str(http_response.request.url),
                cause=e,
            ) from e
        if not isinstance(body, dict):
            raise TransportError(
                "Response body is not a JSON object",
                url=str(http_response.request.url),
            )

        chat_response = ChatResponse.from_openai_format(body)
        stats.total_tokens = chat_response.total_tokens
        logger.info("Model replied", **stats.to_dict())

        raw_arguments = extract_tool_arguments(chat_response, RESPONSE_TOOL_NAME)
        if self._config.verbose:
            logger.debug("Tool arguments received", arguments=raw_arguments)

        return decode(raw_arguments, response_schema)

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> StructuredClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


def _build_adapter(python_type: Any) -> TypeAdapter[Any]:
    """Build the pydantic adapter used to validate replies into a Python type.

    Raises:
        UnsupportedShapeError: If pydantic cannot build a schema for the type
    """
    try:
        return TypeAdapter(python_type)
    except (PydanticUserError, PydanticSchemaGenerationError) as e:
        raise UnsupportedShapeError(
            f"Type {python_type!r} cannot be validated: {e}",
            shape=python_type,
        ) from e


def _validate_into(adapter: TypeAdapter[Any], value: Any, shape: Shape) -> Any:
    """Validate a decoded value into the caller's Python type."""
    try:
        return adapter.validate_python(value)
    except PydanticValidationError as e:
        raise InvalidGenerationError(
            "Reply does not validate into the target type",
            expected=describe_shape(shape),
            received=render_value(value),
        ) from e
