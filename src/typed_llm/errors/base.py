"""错误基类：提供类型化结构输出引擎的分层错误体系。

Base error classes for typed-llm.

Provides a layered error hierarchy:
- TypedLlmError: Base class for all library errors
- UnsupportedShapeError: Target shape cannot be expressed as a JSON Schema
- NoRelevantResponseError: Model did not invoke the forced tool
- ResponseParseError: Tool arguments are not valid JSON
- InvalidGenerationError: Decoded value does not match the target shape
- ValidationError: Invalid caller input (templates, documents, config)
- TransportError: HTTP/network errors
- RemoteError: Remote API errors with classification
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typed_llm.errors.classification import ErrorClass


@dataclass
class ErrorContext:
    """Structured error context for diagnostics."""

    field_path: str | None = None
    """Path to the problematic value (e.g., 'result.items[2].title')"""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the error"""

    source: str | None = None
    """Error source (e.g., 'schema', 'decoder', 'transport')"""

    hint: str | None = None
    """Actionable hint for resolving the error"""

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.field_path:
            parts.append(f"at '{self.field_path}'")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class TypedLlmError(Exception):
    """Base class for all typed-llm errors.

    Attributes:
        message: Human-readable error message
        context: Structured error context
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = str(self.context)
        if ctx_str:
            return f"{self.message} {ctx_str}"
        return self.message

    def with_hint(self, hint: str) -> TypedLlmError:
        """Add a hint to this error."""
        self.context.hint = hint
        self.args = (self._format_message(),)
        return self


class UnsupportedShapeError(TypedLlmError):
    """The requested target shape cannot be represented as a schema.

    Raised when:
    - A shape is not a scalar, object, array or union of those
    - A union holds more than one structured non-null member
    - A Python type has no shape equivalent (dict, callables, sets)

    This is fatal for the request and is never retried.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        shape: Any = None,
    ) -> None:
        ctx = context or ErrorContext(source="schema")
        if shape is not None:
            ctx.details["shape"] = repr(shape)
        super().__init__(message, ctx)
        self.shape = shape


class NoRelevantResponseError(TypedLlmError):
    """The model reply carries no invocation of the forced tool."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        finish_reason: str | None = None,
        content: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="response")
        if finish_reason:
            ctx.details["finish_reason"] = finish_reason
        super().__init__(message, ctx)
        self.finish_reason = finish_reason
        self.content = content


class ResponseParseError(TypedLlmError):
    """Tool-call arguments are not valid JSON text."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        raw: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="decoder")
        super().__init__(message, ctx)
        self.raw = raw


class InvalidGenerationError(TypedLlmError):
    """The model's answer does not structurally match the target shape.

    Attributes:
        expected: Description of the expected shape
        received: Rendering of the value actually received
        path: Location of the mismatch inside the decoded value
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        expected: str | None = None,
        received: str | None = None,
        path: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="decoder")
        if path:
            ctx.field_path = path
        if expected is not None:
            ctx.details["expected"] = expected
        if received is not None:
            ctx.details["received"] = received
        super().__init__(message, ctx)
        self.expected = expected
        self.received = received
        self.path = path

    def _format_message(self) -> str:
        msg = super()._format_message()
        expected = self.context.details.get("expected")
        received = self.context.details.get("received")
        if expected is not None:
            msg = f"{msg}; expected {expected}"
        if received is not None:
            msg = f"{msg}, received {received}"
        return msg


class ValidationError(TypedLlmError):
    """Invalid caller input.

    Raised when:
    - A template embeds a value that cannot be rendered
    - An audio document lacks a supported format
    - An image URL is not absolute
    - Client configuration is incomplete
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        field: str | None = None,
        expected: Any = None,
        actual: Any = None,
    ) -> None:
        ctx = context or ErrorContext(source="validation")
        if field:
            ctx.field_path = field
        if expected is not None:
            ctx.details["expected"] = expected
        if actual is not None:
            ctx.details["actual"] = actual
        super().__init__(message, ctx)
        self.field = field
        self.expected = expected
        self.actual = actual


class TransportError(TypedLlmError):
    """Error during HTTP transport.

    Raised on connection failures, timeouts and other httpx errors. The
    underlying exception is kept as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="transport")
        if url:
            ctx.details["url"] = url
        if status_code:
            ctx.details["status_code"] = status_code
        super().__init__(message, ctx)
        self.url = url
        self.status_code = status_code
        self.__cause__ = cause


class RemoteError(TypedLlmError):
    """Error returned by the model endpoint.

    Attributes:
        status_code: HTTP status code
        error_class: Standardized error classification
        retryable: Whether a caller-side retry may succeed
        raw_error: Raw error response from the API
        retry_after: Suggested retry delay in seconds (from header)
        request_id: Provider request identifier, if any
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_class: ErrorClass,
        retryable: bool = False,
        raw_error: dict[str, Any] | None = None,
        retry_after: float | None = None,
        request_id: str | None = None,
    ) -> None:
        ctx = ErrorContext(source="remote")
        ctx.details["status_code"] = status_code
        ctx.details["error_class"] = error_class.value
        ctx.details["retryable"] = retryable
        if request_id:
            ctx.details["request_id"] = request_id

        super().__init__(message, ctx)

        self.status_code = status_code
        self.error_class = error_class
        self.retryable = retryable
        self.raw_error = raw_error or {}
        self.retry_after = retry_after
        self.request_id = request_id

    @classmethod
    def from_response(
        cls,
        status_code: int,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> RemoteError:
        """Create RemoteError from an HTTP error response.

        Args:
            status_code: HTTP status code
            body: Response body (parsed JSON)
            headers: Response headers

        Returns:
            RemoteError with appropriate classification
        """
        from typed_llm.errors.classification import (
            classify_http_error,
            extract_error_message,
            is_retryable,
        )

        error_class = classify_http_error(status_code, body)
        message = extract_error_message(body) or f"HTTP {status_code}"

        retry_after = None
        request_id = None
        if headers:
            lowered = {k.lower(): v for k, v in headers.items()}
            retry_after_str = lowered.get("retry-after")
            if retry_after_str:
                with contextlib.suppress(ValueError):
                    retry_after = float(retry_after_str)
            request_id = lowered.get("x-request-id") or lowered.get("apim-request-id")

        return cls(
            message=message,
            status_code=status_code,
            error_class=error_class,
            retryable=is_retryable(error_class),
            raw_error=body,
            retry_after=retry_after,
            request_id=request_id,
        )
