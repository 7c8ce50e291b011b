"""Error classification for model endpoint failures.

Maps HTTP status codes and error bodies onto a small set of error classes
so callers can decide on their own retry policy.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorClass(str, Enum):
    """Standard error classification."""

    INVALID_REQUEST = "invalid_request"
    """Malformed request body, invalid parameters, or unsupported schema."""

    AUTHENTICATION = "authentication"
    """Missing/invalid credentials (API key/token)."""

    PERMISSION_DENIED = "permission_denied"
    """Caller is authenticated but not permitted to access the deployment."""

    NOT_FOUND = "not_found"
    """Unknown model or deployment."""

    RATE_LIMITED = "rate_limited"
    """Throttled due to request/token limits."""

    REQUEST_TOO_LARGE = "request_too_large"
    """Prompt exceeds the model context window."""

    CONTENT_FILTERED = "content_filtered"
    """Prompt rejected by the provider's content filter."""

    TIMEOUT = "timeout"
    """Request timed out upstream."""

    SERVER_ERROR = "server_error"
    """Transient server-side failure (5xx)."""

    OVERLOADED = "overloaded"
    """Service temporarily unavailable."""

    OTHER = "other"
    """Unknown classification."""


_RETRYABLE_CLASSES: frozenset[ErrorClass] = frozenset(
    {
        ErrorClass.RATE_LIMITED,
        ErrorClass.TIMEOUT,
        ErrorClass.SERVER_ERROR,
        ErrorClass.OVERLOADED,
    }
)

_DEFAULT_STATUS_MAPPING: dict[int, ErrorClass] = {
    400: ErrorClass.INVALID_REQUEST,
    401: ErrorClass.AUTHENTICATION,
    403: ErrorClass.PERMISSION_DENIED,
    404: ErrorClass.NOT_FOUND,
    408: ErrorClass.TIMEOUT,
    413: ErrorClass.REQUEST_TOO_LARGE,
    422: ErrorClass.INVALID_REQUEST,
    429: ErrorClass.RATE_LIMITED,
    500: ErrorClass.SERVER_ERROR,
    502: ErrorClass.SERVER_ERROR,
    503: ErrorClass.OVERLOADED,
    504: ErrorClass.TIMEOUT,
}


def classify_http_error(
    status_code: int,
    body: dict[str, Any] | None = None,
) -> ErrorClass:
    """Classify an HTTP error into a standard error class.

    Args:
        status_code: HTTP status code
        body: Response body (parsed JSON)

    Returns:
        ErrorClass representing the error type
    """
    if status_code == 400 and body:
        error_obj = body.get("error")
        if isinstance(error_obj, dict):
            code_val = error_obj.get("code") or error_obj.get("type") or ""
            if isinstance(code_val, str):
                code_lower = code_val.lower()
                if "context_length" in code_lower:
                    return ErrorClass.REQUEST_TOO_LARGE
                if "content_filter" in code_lower:
                    return ErrorClass.CONTENT_FILTERED

    if status_code in _DEFAULT_STATUS_MAPPING:
        return _DEFAULT_STATUS_MAPPING[status_code]

    if 400 <= status_code < 500:
        return ErrorClass.INVALID_REQUEST
    if 500 <= status_code < 600:
        return ErrorClass.SERVER_ERROR

    return ErrorClass.OTHER


def is_retryable(error_class: ErrorClass) -> bool:
    """Check if an error class is typically retryable."""
    return error_class in _RETRYABLE_CLASSES


def extract_error_message(body: dict[str, Any] | None) -> str | None:
    """Extract error message from response body.

    Supports ``{"error": {"message": ...}}``, ``{"error": "..."}`` and
    ``{"message": ...}`` envelopes.
    """
    if not body:
        return None

    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            msg = error.get("message")
            if isinstance(msg, str):
                return msg
        elif isinstance(error, str):
            return error

    msg = body.get("message")
    if isinstance(msg, str):
        return msg

    return None
