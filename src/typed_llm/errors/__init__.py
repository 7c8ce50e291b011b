"""错误体系：类型化结构输出的结构化错误类型。

Error hierarchy for typed-llm.
"""

from typed_llm.errors.base import (
    ErrorContext,
    InvalidGenerationError,
    NoRelevantResponseError,
    RemoteError,
    ResponseParseError,
    TransportError,
    TypedLlmError,
    UnsupportedShapeError,
    ValidationError,
)
from typed_llm.errors.classification import (
    ErrorClass,
    classify_http_error,
    extract_error_message,
    is_retryable,
)

__all__ = [
    "ErrorClass",
    "ErrorContext",
    "InvalidGenerationError",
    "NoRelevantResponseError",
    "RemoteError",
    "ResponseParseError",
    "TransportError",
    "TypedLlmError",
    "UnsupportedShapeError",
    "ValidationError",
    "classify_http_error",
    "extract_error_message",
    "is_retryable",
]
