"""类型化结构输出：让语言模型直接返回声明形状的数据。

typed-llm: typed structured output for chat completion models.

Describe the shape you want (or pass a Python type), and receive the
model's answer decoded and validated into that shape instead of free text.
"""
from __future__ import annotations

from typed_llm.client import CallStats, ChatResponse, StructuredClient
from typed_llm.config import ClientConfig
from typed_llm.errors import (
    InvalidGenerationError,
    NoRelevantResponseError,
    RemoteError,
    ResponseParseError,
    TransportError,
    TypedLlmError,
    UnsupportedShapeError,
    ValidationError,
)
from typed_llm.prompt import PromptTemplate, build_chat_request, build_content_parts
from typed_llm.shapes import Shape, shape_from_type
from typed_llm.structured import ResponseSchema, decode, synthesize
from typed_llm.types import AudioDocument, ImageDocument, TextDocument

__version__ = "0.1.0"

__all__ = [
    # Client
    "CallStats",
    "ChatResponse",
    "ClientConfig",
    "StructuredClient",
    # Documents
    "AudioDocument",
    "ImageDocument",
    "TextDocument",
    # Errors
    "InvalidGenerationError",
    "NoRelevantResponseError",
    "RemoteError",
    "ResponseParseError",
    "TransportError",
    "TypedLlmError",
    "UnsupportedShapeError",
    "ValidationError",
    # Engine
    "PromptTemplate",
    "ResponseSchema",
    "Shape",
    "build_chat_request",
    "build_content_parts",
    "decode",
    "shape_from_type",
    "synthesize",
    # Version
    "__version__",
]
