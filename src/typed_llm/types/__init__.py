"""
Types layer - request and response value types.

This module provides the data structures exchanged with the model:
- Content parts (text, image, audio) and the documents that produce them
- Message for the chat request
- ToolDefinition, ToolChoice and ToolCall for forced function calling
"""

from typed_llm.types.content import (
    AudioPart,
    DocumentContentPart,
    ImagePart,
    TextPart,
)
from typed_llm.types.document import (
    AudioDocument,
    Document,
    ImageDocument,
    TextDocument,
)
from typed_llm.types.message import Message, MessageRole
from typed_llm.types.tool import (
    FunctionDefinition,
    ToolCall,
    ToolChoice,
    ToolDefinition,
)

__all__ = [
    "AudioDocument",
    "AudioPart",
    "Document",
    "DocumentContentPart",
    "FunctionDefinition",
    "ImageDocument",
    "ImagePart",
    "Message",
    "MessageRole",
    "TextDocument",
    "TextPart",
    "ToolCall",
    "ToolChoice",
    "ToolDefinition",
]
