"""
Chat message format for structured generation requests.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from typed_llm.types.content import DocumentContentPart


class MessageRole(str, Enum):
    """Message role enumeration."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A chat message whose content is an ordered list of parts.

    Examples:
        >>> msg = Message.user([TextPart(text="Hello!")])
        >>> msg.to_wire()
        {'role': 'user', 'content': [{'type': 'text', 'text': 'Hello!'}]}
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    role: MessageRole = Field(description="Message role")
    content: list[DocumentContentPart] = Field(description="Content parts")

    @classmethod
    def user(cls, content: list[DocumentContentPart]) -> Message:
        return cls(role=MessageRole.USER, content=content)

    def to_wire(self) -> dict[str, Any]:
        role = self.role if isinstance(self.role, str) else self.role.value
        return {"role": role, "content": [part.to_wire() for part in self.content]}
