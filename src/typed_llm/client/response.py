"""
Response types for client operations.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Any

from typed_llm.types.tool import ToolCall


@dataclass
class ChatResponse:
    """First choice of a chat completion reply.

    Attributes:
        content: Free text the model produced, if any
        tool_calls: Tool calls requested by the model
        finish_reason: Why the model stopped generating
        choice_count: Number of choices in the reply
        usage: Token usage information
        model: Model that generated the response
        raw_response: Raw response data from the API
    """

    content: str = ""
    tool_calls: list[ToolCall] = field(default_factory=list)
    finish_reason: str | None = None
    choice_count: int = 0
    usage: dict[str, Any] | None = None
    model: str | None = None
    raw_response: dict[str, Any] | None = None

    @classmethod
    def from_openai_format(cls, data: dict[str, Any]) -> ChatResponse:
        """Parse a chat completions response body."""
        response = cls(raw_response=data)
        choices = data.get("choices") or []
        response.choice_count = len(choices)

        if choices:
            choice = choices[0]
            message = choice.get("message") or {}
            response.content = message.get("content") or ""
            response.finish_reason = choice.get("finish_reason")
            response.tool_calls = [
                ToolCall.from_openai_format(tc) for tc in message.get("tool_calls") or []
            ]

        response.usage = data.get("usage")
        response.model = data.get("model")
        return response

    @property
    def has_choices(self) -> bool:
        return self.choice_count > 0

    @property
    def has_tool_calls(self) -> bool:
        return len(self.tool_calls) > 0

    @property
    def total_tokens(self) -> int | None:
        if self.usage:
            return self.usage.get("total_tokens")
        return None


@dataclass
class CallStats:
    """Statistics for a single generate call.

    Attributes:
        client_request_id: Client-generated request ID for tracking
        model: Model name
        latency_ms: Latency of the HTTP call in milliseconds
        total_tokens: Total tokens reported by the endpoint
    """

    client_request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    model: str | None = None
    latency_ms: float = 0.0
    total_tokens: int | None = None

    _start_time: float = field(default=0.0, repr=False)

    def record_start(self) -> None:
        self._start_time = time.perf_counter()

    def record_end(self) -> None:
        if self._start_time:
            self.latency_ms = (time.perf_counter() - self._start_time) * 1000

    def to_dict(self) -> dict[str, Any]:
        return {
            "client_request_id": self.client_request_id,
            "model": self.model,
            "latency_ms": round(self.latency_ms, 1),
            "total_tokens": self.total_tokens,
        }
