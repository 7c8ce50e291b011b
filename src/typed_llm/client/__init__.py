"""
Client layer - user-facing API.

This module provides:
- StructuredClient: ``generate(template, target)`` entry point
- Response types and call statistics
"""

from typed_llm.client.core import StructuredClient
from typed_llm.client.response import CallStats, ChatResponse

__all__ = [
    "CallStats",
    "ChatResponse",
    "StructuredClient",
]
