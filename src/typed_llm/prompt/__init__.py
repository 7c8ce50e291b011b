"""
Prompt layer - templates and request assembly.
"""

from typed_llm.prompt.assembler import (
    RESPONSE_TOOL_NAME,
    build_chat_request,
    build_content_parts,
    build_tool_definition,
    forced_tool_choice,
    render_scalar,
)
from typed_llm.prompt.template import PromptTemplate

__all__ = [
    "PromptTemplate",
    "RESPONSE_TOOL_NAME",
    "build_chat_request",
    "build_content_parts",
    "build_tool_definition",
    "forced_tool_choice",
    "render_scalar",
]
