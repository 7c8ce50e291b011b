"""
Structured output module for typed-llm.

Synthesizes the response schema for a target shape and decodes the model's
tool-call arguments back into that shape.
"""

from typed_llm.structured.decoder import (
    coerce,
    decode,
    extract_tool_arguments,
    parse_arguments,
    render_value,
)
from typed_llm.structured.schema import (
    NULL_SCHEMA,
    RESULT_KEY,
    ResponseSchema,
    schema_node,
    synthesize,
)

__all__ = [
    "NULL_SCHEMA",
    "RESULT_KEY",
    "ResponseSchema",
    "coerce",
    "decode",
    "extract_tool_arguments",
    "parse_arguments",
    "render_value",
    "schema_node",
    "synthesize",
]
