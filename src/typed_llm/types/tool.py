"""
Tool types for forced function calling.

The response schema is shipped to the model as the parameters of a single
function tool, and the request forces the model to call exactly that tool.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FunctionDefinition(BaseModel):
    """Function definition within a tool."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Function name")
    description: str | None = Field(default=None, description="Function description")
    parameters: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        description="JSON Schema for parameters",
    )


class ToolDefinition(BaseModel):
    """Tool definition for function calling.

    Example:
        >>> tool = ToolDefinition.from_function(
        ...     name="respond",
        ...     parameters={"type": "object", "properties": {}, "required": []},
        ... )
        >>> tool.to_wire()["function"]["name"]
        'respond'
    """

    model_config = ConfigDict(frozen=True)

    type: str = Field(default="function", description="Tool type")
    function: FunctionDefinition = Field(description="Function definition")

    @classmethod
    def from_function(
        cls,
        name: str,
        description: str | None = None,
        parameters: dict[str, Any] | None = None,
    ) -> ToolDefinition:
        """Create a tool definition from function details."""
        func_def = FunctionDefinition(
            name=name,
            description=description,
            parameters=parameters or {"type": "object", "properties": {}},
        )
        return cls(function=func_def)

    @property
    def name(self) -> str:
        return self.function.name

    def to_wire(self) -> dict[str, Any]:
        function: dict[str, Any] = {"name": self.function.name}
        if self.function.description:
            function["description"] = self.function.description
        function["parameters"] = self.function.parameters
        return {"type": self.type, "function": function}


class ToolChoice(BaseModel):
    """Forces the model to invoke one named function."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Function the model must call")

    def to_wire(self) -> dict[str, Any]:
        return {"type": "function", "function": {"name": self.name}}


class ToolCall(BaseModel):
    """A tool call from the model response.

    Arguments are kept as the raw JSON text the model produced; decoding and
    validation happen in the structured decoder.

    Example:
        >>> tool_call = ToolCall.from_openai_format(
        ...     {"id": "call_1", "function": {"name": "respond", "arguments": "{}"}}
        ... )
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="", description="Unique tool call identifier")
    type: str = Field(default="function", description="Tool type")
    function_name: str = Field(description="Name of the function called")
    arguments_raw: str = Field(default="", description="Raw arguments JSON text")

    @classmethod
    def from_openai_format(cls, data: dict[str, Any]) -> ToolCall:
        """Create from an OpenAI-style ``tool_calls`` entry."""
        function = data.get("function") or {}
        arguments = function.get("arguments", "")
        if not isinstance(arguments, str):
            # some compatible servers return an already parsed object
            arguments = json.dumps(arguments)
        return cls(
            id=data.get("id") or "",
            type=data.get("type") or "function",
            function_name=function.get("name") or "",
            arguments_raw=arguments,
        )
