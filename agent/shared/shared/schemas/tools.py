"""Tool and module manifest schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ToolParameterItems(BaseModel):
    """Element type of an array parameter."""

    model_config = ConfigDict(frozen=True)

    type: str  # string, integer, boolean, number
    enum: tuple[str, ...] | None = None


class ToolParameter(BaseModel):
    """Parameter definition for a tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str  # string, integer, boolean, number, array, object
    description: str
    required: bool = True
    enum: tuple[str, ...] | None = None
    default: Any = None
    # Numeric bounds (inclusive)
    minimum: int | None = None
    maximum: int | None = None
    # Array length bounds (inclusive)
    min_items: int | None = None
    max_items: int | None = None
    items: ToolParameterItems | None = None
    pattern: str | None = None

    def json_schema(self) -> dict[str, Any]:
        """Render this parameter as a JSON-Schema property."""
        schema: dict[str, Any] = {"type": self.type, "description": self.description}
        if self.items is not None:
            item_schema: dict[str, Any] = {"type": self.items.type}
            if self.items.enum:
                item_schema["enum"] = list(self.items.enum)
            schema["items"] = item_schema
        if self.enum:
            schema["enum"] = list(self.enum)
        if self.pattern is not None:
            schema["pattern"] = self.pattern
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.maximum is not None:
            schema["maximum"] = self.maximum
        if self.min_items is not None:
            schema["minItems"] = self.min_items
        if self.max_items is not None:
            schema["maxItems"] = self.max_items
        if self.default is not None:
            schema["default"] = self.default
        return schema


class ToolDefinition(BaseModel):
    """Definition of a single tool exposed by a module."""

    model_config = ConfigDict(frozen=True)

    name: str  # e.g. "netcores_asn_trend"
    description: str
    parameters: tuple[ToolParameter, ...] = ()

    def input_schema(self) -> dict[str, Any]:
        """JSON-Schema object describing the tool's arguments."""
        return {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.parameters},
            "required": [p.name for p in self.parameters if p.required],
        }


class ModuleManifest(BaseModel):
    """Manifest describing a module and its tools."""

    module_name: str
    description: str
    version: str = "1.0.0"
    tools: list[ToolDefinition]


class ToolCall(BaseModel):
    """A tool call request."""

    tool_name: str
    arguments: dict = Field(default_factory=dict)


class ToolResult(BaseModel):
    """Result from a tool execution."""

    tool_name: str
    success: bool
    result: Any = None
    error: str | None = None
