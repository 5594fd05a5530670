"""
Domain models for tools and their parameter schemas.

A tool is described by data (name, description, ordered parameters) plus an
executable handler that receives positional arguments in declared order.
"""
from enum import Enum
from typing import Any, Callable, Dict, List

from pydantic import BaseModel, Field, field_validator

__all__ = ["ParameterType", "ToolParameter", "ToolDescriptor"]


class ParameterType(str, Enum):
    """JSON types a tool parameter can declare."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


class ToolParameter(BaseModel):
    """A single positional parameter of a tool."""

    name: str = Field(..., description="Parameter name")
    type: ParameterType = Field(..., description="JSON type of the parameter")
    description: str = Field("", description="Human readable description")
    required: bool = Field(True, description="Whether the argument must be supplied")

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        """Validate that the parameter name is not empty."""
        if not v.strip():
            raise ValueError("Parameter name cannot be empty")
        return v.strip()


class ToolDescriptor(BaseModel):
    """Registry entry for a tool."""

    model_config = {"arbitrary_types_allowed": True}

    name: str = Field(..., description="Unique tool name within the registry")
    description: str = Field(..., description="What the tool does")
    parameters: List[ToolParameter] = Field(
        default_factory=list, description="Ordered positional parameters"
    )
    handler: Callable[..., Any] = Field(
        ..., description="Callable invoked with positional arguments", exclude=True
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Tool names are matched after trimming surrounding whitespace."""
        if not v.strip():
            raise ValueError("Tool name cannot be empty")
        return v.strip()

    @property
    def required_count(self) -> int:
        return sum(1 for p in self.parameters if p.required)

    def get_schema(self) -> Dict[str, Any]:
        """Return a JSON schema describing the positional parameters."""
        return {
            "type": "object",
            "properties": {
                p.name: {"type": p.type.value, "description": p.description}
                for p in self.parameters
            },
            "required": [p.name for p in self.parameters if p.required],
        }

    def to_prompt_dict(self) -> Dict[str, Any]:
        """Shape used when describing the tool to the language model."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": [
                p.model_dump(mode="json") for p in self.parameters
            ],
        }
