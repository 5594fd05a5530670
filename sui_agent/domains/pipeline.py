"""
Domain models exchanged between pipeline stages.

These models describe the tool selection records produced by the selector
and the structured answers returned to callers.
"""
import json
import uuid
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

__all__ = [
    "ToolSelection",
    "StructuredAnswer",
    "StructuredError",
    "UNSUCCESSFUL_RESPONSE",
]

UNSUCCESSFUL_RESPONSE = "Operation unsuccessful"


class ToolSelection(BaseModel):
    """Tools and positional arguments chosen for one subquery."""

    subquery: Optional[str] = Field(
        default=None, description="The subquery this selection answers"
    )
    selected_tools: List[str] = Field(
        default_factory=list,
        description="Ordered tool names, only the first one is executed",
    )
    tool_arguments: Optional[List[Any]] = Field(
        default=None, description="Positional arguments for the first tool"
    )

    @field_validator("selected_tools", mode="before")
    @classmethod
    def coerce_tools(cls, v: Any) -> Any:
        """Accept a bare tool name or null from the model."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("tool_arguments", mode="before")
    @classmethod
    def coerce_arguments(cls, v: Any) -> Any:
        """Wrap a single scalar argument into a list."""
        if v is None or isinstance(v, list):
            return v
        if isinstance(v, tuple):
            return list(v)
        return [v]

    @property
    def has_tool(self) -> bool:
        return bool(self.selected_tools) and bool(self.selected_tools[0].strip())

    @property
    def tool_name(self) -> Optional[str]:
        if not self.has_tool:
            return None
        return self.selected_tools[0].strip()


class StructuredAnswer(BaseModel):
    """Final answer returned by the pipeline."""

    reasoning: str = Field("", description="Explanation of how the answer was reached")
    response: Any = Field(..., description="Answer text or JSON data")
    status: Literal["success", "failure"] = Field(..., description="Execution status")
    query: str = Field("", description="The original user query")
    errors: List[str] = Field(default_factory=list, description="Errors, if any")

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("errors", mode="before")
    @classmethod
    def stringify_errors(cls, v: Any) -> Any:
        """Models sometimes report errors as objects; keep them as JSON text."""
        if v is None:
            return []
        if not isinstance(v, list):
            v = [v]
        return [e if isinstance(e, str) else json.dumps(e) for e in v]


class StructuredError(StructuredAnswer):
    """A failure answer carrying a uniquely identified error message."""

    response: Any = Field(UNSUCCESSFUL_RESPONSE)
    status: Literal["failure"] = "failure"

    @classmethod
    def from_message(
        cls, message: str, reasoning: str, query: str
    ) -> "StructuredError":
        error_id = uuid.uuid4()
        return cls(
            reasoning=reasoning,
            query=query,
            errors=[f"Error ID: {error_id} - {message}"],
        )
