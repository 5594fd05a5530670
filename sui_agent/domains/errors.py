"""
Exceptions raised by the pipeline stages.

Every stage failure propagates to the pipeline, which converts it into a
StructuredError.
"""
from typing import Any, List, Optional

__all__ = [
    "PipelineError",
    "ModelOutputError",
    "DecompositionError",
    "ToolSelectionError",
    "ToolNotFoundError",
    "ToolArgumentError",
    "ToolExecutionError",
    "FinalAnswerParseError",
]


class PipelineError(Exception):
    """Base class for pipeline failures."""


class ModelOutputError(PipelineError, ValueError):
    """The language model output did not match the expected JSON contract."""

    def __init__(self, message: str, raw_output: Optional[str] = None):
        super().__init__(message)
        self.raw_output = raw_output


class DecompositionError(ModelOutputError):
    """Decomposer output was not a JSON array of strings."""


class ToolSelectionError(ModelOutputError):
    """Selector output was not a JSON array of selection records."""


class FinalAnswerParseError(ModelOutputError):
    """Formatter output was not a JSON array of structured answers."""


class ToolNotFoundError(PipelineError, LookupError):
    """A selection record names a tool absent from the registry."""

    def __init__(self, tool_name: str, available: Optional[List[str]] = None):
        super().__init__(f"Tool {tool_name} not found")
        self.tool_name = tool_name
        self.available = available or []


class ToolArgumentError(PipelineError, ValueError):
    """Arguments do not match the tool's parameter schema."""

    def __init__(self, tool_name: str, message: str):
        super().__init__(f"Invalid arguments for tool {tool_name}: {message}")
        self.tool_name = tool_name


class ToolExecutionError(PipelineError):
    """A tool handler raised."""

    def __init__(self, tool_name: str, cause: Any):
        super().__init__(f"Tool {tool_name} failed: {cause}")
        self.tool_name = tool_name
