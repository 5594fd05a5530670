"""
Tool execution stage.

Looks up selected tools in the registry, checks their arguments against the
declared parameters and runs the handlers one at a time.
"""
import inspect
import logging
import math
import re
from typing import Any, List, Optional, Sequence, Union

from sui_agent.domains.errors import (
    PipelineError,
    ToolArgumentError,
    ToolExecutionError,
    ToolNotFoundError,
)
from sui_agent.domains.pipeline import ToolSelection
from sui_agent.domains.tools import ParameterType, ToolDescriptor
from sui_agent.interfaces.plugins.plugins import ToolRegistry
from sui_agent.interfaces.services.executor import (
    ToolExecutorService as ToolExecutorServiceInterface,
)

logger = logging.getLogger(__name__)

__all__ = ["validate_arguments", "ToolExecutorService"]

_NUMERIC_STRING = re.compile(r"[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?")


def _as_number(value: Any) -> Optional[Union[int, float]]:
    """Return ``value`` as a finite int or float, or None if it is not a number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    # models often quote numbers
    if isinstance(value, str):
        text = value.strip()
        if not _NUMERIC_STRING.fullmatch(text):
            return None
        try:
            return int(text)
        except ValueError:
            number = float(text)
            return number if math.isfinite(number) else None
    return None


_TYPE_CHECKS = {
    ParameterType.STRING: lambda v: isinstance(v, str),
    ParameterType.BOOLEAN: lambda v: isinstance(v, bool),
    ParameterType.ARRAY: lambda v: isinstance(v, (list, tuple)),
    ParameterType.OBJECT: lambda v: isinstance(v, dict),
}


def validate_arguments(tool: ToolDescriptor, args: Sequence[Any]) -> List[Any]:
    """Check positional arguments against a tool's parameter schema.

    ``None`` is accepted for optional parameters. Quoted numbers such as
    ``"1.5"`` are converted for ``number`` parameters, so handlers always
    receive an int or float there.

    Returns:
        The arguments to call the handler with

    Raises:
        ToolArgumentError: On a missing required argument, too many arguments
            or a value of the wrong type
    """
    params = tool.parameters
    if len(args) > len(params):
        raise ToolArgumentError(
            tool.name, f"expected at most {len(params)} arguments, got {len(args)}"
        )

    checked = list(args)
    for index, param in enumerate(params):
        if index >= len(args) or args[index] is None:
            if param.required:
                raise ToolArgumentError(
                    tool.name, f"missing required argument '{param.name}'"
                )
            continue

        value = args[index]
        if param.type == ParameterType.NUMBER:
            number = _as_number(value)
            valid = number is not None
            if valid:
                checked[index] = number
        else:
            valid = _TYPE_CHECKS[param.type](value)
        if not valid:
            raise ToolArgumentError(
                tool.name,
                f"argument '{param.name}' must be of type {param.type.value}, "
                f"got {type(value).__name__}",
            )
    return checked


class ToolExecutorService(ToolExecutorServiceInterface):
    """Service for running tools chosen by the selector."""

    def __init__(self, tool_registry: ToolRegistry, validate: bool = True) -> None:
        """Initialize the executor.

        Args:
            tool_registry: Registry used to resolve tool names
            validate: Whether to check arguments before calling handlers
        """
        self.tool_registry = tool_registry
        self.validate = validate

    async def execute(self, selection: ToolSelection) -> Any:
        """Run the first tool named by a selection.

        Args:
            selection: Selection record from the selector

        Returns:
            The handler's result, unmodified. ``None`` when the selection
            names no tool.
        """
        if not selection.has_tool:
            logger.debug("Selection names no tool, skipping")
            return None

        tool_name = selection.tool_name
        tool = self.tool_registry.get_tool(tool_name)
        if not tool:
            logger.error(
                f"Tool {tool_name} not found. Available tools: {self.tool_registry.list_all_tools()}"
            )
            raise ToolNotFoundError(tool_name, self.tool_registry.list_all_tools())

        args = list(selection.tool_arguments or [])
        if self.validate:
            args = validate_arguments(tool, args)

        logger.info(f"Executing tool '{tool.name}' with args: {args}")
        try:
            result = tool.handler(*args)
            if inspect.isawaitable(result):
                result = await result
        except PipelineError:
            raise
        except Exception as e:
            logger.error(f"Error executing tool '{tool.name}': {e}")
            raise ToolExecutionError(tool.name, e) from e

        logger.debug(f"Tool '{tool.name}' returned: {result!r}")
        return result

    async def execute_all(self, selections: List[ToolSelection]) -> List[Any]:
        """Run selections sequentially, keeping results in selection order.

        Selections that name no tool are skipped and contribute nothing.
        """
        results = []
        for selection in selections:
            if not selection.has_tool:
                continue
            results.append(await self.execute(selection))
        return results
