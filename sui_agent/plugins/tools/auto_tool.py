"""
Base class for hand-written tools.

Subclass AutoTool, declare the positional parameters and implement
``execute``; pass a registry to have the tool registered on construction.
"""
from typing import Any, Dict, List, Optional

from sui_agent.domains.tools import ToolDescriptor, ToolParameter
from sui_agent.interfaces.plugins.plugins import Tool

__all__ = ["AutoTool"]


class AutoTool(Tool):
    """A Tool that keeps its metadata and configuration as attributes."""

    def __init__(
        self,
        name: str,
        description: str,
        parameters: Optional[List[ToolParameter]] = None,
        registry=None,
    ):
        self._name = name
        self._description = description
        self._parameters = list(parameters or [])
        self._config: Dict[str, Any] = {}

        if registry is not None:
            registry.register_tool(self)

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def parameters(self) -> List[ToolParameter]:
        """Positional parameters, in the order ``execute`` receives them."""
        return self._parameters

    def configure(self, config: Dict[str, Any]) -> None:
        """Store the tool section of the agent config (RPC URLs, API keys)."""
        if config is None:
            raise TypeError("Config cannot be None")
        self._config = config

    def get_schema(self) -> Dict[str, Any]:
        descriptor = ToolDescriptor(
            name=self.name,
            description=self.description,
            parameters=self.parameters,
            handler=self.execute,
        )
        return descriptor.get_schema()

    async def execute(self, *args: Any) -> Any:
        raise NotImplementedError(f"{type(self).__name__} does not implement execute")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"
