"""
Contracts for tools, the tool registry and plugins.

A tool is a named callable taking positional arguments described by a list
of ToolParameter. Plugins group related tools and add them to the registry
when the agent starts.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional

from sui_agent.domains.tools import ToolDescriptor, ToolParameter


class Tool(ABC):
    """A callable capability the selector may choose for a subquery."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name the selector refers to."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """What the tool does, shown to the language model."""
        pass

    @property
    @abstractmethod
    def parameters(self) -> List[ToolParameter]:
        """Positional parameters, in call order."""
        pass

    @abstractmethod
    def configure(self, config: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    def get_schema(self) -> Dict[str, Any]:
        """JSON schema object describing the parameters."""
        pass

    @abstractmethod
    async def execute(self, *args: Any) -> Any:
        pass


class ToolRegistry(ABC):
    """Name-keyed store of tool descriptors, ordered by first registration."""

    @abstractmethod
    def register(
        self,
        name: str,
        description: str,
        parameters: List[ToolParameter],
        handler: Callable[..., Any],
    ) -> Optional[ToolDescriptor]:
        """Store a handler under ``name``, replacing any previous entry.

        Never raises; an invalid entry is skipped and None returned.
        """
        pass

    @abstractmethod
    def register_tool(self, tool: Tool) -> bool:
        """Configure a Tool instance and store its ``execute`` method."""
        pass

    @abstractmethod
    def get_tool(self, tool_name: str) -> Optional[ToolDescriptor]:
        pass

    @abstractmethod
    def get_all(self) -> List[ToolDescriptor]:
        """Descriptors in registration order."""
        pass

    @abstractmethod
    def list_all_tools(self) -> List[str]:
        pass

    @abstractmethod
    def configure_all_tools(self, config: Dict[str, Any]) -> None:
        """Merge ``config`` and reconfigure every registered Tool instance."""
        pass


class Plugin(ABC):
    """A protocol integration contributing one or more tools."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @abstractmethod
    def initialize(self, tool_registry: ToolRegistry) -> bool:
        """Add this plugin's tools to ``tool_registry``."""
        pass

    def configure(self, config: Dict[str, Any]) -> None:
        """Receive settings before ``initialize``; no-op by default."""
        pass


class PluginManager(ABC):
    """Finds plugins and registers them against a shared tool registry."""

    @abstractmethod
    def register_plugin(self, plugin: Plugin) -> bool:
        pass

    @abstractmethod
    def load_plugins(self) -> List[str]:
        """Register plugins advertised through package entry points."""
        pass

    @abstractmethod
    def load_plugin_classes(self, class_paths: Iterable[str]) -> List[str]:
        """Register plugins named by dotted class paths."""
        pass

    @abstractmethod
    def get_plugin(self, name: str) -> Optional[Plugin]:
        pass

    @abstractmethod
    def list_plugins(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def execute_tool(self, tool_name: str, *args: Any) -> Dict[str, Any]:
        """Run a registered tool directly and report a status dictionary."""
        pass

    @abstractmethod
    def configure(self, config: Dict[str, Any]) -> None:
        pass
