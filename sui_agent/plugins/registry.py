"""
Tool registry for the Sui Agent system.

This module implements the concrete ToolRegistry that owns every tool
descriptor for the lifetime of an agent.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from sui_agent.domains.tools import ToolDescriptor, ToolParameter
from sui_agent.interfaces.plugins.plugins import (
    ToolRegistry as ToolRegistryInterface,
)
from sui_agent.interfaces.plugins.plugins import Tool

# Setup logger for this module
logger = logging.getLogger(__name__)


class ToolRegistry(ToolRegistryInterface):
    """Instance-based, insertion-ordered registry of tool descriptors."""

    def __init__(self, config: Dict[str, Any] = None):
        """Initialize an empty tool registry."""
        self._tools: Dict[str, ToolDescriptor] = {}  # trimmed name -> descriptor
        self._instances: Dict[str, Tool] = {}  # trimmed name -> Tool, if any
        self._config = config or {}

    def register(
        self,
        name: str,
        description: str,
        parameters: List[ToolParameter],
        handler: Callable[..., Any],
    ) -> Optional[ToolDescriptor]:
        """Add a tool, replacing any previous entry with the same name.

        An entry that cannot form a descriptor (blank name, unknown
        parameter type) is logged and skipped.

        Args:
            name: Tool name, matched after trimming
            description: Human readable description
            parameters: Ordered positional parameters
            handler: Sync or async callable taking positional arguments

        Returns:
            The stored descriptor, or None if the entry was skipped
        """
        try:
            descriptor = ToolDescriptor(
                name=name,
                description=description,
                parameters=list(parameters or []),
                handler=handler,
            )
        except ValidationError as e:
            logger.error(f"Skipping invalid tool {name!r}: {e}")
            return None
        if descriptor.name in self._tools:
            logger.warning(
                f"Tool {descriptor.name} already registered, replacing previous entry"
            )
            self._instances.pop(descriptor.name, None)
        self._tools[descriptor.name] = descriptor
        logger.info(f"Successfully registered tool: {descriptor.name}")
        return descriptor

    def register_tool(self, tool: Tool) -> bool:
        """Configure a Tool instance and register its descriptor."""
        try:
            tool.configure(self._config)

            descriptor = self.register(
                tool.name, tool.description, tool.parameters, tool.execute
            )
            if descriptor is None:
                return False
            self._instances[descriptor.name] = tool
            return True
        except Exception as e:
            logger.error(f"Error registering tool: {str(e)}")
            return False

    def get_tool(self, tool_name: str) -> Optional[ToolDescriptor]:
        """Get a tool by exact name, ignoring surrounding whitespace."""
        if not isinstance(tool_name, str):
            return None
        return self._tools.get(tool_name.strip())

    def get_all(self) -> List[ToolDescriptor]:
        """Get all registered tools in registration order."""
        return list(self._tools.values())

    def get_all_tools(self) -> List[ToolDescriptor]:
        return self.get_all()

    def list_all_tools(self) -> List[str]:
        """List all registered tools."""
        return list(self._tools.keys())

    def configure_all_tools(self, config: Dict[str, Any]) -> None:
        """Configure all registered tools with new configuration.

        Only tools registered as Tool instances carry configuration; plain
        handlers registered through ``register`` are left untouched.

        Args:
            config: Configuration dictionary to apply
        """
        self._config.update(config)
        configure_errors = []

        for name, tool in self._instances.items():
            try:
                logger.info(f"Configuring tool: {name}")
                tool.configure(self._config)
            except Exception as e:
                logger.error(f"Error configuring tool {name}: {e}")
                configure_errors.append((name, str(e)))

        if configure_errors:
            logger.error("The following tools failed to configure:")
            for name, error in configure_errors:
                logger.error(f"- {name}: {error}")

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, tool_name: object) -> bool:
        return isinstance(tool_name, str) and tool_name.strip() in self._tools
