"""
Plugin loading for the Sui Agent system.

Plugins are protocol integrations (price feeds, DEX pools, lending markets)
that add their tools to the shared registry. They are found through the
``sui_agent.plugins`` entry point group or named in config as dotted class
paths.
"""

import importlib
import importlib.metadata
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from sui_agent.domains.pipeline import ToolSelection
from sui_agent.interfaces.plugins.plugins import (
    PluginManager as PluginManagerInterface,
)
from sui_agent.interfaces.plugins.plugins import Plugin
from sui_agent.plugins.registry import ToolRegistry
from sui_agent.services.executor import ToolExecutorService

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "sui_agent.plugins"


def _import_class(class_path: str) -> Callable[[], Plugin]:
    module_path, _, class_name = class_path.rpartition(".")
    if not module_path:
        raise ValueError(f"'{class_path}' is not a dotted class path")
    return getattr(importlib.import_module(module_path), class_name)


class PluginManager(PluginManagerInterface):
    """Registers plugins and lets them populate the tool registry."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        tool_registry: Optional[ToolRegistry] = None,
    ):
        self.config = config or {}
        self.tool_registry = tool_registry or ToolRegistry()
        self._plugins: Dict[str, Plugin] = {}
        # entry points already loaded into this manager's registry
        self._seen_entry_points: Set[str] = set()

    def register_plugin(self, plugin: Plugin) -> bool:
        """Configure a plugin, then let it register its tools.

        A plugin that fails either step is not kept.

        Returns:
            Whether the plugin is now registered
        """
        name = getattr(plugin, "name", repr(plugin))
        try:
            plugin.configure(self.config)
            plugin.initialize(self.tool_registry)
        except Exception as e:
            logger.error(f"Plugin {name} failed to initialize: {e}")
            self._plugins.pop(name, None)
            return False

        self._plugins[name] = plugin
        logger.info(f"Plugin {name} registered")
        return True

    def _register_from(self, label: str, factory: Callable[[], Plugin]) -> Optional[str]:
        try:
            plugin = factory()
        except Exception as e:
            logger.error(f"Could not create plugin from {label}: {e}")
            return None
        return plugin.name if self.register_plugin(plugin) else None

    def load_plugins(self) -> List[str]:
        """Discover plugins through the ``sui_agent.plugins`` entry point group.

        Returns:
            Entry point names whose plugins registered successfully
        """
        loaded = []
        for entry_point in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            key = f"{entry_point.name}:{entry_point.value}"
            if key in self._seen_entry_points:
                logger.debug(f"Entry point {entry_point.name} already loaded")
                continue
            self._seen_entry_points.add(key)

            try:
                factory = entry_point.load()
            except Exception as e:
                logger.error(f"Could not load entry point {entry_point.name}: {e}")
                continue

            if self._register_from(entry_point.name, factory):
                loaded.append(entry_point.name)
        return loaded

    def load_plugin_classes(self, class_paths: Iterable[str]) -> List[str]:
        """Instantiate and register plugins named by dotted class paths.

        Args:
            class_paths: Paths such as ``"my_pkg.navi.NaviPlugin"``

        Returns:
            Names of the plugins that registered successfully
        """
        loaded = []
        for class_path in class_paths or []:
            try:
                plugin_class = _import_class(class_path)
            except (ImportError, AttributeError, ValueError) as e:
                logger.error(f"Skipping plugin class '{class_path}': {e}")
                continue

            name = self._register_from(class_path, plugin_class)
            if name:
                loaded.append(name)
        return loaded

    def get_plugin(self, name: str) -> Optional[Plugin]:
        return self._plugins.get(name)

    def list_plugins(self) -> List[Dict[str, Any]]:
        """Name and description of each registered plugin."""
        return [
            {"name": name, "description": plugin.description}
            for name, plugin in self._plugins.items()
        ]

    async def execute_tool(self, tool_name: str, *args: Any) -> Dict[str, Any]:
        """Run one registered tool outside the pipeline.

        Returns:
            ``{"status": "success", "result": ...}`` or
            ``{"status": "error", "message": ...}``
        """
        selection = ToolSelection(selected_tools=[tool_name], tool_arguments=list(args))
        try:
            result = await ToolExecutorService(self.tool_registry).execute(selection)
        except Exception as e:
            logger.warning(f"Direct execution of {tool_name} failed: {e}")
            return {"status": "error", "message": str(e)}
        return {"status": "success", "result": result}

    def configure(self, config: Dict[str, Any]) -> None:
        """Merge new settings and push them to every tool and plugin."""
        self.config.update(config)
        self.tool_registry.configure_all_tools(config)
        for name, plugin in self._plugins.items():
            try:
                plugin.configure(self.config)
            except Exception as e:
                logger.error(f"Plugin {name} rejected new configuration: {e}")
