"""
Simplified client interface for interacting with the Sui Agent system.

This module provides a clean API for end users to run queries through the
pipeline without dealing with internal implementation details.
"""

import importlib.util
import json
from typing import Any, Dict, List, Optional

from sui_agent.domains.pipeline import StructuredAnswer
from sui_agent.factories.agent_factory import SuiAgentFactory
from sui_agent.interfaces.client.client import SuiAgent as SuiAgentInterface
from sui_agent.interfaces.plugins.plugins import Plugin, Tool


class SuiAgent(SuiAgentInterface):
    """Simplified client interface for interacting with the agent system."""

    def __init__(self, config_path: str = None, config: Dict[str, Any] = None):
        """Initialize the agent system from config file or dictionary.

        Args:
            config_path: Path to configuration file (JSON or Python)
            config: Configuration dictionary
        """
        if not config and not config_path:
            raise ValueError("Either config or config_path must be provided")

        if config_path:
            with open(config_path, "r") as f:
                if config_path.endswith(".json"):
                    config = json.load(f)
                else:
                    # Assume it's a Python file
                    spec = importlib.util.spec_from_file_location("config", config_path)
                    config_module = importlib.util.module_from_spec(spec)
                    spec.loader.exec_module(config_module)
                    config = config_module.config

        self.pipeline = SuiAgentFactory.create_from_config(config)

    async def process(
        self, query: str, wallet_address: Optional[str] = None
    ) -> List[StructuredAnswer]:
        """Process a user query.

        Args:
            query: Free-text user query
            wallet_address: Optional wallet address of the user

        Returns:
            The formatter's answers in order, or a single StructuredError
        """
        return await self.pipeline.run(query, wallet_address)

    run = process

    def register_tool(self, tool: Tool) -> bool:
        """
        Register a tool with the agent system.

        Args:
            tool: Tool instance to register

        Returns:
            True if successful, False otherwise
        """
        return self.pipeline.tool_registry.register_tool(tool)

    def register_plugin(self, plugin: Plugin) -> bool:
        """
        Register a plugin and the tools it provides.

        Args:
            plugin: Plugin instance to register

        Returns:
            True if successful, False otherwise
        """
        return self.pipeline.plugin_manager.register_plugin(plugin)

    def list_tools(self) -> List[Dict[str, Any]]:
        """Describe every registered tool in registration order."""
        return [
            tool.to_prompt_dict() for tool in self.pipeline.tool_registry.get_all()
        ]

    async def health_check(self) -> bool:
        """Check that the completion service answers."""
        return await self.pipeline.llm_provider.health_check()
