"""
Factory for creating and wiring components of the Sui Agent system.

This module handles the creation and dependency injection for the tool
registry, the completion client and the pipeline stages.
"""

import logging
import os
from typing import Any, Dict

from sui_agent.adapters.openai_adapter import DEFAULT_CHAT_MODEL, OpenAIAdapter
from sui_agent.plugins.manager import PluginManager
from sui_agent.plugins.registry import ToolRegistry
from sui_agent.services.aggregator import ResponseAggregatorService
from sui_agent.services.decomposer import QueryDecomposerService
from sui_agent.services.executor import ToolExecutorService
from sui_agent.services.pipeline import PipelineService
from sui_agent.services.selector import ToolSelectorService

# Setup logger for this module
logger = logging.getLogger(__name__)

MODEL_ENV_VAR = "ATOMA_CHAT_COMPLETIONS_MODEL"


class SuiAgentFactory:
    """Factory for creating and wiring components of the Sui Agent system."""

    @staticmethod
    def resolve_model(config: Dict[str, Any]) -> str:
        """Pick the chat model from config, then environment, then default."""
        return (
            config.get("atoma", {}).get("model")
            or os.getenv(MODEL_ENV_VAR)
            or DEFAULT_CHAT_MODEL
        )

    @staticmethod
    def create_llm_provider(config: Dict[str, Any]) -> OpenAIAdapter:
        """Create the completion client from configuration."""
        if "atoma" not in config or not config["atoma"].get("api_key"):
            raise ValueError("Atoma API key is required in config.")

        model = SuiAgentFactory.resolve_model(config)
        logger.info(f"Using chat completions model: {model}")

        logfire_api_key = None
        if "logfire" in config:
            if "api_key" not in config["logfire"]:
                raise ValueError("Pydantic Logfire API key is required.")
            logfire_api_key = config["logfire"]["api_key"]

        return OpenAIAdapter(
            api_key=config["atoma"]["api_key"],
            model=model,
            base_url=config["atoma"].get("base_url"),
            logfire_api_key=logfire_api_key,
        )

    @staticmethod
    def create_from_config(config: Dict[str, Any]) -> PipelineService:
        """Create the agent system from configuration.

        Args:
            config: Configuration dictionary

        Returns:
            Configured PipelineService instance
        """
        llm_adapter = SuiAgentFactory.create_llm_provider(config)
        model = llm_adapter.model

        tool_config = config.get("tools", {})
        tool_registry = ToolRegistry(config=tool_config)
        plugin_manager = PluginManager(config=tool_config, tool_registry=tool_registry)

        # Tools are registered before the first query is processed
        if config.get("load_entry_points", True):
            try:
                loaded_plugins = plugin_manager.load_plugins()
                logger.info(f"Loaded {loaded_plugins} plugins")
            except Exception as e:
                logger.error(f"Error loading plugins: {e}")

        if config.get("plugins"):
            loaded_classes = plugin_manager.load_plugin_classes(config["plugins"])
            logger.info(f"Loaded {loaded_classes} configured plugins")

        logger.debug(f"Registered tools: {tool_registry.list_all_tools()}")

        return PipelineService(
            decomposer=QueryDecomposerService(llm_provider=llm_adapter, model=model),
            selector=ToolSelectorService(
                llm_provider=llm_adapter, tool_registry=tool_registry, model=model
            ),
            executor=ToolExecutorService(tool_registry=tool_registry),
            aggregator=ResponseAggregatorService(llm_provider=llm_adapter, model=model),
            tool_registry=tool_registry,
            plugin_manager=plugin_manager,
            llm_provider=llm_adapter,
        )
