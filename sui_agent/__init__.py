"""
Sui Agent - a tool-calling agent pipeline for the Sui blockchain.

This package decomposes user queries, selects registered tools, executes
them and asks a language model to shape the results into a structured answer.
"""

# Client interface (main entry point)
from sui_agent.client.sui_agent import SuiAgent

# Factory for creating agent systems
from sui_agent.factories.agent_factory import SuiAgentFactory

# Useful tools and utilities
from sui_agent.plugins.manager import PluginManager
from sui_agent.plugins.registry import ToolRegistry
from sui_agent.plugins.tools.auto_tool import AutoTool
from sui_agent.interfaces.plugins.plugins import Plugin, Tool
from sui_agent.domains.tools import ParameterType, ToolParameter
from sui_agent.domains.pipeline import StructuredAnswer, StructuredError, ToolSelection
from sui_agent.services.error_handler import handle_error

# Package metadata
__all__ = [
    # Main client interfaces
    "SuiAgent",
    # Factories
    "SuiAgentFactory",
    # Tools
    "PluginManager",
    "ToolRegistry",
    "AutoTool",
    "Tool",
    "Plugin",
    "ParameterType",
    "ToolParameter",
    # Answers
    "StructuredAnswer",
    "StructuredError",
    "ToolSelection",
    "handle_error",
]
