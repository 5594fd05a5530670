"""
Tests for the SuiAgent client interface.

This module covers configuration loading, query processing, tool and plugin
registration and health checks.
"""

import json

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from sui_agent.client.sui_agent import SuiAgent
from sui_agent.domains.pipeline import StructuredAnswer
from sui_agent.domains.tools import ToolParameter
from sui_agent.interfaces.plugins.plugins import Plugin, Tool
from sui_agent.plugins.registry import ToolRegistry


@pytest.fixture
def config_dict():
    """Fixture providing test configuration."""
    return {
        "atoma": {"api_key": "test-key", "model": "test-model"},
        "tools": {"network": "testnet"},
    }


@pytest.fixture
def mock_pipeline():
    """Create a mock pipeline with a real registry."""
    pipeline = AsyncMock()
    pipeline.run.return_value = [
        StructuredAnswer(response="SUI is $3.42", status="success", query="price?")
    ]
    pipeline.tool_registry = ToolRegistry()
    pipeline.plugin_manager = MagicMock()
    pipeline.plugin_manager.register_plugin.return_value = True
    pipeline.llm_provider = AsyncMock()
    pipeline.llm_provider.health_check.return_value = True
    return pipeline


@pytest.fixture
def mock_factory(mock_pipeline):
    with patch("sui_agent.client.sui_agent.SuiAgentFactory") as factory:
        factory.create_from_config.return_value = mock_pipeline
        yield factory


class TestSuiAgent:
    """Test suite for SuiAgent client."""

    def test_init_with_config(self, mock_factory, config_dict, mock_pipeline):
        """Test initialization with a configuration dictionary."""
        agent = SuiAgent(config=config_dict)

        mock_factory.create_from_config.assert_called_once_with(config_dict)
        assert agent.pipeline is mock_pipeline

    def test_init_with_json_file(self, mock_factory, config_dict, tmp_path):
        """Test initialization from a JSON file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps(config_dict))

        SuiAgent(config_path=str(path))

        mock_factory.create_from_config.assert_called_once_with(config_dict)

    def test_init_with_python_file(self, mock_factory, config_dict, tmp_path):
        """Test initialization from a Python file defining ``config``."""
        path = tmp_path / "agent_config.py"
        path.write_text(f"config = {config_dict!r}\n")

        SuiAgent(config_path=str(path))

        mock_factory.create_from_config.assert_called_once_with(config_dict)

    def test_init_without_config(self):
        """Test that a configuration source is required."""
        with pytest.raises(ValueError, match="Either config or config_path"):
            SuiAgent()

    def test_init_missing_file(self, mock_factory, tmp_path):
        """Test that a missing config file raises."""
        with pytest.raises(FileNotFoundError):
            SuiAgent(config_path=str(tmp_path / "missing.json"))

    @pytest.mark.asyncio
    async def test_process(self, mock_factory, config_dict, mock_pipeline):
        """Test processing a query."""
        agent = SuiAgent(config=config_dict)

        answers = await agent.process("price?", wallet_address="0xabc")

        assert answers[0].response == "SUI is $3.42"
        mock_pipeline.run.assert_awaited_once_with("price?", "0xabc")

    @pytest.mark.asyncio
    async def test_run_alias(self, mock_factory, config_dict, mock_pipeline):
        """Test that run behaves like process."""
        agent = SuiAgent(config=config_dict)

        await agent.run("price?")

        mock_pipeline.run.assert_awaited_once_with("price?", None)

    def test_register_tool(self, mock_factory, config_dict, mock_pipeline):
        """Test registering a Tool instance."""
        tool = MagicMock(spec=Tool)
        tool.name = "get_coin_price"
        tool.description = "Get a coin price"
        tool.parameters = [ToolParameter(name="coin", type="string")]
        tool.execute = AsyncMock()
        agent = SuiAgent(config=config_dict)

        assert agent.register_tool(tool) is True
        assert "get_coin_price" in mock_pipeline.tool_registry

    def test_register_plugin(self, mock_factory, config_dict, mock_pipeline):
        """Test registering a plugin."""
        plugin = MagicMock(spec=Plugin)
        agent = SuiAgent(config=config_dict)

        assert agent.register_plugin(plugin) is True
        mock_pipeline.plugin_manager.register_plugin.assert_called_once_with(plugin)

    def test_list_tools(self, mock_factory, config_dict, mock_pipeline):
        """Test describing registered tools in order."""
        mock_pipeline.tool_registry.register(
            "get_coin_price",
            "Get a coin price",
            [ToolParameter(name="coin", type="string", description="Coin symbol")],
            lambda coin: coin,
        )
        mock_pipeline.tool_registry.register("ping", "Ping", [], lambda: "pong")
        agent = SuiAgent(config=config_dict)

        tools = agent.list_tools()

        assert [t["name"] for t in tools] == ["get_coin_price", "ping"]
        assert tools[0]["parameters"] == [
            {
                "name": "coin",
                "type": "string",
                "description": "Coin symbol",
                "required": True,
            }
        ]

    @pytest.mark.asyncio
    async def test_health_check(self, mock_factory, config_dict, mock_pipeline):
        """Test that health checks reach the completion client."""
        agent = SuiAgent(config=config_dict)

        assert await agent.health_check() is True
        mock_pipeline.llm_provider.health_check.assert_awaited_once()
