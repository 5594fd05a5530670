"""
Pipeline service implementation.

Runs the four stages in order: decompose, select, execute and format.
Callers always receive a list: the answers parsed from the formatter, in
the order the model wrote them, or a single StructuredError on any failure.
"""
import json
import logging
from typing import Any, List, Optional

from sui_agent.domains.pipeline import StructuredAnswer, ToolSelection
from sui_agent.interfaces.plugins.plugins import PluginManager, ToolRegistry
from sui_agent.interfaces.providers.llm import LLMProvider
from sui_agent.interfaces.services.aggregator import ResponseAggregatorService
from sui_agent.interfaces.services.decomposer import QueryDecomposerService
from sui_agent.interfaces.services.executor import ToolExecutorService
from sui_agent.interfaces.services.pipeline import (
    PipelineService as PipelineServiceInterface,
)
from sui_agent.interfaces.services.selector import ToolSelectorService
from sui_agent.services.error_handler import handle_error

logger = logging.getLogger(__name__)

__all__ = [
    "NO_TOOLS_SELECTED",
    "NO_VALID_TOOLS",
    "ERROR_REASONING",
    "stringify_result",
    "PipelineService",
]

NO_TOOLS_SELECTED = "No tools selected for the query"
NO_VALID_TOOLS = "No valid tools were executed for the query"
ERROR_REASONING = "The system encountered an issue while processing your query"


def stringify_result(result: Any) -> str:
    """Render a tool result as text for the final answer prompt."""
    if result is None:
        return ""
    if isinstance(result, str):
        return result
    try:
        return json.dumps(result, default=str)
    except (TypeError, ValueError):
        return str(result)


class PipelineService(PipelineServiceInterface):
    """Orchestrates the query pipeline."""

    def __init__(
        self,
        decomposer: QueryDecomposerService,
        selector: ToolSelectorService,
        executor: ToolExecutorService,
        aggregator: ResponseAggregatorService,
        tool_registry: Optional[ToolRegistry] = None,
        plugin_manager: Optional[PluginManager] = None,
        llm_provider: Optional[LLMProvider] = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            decomposer: Stage 1, query decomposition
            selector: Stage 2, tool selection
            executor: Stage 3, tool execution
            aggregator: Stage 4, final answer formatting
            tool_registry: Registry shared by the selector and executor
            plugin_manager: Manager of the plugins that populated the registry
            llm_provider: Completion client, used for health checks
        """
        self.decomposer = decomposer
        self.selector = selector
        self.executor = executor
        self.aggregator = aggregator
        self.tool_registry = tool_registry
        self.plugin_manager = plugin_manager
        self.llm_provider = llm_provider

    async def run(
        self, query: str, wallet_address: Optional[str] = None
    ) -> List[StructuredAnswer]:
        """Process a user query end to end."""
        try:
            subqueries = await self.decomposer.decompose(query)
            logger.debug(f"Subqueries: {subqueries}")

            selections = await self.selector.select_tools(subqueries, wallet_address)
        except Exception as e:
            logger.exception(f"Error preparing query: {e}")
            return [handle_error(e, reasoning=ERROR_REASONING, query=query)]

        return await self.process_query(query, selections)

    async def process_query(
        self, query: str, selections: List[ToolSelection]
    ) -> List[StructuredAnswer]:
        """Execute tool selections in order and format the final answer.

        Args:
            query: Original user query
            selections: Selection records from the selector

        Returns:
            The formatter's answers, or a single StructuredError
        """
        try:
            active = [s for s in selections or [] if s.has_tool]
            if not active:
                logger.info("No tools selected, formatting placeholder answer")
                return await self.aggregator.final_answer(NO_TOOLS_SELECTED, query)

            results = await self.executor.execute_all(active)
            aggregated = "\n".join(stringify_result(r) for r in results).strip()
            if not aggregated:
                return await self.aggregator.final_answer(NO_VALID_TOOLS, query)

            tools_used = ", ".join(s.tool_name for s in active)
            return await self.aggregator.final_answer(aggregated, query, tools_used)
        except Exception as e:
            logger.exception(f"Error processing query: {e}")
            return [handle_error(e, reasoning=ERROR_REASONING, query=query)]
