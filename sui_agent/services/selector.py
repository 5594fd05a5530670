"""
Tool selection stage.

Asks the language model which registered tools, with which positional
arguments, answer each subquery.
"""
import json
import logging
from typing import List, Optional

from pydantic import ValidationError

from sui_agent.domains.errors import ToolSelectionError
from sui_agent.domains.pipeline import ToolSelection
from sui_agent.interfaces.plugins.plugins import ToolRegistry
from sui_agent.interfaces.providers.llm import LLMProvider
from sui_agent.interfaces.services.selector import (
    ToolSelectorService as ToolSelectorServiceInterface,
)
from sui_agent.services.parsing import completion_text, load_json

logger = logging.getLogger(__name__)

__all__ = ["SELECTOR_PROMPT", "parse_tool_selections", "ToolSelectorService"]

SELECTOR_PROMPT = """You are the Intent Agent of an assistant for the Sui blockchain.

You receive a JSON array of subqueries and must decide, for each subquery in order,
which of the available tools answers it and with which arguments.

AVAILABLE TOOLS:
{tools}

RULES:
- Produce exactly one object per subquery, in the same order as the subqueries.
- "selected_tools" holds the exact tool name as listed above. Only the first tool is executed.
- "tool_arguments" is a positional array following the order of the tool's parameters.
  Use JSON types matching each parameter type (string, number, boolean, array, object).
  Omit trailing optional arguments you do not know; never invent required values.
- If the user's wallet address is given and a tool needs an address of the user, use it.
- If no tool applies to a subquery, return an empty "selected_tools" array and null "tool_arguments".

OUTPUT FORMAT (strict JSON array, nothing else):
[
  {{"subquery": string, "selected_tools": [string], "tool_arguments": [any] | null}}
]

RESPOND WITH ONLY THE JSON ARRAY.
"""


def parse_tool_selections(text: str) -> List[ToolSelection]:
    """Parse the selector's answer into ordered selection records.

    A single JSON object is accepted as a one-record array.

    Raises:
        ToolSelectionError: If the answer is not an array of selection objects
    """
    data = load_json(text, ToolSelectionError, "Tool selector")
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ToolSelectionError(
            f"Tool selector returned {type(data).__name__}, expected an array of objects",
            raw_output=text,
        )

    selections = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ToolSelectionError(
                f"Selection {index} is {type(item).__name__}, expected an object",
                raw_output=text,
            )
        try:
            selections.append(ToolSelection.model_validate(item))
        except ValidationError as e:
            raise ToolSelectionError(
                f"Selection {index} is malformed: {e}", raw_output=text
            ) from e
    return selections


class ToolSelectorService(ToolSelectorServiceInterface):
    """Service for choosing tools for subqueries."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        tool_registry: ToolRegistry,
        model: Optional[str] = None,
        prompt: str = SELECTOR_PROMPT,
    ) -> None:
        """Initialize the selector.

        Args:
            llm_provider: Provider for chat completions
            tool_registry: Registry whose tools are offered to the model
            model: Optional model name
            prompt: Instruction template with a ``{tools}`` placeholder
        """
        self.llm_provider = llm_provider
        self.tool_registry = tool_registry
        self.model = model
        self.prompt = prompt

    def build_system_prompt(self) -> str:
        """Render the instruction with the current tool catalogue."""
        tools = [tool.to_prompt_dict() for tool in self.tool_registry.get_all()]
        return self.prompt.format(tools=json.dumps(tools, indent=2))

    @staticmethod
    def build_user_message(
        subqueries: List[str], wallet_address: Optional[str] = None
    ) -> str:
        content = f"SUBQUERIES: {json.dumps(subqueries)}"
        if wallet_address:
            content += f"\nUSER WALLET ADDRESS: {wallet_address}"
        return content

    async def select_tools(
        self, subqueries: List[str], wallet_address: Optional[str] = None
    ) -> List[ToolSelection]:
        """Select tools and arguments for each subquery.

        Tool names are not checked against the registry here; the executor
        reports unknown tools.
        """
        completion = await self.llm_provider.chat(
            [
                {"role": "system", "content": self.build_system_prompt()},
                {
                    "role": "user",
                    "content": self.build_user_message(subqueries, wallet_address),
                },
            ],
            model=self.model,
        )
        text = completion_text(completion)
        logger.debug(f"Selector raw output: {text}")

        selections = parse_tool_selections(text)
        logger.info(
            f"Selected tools: {[s.selected_tools for s in selections]}"
        )
        return selections
