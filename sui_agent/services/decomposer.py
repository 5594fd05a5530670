"""
Query decomposition stage.

Splits a user query into ordered, self-contained subqueries so each one can
be matched to a single tool.
"""
import logging
from typing import List, Optional

from sui_agent.domains.errors import DecompositionError
from sui_agent.interfaces.providers.llm import LLMProvider
from sui_agent.interfaces.services.decomposer import (
    QueryDecomposerService as QueryDecomposerServiceInterface,
)
from sui_agent.services.parsing import completion_text, load_json

logger = logging.getLogger(__name__)

__all__ = ["DECOMPOSER_PROMPT", "parse_decomposition", "QueryDecomposerService"]

DECOMPOSER_PROMPT = """You are the Query Decomposer.

Your task is to analyze the user's query and break it into multiple subqueries **only if necessary**, following strict rules.

### **Rules for Decomposition:**
1. **Determine if decomposition is needed**
   - If the query requires multiple tools or separate logical steps, split it into subqueries.
   - If a single tool can handle the query, return it as is.

2. **Subquery Format (Strict JSON Array)**
   - Each subquery must be **clear, self-contained, and executable**.
   - Maintain **logical order** for execution. Steps that depend on earlier steps must come after them.

### **Output Format:**
- If decomposition **is needed**, return a JSON array of strings.
- Otherwise return a JSON array with a single string: the original query, unchanged.

DO NOT STRAY FROM THE RESPONSE FORMAT. RETURN ONLY THE JSON ARRAY.
"""


def parse_decomposition(text: str) -> List[str]:
    """Parse the decomposer's answer into an ordered list of subqueries.

    A bare JSON string is accepted as a single subquery.

    Raises:
        DecompositionError: If the answer is not a non-empty array of strings
    """
    data = load_json(text, DecompositionError, "Query decomposer")
    if isinstance(data, str):
        data = [data]
    if not isinstance(data, list):
        raise DecompositionError(
            f"Query decomposer returned {type(data).__name__}, expected an array of strings",
            raw_output=text,
        )
    if not data:
        raise DecompositionError(
            "Query decomposer returned no subqueries", raw_output=text
        )
    for item in data:
        if not isinstance(item, str):
            raise DecompositionError(
                f"Subquery {item!r} is not a string", raw_output=text
            )
    return data


class QueryDecomposerService(QueryDecomposerServiceInterface):
    """Service for splitting queries into subqueries."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        model: Optional[str] = None,
        prompt: str = DECOMPOSER_PROMPT,
    ) -> None:
        """Initialize the decomposer.

        Args:
            llm_provider: Provider for chat completions
            model: Optional model name
            prompt: Instruction describing the decomposition contract
        """
        self.llm_provider = llm_provider
        self.model = model
        self.prompt = prompt

    async def decompose(self, query: str) -> List[str]:
        """Split a query into ordered subqueries.

        Args:
            query: Free-text user query

        Returns:
            Ordered subqueries, a single element when no split is needed
        """
        completion = await self.llm_provider.chat(
            [
                {"role": "system", "content": self.prompt},
                {"role": "user", "content": query},
            ],
            model=self.model,
        )
        text = completion_text(completion)
        logger.debug(f"Decomposer raw output: {text}")

        subqueries = parse_decomposition(text)
        logger.info(f"Decomposed query into {len(subqueries)} subqueries")
        return subqueries
