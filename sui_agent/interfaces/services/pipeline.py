from abc import ABC, abstractmethod
from typing import List, Optional

from sui_agent.domains.pipeline import StructuredAnswer, ToolSelection


class PipelineService(ABC):
    """Interface for the query pipeline."""

    @abstractmethod
    async def run(
        self, query: str, wallet_address: Optional[str] = None
    ) -> List[StructuredAnswer]:
        """Process a user query end to end.

        Args:
            query: Free-text user query
            wallet_address: Optional wallet address of the user

        Returns:
            The formatter's answers in order, or a single StructuredError
        """
        pass

    @abstractmethod
    async def process_query(
        self, query: str, selections: List[ToolSelection]
    ) -> List[StructuredAnswer]:
        """Execute tool selections and format the final answer."""
        pass
