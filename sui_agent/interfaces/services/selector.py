from abc import ABC, abstractmethod
from typing import List, Optional

from sui_agent.domains.pipeline import ToolSelection


class ToolSelectorService(ABC):
    """Interface for choosing tools and arguments for subqueries."""

    @abstractmethod
    async def select_tools(
        self, subqueries: List[str], wallet_address: Optional[str] = None
    ) -> List[ToolSelection]:
        """Return one selection record per subquery.

        Args:
            subqueries: Ordered subqueries from the decomposer
            wallet_address: Optional wallet address of the user

        Returns:
            Ordered list of tool selections
        """
        pass
