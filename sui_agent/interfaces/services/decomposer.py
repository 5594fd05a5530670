from abc import ABC, abstractmethod
from typing import List


class QueryDecomposerService(ABC):
    """Interface for splitting a query into subqueries."""

    @abstractmethod
    async def decompose(self, query: str) -> List[str]:
        """Return the ordered, self-contained subqueries for a query."""
        pass
