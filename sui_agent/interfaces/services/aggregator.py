from abc import ABC, abstractmethod
from typing import List, Optional

from sui_agent.domains.pipeline import StructuredAnswer


class ResponseAggregatorService(ABC):
    """Interface for reducing tool output into a structured answer."""

    @abstractmethod
    async def final_answer(
        self, response: str, query: str, tools: Optional[str] = None
    ) -> List[StructuredAnswer]:
        """Ask the model to shape raw tool output into structured answers."""
        pass
