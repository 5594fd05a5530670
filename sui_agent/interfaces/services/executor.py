from abc import ABC, abstractmethod
from typing import Any, List

from sui_agent.domains.pipeline import ToolSelection


class ToolExecutorService(ABC):
    """Interface for running selected tools."""

    @abstractmethod
    async def execute(self, selection: ToolSelection) -> Any:
        """Run the first tool of a selection and return its raw result."""
        pass

    @abstractmethod
    async def execute_all(self, selections: List[ToolSelection]) -> List[Any]:
        """Run every selection that names a tool, in order."""
        pass
