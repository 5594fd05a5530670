from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from sui_agent.domains.pipeline import StructuredAnswer
from sui_agent.interfaces.plugins.plugins import Plugin, Tool


class SuiAgent(ABC):
    """Interface for the Sui Agent client."""

    @abstractmethod
    async def process(
        self, query: str, wallet_address: Optional[str] = None
    ) -> List[StructuredAnswer]:
        """Process a user query and return the structured answer."""
        pass

    @abstractmethod
    def register_tool(self, tool: Tool) -> bool:
        """Register a tool with the agent system."""
        pass

    @abstractmethod
    def register_plugin(self, plugin: Plugin) -> bool:
        """Register a plugin and the tools it provides."""
        pass

    @abstractmethod
    def list_tools(self) -> List[Dict[str, Any]]:
        """Describe every registered tool."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check that the completion service is reachable."""
        pass
