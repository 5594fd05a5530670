from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class LLMProvider(ABC):
    """Interface for chat completion providers."""

    @abstractmethod
    async def chat(
        self,
        messages: List[Dict[str, str]],
        model: Optional[str] = None,
    ) -> Any:
        """Send role-tagged messages and return the raw chat completion.

        The completion must expose ``choices[0].message.content``.
        """
        pass

    @abstractmethod
    async def health_check(self, timeout: float = 30.0) -> bool:
        """Return True if the provider answers a trivial chat request."""
        pass
