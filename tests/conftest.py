"""Shared fixtures for the Sui Agent test suite."""
import json

import pytest
from unittest.mock import AsyncMock

from sui_agent.interfaces.providers.llm import LLMProvider


def completion(content):
    """Build a chat completion shaped like the provider's response."""
    if not isinstance(content, str):
        content = json.dumps(content)
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def make_completion():
    """Factory for chat completions carrying the given content."""
    return completion


@pytest.fixture
def mock_llm():
    """Create a mock completion client whose answers are set per test."""
    provider = AsyncMock(spec=LLMProvider)
    provider.health_check.return_value = True
    return provider


@pytest.fixture
def chat_replies(mock_llm):
    """Queue the completion contents returned by successive chat calls."""

    def _queue(*contents):
        mock_llm.chat.side_effect = [completion(c) for c in contents]
        return mock_llm

    return _queue
