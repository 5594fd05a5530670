"""
LLM provider adapters for the Sui Agent system.

The Atoma network exposes an OpenAI-compatible chat completions API, so a
single adapter built on the OpenAI SDK serves both.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import logfire
from openai import APIStatusError, AsyncOpenAI, OpenAIError

from sui_agent.interfaces.providers.llm import LLMProvider

# Setup logger for this module
logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.atoma.network/v1"
DEFAULT_CHAT_MODEL = "meta-llama/Llama-3.3-70B-Instruct"
HEALTH_CHECK_PROMPT = "Hi, are you there?"
HEALTH_CHECK_TIMEOUT = 30.0

_STATUS_HINTS = {
    402: "Insufficient balance for this request. Add credits or use a cheaper model.",
    401: "The API key was rejected. Verify the bearer token.",
    500: "Server-side failure. The token may be invalid or expired, the model may be unavailable or the quota exceeded.",
}


class OpenAIAdapter(LLMProvider):
    """OpenAI-compatible implementation of LLMProvider."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        logfire_api_key: Optional[str] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url or DEFAULT_BASE_URL
        self.client = AsyncOpenAI(api_key=api_key, base_url=self.base_url)
        self.model = model or DEFAULT_CHAT_MODEL

        self.logfire = False
        if logfire_api_key:
            try:
                logfire.configure(token=logfire_api_key)
                logfire.instrument_openai(self.client)
                self.logfire = True
                logger.info(
                    "Logfire configured and OpenAI client instrumented successfully."
                )
            except Exception as e:
                logger.error(f"Failed to configure Logfire: {e}")
                self.logfire = False

    def get_api_key(self) -> Optional[str]:  # pragma: no cover
        """Return the API key used to configure the client."""
        return getattr(self, "api_key", None)

    async def chat(
        self,
        messages: List[Dict[str, str]],
        model: Optional[str] = None,
    ) -> Any:
        """Create a chat completion.

        Args:
            messages: Ordered role-tagged messages
            model: Optional model override

        Returns:
            The SDK chat completion object
        """
        target_model = model or self.model
        logger.debug(f"Chat completion with model {target_model}, {len(messages)} messages")
        try:
            return await self.client.chat.completions.create(
                model=target_model,
                messages=messages,
            )
        except OpenAIError as e:
            logger.error(f"API error during chat completion: {e}")
            raise

    async def health_check(self, timeout: float = HEALTH_CHECK_TIMEOUT) -> bool:
        """Send a trivial chat request and report whether it succeeded."""
        try:
            completion = await asyncio.wait_for(
                self.chat([{"role": "user", "content": HEALTH_CHECK_PROMPT}]),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Health check timed out after {timeout}s")
            return False
        except APIStatusError as e:
            logger.error(f"Health check failed with status {e.status_code}: {e.message}")
            hint = _STATUS_HINTS.get(e.status_code)
            if hint:
                logger.error(hint)
            return False
        except Exception as e:
            logger.exception(f"Health check failed: {e}")
            return False

        if not getattr(completion, "choices", None):
            logger.error("Health check returned no choices")
            return False
        logger.info(
            f"Health check OK with model {getattr(completion, 'model', self.model)}"
        )
        return True
