import asyncio

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from openai import APIStatusError, OpenAIError

from sui_agent.adapters.openai_adapter import (
    DEFAULT_BASE_URL,
    DEFAULT_CHAT_MODEL,
    HEALTH_CHECK_PROMPT,
    OpenAIAdapter,
)

# Fixtures


@pytest.fixture
def mock_openai():
    with patch("sui_agent.adapters.openai_adapter.AsyncOpenAI") as mock:
        mock.return_value.chat.completions.create = AsyncMock()
        yield mock


@pytest.fixture
def mock_logfire():
    with patch("sui_agent.adapters.openai_adapter.logfire") as mock:
        yield mock


@pytest.fixture
def adapter(mock_openai):
    return OpenAIAdapter(api_key="test-key")


def create_completion(content="Hello!", model=DEFAULT_CHAT_MODEL):
    completion = MagicMock()
    completion.model = model
    completion.choices = [MagicMock()]
    completion.choices[0].message.content = content
    return completion


def status_error(status_code, message="request failed"):
    request = httpx.Request("POST", f"{DEFAULT_BASE_URL}/chat/completions")
    response = httpx.Response(status_code, request=request)
    return APIStatusError(message, response=response, body=None)


# Construction


def test_defaults(adapter, mock_openai):
    mock_openai.assert_called_once_with(api_key="test-key", base_url=DEFAULT_BASE_URL)
    assert adapter.model == DEFAULT_CHAT_MODEL
    assert adapter.logfire is False


def test_custom_model_and_base_url(mock_openai):
    adapter = OpenAIAdapter(
        api_key="test-key", model="custom-model", base_url="http://localhost:8080/v1"
    )
    mock_openai.assert_called_once_with(
        api_key="test-key", base_url="http://localhost:8080/v1"
    )
    assert adapter.model == "custom-model"


def test_logfire_enabled(mock_openai, mock_logfire):
    adapter = OpenAIAdapter(api_key="test-key", logfire_api_key="logfire-token")

    mock_logfire.configure.assert_called_once_with(token="logfire-token")
    mock_logfire.instrument_openai.assert_called_once_with(adapter.client)
    assert adapter.logfire is True


def test_logfire_failure_is_not_fatal(mock_openai, mock_logfire):
    mock_logfire.configure.side_effect = Exception("bad token")

    adapter = OpenAIAdapter(api_key="test-key", logfire_api_key="logfire-token")

    assert adapter.logfire is False


# Chat


@pytest.mark.asyncio
async def test_chat(adapter, mock_openai):
    completion = create_completion()
    mock_openai.return_value.chat.completions.create.return_value = completion
    messages = [{"role": "user", "content": "Hi"}]

    result = await adapter.chat(messages)

    assert result is completion
    mock_openai.return_value.chat.completions.create.assert_awaited_once_with(
        model=DEFAULT_CHAT_MODEL, messages=messages
    )


@pytest.mark.asyncio
async def test_chat_model_override(adapter, mock_openai):
    await adapter.chat([{"role": "user", "content": "Hi"}], model="other-model")

    kwargs = mock_openai.return_value.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "other-model"


@pytest.mark.asyncio
async def test_chat_error_propagates(adapter, mock_openai):
    mock_openai.return_value.chat.completions.create.side_effect = OpenAIError("boom")

    with pytest.raises(OpenAIError):
        await adapter.chat([{"role": "user", "content": "Hi"}])


# Health check


@pytest.mark.asyncio
async def test_health_check_ok(adapter, mock_openai):
    mock_openai.return_value.chat.completions.create.return_value = create_completion()

    assert await adapter.health_check() is True
    kwargs = mock_openai.return_value.chat.completions.create.call_args.kwargs
    assert kwargs["messages"] == [{"role": "user", "content": HEALTH_CHECK_PROMPT}]


@pytest.mark.asyncio
async def test_health_check_no_choices(adapter, mock_openai):
    completion = create_completion()
    completion.choices = []
    mock_openai.return_value.chat.completions.create.return_value = completion

    assert await adapter.health_check() is False


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [401, 402, 404, 500])
async def test_health_check_status_error(adapter, mock_openai, status_code):
    mock_openai.return_value.chat.completions.create.side_effect = status_error(
        status_code
    )

    assert await adapter.health_check() is False


@pytest.mark.asyncio
async def test_health_check_unexpected_error(adapter, mock_openai):
    mock_openai.return_value.chat.completions.create.side_effect = ConnectionError(
        "unreachable"
    )

    assert await adapter.health_check() is False


@pytest.mark.asyncio
async def test_health_check_timeout(adapter, mock_openai):
    async def slow(**kwargs):
        await asyncio.sleep(5)

    mock_openai.return_value.chat.completions.create.side_effect = slow

    assert await adapter.health_check(timeout=0.01) is False
