"""
Helpers for turning raw completions into JSON values.

Each stage keeps its own typed parser; these helpers only cover the shared
steps of reading the completion text and decoding the JSON payload.
"""
import json
import re
from typing import Any, Type

from sui_agent.domains.errors import ModelOutputError

_FENCE_RE = re.compile(r"```[a-zA-Z]*\s*(.*?)\s*```", re.DOTALL)


def completion_text(completion: Any) -> str:
    """Return ``choices[0].message.content`` of a chat completion.

    Accepts both SDK response objects and plain dictionaries.
    """
    try:
        if isinstance(completion, dict):
            content = completion["choices"][0]["message"]["content"]
        else:
            content = completion.choices[0].message.content
    except (AttributeError, IndexError, KeyError, TypeError) as e:
        raise ValueError(f"Completion has no message content: {e}") from e
    if content is None:
        raise ValueError("Completion has no message content")
    return content


def strip_code_fence(text: str) -> str:
    """Remove a Markdown code fence such as ```json ... ``` around a payload."""
    text = text.strip()
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    if text.startswith("```"):
        # unterminated fence
        return text.partition("\n")[2].rstrip("`").strip()
    return text


def load_json(text: str, error_cls: Type[ModelOutputError], stage: str) -> Any:
    """Decode the JSON payload of a model answer or raise ``error_cls``."""
    if not isinstance(text, str) or not text.strip():
        raise error_cls(f"{stage} returned an empty response", raw_output=text)
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        payload = strip_code_fence(text)
    try:
        return json.loads(payload)
    except json.JSONDecodeError as e:
        raise error_cls(
            f"{stage} returned invalid JSON: {e.msg} at position {e.pos}",
            raw_output=text,
        ) from e
