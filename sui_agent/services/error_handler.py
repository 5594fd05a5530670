"""
Conversion of pipeline failures into structured error answers.
"""
import logging
from typing import Any

from sui_agent.domains.pipeline import StructuredError

logger = logging.getLogger(__name__)

__all__ = ["UNKNOWN_ERROR_MESSAGE", "is_error", "handle_error"]

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


def is_error(error: Any) -> bool:
    """Return True if ``error`` is an exception instance."""
    return isinstance(error, BaseException)


def _error_message(error: Any) -> str:
    if is_error(error):
        try:
            return str(error) or type(error).__name__
        except Exception:
            return type(error).__name__
    if isinstance(error, str):
        return error
    return UNKNOWN_ERROR_MESSAGE


def handle_error(error: Any, reasoning: str, query: str) -> StructuredError:
    """Build a StructuredError for any caught failure.

    Every call gets a fresh error id, so identical failures stay
    distinguishable in logs.

    Args:
        error: Exception, message string or any other value
        reasoning: Explanation shown to the caller
        query: The original user query

    Returns:
        A failure answer whose single error reads ``Error ID: <uuid> - <message>``
    """
    structured = StructuredError.from_message(_error_message(error), reasoning, query)
    logger.debug(f"Structured error created: {structured.errors[0]}")
    return structured
