"""
Tests for the pipeline domain models.

Covers tool selections, structured answers and structured errors, including
property-based round trips with hypothesis.
"""
import json
import re

import pytest
from hypothesis import given, strategies as st
from pydantic import ValidationError

from sui_agent.domains.pipeline import (
    UNSUCCESSFUL_RESPONSE,
    StructuredAnswer,
    StructuredError,
    ToolSelection,
)

ERROR_RE = re.compile(
    r"^Error ID: [0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12} - (.*)$",
    re.DOTALL,
)

json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(),
    lambda children: st.lists(children, max_size=3)
    | st.dictionaries(st.text(max_size=8), children, max_size=3),
    max_leaves=8,
)


class TestToolSelection:
    """Test suite for ToolSelection."""

    def test_defaults(self):
        """Test an empty selection."""
        selection = ToolSelection()
        assert selection.selected_tools == []
        assert selection.tool_arguments is None
        assert selection.has_tool is False
        assert selection.tool_name is None

    def test_first_tool_is_trimmed(self):
        """Test that the executed tool name ignores whitespace."""
        selection = ToolSelection(
            selected_tools=[" get_coin_price ", "other"], tool_arguments=["SUI"]
        )
        assert selection.has_tool is True
        assert selection.tool_name == "get_coin_price"

    def test_blank_first_tool_is_no_tool(self):
        """Test that a blank tool name counts as no selection."""
        assert ToolSelection(selected_tools=["  "]).has_tool is False

    def test_coercions(self):
        """Test lenient shapes accepted from the model."""
        selection = ToolSelection(selected_tools="get_coin_price", tool_arguments="SUI")
        assert selection.selected_tools == ["get_coin_price"]
        assert selection.tool_arguments == ["SUI"]

        assert ToolSelection(selected_tools=None).selected_tools == []
        assert ToolSelection(tool_arguments=("a", 1)).tool_arguments == ["a", 1]

    def test_invalid_tools_rejected(self):
        """Test that non-list tool names fail validation."""
        with pytest.raises(ValidationError):
            ToolSelection(selected_tools=5)


class TestStructuredAnswer:
    """Test suite for StructuredAnswer."""

    def test_status_normalized(self):
        """Test that status casing and whitespace are normalized."""
        answer = StructuredAnswer(response="ok", status=" Success ", query="q")
        assert answer.status == "success"

    def test_invalid_status_rejected(self):
        """Test that unknown statuses fail validation."""
        with pytest.raises(ValidationError):
            StructuredAnswer(response="ok", status="partial", query="q")

    def test_response_required(self):
        """Test that the response field is mandatory."""
        with pytest.raises(ValidationError):
            StructuredAnswer(status="success", query="q")

    def test_errors_are_stringified(self):
        """Test that structured errors from the model are kept as JSON text."""
        answer = StructuredAnswer(
            response="ok",
            status="failure",
            query="q",
            errors=[{"code": 1}, "plain"],
        )
        assert answer.errors == ['{"code": 1}', "plain"]

    def test_single_error_wrapped(self):
        """Test that a lone error value becomes a one-item list."""
        answer = StructuredAnswer(response="x", status="failure", errors="boom")
        assert answer.errors == ["boom"]
        assert StructuredAnswer(response="x", status="success", errors=None).errors == []

    def test_json_response_preserved(self):
        """Test that JSON responses stay structured."""
        answer = StructuredAnswer(
            response={"apr": 4.2, "pools": [1, 2]}, status="success", query="q"
        )
        assert answer.model_dump()["response"] == {"apr": 4.2, "pools": [1, 2]}

    @given(
        reasoning=st.text(),
        response=st.one_of(st.text(), json_values),
        status=st.sampled_from(["success", "failure"]),
        query=st.text(),
        errors=st.lists(st.text(), max_size=4),
    )
    def test_json_round_trip(self, reasoning, response, status, query, errors):
        """Test that serializing and parsing keeps every field."""
        answer = StructuredAnswer(
            reasoning=reasoning,
            response=response,
            status=status,
            query=query,
            errors=errors,
        )
        restored = StructuredAnswer.model_validate_json(answer.model_dump_json())
        assert restored == answer
        assert json.loads(answer.model_dump_json())["errors"] == errors


class TestStructuredError:
    """Test suite for StructuredError."""

    def test_from_message(self):
        """Test the synthesized failure answer."""
        error = StructuredError.from_message("boom", "it failed", "What is SUI?")

        assert error.status == "failure"
        assert error.response == UNSUCCESSFUL_RESPONSE
        assert error.reasoning == "it failed"
        assert error.query == "What is SUI?"
        assert len(error.errors) == 1
        assert ERROR_RE.match(error.errors[0]).group(1) == "boom"

    def test_is_a_structured_answer(self):
        """Test that errors share the answer shape."""
        error = StructuredError.from_message("boom", "r", "q")
        assert isinstance(error, StructuredAnswer)
        assert set(error.model_dump()) == {
            "reasoning",
            "response",
            "status",
            "query",
            "errors",
        }

    def test_status_cannot_be_success(self):
        """Test that a StructuredError is always a failure."""
        with pytest.raises(ValidationError):
            StructuredError(status="success")
