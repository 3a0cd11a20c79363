"""Tests for models/errors.py and errors/exceptions.py."""

from __future__ import annotations

from errors import ToolError, ToolNotFoundError, WorkspacePathError
from models.errors import ErrorCode, classify_stream_error, format_error, format_tool_error


class TestClassifyStreamError:
    def test_known_tool_name(self):
        text = classify_stream_error("writeToFile exploded")
        assert text == "TOOL_EXECUTION_FAILED: writeToFile - writeToFile exploded"

    def test_generic_tool_hint(self):
        assert classify_stream_error("Tool 'x' failed: nope").startswith(
            "TOOL_EXECUTION_FAILED: unknown_tool"
        )

    def test_llm_provider(self):
        assert classify_stream_error("Request timeout after 60s") == (
            "LLM_PROVIDER_ERROR: Request timeout after 60s"
        )

    def test_fallback_internal(self):
        assert classify_stream_error("division by zero") == "INTERNAL_ERROR: division by zero"


class TestFormatters:
    def test_format_error(self):
        assert format_error(ErrorCode.INVALID_REQUEST, "bad") == "INVALID_REQUEST: bad"

    def test_format_tool_error(self):
        assert format_tool_error("readFile", "gone") == "TOOL_EXECUTION_FAILED: readFile - gone"


class TestExceptions:
    def test_hierarchy(self):
        assert issubclass(ToolNotFoundError, ToolError)
        assert issubclass(WorkspacePathError, ToolError)

    def test_messages(self):
        err = WorkspacePathError("writeToFile", "../x")
        assert err.tool_name == "writeToFile"
        assert err.path == "../x"
        assert str(err) == "Tool 'writeToFile' failed: path '../x' is outside the workspace"
        assert str(ToolNotFoundError("nope")) == "Tool 'nope' failed: not registered"
