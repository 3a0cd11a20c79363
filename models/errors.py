"""Structured error codes for the SSE ``errorText`` field.

Stream errors follow one format::

    {ERROR_CODE}: {tool_name} - {human_readable_detail}

Action-block failures never reach this layer (the dispatch bridge turns them
into status text); these codes cover failures of the agent run itself.
"""

from __future__ import annotations

import re
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes surfaced to stream consumers."""

    INVALID_REQUEST = "INVALID_REQUEST"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    TOOL_EXECUTION_FAILED = "TOOL_EXECUTION_FAILED"
    LLM_PROVIDER_ERROR = "LLM_PROVIDER_ERROR"


def format_tool_error(tool_name: str, detail: str) -> str:
    """Format a tool execution error: ``TOOL_EXECUTION_FAILED: {tool_name} - {detail}``."""
    return f"{ErrorCode.TOOL_EXECUTION_FAILED.value}: {tool_name} - {detail}"


def format_llm_error(detail: str) -> str:
    """Format an LLM provider error: ``LLM_PROVIDER_ERROR: {detail}``."""
    return f"{ErrorCode.LLM_PROVIDER_ERROR.value}: {detail}"


def format_error(code: ErrorCode, detail: str) -> str:
    """Format a generic error: ``{ERROR_CODE}: {detail}``."""
    return f"{code.value}: {detail}"


_TOOL_NAME_RE = re.compile(r"\b(writeToFile|readFile|listDirectory|searchWorkspace)\b")

_TOOL_HINT_RE = re.compile(r"\btool\b", re.IGNORECASE)

_LLM_PROVIDER_RE = re.compile(
    r"timeout|connection|context length|token|content filter|safety|rate limit",
    re.IGNORECASE,
)


def classify_stream_error(error_text: str) -> str:
    """Classify a raw exception string into an SSE ``errorText``.

    Classification order (first match wins):
        1. Tool execution failure - known tool name or a generic "tool" hint.
        2. LLM provider error - timeout / connection / token / safety / rate limit.
        3. Fallback - ``INTERNAL_ERROR``.
    """
    tool_match = _TOOL_NAME_RE.search(error_text)
    if tool_match:
        return format_tool_error(tool_match.group(1), error_text)
    if _TOOL_HINT_RE.search(error_text):
        return format_tool_error("unknown_tool", error_text)

    if _LLM_PROVIDER_RE.search(error_text):
        return format_llm_error(error_text)

    return format_error(ErrorCode.INTERNAL_ERROR, error_text)
