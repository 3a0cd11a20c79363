"""Single-source tool registry with toolset classification.

All tools register here via ``@register_tool(toolset="file")`` and are
looked up by the agent runner (for native tool calling) and by the action
block bridge (for ``<writeToFile>`` directives in streamed text).

Design:
- Tools are plain async functions decorated with ``@register_tool``.
- Each tool belongs to exactly one toolset.
- ``premium_only`` tools are registered like any other; the runner decides
  whether the current user may see them.
- ``build_toolset(tools)`` wraps a selection as a PydanticAI
  ``FunctionToolset`` for ``Agent(toolsets=[...])``.
"""

from __future__ import annotations

import inspect
import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Iterable, Sequence

from pydantic_ai import Tool
from pydantic_ai.toolsets import FunctionToolset

from errors.exceptions import ToolNotFoundError
from services.metrics import get_metrics_collector

logger = logging.getLogger(__name__)

# ── Toolset names ───────────────────────────────────────────

TOOLSET_FILE = "file"
TOOLSET_SEARCH = "search"

ALL_TOOLSETS = [
    TOOLSET_FILE,
    TOOLSET_SEARCH,
]


# ── Registry internals ──────────────────────────────────────


@dataclass
class RegisteredTool:
    """Metadata for a registered tool."""

    name: str
    func: Callable[..., Any]
    toolset: str
    description: str = ""
    premium_only: bool = False


# Module-level registry
_registry: dict[str, RegisteredTool] = {}


def register_tool(
    toolset: str,
    *,
    name: str | None = None,
    premium_only: bool = False,
):
    """Decorator to register a tool function with a toolset.

    Usage::

        @register_tool(toolset="file", name="writeToFile")
        async def write_to_file(path: str, content: str, confirmation: bool = True) -> dict:
            ...
    """
    if toolset not in ALL_TOOLSETS:
        raise ValueError(f"Unknown toolset: {toolset!r}. Must be one of {ALL_TOOLSETS}")

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        tool_name = name or func.__name__
        doc = (func.__doc__ or "").strip().split("\n")[0]
        wrapped = _wrap_with_metrics(func, tool_name)
        _registry[tool_name] = RegisteredTool(
            name=tool_name,
            func=wrapped,
            toolset=toolset,
            description=doc,
            premium_only=premium_only,
        )
        return wrapped

    return decorator


# ── Public API ──────────────────────────────────────────────


def get_enabled_tools(
    enabled_ids: Iterable[str] | None = None,
    *,
    toolsets: Sequence[str] | None = None,
) -> list[RegisteredTool]:
    """Return registered tools filtered by an allow-list and toolset.

    Args:
        enabled_ids: Tool names to keep; ``None`` keeps every tool.
        toolsets: Toolset names to keep; ``None`` keeps every toolset.
    """
    allowed = set(enabled_ids) if enabled_ids is not None else None
    return [
        rt for rt in _registry.values()
        if (allowed is None or rt.name in allowed)
        and (toolsets is None or rt.toolset in toolsets)
    ]


def get_tool_metadata(name: str) -> RegisteredTool | None:
    """Return the registered tool called *name*, if any."""
    return _registry.get(name)


def build_toolset(tools: Iterable[RegisteredTool]) -> FunctionToolset:
    """Wrap registered tools as a PydanticAI FunctionToolset."""
    return FunctionToolset([Tool(rt.func, name=rt.name) for rt in tools])


def get_tool_names(toolsets: Sequence[str] | None = None) -> list[str]:
    """Return tool names, optionally filtered by toolset."""
    return [rt.name for rt in get_enabled_tools(toolsets=toolsets)]


def get_tool_descriptions(tools: Iterable[RegisteredTool] | None = None) -> list[dict[str, Any]]:
    """Return name + description for the given tools (default: every tool)."""
    selected = _registry.values() if tools is None else tools
    return [
        {
            "name": rt.name,
            "description": rt.description,
            "toolset": rt.toolset,
            "premiumOnly": rt.premium_only,
        }
        for rt in selected
    ]


def get_registered_count() -> int:
    """Return the number of registered tools."""
    return len(_registry)


async def call_tool(tool: RegisteredTool | str, args: dict[str, Any]) -> Any:
    """Invoke a tool by handle or name with keyword arguments.

    Raises:
        ToolNotFoundError: *tool* is a name that is not registered.
    """
    if isinstance(tool, str):
        rt = _registry.get(tool)
        if rt is None:
            raise ToolNotFoundError(tool)
    else:
        rt = tool

    result = rt.func(**args)
    if inspect.isawaitable(result):
        result = await result
    return result


def _wrap_with_metrics(func: Callable[..., Any], tool_name: str) -> Callable[..., Any]:
    if not inspect.iscoroutinefunction(func):
        return func

    @wraps(func)
    async def wrapped(*args: Any, **kwargs: Any) -> Any:
        start = time.monotonic()
        status = "ok"
        try:
            result = await func(*args, **kwargs)
            if isinstance(result, dict):
                status = str(result.get("status", "ok"))
            return result
        except Exception:
            status = "error"
            logger.exception("tool %s raised an unhandled exception", tool_name)
            raise
        finally:
            latency_ms = (time.monotonic() - start) * 1000
            get_metrics_collector().record_tool_call(
                tool_name=tool_name,
                status=status,
                latency_ms=latency_ms,
            )

    return wrapped
