"""Dispatch bridge - runs the write tool for one detected block.

The bridge is the only place a directive touches the outside world.  It
calls the tool exactly once with ``confirmation=False`` (a stream has no
synchronous human in the loop to approve a preview) and turns the outcome,
success or failure, into a status chunk.  Nothing raised by the tool or the
formatter escapes :meth:`ActionDispatchBridge.dispatch`.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable

from models.chunk import with_content
from models.directive import DirectiveFields
from services.metrics import get_metrics_collector
from services.tool_result_formatter import format_tool_result

logger = logging.getLogger(__name__)

ToolCaller = Callable[[Any, dict[str, Any]], Any]
ResultFormatter = Callable[[str, Any], str]


def _error_message(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class ActionDispatchBridge:
    """Invoke the write tool for extracted fields and package the outcome.

    Args:
        call_tool: ``call_tool(tool, args)`` - sync or async; raises on failure.
        tool: Tool handle passed through to *call_tool* untouched.
        formatter: ``formatter(tool_name, result) -> str``.
        tool_name: Name used for formatting and logging; defaults to
            ``tool.name`` when the handle has one.
    """

    def __init__(
        self,
        call_tool: ToolCaller,
        tool: Any,
        *,
        formatter: ResultFormatter = format_tool_result,
        tool_name: str | None = None,
    ) -> None:
        self._call_tool = call_tool
        self._tool = tool
        self._formatter = formatter
        self.tool_name = tool_name or getattr(tool, "name", None) or "writeToFile"

    async def dispatch(self, fields: DirectiveFields, origin: Any) -> Any:
        """Run the tool once and return a status chunk cloned from *origin*."""
        args = {
            "path": fields.path,
            "content": fields.content or "",
            "confirmation": False,
        }
        try:
            result = self._call_tool(self._tool, args)
            if inspect.isawaitable(result):
                result = await result
            text = self._formatter(self.tool_name, result)
            outcome = "ok"
        except Exception as e:
            logger.warning("%s failed for path=%s: %s", self.tool_name, fields.path, e)
            text = f"Error: {_error_message(e)}"
            outcome = "error"

        get_metrics_collector().record_block_dispatch(tool_name=self.tool_name, outcome=outcome)

        return with_content(origin, f"\n{text}\n")
