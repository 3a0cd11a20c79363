"""Tool result formatter - renders raw tool outputs as short readable text.

Each tool can register a dedicated formatter; anything else goes through a
generic ``key: value`` rendering.  The output is what the user sees inline
in the chat stream after an action block runs, so keep it to a line or two.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


def format_tool_result(tool_name: str, result: Any) -> str:
    """Return a concise text rendering of *result* for *tool_name*."""
    fn = _FORMATTERS.get(tool_name)
    if fn is not None:
        try:
            return fn(result)
        except Exception:
            logger.debug("formatter for %s failed, using generic rendering", tool_name, exc_info=True)
    return _format_generic(tool_name, result)


def _format_generic(tool_name: str, result: Any) -> str:
    if isinstance(result, dict):
        if result.get("status") == "error":
            return f"Error: {result.get('reason') or result.get('error') or 'unknown error'}"
        lines = [f"[{tool_name}]"]
        for key, value in result.items():
            if isinstance(value, (dict, list)):
                value = json.dumps(value, ensure_ascii=False, default=str)
            lines.append(f"{key}: {value}")
        return "\n".join(lines)
    if result is None:
        return f"[{tool_name}] done"
    return str(result)


# ── Per-tool formatters ──────────────────────────────────────────────


def _format_write_to_file(r: dict) -> str:
    status = r.get("status")
    path = r.get("path", "")
    if status == "error":
        return f"Error: {r.get('reason', 'write failed')}"
    if status == "pending_confirmation":
        return f"Awaiting confirmation to write {path}"
    verb = "updated" if r.get("action") == "updated" else "created"
    return f"File {verb}: {path} ({r.get('bytes', 0)} bytes)"


def _format_read_file(r: dict) -> str:
    if r.get("status") == "error":
        return f"Error: {r.get('reason', 'read failed')}"
    return f"Read {r['path']} ({len(r.get('content', ''))} chars)"


def _format_list_directory(r: dict) -> str:
    if r.get("status") == "error":
        return f"Error: {r.get('reason', 'list failed')}"
    entries = r.get("entries") or []
    if not entries:
        return f"{r.get('path', '.')} is empty"
    shown = ", ".join(entries[:10])
    more = f" (+{len(entries) - 10} more)" if len(entries) > 10 else ""
    return f"{r.get('path', '.')}: {shown}{more}"


def _format_search_workspace(r: dict) -> str:
    if r.get("status") == "error":
        return f"Error: {r.get('reason', 'search failed')}"
    total = r.get("total", len(r.get("matches") or []))
    files = {m["path"] for m in r.get("matches") or []}
    return f"{total} matches for '{r.get('query', '')}' in {len(files)} files"


_FORMATTERS: dict[str, Callable[[dict], str]] = {
    "writeToFile": _format_write_to_file,
    "readFile": _format_read_file,
    "listDirectory": _format_list_directory,
    "searchWorkspace": _format_search_workspace,
}
