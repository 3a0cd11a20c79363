"""Workspace file tools - the side effects action blocks and agents can trigger.

All paths are relative to ``settings.workspace_dir``.  Absolute paths and
paths that resolve outside the workspace raise :class:`WorkspacePathError`.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from config.settings import get_settings
from errors.exceptions import WorkspacePathError
from tools.registry import TOOLSET_FILE, TOOLSET_SEARCH, register_tool

logger = logging.getLogger(__name__)

MAX_SEARCH_MATCHES = 50


def _workspace_root() -> Path:
    return Path(get_settings().workspace_dir).resolve()


def _resolve(tool_name: str, path: str) -> Path:
    """Resolve *path* inside the workspace or raise ``WorkspacePathError``."""
    if not path or Path(path).is_absolute():
        raise WorkspacePathError(tool_name, path)
    root = _workspace_root()
    target = (root / path).resolve()
    if target != root and root not in target.parents:
        raise WorkspacePathError(tool_name, path)
    return target


def _write(target: Path, content: str) -> int:
    target.parent.mkdir(parents=True, exist_ok=True)
    data = content.encode("utf-8")
    target.write_bytes(data)
    return len(data)


@register_tool(toolset=TOOLSET_FILE, name="writeToFile")
async def write_to_file(path: str, content: str, confirmation: bool = True) -> dict[str, Any]:
    """Write text content to a file in the workspace, creating folders as needed.

    Args:
        path: Workspace-relative file path.
        content: Full file content.
        confirmation: When True the write is only proposed, not performed.
    """
    target = _resolve("writeToFile", path)
    if confirmation:
        return {"status": "pending_confirmation", "path": path, "bytes": len(content.encode("utf-8"))}

    existed = target.exists()
    size = await asyncio.to_thread(_write, target, content)
    logger.info("writeToFile %s (%d bytes, existed=%s)", path, size, existed)
    return {
        "status": "ok",
        "path": path,
        "action": "updated" if existed else "created",
        "bytes": size,
    }


@register_tool(toolset=TOOLSET_FILE, name="readFile")
async def read_file(path: str) -> dict[str, Any]:
    """Read a text file from the workspace."""
    target = _resolve("readFile", path)
    if not target.is_file():
        return {"status": "error", "reason": f"file not found: {path}"}
    content = await asyncio.to_thread(target.read_text, encoding="utf-8")
    return {"status": "ok", "path": path, "content": content}


@register_tool(toolset=TOOLSET_FILE, name="listDirectory")
async def list_directory(path: str = ".") -> dict[str, Any]:
    """List entries of a workspace directory (folders end with ``/``)."""
    root = _workspace_root()
    target = root if path in ("", ".") else _resolve("listDirectory", path)
    if not target.is_dir():
        return {"status": "error", "reason": f"directory not found: {path}"}
    entries = sorted(
        f"{p.name}/" if p.is_dir() else p.name
        for p in target.iterdir()
    )
    return {"status": "ok", "path": path, "entries": entries}


@register_tool(toolset=TOOLSET_SEARCH, name="searchWorkspace", premium_only=True)
async def search_workspace(query: str) -> dict[str, Any]:
    """Find lines containing a query string across workspace text files."""
    root = _workspace_root()
    if not query.strip():
        return {"status": "error", "reason": "empty query"}

    def _scan() -> list[dict[str, Any]]:
        matches: list[dict[str, Any]] = []
        if not root.is_dir():
            return matches
        needle = query.lower()
        for file in sorted(root.rglob("*")):
            if not file.is_file():
                continue
            try:
                lines = file.read_text(encoding="utf-8").splitlines()
            except (UnicodeDecodeError, OSError):
                continue
            for lineno, line in enumerate(lines, start=1):
                if needle in line.lower():
                    matches.append({
                        "path": file.relative_to(root).as_posix(),
                        "line": lineno,
                        "text": line.strip(),
                    })
                    if len(matches) >= MAX_SEARCH_MATCHES:
                        return matches
        return matches

    matches = await asyncio.to_thread(_scan)
    return {"status": "ok", "query": query, "matches": matches, "total": len(matches)}
