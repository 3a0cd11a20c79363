"""Test helpers shared across modules."""

from __future__ import annotations

from typing import Any


class ToolRecorder:
    """Stand-in for ``tools.registry.call_tool``.

    Returns a ``writeToFile``-style result (or raises ``error``) and keeps
    every ``(tool, args)`` it was called with.
    """

    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.calls: list[tuple[Any, dict[str, Any]]] = []
        self.result = result
        self.error = error

    async def __call__(self, tool: Any, args: dict[str, Any]) -> Any:
        self.calls.append((tool, args))
        if self.error is not None:
            raise self.error
        if self.result is not None:
            return self.result
        return {
            "status": "ok",
            "path": args["path"],
            "action": "created",
            "bytes": len(args["content"].encode("utf-8")),
        }

    @property
    def paths(self) -> list[str]:
        return [args["path"] for _, args in self.calls]


async def collect(detector, chunks) -> list[Any]:
    """Feed *chunks* through *detector* and return every emitted chunk."""
    out: list[Any] = []
    for chunk in chunks:
        async for emitted in detector.process(chunk):
            out.append(emitted)
    return out


def block(path: str | None = "a.md", content: str | None = "hi") -> str:
    """Build a ``<writeToFile>`` block; ``None`` omits the field."""
    body = ""
    if path is not None:
        body += f"<path>{path}</path>"
    if content is not None:
        body += f"<content>{content}</content>"
    return f"<writeToFile>{body}</writeToFile>"
