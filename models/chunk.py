"""Streamed chunk model - plain-text or segmented payloads.

LLM providers deliver chunk payloads in two shapes:

- a plain string (``"Hello"``)
- an ordered list of typed segments, e.g. thinking models that interleave
  ``{"type": "thinking", ...}`` with ``{"type": "text", "text": "Hello"}``

Only ``text`` segments carry visible text.  :func:`chunk_text` is the single
place that flattens either shape into a string; call sites never branch on
the payload type themselves.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

TEXT_SEGMENT = "text"


class ContentSegment(BaseModel):
    """One typed segment of a structured payload."""

    model_config = ConfigDict(extra="allow", frozen=True)

    type: str
    text: str | None = None


class Chunk(BaseModel):
    """One delivered unit of a streamed response.

    Provider-specific fields (ids, response metadata, ...) are kept as extras
    so a cloned status chunk carries the same envelope as its origin.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    content: str | list[ContentSegment] | None = None


def _field(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def content_text(content: Any) -> str:
    """Flatten a payload (string or segment list) into plain text."""
    if isinstance(content, str):
        return content
    if isinstance(content, (list, tuple)):
        parts: list[str] = []
        for segment in content:
            if _field(segment, "type") != TEXT_SEGMENT:
                continue
            text = _field(segment, "text")
            if isinstance(text, str):
                parts.append(text)
        return "".join(parts)
    return ""


def chunk_text(chunk: Any) -> str:
    """Return the plain text a chunk contributes, ``""`` for unknown shapes."""
    if chunk is None:
        return ""
    return content_text(_field(chunk, "content"))


def with_content(chunk: Any, text: str) -> Any:
    """Clone *chunk* with only its payload replaced by *text*."""
    if isinstance(chunk, BaseModel):
        return chunk.model_copy(update={"content": text})
    if isinstance(chunk, Mapping):
        return {**chunk, "content": text}
    return Chunk(content=text)
