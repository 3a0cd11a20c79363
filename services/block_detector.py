"""Incremental ``<writeToFile>`` block detection over a chunk stream.

Every incoming chunk is forwarded untouched first; its text is then appended
to a buffer that is scanned for complete directive blocks::

    ```xml
    <writeToFile>
      <path>notes/todo.md</path>
      <content>...</content>
    </writeToFile>
    ```

Tags may arrive split across any number of chunks.  The optional code fence
some models wrap around the block lies outside the tag pair, so fenced and
bare blocks match identically; a single trailing fence is consumed together
with the block so it does not linger in the buffer.

Scanning is a plain two-pointer search (opening tag, then the nearest closing
tag) rather than a regex over the whole buffer.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, AsyncIterable, AsyncIterator

from models.chunk import chunk_text
from models.directive import BlockDispatcher, DirectiveFields

logger = logging.getLogger(__name__)

OPEN_TAG = "<writeToFile>"
CLOSE_TAG = "</writeToFile>"
PATH_TAGS = ("<path>", "</path>")
CONTENT_TAGS = ("<content>", "</content>")

_TRAILING_FENCE_RE = re.compile(r"\s*```")


@dataclass(frozen=True)
class BlockMatch:
    """A complete block located in the buffer."""

    block: str  # opening tag through closing tag
    end: int  # buffer offset just past the block and any trailing fence


def _between(text: str, open_tag: str, close_tag: str, start: int = 0) -> tuple[str, int] | None:
    """Return ``(inner, end)`` for the first *open_tag*…*close_tag* span at or after *start*.

    ``end`` is the offset just past *close_tag*.  The nearest closing tag wins.
    """
    head = text.find(open_tag, start)
    if head < 0:
        return None
    inner_start = head + len(open_tag)
    tail = text.find(close_tag, inner_start)
    if tail < 0:
        return None
    return text[inner_start:tail], tail + len(close_tag)


def find_complete_block(buffer: str) -> BlockMatch | None:
    """Locate the first complete block in *buffer*, or ``None`` if none is closed yet."""
    head = buffer.find(OPEN_TAG)
    if head < 0:
        return None
    tail = buffer.find(CLOSE_TAG, head + len(OPEN_TAG))
    if tail < 0:
        return None
    end = tail + len(CLOSE_TAG)
    block = buffer[head:end]

    fence = _TRAILING_FENCE_RE.match(buffer, end)
    if fence:
        end = fence.end()
    return BlockMatch(block=block, end=end)


def extract_fields(block: str) -> DirectiveFields:
    """Extract ``path`` then ``content`` from a block; either may be ``None``."""
    path_match = _between(block, *PATH_TAGS)
    if path_match is None:
        return DirectiveFields(path=None, content=None)
    path, path_end = path_match
    path = path.strip() or None

    content_match = _between(block, *CONTENT_TAGS, start=path_end)
    content = content_match[0].strip() if content_match else None
    return DirectiveFields(path=path, content=content)


class StreamBlockDetector:
    """Stateful pass-through transform that dispatches each complete block once.

    One instance serves exactly one stream; chunks must be fed in order and
    each ``process()`` generator drained before the next chunk is fed.

    Usage::

        detector = StreamBlockDetector(bridge)
        async for chunk in upstream:
            async for out in detector.process(chunk):
                yield out
    """

    def __init__(self, bridge: BlockDispatcher) -> None:
        self._bridge = bridge
        self._buffer = ""

    @property
    def buffer(self) -> str:
        """Text received since the end of the last consumed block."""
        return self._buffer

    async def process(self, chunk: Any) -> AsyncIterator[Any]:
        """Yield *chunk* itself, then one status chunk per block it completes."""
        text = chunk_text(chunk)

        yield chunk

        if text:
            self._buffer += text

        match = find_complete_block(self._buffer)
        while match is not None:
            fields = extract_fields(match.block)
            logger.info(
                "Detected %s block (path=%s, content_length=%d)",
                self._bridge.tool_name,
                fields.path,
                len(fields.content or ""),
            )

            if not fields.path:
                logger.warning("No path found in %s block, skipping", self._bridge.tool_name)
            else:
                if not fields.content:
                    logger.warning(
                        "No content found in %s block for path=%s",
                        self._bridge.tool_name,
                        fields.path,
                    )
                yield await self._bridge.dispatch(fields, chunk)

            self._buffer = self._buffer[match.end:]
            match = find_complete_block(self._buffer)

    async def stream(self, chunks: AsyncIterable[Any]) -> AsyncIterator[Any]:
        """Pipe a whole chunk stream through :meth:`process`."""
        async for chunk in chunks:
            async for out in self.process(chunk):
                yield out
