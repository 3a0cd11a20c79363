"""Directive fields and the dispatcher contract the block detector hands them to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class DirectiveFields:
    """Fields extracted from one ``<writeToFile>`` block.

    ``path`` is required for dispatch; ``content`` ``None`` means the tag was
    absent and is written as an empty string.
    """

    path: str | None
    content: str | None


class BlockDispatcher(Protocol):
    """Runs the side effect for one block and returns a status chunk."""

    tool_name: str

    async def dispatch(self, fields: DirectiveFields, origin: Any) -> Any: ...
