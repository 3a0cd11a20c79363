"""Data Stream Protocol encoder - Vercel AI SDK UI Message Stream v1.

The chat endpoint streams one text part per turn.  Raw model text and the
status lines produced by action blocks both travel as ``text-delta`` events,
so the frontend renders them in arrival order without special handling.

Each method returns one SSE line: ``"data: {json}\\n\\n"``

Required response header: ``x-vercel-ai-ui-message-stream: v1``
Termination marker: ``data: [DONE]\\n\\n``
"""

from __future__ import annotations

import json
import uuid
from typing import Any

STREAM_HEADERS = {
    "x-vercel-ai-ui-message-stream": "v1",
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
}


class DataStreamEncoder:
    """Encode chat stream events as SSE strings."""

    @staticmethod
    def _sse(payload: dict[str, Any]) -> str:
        return f"data: {json.dumps(payload, ensure_ascii=False, default=str)}\n\n"

    @staticmethod
    def _id() -> str:
        return uuid.uuid4().hex[:8]

    # ── Message Control ──────────────────────────────────────────

    def start(self, message_id: str | None = None) -> str:
        return self._sse({"type": "start", "messageId": message_id or self._id()})

    def finish(self, finish_reason: str | None = None) -> str:
        payload: dict[str, Any] = {"type": "finish"}
        if finish_reason:
            payload["finishReason"] = finish_reason
        return self._sse(payload) + "data: [DONE]\n\n"

    def start_step(self) -> str:
        return self._sse({"type": "start-step"})

    def finish_step(self) -> str:
        return self._sse({"type": "finish-step"})

    # ── Text ─────────────────────────────────────────────────────

    def text_start(self, text_id: str) -> str:
        return self._sse({"type": "text-start", "id": text_id})

    def text_delta(self, text_id: str, delta: str) -> str:
        return self._sse({"type": "text-delta", "id": text_id, "delta": delta})

    def text_end(self, text_id: str) -> str:
        return self._sse({"type": "text-end", "id": text_id})

    # ── Error ────────────────────────────────────────────────────

    def error(self, text: str) -> str:
        return self._sse({"type": "error", "errorText": text})
