"""Chat streaming endpoint - agent text plus action-block status lines as SSE."""

from __future__ import annotations

import logging
from typing import AsyncIterator

from fastapi import APIRouter
from starlette.responses import StreamingResponse

from agents.action_agent import ActionAgentRunner
from models.chunk import chunk_text
from models.errors import classify_stream_error
from models.request import ChatRequest
from services.datastream import STREAM_HEADERS, DataStreamEncoder

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])


def _create_runner(model: str | None) -> ActionAgentRunner:
    return ActionAgentRunner(model)


async def _event_generator(
    runner: ActionAgentRunner,
    message: str,
    message_id: str | None = None,
) -> AsyncIterator[str]:
    enc = DataStreamEncoder()
    text_id = "t-0"
    error_occurred = False

    yield enc.start(message_id=message_id)
    yield enc.start_step()
    yield enc.text_start(text_id)
    try:
        async for chunk in runner.run_stream(message):
            text = chunk_text(chunk)
            if text:
                yield enc.text_delta(text_id, text)
    except Exception as e:
        error_occurred = True
        logger.exception("Chat stream failed")
        yield enc.error(classify_stream_error(str(e)))

    yield enc.text_end(text_id)
    yield enc.finish_step()
    yield enc.finish("error" if error_occurred else "stop")


@router.post("/stream")
async def chat_stream(req: ChatRequest):
    """Stream one agent turn in the Data Stream Protocol.

    ``<writeToFile>`` blocks in the model output are executed as they
    complete; their status lines appear as ordinary ``text-delta`` events.
    """
    runner = _create_runner(req.model)
    return StreamingResponse(
        _event_generator(runner, req.message, req.message_id),
        media_type="text/event-stream",
        headers=STREAM_HEADERS,
    )
