"""API request models."""

from __future__ import annotations

from pydantic import Field

from models.base import CamelModel


class ChatRequest(CamelModel):
    """Body of ``POST /api/chat/stream``."""

    message: str = Field(..., min_length=1)
    model: str | None = None  # PydanticAI model string; None = settings.default_model
    message_id: str | None = None
