"""Action agent runner - streams a turn and executes ``<writeToFile>`` blocks.

The runner is a two-state choice:

- **primary**: a PydanticAI agent with the available workspace tools.  Its
  text deltas are wrapped as :class:`Chunk` objects and piped through a
  :class:`StreamBlockDetector`, so directive blocks written inline by the
  model are executed as well as native tool calls.
- **fallback**: :class:`PlainChatRunner`, plain text with no tools, used
  when agent mode is disabled or the primary run fails before producing any
  output.

Usage::

    runner = ActionAgentRunner()
    async for chunk in runner.run_stream("Draft notes/plan.md for me"):
        print(chunk_text(chunk), end="")
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator

from pydantic_ai import Agent
from pydantic_ai.models import Model
from pydantic_ai.settings import ModelSettings

import tools  # noqa: F401  - registers built-in tools
from config.prompts.action_blocks import ACTION_AGENT_PROMPT, PLAIN_CHAT_PROMPT
from config.settings import Settings, get_settings
from models.chunk import Chunk
from services.action_dispatch import ActionDispatchBridge
from services.block_detector import StreamBlockDetector
from tools.registry import RegisteredTool, build_toolset, call_tool, get_enabled_tools

logger = logging.getLogger(__name__)


class PlainChatRunner:
    """Text-only runner: no tools, no directive handling."""

    def __init__(self, model: Model | str | None = None, *, settings: Settings | None = None):
        self._settings = settings or get_settings()
        self._model = model or self._settings.default_model

    async def run_stream(self, message: str) -> AsyncIterator[Chunk]:
        agent = Agent(
            model=self._model,
            instructions=PLAIN_CHAT_PROMPT,
            model_settings=ModelSettings(max_tokens=self._settings.max_tokens),
        )
        async with agent.run_stream(message) as result:
            async for delta in result.stream_text(delta=True, debounce_by=None):
                yield Chunk(content=delta)


class ActionAgentRunner:
    """Agent mode without a subscription gate; premium-only tools are filtered out."""

    def __init__(self, model: Model | str | None = None, *, settings: Settings | None = None):
        self._settings = settings or get_settings()
        self._model = model or self._settings.default_model

    def validate_access(self) -> bool:
        """Agent mode needs no subscription check, only the feature flag."""
        if not self._settings.agent_mode_enabled:
            logger.info("Agent mode disabled by settings, using plain chat")
            return False
        return True

    def create_fallback_runner(self) -> PlainChatRunner:
        return PlainChatRunner(self._model, settings=self._settings)

    def get_available_tools(self) -> list[RegisteredTool]:
        """Enabled tools minus premium-only ones (unless the user is premium)."""
        enabled = get_enabled_tools(self._settings.enabled_tool_ids)
        if self._settings.premium_user:
            return enabled
        return [rt for rt in enabled if not rt.premium_only]

    def _create_detector(self, available: list[RegisteredTool]) -> StreamBlockDetector | None:
        write_tool = next(
            (rt for rt in available if rt.name == self._settings.write_tool_name),
            None,
        )
        if write_tool is None:
            logger.info("%s not available, action blocks are passed through", self._settings.write_tool_name)
            return None
        return StreamBlockDetector(ActionDispatchBridge(call_tool, write_tool))

    async def _run_primary(self, message: str) -> AsyncIterator[Any]:
        available = self.get_available_tools()
        agent = Agent(
            model=self._model,
            instructions=ACTION_AGENT_PROMPT,
            toolsets=[build_toolset(available)],
            model_settings=ModelSettings(max_tokens=self._settings.max_tokens),
        )
        detector = self._create_detector(available)

        logger.info(
            "Action agent turn start (tools=%s)",
            [rt.name for rt in available],
        )
        async with agent.run_stream(message) as result:
            async for delta in result.stream_text(delta=True, debounce_by=None):
                chunk = Chunk(content=delta)
                if detector is None:
                    yield chunk
                    continue
                async for out in detector.process(chunk):
                    yield out

    async def run_stream(self, message: str) -> AsyncIterator[Any]:
        """Stream one turn, falling back to plain chat when the agent cannot run."""
        if not self.validate_access():
            async for chunk in self.create_fallback_runner().run_stream(message):
                yield chunk
            return

        emitted = False
        try:
            async for chunk in self._run_primary(message):
                emitted = True
                yield chunk
        except Exception:
            if emitted:
                raise
            logger.exception("Action agent failed before output, falling back to plain chat")
        else:
            return

        async for chunk in self.create_fallback_runner().run_stream(message):
            yield chunk
