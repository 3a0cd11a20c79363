"""Tests for services/action_dispatch.py - one tool call per block, never raises."""

from __future__ import annotations

import pytest

from models.chunk import Chunk, chunk_text
from models.directive import DirectiveFields
from services.action_dispatch import ActionDispatchBridge
from tests.helpers import ToolRecorder


class _Handle:
    name = "writeToFile"


@pytest.mark.asyncio
async def test_calls_tool_once_with_confirmation_disabled(recorder):
    handle = _Handle()
    bridge = ActionDispatchBridge(recorder, handle)
    await bridge.dispatch(DirectiveFields(path="a.md", content="hi"), Chunk(content="x"))

    assert recorder.calls == [(handle, {"path": "a.md", "content": "hi", "confirmation": False})]


def test_tool_name_from_handle():
    assert ActionDispatchBridge(ToolRecorder(), _Handle()).tool_name == "writeToFile"
    assert ActionDispatchBridge(ToolRecorder(), "h", tool_name="custom").tool_name == "custom"


@pytest.mark.asyncio
async def test_none_content_sent_as_empty_string(recorder):
    bridge = ActionDispatchBridge(recorder, _Handle())
    await bridge.dispatch(DirectiveFields(path="a.md", content=None), Chunk(content=""))
    assert recorder.calls[0][1]["content"] == ""


@pytest.mark.asyncio
async def test_success_framed_by_newlines():
    seen = []

    def formatter(name, result):
        seen.append((name, result))
        return "wrote it"

    bridge = ActionDispatchBridge(
        ToolRecorder(result={"status": "ok"}), _Handle(), formatter=formatter
    )
    status = await bridge.dispatch(DirectiveFields(path="a.md", content="x"), Chunk(content="orig"))

    assert chunk_text(status) == "\nwrote it\n"
    assert seen == [("writeToFile", {"status": "ok"})]


@pytest.mark.asyncio
async def test_failure_converted_to_error_text():
    bridge = ActionDispatchBridge(ToolRecorder(error=OSError("disk full")), _Handle())
    status = await bridge.dispatch(DirectiveFields(path="a.md", content="x"), Chunk(content=""))
    assert chunk_text(status) == "\nError: disk full\n"


@pytest.mark.asyncio
async def test_error_without_message_uses_type_name():
    bridge = ActionDispatchBridge(ToolRecorder(error=ValueError()), _Handle())
    status = await bridge.dispatch(DirectiveFields(path="a.md", content="x"), Chunk(content=""))
    assert chunk_text(status) == "\nError: ValueError\n"


@pytest.mark.asyncio
async def test_formatter_failure_converted_to_error_text(recorder):
    def broken(name, result):
        raise KeyError("bytes")

    bridge = ActionDispatchBridge(recorder, _Handle(), formatter=broken)
    status = await bridge.dispatch(DirectiveFields(path="a.md", content="x"), Chunk(content=""))
    assert chunk_text(status).startswith("\nError: ")
    assert len(recorder.calls) == 1


@pytest.mark.asyncio
async def test_sync_call_tool_supported():
    calls = []

    def call_tool(tool, args):
        calls.append(args)
        return {"status": "ok", "path": args["path"], "action": "updated", "bytes": 3}

    bridge = ActionDispatchBridge(call_tool, _Handle())
    status = await bridge.dispatch(DirectiveFields(path="n.md", content="abc"), Chunk(content=""))
    assert chunk_text(status) == "\nFile updated: n.md (3 bytes)\n"
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_outcomes_recorded(metrics_collector, recorder):
    ok = ActionDispatchBridge(recorder, _Handle())
    bad = ActionDispatchBridge(ToolRecorder(error=RuntimeError("x")), _Handle())
    fields = DirectiveFields(path="a.md", content="x")

    await ok.dispatch(fields, Chunk(content=""))
    await bad.dispatch(fields, Chunk(content=""))

    assert metrics_collector.snapshot()["blocks"]["writeToFile"] == {"ok": 1, "error": 1}
