"""Tests for tools/file_tools.py - workspace-scoped file tools."""

from __future__ import annotations

import pytest

from errors.exceptions import WorkspacePathError
from tools.file_tools import list_directory, read_file, search_workspace, write_to_file


class TestWriteToFile:
    @pytest.mark.asyncio
    async def test_creates_file_and_parents(self, workspace):
        result = await write_to_file("notes/a.md", "héllo", confirmation=False)
        assert result == {"status": "ok", "path": "notes/a.md", "action": "created", "bytes": 6}
        assert (workspace / "notes" / "a.md").read_text(encoding="utf-8") == "héllo"

    @pytest.mark.asyncio
    async def test_overwrite_reports_updated(self, workspace):
        (workspace / "a.md").write_text("old")
        result = await write_to_file("a.md", "new", confirmation=False)
        assert result["action"] == "updated"
        assert (workspace / "a.md").read_text() == "new"

    @pytest.mark.asyncio
    async def test_confirmation_only_proposes(self, workspace):
        result = await write_to_file("a.md", "x")
        assert result["status"] == "pending_confirmation"
        assert not (workspace / "a.md").exists()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["../escape.md", "a/../../escape.md", "/etc/passwd", ""])
    async def test_rejects_paths_outside_workspace(self, workspace, path):
        with pytest.raises(WorkspacePathError):
            await write_to_file(path, "x", confirmation=False)
        assert not (workspace.parent / "escape.md").exists()


class TestReadAndList:
    @pytest.mark.asyncio
    async def test_read_file(self, workspace):
        (workspace / "a.md").write_text("body", encoding="utf-8")
        assert await read_file("a.md") == {"status": "ok", "path": "a.md", "content": "body"}

    @pytest.mark.asyncio
    async def test_read_missing(self, workspace):
        result = await read_file("missing.md")
        assert result["status"] == "error"

    @pytest.mark.asyncio
    async def test_list_directory(self, workspace):
        (workspace / "docs").mkdir()
        (workspace / "b.md").write_text("")
        (workspace / "a.md").write_text("")
        result = await list_directory()
        assert result["entries"] == ["a.md", "b.md", "docs/"]

    @pytest.mark.asyncio
    async def test_list_missing_directory(self, workspace):
        result = await list_directory("nope")
        assert result["status"] == "error"


class TestSearchWorkspace:
    @pytest.mark.asyncio
    async def test_finds_matching_lines(self, workspace):
        (workspace / "a.md").write_text("first\nTODO: ship\n", encoding="utf-8")
        (workspace / "sub").mkdir()
        (workspace / "sub" / "b.md").write_text("nothing\nanother todo\n", encoding="utf-8")

        result = await search_workspace("todo")
        assert result["total"] == 2
        assert result["matches"][0] == {"path": "a.md", "line": 2, "text": "TODO: ship"}
        assert result["matches"][1]["path"] == "sub/b.md"

    @pytest.mark.asyncio
    async def test_empty_query(self, workspace):
        result = await search_workspace("  ")
        assert result["status"] == "error"
