"""Domain-specific exceptions for the action stream agent.

Tools raise these so the registry, the dispatch bridge and the API layer can
tell tool failures apart from programming errors and report them in-band.
"""

from __future__ import annotations


class ToolError(Exception):
    """Base class for tool execution errors."""

    def __init__(self, tool_name: str, message: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Tool '{tool_name}' failed: {message}")


class ToolNotFoundError(ToolError):
    """A tool name was looked up that is not in the registry."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(tool_name, "not registered")


class WorkspacePathError(ToolError):
    """A file tool was given a path outside the workspace directory.

    Absolute paths and paths that climb out via ``..`` are both rejected;
    the offending path is kept on ``self.path``.
    """

    def __init__(self, tool_name: str, path: str) -> None:
        self.path = path
        super().__init__(tool_name, f"path '{path}' is outside the workspace")
