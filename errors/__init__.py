"""Custom exception hierarchy for the action stream agent."""

from errors.exceptions import ToolError, ToolNotFoundError, WorkspacePathError

__all__ = ["ToolError", "ToolNotFoundError", "WorkspacePathError"]
