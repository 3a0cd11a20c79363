"""Tool listing endpoint."""

from fastapi import APIRouter

from agents.action_agent import ActionAgentRunner
from tools.registry import get_tool_descriptions

router = APIRouter(prefix="/api", tags=["tools"])


@router.get("/tools")
async def list_tools():
    """List the tools the agent may use for the current settings."""
    runner = ActionAgentRunner()
    return {"tools": get_tool_descriptions(runner.get_available_tools())}
