"""Tool package - importing it populates the registry.

New code should import lookups from ``tools.registry``; this module only
guarantees that every built-in tool has been registered.
"""

from __future__ import annotations

import tools.file_tools  # noqa: F401  - registers tools via @register_tool
from tools.registry import (  # noqa: F401
    call_tool,
    get_enabled_tools,
    get_tool_descriptions,
    get_tool_metadata,
)
