"""
MCP tool implementations.

Tools are organized by domain:
- arrangement - Arrangement lifecycle
- clips - Clip and track editing
- theory - Notes, scales and chord voicings
- compilation - SuperCollider and MIDI export, validation
"""

from chuk_mcp_sclang.tools.arrangement import register_arrangement_tools
from chuk_mcp_sclang.tools.clips import register_clip_tools
from chuk_mcp_sclang.tools.compilation import register_compilation_tools
from chuk_mcp_sclang.tools.theory import register_theory_tools

__all__ = [
    "register_arrangement_tools",
    "register_clip_tools",
    "register_compilation_tools",
    "register_theory_tools",
]
