"""
MCP tool implementations.

Tools are organized by domain:
- fretboard - Notes, positions, intervals and scale shapes
- theory - Modes, voicings, CAGED forms and progressions
- compilation - MIDI export tools
"""

from chuk_mcp_fretboard.tools.compilation import register_compilation_tools
from chuk_mcp_fretboard.tools.fretboard import register_fretboard_tools
from chuk_mcp_fretboard.tools.theory import register_theory_tools

__all__ = [
    "register_compilation_tools",
    "register_fretboard_tools",
    "register_theory_tools",
]
