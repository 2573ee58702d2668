"""
Pydantic models for the composition.

This module provides:
- Arrangement: Complete composition model
- Track: Playback lane referencing clips by name
- InstrumentClip / FileClip / EmptyClip: Named sound material
- Clip: Discriminated union of the clip kinds
"""

from chuk_mcp_sclang.models.arrangement import Arrangement
from chuk_mcp_sclang.models.clip import Clip, EmptyClip, FileClip, InstrumentClip
from chuk_mcp_sclang.models.track import Track

__all__ = [
    "Arrangement",
    "Clip",
    "EmptyClip",
    "FileClip",
    "InstrumentClip",
    "Track",
]
