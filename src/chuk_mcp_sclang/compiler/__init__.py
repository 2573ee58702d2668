"""
Compilation pipeline - lowers arrangements to output formats.

    Arrangement (in-memory) → SuperCollider program (.scd)
    Arrangement (in-memory) → MIDI preview (.mid)
"""

from chuk_mcp_sclang.compiler.midi import (
    TICKS_PER_BEAT,
    MidiEvent,
    arrangement_to_midi,
    clip_to_events,
    events_to_track,
)
from chuk_mcp_sclang.compiler.supercollider import (
    CompileResult,
    compile_arrangement,
    lower_arrangement,
    lower_clip,
    lower_track,
)

__all__ = [
    # SuperCollider
    "CompileResult",
    "compile_arrangement",
    "lower_arrangement",
    "lower_clip",
    "lower_track",
    # MIDI
    "TICKS_PER_BEAT",
    "MidiEvent",
    "arrangement_to_midi",
    "clip_to_events",
    "events_to_track",
]
