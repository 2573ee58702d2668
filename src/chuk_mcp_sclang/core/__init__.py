"""
Core music primitives.

These are the pure value types everything else composes on:
- PitchClass: The 12 chromatic pitch classes (flat spelling)
- Note: A pitch class in an octave, one-to-one with MIDI numbers
- ScaleType: Half-step formula defining a scale
- ScaleDegreeNumeral: Major-scale-relative tone (1, b3, #5)
- Scale: Base note + scale type, resolves degrees and voicings
- ChordType: Numeral formula defining a chord quality
- Chord: Root note + chord type, builds voicings and inversions
- Beat: Duration letters (W, H, Q, E, S)
"""

from chuk_mcp_sclang.core.chord import CHORD_FORMULAS, Chord, ChordType
from chuk_mcp_sclang.core.errors import (
    InvariantViolation,
    ParseError,
    RangeError,
    SclangError,
    UnimplementedLowering,
)
from chuk_mcp_sclang.core.pitch import MIDI_NUM, NUM_TONES, Note, PitchClass, play_notes
from chuk_mcp_sclang.core.rhythm import Beat, rhythm
from chuk_mcp_sclang.core.scale import (
    SCALE_FORMULAS,
    Accidental,
    Scale,
    ScaleDegreeNumeral,
    ScaleType,
)

__all__ = [
    # Pitch
    "MIDI_NUM",
    "NUM_TONES",
    "PitchClass",
    "Note",
    "play_notes",
    # Scale
    "SCALE_FORMULAS",
    "Accidental",
    "ScaleDegreeNumeral",
    "ScaleType",
    "Scale",
    # Chord
    "CHORD_FORMULAS",
    "ChordType",
    "Chord",
    # Rhythm
    "Beat",
    "rhythm",
    # Errors
    "SclangError",
    "ParseError",
    "RangeError",
    "InvariantViolation",
    "UnimplementedLowering",
]
