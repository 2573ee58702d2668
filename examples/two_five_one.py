#!/usr/bin/env python3
"""
Example: Write a ii-V-I with the notation helpers.

Builds the arrangement in Python instead of YAML: chords are voiced by
the chord engine, durations come from rhythm letters, and the result
is printed as a SuperCollider program.

Usage:
    python examples/two_five_one.py > two_five_one.scd
"""

from chuk_mcp_sclang.compiler import lower_arrangement
from chuk_mcp_sclang.core import Scale, ScaleType
from chuk_mcp_sclang.models import Arrangement
from chuk_mcp_sclang.notation import chord, empty_clip, instr_clip, n, play, rhythm, track


def build() -> Arrangement:
    """ii-V-I in C with a D dorian line over it."""
    prog = instr_clip(
        "prog",
        "sine",
        play(chord("D4", "Min7"), chord("G3", "Dom7"), chord("C4Maj7")),
        rhythm("W", "W", "W"),
    )

    dorian = Scale(n("D5"), ScaleType.DORIAN)
    line = instr_clip(
        "line",
        "sine",
        play(*(dorian.degree(d) for d in (0, 2, 4, 6)), None, dorian.degree(7)),
        rhythm("Q", "Q", "Q", "Q", "H", "H"),
    )

    return Arrangement(
        name="two-five-one",
        clips=[prog, line, empty_clip("gap", 0.5)],
        tracks=[
            track("progTrack", "prog", "gap", "prog"),
            track("lineTrack", "line", "gap"),
        ],
    )


if __name__ == "__main__":
    print(lower_arrangement(build()))
