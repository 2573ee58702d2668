"""
Rhythm primitives - Beat and duration letters.

Durations are plain floats where a whole note is 1.0. They are written
into SuperCollider patterns as-is.
"""

from __future__ import annotations

import logging
from enum import Enum

from chuk_mcp_sclang.core.errors import ParseError

logger = logging.getLogger(__name__)


class Beat(float, Enum):
    """Note durations as fractions of a whole note."""

    WHOLE = 1.0
    HALF = 0.5
    QUARTER = 0.25
    EIGHTH = 0.125
    SIXTEENTH = 0.0625

    @classmethod
    def from_letter(cls, letter: str) -> Beat:
        """Get the Beat for a duration letter (W, H, Q, E, S)."""
        try:
            return _LETTERS[letter]
        except KeyError:
            raise ParseError(f"Unknown duration letter: {letter!r}") from None


_LETTERS: dict[str, Beat] = {
    "W": Beat.WHOLE,
    "H": Beat.HALF,
    "Q": Beat.QUARTER,
    "E": Beat.EIGHTH,
    "S": Beat.SIXTEENTH,
}


def rhythm(*letters: str) -> list[float]:
    """
    Convert duration letters to durations.

    rhythm("W", "Q", "W", "H") == [1.0, 0.25, 1.0, 0.5]

    Unrecognized letters become 0.0 and log a warning.
    """
    durations: list[float] = []
    for letter in letters:
        beat = _LETTERS.get(letter)
        if beat is None:
            logger.warning("Unknown duration letter %r, using 0.0", letter)
            durations.append(0.0)
        else:
            durations.append(beat.value)
    return durations
