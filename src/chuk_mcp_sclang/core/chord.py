"""
Chord primitives - ChordType and Chord.

Chord formulas are written as numerals against the root's major scale,
whatever the chord quality: a minor seventh is 1 b3 5 b7. One formula
table and one resolution algorithm cover every chord type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import ParseError, RangeError
from .pitch import Note, play_notes
from .scale import Scale, ScaleDegreeNumeral, ScaleType

_N = ScaleDegreeNumeral.natural
_b = ScaleDegreeNumeral.flat
_s = ScaleDegreeNumeral.sharp


class ChordType(str, Enum):
    """Chord qualities. Values are the names used in chord tokens ('C4Maj7')."""

    MAJ7 = "Maj7"
    MIN7 = "Min7"
    DOM7 = "Dom7"
    DIM = "Dim"
    AUG = "Aug"
    MAJ6 = "Maj6"

    @property
    def formula(self) -> tuple[ScaleDegreeNumeral, ...]:
        return CHORD_FORMULAS[self]

    @classmethod
    def parse(cls, name: str) -> ChordType:
        """Parse a chord type name like 'Maj7' (case-insensitive)."""
        for member in cls:
            if member.value.lower() == name.strip().lower():
                return member
        raise ParseError(f"Unknown chord type: {name!r}")


CHORD_FORMULAS: dict[ChordType, tuple[ScaleDegreeNumeral, ...]] = {
    ChordType.MAJ7: (_N(1), _N(3), _N(5), _N(7)),
    ChordType.MIN7: (_N(1), _b(3), _N(5), _b(7)),
    ChordType.DOM7: (_N(1), _N(3), _N(5), _b(7)),
    ChordType.DIM: (_N(1), _b(3), _b(5)),
    ChordType.AUG: (_N(1), _N(3), _s(5)),
    ChordType.MAJ6: (_N(1), _N(3), _N(5), _N(6)),
}

if set(CHORD_FORMULAS) != set(ChordType):
    raise RuntimeError("Every ChordType needs an entry in CHORD_FORMULAS")


@dataclass(frozen=True)
class Chord:
    """
    A chord quality on a concrete root note.

    The reference scale is the major scale on the root. It only
    translates numerals into pitches; it is not the chord's harmonic
    context.
    """

    root: Note
    chord_type: ChordType

    @property
    def reference_scale(self) -> Scale:
        return Scale(self.root, ScaleType.MAJOR)

    @property
    def formula(self) -> tuple[ScaleDegreeNumeral, ...]:
        return self.chord_type.formula

    def voicing(self, inversion: int = 0) -> list[Note]:
        """
        Get an ascending voicing starting on the formula position `inversion`.

        The formula is rotated left cyclically (1 3 5 7 -> 3 5 7 1 for
        inversion 1) and resolved in order, each tone at or above the
        previous one.

        Raises:
            RangeError: if inversion is not in 0..len(formula)-1
        """
        formula = self.formula
        if not 0 <= inversion < len(formula):
            raise RangeError(
                f"Inversion must be 0-{len(formula) - 1} for {self.chord_type.value}, "
                f"got {inversion}"
            )
        rotated = formula[inversion:] + formula[:inversion]
        return self.reference_scale.voicing(rotated)

    def play(self) -> list[int]:
        """MIDI values of the root-position voicing."""
        return play_notes(self.voicing(0))

    @classmethod
    def parse(cls, token: str) -> Chord:
        """
        Parse a chord token: a note token followed by a chord type, e.g. 'D4Min7'.

        Raises:
            ParseError: if the note part or chord type is malformed
        """
        token = token.strip()
        # 'Ds4Min7' / 'Eb3Dom7' have a 3-char note token; 'C4Maj7' a 2-char one
        split = 3 if len(token) > 2 and token[1] in "sb" and token[2:3].isdigit() else 2
        note_token, type_name = token[:split], token[split:]
        if not type_name:
            raise ParseError(f"Invalid chord token {token!r}: missing chord type")
        return cls(Note.parse(note_token), ChordType.parse(type_name))

    def __str__(self) -> str:
        return f"{self.root}{self.chord_type.value}"
