"""
Scale primitives - ScaleType, ScaleDegreeNumeral, Scale.

Scales are cumulative half-step formulas applied to a base note.
Numerals ("Arabic numerals" in jazz theory) name tones relative to a
major scale - 1, b3, #5 - so chord and scale formulas can be written
independently of absolute pitch.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, IntEnum

from .errors import ParseError
from .pitch import NUM_TONES, Note


class ScaleType(str, Enum):
    """Scale qualities. Each maps to a fixed formula in SCALE_FORMULAS."""

    MAJOR = "major"
    MIXOLYDIAN = "mixolydian"
    DORIAN = "dorian"
    NATURAL_MINOR = "natural_minor"
    HARMONIC_MINOR = "harmonic_minor"
    MELODIC_MINOR = "melodic_minor"
    PHRYGIAN = "phrygian"
    LYDIAN = "lydian"
    LOCRIAN = "locrian"
    MAJOR_PENTATONIC = "major_pentatonic"
    MINOR_PENTATONIC = "minor_pentatonic"
    BLUES = "blues"

    @property
    def formula(self) -> tuple[int, ...]:
        """Half-step offsets from the root, ending right before the octave."""
        return SCALE_FORMULAS[self]


# Half-step offsets from the root note; the octave itself is not included.
SCALE_FORMULAS: dict[ScaleType, tuple[int, ...]] = {
    ScaleType.MAJOR: (0, 2, 4, 5, 7, 9, 11),
    ScaleType.MIXOLYDIAN: (0, 2, 4, 5, 7, 9, 10),
    ScaleType.DORIAN: (0, 2, 3, 5, 7, 9, 10),
    ScaleType.NATURAL_MINOR: (0, 2, 3, 5, 7, 8, 10),
    ScaleType.HARMONIC_MINOR: (0, 2, 3, 5, 7, 8, 11),
    ScaleType.MELODIC_MINOR: (0, 2, 3, 5, 7, 9, 11),
    ScaleType.PHRYGIAN: (0, 1, 3, 5, 7, 8, 10),
    ScaleType.LYDIAN: (0, 2, 4, 6, 7, 9, 11),
    ScaleType.LOCRIAN: (0, 1, 3, 5, 6, 8, 10),
    ScaleType.MAJOR_PENTATONIC: (0, 2, 4, 7, 9),
    ScaleType.MINOR_PENTATONIC: (0, 3, 5, 7, 10),
    ScaleType.BLUES: (0, 3, 5, 6, 7, 10),
}


def _check_formulas() -> None:
    missing = set(ScaleType) - set(SCALE_FORMULAS)
    if missing:
        raise RuntimeError(f"Scale types without a formula: {sorted(m.value for m in missing)}")
    for scale_type, formula in SCALE_FORMULAS.items():
        ascending = all(a < b for a, b in zip(formula, formula[1:], strict=False))
        if formula[0] != 0 or not ascending or formula[-1] >= NUM_TONES:
            raise RuntimeError(f"Malformed formula for {scale_type.value}: {formula}")


_check_formulas()


class Accidental(IntEnum):
    """Alteration of a numeral in half steps."""

    FLAT = -1
    NATURAL = 0
    SHARP = 1


@dataclass(frozen=True)
class ScaleDegreeNumeral:
    """
    A 1-based tone position relative to a major scale, optionally altered.

    Examples:
        ScaleDegreeNumeral.natural(1) = root
        ScaleDegreeNumeral.flat(3) = minor third
        ScaleDegreeNumeral.sharp(5) = augmented fifth
    """

    degree: int
    accidental: Accidental = Accidental.NATURAL

    def __post_init__(self) -> None:
        if self.degree < 1:
            raise ValueError(f"Numeral degree must be >= 1, got {self.degree}")
        object.__setattr__(self, "accidental", Accidental(self.accidental))

    @classmethod
    def natural(cls, degree: int) -> ScaleDegreeNumeral:
        return cls(degree, Accidental.NATURAL)

    @classmethod
    def sharp(cls, degree: int) -> ScaleDegreeNumeral:
        return cls(degree, Accidental.SHARP)

    @classmethod
    def flat(cls, degree: int) -> ScaleDegreeNumeral:
        return cls(degree, Accidental.FLAT)

    @classmethod
    def parse(cls, symbol: str) -> ScaleDegreeNumeral:
        """Parse a numeral like '3', 'b7' or '#5'."""
        symbol = symbol.strip()
        accidental = Accidental.NATURAL
        if symbol[:1] == "b":
            accidental, symbol = Accidental.FLAT, symbol[1:]
        elif symbol[:1] == "#":
            accidental, symbol = Accidental.SHARP, symbol[1:]
        if not symbol.isdigit() or int(symbol) < 1:
            raise ParseError(f"Invalid numeral: {symbol!r}")
        return cls(int(symbol), accidental)

    def __str__(self) -> str:
        prefix = {Accidental.FLAT: "b", Accidental.NATURAL: "", Accidental.SHARP: "#"}
        return f"{prefix[self.accidental]}{self.degree}"


@dataclass(frozen=True)
class Scale:
    """
    A scale type applied to a base note.

    Nothing is stored beyond the base note and type; every pitch is
    computed from the formula table on demand.
    """

    base: Note
    scale_type: ScaleType

    @property
    def formula(self) -> tuple[int, ...]:
        return self.scale_type.formula

    def degree(self, degree: int) -> Note:
        """
        Return the note `degree` scale steps away from the base note.

        degree 0 is the base note; negative degrees walk down through the
        scale, wrapping across octave boundaries.

        Example (C4 major):
            degree(2) = E4, degree(7) = C5, degree(-1) = B3
        """
        octaves, index = divmod(degree, len(self.formula))
        return self.base.transpose(octaves * NUM_TONES + self.formula[index])

    def resolve_numeral(self, numeral: ScaleDegreeNumeral, preceding: Note) -> Note:
        """
        Return the lowest note at or above `preceding` with the numeral's pitch class.

        The numeral is resolved against this scale (1-based), then moved
        into the octave of `preceding`, and bumped up an octave if that
        lands below it.
        """
        raw = self.degree(numeral.degree - 1).transpose(int(numeral.accidental))
        result = raw.with_octave(preceding.octave)
        if result < preceding:
            result = result.with_octave(preceding.octave + 1)
        return result

    def voicing(self, numerals: Sequence[ScaleDegreeNumeral]) -> list[Note]:
        """
        Resolve a sequence of numerals into ascending notes.

        The first numeral is resolved at or above the base note; each
        following numeral is resolved at or above the previous result.
        """
        notes: list[Note] = []
        preceding = self.base
        for numeral in numerals:
            preceding = self.resolve_numeral(numeral, preceding)
            notes.append(preceding)
        return notes

    def notes(self, octaves: int = 1) -> list[Note]:
        """The scale's notes ascending from the base, over `octaves` octaves."""
        return [self.degree(i) for i in range(len(self.formula) * octaves)]

    def __str__(self) -> str:
        return f"{self.base} {self.scale_type.value}"
