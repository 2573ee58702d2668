"""
Pitch primitives - PitchClass and Note.

PitchClass is one of the 12 chromatic tones (octave-independent).
Note is a PitchClass in a specific octave and maps one-to-one onto
MIDI note numbers, with middle C (MIDI 60) as C4.

Spelling is flats-only. Sharp tokens are accepted and respelled.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering

from .errors import ParseError, RangeError

MIDI_NUM = 128  # number of possible MIDI note values
NUM_TONES = 12

# Sharp spellings accepted by PitchClass.parse, normalized to flats
_SHARP_ALIASES: dict[str, int] = {
    "C#": 1,
    "Cs": 1,
    "D#": 3,
    "Ds": 3,
    "F#": 6,
    "Fs": 6,
    "G#": 8,
    "Gs": 8,
    "A#": 10,
    "As": 10,
}

_NATURAL_LETTERS = "CDEFGAB"


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11), flat spelling only.

    C4 and C5 are both PitchClass.C. Sharps are never stored;
    C# is always Db.
    """

    C = 0
    Db = 1
    D = 2
    Eb = 3
    E = 4
    F = 5
    Gb = 6
    G = 7
    Ab = 8
    A = 9
    Bb = 10
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative), wrapping."""
        return PitchClass((self.value + semitones) % NUM_TONES)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """Parse a pitch class from a string like 'C', 'Db', 'C#' or 'Cs'."""
        name = name.strip()
        if name in cls.__members__:
            return cls[name]
        if name in _SHARP_ALIASES:
            return cls(_SHARP_ALIASES[name])
        raise ParseError(f"Unknown pitch class: {name!r}")


@total_ordering
@dataclass(frozen=True)
class Note:
    """
    A specific pitch: a pitch class in an octave.

    Equality is by (pitch_class, octave); ordering is by MIDI value.
    Immutable - every transformation returns a new Note.
    """

    pitch_class: PitchClass
    octave: int

    def __post_init__(self) -> None:
        midi = (self.octave + 1) * NUM_TONES + int(self.pitch_class)
        if not 0 <= midi < MIDI_NUM:
            raise RangeError(
                f"Note {self.pitch_class.name}{self.octave} is outside the MIDI range (0-127)"
            )
        object.__setattr__(self, "pitch_class", PitchClass(self.pitch_class))

    @property
    def midi(self) -> int:
        """MIDI note number. C4 = 60."""
        return _NOTE_TO_MIDI[self]

    def midi_value(self) -> int:
        """MIDI note number. C4 = 60."""
        return self.midi

    @classmethod
    def from_midi(cls, midi_note: int) -> Note:
        """Get the Note for a MIDI note number."""
        if not 0 <= midi_note < MIDI_NUM:
            raise RangeError(f"MIDI note must be 0-127, got {midi_note}")
        return _MIDI_TO_NOTE[midi_note]

    def transpose(self, semitones: int) -> Note:
        """Return the note a number of half steps away (may be negative)."""
        return Note.from_midi(self.midi + semitones)

    def add_half_steps(self, half_steps: int) -> Note:
        """Alias of transpose()."""
        return self.transpose(half_steps)

    def add_whole_steps(self, whole_steps: int) -> Note:
        """Return the note a number of whole steps away."""
        return self.transpose(whole_steps * 2)

    def sharp(self) -> Note:
        """The note one half step above this one."""
        return self.transpose(1)

    def flat(self) -> Note:
        """The note one half step below this one."""
        return self.transpose(-1)

    def with_octave(self, octave: int) -> Note:
        """Same pitch class, different octave."""
        return Note(self.pitch_class, octave)

    def play(self) -> list[int]:
        """MIDI values to sound for this note."""
        return [self.midi]

    @classmethod
    def parse(cls, token: str) -> Note:
        """
        Parse a note token like 'C4', 'Cs4' or 'Db4'.

        Format is one natural letter, an optional accidental ('s' sharp,
        'b' flat) and a single-digit octave. Accidentals are applied as
        half-step transpositions, so 'Cs4' parses to Db4 and 'Cb4' to B3.

        Raises:
            ParseError: if the token is malformed
            RangeError: if the accidental pushes the note out of MIDI range
        """
        if len(token) not in (2, 3):
            raise ParseError(f"Invalid note token {token!r}: expected e.g. 'C4', 'Cs4', 'Db4'")

        letter, octave_char = token[0], token[-1]
        if letter not in _NATURAL_LETTERS:
            raise ParseError(f"Invalid note token {token!r}: unknown note letter {letter!r}")
        if octave_char not in "0123456789":
            raise ParseError(f"Invalid note token {token!r}: octave must be a single digit")

        note = cls(PitchClass[letter], int(octave_char))
        if len(token) == 2:
            return note

        accidental = token[1]
        if accidental == "s":
            return note.sharp()
        if accidental == "b":
            return note.flat()
        raise ParseError(f"Invalid note token {token!r}: accidental must be 's' or 'b'")

    def __lt__(self, other: Note) -> bool:
        if not isinstance(other, Note):
            return NotImplemented
        return self.midi < other.midi

    def __str__(self) -> str:
        return f"{self.pitch_class.name}{self.octave}"

    def __repr__(self) -> str:
        return f"Note({self.pitch_class.name}, {self.octave})"


def play_notes(notes: Iterable[Note]) -> list[int]:
    """MIDI values for a group of notes sounded together."""
    return [note.midi for note in notes]


def _build_midi_tables() -> tuple[tuple[Note, ...], dict[Note, int]]:
    # octave offset so that MIDI 60 is C4 (scientific pitch notation)
    midi_to_note = tuple(
        Note(PitchClass(midi % NUM_TONES), midi // NUM_TONES - 1) for midi in range(MIDI_NUM)
    )
    note_to_midi = {note: midi for midi, note in enumerate(midi_to_note)}
    return midi_to_note, note_to_midi


_MIDI_TO_NOTE, _NOTE_TO_MIDI = _build_midi_tables()
