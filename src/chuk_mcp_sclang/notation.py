"""
Notation helpers for writing music literals.

Short constructors for the values a composition is built from:

    prog = instr_clip(
        "prog", "sine",
        play(chord("D4", "Min7"), chord("G3", "Dom7"), chord("C4Maj7")),
        rhythm("W", "W", "W"),
    )
    arr = Arrangement(tracks=[track("progTrack", "prog")], clips=[prog])

parse_event() handles the string forms accepted by the MCP tools.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from chuk_mcp_sclang.core.chord import Chord, ChordType
from chuk_mcp_sclang.core.errors import ParseError
from chuk_mcp_sclang.core.pitch import Note, play_notes
from chuk_mcp_sclang.core.rhythm import rhythm
from chuk_mcp_sclang.models.clip import EmptyClip, FileClip, InstrumentClip
from chuk_mcp_sclang.models.track import Track

REST_TOKENS = frozenset({"rest", "r", "_", "-"})
_GROUP_SEPARATOR = re.compile(r"[,\s]+")

Playable = Note | Chord | Sequence[Note] | None


def n(token: str) -> Note:
    """n("C4"), n("Ds4"), n("Eb3")"""
    return Note.parse(token)


def chord(token: str, chord_type: str | ChordType | None = None) -> Chord:
    """
    chord("C4", "Maj7") or chord("C4Maj7").
    """
    if chord_type is None:
        return Chord.parse(token)
    if not isinstance(chord_type, ChordType):
        chord_type = ChordType.parse(chord_type)
    return Chord(Note.parse(token), chord_type)


def track(name: str, *clip_names: str) -> Track:
    """track("track1", "clip1", "clip2")"""
    return Track(name=name, clip_names=list(clip_names))


def instr_clip(
    name: str,
    instrument: str,
    notes: Sequence[Sequence[int] | None],
    durations: Sequence[float],
) -> InstrumentClip:
    """An instrument clip from already-resolved MIDI groups."""
    return InstrumentClip(
        name=name,
        instrument=instrument,
        notes=[list(group) if group is not None else None for group in notes],
        durations=list(durations),
    )


def empty_clip(name: str, duration: float) -> EmptyClip:
    return EmptyClip(name=name, duration=duration)


def file_clip(name: str, path: str) -> FileClip:
    return FileClip(name=name, path=path)


def play(*items: Playable) -> list[list[int] | None]:
    """
    Turn notes, chords, note groups and rests into clip note groups.

    play(n("C4"), chord("C4Maj7"), None) == [[60], [60, 64, 67, 71], None]
    """
    groups: list[list[int] | None] = []
    for item in items:
        if item is None:
            groups.append(None)
        elif isinstance(item, (Note, Chord)):
            groups.append(item.play())
        else:
            groups.append(play_notes(item))
    return groups


def parse_event(token: str) -> list[int] | None:
    """
    Parse one step of a clip written as a string.

    Accepted forms:
        "rest"          → None
        "C4", "Eb3"     → single note
        "D4Min7"        → chord, root position
        "60,64,67"      → explicit MIDI group (commas or spaces)

    Raises:
        ParseError: if the token matches none of the forms
    """
    token = token.strip()
    if token.lower() in REST_TOKENS:
        return None
    parts = [part for part in _GROUP_SEPARATOR.split(token) if part]
    if parts and all(part.isascii() and part.isdigit() for part in parts):
        return [int(part) for part in parts]
    if len(token) <= 3:
        return Note.parse(token).play()
    try:
        return Chord.parse(token).play()
    except ParseError as e:
        raise ParseError(f"Invalid event {token!r}: {e}") from e


def parse_duration(token: str | float) -> float:
    """
    Parse one duration: a number ("0.5", 0.5) or a letter ("H").

    Letters go through rhythm(), so an unknown letter is 0.0.
    """
    if isinstance(token, (int, float)):
        return float(token)
    try:
        return float(token)
    except ValueError:
        return rhythm(token.strip())[0]


__all__ = [
    "chord",
    "empty_clip",
    "file_clip",
    "instr_clip",
    "n",
    "parse_duration",
    "parse_event",
    "play",
    "rhythm",
    "track",
]
