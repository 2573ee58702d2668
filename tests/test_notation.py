"""
Tests for the notation helpers.
"""

import pytest

from chuk_mcp_sclang.compiler import lower_arrangement
from chuk_mcp_sclang.core import Chord, ChordType, ParseError
from chuk_mcp_sclang.models import Arrangement
from chuk_mcp_sclang.notation import (
    chord,
    empty_clip,
    file_clip,
    instr_clip,
    n,
    parse_duration,
    parse_event,
    play,
    rhythm,
    track,
)


class TestConstructors:
    """Tests for the short constructors."""

    def test_note(self) -> None:
        assert n("C4").midi == 60

    def test_chord_two_forms(self) -> None:
        assert chord("D4", "Min7") == chord("D4Min7")
        assert chord("D4", ChordType.MIN7) == Chord(n("D4"), ChordType.MIN7)

    def test_track(self) -> None:
        t = track("t1", "a", "b")
        assert t.name == "t1"
        assert t.clip_names == ["a", "b"]

    def test_clips(self) -> None:
        clip = instr_clip("v1", "sine", [(60, 64), None], [0.5, 0.5])
        assert clip.notes == [[60, 64], None]
        assert empty_clip("gap", 0.25).duration == 0.25
        assert file_clip("f", "/a.wav").path == "/a.wav"


class TestPlay:
    """Tests for play()."""

    def test_mixed_items(self) -> None:
        assert play(n("C4"), chord("C4Maj7"), None) == [[60], [60, 64, 67, 71], None]

    def test_note_group(self) -> None:
        assert play([n("C4"), n("G4")]) == [[60, 67]]

    def test_empty(self) -> None:
        assert play() == []


class TestParseEvent:
    """Tests for parse_event()."""

    @pytest.mark.parametrize("token", ["rest", "REST", "r", "_", "-", " rest "])
    def test_rests(self, token: str) -> None:
        assert parse_event(token) is None

    def test_notes(self) -> None:
        assert parse_event("C4") == [60]
        assert parse_event("Eb3") == [51]
        assert parse_event("Ds4") == [63]

    def test_chords(self) -> None:
        assert parse_event("D4Min7") == [62, 65, 69, 72]
        assert parse_event("G3Dom7") == [55, 59, 62, 65]

    def test_midi_groups(self) -> None:
        assert parse_event("60,64,67") == [60, 64, 67]
        assert parse_event("60, 64") == [60, 64]
        assert parse_event("60 64") == [60, 64]
        assert parse_event("60,64,") == [60, 64]
        assert parse_event("72") == [72]

    @pytest.mark.parametrize("token", ["H4", "C4Sus4", "hello", ",", "60,C4", "6\u00b2"])
    def test_invalid(self, token: str) -> None:
        with pytest.raises(ParseError):
            parse_event(token)


class TestParseDuration:
    """Tests for parse_duration()."""

    def test_letters(self) -> None:
        assert parse_duration("W") == 1.0
        assert parse_duration("S") == 0.0625

    def test_numbers(self) -> None:
        assert parse_duration("0.75") == 0.75
        assert parse_duration(2) == 2.0

    def test_unknown_letter_is_zero(self) -> None:
        assert parse_duration("X") == 0.0


class TestComposition:
    """Notation helpers compose into a compilable arrangement."""

    def test_two_five_one(self) -> None:
        prog = instr_clip(
            "prog",
            "sine",
            play(chord("D4", "Min7"), chord("G3", "Dom7"), chord("C4Maj7")),
            rhythm("W", "W", "W"),
        )
        arrangement = Arrangement(tracks=[track("progTrack", "prog")], clips=[prog])
        out = lower_arrangement(arrangement)
        assert "\\midinote, Pseq([[62, 65, 69, 72],[55, 59, 62, 65],[60, 64, 67, 71],])" in out
        assert "\\dur, Pseq([1.0, 1.0, 1.0])" in out
