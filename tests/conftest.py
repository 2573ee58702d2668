"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_sclang.models import Arrangement, EmptyClip, InstrumentClip, Track


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def two_five_one() -> Arrangement:
    """ii-V-I in C: Dm7, G7, Cmaj7, then a half-note rest, on one track."""
    return Arrangement(
        name="two-five-one",
        clips=[
            InstrumentClip(
                name="prog",
                instrument="sine",
                notes=[[62, 65, 69, 72], [55, 59, 62, 65], [60, 64, 67, 71]],
                durations=[1.0, 1.0, 1.0],
            ),
            EmptyClip(name="gap", duration=0.5),
        ],
        tracks=[Track(name="progTrack", clip_names=["prog", "gap"])],
    )
