"""
Clip models - the smallest named units of sound material.

A clip is one of:
- InstrumentClip: a synth playing a sequence of note groups
- FileClip: an audio file reference
- EmptyClip: a rest of fixed duration

Clips are inert containers. Notes are already MIDI numbers by the time
they land here; the notation layer or the chord engine produces them.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

MidiNote = Annotated[int, Field(ge=0, le=127)]


class InstrumentClip(BaseModel):
    """
    A synth pattern: parallel sequences of note groups and durations.

    Each notes entry is a group of MIDI values sounded together, or None
    for a rest. The two sequences are expected to have equal length;
    that is asserted when the clip is lowered, not here.
    """

    kind: Literal["instrument"] = "instrument"
    name: str = Field(..., min_length=1, description="Clip (variable) name")
    instrument: str = Field(..., min_length=1, description="SynthDef name, e.g. 'sine'")
    notes: list[list[MidiNote] | None] = Field(
        default_factory=list, description="Simultaneous MIDI groups; None is a rest"
    )
    durations: list[float] = Field(default_factory=list, description="Step durations")

    model_config = {"frozen": True}

    def total_duration(self) -> float:
        """Sum of all step durations."""
        return sum(self.durations)


class FileClip(BaseModel):
    """Playback of an audio file."""

    kind: Literal["file"] = "file"
    name: str = Field(..., min_length=1, description="Clip (variable) name")
    path: str = Field(..., min_length=1, description="Full path to the audio file")

    model_config = {"frozen": True}


class EmptyClip(BaseModel):
    """A rest lasting `duration`."""

    kind: Literal["empty"] = "empty"
    name: str = Field(..., min_length=1, description="Clip (variable) name")
    duration: float = Field(..., description="Length of the rest")

    model_config = {"frozen": True}

    def total_duration(self) -> float:
        return self.duration


Clip = Annotated[InstrumentClip | FileClip | EmptyClip, Field(discriminator="kind")]
