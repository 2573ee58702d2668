"""
MIDI preview export.

Renders an arrangement to a MIDI file with mido so it can be auditioned
in any DAW without a SuperCollider server. Each arrangement track gets
its own MIDI track; its clips play back-to-back and all tracks start
together.

Clip durations are read as beats. All operations are deterministic:
same input → same output.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_mcp_sclang.core.errors import InvariantViolation
from chuk_mcp_sclang.models.arrangement import Arrangement
from chuk_mcp_sclang.models.clip import EmptyClip, FileClip, InstrumentClip

logger = logging.getLogger(__name__)

# Standard ticks per beat (quarter note) - industry standard
TICKS_PER_BEAT = 480

DEFAULT_VELOCITY = 100

# Pbind's default clock runs at one beat per second
DEFAULT_TEMPO_BPM = 60


@dataclass(frozen=True)
class MidiEvent:
    """
    A single MIDI note event.

    All times are in ticks (absolute from start of track).
    """

    pitch: int  # MIDI note number (0-127)
    start_ticks: int  # Absolute start time in ticks
    duration_ticks: int  # Duration in ticks
    velocity: int = DEFAULT_VELOCITY  # 0-127
    channel: int = 0  # 0-15

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.pitch <= 127:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")
        if self.start_ticks < 0:
            raise ValueError(f"Start ticks must be >= 0, got {self.start_ticks}")
        if self.duration_ticks < 0:
            raise ValueError(f"Duration ticks must be >= 0, got {self.duration_ticks}")


def beats_to_ticks(beats: float, ticks_per_beat: int = TICKS_PER_BEAT) -> int:
    """Convert a beat position to ticks."""
    return int(round(beats * ticks_per_beat))


def clip_to_events(
    clip: InstrumentClip | FileClip | EmptyClip,
    start_beat: float = 0.0,
    channel: int = 0,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> tuple[list[MidiEvent], float]:
    """
    Render one clip starting at `start_beat`.

    Returns:
        (events, end_beat) - rests and empty clips produce no events but
        still advance time; file clips produce nothing and take no time.

    Raises:
        InvariantViolation: an InstrumentClip's notes and durations differ in length
    """
    if isinstance(clip, EmptyClip):
        return [], start_beat + clip.duration

    if isinstance(clip, FileClip):
        logger.warning("Skipping file clip '%s' in MIDI preview", clip.name)
        return [], start_beat

    if len(clip.notes) != len(clip.durations):
        raise InvariantViolation(
            f"Clip '{clip.name}' has {len(clip.notes)} note groups "
            f"but {len(clip.durations)} durations"
        )

    events: list[MidiEvent] = []
    beat = start_beat
    for group, duration in zip(clip.notes, clip.durations, strict=True):
        if group is not None:
            start = beats_to_ticks(beat, ticks_per_beat)
            end = beats_to_ticks(beat + duration, ticks_per_beat)
            for pitch in group:
                events.append(
                    MidiEvent(
                        pitch=pitch,
                        start_ticks=start,
                        duration_ticks=end - start,
                        channel=channel,
                    )
                )
        beat += duration
    return events, beat


def events_to_track(events: Sequence[MidiEvent], name: str | None = None) -> MidiTrack:
    """
    Convert absolute-time events to a MidiTrack with delta times.

    note_off sorts before note_on at the same tick so repeated pitches
    retrigger cleanly.
    """
    track = MidiTrack()
    if name:
        track.append(MetaMessage("track_name", name=name, time=0))

    messages: list[tuple[int, Message]] = []
    for event in events:
        messages.append(
            (
                event.start_ticks,
                Message(
                    "note_on",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=event.velocity,
                    time=0,
                ),
            )
        )
        messages.append(
            (
                event.start_ticks + event.duration_ticks,
                Message("note_off", channel=event.channel, note=event.pitch, velocity=0, time=0),
            )
        )

    messages.sort(key=lambda x: (x[0], x[1].type != "note_off"))

    current_time = 0
    for abs_time, msg in messages:
        msg.time = abs_time - current_time
        track.append(msg)
        current_time = abs_time

    track.append(MetaMessage("end_of_track", time=0))
    return track


def arrangement_to_midi(
    arrangement: Arrangement,
    tempo_bpm: int = DEFAULT_TEMPO_BPM,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> MidiFile:
    """
    Render an arrangement to a type-1 MIDI file.

    The first MIDI track carries the tempo; each arrangement track
    follows on its own channel (wrapping after 16). Clip names that do
    not resolve to a clip are skipped with a warning.
    """
    mid = MidiFile(type=1, ticks_per_beat=ticks_per_beat)

    tempo_track = MidiTrack()
    tempo_track.append(MetaMessage("set_tempo", tempo=int(60_000_000 / tempo_bpm), time=0))
    tempo_track.append(MetaMessage("end_of_track", time=0))
    mid.tracks.append(tempo_track)

    for index, track in enumerate(arrangement.tracks):
        channel = index % 16
        events: list[MidiEvent] = []
        beat = 0.0
        for clip_name in track.clip_names:
            clip = arrangement.get_clip(clip_name)
            if clip is None:
                logger.warning("Track '%s' references unknown clip '%s'", track.name, clip_name)
                continue
            clip_events, beat = clip_to_events(clip, beat, channel, ticks_per_beat)
            events.extend(clip_events)
        mid.tracks.append(events_to_track(events, name=track.name))

    return mid
