"""
SuperCollider lowering - Arrangement → sclang source text.

One pure function per model type, each a straight fold over the model
into a template:

    lower_clip(clip)              → Pbind / Rest / PlayBuf declaration
    lower_track(track)            → Pseq over clip variables
    lower_arrangement(arrangement) → complete program

There is no intermediate representation beyond the models themselves.
Track clip names are written out verbatim; they are not looked up.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from chuk_mcp_sclang.compiler.templates import (
    ARRANGEMENT_TEMPLATE,
    AUDIO_FILE_TEMPLATE,
    EMPTY_CLIP_TEMPLATE,
    INSTRUMENT_CLIP_TEMPLATE,
    INSTRUMENTS,
    REST_MARKER,
    TRACK_TEMPLATE,
)
from chuk_mcp_sclang.core.errors import InvariantViolation, UnimplementedLowering
from chuk_mcp_sclang.models.arrangement import Arrangement
from chuk_mcp_sclang.models.clip import EmptyClip, FileClip, InstrumentClip
from chuk_mcp_sclang.models.track import Track

logger = logging.getLogger(__name__)


def format_number(value: float) -> str:
    """Format a duration the way it appears in sclang source (1.0, 0.0625)."""
    return repr(float(value))


def format_durations(durations: Iterable[float]) -> str:
    """'[1.0, 0.25]'"""
    return "[" + ", ".join(format_number(d) for d in durations) + "]"


def format_midi_groups(notes: Iterable[Sequence[int] | None]) -> str:
    """
    Format note groups as a sclang array, each element followed by a comma.

    '[[62, 65, 69, 72],note:Rest(),]'
    """
    parts = []
    for group in notes:
        if group is None:
            parts.append(f"{REST_MARKER},")
        else:
            parts.append("[" + ", ".join(str(int(m)) for m in group) + "],")
    return "[" + "".join(parts) + "]"


def format_name_list(names: Iterable[str]) -> str:
    """'[v1,v2,]'"""
    return "[" + "".join(f"{name}," for name in names) + "]"


def lower_clip(clip: InstrumentClip | FileClip | EmptyClip, allow_stubs: bool = False) -> str:
    """
    Lower a single clip to its SuperCollider declaration.

    Args:
        clip: The clip to lower
        allow_stubs: Emit a placeholder for FileClips instead of raising

    Raises:
        InvariantViolation: an InstrumentClip's notes and durations differ in length
        UnimplementedLowering: a FileClip was given and allow_stubs is False
    """
    if isinstance(clip, InstrumentClip):
        if len(clip.notes) != len(clip.durations):
            raise InvariantViolation(
                f"Clip '{clip.name}' has {len(clip.notes)} note groups "
                f"but {len(clip.durations)} durations"
            )
        return INSTRUMENT_CLIP_TEMPLATE.format(
            var_name=clip.name,
            instrument_name=clip.instrument,
            dur=format_durations(clip.durations),
            midi_notes=format_midi_groups(clip.notes),
        )

    if isinstance(clip, EmptyClip):
        return EMPTY_CLIP_TEMPLATE.format(var_name=clip.name, dur=format_number(clip.duration))

    if isinstance(clip, FileClip):
        if not allow_stubs:
            raise UnimplementedLowering(
                f"Audio file clips cannot be lowered yet (clip '{clip.name}')"
            )
        logger.warning("Emitting placeholder for unimplemented file clip '%s'", clip.name)
        return AUDIO_FILE_TEMPLATE.format(var_name=clip.name, filepath=clip.path)

    raise TypeError(f"Not a clip: {clip!r}")


def lower_track(track: Track) -> str:
    """Lower a track to a Pseq over its clip variables, in track order."""
    return TRACK_TEMPLATE.format(
        track_name=track.name,
        clips=format_name_list(track.clip_names),
    )


def lower_arrangement(arrangement: Arrangement, allow_stubs: bool = False) -> str:
    """
    Lower a whole arrangement to a SuperCollider program.

    The program declares one variable per clip and track, defines every
    clip then every track, and finally plays all tracks together.
    """
    names = arrangement.names()
    # sclang rejects an empty var statement
    variable_declarations = "var " + ",".join(names) + ";" if names else ""

    clip_declarations = "".join(
        lower_clip(clip, allow_stubs=allow_stubs) + "\n" for clip in arrangement.clips
    )

    track_declarations = ""
    track_names = []
    for track in arrangement.tracks:
        track_declarations += lower_track(track) + "\n"
        track_names.append(track.name)

    return ARRANGEMENT_TEMPLATE.format(
        instruments=INSTRUMENTS,
        variable_declarations=variable_declarations,
        clip_declarations=clip_declarations,
        track_declarations=track_declarations,
        track_names=format_name_list(track_names),
    )


@dataclass
class CompileResult:
    """Result of compiling an arrangement to SuperCollider."""

    source: str
    variables: list[str] = field(default_factory=list)
    clips_compiled: list[str] = field(default_factory=list)
    tracks_compiled: list[str] = field(default_factory=list)

    def save(self, path: Path) -> Path:
        """Write the program to a .scd file, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.source)
        return path


def compile_arrangement(arrangement: Arrangement, allow_stubs: bool = False) -> CompileResult:
    """
    Compile an arrangement to SuperCollider source.

    Args:
        arrangement: The arrangement to compile
        allow_stubs: Emit placeholders for clip kinds without a lowering

    Returns:
        CompileResult with the program text and what went into it
    """
    source = lower_arrangement(arrangement, allow_stubs=allow_stubs)
    logger.debug(
        "Compiled arrangement '%s': %d clips, %d tracks",
        arrangement.name,
        len(arrangement.clips),
        len(arrangement.tracks),
    )
    return CompileResult(
        source=source,
        variables=arrangement.names(),
        clips_compiled=arrangement.clip_names(),
        tracks_compiled=arrangement.track_names(),
    )
