"""
Clip and track tools - MCP tools for editing arrangement content.

Clips are written with the string notation:
- notes: "C4", "Eb3", "D4Min7", "60,64,67" or "rest"
- durations: "W", "H", "Q", "E", "S" or numbers like "0.5"
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_sclang.arrangement import ArrangementManager
from chuk_mcp_sclang.constants import DEFAULT_INSTRUMENT, ErrorMessages, SuccessMessages
from chuk_mcp_sclang.core.errors import InvariantViolation
from chuk_mcp_sclang.models.clip import EmptyClip, FileClip, InstrumentClip
from chuk_mcp_sclang.notation import parse_duration, parse_event

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_clip_tools(
    mcp: ChukMCPServer,
    manager: ArrangementManager,
) -> dict[str, Any]:
    """
    Register clip and track editing tools with the MCP server.

    Args:
        mcp: The MCP server instance
        manager: The arrangement manager

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_add_instrument_clip(
        arrangement: str,
        name: str,
        notes: list[str],
        durations: list[str],
        instrument: str = DEFAULT_INSTRUMENT,
    ) -> str:
        """
        Add an instrument clip (a synth pattern) to an arrangement.

        Each note entry sounds for the matching duration. Chords are
        voiced in root position from the given root note.

        Args:
            arrangement: Arrangement name
            name: Clip name (a sclang variable, e.g. 'prog')
            notes: Events - 'C4', 'Eb3', 'D4Min7', '60,64,67' or 'rest'
            durations: One per event - 'W', 'H', 'Q', 'E', 'S' or a number
            instrument: SynthDef name (default: 'sine')

        Returns:
            JSON string with the added clip

        Example:
            sclang_add_instrument_clip(
                arrangement="two-five-one",
                name="prog",
                notes=["D4Min7", "G3Dom7", "C4Maj7"],
                durations=["W", "W", "W"]
            )
        """
        try:
            if len(notes) != len(durations):
                raise InvariantViolation(
                    ErrorMessages.LENGTH_MISMATCH.format(notes=len(notes), durations=len(durations))
                )

            clip = InstrumentClip(
                name=name,
                instrument=instrument,
                notes=[parse_event(token) for token in notes],
                durations=[parse_duration(token) for token in durations],
            )
            await manager.add_clip(arrangement, clip)

            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.CLIP_ADDED.format(clip=name, name=arrangement),
                    "clip": clip.model_dump(mode="json"),
                }
            )
        except Exception as e:
            logger.exception("Failed to add instrument clip")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_add_instrument_clip"] = sclang_add_instrument_clip

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_add_empty_clip(arrangement: str, name: str, duration: str) -> str:
        """
        Add a rest clip to an arrangement.

        Use empty clips to leave gaps in a track.

        Args:
            arrangement: Arrangement name
            name: Clip name
            duration: 'W', 'H', 'Q', 'E', 'S' or a number

        Returns:
            JSON string with the added clip

        Example:
            sclang_add_empty_clip(arrangement="two-five-one", name="gap", duration="H")
        """
        try:
            clip = EmptyClip(name=name, duration=parse_duration(duration))
            await manager.add_clip(arrangement, clip)

            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.CLIP_ADDED.format(clip=name, name=arrangement),
                    "clip": clip.model_dump(mode="json"),
                }
            )
        except Exception as e:
            logger.exception("Failed to add empty clip")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_add_empty_clip"] = sclang_add_empty_clip

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_add_file_clip(arrangement: str, name: str, path: str) -> str:
        """
        Add an audio file clip to an arrangement.

        File playback is not finished: compiling an arrangement that
        contains file clips requires allow_stubs=True and emits a
        placeholder.

        Args:
            arrangement: Arrangement name
            name: Clip name
            path: Full path to the audio file

        Returns:
            JSON string with the added clip

        Example:
            sclang_add_file_clip(arrangement="two-five-one", name="drums", path="/samples/loop.wav")
        """
        try:
            clip = FileClip(name=name, path=path)
            await manager.add_clip(arrangement, clip)

            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.CLIP_ADDED.format(clip=name, name=arrangement),
                    "clip": clip.model_dump(mode="json"),
                }
            )
        except Exception as e:
            logger.exception("Failed to add file clip")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_add_file_clip"] = sclang_add_file_clip

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_remove_clip(arrangement: str, name: str) -> str:
        """
        Remove a clip from an arrangement.

        Tracks that reference the clip keep the reference.

        Args:
            arrangement: Arrangement name
            name: Clip name

        Returns:
            JSON string with the result

        Example:
            sclang_remove_clip(arrangement="two-five-one", name="gap")
        """
        try:
            arr = await manager.remove_clip(arrangement, name)
            return json.dumps(
                {
                    "status": "success",
                    "message": f"Removed clip '{name}'",
                    "clips": arr.clip_names(),
                }
            )
        except Exception as e:
            logger.exception("Failed to remove clip")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_remove_clip"] = sclang_remove_clip

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_add_track(
        arrangement: str,
        name: str,
        clips: list[str] | None = None,
    ) -> str:
        """
        Add a track that plays clips in order.

        Clip names are not checked; use sclang_validate to find
        references to missing clips.

        Args:
            arrangement: Arrangement name
            name: Track name
            clips: Clip names in play order

        Returns:
            JSON string with the added track

        Example:
            sclang_add_track(arrangement="two-five-one", name="progTrack", clips=["prog"])
        """
        try:
            await manager.add_track(arrangement, name, clips or [])
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.TRACK_ADDED.format(track=name, name=arrangement),
                    "track": {"name": name, "clips": clips or []},
                }
            )
        except Exception as e:
            logger.exception("Failed to add track")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_add_track"] = sclang_add_track

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_append_clip(arrangement: str, track: str, clip: str) -> str:
        """
        Append a clip to the end of a track.

        Args:
            arrangement: Arrangement name
            track: Track name
            clip: Clip name

        Returns:
            JSON string with the updated track

        Example:
            sclang_append_clip(arrangement="two-five-one", track="progTrack", clip="gap")
        """
        try:
            arr = await manager.append_clip(arrangement, track, clip)
            updated = arr.get_track(track)
            return json.dumps(
                {
                    "status": "success",
                    "track": {"name": track, "clips": updated.clip_names if updated else []},
                }
            )
        except Exception as e:
            logger.exception("Failed to append clip")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_append_clip"] = sclang_append_clip

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_remove_track(arrangement: str, name: str) -> str:
        """
        Remove a track from an arrangement.

        Args:
            arrangement: Arrangement name
            name: Track name

        Returns:
            JSON string with the result

        Example:
            sclang_remove_track(arrangement="two-five-one", name="progTrack")
        """
        try:
            arr = await manager.remove_track(arrangement, name)
            return json.dumps(
                {
                    "status": "success",
                    "message": f"Removed track '{name}'",
                    "tracks": arr.track_names(),
                }
            )
        except Exception as e:
            logger.exception("Failed to remove track")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_remove_track"] = sclang_remove_track

    return tools
