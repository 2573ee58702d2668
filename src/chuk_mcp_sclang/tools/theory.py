"""
Theory tools - MCP tools for notes, scales and chords.

Read-only helpers for working out MIDI numbers before writing clips.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_sclang.core import Chord, ChordType, Note, Scale, ScaleType

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _note_dict(note: Note) -> dict[str, Any]:
    return {"name": str(note), "midi": note.midi}


def register_theory_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register music theory tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_parse_note(note: str) -> str:
        """
        Parse a note name and return its MIDI number.

        Note names are a letter, an optional accidental ('s' or 'b')
        and a single-digit octave. Sharps are respelled as flats.

        Args:
            note: Note name, e.g. 'C4', 'Ds4', 'Eb3'

        Returns:
            JSON string with the note name and MIDI number

        Example:
            sclang_parse_note(note="Ds4")
        """
        try:
            parsed = Note.parse(note)
            return json.dumps(
                {
                    "status": "success",
                    "note": _note_dict(parsed),
                    "pitch_class": parsed.pitch_class.name,
                    "octave": parsed.octave,
                }
            )
        except Exception as e:
            logger.exception("Failed to parse note")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_parse_note"] = sclang_parse_note

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_scale_degrees(
        base: str,
        scale_type: str = "major",
        octaves: int = 1,
    ) -> str:
        """
        List the notes of a scale.

        Args:
            base: Base note, e.g. 'C4'
            scale_type: One of major, natural_minor, harmonic_minor,
                melodic_minor, dorian, phrygian, lydian, mixolydian,
                locrian, major_pentatonic, minor_pentatonic, blues
            octaves: Number of octaves to list (default: 1)

        Returns:
            JSON string with the scale notes

        Example:
            sclang_scale_degrees(base="D4", scale_type="dorian")
        """
        try:
            scale = Scale(Note.parse(base), ScaleType(scale_type))
            return json.dumps(
                {
                    "status": "success",
                    "scale": str(scale),
                    "formula": list(scale.formula),
                    "notes": [_note_dict(note) for note in scale.notes(octaves)],
                }
            )
        except Exception as e:
            logger.exception("Failed to list scale degrees")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_scale_degrees"] = sclang_scale_degrees

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_chord_voicing(
        root: str,
        chord_type: str,
        inversion: int = 0,
    ) -> str:
        """
        Voice a chord and return its notes.

        Inversion n starts the voicing on the chord tone at position n.

        Args:
            root: Root note, e.g. 'D4'
            chord_type: Maj7, Min7, Dom7, Dim, Aug or Maj6
            inversion: 0 for root position, up to the number of tones - 1

        Returns:
            JSON string with the voiced notes

        Example:
            sclang_chord_voicing(root="C4", chord_type="Maj7", inversion=1)
        """
        try:
            chord = Chord(Note.parse(root), ChordType.parse(chord_type))
            notes = chord.voicing(inversion)
            return json.dumps(
                {
                    "status": "success",
                    "chord": str(chord),
                    "inversion": inversion,
                    "formula": [str(numeral) for numeral in chord.formula],
                    "notes": [_note_dict(note) for note in notes],
                    "midi": [note.midi for note in notes],
                }
            )
        except Exception as e:
            logger.exception("Failed to voice chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_chord_voicing"] = sclang_chord_voicing

    return tools
