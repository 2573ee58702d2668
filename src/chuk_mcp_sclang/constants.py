"""
Constants for the sclang server.

No magic strings - shared file suffixes and standard messages live here.
"""

from typing import Literal

# Schema versions - frozen for v1
SchemaVersion = Literal["arrangement/v1"]

ARRANGEMENT_SUFFIX = ".arrangement.yaml"
SCLANG_SUFFIX = ".scd"
MIDI_SUFFIX = ".mid"

# Synth defined by the arrangement preamble
DEFAULT_INSTRUMENT = "sine"


class ErrorMessages:
    """Standardized error messages."""

    ARRANGEMENT_NOT_FOUND = "Arrangement not found: {name}"
    CLIP_NOT_FOUND = "Clip not found: {name}"
    TRACK_NOT_FOUND = "Track not found: {name}"
    LENGTH_MISMATCH = "Got {notes} note events but {durations} durations"


class SuccessMessages:
    """Standardized success messages."""

    ARRANGEMENT_SAVED = "Arrangement saved to {path}"
    ARRANGEMENT_DELETED = "Arrangement '{name}' deleted"
    ARRANGEMENT_COMPILED = "Compiled arrangement '{name}' to {path}"
    CLIP_ADDED = "Added clip '{clip}' to '{name}'"
    TRACK_ADDED = "Added track '{track}' to '{name}'"
