"""
Arrangement model - the full composition.

An Arrangement holds:
- Clips: the pool of named sound material
- Tracks: playback lanes referencing clips by name

All tracks are mixed together at equal weight. Volume and effect
layering are not modelled.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field, TypeAdapter

from chuk_mcp_sclang.constants import SchemaVersion
from chuk_mcp_sclang.models.clip import Clip, EmptyClip, FileClip, InstrumentClip
from chuk_mcp_sclang.models.track import Track

_CLIP_ADAPTER: TypeAdapter[InstrumentClip | FileClip | EmptyClip] = TypeAdapter(Clip)


class Arrangement(BaseModel):
    """
    A complete composition: all tracks plus the clips they reference.

    Name uniqueness across clips and tracks is expected (they share
    one variable namespace in the output) but not enforced.
    """

    # Metadata
    schema_version: SchemaVersion = Field("arrangement/v1", description="Schema version")
    name: str = Field("arrangement", description="Arrangement name")
    created: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="Creation timestamp"
    )
    modified: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="Last modified"
    )

    # Content
    tracks: list[Track] = Field(default_factory=list, description="Arrangement tracks")
    clips: list[Clip] = Field(default_factory=list, description="Clips used by the tracks")

    def names(self) -> list[str]:
        """
        All variable names: every clip name, then every track name.

        Order is container order and is relied on by the lowering.
        """
        return self.clip_names() + self.track_names()

    def clip_names(self) -> list[str]:
        return [clip.name for clip in self.clips]

    def track_names(self) -> list[str]:
        return [track.name for track in self.tracks]

    def get_clip(self, name: str) -> InstrumentClip | FileClip | EmptyClip | None:
        """Get the first clip with this name."""
        for clip in self.clips:
            if clip.name == name:
                return clip
        return None

    def get_track(self, name: str) -> Track | None:
        """Get the first track with this name."""
        for track in self.tracks:
            if track.name == name:
                return track
        return None

    def add_clip(self, clip: InstrumentClip | FileClip | EmptyClip) -> None:
        """Add a clip, replacing any existing clip of the same name in place."""
        for i, existing in enumerate(self.clips):
            if existing.name == clip.name:
                self.clips[i] = clip
                break
        else:
            self.clips.append(clip)
        self.modified = datetime.now(UTC)

    def add_track(self, track: Track) -> None:
        """Add a track, replacing any existing track of the same name in place."""
        for i, existing in enumerate(self.tracks):
            if existing.name == track.name:
                self.tracks[i] = track
                break
        else:
            self.tracks.append(track)
        self.modified = datetime.now(UTC)

    def remove_clip(self, name: str) -> bool:
        """
        Remove a clip by name.

        Tracks still referencing it are left alone.
        Returns True if removed, False if not found.
        """
        for i, clip in enumerate(self.clips):
            if clip.name == name:
                self.clips.pop(i)
                self.modified = datetime.now(UTC)
                return True
        return False

    def remove_track(self, name: str) -> bool:
        """
        Remove a track by name.

        Returns True if removed, False if not found.
        """
        for i, track in enumerate(self.tracks):
            if track.name == name:
                self.tracks.pop(i)
                self.modified = datetime.now(UTC)
                return True
        return False

    def to_yaml_dict(self) -> dict[str, Any]:
        """
        Convert to a YAML-friendly dict.

        This produces the canonical YAML format for arrangements.
        """
        return {
            "schema": self.schema_version,
            "name": self.name,
            "clips": [clip.model_dump(mode="json") for clip in self.clips],
            "tracks": [
                {"name": track.name, "clips": list(track.clip_names)} for track in self.tracks
            ],
        }

    @classmethod
    def from_yaml_dict(cls, data: dict[str, Any]) -> Arrangement:
        """
        Create an Arrangement from a YAML-parsed dict.

        This parses the canonical YAML format.
        """
        clips = [_CLIP_ADAPTER.validate_python(c) for c in data.get("clips", [])]
        tracks = [
            Track(name=t["name"], clip_names=list(t.get("clips", [])))
            for t in data.get("tracks", [])
        ]
        return cls(
            schema_version=data.get("schema", "arrangement/v1"),
            name=data.get("name", "arrangement"),
            tracks=tracks,
            clips=clips,
        )
