"""
Track model - one playback lane.

A track refers to clips by name only. Nothing checks that the names
exist: they are written into the output as variable references and
resolved by SuperCollider. Gaps are expressed as EmptyClips.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Track(BaseModel):
    """An ordered, by-name sequence of clips."""

    name: str = Field(..., min_length=1, description="Track (variable) name")
    clip_names: list[str] = Field(default_factory=list, description="Clip names in play order")

    def append_clip(self, clip_name: str) -> None:
        """Append a clip reference to the end of the track."""
        self.clip_names.append(clip_name)
