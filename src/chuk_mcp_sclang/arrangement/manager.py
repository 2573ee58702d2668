"""
Arrangement Manager - handles arrangement lifecycle.

Provides async operations for creating, loading, saving, and editing
arrangements. Arrangements are persisted as YAML files.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

import yaml

from chuk_mcp_sclang.constants import ARRANGEMENT_SUFFIX, ErrorMessages
from chuk_mcp_sclang.models.arrangement import Arrangement
from chuk_mcp_sclang.models.clip import EmptyClip, FileClip, InstrumentClip
from chuk_mcp_sclang.models.track import Track

logger = logging.getLogger(__name__)


class ArrangementMetadata:
    """Lightweight metadata for listing arrangements."""

    def __init__(
        self,
        name: str,
        path: Path,
        clip_count: int,
        track_count: int,
        modified: datetime,
    ):
        self.name = name
        self.path = path
        self.clip_count = clip_count
        self.track_count = track_count
        self.modified = modified

    def __repr__(self) -> str:
        return (
            f"ArrangementMetadata({self.name!r}, "
            f"{self.clip_count} clips, {self.track_count} tracks)"
        )


class ArrangementManager:
    """
    Manages arrangement lifecycle with file persistence.

    Arrangements live in an in-memory cache and are written to
    `<name>.arrangement.yaml` on save.
    """

    def __init__(self, arrangements_dir: Path):
        """
        Initialize the manager.

        Args:
            arrangements_dir: Directory for storing arrangement files
        """
        self.arrangements_dir = arrangements_dir
        self._cache: dict[str, Arrangement] = {}

    async def create(self, name: str) -> Arrangement:
        """
        Create a new, empty arrangement.

        Args:
            name: Arrangement name

        Returns:
            The created Arrangement
        """
        arrangement = Arrangement(name=name)
        self._cache[name] = arrangement
        return arrangement

    async def get(self, name: str) -> Arrangement | None:
        """
        Get an arrangement by name.

        Checks cache first, then loads from file if not cached.

        Returns:
            The Arrangement or None if not found
        """
        if name in self._cache:
            return self._cache[name]

        path = self._get_path(name)
        if path.exists():
            return await self.load(path)

        return None

    async def require(self, name: str) -> Arrangement:
        """Like get(), but raises ValueError when the arrangement is missing."""
        arrangement = await self.get(name)
        if arrangement is None:
            raise ValueError(ErrorMessages.ARRANGEMENT_NOT_FOUND.format(name=name))
        return arrangement

    async def save(self, arrangement: Arrangement) -> Path:
        """
        Save an arrangement to disk.

        Returns:
            Path to the saved file
        """
        self.arrangements_dir.mkdir(parents=True, exist_ok=True)

        arrangement.modified = datetime.now(UTC)
        path = self._get_path(arrangement.name)

        with open(path, "w") as f:
            yaml.safe_dump(
                arrangement.to_yaml_dict(), f, default_flow_style=False, sort_keys=False
            )

        self._cache[arrangement.name] = arrangement
        logger.debug("Saved arrangement '%s' to %s", arrangement.name, path)
        return path

    async def load(self, path: Path) -> Arrangement:
        """
        Load an arrangement from a file.

        Args:
            path: Path to the arrangement file

        Returns:
            The loaded Arrangement
        """
        with open(path) as f:
            data = yaml.safe_load(f)

        arrangement = Arrangement.from_yaml_dict(data)
        self._cache[arrangement.name] = arrangement
        return arrangement

    async def list_arrangements(self) -> list[ArrangementMetadata]:
        """
        List all arrangements in the directory, most recently modified first.
        """
        if not self.arrangements_dir.exists():
            return []

        result = []
        for path in self.arrangements_dir.glob(f"*{ARRANGEMENT_SUFFIX}"):
            try:
                with open(path) as f:
                    data = yaml.safe_load(f)
            except (OSError, yaml.YAMLError):
                logger.warning("Skipping unreadable arrangement file %s", path)
                continue
            if not isinstance(data, dict):
                logger.warning("Skipping arrangement file without a mapping %s", path)
                continue

            result.append(
                ArrangementMetadata(
                    name=data.get("name", path.stem),
                    path=path,
                    clip_count=len(data.get("clips", [])),
                    track_count=len(data.get("tracks", [])),
                    modified=datetime.fromtimestamp(path.stat().st_mtime),
                )
            )

        return sorted(result, key=lambda m: m.modified, reverse=True)

    async def delete(self, name: str) -> bool:
        """
        Delete an arrangement from memory and disk.

        Returns:
            True if deleted, False if not found
        """
        cached = self._cache.pop(name, None) is not None
        path = self._get_path(name)

        if path.exists():
            path.unlink()
            return True

        return cached

    async def duplicate(self, name: str, new_name: str) -> Arrangement:
        """
        Duplicate an arrangement with a new name.

        Tracks are copied so appending to one arrangement's track does
        not affect the other; clips are immutable and shared.
        """
        original = await self.require(name)

        new_arrangement = Arrangement(
            name=new_name,
            clips=list(original.clips),
            tracks=[track.model_copy(deep=True) for track in original.tracks],
        )

        self._cache[new_name] = new_arrangement
        return new_arrangement

    def _get_path(self, name: str) -> Path:
        """Get the file path for an arrangement."""
        safe_name = name.replace(" ", "_").replace("/", "_")
        return self.arrangements_dir / f"{safe_name}{ARRANGEMENT_SUFFIX}"

    # Convenience methods for arrangement operations

    async def add_clip(
        self, name: str, clip: InstrumentClip | FileClip | EmptyClip
    ) -> Arrangement:
        """Add (or replace) a clip in an arrangement."""
        arrangement = await self.require(name)
        arrangement.add_clip(clip)
        return arrangement

    async def remove_clip(self, name: str, clip_name: str) -> Arrangement:
        """Remove a clip. Raises ValueError if it does not exist."""
        arrangement = await self.require(name)
        if not arrangement.remove_clip(clip_name):
            raise ValueError(ErrorMessages.CLIP_NOT_FOUND.format(name=clip_name))
        return arrangement

    async def add_track(self, name: str, track_name: str, clip_names: list[str]) -> Arrangement:
        """Add (or replace) a track in an arrangement."""
        arrangement = await self.require(name)
        arrangement.add_track(Track(name=track_name, clip_names=list(clip_names)))
        return arrangement

    async def append_clip(self, name: str, track_name: str, clip_name: str) -> Arrangement:
        """
        Append a clip reference to a track.

        The clip name is not checked against the arrangement's clips.
        """
        arrangement = await self.require(name)
        track = arrangement.get_track(track_name)
        if track is None:
            raise ValueError(ErrorMessages.TRACK_NOT_FOUND.format(name=track_name))
        track.append_clip(clip_name)
        arrangement.modified = datetime.now(UTC)
        return arrangement

    async def remove_track(self, name: str, track_name: str) -> Arrangement:
        """Remove a track. Raises ValueError if it does not exist."""
        arrangement = await self.require(name)
        if not arrangement.remove_track(track_name):
            raise ValueError(ErrorMessages.TRACK_NOT_FOUND.format(name=track_name))
        return arrangement
