"""
Tests for arrangement model and management.

Tests cover:
- Clip and Track models
- Arrangement manipulation
- YAML serialization/deserialization
- Validation
- ArrangementManager operations
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from chuk_mcp_sclang.arrangement import ArrangementManager, validate_arrangement
from chuk_mcp_sclang.models import Arrangement, EmptyClip, FileClip, InstrumentClip, Track


class TestClips:
    """Tests for clip models."""

    def test_instrument_clip(self) -> None:
        clip = InstrumentClip(name="v1", instrument="sine", notes=[[60], None], durations=[1, 0.5])
        assert clip.kind == "instrument"
        assert clip.notes == [[60], None]
        assert clip.durations == [1.0, 0.5]
        assert clip.total_duration() == 1.5

    def test_midi_range_enforced(self) -> None:
        with pytest.raises(ValidationError):
            InstrumentClip(name="v1", instrument="sine", notes=[[128]], durations=[1.0])

    def test_length_mismatch_allowed_at_construction(self) -> None:
        """Mismatched lengths are caught by validation and lowering, not here."""
        clip = InstrumentClip(name="v1", instrument="sine", notes=[[60]], durations=[])
        assert len(clip.notes) != len(clip.durations)

    def test_name_required(self) -> None:
        with pytest.raises(ValidationError):
            EmptyClip(name="", duration=1.0)

    def test_clips_are_frozen(self) -> None:
        clip = EmptyClip(name="gap", duration=1.0)
        with pytest.raises(ValidationError):
            clip.duration = 2.0  # type: ignore[misc]

    def test_file_clip(self) -> None:
        clip = FileClip(name="drums", path="/samples/loop.wav")
        assert clip.kind == "file"


class TestTrack:
    """Tests for Track model."""

    def test_append_clip(self) -> None:
        track = Track(name="t1")
        track.append_clip("a")
        track.append_clip("a")
        assert track.clip_names == ["a", "a"]


class TestArrangement:
    """Tests for Arrangement model."""

    def test_defaults(self) -> None:
        arrangement = Arrangement()
        assert arrangement.name == "arrangement"
        assert arrangement.schema_version == "arrangement/v1"
        assert arrangement.clips == []
        assert arrangement.tracks == []

    def test_names_clips_then_tracks(self, two_five_one: Arrangement) -> None:
        assert two_five_one.names() == ["prog", "gap", "progTrack"]
        assert two_five_one.clip_names() == ["prog", "gap"]
        assert two_five_one.track_names() == ["progTrack"]

    def test_get(self, two_five_one: Arrangement) -> None:
        assert isinstance(two_five_one.get_clip("gap"), EmptyClip)
        assert two_five_one.get_clip("nope") is None
        assert two_five_one.get_track("progTrack") is not None
        assert two_five_one.get_track("nope") is None

    def test_add_clip_replaces_in_place(self, two_five_one: Arrangement) -> None:
        two_five_one.add_clip(EmptyClip(name="prog", duration=2.0))
        assert two_five_one.clip_names() == ["prog", "gap"]
        assert isinstance(two_five_one.get_clip("prog"), EmptyClip)

    def test_add_track(self, two_five_one: Arrangement) -> None:
        two_five_one.add_track(Track(name="second", clip_names=["gap"]))
        assert two_five_one.track_names() == ["progTrack", "second"]

    def test_remove(self, two_five_one: Arrangement) -> None:
        assert two_five_one.remove_clip("gap")
        assert not two_five_one.remove_clip("gap")
        assert two_five_one.remove_track("progTrack")
        assert not two_five_one.remove_track("progTrack")

    def test_remove_clip_leaves_track_references(self, two_five_one: Arrangement) -> None:
        two_five_one.remove_clip("gap")
        assert two_five_one.get_track("progTrack").clip_names == ["prog", "gap"]


class TestYamlSerialization:
    """Tests for the canonical YAML format."""

    def test_to_yaml_dict(self, two_five_one: Arrangement) -> None:
        data = two_five_one.to_yaml_dict()
        assert data["schema"] == "arrangement/v1"
        assert data["name"] == "two-five-one"
        assert data["tracks"] == [{"name": "progTrack", "clips": ["prog", "gap"]}]
        assert data["clips"][1] == {"kind": "empty", "name": "gap", "duration": 0.5}

    def test_roundtrip(self, two_five_one: Arrangement) -> None:
        text = yaml.safe_dump(two_five_one.to_yaml_dict(), sort_keys=False)
        loaded = Arrangement.from_yaml_dict(yaml.safe_load(text))
        assert loaded.name == two_five_one.name
        assert loaded.clips == two_five_one.clips
        assert loaded.tracks == two_five_one.tracks

    def test_rests_survive(self) -> None:
        arrangement = Arrangement(
            clips=[
                InstrumentClip(name="m", instrument="sine", notes=[[60], None], durations=[1, 1])
            ]
        )
        loaded = Arrangement.from_yaml_dict(arrangement.to_yaml_dict())
        assert loaded.clips[0].notes == [[60], None]

    def test_clip_kinds_discriminated(self) -> None:
        data = {
            "name": "x",
            "clips": [
                {"kind": "file", "name": "f", "path": "/a.wav"},
                {"kind": "empty", "name": "e", "duration": 1.0},
            ],
        }
        arrangement = Arrangement.from_yaml_dict(data)
        assert isinstance(arrangement.clips[0], FileClip)
        assert isinstance(arrangement.clips[1], EmptyClip)

    def test_unknown_schema_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Arrangement.from_yaml_dict({"schema": "arrangement/v2", "name": "x"})

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Arrangement.from_yaml_dict({"clips": [{"kind": "video", "name": "v"}]})


class TestValidation:
    """Tests for arrangement validation."""

    def test_valid(self, two_five_one: Arrangement) -> None:
        result = validate_arrangement(two_five_one)
        assert result.is_valid
        assert result.codes() == set()
        assert str(result) == "Validation passed: no issues found"

    def test_length_mismatch(self) -> None:
        arrangement = Arrangement(
            clips=[InstrumentClip(name="v", instrument="sine", notes=[[60]], durations=[])],
            tracks=[Track(name="t", clip_names=["v"])],
        )
        result = validate_arrangement(arrangement)
        assert not result.is_valid
        assert "LENGTH_MISMATCH" in result.codes()

    def test_non_positive_duration(self) -> None:
        arrangement = Arrangement(
            clips=[EmptyClip(name="gap", duration=0.0)],
            tracks=[Track(name="t", clip_names=["gap"])],
        )
        result = validate_arrangement(arrangement)
        assert "NON_POSITIVE_DURATION" in result.codes()
        assert not result

    def test_unknown_clip_reference_is_warning(self) -> None:
        arrangement = Arrangement(tracks=[Track(name="t", clip_names=["missing"])])
        result = validate_arrangement(arrangement)
        assert result.is_valid
        assert [w.code for w in result.warnings] == ["UNKNOWN_CLIP_REF"]

    def test_file_clip_warning(self) -> None:
        arrangement = Arrangement(
            clips=[FileClip(name="f", path="/a.wav")],
            tracks=[Track(name="t", clip_names=["f"])],
        )
        assert "FILE_CLIP_STUB" in validate_arrangement(arrangement).codes()

    def test_no_tracks(self) -> None:
        result = validate_arrangement(Arrangement(clips=[EmptyClip(name="gap", duration=1.0)]))
        assert "NO_TRACKS" in result.codes()
        assert "UNUSED_CLIP" not in result.codes()

    def test_unused_and_empty(self) -> None:
        arrangement = Arrangement(
            clips=[EmptyClip(name="gap", duration=1.0)],
            tracks=[Track(name="t")],
        )
        codes = validate_arrangement(arrangement).codes()
        assert {"UNUSED_CLIP", "EMPTY_TRACK"} <= codes

    def test_duplicate_names(self) -> None:
        arrangement = Arrangement(
            clips=[EmptyClip(name="x", duration=1.0)],
            tracks=[Track(name="x", clip_names=["x"])],
        )
        assert "DUPLICATE_NAME" in validate_arrangement(arrangement).codes()

    def test_invalid_identifier(self) -> None:
        arrangement = Arrangement(
            clips=[EmptyClip(name="Gap-1", duration=1.0)],
            tracks=[Track(name="t", clip_names=["Gap-1"])],
        )
        result = validate_arrangement(arrangement)
        assert "INVALID_IDENTIFIER" in result.codes()
        assert "INVALID_IDENTIFIER" in str(result)


class TestArrangementManager:
    """Tests for ArrangementManager."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, temp_dir: Path) -> None:
        manager = ArrangementManager(temp_dir)
        created = await manager.create("song")
        assert await manager.get("song") is created
        assert await manager.get("missing") is None

    @pytest.mark.asyncio
    async def test_require_missing(self, temp_dir: Path) -> None:
        manager = ArrangementManager(temp_dir)
        with pytest.raises(ValueError, match="Arrangement not found"):
            await manager.require("missing")

    @pytest.mark.asyncio
    async def test_save_and_load(self, temp_dir: Path, two_five_one: Arrangement) -> None:
        manager = ArrangementManager(temp_dir)
        path = await manager.save(two_five_one)
        assert path == temp_dir / "two-five-one.arrangement.yaml"
        assert path.exists()

        fresh = ArrangementManager(temp_dir)
        loaded = await fresh.get("two-five-one")
        assert loaded is not None
        assert loaded.clips == two_five_one.clips
        assert loaded.track_names() == ["progTrack"]

    @pytest.mark.asyncio
    async def test_list(self, temp_dir: Path, two_five_one: Arrangement) -> None:
        manager = ArrangementManager(temp_dir)
        assert await manager.list_arrangements() == []
        await manager.save(two_five_one)
        listed = await manager.list_arrangements()
        assert len(listed) == 1
        assert listed[0].name == "two-five-one"
        assert listed[0].clip_count == 2
        assert listed[0].track_count == 1

    @pytest.mark.asyncio
    async def test_list_skips_unreadable(self, temp_dir: Path, two_five_one: Arrangement) -> None:
        manager = ArrangementManager(temp_dir)
        await manager.save(two_five_one)
        (temp_dir / "broken.arrangement.yaml").write_text("name: [unclosed\n")
        listed = await manager.list_arrangements()
        assert [m.name for m in listed] == ["two-five-one"]

    @pytest.mark.asyncio
    async def test_list_skips_empty_and_non_mapping(
        self, temp_dir: Path, two_five_one: Arrangement
    ) -> None:
        manager = ArrangementManager(temp_dir)
        await manager.save(two_five_one)
        (temp_dir / "empty.arrangement.yaml").write_text("")
        (temp_dir / "list.arrangement.yaml").write_text("- a\n- b\n")
        listed = await manager.list_arrangements()
        assert [m.name for m in listed] == ["two-five-one"]

    @pytest.mark.asyncio
    async def test_delete(self, temp_dir: Path) -> None:
        manager = ArrangementManager(temp_dir)
        arrangement = await manager.create("song")
        await manager.save(arrangement)
        assert await manager.delete("song")
        assert not (temp_dir / "song.arrangement.yaml").exists()
        assert not await manager.delete("song")

    @pytest.mark.asyncio
    async def test_duplicate_copies_tracks(self, temp_dir: Path) -> None:
        manager = ArrangementManager(temp_dir)
        await manager.create("a")
        await manager.add_track("a", "t", ["x"])
        copy = await manager.duplicate("a", "b")
        await manager.append_clip("b", "t", "y")
        original = await manager.require("a")
        assert original.get_track("t").clip_names == ["x"]
        assert copy.get_track("t").clip_names == ["x", "y"]

    @pytest.mark.asyncio
    async def test_clip_and_track_editing(self, temp_dir: Path) -> None:
        manager = ArrangementManager(temp_dir)
        await manager.create("song")
        await manager.add_clip("song", EmptyClip(name="gap", duration=1.0))
        await manager.add_track("song", "t", [])
        arrangement = await manager.append_clip("song", "t", "gap")
        assert arrangement.get_track("t").clip_names == ["gap"]

        await manager.remove_clip("song", "gap")
        with pytest.raises(ValueError, match="Clip not found"):
            await manager.remove_clip("song", "gap")

        await manager.remove_track("song", "t")
        with pytest.raises(ValueError, match="Track not found"):
            await manager.append_clip("song", "t", "gap")
