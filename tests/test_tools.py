"""
Tests for MCP tools.

Tests the MCP tool implementations for arrangements, clips, theory,
and compilation.
"""

import json
from pathlib import Path

import pytest
from mido import MidiFile

from chuk_mcp_sclang.arrangement import ArrangementManager
from chuk_mcp_sclang.tools import (
    register_arrangement_tools,
    register_clip_tools,
    register_compilation_tools,
    register_theory_tools,
)


# Mock MCP server for testing tools
class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


@pytest.fixture
def manager(temp_dir: Path) -> ArrangementManager:
    return ArrangementManager(temp_dir / "arrangements")


@pytest.fixture
def tools(temp_dir: Path, manager: ArrangementManager) -> dict:
    """All tools registered against one manager."""
    mcp = MockMCPServer("test")
    registered: dict = {}
    registered.update(register_arrangement_tools(mcp, manager))
    registered.update(register_clip_tools(mcp, manager))
    registered.update(register_theory_tools(mcp))
    registered.update(register_compilation_tools(mcp, manager, temp_dir / "output"))
    return registered


async def call(tools: dict, name: str, /, **kwargs) -> dict:
    return json.loads(await tools[name](**kwargs))


async def build_two_five_one(tools: dict) -> None:
    await call(tools, "sclang_create_arrangement", name="song")
    await call(
        tools,
        "sclang_add_instrument_clip",
        arrangement="song",
        name="prog",
        notes=["D4Min7", "G3Dom7", "C4Maj7"],
        durations=["W", "W", "W"],
    )
    await call(tools, "sclang_add_empty_clip", arrangement="song", name="gap", duration="H")
    await call(tools, "sclang_add_track", arrangement="song", name="progTrack", clips=["prog"])
    await call(tools, "sclang_append_clip", arrangement="song", track="progTrack", clip="gap")


class TestRegistration:
    """Tool registration."""

    def test_tools_registered_on_server(self, manager: ArrangementManager, temp_dir: Path):
        mcp = MockMCPServer("test")
        register_arrangement_tools(mcp, manager)
        register_clip_tools(mcp, manager)
        register_theory_tools(mcp)
        register_compilation_tools(mcp, manager, temp_dir)
        assert {
            "sclang_create_arrangement",
            "sclang_add_instrument_clip",
            "sclang_chord_voicing",
            "sclang_compile",
            "sclang_compile_midi",
            "sclang_validate",
        } <= set(mcp.tools)
        assert all(name.startswith("sclang_") for name in mcp.tools)


class TestArrangementTools:
    """Tests for arrangement tools."""

    @pytest.mark.asyncio
    async def test_create_arrangement(self, tools: dict):
        """Create arrangement tool."""
        data = await call(tools, "sclang_create_arrangement", name="song")
        assert data["status"] == "success"
        assert data["arrangement"] == {"name": "song", "clips": 0, "tracks": 0}

    @pytest.mark.asyncio
    async def test_get_arrangement(self, tools: dict):
        await build_two_five_one(tools)
        data = await call(tools, "sclang_get_arrangement", name="song")
        assert data["status"] == "success"
        assert data["arrangement"]["tracks"] == [{"name": "progTrack", "clips": ["prog", "gap"]}]

    @pytest.mark.asyncio
    async def test_get_missing(self, tools: dict):
        data = await call(tools, "sclang_get_arrangement", name="missing")
        assert data["status"] == "error"
        assert "not found" in data["message"]

    @pytest.mark.asyncio
    async def test_save_and_list(self, tools: dict):
        await build_two_five_one(tools)
        saved = await call(tools, "sclang_save_arrangement", name="song")
        assert saved["status"] == "success"
        assert Path(saved["path"]).exists()

        listed = await call(tools, "sclang_list_arrangements")
        assert [a["name"] for a in listed["arrangements"]] == ["song"]
        assert listed["arrangements"][0]["clips"] == 2

    @pytest.mark.asyncio
    async def test_delete(self, tools: dict):
        await call(tools, "sclang_create_arrangement", name="song")
        assert (await call(tools, "sclang_delete_arrangement", name="song"))["status"] == "success"
        assert (await call(tools, "sclang_delete_arrangement", name="song"))["status"] == "error"

    @pytest.mark.asyncio
    async def test_duplicate(self, tools: dict):
        await build_two_five_one(tools)
        data = await call(tools, "sclang_duplicate_arrangement", name="song", new_name="copy")
        assert data["status"] == "success"
        assert data["arrangement"] == {"name": "copy", "clips": 2, "tracks": 1}

    @pytest.mark.asyncio
    async def test_duplicate_missing(self, tools: dict):
        data = await call(tools, "sclang_duplicate_arrangement", name="nope", new_name="copy")
        assert data["status"] == "error"


class TestClipTools:
    """Tests for clip and track tools."""

    @pytest.mark.asyncio
    async def test_add_instrument_clip(self, tools: dict):
        await call(tools, "sclang_create_arrangement", name="song")
        data = await call(
            tools,
            "sclang_add_instrument_clip",
            arrangement="song",
            name="mel",
            notes=["C4", "rest", "60,64"],
            durations=["Q", "0.5", "H"],
        )
        assert data["status"] == "success"
        assert data["clip"]["notes"] == [[60], None, [60, 64]]
        assert data["clip"]["durations"] == [0.25, 0.5, 0.5]
        assert data["clip"]["instrument"] == "sine"

    @pytest.mark.asyncio
    async def test_add_instrument_clip_length_mismatch(self, tools: dict):
        await call(tools, "sclang_create_arrangement", name="song")
        data = await call(
            tools,
            "sclang_add_instrument_clip",
            arrangement="song",
            name="mel",
            notes=["C4", "D4"],
            durations=["Q"],
        )
        assert data["status"] == "error"
        assert data["message"] == "Got 2 note events but 1 durations"

    @pytest.mark.asyncio
    async def test_add_instrument_clip_bad_note(self, tools: dict):
        await call(tools, "sclang_create_arrangement", name="song")
        data = await call(
            tools,
            "sclang_add_instrument_clip",
            arrangement="song",
            name="mel",
            notes=["H4"],
            durations=["Q"],
        )
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_add_clip_missing_arrangement(self, tools: dict):
        data = await call(
            tools, "sclang_add_empty_clip", arrangement="nope", name="gap", duration="W"
        )
        assert data["status"] == "error"
        assert "Arrangement not found" in data["message"]

    @pytest.mark.asyncio
    async def test_file_clip(self, tools: dict):
        await call(tools, "sclang_create_arrangement", name="song")
        data = await call(
            tools, "sclang_add_file_clip", arrangement="song", name="drums", path="/a.wav"
        )
        assert data["status"] == "success"
        assert data["clip"] == {"kind": "file", "name": "drums", "path": "/a.wav"}

    @pytest.mark.asyncio
    async def test_track_editing(self, tools: dict):
        await build_two_five_one(tools)
        data = await call(
            tools, "sclang_append_clip", arrangement="song", track="progTrack", clip="prog"
        )
        assert data["track"]["clips"] == ["prog", "gap", "prog"]

        removed = await call(tools, "sclang_remove_clip", arrangement="song", name="gap")
        assert removed["clips"] == ["prog"]

        removed = await call(tools, "sclang_remove_track", arrangement="song", name="progTrack")
        assert removed["tracks"] == []

    @pytest.mark.asyncio
    async def test_append_to_missing_track(self, tools: dict):
        await call(tools, "sclang_create_arrangement", name="song")
        data = await call(tools, "sclang_append_clip", arrangement="song", track="t", clip="c")
        assert data["status"] == "error"
        assert "Track not found" in data["message"]


class TestTheoryTools:
    """Tests for theory tools."""

    @pytest.mark.asyncio
    async def test_parse_note(self, tools: dict):
        data = await call(tools, "sclang_parse_note", note="Ds4")
        assert data["note"] == {"name": "Eb4", "midi": 63}
        assert data["pitch_class"] == "Eb"
        assert data["octave"] == 4

    @pytest.mark.asyncio
    async def test_parse_note_invalid(self, tools: dict):
        data = await call(tools, "sclang_parse_note", note="H4")
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_scale_degrees(self, tools: dict):
        data = await call(tools, "sclang_scale_degrees", base="C4")
        assert [x["midi"] for x in data["notes"]] == [60, 62, 64, 65, 67, 69, 71]
        assert data["formula"] == [0, 2, 4, 5, 7, 9, 11]

    @pytest.mark.asyncio
    async def test_scale_degrees_unknown_type(self, tools: dict):
        data = await call(tools, "sclang_scale_degrees", base="C4", scale_type="klingon")
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_chord_voicing(self, tools: dict):
        data = await call(tools, "sclang_chord_voicing", root="D4", chord_type="Min7")
        assert data["chord"] == "D4Min7"
        assert data["midi"] == [62, 65, 69, 72]
        assert data["formula"] == ["1", "b3", "5", "b7"]

    @pytest.mark.asyncio
    async def test_chord_voicing_inversion(self, tools: dict):
        data = await call(tools, "sclang_chord_voicing", root="C4", chord_type="maj7", inversion=1)
        assert data["midi"] == [64, 67, 71, 72]

    @pytest.mark.asyncio
    async def test_chord_voicing_bad_inversion(self, tools: dict):
        data = await call(tools, "sclang_chord_voicing", root="C4", chord_type="Dim", inversion=3)
        assert data["status"] == "error"


class TestCompilationTools:
    """Tests for compilation tools."""

    @pytest.mark.asyncio
    async def test_compile(self, tools: dict, temp_dir: Path):
        await build_two_five_one(tools)
        data = await call(tools, "sclang_compile", arrangement="song")
        assert data["status"] == "success"
        path = Path(data["path"])
        assert path == temp_dir / "output" / "song.scd"
        assert path.read_text() == data["source"]
        assert "var prog,gap,progTrack;" in data["source"]
        assert data["compilation"]["tracks"] == ["progTrack"]

    @pytest.mark.asyncio
    async def test_compile_output_name(self, tools: dict, temp_dir: Path):
        await build_two_five_one(tools)
        data = await call(
            tools, "sclang_compile", arrangement="song", output_name="take2", include_source=False
        )
        assert data["path"].endswith("take2.scd")
        assert "source" not in data

    @pytest.mark.asyncio
    async def test_compile_file_clip(self, tools: dict):
        await call(tools, "sclang_create_arrangement", name="song")
        await call(tools, "sclang_add_file_clip", arrangement="song", name="f", path="/a.wav")
        failed = await call(tools, "sclang_compile", arrangement="song")
        assert failed["status"] == "error"
        stubbed = await call(tools, "sclang_compile", arrangement="song", allow_stubs=True)
        assert stubbed["status"] == "success"
        assert "// unimplemented" in stubbed["source"]

    @pytest.mark.asyncio
    async def test_compile_missing(self, tools: dict):
        data = await call(tools, "sclang_compile", arrangement="missing")
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_compile_midi(self, tools: dict):
        await build_two_five_one(tools)
        data = await call(tools, "sclang_compile_midi", arrangement="song", tempo_bpm=90)
        assert data["status"] == "success"
        assert data["tracks"] == 1
        assert data["notes"] == 12
        assert len(MidiFile(data["path"]).tracks) == 2

    @pytest.mark.asyncio
    async def test_export_yaml(self, tools: dict):
        await build_two_five_one(tools)
        data = await call(tools, "sclang_export_yaml", arrangement="song")
        assert data["status"] == "success"
        assert "schema: arrangement/v1" in data["yaml"]
        assert "progTrack" in data["yaml"]

    @pytest.mark.asyncio
    async def test_validate(self, tools: dict):
        await build_two_five_one(tools)
        await call(tools, "sclang_add_track", arrangement="song", name="t2", clips=["nowhere"])
        data = await call(tools, "sclang_validate", arrangement="song")
        assert data["status"] == "success"
        assert data["valid"] is True
        assert [w["code"] for w in data["warnings"]] == ["UNKNOWN_CLIP_REF"]
        assert data["errors"] == []
