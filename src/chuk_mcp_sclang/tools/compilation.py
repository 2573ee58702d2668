"""
Compilation tools - MCP tools for SuperCollider and MIDI export.

Tools for compiling arrangements to .scd programs, previewing them as
MIDI, exporting YAML, and running advisory validation.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from chuk_mcp_sclang.arrangement import ArrangementManager
from chuk_mcp_sclang.arrangement.validator import validate_arrangement
from chuk_mcp_sclang.compiler import arrangement_to_midi, compile_arrangement
from chuk_mcp_sclang.compiler.midi import DEFAULT_TEMPO_BPM
from chuk_mcp_sclang.constants import (
    MIDI_SUFFIX,
    SCLANG_SUFFIX,
    ErrorMessages,
    SuccessMessages,
)

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _not_found(name: str) -> str:
    return json.dumps(
        {"status": "error", "message": ErrorMessages.ARRANGEMENT_NOT_FOUND.format(name=name)}
    )


def register_compilation_tools(
    mcp: ChukMCPServer,
    manager: ArrangementManager,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register compilation/export tools with the MCP server.

    Args:
        mcp: The MCP server instance
        manager: The arrangement manager
        output_dir: Directory for output files

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_compile(
        arrangement: str,
        output_name: str | None = None,
        allow_stubs: bool = False,
        include_source: bool = True,
    ) -> str:
        """
        Compile an arrangement to a SuperCollider program.

        Writes a .scd file that defines the synth, declares every clip
        and track, and plays all tracks together. Open it in the
        SuperCollider IDE and evaluate it with the server booted.

        Track clip references are written as-is; run sclang_validate
        first to catch names that do not resolve.

        Args:
            arrangement: Arrangement name
            output_name: Optional output filename (without .scd extension)
            allow_stubs: Emit placeholders for audio file clips instead of failing
            include_source: Include the program text in the response

        Returns:
            JSON string with compilation result and file path

        Example:
            sclang_compile(arrangement="two-five-one")
        """
        try:
            arr = await manager.get(arrangement)
            if arr is None:
                return _not_found(arrangement)

            result = compile_arrangement(arr, allow_stubs=allow_stubs)

            output_path = output_dir / f"{output_name or arrangement}{SCLANG_SUFFIX}"
            result.save(output_path)

            response: dict[str, Any] = {
                "status": "success",
                "path": str(output_path),
                "compilation": {
                    "variables": result.variables,
                    "clips": result.clips_compiled,
                    "tracks": result.tracks_compiled,
                },
                "message": SuccessMessages.ARRANGEMENT_COMPILED.format(
                    name=arrangement, path=output_path
                ),
            }
            if include_source:
                response["source"] = result.source
            return json.dumps(response)
        except NotImplementedError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to compile arrangement")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_compile"] = sclang_compile

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_compile_midi(
        arrangement: str,
        output_name: str | None = None,
        tempo_bpm: int = DEFAULT_TEMPO_BPM,
    ) -> str:
        """
        Render an arrangement to a MIDI file for preview.

        Each track becomes a MIDI track on its own channel. A duration
        of 1.0 is one beat. Audio file clips and unknown clip references
        are skipped.

        Args:
            arrangement: Arrangement name
            output_name: Optional output filename (without .mid extension)
            tempo_bpm: Tempo in beats per minute (default: 60)

        Returns:
            JSON string with the output file path

        Example:
            sclang_compile_midi(arrangement="two-five-one", tempo_bpm=90)
        """
        try:
            arr = await manager.get(arrangement)
            if arr is None:
                return _not_found(arrangement)

            midi_file = arrangement_to_midi(arr, tempo_bpm=tempo_bpm)

            output_path = output_dir / f"{output_name or arrangement}{MIDI_SUFFIX}"
            output_dir.mkdir(parents=True, exist_ok=True)
            midi_file.save(str(output_path))

            note_count = sum(
                1 for track in midi_file.tracks for msg in track if msg.type == "note_on"
            )
            return json.dumps(
                {
                    "status": "success",
                    "path": str(output_path),
                    "tracks": len(midi_file.tracks) - 1,
                    "notes": note_count,
                    "message": f"Rendered {note_count} notes at {tempo_bpm} bpm",
                }
            )
        except Exception as e:
            logger.exception("Failed to compile MIDI")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_compile_midi"] = sclang_compile_midi

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_export_yaml(arrangement: str) -> str:
        """
        Export arrangement as YAML.

        Returns the arrangement in its canonical YAML format,
        suitable for version control or manual editing.

        Args:
            arrangement: Arrangement name

        Returns:
            JSON string containing the YAML content

        Example:
            sclang_export_yaml(arrangement="two-five-one")
        """
        try:
            arr = await manager.get(arrangement)
            if arr is None:
                return _not_found(arrangement)

            yaml_content = yaml.safe_dump(
                arr.to_yaml_dict(), default_flow_style=False, sort_keys=False
            )
            return json.dumps({"status": "success", "yaml": yaml_content})
        except Exception as e:
            logger.exception("Failed to export YAML")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_export_yaml"] = sclang_export_yaml

    @mcp.tool  # type: ignore[arg-type]
    async def sclang_validate(arrangement: str) -> str:
        """
        Validate an arrangement before compiling.

        Checks for issues like:
        - Note groups and durations of different lengths
        - Zero or negative durations
        - Track references to clips that do not exist
        - Duplicate or unusable variable names

        Validation is advisory; sclang_compile does not run it.

        Args:
            arrangement: Arrangement name

        Returns:
            JSON string with validation results

        Example:
            sclang_validate(arrangement="two-five-one")
        """
        try:
            arr = await manager.get(arrangement)
            if arr is None:
                return _not_found(arrangement)

            result = validate_arrangement(arr)

            return json.dumps(
                {
                    "status": "success",
                    "valid": result.is_valid,
                    "errors": [
                        {"code": e.code, "message": e.message, "location": e.location}
                        for e in result.errors
                    ],
                    "warnings": [
                        {"code": w.code, "message": w.message, "location": w.location}
                        for w in result.warnings
                    ],
                    "info": [
                        {"code": i.code, "message": i.message, "location": i.location}
                        for i in result.infos
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to validate arrangement")
            return json.dumps({"status": "error", "message": str(e)})

    tools["sclang_validate"] = sclang_validate

    return tools
