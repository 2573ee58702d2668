#!/usr/bin/env python3
"""
Async SuperCollider MCP Server using chuk-mcp-server

This server provides MCP tools for composing arrangements out of notes,
chords and clips, and compiling them to SuperCollider programs.

The server provides tools for:
- Creating and managing arrangements (clips and tracks)
- Writing instrument, rest and audio file clips
- Looking up notes, scales and chord voicings
- Compiling arrangements to .scd programs and MIDI previews
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_sclang.arrangement import ArrangementManager
from chuk_mcp_sclang.tools import (
    register_arrangement_tools,
    register_clip_tools,
    register_compilation_tools,
    register_theory_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-sclang")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
ARRANGEMENTS_DIR = Path(os.environ.get("SCLANG_ARRANGEMENTS_DIR", BASE_PATH / "arrangements"))
OUTPUT_DIR = Path(os.environ.get("SCLANG_OUTPUT_DIR", BASE_PATH / "output"))

# Create managers
arrangement_manager = ArrangementManager(ARRANGEMENTS_DIR)

# Register all tools
arrangement_tools = register_arrangement_tools(mcp, arrangement_manager)
clip_tools = register_clip_tools(mcp, arrangement_manager)
theory_tools = register_theory_tools(mcp)
compilation_tools = register_compilation_tools(mcp, arrangement_manager, OUTPUT_DIR)

# Export tool functions for direct access
sclang_create_arrangement = arrangement_tools["sclang_create_arrangement"]
sclang_get_arrangement = arrangement_tools["sclang_get_arrangement"]
sclang_list_arrangements = arrangement_tools["sclang_list_arrangements"]
sclang_save_arrangement = arrangement_tools["sclang_save_arrangement"]
sclang_delete_arrangement = arrangement_tools["sclang_delete_arrangement"]
sclang_duplicate_arrangement = arrangement_tools["sclang_duplicate_arrangement"]

sclang_add_instrument_clip = clip_tools["sclang_add_instrument_clip"]
sclang_add_empty_clip = clip_tools["sclang_add_empty_clip"]
sclang_add_file_clip = clip_tools["sclang_add_file_clip"]
sclang_remove_clip = clip_tools["sclang_remove_clip"]
sclang_add_track = clip_tools["sclang_add_track"]
sclang_append_clip = clip_tools["sclang_append_clip"]
sclang_remove_track = clip_tools["sclang_remove_track"]

sclang_parse_note = theory_tools["sclang_parse_note"]
sclang_scale_degrees = theory_tools["sclang_scale_degrees"]
sclang_chord_voicing = theory_tools["sclang_chord_voicing"]

sclang_compile = compilation_tools["sclang_compile"]
sclang_compile_midi = compilation_tools["sclang_compile_midi"]
sclang_export_yaml = compilation_tools["sclang_export_yaml"]
sclang_validate = compilation_tools["sclang_validate"]

logger.info("CHUK SuperCollider MCP Server initialized")
logger.info(f"  Arrangements dir: {ARRANGEMENTS_DIR}")
logger.info(f"  Output dir: {OUTPUT_DIR}")
