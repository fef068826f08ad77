#!/usr/bin/env python3
"""
Async Fretboard MCP Server using chuk-mcp-server

This server provides MCP tools for learning scales and chords on fretted
instruments. Every answer is a list of concrete string/fret positions on
the requested tuning, from 6- and 7-string guitar to 4-, 5- and 6-string bass.

The server provides tools for:
- Resolving notes, positions and intervals on any tuning
- Notes-per-string scale shapes and the five pentatonic boxes
- Movable chord voicings and CAGED forms
- Building chord progressions from scale degrees
- Exporting patterns and progressions to MIDI files
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_fretboard.catalog import CatalogLoader
from chuk_mcp_fretboard.tools import (
    register_compilation_tools,
    register_fretboard_tools,
    register_theory_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-fretboard")

# Paths - standard project structure unless the entry point overrides them
BASE_PATH = Path.cwd()
CATALOG_DIR = Path(os.environ.get("CHUK_FRETBOARD_CATALOG_DIR", BASE_PATH / "catalog"))
OUTPUT_DIR = Path(os.environ.get("CHUK_FRETBOARD_OUTPUT_DIR", BASE_PATH / "output"))
LIBRARY_PATH = Path(__file__).parent / "catalog" / "library"

# Project catalog files override library files of the same name
catalog = CatalogLoader(
    library_path=LIBRARY_PATH,
    project_path=CATALOG_DIR,
)

# Register all tools
fretboard_tools = register_fretboard_tools(mcp)
theory_tools = register_theory_tools(mcp, catalog)
compilation_tools = register_compilation_tools(mcp, catalog, OUTPUT_DIR)

# Export tool functions for direct access
fretboard_list_tunings = fretboard_tools["fretboard_list_tunings"]
fretboard_note_at = fretboard_tools["fretboard_note_at"]
fretboard_positions_for = fretboard_tools["fretboard_positions_for"]
fretboard_interval = fretboard_tools["fretboard_interval"]
fretboard_nps_pattern = fretboard_tools["fretboard_nps_pattern"]
fretboard_pentatonic_box = fretboard_tools["fretboard_pentatonic_box"]

fretboard_list_modes = theory_tools["fretboard_list_modes"]
fretboard_list_voicings = theory_tools["fretboard_list_voicings"]
fretboard_chord_voicing = theory_tools["fretboard_chord_voicing"]
fretboard_caged_shape = theory_tools["fretboard_caged_shape"]
fretboard_list_progressions = theory_tools["fretboard_list_progressions"]
fretboard_build_progression = theory_tools["fretboard_build_progression"]

fretboard_export_pattern_midi = compilation_tools["fretboard_export_pattern_midi"]
fretboard_export_progression_midi = compilation_tools["fretboard_export_progression_midi"]

logger.info("CHUK Fretboard MCP Server initialized")
logger.info(f"  Library path: {LIBRARY_PATH}")
logger.info(f"  Catalog dir: {CATALOG_DIR}")
logger.info(f"  Output dir: {OUTPUT_DIR}")
