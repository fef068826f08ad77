"""
Compilation tools - MCP tools for MIDI export.

Tools for writing scale patterns and chord progressions to MIDI files.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_fretboard.catalog import CatalogLoader
from chuk_mcp_fretboard.compiler import (
    PROGRAM_FINGERED_BASS,
    PROGRAM_STEEL_GUITAR,
    pattern_to_midi,
    progression_to_midi,
)
from chuk_mcp_fretboard.constants import ErrorMessages, PatternKind, SuccessMessages
from chuk_mcp_fretboard.core.fretboard import resolve_tuning
from chuk_mcp_fretboard.engine import (
    build_progression_chords,
    get_k_notes_per_string_pattern,
    get_pentatonic_box,
)

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _safe_filename(name: str) -> str:
    """Replace characters that do not belong in a file name."""
    return "".join(c if c.isalnum() or c in "-_#" else "-" for c in name)


def register_compilation_tools(
    mcp: ChukMCPServer,
    catalog: CatalogLoader,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register compilation/export tools with the MCP server.

    Args:
        mcp: The MCP server instance
        catalog: The catalog loader (named progressions)
        output_dir: Directory for output files

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_export_pattern_midi(
        key: str,
        mode: str = "ionian",
        pattern: str = "nps",
        notes_per_string: int = 3,
        seed_fret: int = 0,
        box: int = 0,
        tuning: str = "standard-6",
        tuning_notes: list[str] | None = None,
        string_count: int | None = None,
        tempo: int = 100,
        output_name: str | None = None,
    ) -> str:
        """
        Export a scale pattern as an ascending MIDI run.

        Args:
            key: Root note (e.g., 'A')
            mode: Mode name for 'nps'; 'minor' or 'major' for 'pentatonic'
            pattern: 'nps' (notes per string) or 'pentatonic' (box)
            notes_per_string: Notes per string for 'nps'
            seed_fret: Start fret for 'nps'
            box: Box index 0-4 for 'pentatonic'
            tuning: Built-in tuning name
            tuning_notes: Explicit open-string notes, low to high (overrides tuning)
            string_count: Strings to use (default: all)
            tempo: Tempo in BPM
            output_name: Optional output filename (without .mid extension)

        Returns:
            JSON string with file path and note count

        Example:
            fretboard_export_pattern_midi(key="A", pattern="pentatonic", mode="minor")
        """
        try:
            kind = PatternKind(pattern)
            resolved = resolve_tuning(tuning, tuning_notes)

            if kind == PatternKind.PENTATONIC:
                positions = get_pentatonic_box(key, mode, box, resolved, string_count)
                default_name = f"{key}_{mode}_pentatonic_box{box}"
            else:
                positions = get_k_notes_per_string_pattern(
                    key, mode, resolved, string_count, seed_fret, k=notes_per_string
                )
                default_name = f"{key}_{mode}_{notes_per_string}nps"

            if not positions:
                return json.dumps({"status": "error", "message": "Pattern has no positions"})

            is_bass = resolved.name.startswith("bass")
            program = PROGRAM_FINGERED_BASS if is_bass else PROGRAM_STEEL_GUITAR
            midi = pattern_to_midi(positions, resolved, tempo_bpm=tempo, program=program)

            # Determine output path
            filename = f"{output_name or _safe_filename(default_name)}.mid"
            output_path = output_dir / filename
            output_dir.mkdir(parents=True, exist_ok=True)

            midi.save(str(output_path))

            return json.dumps(
                {
                    "status": "success",
                    "path": str(output_path),
                    "notes": len(positions),
                    "message": SuccessMessages.PATTERN_EXPORTED.format(
                        count=len(positions), path=output_path
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to export pattern MIDI")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_export_pattern_midi"] = fretboard_export_pattern_midi

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_export_progression_midi(
        key: str,
        degrees: list[int | str] | None = None,
        progression: str | None = None,
        beats_per_chord: int | None = None,
        tempo: int = 100,
        with_bass: bool = True,
        output_name: str | None = None,
    ) -> str:
        """
        Export a chord progression as block chords.

        Args:
            key: Tonic (e.g., 'E')
            degrees: Degree tokens; ignored when progression is given
            progression: Name of a catalog progression
            beats_per_chord: Beats each chord is held (default: the
                progression's own value, else 4)
            tempo: Tempo in BPM
            with_bass: Double the root an octave below
            output_name: Optional output filename (without .mid extension)

        Returns:
            JSON string with file path and chord symbols

        Example:
            fretboard_export_progression_midi(key="A", progression="12-Bar Blues")
        """
        try:
            beats = beats_per_chord
            default_name = f"{key}_progression"
            if progression:
                found = catalog.get_progression(progression)
                if found is None:
                    return json.dumps(
                        {
                            "status": "error",
                            "message": ErrorMessages.UNKNOWN_PROGRESSION.format(name=progression),
                        }
                    )
                degrees = found.degrees
                beats = beats or found.beats_per_chord
                default_name = f"{key}_{found.name}"
            if not degrees:
                return json.dumps({"status": "error", "message": "Degrees or progression required"})

            chords = build_progression_chords(key, degrees)
            midi = progression_to_midi(
                chords, beats_per_chord=beats or 4, tempo_bpm=tempo, with_bass=with_bass
            )

            # Determine output path
            filename = f"{output_name or _safe_filename(default_name)}.mid"
            output_path = output_dir / filename
            output_dir.mkdir(parents=True, exist_ok=True)

            midi.save(str(output_path))

            return json.dumps(
                {
                    "status": "success",
                    "path": str(output_path),
                    "chords": [c.symbol for c in chords],
                    "message": SuccessMessages.PROGRESSION_EXPORTED.format(
                        count=len(chords), path=output_path
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to export progression MIDI")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_export_progression_midi"] = fretboard_export_progression_midi

    return tools
