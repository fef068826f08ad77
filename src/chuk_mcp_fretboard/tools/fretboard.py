"""
Fretboard tools - MCP tools for positions, intervals and scale shapes.

Every tool takes a standard tuning name or an explicit list of open-string
notes, so any instrument and string count can be queried.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_fretboard.constants import ErrorMessages, PentatonicType
from chuk_mcp_fretboard.core.fretboard import STANDARD_TUNINGS, FretPosition, resolve_tuning
from chuk_mcp_fretboard.core.pitch import chroma
from chuk_mcp_fretboard.engine import (
    get_extension_positions,
    get_k_notes_per_string_pattern,
    get_pentatonic_box,
    get_scale_notes,
    interval_between,
    note_at,
    parent_mode_for_box,
    positions_for,
)
from chuk_mcp_fretboard.engine.patterns import box_reference_fret

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def positions_to_json(positions: list[FretPosition]) -> list[dict[str, Any]]:
    """Positions as JSON-friendly dicts."""
    return [p.to_dict() for p in positions]


def register_fretboard_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register fretboard tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_list_tunings() -> str:
        """
        List the built-in tunings.

        Returns:
            JSON string with tuning names and their open-string notes

        Example:
            fretboard_list_tunings()
        """
        try:
            tunings = [t.to_dict() for t in STANDARD_TUNINGS.values()]
            return json.dumps({"status": "success", "tunings": tunings, "count": len(tunings)})
        except Exception as e:
            logger.exception("Failed to list tunings")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_list_tunings"] = fretboard_list_tunings

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_note_at(
        string: int,
        fret: int,
        tuning: str = "standard-6",
        tuning_notes: list[str] | None = None,
    ) -> str:
        """
        Get the note sounded at a string and fret.

        Strings are numbered from 0, the lowest-pitched string.

        Args:
            string: String index (0 = lowest)
            fret: Fret number (0 = open string)
            tuning: Built-in tuning name (see fretboard_list_tunings)
            tuning_notes: Explicit open-string notes, low to high (overrides tuning)

        Returns:
            JSON string with the note name and MIDI number

        Example:
            fretboard_note_at(string=0, fret=5)
        """
        try:
            resolved = resolve_tuning(tuning, tuning_notes)
            if not 0 <= string < resolved.string_count:
                message = ErrorMessages.STRING_NOT_IN_TUNING.format(
                    string=string, tuning=resolved.name
                )
                return json.dumps({"status": "error", "message": message})

            pitch = note_at(FretPosition(string, fret), resolved)
            if pitch is None:
                return json.dumps({"status": "error", "message": f"Invalid fret: {fret}"})

            return json.dumps(
                {
                    "status": "success",
                    "string": string,
                    "fret": fret,
                    "note": pitch.name,
                    "pitch": str(pitch),
                    "midi": pitch.midi,
                }
            )
        except Exception as e:
            logger.exception("Failed to resolve note")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_note_at"] = fretboard_note_at

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_positions_for(
        note: str,
        tuning: str = "standard-6",
        tuning_notes: list[str] | None = None,
        string_count: int | None = None,
        max_fret: int = 22,
    ) -> str:
        """
        Find every position that sounds a note, in any octave.

        Args:
            note: Note name (e.g., 'C#', 'Bb', 'E')
            tuning: Built-in tuning name
            tuning_notes: Explicit open-string notes, low to high (overrides tuning)
            string_count: Strings to search (default: all)
            max_fret: Highest fret to search

        Returns:
            JSON string with positions, lowest string first

        Example:
            fretboard_positions_for(note="A", max_fret=12)
        """
        try:
            if chroma(note) is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.INVALID_KEY.format(key=note)}
                )
            resolved = resolve_tuning(tuning, tuning_notes)
            positions = positions_for(note, resolved, string_count, max_fret)
            return json.dumps(
                {
                    "status": "success",
                    "note": note,
                    "tuning": resolved.name,
                    "positions": positions_to_json(positions),
                    "count": len(positions),
                }
            )
        except Exception as e:
            logger.exception("Failed to find positions")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_positions_for"] = fretboard_positions_for

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_interval(
        string_a: int,
        fret_a: int,
        string_b: int,
        fret_b: int,
        tuning: str = "standard-6",
        tuning_notes: list[str] | None = None,
    ) -> str:
        """
        Name the interval between two positions.

        The interval is octave-reduced, so an octave shape reads 'R'.

        Args:
            string_a: First string index
            fret_a: First fret
            string_b: Second string index
            fret_b: Second fret
            tuning: Built-in tuning name
            tuning_notes: Explicit open-string notes, low to high (overrides tuning)

        Returns:
            JSON string with the interval label (R, b2, 2, b3, ... 7)

        Example:
            fretboard_interval(string_a=0, fret_a=3, string_b=2, fret_b=5)
        """
        try:
            resolved = resolve_tuning(tuning, tuning_notes)
            label = interval_between(
                FretPosition(string_a, fret_a), FretPosition(string_b, fret_b), resolved
            )
            if label is None:
                return json.dumps({"status": "error", "message": "Invalid position"})
            return json.dumps({"status": "success", "interval": label})
        except Exception as e:
            logger.exception("Failed to compute interval")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_interval"] = fretboard_interval

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_nps_pattern(
        key: str,
        mode: str = "ionian",
        notes_per_string: int = 3,
        seed_fret: int = 0,
        tuning: str = "standard-6",
        tuning_notes: list[str] | None = None,
        string_count: int | None = None,
    ) -> str:
        """
        Build a notes-per-string scale shape.

        Three notes per string is the usual guitar fingering (span up to
        5 frets); two per string suits bass (span up to 4 frets).

        Args:
            key: Root note (e.g., 'A', 'F#')
            mode: Scale or mode name (see fretboard_list_modes)
            notes_per_string: 3 for guitar shapes, 2 for bass shapes
            seed_fret: Fret the shape starts around
            tuning: Built-in tuning name
            tuning_notes: Explicit open-string notes, low to high (overrides tuning)
            string_count: Strings to use (default: all)

        Returns:
            JSON string with positions, lowest string first

        Example:
            fretboard_nps_pattern(key="A", mode="dorian", seed_fret=5)
        """
        try:
            if chroma(key) is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.INVALID_KEY.format(key=key)}
                )
            if not get_scale_notes(key, mode):
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.UNKNOWN_MODE.format(mode=mode)}
                )

            resolved = resolve_tuning(tuning, tuning_notes)
            positions = get_k_notes_per_string_pattern(
                key, mode, resolved, string_count, seed_fret, k=notes_per_string
            )
            return json.dumps(
                {
                    "status": "success",
                    "key": key,
                    "mode": mode,
                    "tuning": resolved.name,
                    "notes_per_string": notes_per_string,
                    "positions": positions_to_json(positions),
                    "count": len(positions),
                }
            )
        except Exception as e:
            logger.exception("Failed to build notes-per-string pattern")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_nps_pattern"] = fretboard_nps_pattern

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_pentatonic_box(
        key: str,
        scale_type: str = "minor",
        box: int = 0,
        include_extensions: bool = False,
        tuning: str = "standard-6",
        tuning_notes: list[str] | None = None,
        string_count: int | None = None,
    ) -> str:
        """
        Build one of the five pentatonic boxes.

        Box 0 starts on the first root of the lowest string; each further
        box starts one pentatonic note higher. With include_extensions the
        two notes that complete the box into a seven-note mode are added.

        Args:
            key: Root note (e.g., 'A')
            scale_type: 'minor' or 'major'
            box: Box index, 0-4
            include_extensions: Add the parent-mode notes inside the box range
            tuning: Built-in tuning name
            tuning_notes: Explicit open-string notes, low to high (overrides tuning)
            string_count: Strings to use (default: all)

        Returns:
            JSON string with box positions, reference fret and parent mode

        Example:
            fretboard_pentatonic_box(key="A", scale_type="minor", box=0)
        """
        try:
            if chroma(key) is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.INVALID_KEY.format(key=key)}
                )
            ptype = PentatonicType(scale_type)
            resolved = resolve_tuning(tuning, tuning_notes)

            positions = get_pentatonic_box(key, ptype, box, resolved, string_count)
            if not positions:
                return json.dumps(
                    {"status": "error", "message": f"Box {box} cannot be placed in {key}"}
                )

            result: dict[str, Any] = {
                "status": "success",
                "key": key,
                "scale_type": ptype.value,
                "box": box,
                "tuning": resolved.name,
                "reference_fret": box_reference_fret(key, ptype, box, resolved),
                "parent_mode": parent_mode_for_box(ptype, box),
                "positions": positions_to_json(positions),
            }
            if include_extensions:
                extensions = get_extension_positions(
                    positions, key, ptype, resolved, string_count
                )
                result["extensions"] = positions_to_json(extensions)

            return json.dumps(result)
        except Exception as e:
            logger.exception("Failed to build pentatonic box")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_pentatonic_box"] = fretboard_pentatonic_box

    return tools
