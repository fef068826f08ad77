"""
Theory tools - MCP tools for the mode, voicing and progression catalogs.

Catalog lookups come from CatalogLoader; placements come from the engine.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_fretboard.catalog import CatalogLoader
from chuk_mcp_fretboard.constants import ErrorMessages, TriadQuality
from chuk_mcp_fretboard.core.fretboard import resolve_tuning
from chuk_mcp_fretboard.engine import (
    build_progression_chords,
    chord_tone_positions,
    compute_root_fret,
    get_caged_positions,
    get_scale_notes,
    place_voicing_labeled,
)
from chuk_mcp_fretboard.tools.fretboard import positions_to_json

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_theory_tools(mcp: ChukMCPServer, catalog: CatalogLoader) -> dict[str, Any]:
    """
    Register mode, voicing and progression tools with the MCP server.

    Args:
        mcp: The MCP server instance
        catalog: The catalog loader

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_list_modes(
        category: str | None = None,
        key: str | None = None,
    ) -> str:
        """
        List the supported scales and modes.

        Args:
            category: Optional family filter (major, harmonic-minor,
                melodic-minor, symmetric, other)
            key: Optional root; when given, each mode lists its notes in that key

        Returns:
            JSON string with mode descriptors

        Example:
            fretboard_list_modes(category="major", key="D")
        """
        try:
            modes = catalog.modes_by_category(category) if category else catalog.list_modes()
            results = []
            for mode in modes:
                info = mode.to_dict()
                if key:
                    notes = get_scale_notes(key, mode.name)
                    info["notes"] = notes
                    if mode.characteristic_degree < len(notes):
                        info["characteristic_pitch"] = notes[mode.characteristic_degree]
                results.append(info)

            return json.dumps({"status": "success", "modes": results, "count": len(results)})
        except Exception as e:
            logger.exception("Failed to list modes")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_list_modes"] = fretboard_list_modes

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_list_voicings(chord_type: str | None = None) -> str:
        """
        List the movable chord voicings.

        Args:
            chord_type: Optional filter (major, minor, diminished, augmented,
                maj7, min7, dom7)

        Returns:
            JSON string with voicing families, their string sets and inversions

        Example:
            fretboard_list_voicings(chord_type="major")
        """
        try:
            if chord_type:
                family = catalog.get_voicing_family(chord_type)
                families = [family] if family is not None else []
            else:
                families = catalog.list_voicing_families()

            results = [
                {
                    "chord_type": family.chord_type.value,
                    "description": family.description,
                    "string_sets": [
                        {
                            "label": s.label,
                            "extended_range_only": s.extended_range_only,
                            "inversions": [shape.to_dict() for shape in s.inversions],
                        }
                        for s in family.string_sets
                    ],
                }
                for family in families
            ]
            return json.dumps({"status": "success", "voicings": results, "count": len(results)})
        except Exception as e:
            logger.exception("Failed to list voicings")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_list_voicings"] = fretboard_list_voicings

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_chord_voicing(
        key: str,
        chord_type: str = "major",
        string_set: str = "D-G-B",
        inversion: int = 0,
        tuning: str = "standard-6",
        tuning_notes: list[str] | None = None,
    ) -> str:
        """
        Place a movable chord voicing in a key.

        The shape is anchored so its root sounds the key, at fret 1 or
        higher, and shifted onto the right strings for 7-string and bass
        tunings.

        Args:
            key: Chord root (e.g., 'C', 'F#')
            chord_type: Voicing family (see fretboard_list_voicings)
            string_set: String set label (e.g., 'D-G-B', 'A-D-G-B')
            inversion: Inversion index (0 = root position)
            tuning: Built-in tuning name
            tuning_notes: Explicit open-string notes, low to high (overrides tuning)

        Returns:
            JSON string with root fret and labelled positions

        Example:
            fretboard_chord_voicing(key="C", chord_type="major", string_set="G-B-E")
        """
        try:
            shape = catalog.get_voicing(chord_type, string_set, inversion)
            if shape is None:
                message = ErrorMessages.UNKNOWN_VOICING.format(
                    chord_type=chord_type, string_set=string_set, inversion=inversion
                )
                return json.dumps({"status": "error", "message": message})

            resolved = resolve_tuning(tuning, tuning_notes)
            placed = place_voicing_labeled(key, shape, resolved)
            positions = [{**p.to_dict(), "interval": label} for p, label in placed]

            return json.dumps(
                {
                    "status": "success",
                    "key": key,
                    "chord_type": chord_type,
                    "string_set": string_set,
                    "shape": shape.name,
                    "tuning": resolved.name,
                    "root_fret": compute_root_fret(key, shape, resolved),
                    "positions": positions,
                }
            )
        except Exception as e:
            logger.exception("Failed to place voicing")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_chord_voicing"] = fretboard_chord_voicing

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_caged_shape(
        key: str,
        shape: str,
        quality: str = "major",
        tuning: str = "standard-6",
        tuning_notes: list[str] | None = None,
    ) -> str:
        """
        Place one of the five CAGED forms in a key.

        Args:
            key: Chord root (e.g., 'G')
            shape: CAGED letter: C, A, G, E or D
            quality: 'major' or 'minor'
            tuning: Built-in tuning name
            tuning_notes: Explicit open-string notes, low to high (overrides tuning)

        Returns:
            JSON string with chord positions and surrounding scale positions

        Example:
            fretboard_caged_shape(key="G", shape="E", quality="major")
        """
        try:
            caged = catalog.get_caged_shape(shape)
            if caged is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.UNKNOWN_CAGED_SHAPE.format(shape=shape),
                    }
                )

            resolved = resolve_tuning(tuning, tuning_notes)
            placement = get_caged_positions(key, caged, TriadQuality(quality), resolved)
            return json.dumps(
                {"status": "success", "key": key, "tuning": resolved.name, **placement.to_dict()}
            )
        except Exception as e:
            logger.exception("Failed to place CAGED shape")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_caged_shape"] = fretboard_caged_shape

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_list_progressions(genre: str | None = None) -> str:
        """
        List the named jam progressions.

        Args:
            genre: Optional genre filter (e.g., 'blues', 'rock')

        Returns:
            JSON string with progressions, their numerals and degree tokens

        Example:
            fretboard_list_progressions(genre="blues")
        """
        try:
            progressions = [p.to_dict() for p in catalog.list_progressions(genre)]
            return json.dumps(
                {"status": "success", "progressions": progressions, "count": len(progressions)}
            )
        except Exception as e:
            logger.exception("Failed to list progressions")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_list_progressions"] = fretboard_list_progressions

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_build_progression(
        key: str,
        degrees: list[int | str] | None = None,
        progression: str | None = None,
        include_positions: bool = False,
        tuning: str = "standard-6",
        tuning_notes: list[str] | None = None,
    ) -> str:
        """
        Turn scale degrees into concrete chords.

        Degrees are 1-7 (diatonic quality) or tokens such as 'b7' (major
        chord a whole step below the tonic), '4m' (minor iv) or '5M'
        (major V). Unrecognised tokens become the tonic major chord.

        Args:
            key: Tonic (e.g., 'A')
            degrees: Degree tokens; ignored when progression is given
            progression: Name of a catalog progression (see fretboard_list_progressions)
            include_positions: Also return every chord-tone position up to fret 12
            tuning: Built-in tuning name (used with include_positions)
            tuning_notes: Explicit open-string notes (used with include_positions)

        Returns:
            JSON string with chords (root, intervals, symbol)

        Example:
            fretboard_build_progression(key="E", degrees=[1, 4, 1, 5])
            fretboard_build_progression(key="A", progression="12-Bar Blues")
        """
        try:
            result: dict[str, Any] = {"status": "success", "key": key}
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
                result["progression"] = found.to_dict()
            if not degrees:
                return json.dumps({"status": "error", "message": "Degrees or progression required"})

            chords = build_progression_chords(key, degrees)
            result["chords"] = [c.to_dict() for c in chords]

            if include_positions:
                resolved = resolve_tuning(tuning, tuning_notes)
                result["tuning"] = resolved.name
                for info, chord in zip(result["chords"], chords):
                    info["positions"] = positions_to_json(chord_tone_positions(chord, resolved))

            return json.dumps(result)
        except Exception as e:
            logger.exception("Failed to build progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_build_progression"] = fretboard_build_progression

    return tools
