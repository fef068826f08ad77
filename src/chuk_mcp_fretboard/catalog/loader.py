"""
Catalog loader - discovers and loads the fretboard teaching catalog.

Catalog files can come from:
1. Built-in library (shipped with package)
2. Project catalog (user's project/catalog directory)

Each file holds one kind of entry: modes.yaml, voicings.yaml, caged.yaml,
progressions.yaml. A project file replaces the library file of the same name.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_mcp_fretboard.constants import ChordType, ModeCategory
from chuk_mcp_fretboard.models.mode import ModeDescriptor
from chuk_mcp_fretboard.models.progression import Progression
from chuk_mcp_fretboard.models.voicing import (
    CagedShape,
    CagedVariant,
    ChordVoicingShape,
    ShapeElement,
    VoicingFamily,
    VoicingStringSet,
)

logger = logging.getLogger(__name__)

MODES_FILE = "modes.yaml"
VOICINGS_FILE = "voicings.yaml"
CAGED_FILE = "caged.yaml"
PROGRESSIONS_FILE = "progressions.yaml"


class CatalogLoader:
    """
    Discovers and loads catalog entries.

    Entries are loaded from YAML files in the library and project directories.
    Parsed files are cached per file name; call clear_cache() after editing.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the catalog loader.

        Args:
            library_path: Path to built-in catalog library
            project_path: Path to project catalog directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, Any] = {}

    # Modes

    def list_modes(self) -> list[ModeDescriptor]:
        """List every catalog mode in file order."""
        return list(self._modes())

    def get_mode(self, name: str) -> ModeDescriptor | None:
        """
        Get a mode by name (case-insensitive).

        Args:
            name: Mode name (e.g., 'dorian', 'phrygian dominant')

        Returns:
            ModeDescriptor if found, None otherwise
        """
        wanted = name.strip().lower()
        for mode in self._modes():
            if mode.name == wanted:
                return mode
        return None

    def modes_by_category(self, category: ModeCategory | str) -> list[ModeDescriptor]:
        """All modes in one family."""
        category = ModeCategory(category)
        return [m for m in self._modes() if m.category == category]

    # Voicings

    def list_voicing_families(self) -> list[VoicingFamily]:
        """List every voicing family."""
        return list(self._voicings())

    def get_voicing_family(self, chord_type: ChordType | str) -> VoicingFamily | None:
        """Get the voicing family for a chord type."""
        chord_type = ChordType(chord_type)
        for family in self._voicings():
            if family.chord_type == chord_type:
                return family
        return None

    def get_voicing(
        self, chord_type: ChordType | str, string_set: str, inversion: int = 0
    ) -> ChordVoicingShape | None:
        """
        Get one voicing shape.

        Args:
            chord_type: Chord type (e.g., 'major', 'dom7')
            string_set: String set label (e.g., 'D-G-B')
            inversion: Inversion index (0 = root position)

        Returns:
            ChordVoicingShape if found, None otherwise
        """
        family = self.get_voicing_family(chord_type)
        if family is None:
            return None
        found = family.get_string_set(string_set)
        if found is None or not 0 <= inversion < len(found.inversions):
            return None
        return found.inversions[inversion]

    # CAGED

    def list_caged_shapes(self) -> list[CagedShape]:
        """The CAGED forms in C-A-G-E-D order."""
        return list(self._caged())

    def get_caged_shape(self, name: str) -> CagedShape | None:
        """Get a CAGED form by letter (case-insensitive)."""
        wanted = name.strip().upper()
        for shape in self._caged():
            if shape.name == wanted:
                return shape
        return None

    # Progressions

    def list_progressions(self, genre: str | None = None) -> list[Progression]:
        """List progressions, optionally filtered by genre (case-insensitive)."""
        progressions = list(self._progressions())
        if genre:
            progressions = [p for p in progressions if p.genre.lower() == genre.lower()]
        return progressions

    def get_progression(self, name: str) -> Progression | None:
        """Get a progression by exact name, falling back to case-insensitive."""
        progressions = self._progressions()
        for progression in progressions:
            if progression.name == name:
                return progression
        for progression in progressions:
            if progression.name.lower() == name.lower():
                return progression
        return None

    def clear_cache(self) -> None:
        """Clear the catalog cache."""
        self._cache.clear()

    # Loading

    def _modes(self) -> tuple[ModeDescriptor, ...]:
        return self._load(MODES_FILE, self._parse_modes)

    def _voicings(self) -> tuple[VoicingFamily, ...]:
        return self._load(VOICINGS_FILE, self._parse_voicings)

    def _caged(self) -> tuple[CagedShape, ...]:
        return self._load(CAGED_FILE, self._parse_caged)

    def _progressions(self) -> tuple[Progression, ...]:
        return self._load(PROGRESSIONS_FILE, self._parse_progressions)

    def _load(self, filename: str, parser: Any) -> tuple[Any, ...]:
        """Load and parse a catalog file, project copy first."""
        if filename in self._cache:
            return self._cache[filename]  # type: ignore[no-any-return]

        entries: tuple[Any, ...] = ()
        for path in self._candidate_files(filename):
            data = self._load_catalog_file(path)
            if data is None:
                continue
            try:
                entries = tuple(parser(data))
            except (ValidationError, ValueError, KeyError, TypeError) as e:
                logger.warning(f"Skipping invalid catalog file {path}: {e}")
                continue
            break

        self._cache[filename] = entries
        return entries

    def _candidate_files(self, filename: str) -> list[Path]:
        """Project file (if any) then library file."""
        paths = []
        if self.project_path:
            project_file = self.project_path / filename
            if project_file.exists():
                paths.append(project_file)
        library_file = self.library_path / filename
        if library_file.exists():
            paths.append(library_file)
        return paths

    def _load_catalog_file(self, path: Path) -> dict[str, Any] | None:
        """Load a YAML mapping from a file."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not read catalog file {path}: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Catalog file {path} is not a mapping")
            return None
        return data

    def _parse_modes(self, data: dict[str, Any]) -> list[ModeDescriptor]:
        """Parse modes from YAML data."""
        return [ModeDescriptor(**entry) for entry in data.get("modes", [])]

    def _parse_voicings(self, data: dict[str, Any]) -> list[VoicingFamily]:
        """Parse voicing families from YAML data."""
        families = []
        for family_data in data.get("families", []):
            string_sets = [
                VoicingStringSet(
                    label=set_data["label"],
                    extended_range_only=set_data.get("extended_range_only", False),
                    inversions=[
                        self._parse_shape(shape_data) for shape_data in set_data["inversions"]
                    ],
                )
                for set_data in family_data.get("string_sets", [])
            ]
            families.append(
                VoicingFamily(
                    chord_type=family_data["chord_type"],
                    description=family_data.get("description", ""),
                    string_sets=string_sets,
                )
            )
        return families

    def _parse_shape(self, data: dict[str, Any]) -> ChordVoicingShape:
        """Parse one voicing shape from YAML data."""
        return ChordVoicingShape(
            name=data["name"],
            elements=self._parse_elements(data["positions"]),
            intervals=[str(label) for label in data["intervals"]],
        )

    def _parse_elements(self, pairs: list[list[int]]) -> list[ShapeElement]:
        """Parse [string, offset] pairs."""
        return [ShapeElement(string=pair[0], offset=pair[1]) for pair in pairs]

    def _parse_caged(self, data: dict[str, Any]) -> list[CagedShape]:
        """Parse CAGED forms from YAML data."""

        def parse_variant(vdata: dict[str, Any]) -> CagedVariant:
            return CagedVariant(
                chord=self._parse_elements(vdata["chord"]),
                scale=self._parse_elements(vdata.get("scale", [])),
            )

        return [
            CagedShape(
                name=str(entry["name"]).upper(),
                root_string=entry["root_string"],
                major=parse_variant(entry["major"]),
                minor=parse_variant(entry["minor"]),
            )
            for entry in data.get("shapes", [])
        ]

    def _parse_progressions(self, data: dict[str, Any]) -> list[Progression]:
        """Parse progressions from YAML data."""
        return [
            Progression(
                name=entry["name"],
                numerals=[str(n) for n in entry["numerals"]],
                degrees=entry["degrees"],
                suggested_scale=entry.get("suggested_scale", "major"),
                genre=entry.get("genre", ""),
                beats_per_chord=entry.get("beats_per_chord", 4),
            )
            for entry in data.get("progressions", [])
        ]


@lru_cache(maxsize=1)
def default_catalog() -> CatalogLoader:
    """Shared loader over the built-in library."""
    return CatalogLoader()
