"""
Tests for the voicing resolver.

Tests cover:
- String-role map per tuning
- The root-fret rule
- Voicing placement for every catalog shape
- CAGED placement
"""

import pytest

from chuk_mcp_fretboard.catalog import CatalogLoader
from chuk_mcp_fretboard.constants import TriadQuality
from chuk_mcp_fretboard.core import STANDARD_TUNINGS, FretPosition, PitchClass, Tuning, chroma
from chuk_mcp_fretboard.engine import (
    compute_root_fret,
    get_caged_positions,
    note_at,
    place_voicing,
    place_voicing_labeled,
    string_role_offset,
)
from chuk_mcp_fretboard.engine.scale_source import scale_chromas
from chuk_mcp_fretboard.engine.voicing import label_semitones
from chuk_mcp_fretboard.models import ChordVoicingShape, ShapeElement

KEYS = [pc.spell() for pc in PitchClass]


def make_shape(positions: list[tuple[int, int]], intervals: list[str]) -> ChordVoicingShape:
    """Build a voicing shape from (string, offset) pairs."""
    return ChordVoicingShape(
        name="test",
        elements=[ShapeElement(string=s, offset=o) for s, o in positions],
        intervals=intervals,
    )


class TestStringRoleOffset:
    """Tests for the string-role map."""

    @pytest.mark.parametrize(
        "tuning_name,expected",
        [
            ("standard-6", 0),
            ("drop-d-6", 0),
            ("standard-7", 1),
            ("drop-a-7", 1),
            ("bass-standard-4", 0),
            ("bass-standard-5", 1),
            ("bass-standard-6", 1),
        ],
    )
    def test_standard_tunings(self, tuning_name: str, expected: int) -> None:
        """Reference roles line up with the matching strings."""
        assert string_role_offset(STANDARD_TUNINGS[tuning_name]) == expected

    def test_custom_tuning(self) -> None:
        """An 8-string with low F# and B shifts by two."""
        tuning = Tuning.from_notes(["F#1", "B1", "E2", "A2", "D3", "G3", "B3", "E4"], "eight")
        assert string_role_offset(tuning) == 2


class TestComputeRootFret:
    """Tests for the root-fret rule."""

    def test_g_b_e_c_major(self, guitar: Tuning) -> None:
        """C major on G-B-E sits at fret 3."""
        shape = make_shape([(3, 2), (4, 2), (5, 0)], ["R", "3", "5"])
        assert compute_root_fret("C", shape, guitar) == 3

    def test_d_g_b_c_major(self, guitar: Tuning) -> None:
        """C major on D-G-B sits at fret 8."""
        shape = make_shape([(2, 2), (3, 1), (4, 0)], ["R", "3", "5"])
        assert compute_root_fret("C", shape, guitar) == 8

    def test_floor_lifts_open_position(self, guitar: Tuning) -> None:
        """A root at fret 0 moves up an octave."""
        shape = make_shape([(0, 0), (1, 2)], ["R", "5"])
        assert compute_root_fret("E", shape, guitar) == 12
        assert compute_root_fret("F", shape, guitar) == 1

    def test_negative_offsets_raise_floor(self, guitar: Tuning) -> None:
        """Frets below the root never go negative."""
        shape = make_shape([(2, 0), (3, -2)], ["R", "b7"])
        for key in KEYS:
            root_fret = compute_root_fret(key, shape, guitar)
            assert root_fret >= 2

    def test_ceiling(self, guitar: Tuning) -> None:
        """Root fret stays at or below 14."""
        shape = make_shape([(1, 0), (2, 2)], ["R", "5"])
        for key in KEYS:
            assert 1 <= compute_root_fret(key, shape, guitar) <= 14

    def test_string_offset_argument(self, seven_string: Tuning) -> None:
        """An explicit offset overrides the role map."""
        shape = make_shape([(1, 0)], ["R"])
        # Role 1 is A2 through the role map, E2 with offset 0
        assert compute_root_fret("A", shape, seven_string) == 12
        assert compute_root_fret("A", shape, seven_string, string_offset=0) == 5

    def test_invalid_key(self, guitar: Tuning) -> None:
        """Unparseable key raises."""
        shape = make_shape([(0, 0)], ["R"])
        with pytest.raises(ValueError, match="Invalid key"):
            compute_root_fret("H", shape, guitar)

    def test_missing_root_string(self, guitar: Tuning) -> None:
        """A root on a string the tuning lacks raises."""
        shape = make_shape([(-1, 2), (0, 1)], ["R", "3"])
        with pytest.raises(ValueError, match="not available"):
            compute_root_fret("C", shape, guitar)


class TestPlaceVoicing:
    """Tests for voicing placement."""

    def test_c_major_g_b_e(self, guitar: Tuning) -> None:
        """Positions and their labels."""
        shape = make_shape([(3, 2), (4, 2), (5, 0)], ["R", "3", "5"])
        placed = place_voicing_labeled("C", shape, guitar)
        assert [(p.string, p.fret, p.note, label) for p, label in placed] == [
            (3, 5, "C", "R"),
            (4, 5, "E", "3"),
            (5, 3, "G", "5"),
        ]

    def test_place_voicing_returns_positions(self, guitar: Tuning) -> None:
        """Plain placement gives annotated positions in shape order."""
        shape = make_shape([(3, 2), (4, 2), (5, 0)], ["R", "3", "5"])
        positions = place_voicing("C", shape, guitar)
        assert all(isinstance(p, FretPosition) for p in positions)
        assert positions == [FretPosition(3, 5), FretPosition(4, 5), FretPosition(5, 3)]
        assert [p.note for p in positions] == ["C", "E", "G"]
        assert positions == [p for p, _ in place_voicing_labeled("C", shape, guitar)]

    def test_seven_string_shift(self, guitar: Tuning, seven_string: Tuning) -> None:
        """The same shape lands one string higher on a 7-string."""
        shape = make_shape([(2, 2), (3, 1), (4, 0)], ["R", "3", "5"])
        six = place_voicing("C", shape, guitar)
        seven = place_voicing("C", shape, seven_string)
        assert [(p.string + 1, p.fret) for p in six] == [(p.string, p.fret) for p in seven]

    def test_missing_strings_dropped(self, bass: Tuning) -> None:
        """Strings the tuning lacks are dropped, labels stay aligned."""
        shape = make_shape([(2, 2), (3, 1), (4, 0)], ["R", "3", "5"])
        placed = place_voicing_labeled("C", shape, bass)
        assert [(p.string, label) for p, label in placed] == [(2, "R"), (3, "3")]

    def test_every_catalog_shape(self, catalog: CatalogLoader, guitar: Tuning) -> None:
        """Every tabulated shape sounds its labelled intervals in every key."""
        for family in catalog.list_voicing_families():
            for string_set in family.string_sets:
                if string_set.extended_range_only:
                    continue
                for shape in string_set.inversions:
                    for key in KEYS:
                        self._check_shape(key, shape, guitar)

    def test_extended_range_shapes(self, catalog: CatalogLoader, seven_string: Tuning) -> None:
        """Every shape, B-E-A sets included, works on a 7-string."""
        for family in catalog.list_voicing_families():
            for string_set in family.string_sets:
                for shape in string_set.inversions:
                    for key in KEYS:
                        self._check_shape(key, shape, seven_string)

    @staticmethod
    def _check_shape(key: str, shape: ChordVoicingShape, tuning: Tuning) -> None:
        placed = place_voicing_labeled(key, shape, tuning)
        assert len(placed) == len(shape.elements)
        root = next(p for p, label in placed if label == "R")
        root_pitch = note_at(root, tuning)
        assert chroma(root_pitch) == chroma(key)
        for position, label in placed:
            assert 0 <= position.fret <= 22
            semitones = (note_at(position, tuning).midi - root_pitch.midi) % 12
            assert semitones == label_semitones(label), f"{key} {shape.name} {label}"


class TestCaged:
    """Tests for CAGED placement."""

    def test_g_major_e_shape(self, catalog: CatalogLoader, guitar: Tuning) -> None:
        """E shape for G major is the barre chord at fret 3."""
        placement = get_caged_positions("G", catalog.get_caged_shape("E"), "major", guitar)
        assert placement.root_fret == 3
        assert [(p.string, p.fret) for p in placement.chord] == [
            (0, 3),
            (1, 5),
            (2, 5),
            (3, 4),
            (4, 3),
            (5, 3),
        ]

    def test_open_shapes_move_up(self, catalog: CatalogLoader, guitar: Tuning) -> None:
        """Open E shape for E anchors at fret 12."""
        placement = get_caged_positions("E", catalog.get_caged_shape("E"), "major", guitar)
        assert placement.root_fret == 12

    @pytest.mark.parametrize("quality", ["major", "minor"])
    def test_every_shape_every_key(
        self, catalog: CatalogLoader, guitar: Tuning, quality: str
    ) -> None:
        """Chord tones and scale tones are right for every form and key."""
        scale_name = "major" if quality == "major" else "minor"
        third = 4 if quality == "major" else 3
        for shape in catalog.list_caged_shapes():
            for key in KEYS:
                placement = get_caged_positions(key, shape, quality, guitar)
                root = chroma(key)
                triad = {root, (root + third) % 12, (root + 7) % 12}
                scale = scale_chromas(key, scale_name)

                assert placement.root_fret >= 1
                assert placement.quality == TriadQuality(quality)
                for position in placement.chord:
                    assert 0 <= position.fret <= 22
                    assert chroma(note_at(position, guitar)) in triad
                for position in placement.scale:
                    assert 0 <= position.fret <= 22
                    assert chroma(note_at(position, guitar)) in scale

                root_position = FretPosition(shape.root_string, placement.root_fret)
                assert chroma(note_at(root_position, guitar)) == root

    def test_scale_spelling(self, catalog: CatalogLoader, guitar: Tuning) -> None:
        """Scale notes use the key's own spelling."""
        placement = get_caged_positions("F", catalog.get_caged_shape("E"), "major", guitar)
        notes = {p.note for p in placement.scale}
        assert "Bb" in notes
        assert "A#" not in notes

    def test_to_dict(self, catalog: CatalogLoader, guitar: Tuning) -> None:
        """Placement serialises for the tool layer."""
        placement = get_caged_positions("A", catalog.get_caged_shape("A"), "minor", guitar)
        data = placement.to_dict()
        assert data["shape"] == "A"
        assert data["quality"] == "minor"
        assert len(data["chord"]) == 5
