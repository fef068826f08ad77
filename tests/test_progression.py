"""
Tests for the chord progression builder.
"""

import pytest

from chuk_mcp_fretboard.core import Chord, ChordQuality, PitchClass, Tuning, chroma
from chuk_mcp_fretboard.engine import (
    ProgressionChord,
    build_progression_chords,
    chord_to_pitches,
    chord_tone_positions,
    note_at,
)
from chuk_mcp_fretboard.engine.progression import parse_degree_token


class TestDiatonicDegrees:
    """Tests for plain degree numbers."""

    def test_one_four_five(self) -> None:
        """I IV V in C are major triads on C F G."""
        chords = build_progression_chords("C", [1, 4, 5])
        assert [c.root for c in chords] == ["C", "F", "G"]
        assert all(c.intervals == (0, 4, 7) for c in chords)

    def test_minor_degrees(self) -> None:
        """ii, iii and vi are minor."""
        chords = build_progression_chords("C", [2, 3, 6])
        assert [c.root for c in chords] == ["D", "E", "A"]
        assert all(c.intervals == (0, 3, 7) for c in chords)

    def test_leading_tone(self) -> None:
        """vii is diminished."""
        (chord,) = build_progression_chords("C", [7])
        assert chord.root == "B"
        assert chord.intervals == (0, 3, 6)
        assert chord.numeral == "vii°"

    def test_string_digits(self) -> None:
        """'5' behaves like 5."""
        assert build_progression_chords("G", ["5"]) == build_progression_chords("G", [5])

    def test_sharp_spelling(self) -> None:
        """Roots are spelled with sharps, even in flat keys."""
        chords = build_progression_chords("F", [4, 1])
        assert chords[0].root == "A#"
        assert chords[1].root == "F"


class TestBorrowedTokens:
    """Tests for accidentals and quality suffixes."""

    def test_flat_seven(self) -> None:
        """b7 is a major triad a whole step below the tonic."""
        (chord,) = build_progression_chords("C", ["b7"])
        assert chord.root == "A#"
        assert chord.intervals == (0, 4, 7)
        assert chord.numeral == "bVII"

    def test_quality_suffixes(self) -> None:
        """m, M, dim and aug override the diatonic quality."""
        chords = build_progression_chords("A", ["1m", "4m", "5M", "2dim", "1aug"])
        assert [c.root for c in chords] == ["A", "D", "E", "B", "A"]
        assert [c.intervals for c in chords] == [
            (0, 3, 7),
            (0, 3, 7),
            (0, 4, 7),
            (0, 3, 6),
            (0, 4, 8),
        ]

    def test_accidental_with_suffix(self) -> None:
        """Accidental and suffix combine."""
        (chord,) = build_progression_chords("C", ["b6m"])
        assert chord.root == "G#"
        assert chord.intervals == (0, 3, 7)

    def test_sharp_four(self) -> None:
        """#4 without suffix is major."""
        (chord,) = build_progression_chords("C", ["#4"])
        assert chord.root == "F#"
        assert chord.quality == ChordQuality.MAJOR


class TestFallback:
    """Unrecognised tokens become the tonic major triad."""

    @pytest.mark.parametrize("token", [0, 8, -1, "9", "x", "", "bb7", "7maj", True, 2.5])
    def test_bad_tokens(self, token: object) -> None:
        """One bad token does not break the progression."""
        chords = build_progression_chords("E", [token, 5])  # type: ignore[list-item]
        assert chords[0].root == "E"
        assert chords[0].intervals == (0, 4, 7)
        assert chords[1].root == "B"

    def test_parse_returns_none(self) -> None:
        """The parser reports bad tokens as None."""
        assert parse_degree_token("x") is None
        assert parse_degree_token(8) is None
        assert parse_degree_token(False) is None

    def test_invalid_key(self) -> None:
        """An unparseable key raises."""
        with pytest.raises(ValueError, match="Invalid key"):
            build_progression_chords("H", [1])

    def test_empty(self) -> None:
        """No degrees, no chords."""
        assert build_progression_chords("C", []) == []


class TestProgressionChord:
    """Tests for ProgressionChord helpers."""

    def test_symbol_and_dict(self) -> None:
        """Symbols and dicts for display."""
        chord = ProgressionChord("A", (0, 3, 7), "vi")
        assert chord.symbol == "Am"
        assert chord.to_dict() == {
            "root": "A",
            "intervals": [0, 3, 7],
            "numeral": "vi",
            "symbol": "Am",
        }

    def test_chord_to_pitches(self) -> None:
        """Close position with the root in the given octave."""
        pitches = chord_to_pitches(ProgressionChord("E", (0, 4, 7)), octave=3)
        assert [str(p) for p in pitches] == ["E3", "G#3", "B3"]
        assert [p.midi for p in pitches] == [52, 56, 59]

    def test_to_chord(self) -> None:
        """Resolves to a core Chord with the named quality."""
        chord = ProgressionChord("G", (0, 4, 7, 10)).to_chord()
        assert chord == Chord(PitchClass.G, ChordQuality.DOMINANT_7)
        assert chord.get_midi_notes(octave=3) == [55, 59, 62, 65]

    def test_seventh_chord_pitches(self) -> None:
        """Four-note chords keep every tone."""
        pitches = chord_to_pitches(ProgressionChord("G", (0, 4, 7, 10)), octave=3)
        assert [str(p) for p in pitches] == ["G3", "B3", "D4", "F4"]

    def test_chord_tone_positions(self, guitar: Tuning) -> None:
        """Every chord-tone position, up to fret 12."""
        chord = ProgressionChord("G", (0, 4, 7))
        positions = chord_tone_positions(chord, guitar)
        tones = {chroma(n) for n in ("G", "B", "D")}
        assert positions
        assert {chroma(note_at(p, guitar)) for p in positions} == tones
        assert all(p.fret <= 12 for p in positions)
