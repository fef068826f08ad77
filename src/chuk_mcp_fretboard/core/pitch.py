"""
Pitch primitives - PitchClass, Interval and Pitch.

These are the foundational types for all pitch-related operations.
PitchClass represents the 12 chromatic pitches (octave-independent).
Interval is the octave-reduced distance between two pitches.
Pitch is a spelled note with an octave, e.g. E2 or Bb3.

Every comparison in the engine goes through chroma(), the single
normalisation point from note names, MIDI numbers and pitches to 0-11.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

from ..constants import INTERVAL_LABELS

LETTERS = "CDEFGAB"

# Semitones of each natural note above C
NATURALS: dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

# Letter, any run of accidentals, optional (possibly negative) octave
_NOTE_RE = re.compile(r"^([A-Ga-g])([#b]*)(-?\d+)?$")

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
_FLAT_NAMES: list[str] = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]


def split_note_name(text: str) -> tuple[str, int, int | None] | None:
    """
    Split a note name into (letter, alteration, octave).

    Accepts any number of sharps or flats ("C#", "Bbb", "F##4") and an
    optional octave. Returns None when the text is not a note name.
    """
    match = _NOTE_RE.match(text.strip())
    if match is None:
        return None
    letter, accidentals, octave = match.groups()
    parsed_octave = int(octave) if octave is not None else None
    return letter.upper(), accidental_string_to_int(accidentals), parsed_octave


def accidental_string(alteration: int) -> str:
    """Render an alteration in semitones as '#'/'b' characters."""
    return "#" * alteration if alteration > 0 else "b" * -alteration


def accidental_string_to_int(accidentals: str) -> int:
    """Inverse of accidental_string()."""
    return accidentals.count("#") - accidentals.count("b")


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    def to_midi(self, octave: int = 4) -> int:
        """Convert to MIDI note number. C4 = 60."""
        return self.value + (octave + 1) * 12

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
        return names[self.value]

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        """Extract pitch class from MIDI note number."""
        return cls(midi_note % 12)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """
        Parse a pitch class from a name like 'C', 'C#', 'Db' or 'Ebb'.

        Octave suffixes are not accepted here; use chroma() for loose input.
        """
        parts = split_note_name(name)
        if parts is None or parts[2] is not None:
            raise ValueError(f"Unknown pitch class: {name}")
        letter, alteration, _ = parts
        return cls((NATURALS[letter] + alteration) % 12)


class Interval(IntEnum):
    """
    Octave-reduced distance between two pitches, in semitones.

    The label is the fretboard teaching name: R, b2, 2, b3 ... 7.
    """

    UNISON = 0
    MINOR_SECOND = 1
    MAJOR_SECOND = 2
    MINOR_THIRD = 3
    MAJOR_THIRD = 4
    PERFECT_FOURTH = 5
    TRITONE = 6
    PERFECT_FIFTH = 7
    MINOR_SIXTH = 8
    MAJOR_SIXTH = 9
    MINOR_SEVENTH = 10
    MAJOR_SEVENTH = 11

    @property
    def label(self) -> str:
        """Teaching label for this interval."""
        return INTERVAL_LABELS[self.value]

    @classmethod
    def between(cls, midi_a: int, midi_b: int) -> Interval:
        """Octave-reduced absolute distance between two MIDI notes."""
        return cls(abs(midi_b - midi_a) % 12)


@dataclass(frozen=True)
class Pitch:
    """
    A spelled note at a specific octave.

    The spelling is kept so that an open string named 'Eb2' stays 'Eb2';
    the MIDI number follows the spelling (Cb4 == 59, B#3 == 60).

    Examples:
        Pitch.parse("E2").midi == 40
        Pitch.from_midi(45) == Pitch("A", 0, 2)
    """

    letter: str
    alteration: int = 0
    octave: int = 4

    def __post_init__(self) -> None:
        if self.letter not in NATURALS:
            raise ValueError(f"Invalid note letter: {self.letter}")

    @property
    def name(self) -> str:
        """Note name without octave, e.g. 'F#'."""
        return self.letter + accidental_string(self.alteration)

    @property
    def midi(self) -> int:
        """MIDI note number. C4 = 60."""
        return NATURALS[self.letter] + self.alteration + (self.octave + 1) * 12

    @property
    def pitch_class(self) -> PitchClass:
        """Octave-independent pitch class."""
        return PitchClass.from_midi(self.midi)

    def transpose(self, semitones: int) -> Pitch:
        """Transpose by semitones, respelled with sharps."""
        return Pitch.from_midi(self.midi + semitones)

    @classmethod
    def from_midi(cls, midi_note: int, prefer_flats: bool = False) -> Pitch:
        """Build a pitch from a MIDI number using sharp (or flat) spelling."""
        name = PitchClass.from_midi(midi_note).spell(prefer_flats)
        return cls(name[0], accidental_string_to_int(name[1:]), midi_note // 12 - 1)

    @classmethod
    def parse(cls, text: str) -> Pitch:
        """Parse a note with octave like 'E2', 'Bb3' or 'F##4'."""
        parts = split_note_name(text)
        if parts is None or parts[2] is None:
            raise ValueError(f"Invalid pitch: {text!r}")
        letter, alteration, octave = parts
        return cls(letter, alteration, octave)

    def __str__(self) -> str:
        return f"{self.name}{self.octave}"


def chroma(value: str | int | Pitch | None) -> int | None:
    """
    Normalise anything pitch-like to a pitch class number 0-11.

    Strings may carry an octave and any mix of accidentals. Integers are
    treated as MIDI numbers (or pitch classes). Returns None for input that
    cannot be resolved.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Pitch):
        return value.midi % 12
    if isinstance(value, int):
        return value % 12
    parts = split_note_name(value)
    if parts is None:
        return None
    letter, alteration, _ = parts
    return (NATURALS[letter] + alteration) % 12
