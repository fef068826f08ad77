"""
Scale primitives - ScaleDegree, ScaleType, Key.

Scales are written as degree formulas ("1 2 b3 4 5 6 b7"), the way they are
taught on the fretboard. A formula resolves to semitones from the root and,
given a spelled root, to correctly spelled note names (one letter per
degree number). Keys are scale types applied to a root pitch.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

from .pitch import LETTERS, NATURALS, PitchClass, accidental_string, split_note_name

# Semitones of the natural degrees 1-7 of the major scale
MAJOR_STEPS: tuple[int, ...] = (0, 2, 4, 5, 7, 9, 11)

_DEGREE_RE = re.compile(r"^([#b]*)([1-7])$")


@dataclass(frozen=True)
class ScaleDegree:
    """
    A scale degree with optional alteration.

    Degree is 1-7 (tonic to leading tone), measured against the major scale.
    Alteration is semitones: -1 = flat, +1 = sharp, 0 = natural.

    Examples:
        ScaleDegree(1) = tonic
        ScaleDegree(7, -1) = flat 7 (minor seventh)
        ScaleDegree(4, +1) = raised 4 (lydian)
        ScaleDegree.parse("bb7") = diminished seventh
    """

    degree: int  # 1-7
    alteration: int = 0  # -1 = flat, +1 = sharp

    def __post_init__(self) -> None:
        if not 1 <= self.degree <= 7:
            raise ValueError(f"Degree must be 1-7, got {self.degree}")

    @property
    def semitones(self) -> int:
        """Semitones above the root."""
        return MAJOR_STEPS[self.degree - 1] + self.alteration

    @classmethod
    def parse(cls, text: str) -> ScaleDegree:
        """Parse a degree token like '5', 'b3', '#4' or 'bb7'."""
        match = _DEGREE_RE.match(text.strip())
        if match is None:
            raise ValueError(f"Invalid scale degree: {text!r}")
        accidentals, degree = match.groups()
        return cls(int(degree), accidentals.count("#") - accidentals.count("b"))

    def __str__(self) -> str:
        return f"{accidental_string(self.alteration)}{self.degree}"

    def __repr__(self) -> str:
        if self.alteration == 0:
            return f"ScaleDegree({self.degree})"
        return f"ScaleDegree({self.degree}, {self.alteration})"


@dataclass(frozen=True)
class ScaleType:
    """
    A scale defined by its degree formula.

    Immutable and hashable. Look scales up by name with ScaleType.get().
    """

    degrees: tuple[ScaleDegree, ...]
    name: str = ""

    # Common scale types (defined after class)
    MAJOR: ClassVar[ScaleType]
    NATURAL_MINOR: ClassVar[ScaleType]
    MAJOR_PENTATONIC: ClassVar[ScaleType]
    MINOR_PENTATONIC: ClassVar[ScaleType]

    def __post_init__(self) -> None:
        if not self.degrees or self.degrees[0].semitones != 0:
            raise ValueError(f"Scale formula must start on the root: {self.name}")

    @property
    def formula(self) -> str:
        """Formula as written, e.g. '1 2 b3 4 5 b6 b7'."""
        return " ".join(str(d) for d in self.degrees)

    @property
    def semitones(self) -> list[int]:
        """Semitones of every degree above the root."""
        return [d.semitones for d in self.degrees]

    def get_pitches(self, root: PitchClass) -> list[PitchClass]:
        """Get all pitch classes in this scale starting from root."""
        return [root.transpose(s) for s in self.semitones]

    def spell(self, root: str) -> list[str]:
        """
        Spell the scale from a named root.

        Each degree takes the letter its number implies, so D dorian gives
        D E F G A B C and F# major gives F# G# A# B C# D# E#.

        Raises:
            ValueError: If root is not a note name
        """
        parts = split_note_name(root)
        if parts is None:
            raise ValueError(f"Invalid root: {root!r}")
        letter, alteration, _ = parts
        root_index = LETTERS.index(letter)
        root_pc = NATURALS[letter] + alteration

        names = []
        for degree in self.degrees:
            target_letter = LETTERS[(root_index + degree.degree - 1) % 7]
            target_pc = (root_pc + degree.semitones) % 12
            # Smallest signed offset from the letter's natural to the target
            offset = (target_pc - NATURALS[target_letter] + 6) % 12 - 6
            names.append(target_letter + accidental_string(offset))
        return names

    @classmethod
    def from_formula(cls, formula: str, name: str = "") -> ScaleType:
        """Build a scale from a space-separated degree formula."""
        return cls(tuple(ScaleDegree.parse(token) for token in formula.split()), name)

    @classmethod
    def get(cls, name: str) -> ScaleType | None:
        """Look up a scale in the dictionary by name or alias (case-insensitive)."""
        key = " ".join(name.strip().lower().split())
        key = SCALE_ALIASES.get(key, key)
        return SCALES.get(key)

    @classmethod
    def names(cls) -> list[str]:
        """All canonical scale names."""
        return list(SCALES)

    def __str__(self) -> str:
        return self.name or self.formula

    def __repr__(self) -> str:
        if self.name:
            return f"ScaleType({self.name!r})"
        return f"ScaleType({self.formula!r})"


# Scale dictionary: canonical name -> degree formula
SCALE_FORMULAS: dict[str, str] = {
    # Modes of the major scale
    "ionian": "1 2 3 4 5 6 7",
    "dorian": "1 2 b3 4 5 6 b7",
    "phrygian": "1 b2 b3 4 5 b6 b7",
    "lydian": "1 2 3 #4 5 6 7",
    "mixolydian": "1 2 3 4 5 6 b7",
    "aeolian": "1 2 b3 4 5 b6 b7",
    "locrian": "1 b2 b3 4 b5 b6 b7",
    # Modes of harmonic minor
    "harmonic minor": "1 2 b3 4 5 b6 7",
    "locrian 6": "1 b2 b3 4 b5 6 b7",
    "ionian #5": "1 2 3 4 #5 6 7",
    "dorian #4": "1 2 b3 #4 5 6 b7",
    "phrygian dominant": "1 b2 3 4 5 b6 b7",
    "lydian #9": "1 #2 3 #4 5 6 7",
    "ultralocrian": "1 b2 b3 b4 b5 b6 bb7",
    # Modes of melodic minor
    "melodic minor": "1 2 b3 4 5 6 7",
    "dorian b2": "1 b2 b3 4 5 6 b7",
    "lydian augmented": "1 2 3 #4 #5 6 7",
    "lydian dominant": "1 2 3 #4 5 6 b7",
    "mixolydian b6": "1 2 3 4 5 b6 b7",
    "locrian #2": "1 2 b3 4 b5 b6 b7",
    "altered": "1 b2 b3 b4 b5 b6 b7",
    # Symmetric
    "whole tone": "1 2 3 #4 #5 b7",
    "diminished": "1 b2 b3 3 #4 5 6 b7",
    "whole-half diminished": "1 2 b3 4 b5 b6 6 7",
    # Other
    "blues": "1 b3 4 b5 5 b7",
    "major pentatonic": "1 2 3 5 6",
    "minor pentatonic": "1 b3 4 5 b7",
}

SCALE_ALIASES: dict[str, str] = {
    "major": "ionian",
    "minor": "aeolian",
    "natural minor": "aeolian",
    "half-whole diminished": "diminished",
    "super locrian": "altered",
    "locrian #6": "locrian 6",
    "lydian #2": "lydian #9",
    "phrygian #6": "dorian b2",
    "hindu": "mixolydian b6",
    "minor blues": "blues",
}

SCALES: dict[str, ScaleType] = {
    name: ScaleType.from_formula(formula, name) for name, formula in SCALE_FORMULAS.items()
}

ScaleType.MAJOR = SCALES["ionian"]
ScaleType.NATURAL_MINOR = SCALES["aeolian"]
ScaleType.MAJOR_PENTATONIC = SCALES["major pentatonic"]
ScaleType.MINOR_PENTATONIC = SCALES["minor pentatonic"]


@dataclass(frozen=True)
class Key:
    """
    A key is a root pitch class plus a scale type.

    This is the context for resolving scale degrees to actual pitches.

    Examples:
        Key(PitchClass.C, ScaleType.MAJOR) = C major
        Key(PitchClass.D, ScaleType.NATURAL_MINOR) = D minor
    """

    root: PitchClass
    scale: ScaleType

    def degree_to_pitch(self, degree: ScaleDegree) -> PitchClass:
        """Resolve a (possibly altered) degree against the key's root."""
        return self.root.transpose(degree.semitones)

    def __str__(self) -> str:
        return f"{self.root.spell()} {self.scale}"
