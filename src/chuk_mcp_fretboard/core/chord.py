"""
Chord primitives - ChordQuality, RomanNumeral, Chord.

Chords are stacks of intervals. Chord qualities define the interval pattern.
Roman numerals are key-independent chord references used to label
progression chords.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .pitch import PitchClass
from .scale import Key, ScaleDegree


@dataclass(frozen=True)
class ChordQuality:
    """
    A chord quality defined by its intervals from the root.

    Intervals are semitones measured from the root, in ascending order.
    For example, a major triad is (0, 4, 7).
    """

    intervals: tuple[int, ...]
    name: str = ""
    symbol: str = ""

    # Common chord qualities (defined after class)
    MAJOR: ClassVar[ChordQuality]
    MINOR: ClassVar[ChordQuality]
    DIMINISHED: ClassVar[ChordQuality]
    AUGMENTED: ClassVar[ChordQuality]
    MAJOR_7: ClassVar[ChordQuality]
    MINOR_7: ClassVar[ChordQuality]
    DOMINANT_7: ClassVar[ChordQuality]

    def get_pitches(self, root: PitchClass) -> list[PitchClass]:
        """Get all pitch classes in this chord, root first."""
        return [root.transpose(semitones) for semitones in self.intervals]

    def get_midi_notes(self, root_midi: int) -> list[int]:
        """Get MIDI note numbers for this chord, sorted ascending."""
        return [root_midi + semitones for semitones in self.intervals]

    @property
    def is_minor(self) -> bool:
        """True when the chord is built on a minor third."""
        return 3 in self.intervals

    @classmethod
    def from_suffix(cls, suffix: str) -> ChordQuality | None:
        """Quality for a progression token suffix: 'm', 'M', 'dim' or 'aug'."""
        return _SUFFIXES.get(suffix)

    @classmethod
    def from_intervals(cls, intervals: tuple[int, ...] | list[int]) -> ChordQuality:
        """Find the named quality with these intervals, or an unnamed one."""
        wanted = tuple(intervals)
        for quality in _ALL_QUALITIES:
            if quality.intervals == wanted:
                return quality
        return cls(wanted)

    def __str__(self) -> str:
        return self.name or f"ChordQuality({self.intervals})"


ChordQuality.MAJOR = ChordQuality((0, 4, 7), "major", "")
ChordQuality.MINOR = ChordQuality((0, 3, 7), "minor", "m")
ChordQuality.DIMINISHED = ChordQuality((0, 3, 6), "diminished", "dim")
ChordQuality.AUGMENTED = ChordQuality((0, 4, 8), "augmented", "aug")
ChordQuality.MAJOR_7 = ChordQuality((0, 4, 7, 11), "major 7", "maj7")
ChordQuality.MINOR_7 = ChordQuality((0, 3, 7, 10), "minor 7", "m7")
ChordQuality.DOMINANT_7 = ChordQuality((0, 4, 7, 10), "dominant 7", "7")

_ALL_QUALITIES: tuple[ChordQuality, ...] = (
    ChordQuality.MAJOR,
    ChordQuality.MINOR,
    ChordQuality.DIMINISHED,
    ChordQuality.AUGMENTED,
    ChordQuality.MAJOR_7,
    ChordQuality.MINOR_7,
    ChordQuality.DOMINANT_7,
)

_SUFFIXES: dict[str, ChordQuality] = {
    "M": ChordQuality.MAJOR,
    "m": ChordQuality.MINOR,
    "dim": ChordQuality.DIMINISHED,
    "aug": ChordQuality.AUGMENTED,
}


@dataclass(frozen=True)
class Chord:
    """
    A concrete chord with a root pitch and quality.

    This is the resolved form - an actual chord that can be played.
    """

    root: PitchClass
    quality: ChordQuality

    def get_pitches(self) -> list[PitchClass]:
        """Get all pitch classes in this chord."""
        return self.quality.get_pitches(self.root)

    def get_midi_notes(self, octave: int = 4) -> list[int]:
        """
        Get MIDI note numbers for this chord.

        Args:
            octave: Octave for the root (default 4)

        Returns:
            List of MIDI note numbers
        """
        return self.quality.get_midi_notes(self.root.to_midi(octave))

    def __str__(self) -> str:
        return f"{self.root.spell()}{self.quality.symbol}"


@dataclass(frozen=True)
class RomanNumeral:
    """
    A key-independent chord reference.

    Roman numerals represent chords relative to the tonic:
    I, ii, iii, IV, V, vi, vii° in major, bVII for borrowed chords.
    """

    degree: ScaleDegree
    quality: ChordQuality

    def resolve(self, key: Key) -> Chord:
        """Resolve this Roman numeral to a concrete chord in a key."""
        return Chord(key.degree_to_pitch(self.degree), self.quality)

    def __str__(self) -> str:
        numeral_map = {1: "I", 2: "II", 3: "III", 4: "IV", 5: "V", 6: "VI", 7: "VII"}
        base = numeral_map[self.degree.degree]

        if self.degree.alteration < 0:
            base = "b" * -self.degree.alteration + base
        elif self.degree.alteration > 0:
            base = "#" * self.degree.alteration + base

        # Case indicates quality
        if self.quality.is_minor:
            base = base.lower()

        if self.quality == ChordQuality.DIMINISHED:
            base += "°"
        elif self.quality == ChordQuality.AUGMENTED:
            base += "+"
        elif self.quality in (ChordQuality.DOMINANT_7, ChordQuality.MINOR_7):
            base += "7"
        elif self.quality == ChordQuality.MAJOR_7:
            base += "Δ7"

        return base
