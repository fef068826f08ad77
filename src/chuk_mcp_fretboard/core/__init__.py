"""
Core theory primitives - the layer the fretboard engine composes on.

- PitchClass: The 12 chromatic pitch classes (0-11)
- Interval: Octave-reduced distance with its teaching label
- Pitch: Spelled note with octave and MIDI number
- chroma: The single normalisation point for pitch comparison
- ScaleDegree / ScaleType / Key: Degree formulas and the scale dictionary
- ChordQuality / Chord / RomanNumeral: Interval stacks and their labels
- Tuning / FretPosition: Fretboard coordinates
"""

from chuk_mcp_fretboard.core.chord import Chord, ChordQuality, RomanNumeral
from chuk_mcp_fretboard.core.fretboard import (
    STANDARD_TUNINGS,
    FretPosition,
    Tuning,
    get_tuning,
    resolve_tuning,
)
from chuk_mcp_fretboard.core.pitch import Interval, Pitch, PitchClass, chroma
from chuk_mcp_fretboard.core.scale import SCALES, Key, ScaleDegree, ScaleType

__all__ = [
    # Pitch
    "PitchClass",
    "Interval",
    "Pitch",
    "chroma",
    # Scale
    "ScaleDegree",
    "ScaleType",
    "SCALES",
    "Key",
    # Chord
    "ChordQuality",
    "Chord",
    "RomanNumeral",
    # Fretboard
    "Tuning",
    "FretPosition",
    "STANDARD_TUNINGS",
    "get_tuning",
    "resolve_tuning",
]
