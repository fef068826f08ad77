"""
Constants and enums for the fretboard engine.

No magic strings - use enums and module constants for constrained values.
"""

from enum import Enum

# Highest fret scanned by every pattern algorithm (inclusive)
MAX_FRET = 22

# Highest anchor fret a movable shape may be placed at. Shape offsets never
# exceed +5, so every placed fret stays within MAX_FRET.
ROOT_FRET_CEILING = 14

# Reference fret above which a pentatonic box wraps down an octave
BOX_WRAP_FRET = 12

# Strict pentatonic window around the reference fret: [ref - 1, ref + 4]
BOX_WINDOW_BELOW = 1
BOX_WINDOW_ABOVE = 4

# Relaxed pentatonic fallback: pair span limit and midpoint target (ref + 1.5)
BOX_FALLBACK_MAX_SPAN = 5
BOX_FALLBACK_CENTER_OFFSET = 1.5

# Max fret span of one string's run, keyed by notes per string
NPS_MAX_SPAN: dict[int, int] = {
    3: 5,  # 3NPS guitar shapes
    2: 4,  # 2NPS bass shapes (one finger per fret)
}

# Default fret window for full-neck scale and chord-tone maps
DEFAULT_SCALE_MAX_FRET = 12

# Canonical interval labels, indexed by semitones mod 12
INTERVAL_LABELS: tuple[str, ...] = (
    "R",
    "b2",
    "2",
    "b3",
    "3",
    "4",
    "b5",
    "5",
    "b6",
    "6",
    "b7",
    "7",
)

# Label used for the root element of a voicing shape
ROOT_LABEL = "R"


class PentatonicType(str, Enum):
    """Pentatonic scale families with a parent 7-note mode."""

    MINOR = "minor"
    MAJOR = "major"

    @property
    def scale_name(self) -> str:
        """Name of the pentatonic scale in the scale dictionary."""
        return f"{self.value} pentatonic"

    @property
    def parent_scale_name(self) -> str:
        """Parent diatonic mode that the extension notes complete."""
        return "aeolian" if self is PentatonicType.MINOR else "major"


class ModeCategory(str, Enum):
    """Families of the mode catalog."""

    MAJOR = "major"  # diatonic modes of the major scale
    HARMONIC_MINOR = "harmonic-minor"
    MELODIC_MINOR = "melodic-minor"
    SYMMETRIC = "symmetric"
    OTHER = "other"


class ChordType(str, Enum):
    """Voicing families in the voicing library."""

    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    AUGMENTED = "augmented"
    MAJOR_7 = "maj7"
    MINOR_7 = "min7"
    DOMINANT_7 = "dom7"


class TriadQuality(str, Enum):
    """Chord quality used by CAGED shapes."""

    MAJOR = "major"
    MINOR = "minor"


class PatternKind(str, Enum):
    """Scale pattern families that can be exported."""

    NPS = "nps"  # K notes per string
    PENTATONIC = "pentatonic"  # pentatonic box


class ErrorMessages:
    """Standardized error messages."""

    INVALID_KEY = "Invalid key: '{key}'. Expected a note name like 'C', 'F#' or 'Bb'."
    INVALID_TUNING = "Unknown tuning: '{tuning}'."
    INVALID_NOTE = "Invalid note: '{note}'. Expected a name with octave like 'E2'."
    UNKNOWN_MODE = "Unknown mode: '{mode}'."
    UNKNOWN_VOICING = "Unknown voicing: '{chord_type}' / '{string_set}' / inversion {inversion}."
    UNKNOWN_CAGED_SHAPE = "Unknown CAGED shape: '{shape}'."
    UNKNOWN_PROGRESSION = "Progression '{name}' not found."
    STRING_NOT_IN_TUNING = "String {string} is not available on tuning '{tuning}'."
    NO_DEFAULT_SPAN = "No default fret span for {k} notes per string; pass max_span."


class SuccessMessages:
    """Standardized success messages."""

    PATTERN_EXPORTED = "Exported {count} notes to {path}."
    PROGRESSION_EXPORTED = "Exported {count} chords to {path}."
