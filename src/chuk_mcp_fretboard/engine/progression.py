"""
Chord progression builder - degree tokens to concrete chords.

Tokens are measured against the major scale of the key:

    1-7        diatonic triad (I ii iii IV V vi vii°)
    "b7"       accidental without suffix: major triad (bVII)
    "4m"       explicit quality: m, M, dim or aug
    "2dim"     accidental and quality may combine ("b6m")

Anything else becomes the tonic major triad, so one bad token never
breaks a whole progression.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from chuk_mcp_fretboard.constants import DEFAULT_SCALE_MAX_FRET, ErrorMessages
from chuk_mcp_fretboard.core.chord import Chord, ChordQuality, RomanNumeral
from chuk_mcp_fretboard.core.fretboard import FretPosition, Tuning
from chuk_mcp_fretboard.core.pitch import Pitch, PitchClass, chroma
from chuk_mcp_fretboard.core.scale import Key, ScaleDegree, ScaleType
from chuk_mcp_fretboard.engine.pitch_resolver import scale_positions

logger = logging.getLogger(__name__)

# Triad quality of each degree of the major scale
DIATONIC_QUALITIES: tuple[ChordQuality, ...] = (
    ChordQuality.MAJOR,
    ChordQuality.MINOR,
    ChordQuality.MINOR,
    ChordQuality.MAJOR,
    ChordQuality.MAJOR,
    ChordQuality.MINOR,
    ChordQuality.DIMINISHED,
)

_TOKEN_RE = re.compile(r"^([b#]?)([1-7])(m|M|dim|aug)?$")

_TONIC = RomanNumeral(ScaleDegree(1), ChordQuality.MAJOR)


@dataclass(frozen=True)
class ProgressionChord:
    """
    One chord of a built progression.

    root is spelled with sharps; intervals are semitones from the root.
    """

    root: str
    intervals: tuple[int, ...]
    numeral: str = ""

    @property
    def quality(self) -> ChordQuality:
        """Named quality for the intervals."""
        return ChordQuality.from_intervals(self.intervals)

    @property
    def symbol(self) -> str:
        """Chord symbol, e.g. 'Am' or 'F#dim'."""
        return f"{self.root}{self.quality.symbol}"

    def to_chord(self) -> Chord:
        """Concrete chord for pitch and MIDI lookups."""
        return Chord(PitchClass.parse(self.root), self.quality)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "root": self.root,
            "intervals": list(self.intervals),
            "numeral": self.numeral,
            "symbol": self.symbol,
        }


def parse_degree_token(token: int | str) -> RomanNumeral | None:
    """
    Parse a progression token into a Roman numeral.

    Returns None for anything that is not a valid token.
    """
    if isinstance(token, bool):
        return None
    if isinstance(token, int):
        if not 1 <= token <= 7:
            return None
        return RomanNumeral(ScaleDegree(token), DIATONIC_QUALITIES[token - 1])
    if not isinstance(token, str):
        return None

    match = _TOKEN_RE.match(token.strip())
    if match is None:
        return None
    accidental, number, suffix = match.groups()
    degree = ScaleDegree(int(number), {"b": -1, "#": 1}.get(accidental, 0))

    quality = ChordQuality.from_suffix(suffix) if suffix else None
    if quality is None:
        quality = ChordQuality.MAJOR if accidental else DIATONIC_QUALITIES[degree.degree - 1]
    return RomanNumeral(degree, quality)


def build_progression_chords(key: str, degrees: list[int | str]) -> list[ProgressionChord]:
    """
    Resolve degree tokens to chords in a key, one chord per token, in order.

    Args:
        key: Tonic note name (e.g., 'C', 'Bb')
        degrees: Degree tokens (ints 1-7 or strings like 'b7', '4m')

    Returns:
        Chords with sharp-spelled roots and semitone intervals

    Raises:
        ValueError: If key is not a note name
    """
    tonic = chroma(key)
    if tonic is None:
        raise ValueError(ErrorMessages.INVALID_KEY.format(key=key))
    major_key = Key(PitchClass(tonic), ScaleType.MAJOR)

    chords = []
    for token in degrees:
        numeral = parse_degree_token(token)
        if numeral is None:
            logger.debug(f"Unrecognised progression token {token!r}; using tonic major")
            numeral = _TONIC
        chord = numeral.resolve(major_key)
        chords.append(
            ProgressionChord(
                root=chord.root.spell(),
                intervals=chord.quality.intervals,
                numeral=str(numeral),
            )
        )
    return chords


def chord_to_pitches(chord: ProgressionChord, octave: int = 3) -> list[Pitch]:
    """Close-position pitches of a chord with the root in the given octave."""
    return [Pitch.from_midi(midi) for midi in chord.to_chord().get_midi_notes(octave)]


def chord_tone_positions(
    chord: ProgressionChord,
    tuning: Tuning,
    string_count: int | None = None,
    max_fret: int = DEFAULT_SCALE_MAX_FRET,
) -> list[FretPosition]:
    """Every position of the chord's tones, annotated with the tone name."""
    names = [pc.spell() for pc in chord.to_chord().get_pitches()]
    return scale_positions(names, tuning, string_count, max_fret)
