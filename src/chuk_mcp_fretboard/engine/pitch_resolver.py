"""
Pitch resolver - fretboard coordinates to pitches and back.

All lookups take an explicit Tuning. Invalid positions resolve to None
rather than raising, so renderers can query freely.
"""

from __future__ import annotations

from chuk_mcp_fretboard.constants import DEFAULT_SCALE_MAX_FRET, MAX_FRET
from chuk_mcp_fretboard.core.fretboard import FretPosition, Tuning
from chuk_mcp_fretboard.core.pitch import Interval, Pitch, chroma


def note_at(position: FretPosition, tuning: Tuning) -> Pitch | None:
    """
    Pitch sounded at a position.

    The open string keeps the tuning's spelling; fretted notes are spelled
    with sharps. Returns None for a string outside the tuning or a
    negative fret.
    """
    open_pitch = tuning.open_pitch(position.string)
    if open_pitch is None or position.fret < 0:
        return None
    if position.fret == 0:
        return open_pitch
    return open_pitch.transpose(position.fret)


def fret_scan(
    tuning: Tuning,
    string: int,
    chromas: set[int],
    min_fret: int = 0,
    max_fret: int = MAX_FRET,
) -> list[FretPosition]:
    """Ascending positions on one string whose pitch class is in chromas."""
    open_pitch = tuning.open_pitch(string)
    if open_pitch is None:
        return []
    base = open_pitch.midi
    return [
        FretPosition(string, fret)
        for fret in range(max(0, min_fret), max_fret + 1)
        if (base + fret) % 12 in chromas
    ]


def usable_strings(tuning: Tuning, string_count: int | None) -> int:
    """Strings to scan: the requested count, capped at the tuning's."""
    if string_count is None:
        return tuning.string_count
    return max(0, min(string_count, tuning.string_count))


def positions_for(
    pitch_class: str | int,
    tuning: Tuning,
    string_count: int | None = None,
    max_fret: int = MAX_FRET,
) -> list[FretPosition]:
    """
    Every position sounding a pitch class, string-major then fret ascending.

    Args:
        pitch_class: Note name ('C#', 'Bb3') or pitch number
        tuning: Instrument tuning
        string_count: Strings to scan (default: all strings of the tuning)
        max_fret: Highest fret, inclusive

    Returns:
        Matching positions annotated with their note, or [] if unparseable
    """
    target = chroma(pitch_class)
    if target is None:
        return []
    count = usable_strings(tuning, string_count)
    result = []
    for string in range(count):
        for pos in fret_scan(tuning, string, {target}, max_fret=max_fret):
            result.append(_annotate(pos, tuning))
    return result


def interval_between(a: FretPosition, b: FretPosition, tuning: Tuning) -> str | None:
    """
    Octave-reduced interval label between two positions.

    Symmetric in its arguments. Returns None if either position is invalid.
    """
    pitch_a = note_at(a, tuning)
    pitch_b = note_at(b, tuning)
    if pitch_a is None or pitch_b is None:
        return None
    return Interval.between(pitch_a.midi, pitch_b.midi).label


def scale_positions(
    note_names: list[str],
    tuning: Tuning,
    string_count: int | None = None,
    max_fret: int = DEFAULT_SCALE_MAX_FRET,
) -> list[FretPosition]:
    """
    Full-neck map of a note set, annotated with the matching note name.

    The annotation uses the spelling from note_names (so a scale spelled
    with flats stays flat), not the sharp spelling of note_at.
    """
    spelled: dict[int, str] = {}
    for name in note_names:
        value = chroma(name)
        if value is not None:
            spelled.setdefault(value, name)
    if not spelled:
        return []

    count = usable_strings(tuning, string_count)
    result = []
    for string in range(count):
        base = tuning.open_pitch(string).midi  # type: ignore[union-attr]
        for pos in fret_scan(tuning, string, set(spelled), max_fret=max_fret):
            result.append(pos.with_note(spelled[(base + pos.fret) % 12]))
    return result


def _annotate(position: FretPosition, tuning: Tuning) -> FretPosition:
    """Attach the sounding note name to a position."""
    pitch = note_at(position, tuning)
    return position.with_note(pitch.name if pitch else None)
