"""
Pattern generator - scale shapes as concrete fret positions.

Three families of shape:

- K notes per string (3NPS guitar, 2NPS bass): walk the strings low to
  high, on each string take the run of K consecutive scale notes closest
  to a target fret that creeps up the neck with the shape.
- Pentatonic boxes: five two-notes-per-string boxes anchored on the
  pentatonic notes of the lowest string, counted from the first root.
- Extension notes: the parent-mode notes that turn a pentatonic box into
  a full seven-note position.

Everything works on pitch classes; the positions are annotated with the
scale's own spelling.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from chuk_mcp_fretboard.constants import (
    BOX_FALLBACK_CENTER_OFFSET,
    BOX_FALLBACK_MAX_SPAN,
    BOX_WINDOW_ABOVE,
    BOX_WINDOW_BELOW,
    BOX_WRAP_FRET,
    MAX_FRET,
    NPS_MAX_SPAN,
    ErrorMessages,
    PentatonicType,
)
from chuk_mcp_fretboard.core.fretboard import FretPosition, Tuning
from chuk_mcp_fretboard.core.pitch import chroma
from chuk_mcp_fretboard.engine.pitch_resolver import fret_scan, usable_strings
from chuk_mcp_fretboard.engine.scale_source import get_scale_notes, scale_chromas

logger = logging.getLogger(__name__)

# Diatonic mode spelled by each pentatonic box plus its extension notes
_BOX_PARENT_MODES: dict[PentatonicType, tuple[str, ...]] = {
    PentatonicType.MINOR: ("aeolian", "ionian", "dorian", "phrygian", "mixolydian"),
    PentatonicType.MAJOR: ("ionian", "dorian", "phrygian", "mixolydian", "aeolian"),
}

BOX_COUNT = 5


def _spelling(note_names: list[str]) -> dict[int, str]:
    """Pitch class -> first note name spelling it."""
    spelled: dict[int, str] = {}
    for name in note_names:
        value = chroma(name)
        if value is not None:
            spelled.setdefault(value, name)
    return spelled


def _scan(
    tuning: Tuning,
    string: int,
    spelled: dict[int, str],
    min_fret: int = 0,
    max_fret: int = MAX_FRET,
) -> list[FretPosition]:
    """Annotated scale positions on one string."""
    base = tuning.open_pitch(string).midi  # type: ignore[union-attr]
    return [
        pos.with_note(spelled[(base + pos.fret) % 12])
        for pos in fret_scan(tuning, string, set(spelled), min_fret, max_fret)
    ]


# K notes per string


def get_k_notes_per_string_pattern(
    key: str,
    mode_name: str,
    tuning: Tuning,
    string_count: int | None = None,
    seed_fret: int = 0,
    k: int = 3,
    max_span: int | None = None,
) -> list[FretPosition]:
    """
    Scale shape with exactly K notes on each string.

    On each string, every run of K consecutive scale frets whose span fits
    the limit is scored by |midpoint - (target + bias)| with
    bias = ceil(K / 2); the lowest score wins and ties go to the lowest run.
    The target starts at seed_fret and rises to the first fret of each
    chosen run. A string with no admissible run is left empty.

    Args:
        key: Root note name
        mode_name: Scale/mode name
        tuning: Instrument tuning
        string_count: Strings to use (default: all)
        seed_fret: Fret the shape starts around
        k: Notes per string
        max_span: Max fret span of a run (default from NPS_MAX_SPAN)

    Returns:
        Positions string by string, low to high; [] for an unknown mode

    Raises:
        ValueError: If k has no default span and max_span is not given
    """
    if max_span is None:
        if k not in NPS_MAX_SPAN:
            raise ValueError(ErrorMessages.NO_DEFAULT_SPAN.format(k=k))
        max_span = NPS_MAX_SPAN[k]

    spelled = _spelling(get_scale_notes(key, mode_name))
    if not spelled:
        return []

    bias = (k + 1) // 2
    target = seed_fret
    result: list[FretPosition] = []

    for string in range(usable_strings(tuning, string_count)):
        frets = _scan(tuning, string, spelled)
        best: list[FretPosition] | None = None
        best_dist = float("inf")

        for i in range(len(frets) - k + 1):
            run = frets[i : i + k]
            low, high = run[0].fret, run[-1].fret
            if high - low > max_span:
                continue
            dist = abs((low + high) / 2 - (target + bias))
            if dist < best_dist:
                best, best_dist = run, dist

        if best is None:
            logger.debug(f"No {k}-note run within {max_span} frets on string {string}")
            continue

        result.extend(best)
        target = max(target, best[0].fret)

    return result


def get_three_nps_pattern(
    key: str,
    mode_name: str,
    tuning: Tuning,
    string_count: int | None = None,
    seed_fret: int = 0,
) -> list[FretPosition]:
    """Three notes per string, span up to 5 frets (guitar)."""
    return get_k_notes_per_string_pattern(key, mode_name, tuning, string_count, seed_fret, k=3)


def get_two_nps_pattern(
    key: str,
    mode_name: str,
    tuning: Tuning,
    string_count: int | None = None,
    seed_fret: int = 0,
) -> list[FretPosition]:
    """Two notes per string, span up to 4 frets (bass, one finger per fret)."""
    return get_k_notes_per_string_pattern(key, mode_name, tuning, string_count, seed_fret, k=2)


# Pentatonic boxes

PairStrategy = Callable[[Sequence[FretPosition], int], tuple[FretPosition, FretPosition] | None]


def strict_window_pair(
    frets: Sequence[FretPosition], reference: int
) -> tuple[FretPosition, FretPosition] | None:
    """
    Adjacent pair inside the box window [reference - 1, reference + 4].

    Scored by how far the first note sits from the reference fret.
    """
    best = None
    best_dist = float("inf")
    for a, b in zip(frets, frets[1:]):
        if a.fret >= reference - BOX_WINDOW_BELOW and b.fret <= reference + BOX_WINDOW_ABOVE:
            dist = abs(a.fret - reference)
            if dist < best_dist:
                best, best_dist = (a, b), dist
    return best


def relaxed_pair(
    frets: Sequence[FretPosition], reference: int
) -> tuple[FretPosition, FretPosition] | None:
    """Any adjacent pair within 5 frets, midpoint closest to reference + 1.5."""
    best = None
    best_dist = float("inf")
    center = reference + BOX_FALLBACK_CENTER_OFFSET
    for a, b in zip(frets, frets[1:]):
        if b.fret - a.fret <= BOX_FALLBACK_MAX_SPAN:
            dist = abs((a.fret + b.fret) / 2 - center)
            if dist < best_dist:
                best, best_dist = (a, b), dist
    return best


PAIR_STRATEGIES: tuple[PairStrategy, ...] = (strict_window_pair, relaxed_pair)


def select_pair(
    frets: Sequence[FretPosition], reference: int
) -> tuple[FretPosition, FretPosition] | None:
    """First strategy that finds a pair wins."""
    for index, strategy in enumerate(PAIR_STRATEGIES):
        pair = strategy(frets, reference)
        if pair is not None:
            if index > 0:
                logger.debug(f"Box pair via {strategy.__name__} around fret {reference}")
            return pair
    return None


def box_reference_fret(
    key: str, scale_type: PentatonicType | str, box_index: int, tuning: Tuning
) -> int | None:
    """
    Anchor fret of a box on the lowest string.

    Counts box_index pentatonic notes up from the first root on string 0,
    wrapping down an octave above fret 12. None when the box does not fit.
    """
    ptype = PentatonicType(scale_type)
    spelled = _spelling(get_scale_notes(key, ptype.scale_name))
    root = chroma(key)
    if not spelled or root is None or not 0 <= box_index < BOX_COUNT:
        return None

    lowest = _scan(tuning, 0, spelled)
    base = tuning.open_pitch(0).midi  # type: ignore[union-attr]
    root_index = next(
        (i for i, pos in enumerate(lowest) if (base + pos.fret) % 12 == root),
        None,
    )
    if root_index is None or root_index + box_index >= len(lowest):
        return None

    reference = lowest[root_index + box_index].fret
    if reference > BOX_WRAP_FRET:
        reference -= 12
    return reference


def get_pentatonic_box(
    key: str,
    scale_type: PentatonicType | str,
    box_index: int,
    tuning: Tuning,
    string_count: int | None = None,
) -> list[FretPosition]:
    """
    One of the five pentatonic boxes, two notes on every string.

    Args:
        key: Root note name
        scale_type: 'minor' or 'major'
        box_index: 0-4, box 0 starting on the root
        tuning: Instrument tuning
        string_count: Strings to use (default: all)

    Returns:
        Positions string by string, low to high; [] if the box cannot be placed
    """
    ptype = PentatonicType(scale_type)
    reference = box_reference_fret(key, ptype, box_index, tuning)
    if reference is None:
        return []

    spelled = _spelling(get_scale_notes(key, ptype.scale_name))
    result: list[FretPosition] = []
    for string in range(usable_strings(tuning, string_count)):
        pair = select_pair(_scan(tuning, string, spelled), reference)
        if pair is None:
            logger.debug(f"No pentatonic pair on string {string} around fret {reference}")
            continue
        result.extend(pair)
    return result


def get_all_pentatonic_boxes(
    key: str,
    scale_type: PentatonicType | str,
    tuning: Tuning,
    string_count: int | None = None,
) -> list[list[FretPosition]]:
    """The five boxes in order."""
    return [
        get_pentatonic_box(key, scale_type, index, tuning, string_count)
        for index in range(BOX_COUNT)
    ]


# Extension notes


def get_extension_positions(
    box_positions: Sequence[FretPosition],
    key: str,
    scale_type: PentatonicType | str,
    tuning: Tuning,
    string_count: int | None = None,
) -> list[FretPosition]:
    """
    Parent-mode notes missing from a pentatonic box, within its fret range.

    The parent is aeolian for minor and major (ionian) for major; the
    extension notes are the parent's pitch classes the pentatonic lacks,
    scanned on every string from one fret below the box to one above.
    """
    if not box_positions:
        return []

    ptype = PentatonicType(scale_type)
    parent = _spelling(get_scale_notes(key, ptype.parent_scale_name))
    missing = scale_chromas(key, ptype.parent_scale_name) - scale_chromas(key, ptype.scale_name)
    extension = {pc: name for pc, name in parent.items() if pc in missing}
    if not extension:
        return []

    frets = [p.fret for p in box_positions]
    low = max(0, min(frets) - 1)
    high = max(frets) + 1

    result: list[FretPosition] = []
    for string in range(usable_strings(tuning, string_count)):
        result.extend(_scan(tuning, string, extension, min_fret=low, max_fret=high))
    return result


def parent_mode_for_box(scale_type: PentatonicType | str, box_index: int) -> str | None:
    """Diatonic mode that a box plus its extension notes spells from its first note."""
    modes = _BOX_PARENT_MODES[PentatonicType(scale_type)]
    if not 0 <= box_index < len(modes):
        return None
    return modes[box_index]
