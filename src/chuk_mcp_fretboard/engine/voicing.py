"""
Voicing resolver - anchors movable chord shapes on a tuning.

Shapes are written against the 6-string reference (E A D G B E, string
role 0 = low E). The string-role map aligns those roles with any tuning:
a 7-string guitar shifts them up one string, a 4-string bass keeps them.
The root-fret rule then picks the fret that puts the shape's root on the
requested key, clamped so that every offset lands on a real fret.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from chuk_mcp_fretboard.constants import (
    MAX_FRET,
    ROOT_FRET_CEILING,
    ROOT_LABEL,
    ErrorMessages,
    TriadQuality,
)
from chuk_mcp_fretboard.core.fretboard import FretPosition, Tuning
from chuk_mcp_fretboard.core.pitch import chroma
from chuk_mcp_fretboard.core.scale import ScaleDegree
from chuk_mcp_fretboard.engine.pitch_resolver import note_at
from chuk_mcp_fretboard.engine.scale_source import get_scale_notes
from chuk_mcp_fretboard.models.voicing import CagedShape, ChordVoicingShape, ShapeElement

# Pitch classes of the 6-string reference, low to high: E A D G B E
REFERENCE_ROLES: tuple[int, ...] = (4, 9, 2, 7, 11, 4)


@lru_cache(maxsize=64)
def string_role_offset(tuning: Tuning) -> int:
    """
    Index of the tuning string that plays reference role 0 (the low E).

    Every candidate offset is scored by how many open strings match the
    reference roles they would play; the best score wins, ties go to the
    lowest offset.
    """
    open_pcs = [chroma(note) for note in tuning.notes]
    best_offset, best_matches = 0, -1
    for offset in range(tuning.string_count):
        matches = sum(
            1
            for role, pc in enumerate(REFERENCE_ROLES)
            if 0 <= role + offset < len(open_pcs) and open_pcs[role + offset] == pc
        )
        if matches > best_matches:
            best_offset, best_matches = offset, matches
    return best_offset


def label_semitones(label: str) -> int:
    """Semitones above the root for an interval label ('R', 'b3', '#5')."""
    if label == ROOT_LABEL:
        return 0
    return ScaleDegree.parse(label).semitones % 12


def _key_chroma(key: str) -> int:
    key_pc = chroma(key)
    if key_pc is None:
        raise ValueError(ErrorMessages.INVALID_KEY.format(key=key))
    return key_pc


def _anchor_fret(
    key_pc: int,
    root: ShapeElement,
    offsets: list[int],
    tuning: Tuning,
    string_offset: int,
) -> int:
    """Root-fret rule shared by voicings and CAGED forms."""
    open_pitch = tuning.open_pitch(root.string + string_offset)
    if open_pitch is None:
        raise ValueError(
            ErrorMessages.STRING_NOT_IN_TUNING.format(
                string=root.string + string_offset, tuning=tuning.name
            )
        )

    distance = (key_pc - open_pitch.midi) % 12
    root_fret = distance - root.offset

    floor = max(1, -min(offsets))
    while root_fret < floor:
        root_fret += 12
    # With a floor above 3 one residue has no slot in [floor, 14]; the floor wins
    while root_fret > ROOT_FRET_CEILING and root_fret - 12 >= floor:
        root_fret -= 12
    return root_fret


def compute_root_fret(
    key: str,
    shape: ChordVoicingShape,
    tuning: Tuning,
    string_offset: int | None = None,
) -> int:
    """
    Fret that anchors a movable shape in a key.

    The root element then sounds the key's pitch class at
    root_fret + its offset, and every element lands in [0, 22].

    Args:
        key: Key name (e.g., 'C', 'F#')
        shape: Voicing shape with one 'R' element
        tuning: Instrument tuning
        string_offset: Tuning string for reference role 0 (default: derived)

    Returns:
        The root fret, at least 1

    Raises:
        ValueError: If the key is not a note name or the root string is
            missing from the tuning
    """
    key_pc = _key_chroma(key)
    if string_offset is None:
        string_offset = string_role_offset(tuning)
    return _anchor_fret(key_pc, shape.root_element, shape.offsets, tuning, string_offset)


def _place(
    elements: list[ShapeElement],
    root_fret: int,
    tuning: Tuning,
    string_offset: int,
) -> list[tuple[int, FretPosition]]:
    """(element index, position) pairs, skipping missing strings and off-neck frets."""
    result = []
    for index, element in enumerate(elements):
        position = FretPosition(element.string + string_offset, root_fret + element.offset)
        if not 0 <= position.fret <= MAX_FRET:
            continue
        pitch = note_at(position, tuning)
        if pitch is None:
            continue
        result.append((index, position.with_note(pitch.name)))
    return result


def place_voicing(
    key: str,
    shape: ChordVoicingShape,
    tuning: Tuning,
    string_offset: int | None = None,
) -> list[FretPosition]:
    """
    Anchor a voicing shape in a key and return its positions.

    Positions keep the shape's element order; elements on strings the
    tuning lacks are dropped.
    """
    return [position for position, _ in place_voicing_labeled(key, shape, tuning, string_offset)]


def place_voicing_labeled(
    key: str,
    shape: ChordVoicingShape,
    tuning: Tuning,
    string_offset: int | None = None,
) -> list[tuple[FretPosition, str]]:
    """Like place_voicing, pairing each position with its interval label."""
    if string_offset is None:
        string_offset = string_role_offset(tuning)
    root_fret = compute_root_fret(key, shape, tuning, string_offset)
    placed = _place(shape.elements, root_fret, tuning, string_offset)
    return [(position, shape.intervals[index]) for index, position in placed]


@dataclass(frozen=True)
class CagedPlacement:
    """A CAGED form anchored in a key."""

    shape: str
    quality: TriadQuality
    root_fret: int
    chord: list[FretPosition]
    scale: list[FretPosition]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "shape": self.shape,
            "quality": self.quality.value,
            "root_fret": self.root_fret,
            "chord": [p.to_dict() for p in self.chord],
            "scale": [p.to_dict() for p in self.scale],
        }


def get_caged_positions(
    key: str,
    shape: CagedShape,
    quality: TriadQuality | str,
    tuning: Tuning,
    string_offset: int | None = None,
) -> CagedPlacement:
    """
    Place a CAGED form: chord tones plus the surrounding scale.

    The form is anchored with the root-fret rule on its root string, taking
    the floor over both chord and scale offsets. Scale positions are
    spelled from the key's major or natural minor scale.
    """
    quality = TriadQuality(quality)
    key_pc = _key_chroma(key)
    if string_offset is None:
        string_offset = string_role_offset(tuning)

    variant = shape.variant(quality)
    root = ShapeElement(string=shape.root_string, offset=0)
    root_fret = _anchor_fret(key_pc, root, variant.offsets, tuning, string_offset)

    chord = [p for _, p in _place(variant.chord, root_fret, tuning, string_offset)]
    scale = [p for _, p in _place(variant.scale, root_fret, tuning, string_offset)]

    scale_name = "major" if quality == TriadQuality.MAJOR else "minor"
    spelled = {chroma(n): n for n in get_scale_notes(key, scale_name)}
    scale = [p.with_note(spelled.get(chroma(p.note), p.note)) for p in scale]

    return CagedPlacement(shape.name, quality, root_fret, chord, scale)
