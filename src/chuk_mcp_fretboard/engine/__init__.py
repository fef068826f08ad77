"""
Fretboard pattern engine.

Pure functions from key, scale and voicing to playable positions on an
explicitly passed Tuning:

- pitch_resolver: note_at, positions_for, interval_between, scale_positions
- scale_source: get_scale_notes
- patterns: K-notes-per-string, pentatonic boxes, extension notes
- voicing: root-fret rule, string-role map, voicing and CAGED placement
- progression: degree tokens to chords
"""

from chuk_mcp_fretboard.engine.patterns import (
    get_all_pentatonic_boxes,
    get_extension_positions,
    get_k_notes_per_string_pattern,
    get_pentatonic_box,
    get_three_nps_pattern,
    get_two_nps_pattern,
    parent_mode_for_box,
)
from chuk_mcp_fretboard.engine.pitch_resolver import (
    interval_between,
    note_at,
    positions_for,
    scale_positions,
)
from chuk_mcp_fretboard.engine.progression import (
    ProgressionChord,
    build_progression_chords,
    chord_to_pitches,
    chord_tone_positions,
)
from chuk_mcp_fretboard.engine.scale_source import get_scale_notes
from chuk_mcp_fretboard.engine.voicing import (
    CagedPlacement,
    compute_root_fret,
    get_caged_positions,
    place_voicing,
    place_voicing_labeled,
    string_role_offset,
)

__all__ = [
    # Pitch resolver
    "note_at",
    "positions_for",
    "interval_between",
    "scale_positions",
    # Scale source
    "get_scale_notes",
    # Patterns
    "get_k_notes_per_string_pattern",
    "get_three_nps_pattern",
    "get_two_nps_pattern",
    "get_pentatonic_box",
    "get_all_pentatonic_boxes",
    "get_extension_positions",
    "parent_mode_for_box",
    # Voicing
    "compute_root_fret",
    "place_voicing",
    "place_voicing_labeled",
    "string_role_offset",
    "get_caged_positions",
    "CagedPlacement",
    # Progression
    "ProgressionChord",
    "build_progression_chords",
    "chord_to_pitches",
    "chord_tone_positions",
]
