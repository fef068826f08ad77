"""
MIDI compiler - turns engine output into playable MIDI files.

    list[FretPosition] -> ascending run
    list[ProgressionChord] -> block chords with a bass root
"""

from chuk_mcp_fretboard.compiler.midi import (
    PROGRAM_FINGERED_BASS,
    PROGRAM_STEEL_GUITAR,
    TICKS_PER_BEAT,
    MidiEvent,
    events_to_midi,
    pattern_to_midi,
    progression_to_midi,
)

__all__ = [
    "PROGRAM_FINGERED_BASS",
    "PROGRAM_STEEL_GUITAR",
    "TICKS_PER_BEAT",
    "MidiEvent",
    "events_to_midi",
    "pattern_to_midi",
    "progression_to_midi",
]
