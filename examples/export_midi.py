#!/usr/bin/env python3
"""
Example: Export patterns and progressions as MIDI.

Writes an ascending scale run and a 12-bar blues you can open in any DAW.

Usage:
    python examples/export_midi.py
    # Creates: examples/output/*.mid
"""

from pathlib import Path

from chuk_mcp_fretboard.catalog import default_catalog
from chuk_mcp_fretboard.compiler import (
    PROGRAM_FINGERED_BASS,
    pattern_to_midi,
    progression_to_midi,
)
from chuk_mcp_fretboard.core import STANDARD_TUNINGS
from chuk_mcp_fretboard.engine import (
    build_progression_chords,
    get_pentatonic_box,
    get_three_nps_pattern,
    get_two_nps_pattern,
)


def main() -> None:
    """Generate example MIDI files."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)
    guitar = STANDARD_TUNINGS["standard-6"]
    bass = STANDARD_TUNINGS["bass-standard-4"]

    # Example 1: D dorian, three notes per string
    print("Generating d_dorian_3nps.mid...")
    positions = get_three_nps_pattern("D", "dorian", guitar, seed_fret=10)
    pattern_to_midi(positions, guitar, tempo_bpm=110).save(str(output_dir / "d_dorian_3nps.mid"))
    print(f"  {len(positions)} notes")

    # Example 2: A minor pentatonic box 1
    print("\nGenerating a_minor_box1.mid...")
    box = get_pentatonic_box("A", "minor", 0, guitar)
    pattern_to_midi(box, guitar).save(str(output_dir / "a_minor_box1.mid"))
    print(f"  {len(box)} notes")

    # Example 3: E mixolydian on bass, two notes per string
    print("\nGenerating e_mixolydian_bass.mid...")
    bass_run = get_two_nps_pattern("E", "mixolydian", bass)
    pattern_to_midi(bass_run, bass, program=PROGRAM_FINGERED_BASS).save(
        str(output_dir / "e_mixolydian_bass.mid")
    )
    print(f"  {len(bass_run)} notes")

    # Example 4: 12-bar blues in A
    print("\nGenerating a_blues.mid...")
    blues = default_catalog().get_progression("12-Bar Blues")
    if blues is not None:
        chords = build_progression_chords("A", blues.degrees)
        progression_to_midi(chords, beats_per_chord=blues.beats_per_chord, tempo_bpm=96).save(
            str(output_dir / "a_blues.mid")
        )
        print(f"  {' '.join(chord.symbol for chord in chords)}")

    print("\nDone! Open the MIDI files in your DAW to hear them.")


if __name__ == "__main__":
    main()
