#!/usr/bin/env python3
"""
Example: A tour of the fretboard engine.

Prints a 3NPS shape, the five pentatonic boxes, a chord voicing, a CAGED
form and a jam progression, all as plain text tab grids.

Usage:
    python examples/fretboard_tour.py
"""

from chuk_mcp_fretboard.catalog import default_catalog
from chuk_mcp_fretboard.core import STANDARD_TUNINGS, FretPosition, Tuning
from chuk_mcp_fretboard.engine import (
    build_progression_chords,
    get_all_pentatonic_boxes,
    get_caged_positions,
    get_three_nps_pattern,
    parent_mode_for_box,
    place_voicing_labeled,
)


def render(positions: list[FretPosition], tuning: Tuning) -> str:
    """Draw positions as a tab grid, highest string on top."""
    if not positions:
        return "(no positions)"
    low = min(p.fret for p in positions)
    high = max(p.fret for p in positions)
    lines = []
    for string in reversed(range(tuning.string_count)):
        frets = {p.fret for p in positions if p.string == string}
        cells = ["o" if fret in frets else "-" for fret in range(low, high + 1)]
        lines.append(f"{tuning.notes[string]:>3} |{'-'.join(cells)}|")
    lines.append(f"     frets {low}-{high}")
    return "\n".join(lines)


def main() -> None:
    """Walk through each part of the engine."""
    print("CHUK Fretboard Tour")
    print("=" * 40)
    guitar = STANDARD_TUNINGS["standard-6"]
    catalog = default_catalog()

    # 1. Three notes per string
    print("\nA aeolian, 3NPS from fret 5:")
    print(render(get_three_nps_pattern("A", "aeolian", guitar, seed_fret=5), guitar))

    # 2. Pentatonic boxes
    for index, box in enumerate(get_all_pentatonic_boxes("E", "minor", guitar)):
        mode = parent_mode_for_box("minor", index)
        print(f"\nE minor pentatonic, box {index + 1} ({mode}):")
        print(render(box, guitar))

    # 3. A movable voicing
    shape = catalog.get_voicing("maj7", "D-G-B-E", 0)
    if shape is not None:
        placed = place_voicing_labeled("F", shape, guitar)
        labels = ", ".join(f"{p.note}({label})" for p, label in placed)
        print(f"\nFmaj7 on D-G-B-E: {labels}")
        print(render([p for p, _ in placed], guitar))

    # 4. CAGED
    caged = catalog.get_caged_shape("A")
    if caged is not None:
        placement = get_caged_positions("C", caged, "major", guitar)
        print(f"\nC major, A form at fret {placement.root_fret}:")
        print(render(placement.chord, guitar))

    # 5. Progressions
    progression = catalog.get_progression("Andalusian Cadence")
    if progression is not None:
        chords = build_progression_chords("A", progression.degrees)
        symbols = " -> ".join(chord.symbol for chord in chords)
        print(f"\n{progression.name} in A: {symbols}")
        print(f"  Solo with: {progression.suggested_scale}")

    # 6. A 7-string reuses the same shapes one string up
    seven = STANDARD_TUNINGS["standard-7"]
    print("\nB locrian, 3NPS on a 7-string:")
    print(render(get_three_nps_pattern("B", "locrian", seven), seven))


if __name__ == "__main__":
    main()
