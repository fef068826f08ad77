"""
MIDI export tests.

Patterns and progressions are written to disk and read back with mido.
"""

from pathlib import Path

import pytest
from mido import MidiFile

from chuk_mcp_fretboard.compiler.midi import (
    PROGRAM_FINGERED_BASS,
    TICKS_PER_BEAT,
    MidiEvent,
    beats_to_ticks,
    events_to_midi,
    pattern_to_midi,
    progression_to_midi,
)
from chuk_mcp_fretboard.core import FretPosition, Tuning
from chuk_mcp_fretboard.engine import build_progression_chords, get_three_nps_pattern


def note_ons(mid: MidiFile) -> list[tuple[int, int]]:
    """(absolute tick, pitch) for every note_on."""
    result = []
    tick = 0
    for msg in mid.tracks[0]:
        tick += msg.time
        if msg.type == "note_on" and msg.velocity > 0:
            result.append((tick, msg.note))
    return result


class TestMidiEvent:
    """Test MidiEvent validation."""

    def test_create_valid_event(self) -> None:
        """Defaults fill velocity and channel."""
        event = MidiEvent(pitch=60, start_ticks=0, duration_ticks=480)
        assert event.velocity == 90
        assert event.channel == 0

    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"pitch": 128}, "Pitch must be 0-127"),
            ({"pitch": -1}, "Pitch must be 0-127"),
            ({"velocity": 128}, "Velocity must be 0-127"),
            ({"channel": 16}, "Channel must be 0-15"),
            ({"start_ticks": -1}, "Event times must be >= 0"),
            ({"duration_ticks": -5}, "Event times must be >= 0"),
        ],
    )
    def test_validation(self, kwargs: dict[str, int], message: str) -> None:
        """Out-of-range values raise."""
        values = {"pitch": 60, "start_ticks": 0, "duration_ticks": 480}
        values.update(kwargs)
        with pytest.raises(ValueError, match=message):
            MidiEvent(**values)


class TestEventsToMidi:
    """Test the low-level writer."""

    def test_beats_to_ticks(self) -> None:
        """Beats scale by the resolution."""
        assert beats_to_ticks(1) == TICKS_PER_BEAT
        assert beats_to_ticks(0.5) == 240
        assert beats_to_ticks(2, ticks_per_beat=96) == 192

    def test_header_messages(self) -> None:
        """Tempo first, then the program change."""
        mid = events_to_midi([], tempo_bpm=120, program=PROGRAM_FINGERED_BASS)
        track = mid.tracks[0]
        assert track[0].type == "set_tempo"
        assert track[0].tempo == 500000
        assert track[1].type == "program_change"
        assert track[1].program == PROGRAM_FINGERED_BASS
        assert track[-1].type == "end_of_track"

    def test_no_program(self) -> None:
        """Program change is optional."""
        mid = events_to_midi([MidiEvent(60, 0, 480)])
        assert all(msg.type != "program_change" for msg in mid.tracks[0])

    def test_note_off_before_note_on(self) -> None:
        """Back-to-back notes release before the next attack."""
        mid = events_to_midi([MidiEvent(60, 480, 480), MidiEvent(60, 0, 480)])
        types = [msg.type for msg in mid.tracks[0] if msg.type.startswith("note")]
        assert types == ["note_on", "note_off", "note_on", "note_off"]

    def test_delta_times(self) -> None:
        """Message times are deltas."""
        mid = events_to_midi([MidiEvent(60, 0, 240), MidiEvent(64, 480, 240)])
        assert note_ons(mid) == [(0, 60), (480, 64)]


class TestPatternToMidi:
    """Test pattern export."""

    def test_ascending_run(self, guitar: Tuning, temp_midi_path: Path) -> None:
        """A 3NPS shape plays one ascending note per position."""
        positions = get_three_nps_pattern("A", "aeolian", guitar, seed_fret=5)
        pattern_to_midi(positions, guitar, tempo_bpm=90).save(temp_midi_path)

        loaded = MidiFile(temp_midi_path)
        notes = note_ons(loaded)
        pitches = [pitch for _, pitch in notes]
        assert len(notes) == 18
        assert pitches == sorted(pitches)
        assert pitches[0] == 45  # A2
        assert [tick for tick, _ in notes] == [i * 240 for i in range(18)]

    def test_unresolvable_positions_skipped(self, guitar: Tuning) -> None:
        """Positions off the tuning are dropped."""
        mid = pattern_to_midi([FretPosition(0, 0), FretPosition(9, 0)], guitar)
        assert [pitch for _, pitch in note_ons(mid)] == [40]

    def test_deterministic(self, guitar: Tuning) -> None:
        """Same input, same messages."""
        positions = get_three_nps_pattern("G", "lydian", guitar)
        first = [str(m) for m in pattern_to_midi(positions, guitar).tracks[0]]
        second = [str(m) for m in pattern_to_midi(positions, guitar).tracks[0]]
        assert first == second


class TestProgressionToMidi:
    """Test progression export."""

    def test_block_chords_with_bass(self, temp_midi_path: Path) -> None:
        """Each chord is held for its beats, with the root an octave below."""
        chords = build_progression_chords("C", [1, 4, 5])
        progression_to_midi(chords, beats_per_chord=2).save(temp_midi_path)

        notes = note_ons(MidiFile(temp_midi_path))
        assert len(notes) == 12
        first = sorted(pitch for tick, pitch in notes if tick == 0)
        assert first == [36, 48, 52, 55]
        second = sorted(pitch for tick, pitch in notes if tick == 960)
        assert second == [41, 53, 57, 60]

    def test_without_bass(self) -> None:
        """Bass is optional."""
        chords = build_progression_chords("A", ["1m"])
        mid = progression_to_midi(chords, with_bass=False, octave=2)
        assert sorted(pitch for _, pitch in note_ons(mid)) == [45, 48, 52]
