"""
MIDI export - fretboard patterns and progressions as playable files.

The audio collaborator plays what it is given; this module only turns
positions and chords into note events and writes them with mido.
All operations are deterministic: same input -> same file.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_mcp_fretboard.core.fretboard import FretPosition, Tuning
from chuk_mcp_fretboard.engine.pitch_resolver import note_at
from chuk_mcp_fretboard.engine.progression import ProgressionChord, chord_to_pitches

# Standard ticks per beat (quarter note)
TICKS_PER_BEAT = 480

# General MIDI programs (0-indexed)
PROGRAM_STEEL_GUITAR = 25
PROGRAM_FINGERED_BASS = 33

DEFAULT_TEMPO_BPM = 100


@dataclass(frozen=True)
class MidiEvent:
    """
    A single MIDI note event.

    All times are in ticks, absolute from the start of the track.
    """

    pitch: int  # MIDI note number (0-127)
    start_ticks: int
    duration_ticks: int
    velocity: int = 90  # 0-127
    channel: int = 0  # 0-15

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.pitch <= 127:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")
        if self.start_ticks < 0 or self.duration_ticks < 0:
            raise ValueError("Event times must be >= 0")


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: int = DEFAULT_TEMPO_BPM,
    program: int | None = None,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> MidiFile:
    """
    Write note events to a single-track MidiFile.

    Args:
        events: Note events in any order
        tempo_bpm: Tempo in beats per minute
        program: Optional GM program for channel 0
        ticks_per_beat: Resolution (default 480)

    Returns:
        A mido MidiFile ready to be saved
    """
    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    track.append(MetaMessage("set_tempo", tempo=int(60_000_000 / tempo_bpm), time=0))
    if program is not None:
        track.append(Message("program_change", program=program, channel=0, time=0))

    # (absolute tick, is_note_on, message); note_off sorts first at equal ticks
    timeline: list[tuple[int, bool, Message]] = []
    for event in events:
        timeline.append(
            (
                event.start_ticks,
                True,
                Message(
                    "note_on", channel=event.channel, note=event.pitch, velocity=event.velocity
                ),
            )
        )
        timeline.append(
            (
                event.start_ticks + event.duration_ticks,
                False,
                Message("note_off", channel=event.channel, note=event.pitch, velocity=0),
            )
        )
    timeline.sort(key=lambda item: (item[0], item[1]))

    current = 0
    for tick, _, msg in timeline:
        msg.time = tick - current
        track.append(msg)
        current = tick

    track.append(MetaMessage("end_of_track", time=0))
    return mid


def beats_to_ticks(beats: float, ticks_per_beat: int = TICKS_PER_BEAT) -> int:
    """Convert a beat length to ticks."""
    return int(beats * ticks_per_beat)


def pattern_to_midi(
    positions: Sequence[FretPosition],
    tuning: Tuning,
    tempo_bpm: int = DEFAULT_TEMPO_BPM,
    note_beats: float = 0.5,
    velocity: int = 90,
    program: int = PROGRAM_STEEL_GUITAR,
) -> MidiFile:
    """
    Play a pattern as one ascending run.

    Positions are ordered by pitch, then string, so a shape that repeats a
    pitch on two strings plays both. Positions that do not resolve on the
    tuning are skipped.
    """
    pitches = []
    for position in positions:
        pitch = note_at(position, tuning)
        if pitch is not None:
            pitches.append((pitch.midi, position.string))
    pitches.sort()

    step = beats_to_ticks(note_beats)
    events = [
        MidiEvent(pitch=midi, start_ticks=i * step, duration_ticks=step, velocity=velocity)
        for i, (midi, _) in enumerate(pitches)
    ]
    return events_to_midi(events, tempo_bpm=tempo_bpm, program=program)


def progression_to_midi(
    chords: Sequence[ProgressionChord],
    beats_per_chord: int = 4,
    tempo_bpm: int = DEFAULT_TEMPO_BPM,
    octave: int = 3,
    with_bass: bool = True,
    velocity: int = 80,
    program: int = PROGRAM_STEEL_GUITAR,
) -> MidiFile:
    """
    Play a progression as block chords.

    Each chord is held for beats_per_chord beats in close position with the
    root in the given octave; with_bass adds the root an octave below.
    """
    length = beats_to_ticks(beats_per_chord)
    events: list[MidiEvent] = []
    for index, chord in enumerate(chords):
        start = index * length
        pitches = chord_to_pitches(chord, octave)
        for pitch in pitches:
            events.append(MidiEvent(pitch.midi, start, length, velocity))
        if with_bass and pitches:
            events.append(MidiEvent(pitches[0].midi - 12, start, length, velocity))
    return events_to_midi(events, tempo_bpm=tempo_bpm, program=program)
