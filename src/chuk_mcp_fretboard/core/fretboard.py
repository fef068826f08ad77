"""
Fretboard primitives - Tuning and FretPosition.

A Tuning is the ordered open-string pitches of an instrument, index 0 being
the lowest string. A FretPosition is a (string, fret) coordinate, optionally
annotated with the note it sounds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..constants import ErrorMessages
from .pitch import Pitch


@dataclass(frozen=True)
class Tuning:
    """
    Open-string pitches of a fretted instrument, lowest string first.

    Notes are validated at construction; a different string count is a
    different Tuning.

    Examples:
        Tuning("standard-6", ("E2", "A2", "D3", "G3", "B3", "E4"))
    """

    name: str
    notes: tuple[str, ...]

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple
        object.__setattr__(self, "notes", tuple(self.notes))
        if not self.notes:
            raise ValueError("A tuning needs at least one string")
        for note in self.notes:
            try:
                Pitch.parse(note)
            except ValueError as e:
                raise ValueError(ErrorMessages.INVALID_NOTE.format(note=note)) from e

    @property
    def string_count(self) -> int:
        """Number of strings."""
        return len(self.notes)

    def open_pitch(self, string: int) -> Pitch | None:
        """Open-string pitch, or None if the string does not exist."""
        if not 0 <= string < len(self.notes):
            return None
        return Pitch.parse(self.notes[string])

    @classmethod
    def from_notes(cls, notes: list[str] | tuple[str, ...], name: str = "custom") -> Tuning:
        """Build an ad hoc tuning from a list of note names."""
        return cls(name, tuple(notes))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {"name": self.name, "notes": list(self.notes), "strings": self.string_count}


@dataclass(frozen=True)
class FretPosition:
    """
    A playable location on the fretboard.

    Equality and hashing use (string, fret) only; the note annotation is
    display data.
    """

    string: int
    fret: int
    note: str | None = field(default=None, compare=False)

    def with_note(self, note: str | None) -> FretPosition:
        """Return a copy annotated with a note name."""
        return FretPosition(self.string, self.fret, note)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        result: dict[str, Any] = {"string": self.string, "fret": self.fret}
        if self.note is not None:
            result["note"] = self.note
        return result


STANDARD_TUNINGS: dict[str, Tuning] = {
    tuning.name: tuning
    for tuning in (
        Tuning("standard-6", ("E2", "A2", "D3", "G3", "B3", "E4")),
        Tuning("standard-7", ("B1", "E2", "A2", "D3", "G3", "B3", "E4")),
        Tuning("drop-d-6", ("D2", "A2", "D3", "G3", "B3", "E4")),
        Tuning("drop-a-7", ("A1", "E2", "A2", "D3", "G3", "B3", "E4")),
        Tuning("bass-standard-4", ("E1", "A1", "D2", "G2")),
        Tuning("bass-standard-5", ("B0", "E1", "A1", "D2", "G2")),
        Tuning("bass-standard-6", ("B0", "E1", "A1", "D2", "G2", "C3")),
        Tuning("bass-drop-d-4", ("D1", "A1", "D2", "G2")),
    )
}


def get_tuning(name: str) -> Tuning | None:
    """Look up a standard tuning by name."""
    return STANDARD_TUNINGS.get(name.strip().lower())


def resolve_tuning(name: str | None = "standard-6", notes: list[str] | None = None) -> Tuning:
    """
    Tuning from explicit notes, or else from a standard tuning name.

    Raises:
        ValueError: If the name is unknown or a note is invalid
    """
    if notes:
        return Tuning.from_notes(notes)
    tuning = get_tuning(name or "standard-6")
    if tuning is None:
        raise ValueError(ErrorMessages.INVALID_TUNING.format(tuning=name))
    return tuning
