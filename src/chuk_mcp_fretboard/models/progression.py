"""
Progression model - a named jam progression.

Degrees are progression tokens: an int 1-7 for a diatonic chord of the
major scale, or a string such as 'b7', '4m', '5M' or '2dim' for borrowed
and altered chords.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class Progression(BaseModel):
    """A named chord progression with display numerals."""

    name: str = Field(..., description="Progression name")
    numerals: list[str] = Field(..., description="Display numerals (e.g., 'I', 'bVII')")
    degrees: list[int | str] = Field(..., min_length=1, description="Degree tokens")
    suggested_scale: str = Field("major", description="Scale to solo with")
    genre: str = Field("", description="Genre tag")
    beats_per_chord: int = Field(4, gt=0, description="Beats each chord is held")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_lengths(self) -> Progression:
        """Every degree needs a numeral."""
        if len(self.numerals) != len(self.degrees):
            raise ValueError(
                f"Progression '{self.name}': {len(self.degrees)} degrees but "
                f"{len(self.numerals)} numerals"
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "name": self.name,
            "numerals": list(self.numerals),
            "degrees": list(self.degrees),
            "suggested_scale": self.suggested_scale,
            "genre": self.genre,
            "beats_per_chord": self.beats_per_chord,
        }
