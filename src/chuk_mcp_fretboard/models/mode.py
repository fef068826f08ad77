"""
Mode model - catalog entry for a scale or mode.

The catalog is static teaching metadata layered over the scale dictionary:
which degree gives the mode its colour, and how to label it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from chuk_mcp_fretboard.constants import ModeCategory
from chuk_mcp_fretboard.core.scale import ScaleDegree


class ModeDescriptor(BaseModel):
    """
    A supported scale or mode.

    characteristic_degree is a 0-based index into the note list the scale
    produces; the catalog tests check it against the scale dictionary.
    """

    name: str = Field(..., description="Scale dictionary name (e.g., 'dorian')")
    display_name: str = Field(..., description="Human-readable name")
    formula: str = Field(..., description="Degree formula (e.g., '1 2 b3 4 5 6 b7')")
    category: ModeCategory = Field(..., description="Mode family")
    characteristic_degree: int = Field(..., ge=0, description="Index of the colour note")
    characteristic_note: str = Field("", description="Label of the colour note (e.g., '#4')")

    model_config = {"frozen": True}

    @field_validator("formula")
    @classmethod
    def validate_formula(cls, v: str) -> str:
        """Every token must be a scale degree."""
        for token in v.split():
            ScaleDegree.parse(token)
        return v

    @property
    def note_count(self) -> int:
        """Number of notes the formula produces."""
        return len(self.formula.split())

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "name": self.name,
            "display_name": self.display_name,
            "formula": self.formula,
            "category": self.category.value,
            "characteristic_degree": self.characteristic_degree,
            "characteristic_note": self.characteristic_note,
        }
