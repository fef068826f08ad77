"""
Voicing models - movable chord shapes.

A shape is a list of (string, fret offset) elements with a parallel list of
interval labels. Strings are roles on the 6-string reference (0 = low E);
the voicing resolver maps roles onto the actual tuning and anchors the
offsets at a root fret.

Shapes are grouped into string sets (one shape per inversion) and string
sets into families (major triads, dom7 drop-2, ...).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

from chuk_mcp_fretboard.constants import ROOT_LABEL, ChordType, TriadQuality


class ShapeElement(BaseModel):
    """One fretted note of a shape, relative to the root fret."""

    string: int = Field(..., description="String role on the 6-string reference")
    offset: int = Field(..., description="Fret offset from the root fret")

    model_config = {"frozen": True}


class ChordVoicingShape(BaseModel):
    """
    A named inversion of a movable voicing.

    Exactly one element is labelled 'R'; that element anchors the shape.
    """

    name: str = Field(..., description="Inversion name (e.g., 'Root', '1st Inv')")
    elements: list[ShapeElement] = Field(..., min_length=1)
    intervals: list[str] = Field(..., description="Interval label per element")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_labels(self) -> ChordVoicingShape:
        """Labels must pair with elements and name exactly one root."""
        if len(self.intervals) != len(self.elements):
            raise ValueError(
                f"Shape '{self.name}': {len(self.elements)} elements but "
                f"{len(self.intervals)} interval labels"
            )
        roots = self.intervals.count(ROOT_LABEL)
        if roots != 1:
            raise ValueError(f"Shape '{self.name}' must have exactly one root, found {roots}")
        return self

    @property
    def root_element(self) -> ShapeElement:
        """The element labelled 'R'."""
        return self.elements[self.intervals.index(ROOT_LABEL)]

    @property
    def offsets(self) -> list[int]:
        """All fret offsets."""
        return [e.offset for e in self.elements]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "name": self.name,
            "positions": [[e.string, e.offset] for e in self.elements],
            "intervals": list(self.intervals),
        }


class VoicingStringSet(BaseModel):
    """The inversions of one chord type on one group of adjacent strings."""

    label: str = Field(..., description="String names, low to high (e.g., 'D-G-B')")
    extended_range_only: bool = Field(
        False, description="Needs a 7th string (guitar) or 5th string (bass)"
    )
    inversions: list[ChordVoicingShape] = Field(..., min_length=1)

    model_config = {"frozen": True}


class VoicingFamily(BaseModel):
    """All string sets of one chord type."""

    chord_type: ChordType = Field(..., description="Chord type")
    description: str = Field("", description="Human-readable description")
    string_sets: list[VoicingStringSet] = Field(default_factory=list)

    model_config = {"frozen": True}

    def get_string_set(self, label: str) -> VoicingStringSet | None:
        """Find a string set by label (case-insensitive)."""
        for string_set in self.string_sets:
            if string_set.label.lower() == label.lower():
                return string_set
        return None


class CagedVariant(BaseModel):
    """Chord and scale shape of one CAGED form for one triad quality."""

    chord: list[ShapeElement] = Field(..., min_length=1)
    scale: list[ShapeElement] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def offsets(self) -> list[int]:
        """Fret offsets of chord and scale elements together."""
        return [e.offset for e in self.chord] + [e.offset for e in self.scale]


class CagedShape(BaseModel):
    """
    One of the five CAGED forms (C, A, G, E, D).

    Offsets are relative to the root fret on root_string, where the chord
    shape has offset 0. Major and minor variants share the anchor.
    """

    name: str = Field(..., description="Shape letter")
    root_string: int = Field(..., ge=0, le=5, description="String role carrying the root")
    major: CagedVariant
    minor: CagedVariant

    model_config = {"frozen": True}

    def variant(self, quality: TriadQuality) -> CagedVariant:
        """Variant for a triad quality."""
        return self.major if quality == TriadQuality.MAJOR else self.minor
