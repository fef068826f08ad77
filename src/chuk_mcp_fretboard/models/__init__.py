"""
Pydantic models for the fretboard catalog.

This module provides:
- ModeDescriptor: Scale/mode teaching metadata
- ChordVoicingShape: Movable voicing inversion
- VoicingStringSet / VoicingFamily: Grouped voicings
- CagedShape: CAGED chord and scale forms
- Progression: Named jam progression
"""

from chuk_mcp_fretboard.models.mode import ModeDescriptor
from chuk_mcp_fretboard.models.progression import Progression
from chuk_mcp_fretboard.models.voicing import (
    CagedShape,
    CagedVariant,
    ChordVoicingShape,
    ShapeElement,
    VoicingFamily,
    VoicingStringSet,
)

__all__ = [
    "ModeDescriptor",
    "ChordVoicingShape",
    "ShapeElement",
    "VoicingStringSet",
    "VoicingFamily",
    "CagedShape",
    "CagedVariant",
    "Progression",
]
