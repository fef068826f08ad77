"""
Scale note source - root + scale name to ordered note names.

This is the engine's only door into the scale dictionary. Unknown names
produce an empty list; callers treat that as "no positions".
"""

from __future__ import annotations

import logging

from chuk_mcp_fretboard.core.pitch import PitchClass, chroma
from chuk_mcp_fretboard.core.scale import ScaleType

logger = logging.getLogger(__name__)


def get_scale_notes(root: str, scale_name: str) -> list[str]:
    """
    Spell a scale from a root.

    Args:
        root: Root note name (e.g., 'A', 'F#', 'Bb')
        scale_name: Scale or mode name (e.g., 'dorian', 'minor pentatonic')

    Returns:
        Ordered note names, or [] if the root or scale is unknown
    """
    scale = ScaleType.get(scale_name)
    if scale is None:
        logger.debug(f"Unknown scale '{scale_name}'")
        return []
    if chroma(root) is None:
        logger.debug(f"Unknown root '{root}'")
        return []
    return scale.spell(root)


def scale_chromas(root: str, scale_name: str) -> set[int]:
    """Pitch classes of a scale; empty for an unknown root or scale."""
    scale = ScaleType.get(scale_name)
    tonic = chroma(root)
    if scale is None or tonic is None:
        return set()
    return {pc.value for pc in scale.get_pitches(PitchClass(tonic))}
