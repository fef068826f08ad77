"""
Teaching catalog - modes, voicings, CAGED forms and jam progressions.

The catalog is static data shipped as YAML and parsed into frozen models.
A project directory may override any library file.
"""

from chuk_mcp_fretboard.catalog.loader import CatalogLoader, default_catalog

__all__ = [
    "CatalogLoader",
    "default_catalog",
]
