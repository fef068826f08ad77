"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_fretboard.catalog import CatalogLoader
from chuk_mcp_fretboard.core import STANDARD_TUNINGS, Tuning


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def guitar() -> Tuning:
    """Standard 6-string guitar."""
    return STANDARD_TUNINGS["standard-6"]


@pytest.fixture
def seven_string() -> Tuning:
    """Standard 7-string guitar."""
    return STANDARD_TUNINGS["standard-7"]


@pytest.fixture
def bass() -> Tuning:
    """Standard 4-string bass."""
    return STANDARD_TUNINGS["bass-standard-4"]


@pytest.fixture
def library_path() -> Path:
    """Path to the packaged catalog library."""
    return Path(__file__).parent.parent / "src" / "chuk_mcp_fretboard" / "catalog" / "library"


@pytest.fixture
def catalog(library_path: Path) -> CatalogLoader:
    """Catalog loader over the packaged library only."""
    return CatalogLoader(library_path=library_path)


class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


@pytest.fixture
def mock_mcp() -> MockMCPServer:
    """A fresh mock server."""
    return MockMCPServer("test")
