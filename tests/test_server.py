"""
Tests for the command-line entry point.
"""

import os
from pathlib import Path

import pytest

from chuk_mcp_fretboard.server import (
    CATALOG_DIR_ENV,
    OUTPUT_DIR_ENV,
    apply_path_options,
    build_parser,
    format_tunings,
    main,
)


class TestBuildParser:
    """Tests for the option parser."""

    def test_defaults(self) -> None:
        """stdio on port 8000 with no path overrides."""
        args = build_parser().parse_args([])
        assert args.transport == "stdio"
        assert args.port == 8000
        assert args.catalog_dir is None
        assert args.output_dir is None
        assert not args.list_tunings
        assert not args.debug

    def test_path_options(self) -> None:
        """Directory options are kept as given."""
        args = build_parser().parse_args(
            ["--transport", "http", "--port", "9000", "--catalog-dir", "cat", "--output-dir", "out"]
        )
        assert args.transport == "http"
        assert args.port == 9000
        assert args.catalog_dir == "cat"
        assert args.output_dir == "out"

    def test_bad_transport(self) -> None:
        """Only stdio and http are accepted."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--transport", "ws"])


class TestApplyPathOptions:
    """Tests for handing directories to the server module."""

    def test_sets_environment(self, monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> None:
        """Given directories land in the environment."""
        monkeypatch.setenv(CATALOG_DIR_ENV, "previous")
        monkeypatch.setenv(OUTPUT_DIR_ENV, "previous")
        args = build_parser().parse_args(
            ["--catalog-dir", str(temp_dir / "catalog"), "--output-dir", str(temp_dir / "midi")]
        )
        apply_path_options(args)
        assert os.environ[CATALOG_DIR_ENV] == str(temp_dir / "catalog")
        assert os.environ[OUTPUT_DIR_ENV] == str(temp_dir / "midi")

    def test_leaves_environment_alone(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without options nothing is set."""
        monkeypatch.delenv(CATALOG_DIR_ENV, raising=False)
        monkeypatch.delenv(OUTPUT_DIR_ENV, raising=False)
        apply_path_options(build_parser().parse_args([]))
        assert CATALOG_DIR_ENV not in os.environ
        assert OUTPUT_DIR_ENV not in os.environ


class TestListTunings:
    """Tests for the tuning listing."""

    def test_format(self) -> None:
        """Every built-in tuning with its strings, lowest first."""
        lines = format_tunings().splitlines()
        assert len(lines) == 8
        assert lines[0].split() == ["standard-6", "E2", "A2", "D3", "G3", "B3", "E4"]
        assert any(line.split()[0] == "bass-standard-5" for line in lines)

    def test_main_prints_and_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--list-tunings prints without starting a server."""
        main(["--list-tunings"])
        out = capsys.readouterr().out
        assert "drop-a-7" in out
        assert "B0 E1 A1 D2 G2 C3" in out
