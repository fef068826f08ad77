#!/usr/bin/env python3
"""
Entry point for the CHUK Fretboard MCP Server.

Runs the server over stdio or http. The catalog override directory and the
MIDI output directory can be set on the command line; they are handed to
the server module through environment variables, so set them before it is
imported.
"""

import argparse
import asyncio
import logging
import os
from collections.abc import Sequence

from chuk_mcp_fretboard.core import STANDARD_TUNINGS

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CATALOG_DIR_ENV = "CHUK_FRETBOARD_CATALOG_DIR"
OUTPUT_DIR_ENV = "CHUK_FRETBOARD_OUTPUT_DIR"


def build_parser() -> argparse.ArgumentParser:
    """Command-line options for the server."""
    parser = argparse.ArgumentParser(description="CHUK Fretboard MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--catalog-dir",
        help="Project catalog directory overriding library YAML (default: ./catalog)",
    )
    parser.add_argument(
        "--output-dir",
        help="Directory for exported MIDI files (default: ./output)",
    )
    parser.add_argument(
        "--list-tunings",
        action="store_true",
        help="Print the built-in tunings and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def apply_path_options(args: argparse.Namespace) -> None:
    """Export directory options for the server module to pick up."""
    if args.catalog_dir:
        os.environ[CATALOG_DIR_ENV] = args.catalog_dir
        logger.debug(f"Catalog dir set to {args.catalog_dir}")
    if args.output_dir:
        os.environ[OUTPUT_DIR_ENV] = args.output_dir
        logger.debug(f"Output dir set to {args.output_dir}")


def format_tunings() -> str:
    """One line per built-in tuning, lowest string first."""
    return "\n".join(
        f"{name:<16} {' '.join(tuning.notes)}" for name, tuning in STANDARD_TUNINGS.items()
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point with transport detection."""
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.list_tunings:
        print(format_tunings())
        return

    apply_path_options(args)

    # The server module reads the path options at import time
    from chuk_mcp_fretboard.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting CHUK Fretboard MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Fretboard MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
