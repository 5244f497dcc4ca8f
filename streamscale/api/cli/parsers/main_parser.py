"""Top-level argument parser for streamscale CLI."""

import argparse

from streamscale import __version__

from .merge_parser import add_merge_subparser
from .shards_parser import add_shards_subparser


def create_main_parser() -> argparse.ArgumentParser:
    """Create the top-level parser."""
    parser = argparse.ArgumentParser(
        prog="streamscale",
        description="Shard merge orchestration for hash-range partitioned streams",
    )
    parser.add_argument(
        "--version", action="version", version=f"streamscale {__version__}"
    )
    return parser


def setup_subparsers(parser: argparse.ArgumentParser) -> None:
    """Register all command subparsers."""
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    add_merge_subparser(subparsers)
    add_shards_subparser(subparsers)
