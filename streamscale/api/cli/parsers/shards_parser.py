"""Shards command argument parser for streamscale CLI."""

import argparse
from typing import Any, cast

from .common_arguments import add_common_arguments, add_config_arguments


def add_shards_subparser(subparsers: Any) -> argparse.ArgumentParser:
    """Add shards command subparser to the main parser."""
    shards_parser = subparsers.add_parser(
        "shards",
        help="List open shards and their hash key ranges",
    )

    shards_parser.add_argument("stream", help="Stream name")

    add_common_arguments(shards_parser)
    add_config_arguments(shards_parser, ["kinesis"])

    return cast(argparse.ArgumentParser, shards_parser)


__all__: list[str] = ["add_shards_subparser"]
