"""Merge command argument parser for streamscale CLI."""

import argparse
from typing import Any, cast

from .common_arguments import add_common_arguments, add_config_arguments


def add_merge_subparser(subparsers: Any) -> argparse.ArgumentParser:
    """Add merge command subparser to the main parser.

    Args:
        subparsers: Subparsers object from the main argument parser

    Returns:
        The configured merge subparser
    """
    merge_parser = subparsers.add_parser(
        "merge",
        help="Merge two adjacent open shards",
        description=(
            "Merges two open shards whose hash key ranges are contiguous. "
            "The shards may be given in either order. Waits for the stream "
            "to become ACTIVE and reports the resulting child shard."
        ),
    )

    merge_parser.add_argument("stream", help="Stream name")
    merge_parser.add_argument("shard_a", help="First shard id")
    merge_parser.add_argument("shard_b", help="Second shard id")

    merge_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the child shard as JSON",
    )

    add_common_arguments(merge_parser)
    add_config_arguments(merge_parser, ["kinesis", "scaling"])

    return cast(argparse.ArgumentParser, merge_parser)


__all__: list[str] = ["add_merge_subparser"]
