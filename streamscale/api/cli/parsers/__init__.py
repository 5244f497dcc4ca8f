"""Argument parser utilities for streamscale CLI commands."""

from .main_parser import create_main_parser, setup_subparsers
from .merge_parser import add_merge_subparser
from .shards_parser import add_shards_subparser

__all__ = [
    "add_merge_subparser",
    "add_shards_subparser",
    "create_main_parser",
    "setup_subparsers",
]
