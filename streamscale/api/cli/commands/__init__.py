"""CLI command implementations."""

from .merge import merge_command
from .shards import shards_command

__all__ = ["merge_command", "shards_command"]
