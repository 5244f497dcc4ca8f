"""Domain models for streamscale."""

from .hash_range import HashRange
from .shard import ShardRef, ShardStatus

__all__ = ["HashRange", "ShardRef", "ShardStatus"]
