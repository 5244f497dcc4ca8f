"""Service layer for streamscale - merge protocol coordination."""

from .adjacent_shards import AdjacentPair
from .merge_executor import MergeExecutor, MergeState

__all__ = ["AdjacentPair", "MergeExecutor", "MergeState"]
