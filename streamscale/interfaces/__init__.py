"""Collaborator protocols consumed by the merge core."""

from .merge_client import MergeCallResult, MergeClient
from .shard_directory import ShardDirectory

__all__ = ["MergeCallResult", "MergeClient", "ShardDirectory"]
