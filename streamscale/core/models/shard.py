"""Shard snapshot model.

ShardRef is a read-only snapshot produced by a shard directory query. It is
never refreshed in place; a fresher query produces new snapshots.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .hash_range import HashRange


class ShardStatus(Enum):
    """Lifecycle status of a shard."""

    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class ShardRef:
    """Immutable snapshot of a shard's identity, range and lineage.

    Attributes:
        stream_name: Stream the shard belongs to
        shard_id: Service-assigned shard identifier
        hash_range: Hash keys owned by the shard
        parent_shard_id: Lower parent for merged shards, sole parent for splits
        adjacent_parent_shard_id: Higher parent for merged shards
        status: OPEN while the shard accepts writes, CLOSED once superseded
    """

    stream_name: str
    shard_id: str
    hash_range: HashRange
    parent_shard_id: str | None = None
    adjacent_parent_shard_id: str | None = None
    status: ShardStatus = ShardStatus.OPEN

    @classmethod
    def from_kinesis(cls, stream_name: str, shard: dict[str, Any]) -> "ShardRef":
        """Build a snapshot from a ListShards/DescribeStream shard record.

        A shard is closed once its sequence number range has an ending
        sequence number.
        """
        sequence_range = shard.get("SequenceNumberRange") or {}
        status = (
            ShardStatus.CLOSED
            if sequence_range.get("EndingSequenceNumber")
            else ShardStatus.OPEN
        )
        return cls(
            stream_name=stream_name,
            shard_id=shard["ShardId"],
            hash_range=HashRange.from_kinesis(shard["HashKeyRange"]),
            parent_shard_id=shard.get("ParentShardId"),
            adjacent_parent_shard_id=shard.get("AdjacentParentShardId"),
            status=status,
        )

    @property
    def is_open(self) -> bool:
        return self.status is ShardStatus.OPEN

    def is_child_of(self, lower: "ShardRef", higher: "ShardRef") -> bool:
        """Check the merge lineage signature against two parent shards."""
        return (
            self.parent_shard_id == lower.shard_id
            and self.adjacent_parent_shard_id == higher.shard_id
        )
