"""Adjacent shard pair - validated input to a shard merge."""

from streamscale.core.config.scaling_config import ScalingConfig
from streamscale.core.exceptions import AdjacencyViolationError, ShardNotOpenError
from streamscale.core.models import HashRange, ShardRef
from streamscale.interfaces.merge_client import MergeClient
from streamscale.interfaces.shard_directory import ShardDirectory

from .merge_executor import MergeExecutor


class AdjacentPair:
    """Two open shards of a stream whose hash ranges are contiguous.

    Adjacency is checked once, at construction. The pair borrows the
    snapshots it was given and never refreshes them.
    """

    def __init__(self, stream_name: str, lower: ShardRef, higher: ShardRef):
        if not lower.hash_range.is_adjacent_to(higher.hash_range):
            raise AdjacencyViolationError(
                f"Shards {lower.shard_id} {lower.hash_range} and "
                f"{higher.shard_id} {higher.hash_range} are not adjacent"
            )
        self.stream_name = stream_name
        self.lower = lower
        self.higher = higher

    @classmethod
    def from_open_shards(
        cls,
        stream_name: str,
        open_shards: dict[str, ShardRef],
        first_shard_id: str,
        second_shard_id: str,
    ) -> "AdjacentPair":
        """Build a pair from two shard ids in either order.

        Raises:
            ShardNotOpenError: If either id is not an open shard
            AdjacencyViolationError: If the shards are not adjacent
        """
        shards = []
        for shard_id in (first_shard_id, second_shard_id):
            if shard_id not in open_shards:
                raise ShardNotOpenError(stream_name, shard_id)
            shards.append(open_shards[shard_id])
        lower, higher = sorted(shards, key=lambda shard: shard.hash_range)
        return cls(stream_name, lower, higher)

    @property
    def merged_hash_range(self) -> HashRange:
        """Hash range the child shard will own."""
        return self.lower.hash_range.merged_with(self.higher.hash_range)

    async def merge(
        self,
        client: MergeClient,
        directory: ShardDirectory,
        config: ScalingConfig | None = None,
    ) -> ShardRef:
        """Merge the two shards and return the resulting child shard."""
        executor = MergeExecutor(client, directory, config)
        return await executor.execute(self)

    def __repr__(self) -> str:
        return (
            f"AdjacentPair(stream_name={self.stream_name!r}, "
            f"lower={self.lower.shard_id!r}, higher={self.higher.shard_id!r})"
        )
