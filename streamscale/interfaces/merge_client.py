"""MergeClient protocol for streamscale - the remote merge call."""

from dataclasses import dataclass
from typing import Protocol

from streamscale.core.exceptions import MergeCallStatus


@dataclass(frozen=True)
class MergeCallResult:
    """Tagged outcome of one merge call.

    Attributes:
        status: Which retry class the outcome falls into
        error: The originating exception for any non-success status
    """

    status: MergeCallStatus
    error: BaseException | None = None

    @classmethod
    def success(cls) -> "MergeCallResult":
        return cls(status=MergeCallStatus.SUCCESS)

    @property
    def ok(self) -> bool:
        return self.status is MergeCallStatus.SUCCESS


class MergeClient(Protocol):
    """Abstract protocol for issuing shard merges.

    Implementations report remote failures as tagged results rather than
    raising, so callers can dispatch on the failure kind.
    """

    async def merge_shards(
        self, stream_name: str, lower_shard_id: str, higher_shard_id: str
    ) -> MergeCallResult:
        """Request that two adjacent shards be merged."""
        ...
