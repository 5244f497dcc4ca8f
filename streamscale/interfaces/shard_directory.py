"""ShardDirectory protocol for streamscale - read side of the stream control plane."""

from typing import Protocol

from streamscale.core.constants import STREAM_STATUS_ACTIVE
from streamscale.core.models import ShardRef


class ShardDirectory(Protocol):
    """Abstract protocol for shard enumeration and stream status polling."""

    async def list_open_shards(self, stream_name: str) -> dict[str, ShardRef]:
        """Return a fresh snapshot of the stream's open shards keyed by shard id."""
        ...

    async def wait_for_stream_status(
        self, stream_name: str, target_status: str = STREAM_STATUS_ACTIVE
    ) -> None:
        """Block until the stream reports ``target_status``.

        Polling and backoff are implementation details.

        Raises:
            StreamNotStableError: If the status is not reached in time
        """
        ...
