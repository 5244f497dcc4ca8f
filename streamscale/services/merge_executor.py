"""Merge executor - drives the retrying merge call and resolves the child shard.

State machine for one merge:

    REQUESTED -> RETRY_WAIT -> REQUESTED ... -> SUBMITTED -> AWAITING_STABLE -> RESOLVED

Any terminal error moves the executor to FAILED.

Busy and rate-limit rejections share a single attempt counter and retry
budget, so a mix of the two exhausts retries sooner than pure rate limiting.
"""

import asyncio
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TYPE_CHECKING

from loguru import logger

from streamscale.core.config.scaling_config import ScalingConfig
from streamscale.core.constants import STREAM_STATUS_ACTIVE
from streamscale.core.exceptions import (
    ChildShardNotFoundError,
    MergeCallStatus,
    MergeFailedError,
    RetriesExhaustedError,
    ScalingError,
)
from streamscale.core.models import ShardRef
from streamscale.interfaces.merge_client import MergeClient
from streamscale.interfaces.shard_directory import ShardDirectory

if TYPE_CHECKING:
    from .adjacent_shards import AdjacentPair


class MergeState(Enum):
    """Protocol state of a merge operation."""

    REQUESTED = "requested"
    RETRY_WAIT = "retry_wait"
    SUBMITTED = "submitted"
    AWAITING_STABLE = "awaiting_stable"
    RESOLVED = "resolved"
    FAILED = "failed"


class MergeExecutor:
    """Runs the merge protocol for a single adjacent shard pair.

    An executor holds the retry counter for one merge call; create a new one
    per merge. No locking is done on shard ids: two concurrent merges touching
    the same shard are arbitrated by the service's busy rejection.
    """

    def __init__(
        self,
        client: MergeClient,
        directory: ShardDirectory,
        config: ScalingConfig | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize merge executor.

        Args:
            client: Issues the remote merge call
            directory: Lists open shards and waits for stream status
            config: Retry budget and backoff settings
            sleep: Awaitable sleep used for retry waits; cancelling the
                enclosing task interrupts it
        """
        self._client = client
        self._directory = directory
        self._config = config or ScalingConfig()
        self._sleep = sleep
        self.state: MergeState | None = None
        self.attempts = 0

    def backoff_seconds(self, attempt: int, status: MergeCallStatus) -> float:
        """Wait before the next attempt after a retryable rejection.

        Busy rejections wait a flat interval; rate limits wait
        ``2**attempt * base_retry_ms``.
        """
        if status is MergeCallStatus.TRANSIENT_BUSY:
            return self._config.busy_retry_seconds
        if status is MergeCallStatus.RATE_LIMITED:
            return (2**attempt) * self._config.base_retry_ms / 1000.0
        raise ValueError(f"No backoff defined for {status.value} outcome")

    def _transition(self, state: MergeState) -> None:
        logger.debug(f"Merge state {self.state.value if self.state else None} -> {state.value}")
        self.state = state

    async def execute(self, pair: "AdjacentPair") -> ShardRef:
        """Merge the pair and return the resulting child shard.

        Raises:
            MergeFailedError: Non-retryable remote error
            RetriesExhaustedError: No successful submission within the budget
            StreamNotStableError: Stream did not return to ACTIVE
            ChildShardNotFoundError: Merge submitted but no unique child found
        """
        try:
            await self._submit(pair)

            self._transition(MergeState.AWAITING_STABLE)
            await self._directory.wait_for_stream_status(
                pair.stream_name, STREAM_STATUS_ACTIVE
            )

            child = await self._resolve_child(pair)
        except ScalingError:
            self._transition(MergeState.FAILED)
            raise

        self._transition(MergeState.RESOLVED)
        logger.info(
            f"Merged {pair.lower.shard_id} and {pair.higher.shard_id} into "
            f"{child.shard_id} {child.hash_range}"
        )
        return child

    async def _submit(self, pair: "AdjacentPair") -> None:
        max_attempts = self._config.modify_retries
        self.attempts = 0

        while self.attempts < max_attempts:
            self.attempts += 1
            self._transition(MergeState.REQUESTED)

            result = await self._client.merge_shards(
                pair.stream_name, pair.lower.shard_id, pair.higher.shard_id
            )

            if result.status is MergeCallStatus.SUCCESS:
                self._transition(MergeState.SUBMITTED)
                logger.debug(
                    f"Merge of {pair.lower.shard_id} and {pair.higher.shard_id} "
                    f"submitted on attempt {self.attempts}"
                )
                return

            if result.status is MergeCallStatus.OTHER:
                raise MergeFailedError(
                    f"Merge of {pair.lower.shard_id} and {pair.higher.shard_id} "
                    f"in stream {pair.stream_name} failed: {result.error}",
                    cause=result.error,
                ) from result.error

            if self.attempts >= max_attempts:
                break

            delay = self.backoff_seconds(self.attempts, result.status)
            self._transition(MergeState.RETRY_WAIT)
            logger.warning(
                f"Merge attempt {self.attempts}/{max_attempts} for stream "
                f"{pair.stream_name} rejected ({result.status.value}), "
                f"retrying in {delay:.2f}s"
            )
            await self._sleep(delay)

        raise RetriesExhaustedError(self.attempts)

    async def _resolve_child(self, pair: "AdjacentPair") -> ShardRef:
        open_shards = await self._directory.list_open_shards(pair.stream_name)

        matches = [
            shard
            for shard in open_shards.values()
            if shard.is_child_of(pair.lower, pair.higher)
        ]

        if len(matches) != 1:
            raise ChildShardNotFoundError(
                pair.stream_name,
                pair.lower.shard_id,
                pair.higher.shard_id,
                candidates=[shard.shard_id for shard in matches],
            )
        return matches[0]
