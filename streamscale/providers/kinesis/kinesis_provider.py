"""Kinesis provider for streamscale - boto3-backed MergeClient and ShardDirectory."""

import asyncio
import math
from collections.abc import Awaitable, Callable
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from streamscale.core.config.kinesis_config import KinesisConfig
from streamscale.core.config.scaling_config import ScalingConfig
from streamscale.core.constants import STREAM_STATUS_ACTIVE
from streamscale.core.exceptions import MergeErrorClassifier, StreamNotStableError
from streamscale.core.exceptions.merge_error_classification import (
    RATE_LIMIT_ERROR_CODES,
    extract_error_code,
)
from streamscale.core.models import ShardRef
from streamscale.interfaces.merge_client import MergeCallResult


class KinesisStreamProvider:
    """Kinesis control-plane provider implementing MergeClient and ShardDirectory.

    boto3 clients are blocking, so every call is pushed onto a worker thread
    with ``asyncio.to_thread``.

    Thread Safety:
        boto3 low-level clients are thread-safe; one provider may serve many
        concurrent merges. The provider keeps no per-stream state.
    """

    def __init__(
        self,
        config: KinesisConfig | None = None,
        scaling: ScalingConfig | None = None,
        client: Any = None,
        classifier: MergeErrorClassifier | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize Kinesis provider.

        Args:
            config: Connection settings (region, endpoint, profile)
            scaling: Status polling interval and timeout
            client: Pre-built boto3 Kinesis client; created lazily when None
            classifier: Error classifier used to tag merge failures
            sleep: Awaitable sleep used between status polls
        """
        self._config = config or KinesisConfig()
        self._scaling = scaling or ScalingConfig()
        self._client = client
        self._classifier = classifier or MergeErrorClassifier()
        self._sleep = sleep

    @property
    def client(self) -> Any:
        """Return the boto3 Kinesis client, creating it on first use."""
        if self._client is None:
            session = boto3.session.Session(profile_name=self._config.profile)
            self._client = session.client(
                "kinesis",
                region_name=self._config.region,
                endpoint_url=self._config.endpoint_url,
            )
            logger.debug(
                f"Created Kinesis client (region={self._config.region}, "
                f"endpoint={self._config.endpoint_url})"
            )
        return self._client

    @property
    def classifier(self) -> MergeErrorClassifier:
        return self._classifier

    async def merge_shards(
        self, stream_name: str, lower_shard_id: str, higher_shard_id: str
    ) -> MergeCallResult:
        """Issue MergeShards and tag the outcome instead of raising."""
        try:
            await asyncio.to_thread(
                self.client.merge_shards,
                StreamName=stream_name,
                ShardToMerge=lower_shard_id,
                AdjacentShardToMerge=higher_shard_id,
            )
        except (ClientError, BotoCoreError) as e:
            status = self._classifier.classify_exception(
                e,
                stream_name=stream_name,
                context={"lower": lower_shard_id, "higher": higher_shard_id},
            )
            return MergeCallResult(status=status, error=e)
        return MergeCallResult.success()

    async def list_open_shards(self, stream_name: str) -> dict[str, ShardRef]:
        """Page through ListShards and keep the open shards."""
        shards = await asyncio.to_thread(self._list_all_shards, stream_name)
        open_shards: dict[str, ShardRef] = {}
        for shard in shards:
            ref = ShardRef.from_kinesis(stream_name, shard)
            if ref.is_open:
                open_shards[ref.shard_id] = ref
        logger.debug(
            f"Stream {stream_name}: {len(open_shards)} open of {len(shards)} shards"
        )
        return open_shards

    def _list_all_shards(self, stream_name: str) -> list[dict[str, Any]]:
        paginator = self.client.get_paginator("list_shards")
        shards: list[dict[str, Any]] = []
        for page in paginator.paginate(StreamName=stream_name):
            shards.extend(page.get("Shards", []))
        return shards

    async def wait_for_stream_status(
        self, stream_name: str, target_status: str = STREAM_STATUS_ACTIVE
    ) -> None:
        """Poll DescribeStreamSummary until the stream reaches ``target_status``.

        Raises:
            StreamNotStableError: If the status is not reached within the
                configured timeout
        """
        poll_interval = self._scaling.status_poll_seconds
        timeout = self._scaling.stream_status_timeout_seconds
        max_polls = max(1, math.ceil(timeout / poll_interval))
        last_status: str | None = None

        for poll in range(1, max_polls + 1):
            try:
                response = await asyncio.to_thread(
                    self.client.describe_stream_summary, StreamName=stream_name
                )
            except ClientError as e:
                if extract_error_code(e) not in RATE_LIMIT_ERROR_CODES:
                    raise
                logger.debug(f"Status poll for {stream_name} rate limited, retrying")
            else:
                last_status = response["StreamDescriptionSummary"]["StreamStatus"]
                if last_status == target_status:
                    logger.debug(
                        f"Stream {stream_name} reached {target_status} after {poll} poll(s)"
                    )
                    return

            if poll < max_polls:
                await self._sleep(poll_interval)

        raise StreamNotStableError(
            stream_name, target_status, last_status=last_status, timeout=timeout
        )
