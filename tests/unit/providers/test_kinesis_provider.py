"""Tests for KinesisStreamProvider against a stubbed boto3 client."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import boto3
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError, ReadTimeoutError
from botocore.stub import Stubber

from streamscale.core.config.kinesis_config import KinesisConfig
from streamscale.core.config.scaling_config import ScalingConfig
from streamscale.core.constants import MAX_HASH_KEY
from streamscale.core.exceptions import (
    MergeCallStatus,
    MergeFailedError,
    StreamNotStableError,
)
from streamscale.core.models import HashRange
from streamscale.providers.kinesis import KinesisStreamProvider
from streamscale.services import AdjacentPair, MergeExecutor, MergeState
from tests.fixtures.fake_stream import SleepRecorder, make_shard

STREAM = "orders"
STARTING_SEQUENCE = "49590338271490256608559692538361571095921575989136588898"


@pytest.fixture
def kinesis_client():
    return boto3.client(
        "kinesis",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubber(kinesis_client):
    with Stubber(kinesis_client) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def provider(kinesis_client, sleep_recorder):
    return KinesisStreamProvider(
        KinesisConfig(region="us-east-1"),
        ScalingConfig(status_poll_seconds=1.0, stream_status_timeout_seconds=3.0),
        client=kinesis_client,
        sleep=sleep_recorder,
    )


def _shard(shard_id, start, end, closed=False, **lineage):
    sequence_range = {"StartingSequenceNumber": STARTING_SEQUENCE}
    if closed:
        sequence_range["EndingSequenceNumber"] = STARTING_SEQUENCE
    shard = {
        "ShardId": shard_id,
        "HashKeyRange": {"StartingHashKey": str(start), "EndingHashKey": str(end)},
        "SequenceNumberRange": sequence_range,
    }
    shard.update(lineage)
    return shard


def _summary(status):
    return {
        "StreamDescriptionSummary": {
            "StreamName": STREAM,
            "StreamARN": f"arn:aws:kinesis:us-east-1:123456789012:stream/{STREAM}",
            "StreamStatus": status,
            "RetentionPeriodHours": 24,
            "StreamCreationTimestamp": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "EnhancedMonitoring": [],
            "OpenShardCount": 2,
        }
    }


MERGE_PARAMS = {
    "StreamName": STREAM,
    "ShardToMerge": "shardId-000000000000",
    "AdjacentShardToMerge": "shardId-000000000001",
}


class TestMergeShards:
    """Test tagged merge results."""

    @pytest.mark.asyncio
    async def test_success(self, provider, stubber):
        stubber.add_response("merge_shards", {}, MERGE_PARAMS)
        result = await provider.merge_shards(
            STREAM, "shardId-000000000000", "shardId-000000000001"
        )
        assert result.ok
        assert result.error is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "code,expected",
        [
            ("ResourceInUseException", MergeCallStatus.TRANSIENT_BUSY),
            ("LimitExceededException", MergeCallStatus.RATE_LIMITED),
            ("InvalidArgumentException", MergeCallStatus.OTHER),
        ],
    )
    async def test_errors_are_tagged(self, provider, stubber, code, expected):
        stubber.add_client_error(
            "merge_shards",
            service_error_code=code,
            service_message="rejected",
            http_status_code=400,
            expected_params=MERGE_PARAMS,
        )
        result = await provider.merge_shards(
            STREAM, "shardId-000000000000", "shardId-000000000001"
        )
        assert result.status is expected
        assert isinstance(result.error, ClientError)
        assert not result.ok


class TestListOpenShards:
    """Test open shard enumeration."""

    @pytest.mark.asyncio
    async def test_closed_shards_are_filtered(self, provider, stubber):
        half = 2**127
        stubber.add_response(
            "list_shards",
            {
                "Shards": [
                    _shard("shardId-000000000000", 0, half - 1, closed=True),
                    _shard("shardId-000000000001", half, MAX_HASH_KEY, closed=True),
                    _shard(
                        "shardId-000000000002",
                        0,
                        MAX_HASH_KEY,
                        ParentShardId="shardId-000000000000",
                        AdjacentParentShardId="shardId-000000000001",
                    ),
                ]
            },
            {"StreamName": STREAM},
        )

        open_shards = await provider.list_open_shards(STREAM)

        assert list(open_shards) == ["shardId-000000000002"]
        child = open_shards["shardId-000000000002"]
        assert child.hash_range == HashRange(0, MAX_HASH_KEY)
        assert child.parent_shard_id == "shardId-000000000000"
        assert child.adjacent_parent_shard_id == "shardId-000000000001"
        assert child.stream_name == STREAM


class TestWaitForStreamStatus:
    """Test stream status polling."""

    @pytest.mark.asyncio
    async def test_returns_when_active(self, provider, stubber, sleep_recorder):
        stubber.add_response("describe_stream_summary", _summary("UPDATING"), {"StreamName": STREAM})
        stubber.add_response("describe_stream_summary", _summary("ACTIVE"), {"StreamName": STREAM})

        await provider.wait_for_stream_status(STREAM)

        assert sleep_recorder.delays == [1.0]

    @pytest.mark.asyncio
    async def test_rate_limited_poll_is_tolerated(self, provider, stubber, sleep_recorder):
        stubber.add_client_error(
            "describe_stream_summary",
            service_error_code="LimitExceededException",
            http_status_code=400,
        )
        stubber.add_response("describe_stream_summary", _summary("ACTIVE"), {"StreamName": STREAM})

        await provider.wait_for_stream_status(STREAM)

        assert sleep_recorder.delays == [1.0]
        # Throttled polls are not merge-call failures
        assert provider.classifier.get_error_stats()["counts"]["total"] == 0

    @pytest.mark.asyncio
    async def test_timeout_raises_stream_not_stable(self, provider, stubber, sleep_recorder):
        for _ in range(3):
            stubber.add_response(
                "describe_stream_summary", _summary("UPDATING"), {"StreamName": STREAM}
            )

        with pytest.raises(StreamNotStableError, match="UPDATING") as exc_info:
            await provider.wait_for_stream_status(STREAM)

        assert exc_info.value.last_status == "UPDATING"
        assert exc_info.value.target_status == "ACTIVE"
        assert sleep_recorder.delays == [1.0, 1.0]

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self, provider, stubber):
        stubber.add_client_error(
            "describe_stream_summary",
            service_error_code="ResourceNotFoundException",
            http_status_code=400,
        )
        with pytest.raises(ClientError):
            await provider.wait_for_stream_status(STREAM)


class TestClientCreation:
    """Test lazy boto3 client creation."""

    def test_client_uses_config(self, monkeypatch):
        created = {}

        class FakeSession:
            def __init__(self, profile_name=None):
                created["profile"] = profile_name

            def client(self, service, region_name=None, endpoint_url=None):
                created.update(service=service, region=region_name, endpoint=endpoint_url)
                return object()

        monkeypatch.setattr(boto3.session, "Session", FakeSession)
        provider = KinesisStreamProvider(
            KinesisConfig(region="eu-west-1", endpoint_url="http://localhost:4566", profile="dev")
        )

        client = provider.client

        assert provider.client is client
        assert created == {
            "profile": "dev",
            "service": "kinesis",
            "region": "eu-west-1",
            "endpoint": "http://localhost:4566",
        }


class TestTransportFailures:
    """Test connection-level botocore failures on the merge call."""

    @pytest.fixture
    def failing_client(self):
        client = MagicMock()
        client.merge_shards.side_effect = EndpointConnectionError(
            endpoint_url="https://kinesis.us-east-1.amazonaws.com"
        )
        return client

    @pytest.mark.asyncio
    async def test_connection_error_is_tagged_other(self, failing_client):
        provider = KinesisStreamProvider(client=failing_client)

        result = await provider.merge_shards(
            STREAM, "shardId-000000000000", "shardId-000000000001"
        )

        assert result.status is MergeCallStatus.OTHER
        assert isinstance(result.error, EndpointConnectionError)
        assert provider.classifier.get_error_stats()["counts"]["other"] == 1

    @pytest.mark.asyncio
    async def test_read_timeout_is_tagged_other(self):
        client = MagicMock()
        client.merge_shards.side_effect = ReadTimeoutError(
            endpoint_url="https://kinesis.us-east-1.amazonaws.com"
        )
        provider = KinesisStreamProvider(client=client)

        result = await provider.merge_shards(
            STREAM, "shardId-000000000000", "shardId-000000000001"
        )

        assert result.status is MergeCallStatus.OTHER

    @pytest.mark.asyncio
    async def test_connection_error_fails_merge(self, failing_client):
        provider = KinesisStreamProvider(client=failing_client)
        pair = AdjacentPair(
            STREAM,
            make_shard("shardId-000000000000", 0, 999, stream_name=STREAM),
            make_shard("shardId-000000000001", 1000, 1999, stream_name=STREAM),
        )
        executor = MergeExecutor(provider, provider)

        with pytest.raises(MergeFailedError) as exc_info:
            await executor.execute(pair)

        assert isinstance(exc_info.value.cause, EndpointConnectionError)
        assert executor.state is MergeState.FAILED
        assert executor.attempts == 1
        failing_client.list_shards.assert_not_called()
        failing_client.describe_stream_summary.assert_not_called()
