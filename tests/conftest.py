import os

import pytest

from tests.fixtures.fake_stream import FakeStream, SleepRecorder, make_shard


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Ensure tests run with a clean environment.

    - Unset STREAMSCALE_* variables that alter configuration.
    - Unset AWS region/profile variables so config defaults are predictable.
    """
    to_clear = [k for k in os.environ.keys() if k.startswith("STREAMSCALE_")]
    to_clear += ["AWS_REGION", "AWS_DEFAULT_REGION", "AWS_PROFILE"]
    for k in to_clear:
        monkeypatch.delenv(k, raising=False)
    yield


@pytest.fixture
def lower_shard():
    return make_shard("shardId-000000000000", 0, 999)


@pytest.fixture
def higher_shard():
    return make_shard("shardId-000000000001", 1000, 1999)


@pytest.fixture
def fake_stream(lower_shard, higher_shard):
    return FakeStream([lower_shard, higher_shard, make_shard("shardId-000000000002", 2000, 2999)])


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()
