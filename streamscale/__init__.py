"""streamscale - shard merge orchestration for hash-range partitioned streams."""

__version__ = "0.1.0"
