"""Exception types for shard merge operations.

Terminal merge failures are kept distinct so callers can tell "the merge never
happened" (MergeFailedError, RetriesExhaustedError) from "the merge happened
but bookkeeping lagged" (StreamNotStableError, ChildShardNotFoundError).
"""


class ScalingError(Exception):
    """Base exception for stream scaling operations."""

    pass


class AdjacencyViolationError(ScalingError):
    """Raised when two shards do not share a contiguous hash key boundary.

    Detected locally at pair construction; no remote call is made.
    """

    pass


class ShardNotOpenError(ScalingError):
    """Raised when a requested shard id is not among the stream's open shards."""

    def __init__(self, stream_name: str, shard_id: str):
        self.stream_name = stream_name
        self.shard_id = shard_id
        super().__init__(f"Shard {shard_id} is not open in stream {stream_name}")


class MergeFailedError(ScalingError):
    """Raised when the remote merge call fails with a non-retryable error."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class RetriesExhaustedError(ScalingError):
    """Raised when the merge call never succeeded within the retry budget."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Unable to merge shards after {attempts} attempts")


class StreamNotStableError(ScalingError):
    """Raised when the stream does not reach the target status in time."""

    def __init__(
        self,
        stream_name: str,
        target_status: str,
        last_status: str | None = None,
        timeout: float | None = None,
    ):
        self.stream_name = stream_name
        self.target_status = target_status
        self.last_status = last_status
        message = f"Stream {stream_name} did not reach status {target_status}"
        if timeout is not None:
            message += f" within {timeout:.1f}s"
        if last_status is not None:
            message += f" (last status: {last_status})"
        super().__init__(message)


class ChildShardNotFoundError(ScalingError):
    """Raised when a submitted merge cannot be resolved to exactly one child shard."""

    def __init__(
        self,
        stream_name: str,
        lower_shard_id: str,
        higher_shard_id: str,
        candidates: list[str] | None = None,
    ):
        self.stream_name = stream_name
        self.lower_shard_id = lower_shard_id
        self.higher_shard_id = higher_shard_id
        self.candidates = candidates or []
        if self.candidates:
            detail = f"found {len(self.candidates)} candidates: {', '.join(self.candidates)}"
        else:
            detail = "no open shard carries that lineage"
        super().__init__(
            f"Merge of {lower_shard_id} and {higher_shard_id} in stream "
            f"{stream_name} was submitted but the child shard could not be "
            f"resolved ({detail})"
        )
