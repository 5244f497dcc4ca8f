"""Exception types and error classification for streamscale."""

from .merge_error_classification import (
    ErrorCounters,
    ErrorSample,
    MergeCallStatus,
    MergeErrorClassifier,
)
from .scaling import (
    AdjacencyViolationError,
    ChildShardNotFoundError,
    MergeFailedError,
    RetriesExhaustedError,
    ScalingError,
    ShardNotOpenError,
    StreamNotStableError,
)

__all__ = [
    "AdjacencyViolationError",
    "ChildShardNotFoundError",
    "ErrorCounters",
    "ErrorSample",
    "MergeCallStatus",
    "MergeErrorClassifier",
    "MergeFailedError",
    "RetriesExhaustedError",
    "ScalingError",
    "ShardNotOpenError",
    "StreamNotStableError",
]
