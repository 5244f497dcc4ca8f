"""Merge Error Classification System for streamscale.

This module turns remote merge-call failures into tagged outcomes so the
retry loop can switch on them explicitly instead of catching several
exception types.

The classification system categorizes errors as:
- TRANSIENT_BUSY: The stream or shard is being mutated by a concurrent operation
- RATE_LIMITED: The caller exceeded the control-plane request rate
- OTHER: Anything else, which is not retried
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MergeCallStatus(Enum):
    """Tagged outcome of a single remote merge call."""

    SUCCESS = "success"

    TRANSIENT_BUSY = "transient_busy"
    """Target is mid-mutation; retry shortly with a flat wait.
    Examples: ResourceInUseException."""

    RATE_LIMITED = "rate_limited"
    """Request rate exceeded; retry with exponential backoff.
    Examples: LimitExceededException, ThrottlingException."""

    OTHER = "other"
    """Unrecognized failure; surfaced immediately."""


BUSY_ERROR_CODES = frozenset({"ResourceInUseException"})

RATE_LIMIT_ERROR_CODES = frozenset(
    {
        "LimitExceededException",
        "ProvisionedThroughputExceededException",
        "ThrottlingException",
        "Throttling",
        "TooManyRequestsException",
    }
)


@dataclass
class ErrorSample:
    """Represents a single error sample for logging and analysis."""

    timestamp: float
    error_code: str
    message: str
    stream_name: str | None = None
    context: dict[str, Any] | None = None


@dataclass
class ErrorCounters:
    """Tracks error counts and samples for each failure classification."""

    transient_busy: int = 0
    rate_limited: int = 0
    other: int = 0

    samples: dict[MergeCallStatus, list[ErrorSample]] = field(default_factory=dict)

    max_samples_per_type: int = 5

    def increment(self, classification: MergeCallStatus) -> None:
        """Increment counter for the given classification."""
        if classification == MergeCallStatus.TRANSIENT_BUSY:
            self.transient_busy += 1
        elif classification == MergeCallStatus.RATE_LIMITED:
            self.rate_limited += 1
        elif classification == MergeCallStatus.OTHER:
            self.other += 1

    def add_sample(
        self,
        classification: MergeCallStatus,
        error_code: str,
        exception: BaseException,
        stream_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Add an error sample, keeping at most ``max_samples_per_type``."""
        if classification == MergeCallStatus.SUCCESS:
            return
        samples = self.samples.setdefault(classification, [])
        samples.append(
            ErrorSample(
                timestamp=time.time(),
                error_code=error_code,
                message=str(exception),
                stream_name=stream_name,
                context=context,
            )
        )
        if len(samples) > self.max_samples_per_type:
            samples.pop(0)  # Remove oldest sample

    def get_stats(self) -> dict[str, Any]:
        """Get error statistics."""
        return {
            "counts": {
                "transient_busy": self.transient_busy,
                "rate_limited": self.rate_limited,
                "other": self.other,
                "total": self.transient_busy + self.rate_limited + self.other,
            },
            "samples": {
                status.value: len(samples) for status, samples in self.samples.items()
            },
        }

    def reset(self) -> None:
        """Reset all counters and samples."""
        self.transient_busy = 0
        self.rate_limited = 0
        self.other = 0
        self.samples.clear()


def extract_error_code(exception: BaseException) -> str:
    """Return the service error code for an exception.

    botocore's ClientError carries the code in ``response["Error"]["Code"]``;
    anything else falls back to the exception class name.
    """
    response = getattr(exception, "response", None)
    if isinstance(response, dict):
        code = response.get("Error", {}).get("Code")
        if code:
            return str(code)
    return type(exception).__name__


class MergeErrorClassifier:
    """Classifies merge-call exceptions into retry categories."""

    def __init__(self, counters: ErrorCounters | None = None):
        """Initialize the classifier.

        Args:
            counters: Optional ErrorCounters instance for tracking statistics.
                     If None, a fresh instance is used.
        """
        self.counters = counters or ErrorCounters()

    def classify_exception(
        self,
        exception: BaseException,
        stream_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> MergeCallStatus:
        """Classify an exception based on its service error code.

        Args:
            exception: The exception raised by the remote call
            stream_name: Optional stream name for context
            context: Optional additional context

        Returns:
            Classification category for the error
        """
        error_code = extract_error_code(exception)

        if error_code in BUSY_ERROR_CODES:
            classification = MergeCallStatus.TRANSIENT_BUSY
        elif error_code in RATE_LIMIT_ERROR_CODES:
            classification = MergeCallStatus.RATE_LIMITED
        else:
            classification = MergeCallStatus.OTHER

        self.counters.increment(classification)
        self.counters.add_sample(
            classification, error_code, exception, stream_name, context
        )

        return classification

    def get_error_stats(self) -> dict[str, Any]:
        """Get error statistics from the counters."""
        return self.counters.get_stats()

    def reset_stats(self) -> None:
        """Reset error statistics."""
        self.counters.reset()
