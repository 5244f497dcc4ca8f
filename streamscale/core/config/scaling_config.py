"""Scaling configuration for streamscale.

This module provides configuration for shard merge retry behavior and for
how long to wait for a stream to settle after a merge is submitted.
"""

import argparse
import os
from typing import Any

from pydantic import BaseModel, Field

from streamscale.core.constants import (
    BASE_RETRY_MS,
    BUSY_RETRY_SECONDS,
    MODIFY_RETRIES,
    STATUS_POLL_SECONDS,
    STREAM_STATUS_TIMEOUT_SECONDS,
)


class ScalingConfig(BaseModel):
    """Configuration for shard modification retries.

    Configuration can be provided via:
    - Environment variables (STREAMSCALE_SCALING__*)
    - CLI arguments
    - Default values
    """

    base_retry_ms: int = Field(
        default=BASE_RETRY_MS,
        ge=0,
        description="Base unit in milliseconds for exponential rate-limit backoff",
    )

    modify_retries: int = Field(
        default=MODIFY_RETRIES,
        ge=1,
        description="Maximum merge-call attempts before giving up",
    )

    busy_retry_seconds: float = Field(
        default=BUSY_RETRY_SECONDS,
        ge=0.0,
        description="Flat wait before retrying a merge rejected because the stream is mutating",
    )

    status_poll_seconds: float = Field(
        default=STATUS_POLL_SECONDS,
        gt=0.0,
        description="Interval between stream status polls while waiting for ACTIVE",
    )

    stream_status_timeout_seconds: float = Field(
        default=STREAM_STATUS_TIMEOUT_SECONDS,
        gt=0.0,
        description="Maximum time to wait for the stream to return to ACTIVE",
    )

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add scaling-related CLI arguments."""
        parser.add_argument(
            "--base-retry-ms",
            type=int,
            help=f"Base backoff unit in milliseconds (default: {BASE_RETRY_MS})",
        )

        parser.add_argument(
            "--modify-retries",
            type=int,
            help=f"Maximum merge attempts (default: {MODIFY_RETRIES})",
        )

        parser.add_argument(
            "--status-timeout",
            type=float,
            help="Seconds to wait for the stream to become ACTIVE after merging",
        )

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        """Load scaling config from environment variables."""
        config: dict[str, Any] = {}
        if base_retry := os.getenv("STREAMSCALE_SCALING__BASE_RETRY_MS"):
            try:
                config["base_retry_ms"] = int(base_retry)
            except ValueError:
                pass
        if retries := os.getenv("STREAMSCALE_SCALING__MODIFY_RETRIES"):
            try:
                config["modify_retries"] = int(retries)
            except ValueError:
                pass
        if busy := os.getenv("STREAMSCALE_SCALING__BUSY_RETRY_SECONDS"):
            try:
                config["busy_retry_seconds"] = float(busy)
            except ValueError:
                pass
        if poll := os.getenv("STREAMSCALE_SCALING__STATUS_POLL_SECONDS"):
            try:
                config["status_poll_seconds"] = float(poll)
            except ValueError:
                pass
        if timeout := os.getenv("STREAMSCALE_SCALING__STREAM_STATUS_TIMEOUT_SECONDS"):
            try:
                config["stream_status_timeout_seconds"] = float(timeout)
            except ValueError:
                pass
        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        """Extract scaling config from CLI arguments."""
        overrides: dict[str, Any] = {}
        if getattr(args, "base_retry_ms", None) is not None:
            overrides["base_retry_ms"] = args.base_retry_ms
        if getattr(args, "modify_retries", None) is not None:
            overrides["modify_retries"] = args.modify_retries
        if getattr(args, "status_timeout", None) is not None:
            overrides["stream_status_timeout_seconds"] = args.status_timeout
        return overrides

    def __repr__(self) -> str:
        """String representation of scaling configuration."""
        return (
            f"ScalingConfig("
            f"base_retry_ms={self.base_retry_ms}, "
            f"modify_retries={self.modify_retries}, "
            f"stream_status_timeout_seconds={self.stream_status_timeout_seconds})"
        )
