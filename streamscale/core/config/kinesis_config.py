"""Kinesis client configuration for streamscale."""

import argparse
import os
from typing import Any

from pydantic import BaseModel, Field, field_validator


class KinesisConfig(BaseModel):
    """Connection settings for the Kinesis control plane.

    Credentials are resolved by boto3's default chain; only the region,
    endpoint and named profile are configured here.
    """

    region: str | None = Field(default=None, description="AWS region name")
    endpoint_url: str | None = Field(
        default=None,
        description="Override endpoint (e.g. a local Kinesis emulator)",
    )
    profile: str | None = Field(default=None, description="Named AWS profile")

    @field_validator("endpoint_url")
    @classmethod
    def validate_endpoint_url(cls, v: str | None) -> str | None:
        """Require an http(s) scheme on explicit endpoints."""
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid endpoint URL '{v}': must start with http:// or https://")
        return v

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add Kinesis connection CLI arguments."""
        parser.add_argument("--region", type=str, help="AWS region name")
        parser.add_argument(
            "--endpoint-url",
            type=str,
            help="Kinesis endpoint override",
        )
        parser.add_argument("--profile", type=str, help="Named AWS profile")

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        """Load Kinesis config from environment variables."""
        config: dict[str, Any] = {}
        if region := (
            os.getenv("STREAMSCALE_KINESIS__REGION")
            or os.getenv("AWS_REGION")
            or os.getenv("AWS_DEFAULT_REGION")
        ):
            config["region"] = region
        if endpoint_url := os.getenv("STREAMSCALE_KINESIS__ENDPOINT_URL"):
            config["endpoint_url"] = endpoint_url
        if profile := os.getenv("STREAMSCALE_KINESIS__PROFILE"):
            config["profile"] = profile
        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        """Extract Kinesis config from CLI arguments."""
        overrides: dict[str, Any] = {}
        if getattr(args, "region", None):
            overrides["region"] = args.region
        if getattr(args, "endpoint_url", None):
            overrides["endpoint_url"] = args.endpoint_url
        if getattr(args, "profile", None):
            overrides["profile"] = args.profile
        return overrides
