"""Top-level configuration for streamscale.

Sources are layered with increasing precedence: defaults, environment
variables, then CLI arguments.
"""

import argparse
from typing import Any

from pydantic import BaseModel, Field

from .kinesis_config import KinesisConfig
from .logging_config import LoggingConfig
from .scaling_config import ScalingConfig


class Config(BaseModel):
    """Aggregated streamscale configuration."""

    scaling: ScalingConfig = Field(default_factory=ScalingConfig)
    kinesis: KinesisConfig = Field(default_factory=KinesisConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, args: argparse.Namespace | None = None) -> "Config":
        """Build a validated config from the environment and optional CLI args."""
        scaling: dict[str, Any] = ScalingConfig.load_from_env()
        kinesis: dict[str, Any] = KinesisConfig.load_from_env()
        logging: dict[str, Any] = {}

        if args is not None:
            scaling.update(ScalingConfig.extract_cli_overrides(args))
            kinesis.update(KinesisConfig.extract_cli_overrides(args))
            logging_overrides = LoggingConfig.extract_cli_overrides(args)
            if logging_overrides:
                logging.update(logging_overrides)

        return cls(
            scaling=ScalingConfig(**scaling),
            kinesis=KinesisConfig(**kinesis),
            logging=LoggingConfig(**logging),
        )
