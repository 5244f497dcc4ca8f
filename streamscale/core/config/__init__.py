"""Configuration models for streamscale."""

from .config import Config
from .kinesis_config import KinesisConfig
from .logging_config import FileLoggingConfig, LoggingConfig
from .scaling_config import ScalingConfig

__all__ = [
    "Config",
    "FileLoggingConfig",
    "KinesisConfig",
    "LoggingConfig",
    "ScalingConfig",
]
