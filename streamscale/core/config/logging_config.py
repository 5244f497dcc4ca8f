"""Logging configuration models for streamscale."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class FileLoggingConfig(BaseModel):
    """Configuration for file-based logging."""

    enabled: bool = Field(default=False, description="Enable file logging")
    path: str = Field(default="streamscale.log", description="Path to log file")
    level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    rotation: str = Field(default="10 MB", description="Log rotation size (e.g., '10 MB', '1 week')")
    retention: str = Field(default="1 week", description="Log retention period (e.g., '1 week', '30 days')")
    format: str = Field(
        default="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        description="Log message format",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        if v.upper() not in VALID_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {', '.join(sorted(VALID_LEVELS))}")
        return v.upper()

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate log file path."""
        if not v.strip():
            raise ValueError("Log file path cannot be empty")
        try:
            Path(v)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid log file path '{v}': {e}")
        return v


class LoggingConfig(BaseModel):
    """Top-level logging configuration."""

    file: FileLoggingConfig = Field(default_factory=FileLoggingConfig)
    console_level: str = Field(default="INFO", description="Console logging level (DEBUG, INFO, WARNING, ERROR)")

    @field_validator("console_level")
    @classmethod
    def validate_console_level(cls, v: str) -> str:
        """Validate console logging level."""
        if v.upper() not in VALID_LEVELS:
            raise ValueError(f"Invalid console log level '{v}'. Must be one of: {', '.join(sorted(VALID_LEVELS))}")
        return v.upper()

    def is_enabled(self) -> bool:
        """Check if file logging is enabled."""
        return self.file.enabled

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any] | None:
        """Extract logging configuration overrides from CLI arguments.

        Args:
            args: Parsed command line arguments

        Returns:
            Dictionary of logging configuration overrides, or None if no overrides
        """
        overrides: dict[str, Any] = {}

        file_overrides: dict[str, Any] = {}
        if getattr(args, "log_file", None):
            file_overrides["enabled"] = True
            file_overrides["path"] = args.log_file
        if getattr(args, "log_level", None):
            file_overrides["level"] = args.log_level

        if file_overrides:
            overrides["file"] = file_overrides

        return overrides if overrides else None
