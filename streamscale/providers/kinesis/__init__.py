"""Kinesis-backed collaborators."""

from .kinesis_provider import KinesisStreamProvider

__all__ = ["KinesisStreamProvider"]
