"""Core models, configuration and exceptions for streamscale."""
