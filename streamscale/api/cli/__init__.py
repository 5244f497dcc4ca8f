"""Command line interface for streamscale."""
