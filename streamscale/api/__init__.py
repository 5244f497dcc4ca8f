"""External interfaces for streamscale."""
