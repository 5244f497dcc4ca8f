"""Remote service providers for streamscale."""
