"""HTTP API for the Email Builder service."""
