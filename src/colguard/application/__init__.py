"""Application layer - use cases and ports."""
