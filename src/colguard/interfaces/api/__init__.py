"""HTTP API (Falcon ASGI)."""
