"""Sheet use cases."""
