"""Collaborator use cases."""
