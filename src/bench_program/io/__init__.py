"""Persistence, serialization and export."""
