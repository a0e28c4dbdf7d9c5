"""Seed-based TV show recommendations."""

__version__ = "1.0.0"
