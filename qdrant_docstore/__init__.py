"""Qdrant-backed document store."""

__version__ = "0.1.0"
