"""Embedding service module."""

from qdrant_docstore.embeddings.service import EmbeddingService, HTTPEmbeddingService

__all__ = [
    "EmbeddingService",
    "HTTPEmbeddingService",
]
