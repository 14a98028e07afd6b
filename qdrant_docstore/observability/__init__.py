"""Observability module for metrics and monitoring."""

from qdrant_docstore.observability.metrics import (
    get_metrics,
    get_metrics_content_type,
    track_embedding_request,
    track_search_results,
    track_vectorstore_operation,
)

__all__ = [
    "get_metrics",
    "get_metrics_content_type",
    "track_embedding_request",
    "track_search_results",
    "track_vectorstore_operation",
]
