"""Prometheus metrics for the document store.

Provides metrics instrumentation for:
- Vector store operation latency and counts
- Embedding request latency
- Documents returned per similarity search
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)

# Vector Store Metrics
VECTORSTORE_OPERATION_DURATION = Histogram(
    "vectorstore_operation_duration_seconds",
    "Vector store operation duration",
    ["operation", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0],
)

VECTORSTORE_OPERATION_TOTAL = Counter(
    "vectorstore_operations_total",
    "Total vector store operations",
    ["operation", "status"],
)

SEARCH_DOCUMENTS_RETURNED = Histogram(
    "search_documents_returned",
    "Number of documents returned per similarity search",
    buckets=[0, 1, 2, 3, 5, 10, 20, 50],
)

# Embedding Metrics
EMBEDDING_REQUEST_DURATION = Histogram(
    "embedding_request_duration_seconds",
    "Embedding request duration in seconds",
    ["model", "status"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
)

EMBEDDING_REQUEST_TOTAL = Counter(
    "embedding_requests_total",
    "Total embedding requests",
    ["model", "status"],
)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST


def track_vectorstore_operation(
    operation: str,
    duration: float,
    success: bool = True,
) -> None:
    """Track a vector store operation.

    Args:
        operation: Operation name (add, delete, search, provision).
        duration: Operation duration in seconds.
        success: Whether the operation succeeded.
    """
    status = "success" if success else "error"

    VECTORSTORE_OPERATION_DURATION.labels(operation=operation, status=status).observe(
        duration
    )
    VECTORSTORE_OPERATION_TOTAL.labels(operation=operation, status=status).inc()


def track_embedding_request(
    model: str,
    duration: float,
    success: bool = True,
) -> None:
    """Track embedding request metrics.

    Args:
        model: Embedding model name.
        duration: Request duration in seconds.
        success: Whether the request succeeded.
    """
    status = "success" if success else "error"

    EMBEDDING_REQUEST_DURATION.labels(model=model, status=status).observe(duration)
    EMBEDDING_REQUEST_TOTAL.labels(model=model, status=status).inc()


def track_search_results(documents_returned: int) -> None:
    """Track how many documents a similarity search returned."""
    SEARCH_DOCUMENTS_RETURNED.observe(documents_returned)
