"""Document models module."""

from qdrant_docstore.documents.models import Document, SearchRequest

__all__ = [
    "Document",
    "SearchRequest",
]
