"""Vector store module."""

from qdrant_docstore.vectorstore.mapper import (
    CONTENT_FIELD_NAME,
    DISTANCE_FIELD_NAME,
    document_to_point,
    scored_point_to_document,
)
from qdrant_docstore.vectorstore.provisioner import CollectionProvisioner
from qdrant_docstore.vectorstore.service import (
    QdrantVectorStore,
    VectorStore,
    create_qdrant_client,
)

__all__ = [
    "CONTENT_FIELD_NAME",
    "DISTANCE_FIELD_NAME",
    "CollectionProvisioner",
    "QdrantVectorStore",
    "VectorStore",
    "create_qdrant_client",
    "document_to_point",
    "scored_point_to_document",
]
