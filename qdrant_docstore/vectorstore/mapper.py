"""Mapping between documents and Qdrant points."""

from uuid import UUID

import numpy as np
from qdrant_client.models import PointStruct, ScoredPoint

from qdrant_docstore.documents.models import Document
from qdrant_docstore.exceptions import ErrorCode, ValidationError
from qdrant_docstore.vectorstore.codec import to_generic_map, to_wire_map

# Payload key holding the document text; never exposed as metadata.
CONTENT_FIELD_NAME = "doc_content"

# Metadata key set on search results: 1 - cosine similarity score.
DISTANCE_FIELD_NAME = "distance"


def parse_point_id(document_id: str) -> str:
    """Validate a document id and return its canonical UUID form.

    Raises:
        ValidationError: If the id is not a UUID string.
    """
    try:
        return str(UUID(document_id))
    except (TypeError, ValueError, AttributeError) as e:
        raise ValidationError(
            f"Document id is not a valid UUID: {document_id!r}",
            code=ErrorCode.INVALID_DOCUMENT_ID,
            details={"id": str(document_id)},
        ) from e


def to_float32(vector: list[float]) -> list[float]:
    """Narrow each element to single precision, keeping order."""
    return np.asarray(vector, dtype=np.float32).tolist()


def document_to_point(document: Document) -> PointStruct:
    """Build a Qdrant point from a document with a computed embedding.

    The payload holds every metadata entry plus the document content under
    ``CONTENT_FIELD_NAME``.

    Args:
        document: Document whose embedding has already been set.

    Returns:
        Point ready for upsert.

    Raises:
        ValidationError: If the embedding is missing, the id is not a UUID,
            or the metadata uses the reserved content key.
        ConversionError: If a metadata value cannot be stored in a payload.
    """
    if document.embedding is None:
        raise ValidationError(
            f"Document {document.id} has no embedding",
            code=ErrorCode.MISSING_EMBEDDING,
            details={"id": document.id},
        )

    point_id = parse_point_id(document.id)

    if CONTENT_FIELD_NAME in document.metadata:
        raise ValidationError(
            f"Metadata key '{CONTENT_FIELD_NAME}' is reserved",
            code=ErrorCode.RESERVED_METADATA_KEY,
            details={"id": document.id, "key": CONTENT_FIELD_NAME},
        )

    payload = to_wire_map(document.metadata)
    payload[CONTENT_FIELD_NAME] = document.content

    return PointStruct(
        id=point_id,
        vector=to_float32(document.embedding),
        payload=payload,
    )


def scored_point_to_document(point: ScoredPoint) -> Document:
    """Rebuild a document from a search hit.

    The returned document carries content and metadata only; the metadata
    gains a ``DISTANCE_FIELD_NAME`` entry equal to ``1 - score``.
    """
    metadata = to_generic_map(point.payload or {})
    metadata[DISTANCE_FIELD_NAME] = 1.0 - point.score

    content = metadata.pop(CONTENT_FIELD_NAME, None)

    return Document(
        id=str(point.id),
        content=content if content is not None else "",
        metadata=metadata,
    )
