"""Document and search request models."""

from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field

from qdrant_docstore.filters.expression import Expression, Group

DEFAULT_TOP_K = 4
SIMILARITY_THRESHOLD_ACCEPT_ALL = 0.0


class Document(BaseModel):
    """A unit of stored content.

    Attributes:
        id: String form of a UUID identifying the document.
        content: The text content of the document.
        metadata: Free-form metadata stored alongside the content.
        embedding: Vector computed by the store before writing; never
            populated on documents returned from a search.
    """

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="Document identifier (UUID string)",
    )
    content: str = Field(description="Text content of the document")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Document metadata",
    )
    embedding: list[float] | None = Field(
        default=None,
        description="Embedding vector",
    )


class SearchRequest(BaseModel):
    """Parameters for a similarity search.

    Attributes:
        query: Text to embed and search with.
        top_k: Maximum number of documents to return.
        similarity_threshold: Minimum similarity score a hit must reach.
        filter_expression: Optional metadata filter.
    """

    query: str = Field(description="Query text")
    top_k: int = Field(
        default=DEFAULT_TOP_K,
        ge=0,
        description="Maximum number of results",
    )
    similarity_threshold: float = Field(
        default=SIMILARITY_THRESHOLD_ACCEPT_ALL,
        ge=0.0,
        le=1.0,
        description="Minimum similarity score",
    )
    filter_expression: Expression | Group | None = Field(
        default=None,
        description="Metadata filter expression",
    )
