"""Pytest configuration and shared fixtures."""

import hashlib
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from qdrant_client import AsyncQdrantClient
from qdrant_client.http.models import (
    CollectionsResponse,
    QueryResponse,
    UpdateResult,
    UpdateStatus,
)

from qdrant_docstore.config import QdrantSettings
from qdrant_docstore.embeddings.service import EmbeddingService

COLLECTION = "test_documents"


class FakeEmbeddingService(EmbeddingService):
    """Deterministic embeddings derived from a hash of the text."""

    def __init__(self, dimensions: int = 8) -> None:
        self._dimensions = dimensions
        self.calls: list[str] = []

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        return [(b - 127.5) / 127.5 for b in digest[: self._dimensions]]

    @property
    def model_name(self) -> str:
        return "fake-embedding"

    @property
    def dimensions(self) -> int:
        return self._dimensions


@pytest.fixture
def embedding_service() -> FakeEmbeddingService:
    return FakeEmbeddingService()


@pytest.fixture
def qdrant_settings() -> QdrantSettings:
    return QdrantSettings(collection_name=COLLECTION)


@pytest.fixture
def mock_qdrant_client() -> AsyncMock:
    """Mock Qdrant client with an empty server and completed writes."""
    client = AsyncMock()
    client.get_collections = AsyncMock(return_value=CollectionsResponse(collections=[]))
    client.create_collection = AsyncMock(return_value=True)
    client.upsert = AsyncMock(
        return_value=UpdateResult(operation_id=1, status=UpdateStatus.COMPLETED)
    )
    client.delete = AsyncMock(
        return_value=UpdateResult(operation_id=2, status=UpdateStatus.COMPLETED)
    )
    client.query_points = AsyncMock(return_value=QueryResponse(points=[]))
    client.close = AsyncMock()
    return client


@pytest.fixture
async def memory_client() -> AsyncGenerator[AsyncQdrantClient, None]:
    """In-process Qdrant client (qdrant-client local mode).

    Yields:
        AsyncQdrantClient backed by memory.
    """
    client = AsyncQdrantClient(location=":memory:")
    yield client
    await client.close()
