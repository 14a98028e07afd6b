"""Document store interface and Qdrant implementation."""

import time
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from qdrant_client import AsyncQdrantClient
from qdrant_client.models import PointIdsList, UpdateStatus

from qdrant_docstore.config import QdrantSettings, get_settings
from qdrant_docstore.documents.models import DEFAULT_TOP_K, Document, SearchRequest
from qdrant_docstore.embeddings.service import EmbeddingService
from qdrant_docstore.exceptions import (
    ConfigurationError,
    DocStoreError,
    ErrorCode,
    VectorStoreError,
)
from qdrant_docstore.filters.converter import (
    FilterExpressionConverter,
    QdrantFilterExpressionConverter,
)
from qdrant_docstore.logging_config import get_logger
from qdrant_docstore.observability.metrics import (
    track_search_results,
    track_vectorstore_operation,
)
from qdrant_docstore.vectorstore.mapper import (
    document_to_point,
    parse_point_id,
    scored_point_to_document,
    to_float32,
)
from qdrant_docstore.vectorstore.provisioner import CollectionProvisioner

logger = get_logger(__name__)


def create_qdrant_client(settings: QdrantSettings) -> AsyncQdrantClient:
    """Build a Qdrant client from settings.

    Args:
        settings: Qdrant connection configuration.

    Returns:
        Client talking gRPC when ``prefer_grpc`` is set, REST otherwise, on
        ``settings.effective_port``.
    """
    api_key = None
    if settings.api_key:
        api_key = settings.api_key.get_secret_value()

    port_option = "grpc_port" if settings.prefer_grpc else "port"
    return AsyncQdrantClient(
        host=settings.host,
        prefer_grpc=settings.prefer_grpc,
        https=settings.use_tls,
        api_key=api_key,
        **{port_option: settings.effective_port},
    )


class VectorStore(ABC):
    """Abstract base class for document vector stores.

    Defines the interface for storing, deleting and searching documents.
    """

    @abstractmethod
    async def add(self, documents: list[Document]) -> None:
        """Embed and store documents.

        Args:
            documents: Documents to store; their embeddings are set in place.

        Raises:
            DocStoreError: If any document fails; the batch is not reported
                as partially written.
        """
        ...

    @abstractmethod
    async def delete(self, document_ids: list[str]) -> bool | None:
        """Delete documents by ID.

        Args:
            document_ids: UUID strings of the documents to delete.

        Returns:
            Whether the deletion completed, or None if that is unknown.

        Raises:
            ValidationError: If any id is not a UUID.
            VectorStoreError: If deletion fails.
        """
        ...

    @abstractmethod
    async def similarity_search(self, request: SearchRequest) -> list[Document]:
        """Find the documents most similar to the request's query.

        Args:
            request: Query text, result limit, threshold and filter.

        Returns:
            Matching documents, most similar first.

        Raises:
            VectorStoreError: If search fails.
        """
        ...

    async def similarity_search_text(
        self,
        query: str,
        top_k: int = DEFAULT_TOP_K,
    ) -> list[Document]:
        """Search with default threshold and no filter."""
        return await self.similarity_search(SearchRequest(query=query, top_k=top_k))


class QdrantVectorStore(VectorStore):
    """Qdrant-backed document store.

    Documents become points whose payload holds the metadata and the
    content. The store must be initialized once, which provisions the
    collection, before any add, delete or search.
    """

    def __init__(
        self,
        embedding_service: EmbeddingService,
        settings: QdrantSettings | None = None,
        client: AsyncQdrantClient | None = None,
        filter_converter: FilterExpressionConverter | None = None,
    ) -> None:
        """Initialize Qdrant document store.

        Args:
            embedding_service: Service producing document and query vectors.
            settings: Qdrant configuration.
            client: Existing client (for testing).
            filter_converter: Converter for search filter expressions.

        Raises:
            ConfigurationError: If the embedding service or collection
                name is missing.
        """
        if embedding_service is None:
            raise ConfigurationError("An embedding service is required")

        self._settings = settings or get_settings().qdrant
        if not self._settings.collection_name:
            raise ConfigurationError(
                "Qdrant collection name is required",
                details={"setting": "QDRANT_COLLECTION_NAME"},
            )

        self._embedding_service = embedding_service
        self._collection = self._settings.collection_name
        self._client = client
        self._owns_client = client is None
        self._filter_converter = filter_converter or QdrantFilterExpressionConverter()
        self._ready = False

    @property
    def collection_name(self) -> str:
        return self._collection

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def _get_client(self) -> AsyncQdrantClient:
        """Get or create Qdrant client."""
        if self._client is None:
            self._client = create_qdrant_client(self._settings)
        return self._client

    async def close(self) -> None:
        """Close the Qdrant client."""
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None

    async def initialize(self) -> None:
        """Provision the collection and mark the store ready.

        Runs once; later calls return immediately.

        Raises:
            VectorStoreError: If the collection cannot be confirmed or
                created. The store stays not ready.
        """
        if self._ready:
            return

        with self._tracked("provision"):
            client = await self._get_client()
            dimensions = self._embedding_service.dimensions
            await CollectionProvisioner(client).ensure_collection(
                self._collection, dimensions
            )

        self._ready = True
        logger.info(
            f"Document store ready: {self._collection}",
            extra={"collection": self._collection, "dimensions": dimensions},
        )

    async def add(self, documents: list[Document]) -> None:
        """Embed documents one by one and upsert them in a single batch."""
        self._require_ready("add")
        if not documents:
            return

        client = await self._get_client()

        with self._tracked("add"):
            points = []
            for document in documents:
                document.embedding = await self._embedding_service.embed(
                    document.content
                )
                points.append(document_to_point(document))

            result = await client.upsert(
                collection_name=self._collection,
                points=points,
                wait=True,
            )

        logger.debug(
            f"Upserted {len(points)} documents",
            extra={"collection": self._collection, "status": _status(result)},
        )

    async def delete(self, document_ids: list[str]) -> bool | None:
        """Delete documents in a single batched call."""
        self._require_ready("delete")
        point_ids = [parse_point_id(document_id) for document_id in document_ids]
        if not point_ids:
            return True

        client = await self._get_client()

        with self._tracked("delete"):
            result = await client.delete(
                collection_name=self._collection,
                points_selector=PointIdsList(points=point_ids),
                wait=True,
            )

        status = _status(result)
        logger.debug(
            f"Deleted {len(point_ids)} documents",
            extra={"collection": self._collection, "status": status},
        )
        if status is None:
            return None
        return status == UpdateStatus.COMPLETED

    async def similarity_search(self, request: SearchRequest) -> list[Document]:
        """Embed the query and return hits above the similarity threshold."""
        self._require_ready("search")
        if request.top_k == 0:
            return []

        client = await self._get_client()

        with self._tracked("search"):
            query_filter = None
            if request.filter_expression is not None:
                query_filter = self._filter_converter.convert(request.filter_expression)

            query_vector = await self._embedding_service.embed(request.query)

            response = await client.query_points(
                collection_name=self._collection,
                query=to_float32(query_vector),
                limit=request.top_k,
                query_filter=query_filter,
                score_threshold=request.similarity_threshold,
                with_payload=True,
            )

            documents = [scored_point_to_document(point) for point in response.points]

        track_search_results(len(documents))
        return documents

    def _require_ready(self, operation: str) -> None:
        if not self._ready:
            raise VectorStoreError(
                f"Cannot {operation} before the store is initialized",
                code=ErrorCode.STORE_NOT_READY,
                details={"collection": self._collection, "operation": operation},
            )

    @contextmanager
    def _tracked(self, operation: str) -> Iterator[None]:
        """Record metrics for an operation and wrap foreign errors.

        Errors from this package propagate unchanged; anything else is
        re-raised as VectorStoreError.
        """
        start_time = time.perf_counter()
        try:
            yield
        except DocStoreError:
            track_vectorstore_operation(
                operation, time.perf_counter() - start_time, success=False
            )
            raise
        except Exception as e:
            track_vectorstore_operation(
                operation, time.perf_counter() - start_time, success=False
            )
            logger.error(
                f"Vector store {operation} failed: {e}",
                extra={"collection": self._collection, "operation": operation},
            )
            raise VectorStoreError(
                f"Failed to {operation}: {e}",
                details={"collection": self._collection, "error": str(e)},
            ) from e

        track_vectorstore_operation(operation, time.perf_counter() - start_time)


def _status(result: object) -> UpdateStatus | None:
    return getattr(result, "status", None)
