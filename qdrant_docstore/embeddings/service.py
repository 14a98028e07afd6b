"""Embedding service interface and HTTP implementation."""

import time
from abc import ABC, abstractmethod

import httpx

from qdrant_docstore.config import EmbeddingSettings, get_settings
from qdrant_docstore.exceptions import EmbeddingError, ErrorCode
from qdrant_docstore.logging_config import get_logger
from qdrant_docstore.observability.metrics import track_embedding_request

logger = get_logger(__name__)


class EmbeddingService(ABC):
    """Abstract base class for embedding services.

    Implementations must return vectors of the same length for every
    call made with a given configuration.
    """

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """Generate the embedding for a single text.

        Args:
            text: Text to embed.

        Returns:
            Embedding vector.

        Raises:
            EmbeddingError: If embedding fails.
        """
        ...

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for several texts, one call per text."""
        return [await self.embed(text) for text in texts]

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name used for embeddings."""
        ...

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Get the embedding dimensions."""
        ...


class HTTPEmbeddingService(EmbeddingService):
    """Embedding service using HTTP API.

    Compatible with OpenAI-style embedding APIs and
    text-embeddings-inference (TEI) servers.
    """

    # Known model dimensions
    MODEL_DIMENSIONS = {
        "BAAI/bge-large-en-v1.5": 1024,
        "BAAI/bge-base-en-v1.5": 768,
        "BAAI/bge-small-en-v1.5": 384,
        "sentence-transformers/all-MiniLM-L6-v2": 384,
        "text-embedding-ada-002": 1536,
        "text-embedding-3-small": 1536,
        "text-embedding-3-large": 3072,
    }

    def __init__(
        self,
        settings: EmbeddingSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the HTTP embedding service.

        Args:
            settings: Embedding configuration. Uses defaults if not provided.
            client: HTTP client. Creates new one if not provided.
        """
        self._settings = settings or get_settings().embedding
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def model_name(self) -> str:
        return self._settings.model

    @property
    def dimensions(self) -> int:
        """Get embedding dimensions.

        Raises:
            EmbeddingError: If the model is unknown and no override is set.
        """
        if self._settings.dimensions is not None:
            return self._settings.dimensions

        if self._settings.model in self.MODEL_DIMENSIONS:
            return self.MODEL_DIMENSIONS[self._settings.model]

        raise EmbeddingError(
            f"Unknown dimensions for model {self._settings.model}; "
            "set EMBEDDING_DIMENSIONS",
            code=ErrorCode.EMBEDDING_DIMENSION_MISMATCH,
            details={"model": self._settings.model},
        )

    async def embed(self, text: str) -> list[float]:
        results = await self._embed_request([text])
        return results[0]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for multiple texts in batched requests.

        Args:
            texts: List of texts to embed.

        Returns:
            Embedding vectors in input order.

        Raises:
            EmbeddingError: If embedding fails.
        """
        if not texts:
            return []

        all_results: list[list[float]] = []
        batch_size = self._settings.batch_size

        for i in range(0, len(texts), batch_size):
            all_results.extend(await self._embed_request(texts[i : i + batch_size]))

        return all_results

    async def _embed_request(self, texts: list[str]) -> list[list[float]]:
        """Make one embedding request.

        Args:
            texts: Batch of texts.

        Returns:
            One vector per input text.

        Raises:
            EmbeddingError: If the request fails or the response is malformed.
        """
        client = await self._get_client()
        url = f"{self._settings.base_url}/embeddings"
        payload = {
            "input": texts,
            "model": self._settings.model,
        }

        start_time = time.perf_counter()
        try:
            response = await client.post(url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            track_embedding_request(
                self.model_name, time.perf_counter() - start_time, success=False
            )
            logger.error(
                f"Embedding request failed: {e.response.status_code}",
                extra={"url": url, "status": e.response.status_code},
            )
            raise EmbeddingError(
                f"Embedding service returned {e.response.status_code}",
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.RequestError as e:
            track_embedding_request(
                self.model_name, time.perf_counter() - start_time, success=False
            )
            logger.error(f"Embedding request error: {e}", extra={"url": url})
            raise EmbeddingError(
                f"Failed to connect to embedding service: {e}",
                details={"url": url},
            ) from e

        try:
            data = response.json()
            vectors = [[float(x) for x in item["embedding"]] for item in data["data"]]
        except (KeyError, TypeError, ValueError) as e:
            raise EmbeddingError(
                f"Invalid response from embedding service: {e}",
                details={"error": str(e)},
            ) from e

        if len(vectors) != len(texts):
            raise EmbeddingError(
                f"Expected {len(texts)} embeddings, got {len(vectors)}",
                details={"expected": len(texts), "received": len(vectors)},
            )

        track_embedding_request(self.model_name, time.perf_counter() - start_time)
        return vectors
