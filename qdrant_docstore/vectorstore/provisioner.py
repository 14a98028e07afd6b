"""Collection provisioning."""

from qdrant_client import AsyncQdrantClient
from qdrant_client.models import Distance, VectorParams

from qdrant_docstore.exceptions import ErrorCode, VectorStoreError
from qdrant_docstore.logging_config import get_logger

logger = get_logger(__name__)


class CollectionProvisioner:
    """Ensures a cosine-distance collection exists before use.

    The existence check and the create call are not atomic. When the create
    call fails because another process created the collection in between,
    the collection is re-checked and the race counts as success.
    """

    def __init__(self, client: AsyncQdrantClient) -> None:
        self._client = client

    async def list_collections(self) -> list[str]:
        """Names of all collections on the server."""
        response = await self._client.get_collections()
        return [collection.name for collection in response.collections]

    async def ensure_collection(self, name: str, dimensions: int) -> bool:
        """Create the collection if it does not exist.

        Args:
            name: Collection name.
            dimensions: Vector size of the collection.

        Returns:
            True if a create call was issued, False if it already existed.

        Raises:
            VectorStoreError: If the collection cannot be confirmed or created.
        """
        try:
            if name in await self.list_collections():
                logger.debug(f"Collection already exists: {name}")
                return False
        except Exception as e:
            raise _init_failed(name, e) from e

        try:
            await self._client.create_collection(
                collection_name=name,
                vectors_config=VectorParams(
                    size=dimensions,
                    distance=Distance.COSINE,
                ),
            )
        except Exception as e:
            if await self._created_concurrently(name):
                logger.info(
                    f"Collection created concurrently: {name}",
                    extra={"collection": name},
                )
                return True
            raise _init_failed(name, e) from e

        logger.info(f"Created collection: {name}", extra={"dimensions": dimensions})
        return True

    async def _created_concurrently(self, name: str) -> bool:
        try:
            return name in await self.list_collections()
        except Exception:
            logger.exception(f"Could not re-check collection: {name}")
            return False


def _init_failed(name: str, error: Exception) -> VectorStoreError:
    return VectorStoreError(
        f"Failed to provision collection {name}: {error}",
        code=ErrorCode.COLLECTION_INIT_FAILED,
        details={"collection": name, "error": str(error)},
    )
