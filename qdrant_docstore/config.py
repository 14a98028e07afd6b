"""Application configuration using Pydantic Settings.

All configuration is loaded from environment variables.
No secrets are hardcoded.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

QDRANT_GRPC_PORT = 6334
QDRANT_REST_PORT = 6333


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class EmbeddingSettings(BaseSettings):
    """Embedding service configuration."""

    model_config = SettingsConfigDict(env_prefix="EMBEDDING_", frozen=True)

    base_url: str = Field(
        default="http://localhost:8080",
        description="Embedding service base URL",
    )
    model: str = Field(
        default="BAAI/bge-large-en-v1.5",
        description="Embedding model name",
    )
    dimensions: int | None = Field(
        default=None,
        gt=0,
        description="Output size override for models not in the known list",
    )
    batch_size: int = Field(
        default=32,
        gt=0,
        description="Batch size for embedding requests",
    )
    timeout: float = Field(
        default=60.0,
        description="Request timeout in seconds",
    )


class QdrantSettings(BaseSettings):
    """Qdrant vector database configuration.

    Built once and immutable afterwards; the store creates a single
    client from it and reuses that client for every operation.
    """

    model_config = SettingsConfigDict(env_prefix="QDRANT_", frozen=True)

    host: str = Field(
        default="localhost",
        description="Qdrant server host",
    )
    port: int | None = Field(
        default=None,
        gt=0,
        description="Qdrant port; defaults to 6334 for gRPC and 6333 for REST",
    )
    use_tls: bool = Field(
        default=False,
        description="Connect over TLS",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Qdrant API key (optional for local)",
    )
    collection_name: str | None = Field(
        default=None,
        description="Collection holding the documents (required by the store)",
    )
    prefer_grpc: bool = Field(
        default=True,
        description="Talk to Qdrant over gRPC instead of REST",
    )

    @property
    def effective_port(self) -> int:
        if self.port is not None:
            return self.port
        return QDRANT_GRPC_PORT if self.prefer_grpc else QDRANT_REST_PORT


class Settings(BaseSettings):
    """Main application settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    # Nested settings
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    qdrant: QdrantSettings = Field(default_factory=QdrantSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()
