"""Tests for application configuration."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from qdrant_docstore.config import (
    EmbeddingSettings,
    Environment,
    QdrantSettings,
    Settings,
    get_settings,
)


class TestEmbeddingSettings:
    """Tests for embedding configuration."""

    def test_default_values(self) -> None:
        """Default values for embedding service."""
        settings = EmbeddingSettings()
        assert settings.base_url == "http://localhost:8080"
        assert settings.model == "BAAI/bge-large-en-v1.5"
        assert settings.dimensions is None
        assert settings.batch_size == 32

    def test_env_override(self) -> None:
        """Environment variables override defaults."""
        with patch.dict(os.environ, {"EMBEDDING_DIMENSIONS": "256"}):
            settings = EmbeddingSettings()
            assert settings.dimensions == 256

    @pytest.mark.parametrize("batch_size", [0, -1])
    def test_batch_size_must_be_positive(self, batch_size: int) -> None:
        """A non-positive batch size is rejected at load time."""
        with pytest.raises(PydanticValidationError):
            EmbeddingSettings(batch_size=batch_size)


class TestQdrantSettings:
    """Tests for Qdrant configuration."""

    def test_default_values(self) -> None:
        """Defaults target a local gRPC endpoint."""
        settings = QdrantSettings()
        assert settings.host == "localhost"
        assert settings.port is None
        assert settings.effective_port == 6334
        assert settings.use_tls is False
        assert settings.api_key is None
        assert settings.collection_name is None
        assert settings.prefer_grpc is True

    def test_env_override(self) -> None:
        """Connection options come from QDRANT_* variables."""
        env = {
            "QDRANT_HOST": "qdrant.example.com",
            "QDRANT_PORT": "443",
            "QDRANT_USE_TLS": "true",
            "QDRANT_COLLECTION_NAME": "articles",
        }
        with patch.dict(os.environ, env):
            settings = QdrantSettings()
            assert settings.host == "qdrant.example.com"
            assert settings.port == 443
            assert settings.use_tls is True
            assert settings.collection_name == "articles"

    def test_rest_default_port(self) -> None:
        """Without an explicit port, REST uses 6333."""
        settings = QdrantSettings(prefer_grpc=False)
        assert settings.effective_port == 6333

    def test_explicit_port_wins(self) -> None:
        """A configured port is used for either transport."""
        settings = QdrantSettings(port=8443, prefer_grpc=False)
        assert settings.effective_port == 8443

    def test_api_key_is_secret_when_set(self) -> None:
        """API key should be masked when set."""
        with patch.dict(os.environ, {"QDRANT_API_KEY": "secret-key"}):
            settings = QdrantSettings()
            assert settings.api_key is not None
            assert "secret-key" not in str(settings.api_key)
            assert settings.api_key.get_secret_value() == "secret-key"

    def test_immutable(self) -> None:
        """Settings cannot be changed after construction."""
        settings = QdrantSettings(collection_name="docs")
        with pytest.raises(PydanticValidationError):
            settings.collection_name = "other"  # type: ignore[misc]


class TestSettings:
    """Tests for main application settings."""

    def test_default_environment(self) -> None:
        """Default environment is development."""
        settings = Settings()
        assert settings.environment == Environment.DEVELOPMENT

    def test_nested_settings_loaded(self) -> None:
        """Nested settings are initialized."""
        settings = Settings()
        assert isinstance(settings.embedding, EmbeddingSettings)
        assert isinstance(settings.qdrant, QdrantSettings)

    def test_environment_enum(self) -> None:
        """Environment can be set via string."""
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            settings = Settings()
            assert settings.environment == Environment.PRODUCTION


class TestGetSettings:
    """Tests for settings singleton."""

    def test_caching(self) -> None:
        """Settings are cached."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert isinstance(settings1, Settings)
        assert settings1 is settings2
