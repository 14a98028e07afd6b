"""Document store exception hierarchy.

All custom exceptions inherit from DocStoreError.
Each exception has an error code for structured error handling.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "QDS-1000"
    CONFIGURATION_ERROR = "QDS-1001"
    VALIDATION_ERROR = "QDS-1002"

    # Document errors (2xxx)
    INVALID_DOCUMENT_ID = "QDS-2000"
    MISSING_EMBEDDING = "QDS-2001"
    RESERVED_METADATA_KEY = "QDS-2002"
    INVALID_FILTER = "QDS-2003"

    # Conversion errors (3xxx)
    CONVERSION_ERROR = "QDS-3000"

    # Embedding errors (4xxx)
    EMBEDDING_SERVICE_ERROR = "QDS-4000"
    EMBEDDING_DIMENSION_MISMATCH = "QDS-4001"

    # Vector store errors (5xxx)
    VECTOR_STORE_ERROR = "QDS-5000"
    COLLECTION_INIT_FAILED = "QDS-5001"
    STORE_NOT_READY = "QDS-5002"


class DocStoreError(Exception):
    """Base exception for all document store errors.

    Attributes:
        message: Human-readable error message.
        code: Structured error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a serialisable dictionary."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
            }
        }


class ConfigurationError(DocStoreError):
    """Missing or invalid configuration."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ValidationError(DocStoreError):
    """Input validation error, raised before any remote call."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ConversionError(DocStoreError):
    """A metadata value has no payload representation."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONVERSION_ERROR, details)


class EmbeddingError(DocStoreError):
    """Embedding service error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.EMBEDDING_SERVICE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class VectorStoreError(DocStoreError):
    """Vector store operation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VECTOR_STORE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
