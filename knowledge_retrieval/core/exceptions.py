"""
Exception hierarchy for the knowledge retrieval engine.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class KnowledgeRetrievalException(Exception):
    """Base exception for all knowledge retrieval errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(KnowledgeRetrievalException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class EmbeddingError(KnowledgeRetrievalException):
    """Raised when an embedding cannot be generated for a caller that requires one."""

    pass


class EmbeddingStorageError(KnowledgeRetrievalException):
    """Raised when persisting or loading an embedding record fails."""

    def __init__(
        self,
        message: str,
        embedding_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize embedding storage error.

        Args:
            message: Error message
            embedding_id: ID of the affected record, if known
            details: Additional context
        """
        details = details or {}
        if embedding_id:
            details["embedding_id"] = embedding_id
        super().__init__(message, details)


class StoreQueryError(KnowledgeRetrievalException):
    """Raised when a document store query fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store query error.

        Args:
            message: Error message
            operation: Operation that failed (lexical_search, vector_search, ...)
            details: Additional context
        """
        self.operation = operation
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class StoreUnavailableError(KnowledgeRetrievalException):
    """Raised when every active search branch failed against the store."""

    pass


class DimensionMismatchError(KnowledgeRetrievalException):
    """Raised when two vectors of different lengths are compared."""

    def __init__(
        self,
        expected: int,
        actual: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize dimension mismatch error.

        Args:
            expected: Length of the query vector
            actual: Length of the stored vector
            details: Additional context
        """
        self.expected = expected
        self.actual = actual
        details = details or {}
        details.update({"expected": expected, "actual": actual})
        super().__init__(
            f"Embedding dimension mismatch: expected {expected}, got {actual}",
            details,
        )


class DocumentProcessingError(KnowledgeRetrievalException):
    """Raised when a document cannot be chunked or stored."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID or URL of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class RetrievalError(KnowledgeRetrievalException):
    """Raised when retrieval operations fail."""

    def __init__(
        self,
        message: str,
        query: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize retrieval error.

        Args:
            message: Error message
            query: Query that failed
            details: Additional context
        """
        details = details or {}
        if query:
            details["query"] = query
        super().__init__(message, details)
