"""
Custom Exceptions for Embedding and Vector Storage.

This module defines a hierarchy of exceptions separating caller mistakes,
provider failures and violations of vector-space invariants.

Exception Hierarchy:
    VectorStoreError (base)
    ├── EmptyInputError
    ├── OperationCancelledError
    ├── ProviderError
    │   ├── EmbeddingError
    │   │   └── EmbeddingConnectionError
    │   └── DatabaseError
    └── DomainError
        ├── DimensionMismatchError
        ├── ZeroMagnitudeError
        └── CollectionNotFoundError

Usage:
    from vector_store.exceptions import (
        CollectionNotFoundError,
        EmbeddingError,
        VectorStoreError,
    )

    try:
        results = store.similarity_search("docs", "query", top_k=3)
    except CollectionNotFoundError as e:
        print(f"No such collection: {e.collection}")
    except EmbeddingError as e:
        print(f"Embedding provider failed: {e}")
    except VectorStoreError as e:
        print(f"Search failed: {e}")
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class VectorStoreError(Exception):
    """
    Base exception for all embedding and vector store errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A vector store error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


# =============================================================================
# INPUT AND CANCELLATION ERRORS
# =============================================================================


class EmptyInputError(VectorStoreError, ValueError):
    """
    Raised when an operation receives empty input.

    Covers empty text, an empty document batch, an empty query and a
    blank collection name. No work is attempted before raising.
    """

    def __init__(self, message: str = "Input is empty"):
        super().__init__(message)


class OperationCancelledError(VectorStoreError):
    """Raised when the caller's cancellation event is set mid-operation."""

    def __init__(self, message: str = "Operation was cancelled"):
        super().__init__(message)


# =============================================================================
# PROVIDER ERRORS
# =============================================================================


class ProviderError(VectorStoreError):
    """
    Base class for failures of an external provider.

    Attributes:
        original_error: The underlying transport exception
    """

    def __init__(
        self,
        message: str = "Provider error",
        original_error: Optional[Exception] = None,
    ):
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(message, details)


class EmbeddingError(ProviderError):
    """
    Raised when the embedding provider fails.

    This includes transport errors and malformed or empty responses.
    """

    def __init__(
        self,
        message: str = "Embedding generation failed",
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, original_error)


class EmbeddingConnectionError(EmbeddingError, ConnectionError):
    """Raised when the embedding server cannot be reached."""

    def __init__(
        self,
        message: str = "Cannot connect to the embedding server",
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, original_error)


class DatabaseError(ProviderError):
    """Raised when the vector database rejects or fails an operation."""

    def __init__(
        self,
        message: str = "Vector database operation failed",
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, original_error)


# =============================================================================
# DOMAIN ERRORS
# =============================================================================


class DomainError(VectorStoreError):
    """Base class for violations of vector-space invariants."""

    pass


class DimensionMismatchError(DomainError):
    """
    Raised when two vectors that must share a width do not.

    Attributes:
        expected: The width fixed for the collection or the first vector
        actual: The offending width
    """

    def __init__(self, expected: int, actual: int, collection: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        self.collection = collection
        message = f"Vector dimension mismatch: expected {expected}, got {actual}"
        if collection:
            message = f"{message} [{collection}]"
        super().__init__(message)


class ZeroMagnitudeError(DomainError):
    """Raised when cosine similarity is requested for a zero vector."""

    def __init__(self, message: str = "Vector magnitude cannot be zero"):
        super().__init__(message)


class CollectionNotFoundError(DomainError):
    """
    Raised when searching a collection that was never written to.

    Attributes:
        collection: Name of the missing collection
    """

    def __init__(self, collection: str):
        self.collection = collection
        super().__init__(f"Collection not found: {collection}")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def format_error_chain(error: BaseException, separator: str = " <- ") -> str:
    """
    Render an error and everything it wraps on a single log line.

    Follows ``original_error`` first and ``__cause__`` otherwise, outermost
    error first, e.g. ``EmbeddingError: ... <- ConnectionError: refused``.
    """
    links: list[str] = []
    seen: set[int] = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        links.append(f"{type(current).__name__}: {current}")
        current = getattr(current, "original_error", None) or current.__cause__
    return separator.join(links)
