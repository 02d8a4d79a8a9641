"""
Vector Store Interface - Contract shared by every storage backend

A vector store owns named collections of embedded documents and exposes
two operations: add a batch of documents and search a collection by
semantic similarity. Both backends (exact in-memory, ChromaDB) honour the
same argument checks, ranking order and error types.
"""

import threading
from abc import ABC, abstractmethod
from typing import Optional

from .embedder import BaseEmbedder
from .exceptions import EmptyInputError, OperationCancelledError
from .models import Document, SearchResult


class VectorStore(ABC):
    """Abstract base class for vector store backends."""

    def __init__(self, embedder: BaseEmbedder):
        self._embedder = embedder

    @property
    def embedder(self) -> BaseEmbedder:
        """Access the underlying embedder."""
        return self._embedder

    @abstractmethod
    def add_documents(
        self,
        collection: str,
        documents: list[Document],
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        """
        Embed and store a batch of documents in a collection.

        The collection is created on first write.

        Args:
            collection: Name of the target collection.
            documents: Documents to store.
            cancel_event: Optional event that aborts pending work when set.

        Raises:
            EmptyInputError: If the collection name or the batch is empty.
            EmbeddingError: If embedding fails.
        """

    @abstractmethod
    def similarity_search(
        self,
        collection: str,
        query: str,
        top_k: int = 4,
        cancel_event: Optional[threading.Event] = None,
    ) -> list[SearchResult]:
        """
        Return the ``top_k`` documents most similar to ``query``.

        Args:
            collection: Name of the collection to search.
            query: The search query text.
            top_k: Maximum number of results.
            cancel_event: Optional event that aborts the search when set.

        Returns:
            Results sorted by descending score, at most ``top_k`` of them.

        Raises:
            EmptyInputError: If the query or collection name is empty.
            CollectionNotFoundError: If the collection does not exist.
        """

    def add_document(
        self,
        collection: str,
        document: Document,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        """Store a single document (a one-element batch)."""
        self.add_documents(collection, [document], cancel_event=cancel_event)

    # -------------------------------------------------------------------------
    # Argument checks shared by the backends
    # -------------------------------------------------------------------------

    @staticmethod
    def _check_add_args(collection: str, documents: list[Document]) -> None:
        if not collection or not collection.strip():
            raise EmptyInputError("Collection name cannot be empty")
        if not documents:
            raise EmptyInputError("Cannot add an empty list of documents")

    @staticmethod
    def _check_search_args(collection: str, query: str, top_k: int) -> None:
        if not collection or not collection.strip():
            raise EmptyInputError("Collection name cannot be empty")
        if not query or not query.strip():
            raise EmptyInputError("Cannot search with an empty query")
        if top_k < 1:
            raise ValueError(f"top_k must be at least 1, got {top_k}")

    @staticmethod
    def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelledError()
