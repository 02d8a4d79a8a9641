"""
In-Memory Vector Store - Exact cosine-similarity search

Keeps every collection as an ordered list of VectorRecords in process
memory and ranks a query against all of them. Useful for tests, small
corpora and as a reference for the ranking semantics of the remote backend.

Design:
- One embed_batch call per add_documents: either every record of the batch
  is appended or none is
- The width of the first stored vector is stamped on the collection and
  enforced for every later batch
- A lock guards the collection map, so concurrent writers and readers are
  safe; embedding happens outside the lock
- Ties keep insertion order (stable sort)

Usage:
    from vector_store import InMemoryVectorStore, OllamaEmbedder

    store = InMemoryVectorStore(OllamaEmbedder())
    store.add_documents("faq", documents)
    results = store.similarity_search("faq", "Wie melde ich mich an?", top_k=3)
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional

from .base import VectorStore
from .embedder import BaseEmbedder
from .exceptions import CollectionNotFoundError, DimensionMismatchError
from .models import Document, SearchResult, VectorRecord
from .similarity import cosine_similarity

logger = logging.getLogger(__name__)


@dataclass
class _Collection:
    dimension: Optional[int] = None
    records: list[VectorRecord] = field(default_factory=list)


class InMemoryVectorStore(VectorStore):
    """Exact vector store holding all records in memory."""

    def __init__(self, embedder: BaseEmbedder):
        super().__init__(embedder)
        self._collections: dict[str, _Collection] = {}
        self._lock = threading.Lock()

    def add_documents(
        self,
        collection: str,
        documents: list[Document],
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self._check_add_args(collection, documents)
        self._check_cancelled(cancel_event)

        embeddings = self._embedder.embed_batch(
            [doc.text for doc in documents], cancel_event=cancel_event
        )
        width = len(embeddings[0])
        for embedding in embeddings:
            if len(embedding) != width:
                raise DimensionMismatchError(width, len(embedding), collection)

        records = [
            VectorRecord(
                id=doc.id,
                text=doc.text,
                embedding=embedding,
                metadata=dict(doc.metadata),
            )
            for doc, embedding in zip(documents, embeddings)
        ]

        with self._lock:
            target = self._collections.setdefault(collection, _Collection())
            if target.dimension is None:
                target.dimension = width
            elif target.dimension != width:
                raise DimensionMismatchError(target.dimension, width, collection)
            target.records.extend(records)
            total = len(target.records)

        logger.debug("Stored %d documents in '%s' (%d total)", len(records), collection, total)

    def similarity_search(
        self,
        collection: str,
        query: str,
        top_k: int = 4,
        cancel_event: Optional[threading.Event] = None,
    ) -> list[SearchResult]:
        self._check_search_args(collection, query, top_k)

        with self._lock:
            target = self._collections.get(collection)
            if target is None:
                raise CollectionNotFoundError(collection)
            records = list(target.records)

        self._check_cancelled(cancel_event)
        query_embedding = self._embedder.embed(query)

        results = [
            SearchResult(
                id=record.id,
                score=cosine_similarity(query_embedding, record.embedding),
                metadata=dict(record.metadata),
                text=record.text,
            )
            for record in records
        ]
        # sorted() is stable, so equal scores keep insertion order
        results = sorted(results, key=lambda r: r.score, reverse=True)
        return results[:top_k]

    def collection_names(self) -> list[str]:
        """Return the names of all collections, sorted."""
        with self._lock:
            return sorted(self._collections)

    def count(self, collection: str) -> int:
        """Return the number of records in a collection (0 if unknown)."""
        with self._lock:
            target = self._collections.get(collection)
            return len(target.records) if target else 0
