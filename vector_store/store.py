"""
Chroma Vector Store - ChromaDB-backed approximate nearest neighbour storage

Stores embedded documents in ChromaDB collections and delegates the
nearest-neighbour search to Chroma's HNSW index.

Design:
- Collections are created lazily on first write. The embedder is probed
  once with a sentinel text to learn the vector width, which is recorded in
  the collection metadata together with the inner-product space
- add_documents pages the batch (``batch_size`` documents per page); each
  page is embedded and upserted before the next one starts
- A failure on page k leaves pages 1..k-1 committed; there is no rollback
- Metadata keeps its value types: str/int/float/bool are stored natively,
  anything else is JSON-encoded and listed under a reserved key

Usage:
    from vector_store import ChromaVectorStore, OllamaEmbedder

    store = ChromaVectorStore(OllamaEmbedder())
    store.add_documents("faq", documents)
    results = store.similarity_search("faq", "Wie melde ich mich an?", top_k=3)
"""

import json
import logging
import threading
from typing import Any, Optional

import chromadb

from .base import VectorStore
from .embedder import BaseEmbedder
from .exceptions import (
    CollectionNotFoundError,
    DatabaseError,
    DimensionMismatchError,
)
from .models import Document, SearchResult, StoreConfig

logger = logging.getLogger(__name__)

# Text embedded once to learn the vector width of a new collection.
PROBE_TEXT = "test"

# Metadata key listing the keys whose values are JSON-encoded.
JSON_KEYS_FIELD = "_json_keys"

DIMENSION_FIELD = "dimension"
DISTANCE_SPACE = "ip"

_NATIVE_TYPES = (str, int, float, bool)


class ChromaVectorStore(VectorStore):
    """
    Vector store backed by ChromaDB.

    Holds no local state besides the client handle, so it is as safe for
    concurrent use as the underlying Chroma client.
    """

    def __init__(
        self,
        embedder: BaseEmbedder,
        client: Optional[chromadb.ClientAPI] = None,
        config: Optional[StoreConfig] = None,
    ):
        """
        Initialize the store.

        Args:
            embedder: Embedder used for documents, queries and the probe.
            client: Optional pre-created ChromaDB client (for testing).
                    If not provided, one is created from ``config``.
            config: Store configuration. Uses defaults if not provided.
        """
        super().__init__(embedder)
        self.config = config or StoreConfig()
        if client is not None:
            self._client = client
        elif self.config.chroma_host:
            self._client = chromadb.HttpClient(
                host=self.config.chroma_host,
                port=self.config.chroma_port,
            )
        else:
            self._client = chromadb.PersistentClient(
                path=self.config.persist_directory,
            )

    @property
    def batch_size(self) -> int:
        return self.config.batch_size

    def add_documents(
        self,
        collection: str,
        documents: list[Document],
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self._check_add_args(collection, documents)
        for doc in documents:
            _check_reserved_key(doc.metadata)
        self._check_cancelled(cancel_event)

        target = self._ensure_collection(collection)
        dimension = (target.metadata or {}).get(DIMENSION_FIELD)
        total_pages = (len(documents) + self.batch_size - 1) // self.batch_size

        for page_number, start in enumerate(range(0, len(documents), self.batch_size), start=1):
            self._check_cancelled(cancel_event)
            page = documents[start:start + self.batch_size]

            embeddings = self._embedder.embed_batch(
                [doc.text for doc in page], cancel_event=cancel_event
            )
            for embedding in embeddings:
                if dimension is not None and len(embedding) != dimension:
                    raise DimensionMismatchError(dimension, len(embedding), collection)

            self._upsert_page(target, page, embeddings)
            logger.debug(
                "Upserted page %d/%d (%d documents) into '%s'",
                page_number, total_pages, len(page), collection,
            )

    def similarity_search(
        self,
        collection: str,
        query: str,
        top_k: int = 4,
        cancel_event: Optional[threading.Event] = None,
    ) -> list[SearchResult]:
        self._check_search_args(collection, query, top_k)

        if not self.has_collection(collection):
            raise CollectionNotFoundError(collection)
        target = self._get_collection(collection)

        self._check_cancelled(cancel_event)
        query_embedding = self._embedder.embed(query)

        self._check_cancelled(cancel_event)
        try:
            raw = target.query(
                query_embeddings=[query_embedding],
                n_results=min(top_k, target.count() or 1),
                include=["documents", "metadatas", "distances"],
            )
        except Exception as e:
            raise DatabaseError(f"Query on collection '{collection}' failed", original_error=e) from e

        results: list[SearchResult] = []
        if not raw["ids"] or not raw["ids"][0]:
            return results

        documents = raw.get("documents") or [[]]
        metadatas = raw.get("metadatas") or [[]]
        for i, doc_id in enumerate(raw["ids"][0]):
            distance = raw["distances"][0][i]
            text = documents[0][i] if i < len(documents[0]) else None
            metadata = metadatas[0][i] if i < len(metadatas[0]) else None
            results.append(SearchResult(
                id=doc_id,
                score=float(1 - distance),
                metadata=decode_metadata(metadata),
                text=text or "",
            ))

        results.sort(key=lambda r: r.score, reverse=True)
        return results

    def has_collection(self, name: str) -> bool:
        """Return True if a collection with this name exists."""
        try:
            collections = self._client.list_collections()
        except Exception as e:
            raise DatabaseError("Listing collections failed", original_error=e) from e
        # Depending on the Chroma version this yields names or Collection objects.
        names = {getattr(c, "name", c) for c in collections}
        return name in names

    def count(self, collection: str) -> int:
        """Return the number of documents in a collection (0 if unknown)."""
        if not self.has_collection(collection):
            return 0
        return self._get_collection(collection).count()

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _ensure_collection(self, name: str):
        """Return the collection, creating it with the probed width if needed."""
        if self.has_collection(name):
            return self._get_collection(name)

        dimension = len(self._embedder.embed(PROBE_TEXT))
        try:
            collection = self._client.get_or_create_collection(
                name=name,
                metadata={"hnsw:space": DISTANCE_SPACE, DIMENSION_FIELD: dimension},
            )
        except Exception as e:
            raise DatabaseError(f"Creating collection '{name}' failed", original_error=e) from e

        logger.info("Created collection '%s' (dimension=%d, space=%s)", name, dimension, DISTANCE_SPACE)
        return collection

    def _get_collection(self, name: str):
        try:
            return self._client.get_collection(name=name)
        except Exception as e:
            raise DatabaseError(f"Opening collection '{name}' failed", original_error=e) from e

    def _upsert_page(self, collection, page: list[Document], embeddings: list[list[float]]) -> None:
        """Write one page of documents; returns once Chroma has stored it."""
        try:
            collection.upsert(
                ids=[doc.id for doc in page],
                embeddings=embeddings,
                documents=[doc.text for doc in page],
                metadatas=[encode_metadata(doc.metadata) for doc in page],
            )
        except Exception as e:
            raise DatabaseError(
                f"Upsert into collection '{collection.name}' failed", original_error=e
            ) from e


def _check_reserved_key(metadata: dict[str, Any]) -> None:
    if JSON_KEYS_FIELD in metadata:
        raise ValueError(f"Metadata key '{JSON_KEYS_FIELD}' is reserved by the Chroma store")


def encode_metadata(metadata: dict[str, Any]) -> dict[str, Any]:
    """
    Convert metadata into Chroma's flat key-value form without losing types.

    Native scalars are kept as-is; other values are JSON-encoded and their
    keys recorded under JSON_KEYS_FIELD. The reserved key is always present,
    which also keeps the metadata non-empty.

    Raises:
        ValueError: If the metadata already uses JSON_KEYS_FIELD.
    """
    _check_reserved_key(metadata)
    flat: dict[str, Any] = {}
    json_keys: list[str] = []
    for key, value in metadata.items():
        if isinstance(value, _NATIVE_TYPES):
            flat[key] = value
        else:
            flat[key] = json.dumps(value, ensure_ascii=False)
            json_keys.append(key)
    flat[JSON_KEYS_FIELD] = json.dumps(json_keys)
    return flat


def decode_metadata(flat: Optional[dict[str, Any]]) -> dict[str, Any]:
    """Reverse encode_metadata."""
    if not flat:
        return {}
    metadata = dict(flat)
    json_keys = json.loads(metadata.pop(JSON_KEYS_FIELD, "[]"))
    for key in json_keys:
        if key in metadata:
            metadata[key] = json.loads(metadata[key])
    return metadata
