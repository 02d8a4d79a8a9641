"""
Vector Store Module - Embedding and similarity search for RAG

Embeds documents with a local Ollama model (bounded concurrent fan-out)
and stores them in named collections, either in memory with exact cosine
ranking or in ChromaDB with approximate nearest neighbour search.

Quick Start:
    from vector_store import Document, InMemoryVectorStore, OllamaEmbedder

    store = InMemoryVectorStore(OllamaEmbedder(max_concurrency=5))
    store.add_documents("faq", [Document(text="Die Bachelorarbeit hat 12 LP.")])
    results = store.similarity_search("faq", "Wie viele LP?", top_k=3)

    # Backend chosen from the environment (RAG_STORE_BACKEND, OLLAMA_BASE_URL, ...)
    from vector_store import create_vector_store
    store = create_vector_store()
"""

__version__ = "1.0.0"

from .base import VectorStore
from .embedder import BaseEmbedder, OllamaEmbedder
from .exceptions import (
    CollectionNotFoundError,
    DatabaseError,
    DimensionMismatchError,
    DomainError,
    EmbeddingConnectionError,
    EmbeddingError,
    EmptyInputError,
    OperationCancelledError,
    ProviderError,
    VectorStoreError,
    ZeroMagnitudeError,
)
from .factory import create_embedder, create_vector_store
from .memory_store import InMemoryVectorStore
from .models import CONTENT_KEY, Document, SearchResult, StoreConfig, VectorRecord
from .similarity import cosine_similarity
from .store import ChromaVectorStore

__all__ = [
    "__version__",
    "VectorStore",
    "InMemoryVectorStore",
    "ChromaVectorStore",
    "BaseEmbedder",
    "OllamaEmbedder",
    "Document",
    "VectorRecord",
    "SearchResult",
    "StoreConfig",
    "CONTENT_KEY",
    "cosine_similarity",
    "create_embedder",
    "create_vector_store",
    "VectorStoreError",
    "EmptyInputError",
    "OperationCancelledError",
    "ProviderError",
    "EmbeddingError",
    "EmbeddingConnectionError",
    "DatabaseError",
    "DomainError",
    "DimensionMismatchError",
    "ZeroMagnitudeError",
    "CollectionNotFoundError",
]
