"""
Data Models for the Vector Store Pipeline

Defines:
1. Document - A text unit with a unique ID and metadata, ready to embed
2. VectorRecord - A stored document with its embedding (in-memory backend)
3. SearchResult - A single search hit with its similarity score
4. StoreConfig - Configuration for the backend, Ollama and batching

Design Principles:
- Pydantic v2 for validation (consistent with chunking.models)
- Documents and records are immutable once created
- Scores are similarities: higher means more similar

Usage:
    doc = Document(text="Ein Beispieltext", metadata={"source": "faq.txt"})
    config = StoreConfig.from_env()
"""

import os
import uuid
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# Conventional metadata key holding the chunk text.
CONTENT_KEY = "content"


class Document(BaseModel):
    """A piece of text to be embedded and stored."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Globally unique identifier (random UUID by default)",
    )
    text: str = Field(
        ...,
        description="The text content",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Arbitrary scalar metadata",
    )


class VectorRecord(BaseModel):
    """A document stored together with its embedding."""
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    embedding: list[float]
    metadata: dict[str, Any] = Field(default_factory=dict)


class SearchResult(BaseModel):
    """A single search result from a vector store."""
    id: str = Field(
        ...,
        description="ID of the matching document",
    )
    score: float = Field(
        ...,
        description="Similarity score (higher = more similar)",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Document metadata",
    )
    text: str = Field(
        "",
        description="Text content of the matching document",
    )


class StoreConfig(BaseModel):
    """Configuration for the vector store and its embedder."""
    backend: Literal["memory", "chroma"] = Field(
        "chroma",
        description="Storage backend: exact in-memory or ChromaDB",
    )
    collection_name: str = Field(
        "documents",
        description="Default collection name",
        min_length=1,
    )
    persist_directory: str = Field(
        "./chroma_db",
        description="Directory for ChromaDB persistent storage",
    )
    chroma_host: Optional[str] = Field(
        None,
        description="ChromaDB server host; a local persistent client is used if unset",
    )
    chroma_port: int = Field(
        8000,
        description="ChromaDB server port",
    )
    embedding_model: str = Field(
        "nomic-embed-text",
        description="Ollama embedding model name",
    )
    ollama_base_url: str = Field(
        "http://localhost:11434",
        description="Ollama API base URL",
    )
    max_concurrency: int = Field(
        5,
        description="Maximum embedding requests in flight per batch",
        ge=1,
    )
    batch_size: int = Field(
        100,
        description="Documents per upsert page (ChromaDB backend)",
        ge=1,
    )

    @classmethod
    def from_env(cls) -> "StoreConfig":
        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value else default

        defaults = cls()
        return cls(
            backend=os.environ.get("RAG_STORE_BACKEND", defaults.backend),
            collection_name=os.environ.get("RAG_COLLECTION", defaults.collection_name),
            persist_directory=os.environ.get("CHROMA_PERSIST_DIR", defaults.persist_directory),
            chroma_host=os.environ.get("CHROMA_HOST") or defaults.chroma_host,
            chroma_port=_int("CHROMA_PORT", defaults.chroma_port),
            embedding_model=os.environ.get("OLLAMA_EMBED_MODEL", defaults.embedding_model),
            ollama_base_url=os.environ.get("OLLAMA_BASE_URL", defaults.ollama_base_url),
            max_concurrency=_int("RAG_EMBED_CONCURRENCY", defaults.max_concurrency),
            batch_size=_int("RAG_UPSERT_BATCH_SIZE", defaults.batch_size),
        )
