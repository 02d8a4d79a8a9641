"""Build the configured vector store backend."""

import logging
from typing import Optional

import chromadb

from .base import VectorStore
from .embedder import BaseEmbedder, OllamaEmbedder
from .memory_store import InMemoryVectorStore
from .models import StoreConfig
from .store import ChromaVectorStore

logger = logging.getLogger(__name__)


def create_embedder(config: StoreConfig) -> OllamaEmbedder:
    return OllamaEmbedder(
        model=config.embedding_model,
        base_url=config.ollama_base_url,
        max_concurrency=config.max_concurrency,
    )


def create_vector_store(
    config: Optional[StoreConfig] = None,
    embedder: Optional[BaseEmbedder] = None,
    client: Optional[chromadb.ClientAPI] = None,
) -> VectorStore:
    """
    Create a vector store from configuration.

    Args:
        config: Store configuration. Defaults to StoreConfig.from_env().
        embedder: Embedder to use. Defaults to an OllamaEmbedder built from
            the configuration.
        client: Optional ChromaDB client for the chroma backend.

    Returns:
        An InMemoryVectorStore or a ChromaVectorStore.
    """
    config = config or StoreConfig.from_env()
    embedder = embedder or create_embedder(config)

    logger.info("Using %s vector store backend", config.backend)
    if config.backend == "memory":
        return InMemoryVectorStore(embedder)
    return ChromaVectorStore(embedder, client=client, config=config)
