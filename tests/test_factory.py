"""Tests for chunking.factory and vector_store.factory."""

import pytest
from unittest.mock import patch

import chromadb

from chunking import (
    CharacterTextSplitter,
    RecursiveCharacterTextSplitter,
    SentenceTextSplitter,
    SplitterKind,
    create_splitter,
)
from vector_store import (
    ChromaVectorStore,
    InMemoryVectorStore,
    OllamaEmbedder,
    StoreConfig,
    create_embedder,
    create_vector_store,
)


class TestCreateSplitter:
    @pytest.mark.parametrize("kind,expected", [
        ("character", CharacterTextSplitter),
        ("recursive", RecursiveCharacterTextSplitter),
        ("sentence", SentenceTextSplitter),
        (SplitterKind.SENTENCE, SentenceTextSplitter),
    ])
    def test_kinds(self, kind, expected):
        splitter = create_splitter(kind, chunk_size=100, chunk_overlap=10)
        assert isinstance(splitter, expected)
        assert splitter.chunk_size == 100
        assert splitter.chunk_overlap == 10

    def test_options_are_forwarded(self):
        splitter = create_splitter("sentence", chunk_size=50, respect_line=True, min_chunk_size=5)
        assert splitter.respect_line is True
        assert splitter.min_chunk_size == 5

    def test_separators_option(self):
        splitter = create_splitter("recursive", chunk_size=50, separators=["\n", ""])
        assert splitter.separators == ["\n", ""]

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError, match="character, recursive, sentence"):
            create_splitter("semantic", chunk_size=100)

    def test_invalid_overlap_raises(self):
        with pytest.raises(ValueError):
            create_splitter("character", chunk_size=10, chunk_overlap=20)


class TestCreateVectorStore:
    def test_memory_backend(self, fake_embedder):
        store = create_vector_store(StoreConfig(backend="memory"), embedder=fake_embedder)
        assert isinstance(store, InMemoryVectorStore)
        assert store.embedder is fake_embedder

    def test_chroma_backend_with_client(self, fake_embedder):
        client = chromadb.EphemeralClient()
        store = create_vector_store(
            StoreConfig(backend="chroma", batch_size=10),
            embedder=fake_embedder,
            client=client,
        )
        assert isinstance(store, ChromaVectorStore)
        assert store.batch_size == 10

    def test_config_from_env(self, fake_embedder, monkeypatch):
        monkeypatch.setenv("RAG_STORE_BACKEND", "memory")
        store = create_vector_store(embedder=fake_embedder)
        assert isinstance(store, InMemoryVectorStore)

    def test_default_embedder_from_config(self):
        with patch("vector_store.embedder.ollama.Client") as MockClient:
            config = StoreConfig(
                backend="memory",
                embedding_model="mxbai-embed-large",
                ollama_base_url="http://ollama:11434",
                max_concurrency=3,
            )
            store = create_vector_store(config)
        assert isinstance(store.embedder, OllamaEmbedder)
        assert store.embedder.model == "mxbai-embed-large"
        assert store.embedder.max_concurrency == 3
        MockClient.assert_called_once_with(host="http://ollama:11434")


class TestCreateEmbedder:
    def test_uses_config(self):
        with patch("vector_store.embedder.ollama.Client"):
            embedder = create_embedder(StoreConfig(embedding_model="nomic-embed-text", max_concurrency=2))
        assert embedder.model == "nomic-embed-text"
        assert embedder.max_concurrency == 2
