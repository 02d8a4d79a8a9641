"""
Embedders - Text to vector conversion with bounded concurrency

BaseEmbedder holds the transport-independent logic: input validation,
empty-response detection and the concurrent batch fan-out. Subclasses only
implement the single request to their embedding service.

Design:
- embed() is a direct single call to the provider
- embed_batch() sends one request per text, at most ``max_concurrency`` in
  flight, and returns vectors in input order
- The first failing request cancels the whole batch: queued requests never
  start, in-flight results are discarded and the first error is raised
- OllamaEmbedder wraps the Ollama Python client (ollama.Client.embed)

Usage:
    from vector_store.embedder import OllamaEmbedder

    embedder = OllamaEmbedder(model="nomic-embed-text", max_concurrency=5)
    vector = embedder.embed("Ein Beispieltext")
    vectors = embedder.embed_batch(["Text 1", "Text 2"])
"""

import logging
import threading
from abc import ABC, abstractmethod
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Optional

import ollama

from .exceptions import (
    EmbeddingConnectionError,
    EmbeddingError,
    EmptyInputError,
    OperationCancelledError,
    format_error_chain,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 5


class BaseEmbedder(ABC):
    """
    Converts texts to fixed-width float vectors.

    Subclasses implement ``_embed_text`` for a single request; batching,
    ordering and cancellation are handled here.
    """

    def __init__(self, max_concurrency: int = DEFAULT_MAX_CONCURRENCY):
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")
        self.max_concurrency = max_concurrency
        self._dimensions: Optional[int] = None

    @property
    def dimensions(self) -> Optional[int]:
        """Return the embedding dimensions (available after first embed call)."""
        return self._dimensions

    @abstractmethod
    def _embed_text(self, text: str) -> list[float]:
        """Send one embedding request and return the raw vector."""

    def embed(self, text: str) -> list[float]:
        """
        Generate an embedding for a single text.

        Args:
            text: The text to embed.

        Returns:
            List of floats representing the embedding vector.

        Raises:
            EmptyInputError: If the text is empty.
            EmbeddingError: If the provider fails or returns no vector.
        """
        if not text or not text.strip():
            raise EmptyInputError("Cannot embed empty text")

        embedding = self._embed_text(text)
        if not embedding:
            raise EmbeddingError("Embedding provider returned no embeddings")
        self._dimensions = len(embedding)
        return list(embedding)

    def embed_batch(
        self,
        texts: list[str],
        cancel_event: Optional[threading.Event] = None,
    ) -> list[list[float]]:
        """
        Generate embeddings for multiple texts concurrently.

        At most ``max_concurrency`` requests are in flight. The result keeps
        the input order regardless of completion order.

        Args:
            texts: List of texts to embed.
            cancel_event: Optional event; once set, requests that have not
                started yet fail with OperationCancelledError.

        Returns:
            List of embedding vectors, one per input text.

        Raises:
            EmptyInputError: If ``texts`` is empty or contains an empty text.
            EmbeddingError: If any request fails (the first failure wins).
            OperationCancelledError: If ``cancel_event`` is set.
        """
        if not texts:
            raise EmptyInputError("Cannot embed an empty list of texts")

        scope = threading.Event()
        vectors: list[Optional[list[float]]] = [None] * len(texts)

        def _worker(index: int, text: str) -> None:
            if scope.is_set():
                raise OperationCancelledError("Batch aborted after an earlier failure")
            if cancel_event is not None and cancel_event.is_set():
                raise OperationCancelledError()
            vectors[index] = self.embed(text)

        workers = min(self.max_concurrency, len(texts))
        pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="embed_worker")
        try:
            futures = [pool.submit(_worker, i, text) for i, text in enumerate(texts)]
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)

            failed = [f for f in futures if f in done and f.exception() is not None]
            if failed:
                scope.set()
                error = self._first_error(failed)
                logger.warning(
                    "Embedding batch of %d texts aborted: %s",
                    len(texts),
                    format_error_chain(error),
                )
                raise error
        finally:
            # In-flight requests are abandoned, not awaited.
            pool.shutdown(wait=False, cancel_futures=True)

        return vectors

    @staticmethod
    def _first_error(failed: list) -> BaseException:
        """Prefer a real provider failure over the cancellations it caused."""
        errors = [f.exception() for f in failed]
        for error in errors:
            if not isinstance(error, OperationCancelledError):
                return error
        return errors[0]


class OllamaEmbedder(BaseEmbedder):
    """
    Generates text embeddings using a local Ollama model.

    The embedder connects to a running Ollama instance and uses a specified
    embedding model to convert text into dense vector representations.
    """

    def __init__(
        self,
        model: str = "nomic-embed-text",
        base_url: str = "http://localhost:11434",
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ):
        """
        Initialize the embedder.

        Args:
            model: Ollama model name for embeddings.
            base_url: Ollama API base URL.
            max_concurrency: Maximum embedding requests in flight per batch.
        """
        super().__init__(max_concurrency=max_concurrency)
        self.model = model
        self.base_url = base_url
        self._client = ollama.Client(host=base_url)

    def _embed_text(self, text: str) -> list[float]:
        try:
            response = self._client.embed(model=self.model, input=text)
        except ollama.ResponseError as e:
            raise EmbeddingError(
                f"Ollama embedding failed for model '{self.model}'", original_error=e
            ) from e
        except Exception as e:
            if "Connection" in type(e).__name__ or "refused" in str(e).lower():
                raise EmbeddingConnectionError(
                    f"Cannot connect to Ollama at {self.base_url}. "
                    f"Is Ollama running? Start it with: ollama serve",
                    original_error=e,
                ) from e
            raise EmbeddingError("Embedding generation failed", original_error=e) from e

        embeddings = response["embeddings"]
        if not embeddings:
            raise EmbeddingError(f"Ollama returned no embeddings for model '{self.model}'")
        return embeddings[0]

    def health_check(self) -> dict[str, bool | str]:
        """
        Check if Ollama is running and the embedding model is available.

        Returns:
            Dict with 'healthy' (bool), 'ollama_running' (bool),
            'model_available' (bool), and 'error' (str, if any).
        """
        result = {
            "healthy": False,
            "ollama_running": False,
            "model_available": False,
            "model": self.model,
            "error": "",
        }

        try:
            models = self._client.list()
            result["ollama_running"] = True

            model_names = [m.model for m in models.models]
            # Match by prefix (e.g., "nomic-embed-text" matches "nomic-embed-text:latest")
            result["model_available"] = any(
                m.startswith(self.model) for m in model_names
            )

            if not result["model_available"]:
                result["error"] = (
                    f"Model '{self.model}' not found. "
                    f"Available: {model_names}. "
                    f"Pull it with: ollama pull {self.model}"
                )
            else:
                result["healthy"] = True

        except Exception as e:
            result["error"] = f"Cannot connect to Ollama: {e}"

        return result
