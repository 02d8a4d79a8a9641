"""
Pytest fixtures shared by the chunking and vector store tests.
"""

import hashlib
import math
import threading
import time
import uuid

import pytest

from vector_store.embedder import BaseEmbedder
from vector_store.exceptions import EmbeddingError


class FakeEmbedder(BaseEmbedder):
    """
    Deterministic embedder for tests.

    Maps each text to a unit vector derived from its SHA-256 digest, so
    identical texts get identical vectors and different texts almost surely
    point in different directions. Records every call and the peak number
    of concurrent requests.
    """

    def __init__(
        self,
        dimension: int = 8,
        max_concurrency: int = 5,
        fail_on: tuple[str, ...] = (),
        delay: float = 0.0,
    ):
        super().__init__(max_concurrency=max_concurrency)
        self.dimension = dimension
        self.fail_on = set(fail_on)
        self.delay = delay
        self.calls: list[str] = []
        self.max_in_flight = 0
        self._in_flight = 0
        self._lock = threading.Lock()

    def vector_for(self, text: str) -> list[float]:
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        raw = [(digest[i % len(digest)] - 127.5) / 127.5 for i in range(self.dimension)]
        norm = math.sqrt(sum(x * x for x in raw))
        return [x / norm for x in raw]

    def _embed_text(self, text: str) -> list[float]:
        with self._lock:
            self.calls.append(text)
            self._in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self._in_flight)
        try:
            if self.delay:
                time.sleep(self.delay)
            if text in self.fail_on:
                raise EmbeddingError(f"Simulated failure for '{text}'")
            return self.vector_for(text)
        finally:
            with self._lock:
                self._in_flight -= 1


class ConstantEmbedder(BaseEmbedder):
    """Returns the same vector for every text."""

    def __init__(self, vector: list[float]):
        super().__init__(max_concurrency=2)
        self.vector = vector

    def _embed_text(self, text: str) -> list[float]:
        return list(self.vector)


@pytest.fixture
def fake_embedder():
    """Create a deterministic 8-dimensional embedder."""
    return FakeEmbedder()


@pytest.fixture
def collection_name():
    """Unique collection name so tests never share state."""
    return f"test_{uuid.uuid4().hex[:8]}"


@pytest.fixture
def sample_text():
    """Mixed German/English/Chinese text with paragraphs."""
    return (
        "Die Bachelorarbeit umfasst 12 Leistungspunkte. Sie wird im sechsten "
        "Semester geschrieben! Wann beginnt die Anmeldung?\n\n"
        "The thesis is graded by two examiners; both submit a written report. "
        "Late submissions are not accepted.\n\n"
        "今天天气很好。我们去公园散步吧！你觉得怎么样？\n"
        "Short line without terminator"
    )
