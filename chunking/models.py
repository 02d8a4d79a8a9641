"""
Data Models for the Chunking Pipeline

Defines:
1. ChunkingConfig - Chunk size / overlap limits shared by every splitter
2. SplitterKind - Names of the available splitter strategies

Design Principles:
- Pydantic v2 for validation (consistent with vector_store.models)
- Sizes are measured in characters (Unicode code points), not tokens
- Invalid configurations fail at construction, never at split time

Usage:
    config = ChunkingConfig(chunk_size=500, chunk_overlap=50)
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class SplitterKind(str, Enum):
    """Available text splitting strategies."""
    CHARACTER = "character"
    RECURSIVE = "recursive"
    SENTENCE = "sentence"


class ChunkingConfig(BaseModel):
    """
    Size configuration for a text splitter.

    Controls the maximum chunk length, the overlap carried between
    consecutive chunks and (for the sentence splitter) the minimum size
    below which a chunk is not emitted on its own.
    """
    chunk_size: int = Field(
        500,
        description="Maximum characters per chunk",
        gt=0,
    )
    chunk_overlap: int = Field(
        0,
        description="Characters shared between consecutive chunks",
        ge=0,
    )
    min_chunk_size: Optional[int] = Field(
        None,
        description="Minimum characters for a standalone chunk (default: chunk_size // 4)",
        ge=0,
    )

    def model_post_init(self, __context: Any) -> None:
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be less than "
                f"chunk_size ({self.chunk_size})"
            )

    @property
    def step(self) -> int:
        """Advance of a fixed-width window between consecutive chunks."""
        step = self.chunk_size - self.chunk_overlap
        if step <= 0:
            step = self.chunk_size // 2
        return max(step, 1)

    @property
    def effective_min_chunk_size(self) -> int:
        if self.min_chunk_size is None:
            return self.chunk_size // 4
        return self.min_chunk_size
