"""
Text Splitter Base - Shared contract and helpers for all splitters

Every splitter turns a text into an ordered list of non-empty, stripped
chunks. Splitting is deterministic and side-effect free: the output is a
pure function of the input text and the splitter configuration.

Helpers defined here are shared by the concrete strategies:
- is_separator: character classification used to avoid mid-word cuts
- join_parts: joins two text units with the right glue for the script
- split_fixed_width: raw sliding-window fallback
"""

import unicodedata
from abc import ABC, abstractmethod
from typing import Optional

from .models import ChunkingConfig


def is_punctuation(char: str) -> bool:
    """Return True for any Unicode punctuation character (Latin or CJK)."""
    return unicodedata.category(char).startswith("P")


def is_separator(char: str) -> bool:
    """Return True for whitespace, newline and punctuation characters."""
    return char.isspace() or is_punctuation(char)


def join_parts(left: str, right: str, glue: Optional[str] = None) -> str:
    """
    Join two stripped text units.

    If ``glue`` is given it is used as-is. Otherwise a single space is
    inserted between two ASCII boundaries and nothing between CJK ones,
    so Latin sentences stay word-separated and Chinese text stays compact.
    """
    if not left:
        return right
    if not right:
        return left
    if glue is None:
        glue = " " if left[-1].isascii() and right[0].isascii() else ""
    return f"{left}{glue}{right}"


def split_fixed_width(text: str, chunk_size: int, step: int) -> list[str]:
    """
    Cut text into windows of ``chunk_size`` characters advancing by ``step``.

    Windows are stripped and whitespace-only windows are dropped. The last
    window always reaches the end of the text.
    """
    chunks: list[str] = []
    length = len(text)
    start = 0
    while start < length:
        end = min(start + chunk_size, length)
        chunk = text[start:end].strip()
        if chunk:
            chunks.append(chunk)
        if end >= length:
            break
        start += step
    return chunks


class TextSplitter(ABC):
    """Base class for splitters that turn raw text into bounded chunks."""

    def __init__(self, config: ChunkingConfig):
        self.config = config

    @property
    def chunk_size(self) -> int:
        return self.config.chunk_size

    @property
    def chunk_overlap(self) -> int:
        return self.config.chunk_overlap

    @abstractmethod
    def split_text(self, text: str) -> list[str]:
        """
        Split text into ordered, non-empty chunks.

        Args:
            text: The raw text to split.

        Returns:
            List of chunk strings in source order. Empty or whitespace-only
            input returns an empty list.
        """

    def split_texts(self, texts: list[str]) -> list[str]:
        """Split several texts and concatenate their chunks in input order."""
        chunks: list[str] = []
        for text in texts:
            chunks.extend(self.split_text(text))
        return chunks

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(chunk_size={self.chunk_size}, "
            f"chunk_overlap={self.chunk_overlap})"
        )
