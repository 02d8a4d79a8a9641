"""
Recursive Character Text Splitter - Separator-priority chunking

Tries an ordered list of separators, from the coarsest (paragraph break) to
the finest (space). The first separator that actually divides the text is
used; parts that are still too large are split again with the remaining
separators, and runs of small parts are merged greedily into chunks of at
most ``chunk_size`` characters.

Algorithm:
1. If the text fits in one chunk, return it.
2. For each separator in priority order, split the text on it. Whitespace
   separators are consumed, punctuation separators stay attached to the part
   they terminate, so no visible character is ever lost.
3. If that produced more than one part, runs of parts that fit are merged
   into chunks, carrying the trailing ``chunk_overlap`` characters of each
   emitted chunk into the next one. Oversized parts are split again with the
   remaining separators and their chunks are emitted as they are.
4. The empty separator (or running out of separators) falls back to
   fixed-width character windows.

Every recursive call works on a strictly shorter string, so the recursion
terminates.

Usage:
    from chunking import RecursiveCharacterTextSplitter

    splitter = RecursiveCharacterTextSplitter(chunk_size=200, chunk_overlap=20)
    chunks = splitter.split_text(long_text)
"""

from typing import Optional

from .base import TextSplitter, join_parts, split_fixed_width
from .models import ChunkingConfig

DEFAULT_SEPARATORS: tuple[str, ...] = (
    "\n\n",  # paragraph
    "\n",
    "。",
    "！",
    "？",
    ".",
    "!",
    "?",
    "；",
    ";",
    "：",
    ":",
    "，",
    ",",
    " ",
    "",
)


class RecursiveCharacterTextSplitter(TextSplitter):
    """Splits text on the highest-priority separator that divides it."""

    def __init__(
        self,
        chunk_size: int,
        chunk_overlap: int = 0,
        separators: Optional[list[str]] = None,
    ):
        """
        Args:
            chunk_size: Maximum characters per chunk.
            chunk_overlap: Trailing characters of a chunk repeated as the
                prefix of the next one.
            separators: Separators in priority order. Defaults to
                DEFAULT_SEPARATORS. ``""`` means "cut at raw characters".

        Raises:
            ValueError: If the size configuration is invalid or the
                separator list is empty.
        """
        super().__init__(ChunkingConfig(chunk_size=chunk_size, chunk_overlap=chunk_overlap))
        if separators is None:
            separators = list(DEFAULT_SEPARATORS)
        if not separators:
            raise ValueError("separators list cannot be empty")
        self.separators = list(separators)

    def split_text(self, text: str) -> list[str]:
        if not text:
            return []
        text = text.strip()
        if not text:
            return []
        return self._split(text, self.separators)

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _split(self, text: str, separators: list[str]) -> list[str]:
        if len(text) <= self.chunk_size:
            return [text]

        for index, separator in enumerate(separators):
            if separator == "":
                return self._character_split(text)

            parts = self._split_on(text, separator)
            if len(parts) <= 1:
                continue

            remaining = separators[index + 1:]
            glue = separator if separator.isspace() else None
            chunks: list[str] = []
            pending: list[str] = []
            for part in parts:
                if len(part) <= self.chunk_size:
                    pending.append(part)
                    continue
                # Oversized parts come back as finished chunks.
                chunks.extend(self._merge(pending, glue))
                pending = []
                chunks.extend(self._split(part, remaining))

            chunks.extend(self._merge(pending, glue))
            return chunks

        return self._character_split(text)

    @staticmethod
    def _split_on(text: str, separator: str) -> list[str]:
        """
        Split on a separator and return the stripped, non-empty parts.

        Punctuation separators are kept at the end of the part they close.
        """
        raw_parts = text.split(separator)
        if not separator.isspace():
            raw_parts = [p + separator for p in raw_parts[:-1]] + raw_parts[-1:]

        parts: list[str] = []
        for part in raw_parts:
            part = part.strip()
            if part:
                parts.append(part)
        return parts

    def _character_split(self, text: str) -> list[str]:
        return split_fixed_width(text, self.chunk_size, self.config.step)

    def _merge(self, pieces: list[str], glue: Optional[str]) -> list[str]:
        """
        Greedily merge pieces into chunks of at most ``chunk_size``.

        Whenever a chunk is emitted, its trailing ``chunk_overlap``
        characters become the prefix of the next chunk.
        """
        chunks: list[str] = []
        current = ""

        for piece in pieces:
            if not current:
                current = piece
                continue

            candidate = join_parts(current, piece, glue)
            if len(candidate) <= self.chunk_size:
                current = candidate
                continue

            chunks.append(current)
            current = self._carry_overlap(current, piece, glue)

        if current:
            chunks.append(current)
        return chunks

    def _carry_overlap(self, previous: str, piece: str, glue: Optional[str]) -> str:
        """Prefix ``piece`` with as much of the tail of ``previous`` as fits."""
        if self.chunk_overlap <= 0 or len(previous) <= self.chunk_overlap:
            return piece

        overlap = min(self.chunk_overlap, self.chunk_size - len(piece) - 1)
        while overlap > 0:
            tail = previous[-overlap:].strip()
            if not tail:
                return piece
            candidate = join_parts(tail, piece, glue)
            if len(candidate) <= self.chunk_size:
                return candidate
            overlap -= 1
        return piece
