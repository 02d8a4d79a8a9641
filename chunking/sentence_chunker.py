"""
Sentence Text Splitter - Sentence-aligned sliding window chunking

Accumulates whole sentences into chunks of at most ``chunk_size``
characters and realises overlap by carrying whole trailing sentences into
the next chunk.

Algorithm:
1. Normalise line endings and trim the text.
2. Build units: in ``respect_line`` mode, blank-line separated paragraphs
   that already fit are kept whole; everything else is segmented into
   sentences (clause punctuation is used for sentences that are too long).
3. Accumulate units into a chunk until the next one would overflow.
4. At a cut, scan back over the last ``chunk_overlap`` characters for the
   nearest sentence boundary and carry the sentences after it forward.
5. Units longer than ``chunk_size`` are hard-split into windows that break
   on a sentence terminator, then on punctuation, then on a raw boundary.
6. Chunks shorter than ``min_chunk_size`` are folded into the previous chunk
   when the result still fits, so fragments do not stand alone.

Usage:
    from chunking import SentenceTextSplitter

    splitter = SentenceTextSplitter(chunk_size=300, chunk_overlap=60)
    chunks = splitter.split_text(text)
"""

import re
from dataclasses import dataclass
from typing import Optional

from .base import TextSplitter, is_punctuation, join_parts
from .models import ChunkingConfig
from .sentence_splitter import is_sentence_end, split_sentences

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


@dataclass
class _Piece:
    """An emitted chunk and the part of it that no earlier chunk contains."""
    text: str
    fresh: str


class SentenceTextSplitter(TextSplitter):
    """Splits text into chunks made of whole sentences where possible."""

    def __init__(
        self,
        chunk_size: int,
        chunk_overlap: int = 0,
        respect_line: bool = False,
        min_chunk_size: Optional[int] = None,
    ):
        """
        Args:
            chunk_size: Maximum characters per chunk.
            chunk_overlap: Maximum characters of trailing sentences carried
                into the next chunk.
            respect_line: Keep blank-line separated paragraphs together when
                they fit into one chunk.
            min_chunk_size: Minimum size of a standalone chunk. Defaults to
                a quarter of ``chunk_size``.
        """
        super().__init__(ChunkingConfig(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            min_chunk_size=min_chunk_size,
        ))
        self.respect_line = respect_line

    @property
    def min_chunk_size(self) -> int:
        return self.config.effective_min_chunk_size

    def split_text(self, text: str) -> list[str]:
        if not text:
            return []
        text = text.replace("\r\n", "\n").replace("\r", "\n").strip()
        if not text:
            return []

        pieces: list[_Piece] = []
        current: list[str] = []
        carried = 0  # leading units of `current` that repeat the previous chunk

        for unit in self._units(text):
            if len(unit) > self.chunk_size:
                if len(current) > carried:
                    pieces.append(self._piece(current, carried))
                current, carried = [], 0
                pieces.extend(self._split_long_sentence(unit))
                continue

            if current and len(self._join(current + [unit])) > self.chunk_size:
                if len(current) > carried:
                    pieces.append(self._piece(current, carried))
                current = self._overlap_units(current)
                while current and len(self._join(current + [unit])) > self.chunk_size:
                    current.pop(0)
                carried = len(current)

            current.append(unit)

        if len(current) > carried:
            pieces.append(self._piece(current, carried))

        return self._apply_min_size(pieces)

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _units(self, text: str) -> list[str]:
        """Segment text into paragraphs (respect_line mode) or sentences."""
        if not self.respect_line:
            return split_sentences(text, max_length=self.chunk_size)

        units: list[str] = []
        for paragraph in _PARAGRAPH_BREAK.split(text):
            paragraph = paragraph.strip()
            if not paragraph:
                continue
            if len(paragraph) > self.chunk_size:
                units.extend(split_sentences(paragraph, max_length=self.chunk_size))
            else:
                units.append(paragraph)
        return units

    @staticmethod
    def _join(units: list[str]) -> str:
        joined = ""
        for unit in units:
            joined = join_parts(joined, unit)
        return joined

    def _piece(self, units: list[str], carried: int) -> _Piece:
        return _Piece(text=self._join(units), fresh=self._join(units[carried:]))

    def _overlap_units(self, units: list[str]) -> list[str]:
        """
        Return the trailing whole sentences that fit into ``chunk_overlap``.

        Walks backwards from the cut; the nearest sentence boundary inside
        the overlap window decides where the carried text starts.
        """
        if self.chunk_overlap <= 0:
            return []

        carried: list[str] = []
        for unit in reversed(units):
            if len(self._join([unit] + carried)) > self.chunk_overlap:
                break
            carried.insert(0, unit)
        return carried

    def _split_long_sentence(self, sentence: str) -> list[_Piece]:
        """
        Hard-split a sentence longer than ``chunk_size`` into windows.

        Each window breaks after the last sentence terminator it contains,
        else after the last punctuation mark, else at the raw boundary.
        Consecutive windows overlap by up to ``chunk_overlap`` characters.
        A cut that would leave a tail shorter than ``min_chunk_size`` is moved
        back, so the last window never stands below the floor.
        """
        pieces: list[_Piece] = []
        length = len(sentence)
        start = 0
        covered = 0

        while start < length:
            end = min(start + self.chunk_size, length)
            if end < length:
                end = self._find_break(sentence, start, end)
                end = self._leave_full_tail(sentence, start, end)

            text = sentence[start:end].strip()
            fresh = sentence[covered:end].strip()
            if text and fresh:
                pieces.append(_Piece(text=text, fresh=fresh))
            covered = end
            if end >= length:
                break

            next_start = end - self.chunk_overlap
            start = next_start if next_start > start else end

        return pieces

    @staticmethod
    def _find_break(sentence: str, start: int, end: int) -> int:
        for pos in range(end, start, -1):
            if is_sentence_end(sentence[pos - 1]):
                return pos
        for pos in range(end, start, -1):
            if is_punctuation(sentence[pos - 1]):
                return pos
        return end

    def _leave_full_tail(self, sentence: str, start: int, end: int) -> int:
        tail = len(sentence[end:].strip())
        cut = len(sentence) - self.min_chunk_size
        if 0 < tail < self.min_chunk_size and cut > start:
            return cut
        return end

    def _apply_min_size(self, pieces: list[_Piece]) -> list[str]:
        """
        Fold chunks below ``min_chunk_size`` into their predecessor.

        Only the fresh part of a small chunk is appended, so overlap is not
        duplicated. If the merge would exceed ``chunk_size`` the small chunk
        is kept as it is rather than losing its text.
        """
        chunks: list[str] = []
        for piece in pieces:
            if chunks and len(piece.text) < self.min_chunk_size:
                merged = join_parts(chunks[-1], piece.fresh)
                if len(merged) <= self.chunk_size:
                    chunks[-1] = merged
                    continue
            chunks.append(piece.text)
        return chunks
