"""
Character Text Splitter - Fixed-width sliding window with soft cuts

Scans the text with a window of ``chunk_size`` characters. Before cutting a
window that does not reach the end of the text, the cut is pulled back to
the nearest preceding separator (whitespace, punctuation, newline) so words
are not broken in half. If the window holds no separator the raw boundary is
used.

Usage:
    from chunking import CharacterTextSplitter

    splitter = CharacterTextSplitter(chunk_size=10, chunk_overlap=2)
    splitter.split_text("the quick brown fox jumps")
    # ["the quick", "k brown", "n fox", "x jumps"]
"""

from .base import TextSplitter, is_separator
from .models import ChunkingConfig


class CharacterTextSplitter(TextSplitter):
    """Splits text into windows of at most ``chunk_size`` characters."""

    def __init__(self, chunk_size: int, chunk_overlap: int = 0, separator: str = " "):
        """
        Args:
            chunk_size: Maximum characters per chunk.
            chunk_overlap: Characters repeated at the start of the next chunk.
            separator: Extra separator characters. An empty string disables
                the pull-back to separators and cuts at raw boundaries.
        """
        super().__init__(ChunkingConfig(chunk_size=chunk_size, chunk_overlap=chunk_overlap))
        self.separator = separator

    def split_text(self, text: str) -> list[str]:
        if not text:
            return []
        text = text.strip()
        if not text:
            return []

        length = len(text)
        if length <= self.chunk_size:
            return [text]

        chunks: list[str] = []
        start = 0
        while start < length:
            end = min(start + self.chunk_size, length)
            if end < length and self.separator:
                end = self._find_cut(text, start, end)

            chunk = text[start:end].strip()
            if chunk:
                chunks.append(chunk)
            if end >= length:
                break

            # The next window re-reads the overlap before the actual cut, so a
            # pulled-back cut never leaves a gap.
            next_start = end - self.chunk_overlap
            start = next_start if next_start > start else end

        return chunks

    def _find_cut(self, text: str, start: int, end: int) -> int:
        """Return the position just after the last separator in (start, end]."""
        for pos in range(end, start, -1):
            if self._is_separator(text[pos - 1]):
                return pos
        return end

    def _is_separator(self, char: str) -> bool:
        return is_separator(char) or char in self.separator
