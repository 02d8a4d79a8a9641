"""
Text Loader - Turns a plain-text stream into Documents

Two modes:
- load(): one Document per non-blank line
- load_split(splitter): reads the whole stream and emits one Document per
  chunk produced by a text splitter

Every Document gets a fresh UUID and carries its text under the "content"
metadata key.

Usage:
    from chunking import RecursiveCharacterTextSplitter
    from document_loader import TextLoader

    with open("faq.txt", encoding="utf-8") as f:
        docs = TextLoader(f, source="faq.txt").load_split(
            RecursiveCharacterTextSplitter(chunk_size=500, chunk_overlap=50)
        )
"""

import logging
from typing import IO, Optional, Union

from chunking import TextSplitter
from vector_store.models import CONTENT_KEY, Document

logger = logging.getLogger(__name__)


class TextLoader:
    """Loads Documents from a text or UTF-8 encoded binary stream."""

    def __init__(self, stream: IO[Union[str, bytes]], source: Optional[str] = None):
        """
        Args:
            stream: Readable text or binary stream.
            source: Optional name of the origin, stored as "source" metadata.
        """
        self._stream = stream
        self.source = source

    def load(self) -> list[Document]:
        """Return one Document per non-blank line, stripped."""
        documents: list[Document] = []
        for raw_line in self._stream:
            line = self._decode(raw_line).strip()
            if not line:
                continue
            documents.append(Document(text=line, metadata=self._metadata(line)))
        return documents

    def load_split(self, splitter: TextSplitter) -> list[Document]:
        """Read the whole stream and return one Document per chunk."""
        text = self._decode(self._stream.read())
        documents: list[Document] = []
        for chunk in splitter.split_text(text):
            if not chunk:
                continue
            metadata = self._metadata(chunk)
            metadata["chunk_index"] = len(documents)
            documents.append(Document(text=chunk, metadata=metadata))

        logger.debug(
            "Split %d characters from %s into %d documents",
            len(text), self.source or "stream", len(documents),
        )
        return documents

    def _metadata(self, text: str) -> dict:
        metadata = {CONTENT_KEY: text}
        if self.source:
            metadata["source"] = self.source
        return metadata

    @staticmethod
    def _decode(data: Union[str, bytes]) -> str:
        if isinstance(data, bytes):
            return data.decode("utf-8")
        return data
