"""
Chunking Module - Size-bounded text splitters for RAG ingestion

Turns raw text into ordered chunks that respect a maximum size and an
overlap, preferring semantic boundaries (paragraphs, sentences, clauses,
words) over raw character cuts. Handles Chinese and Latin punctuation.

Quick Start:
    from chunking import RecursiveCharacterTextSplitter

    splitter = RecursiveCharacterTextSplitter(chunk_size=500, chunk_overlap=50)
    chunks = splitter.split_text(text)

    # or by name
    from chunking import create_splitter
    splitter = create_splitter("sentence", chunk_size=300, chunk_overlap=60)
"""

__version__ = "1.0.0"

from .base import TextSplitter
from .character_splitter import CharacterTextSplitter
from .factory import create_splitter
from .models import ChunkingConfig, SplitterKind
from .recursive_splitter import DEFAULT_SEPARATORS, RecursiveCharacterTextSplitter
from .sentence_chunker import SentenceTextSplitter
from .sentence_splitter import split_sentences

__all__ = [
    "__version__",
    "TextSplitter",
    "CharacterTextSplitter",
    "RecursiveCharacterTextSplitter",
    "SentenceTextSplitter",
    "DEFAULT_SEPARATORS",
    "ChunkingConfig",
    "SplitterKind",
    "create_splitter",
    "split_sentences",
]
