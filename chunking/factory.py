"""Build a text splitter from a strategy name and size settings."""

from typing import Any, Union

from .base import TextSplitter
from .character_splitter import CharacterTextSplitter
from .models import SplitterKind
from .recursive_splitter import RecursiveCharacterTextSplitter
from .sentence_chunker import SentenceTextSplitter

_SPLITTERS: dict[SplitterKind, type[TextSplitter]] = {
    SplitterKind.CHARACTER: CharacterTextSplitter,
    SplitterKind.RECURSIVE: RecursiveCharacterTextSplitter,
    SplitterKind.SENTENCE: SentenceTextSplitter,
}


def create_splitter(
    kind: Union[SplitterKind, str],
    chunk_size: int,
    chunk_overlap: int = 0,
    **options: Any,
) -> TextSplitter:
    """
    Create a splitter by name.

    Args:
        kind: "character", "recursive" or "sentence".
        chunk_size: Maximum characters per chunk.
        chunk_overlap: Overlap between consecutive chunks.
        **options: Strategy-specific options (``separator``, ``separators``,
            ``respect_line``, ``min_chunk_size``).

    Raises:
        ValueError: If the kind is unknown or the configuration is invalid.
    """
    try:
        splitter_kind = SplitterKind(kind)
    except ValueError:
        valid = ", ".join(k.value for k in SplitterKind)
        raise ValueError(f"Unknown splitter kind '{kind}'. Expected one of: {valid}") from None

    splitter_cls = _SPLITTERS[splitter_kind]
    return splitter_cls(chunk_size=chunk_size, chunk_overlap=chunk_overlap, **options)
