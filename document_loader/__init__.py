"""
Document Loader Module - Raw text to Documents

Quick Start:
    from document_loader import TextLoader

    docs = TextLoader(open("notes.txt", encoding="utf-8")).load()
"""

from .text_loader import TextLoader

__all__ = ["TextLoader"]
