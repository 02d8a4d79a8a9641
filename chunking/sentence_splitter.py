"""
Sentence Boundary Splitter for the Chunking Pipeline

Regex-based sentence segmentation for mixed Chinese and Latin text.
Sentence terminators are 。！？ (full-width) and .!? (ASCII); a run of
terminators stays with the sentence it ends. Trailing text without a
terminator is still returned as a sentence, so no text is lost.

Sentences longer than an optional ``max_length`` are further divided on
clause punctuation (，；：、,;:), which also stays attached to its clause.

Usage:
    from chunking.sentence_splitter import split_sentences

    split_sentences("今天天气很好。我们去公园吧！Shall we go?")
    # ["今天天气很好。", "我们去公园吧！", "Shall we go?"]
"""

import re
from typing import Optional

SENTENCE_TERMINATORS = "。！？.!?"
CLAUSE_PUNCTUATION = "，；：、,;:"

# A sentence is a run of non-terminators followed by any terminators, or a
# bare run of terminators (e.g. "..." at the start of the text).
_SENTENCE_PATTERN = re.compile(
    rf"[^{re.escape(SENTENCE_TERMINATORS)}]+[{re.escape(SENTENCE_TERMINATORS)}]*"
    rf"|[{re.escape(SENTENCE_TERMINATORS)}]+"
)

_CLAUSE_PATTERN = re.compile(
    rf"[^{re.escape(CLAUSE_PUNCTUATION)}]+[{re.escape(CLAUSE_PUNCTUATION)}]*"
    rf"|[{re.escape(CLAUSE_PUNCTUATION)}]+"
)


def is_sentence_end(char: str) -> bool:
    """Return True if the character terminates a sentence."""
    return char in SENTENCE_TERMINATORS


def _segments(pattern: re.Pattern, text: str) -> list[str]:
    segments = []
    for match in pattern.finditer(text):
        segment = match.group().strip()
        if segment:
            segments.append(segment)
    return segments


def split_sentences(text: str, max_length: Optional[int] = None) -> list[str]:
    """
    Split text into sentences at sentence-ending punctuation.

    Args:
        text: Input text to split into sentences.
        max_length: If given, sentences longer than this are split again
            at clause punctuation.

    Returns:
        List of sentence strings. Empty/whitespace input returns empty list.
        Each sentence is stripped of leading/trailing whitespace.
    """
    if not text or not text.strip():
        return []

    sentences: list[str] = []
    for sentence in _segments(_SENTENCE_PATTERN, text):
        if max_length is not None and len(sentence) > max_length:
            sentences.extend(_segments(_CLAUSE_PATTERN, sentence))
        else:
            sentences.append(sentence)
    return sentences
