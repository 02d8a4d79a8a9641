"""Cosine similarity for the exact in-memory backend."""

import math
from typing import Sequence

from .exceptions import DimensionMismatchError, ZeroMagnitudeError


def cosine_similarity(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    """
    Compute ``dot(a, b) / (|a| * |b|)``.

    Accumulates in double precision and clamps the result to [-1, 1] to
    absorb rounding error.

    Raises:
        DimensionMismatchError: If the vectors differ in length.
        ZeroMagnitudeError: If either vector has zero magnitude.
    """
    if len(vec1) != len(vec2):
        raise DimensionMismatchError(expected=len(vec1), actual=len(vec2))

    dot_product = 0.0
    magnitude1 = 0.0
    magnitude2 = 0.0
    for a, b in zip(vec1, vec2):
        a = float(a)
        b = float(b)
        dot_product += a * b
        magnitude1 += a * a
        magnitude2 += b * b

    if magnitude1 == 0 or magnitude2 == 0:
        raise ZeroMagnitudeError()

    similarity = dot_product / (math.sqrt(magnitude1) * math.sqrt(magnitude2))
    return max(-1.0, min(1.0, similarity))
