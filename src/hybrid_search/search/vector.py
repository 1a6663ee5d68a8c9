"""
Cosine-similarity scoring over embedding vectors.
"""

from __future__ import annotations

import math
from collections.abc import Sequence


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """Cosine similarity over the shared prefix of two vectors.

    Returns 0.0 when either vector is empty, has zero norm or holds values
    that do not yield a finite similarity. Negative values are returned as-is.
    """
    length = min(len(vec_a), len(vec_b))
    if not length:
        return 0.0
    prefix_a = vec_a[:length]
    prefix_b = vec_b[:length]
    # Scale by the largest magnitude so squares neither overflow nor underflow.
    scale_a = max(abs(value) for value in prefix_a)
    scale_b = max(abs(value) for value in prefix_b)
    if not scale_a or not scale_b:
        return 0.0
    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for raw_a, raw_b in zip(prefix_a, prefix_b):
        a = raw_a / scale_a
        b = raw_b / scale_b
        dot += a * b
        norm_a += a * a
        norm_b += b * b
    if not norm_a or not norm_b:
        return 0.0
    similarity = dot / (math.sqrt(norm_a) * math.sqrt(norm_b))
    return similarity if math.isfinite(similarity) else 0.0


class VectorScorer:
    """Score documents by cosine similarity to the query vector."""

    def score(
        self, query_embedding: Sequence[float], doc_embedding: Sequence[float]
    ) -> float:
        return cosine_similarity(query_embedding, doc_embedding)
