"""
Deterministic pseudo-embeddings for text without a learned vector.

Tokens are hashed into a fixed number of buckets and the bucket counts are
L2-normalized. The same (text, dim, multiplier) triple always produces the
same vector, which keeps rankings reproducible across runs.
"""

from __future__ import annotations

import math

from .tokenizer import tokenize


QUERY_EMBEDDING_DIM = 12
QUERY_HASH_MULTIPLIER = 33
INDEX_EMBEDDING_DIM = 16
INDEX_HASH_MULTIPLIER = 37

_HASH_MASK = 0xFFFFFFFF


def hash_token(token: str, multiplier: int) -> int:
    """Rolling 32-bit hash of *token*."""
    value = 0
    for char in token:
        value = (value * multiplier + ord(char)) & _HASH_MASK
    return value


def synthesize_embedding(text: str, *, dim: int, multiplier: int) -> list[float]:
    """Bucket token hashes into a *dim*-sized vector and L2-normalize it.

    A text without tokens yields the all-zero vector.
    """
    if dim < 1:
        raise ValueError(f"Embedding dimension must be positive, got {dim}.")
    embedding = [0.0] * dim
    for token in tokenize(text):
        embedding[hash_token(token, multiplier) % dim] += 1.0
    norm = math.sqrt(sum(value * value for value in embedding))
    if not norm:
        return embedding
    return [value / norm for value in embedding]


class HashEmbeddingProvider:
    """Generate pseudo-embeddings with a fixed dimension and hash multiplier."""

    def __init__(
        self,
        *,
        dim: int = QUERY_EMBEDDING_DIM,
        multiplier: int = QUERY_HASH_MULTIPLIER,
    ) -> None:
        if dim < 1:
            raise ValueError(f"Embedding dimension must be positive, got {dim}.")
        self.dim = dim
        self.multiplier = multiplier

    def __repr__(self) -> str:
        return f"HashEmbeddingProvider(dim={self.dim}, multiplier={self.multiplier})"

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed a list of texts, preserving order."""
        return [self.embed_query(text) for text in texts]

    def embed_query(self, query: str) -> list[float]:
        """Embed a single text."""
        return synthesize_embedding(query, dim=self.dim, multiplier=self.multiplier)
