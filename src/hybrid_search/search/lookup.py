"""
Vector-only nearest-match lookup against a long-lived index.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from ..coercion import finite_floats, round_to
from ..embeddings import INDEX_EMBEDDING_DIM, INDEX_HASH_MULTIPLIER, HashEmbeddingProvider
from ..storage import IndexBackend
from .query import DEFAULT_TOP_K
from .ranker import rank_by_score
from .vector import VectorScorer

logger = structlog.get_logger(__name__)

DEFAULT_MIN_SCORE = 0.2


@dataclass(frozen=True)
class LookupQuery:
    """Validated lookup parameters."""

    text: str
    embedding: tuple[float, ...] = ()
    top_k: int = DEFAULT_TOP_K
    min_score: float = DEFAULT_MIN_SCORE


@dataclass(frozen=True)
class LookupMatch:
    id: str
    score: float
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "score": self.score, "metadata": self.metadata}


@dataclass(frozen=True)
class LookupResult:
    query: str
    matches: list[LookupMatch]
    used_index_size: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "matches": [match.to_dict() for match in self.matches],
            "used_index_size": self.used_index_size,
        }


class IndexLookupEngine:
    """Rank index records by cosine similarity above a score floor.

    Queries without an explicit embedding are embedded with the index-time
    hash parameters, which differ from the ones hybrid search uses.
    """

    def __init__(
        self,
        index: IndexBackend,
        *,
        embedding_provider: HashEmbeddingProvider | None = None,
        vector_scorer: VectorScorer | None = None,
    ) -> None:
        self.index = index
        self.embedding_provider = embedding_provider or HashEmbeddingProvider(
            dim=INDEX_EMBEDDING_DIM, multiplier=INDEX_HASH_MULTIPLIER
        )
        self.vector_scorer = vector_scorer or VectorScorer()

    def search(self, query: LookupQuery) -> LookupResult:
        text = query.text.strip()
        records = self.index.snapshot()
        query_embedding = finite_floats(query.embedding) or tuple(
            self.embedding_provider.embed_query(text)
        )

        scored: list[LookupMatch] = []
        for record in records:
            score = self.vector_scorer.score(query_embedding, record.embedding)
            if score >= query.min_score:
                scored.append(
                    LookupMatch(
                        id=record.id,
                        score=round_to(score, 4),
                        metadata=record.metadata,
                    )
                )

        ranked = rank_by_score(scored, score=lambda match: match.score, limit=query.top_k)
        logger.debug(
            "index lookup finished",
            records=len(records),
            above_floor=len(scored),
            returned=len(ranked),
        )
        return LookupResult(
            query=text,
            matches=ranked,
            used_index_size=len(records),
        )
