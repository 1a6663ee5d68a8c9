"""
Hybrid query engine fusing lexical overlap and vector similarity.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

import structlog

from ..coercion import finite_floats
from ..embeddings import HashEmbeddingProvider
from ..storage import DocumentRecord, IndexBackend
from ..tokenizer import tokenize
from .fusion import FusionWeights, MatchSource, fuse_scores
from .lexical import LexicalScorer
from .ranker import rank_by_score
from .snippet import build_snippet
from .vector import VectorScorer

logger = structlog.get_logger(__name__)

DEFAULT_TOP_K = 5
MAX_TOP_K = 50


class QueryStage(str, enum.Enum):
    IDLE = "idle"
    NORMALIZING = "normalizing"
    SCORING = "scoring"
    RANKING = "ranking"
    DONE = "done"


@dataclass(frozen=True)
class HybridQuery:
    """Validated hybrid search parameters."""

    text: str
    embedding: tuple[float, ...] = ()
    top_k: int = DEFAULT_TOP_K
    weights: FusionWeights = field(default_factory=FusionWeights)


@dataclass(frozen=True)
class ScoredMatch:
    """Ranked document hit from hybrid retrieval."""

    id: str
    score: float
    source: MatchSource
    text_score: float
    vector_score: float
    snippet: str
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "score": self.score,
            "snippet": self.snippet,
            "source": self.source,
            "breakdown": {
                "text_score": self.text_score,
                "vector_score": self.vector_score,
            },
            "metadata": self.metadata,
        }


@dataclass(frozen=True)
class HybridSearchResult:
    query: str
    results: list[ScoredMatch]
    weights: FusionWeights

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "results": [match.to_dict() for match in self.results],
            "strategy": self.weights.to_dict(),
        }


@dataclass(frozen=True)
class _Candidate:
    document: DocumentRecord
    score: float
    text_score: float
    vector_score: float
    source: MatchSource


class HybridQueryEngine:
    """Score one query against a snapshot of an index.

    The engine holds no per-query state, so one instance can serve queries
    from several threads at once.
    """

    def __init__(
        self,
        index: IndexBackend,
        *,
        embedding_provider: HashEmbeddingProvider | None = None,
        lexical_scorer: LexicalScorer | None = None,
        vector_scorer: VectorScorer | None = None,
    ) -> None:
        self.index = index
        self.embedding_provider = embedding_provider or HashEmbeddingProvider()
        self.lexical_scorer = lexical_scorer or LexicalScorer()
        self.vector_scorer = vector_scorer or VectorScorer()

    def search(self, query: HybridQuery) -> HybridSearchResult:
        self._enter(QueryStage.NORMALIZING)
        text = query.text.strip()
        if not text:
            self._enter(QueryStage.DONE, results=0)
            return HybridSearchResult(query=text, results=[], weights=query.weights)

        documents = self.index.snapshot()
        query_embedding = self._resolve_query_embedding(text, query.embedding)

        self._enter(QueryStage.SCORING, documents=len(documents))
        text_scores = self._score_text(text, documents)
        if query_embedding:
            vector_scores = self._score_vectors(query_embedding, documents)
        else:
            vector_scores = [0.0] * len(documents)

        candidates: list[_Candidate] = []
        for document, text_score, vector_score in zip(documents, text_scores, vector_scores):
            fused = fuse_scores(text_score, vector_score, query.weights)
            if fused.score > 0:
                candidates.append(
                    _Candidate(
                        document=document,
                        score=fused.score,
                        text_score=fused.text_score,
                        vector_score=fused.vector_score,
                        source=fused.source,
                    )
                )

        self._enter(QueryStage.RANKING, candidates=len(candidates))
        ranked = rank_by_score(
            candidates, score=lambda candidate: candidate.score, limit=query.top_k
        )
        results = [
            ScoredMatch(
                id=candidate.document.id,
                score=candidate.score,
                source=candidate.source,
                text_score=candidate.text_score,
                vector_score=candidate.vector_score,
                snippet=build_snippet(candidate.document.text, text),
                metadata=candidate.document.metadata,
            )
            for candidate in ranked
        ]
        self._enter(QueryStage.DONE, results=len(results))
        return HybridSearchResult(query=text, results=results, weights=query.weights)

    def _resolve_query_embedding(
        self, text: str, provided: tuple[float, ...]
    ) -> tuple[float, ...]:
        explicit = finite_floats(provided)
        if explicit:
            return explicit
        return tuple(self.embedding_provider.embed_query(text))

    def _score_text(
        self, text: str, documents: tuple[DocumentRecord, ...]
    ) -> list[float]:
        query_tokens = tokenize(text)
        return [self.lexical_scorer.score(query_tokens, doc.text) for doc in documents]

    def _score_vectors(
        self, query_embedding: tuple[float, ...], documents: tuple[DocumentRecord, ...]
    ) -> list[float]:
        return [
            self.vector_scorer.score(query_embedding, doc.embedding)
            if doc.embedding
            else 0.0
            for doc in documents
        ]

    @staticmethod
    def _enter(stage: QueryStage, **context: Any) -> None:
        logger.debug("hybrid query stage", stage=stage.value, **context)
