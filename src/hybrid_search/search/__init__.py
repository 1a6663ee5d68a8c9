"""Scoring, fusion and query engines."""

from .fusion import FusedScore, FusionWeights, fuse_scores
from .lexical import LexicalScorer
from .lookup import IndexLookupEngine, LookupMatch, LookupQuery, LookupResult
from .query import (
    HybridQuery,
    HybridQueryEngine,
    HybridSearchResult,
    QueryStage,
    ScoredMatch,
)
from .ranker import rank_by_score
from .snippet import build_snippet
from .vector import VectorScorer, cosine_similarity

__all__ = [
    "FusedScore",
    "FusionWeights",
    "fuse_scores",
    "LexicalScorer",
    "IndexLookupEngine",
    "LookupMatch",
    "LookupQuery",
    "LookupResult",
    "HybridQuery",
    "HybridQueryEngine",
    "HybridSearchResult",
    "QueryStage",
    "ScoredMatch",
    "rank_by_score",
    "build_snippet",
    "VectorScorer",
    "cosine_similarity",
]
