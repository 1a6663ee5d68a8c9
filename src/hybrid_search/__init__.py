"""
HybridSearch - hybrid lexical and vector retrieval tools.

This package ranks documents against a free-text query by fusing token
overlap with cosine similarity, synthesizing deterministic pseudo-embeddings
when no real vector is supplied. It ships two tool handlers (ad hoc hybrid
search and persistent-index embedding lookup), a FastAPI server and a CLI.

Example usage:
    >>> from hybrid_search import HybridSearchTool
    >>> tool = HybridSearchTool()
    >>> result = tool.execute({"query": "forecast risk", "documents": docs, "top_k": 2})
    >>> [match["id"] for match in result.output["results"]]
"""

from .embeddings import HashEmbeddingProvider, synthesize_embedding
from .metrics import ToolMetrics
from .models import EmbeddingLookupRequest, HybridSearchRequest, ToolHealth, ToolOutput
from .search import (
    FusionWeights,
    HybridQuery,
    HybridQueryEngine,
    IndexLookupEngine,
    LookupQuery,
    ScoredMatch,
)
from .storage import DocumentIndex, DocumentRecord
from .tokenizer import tokenize
from .tools import EmbeddingLookupTool, HybridSearchTool

__all__ = [
    # Tools
    "HybridSearchTool",
    "EmbeddingLookupTool",
    "ToolMetrics",
    "ToolOutput",
    "ToolHealth",
    # Requests
    "HybridSearchRequest",
    "EmbeddingLookupRequest",
    # Engines
    "HybridQuery",
    "HybridQueryEngine",
    "LookupQuery",
    "IndexLookupEngine",
    "FusionWeights",
    "ScoredMatch",
    # Index and embeddings
    "DocumentIndex",
    "DocumentRecord",
    "HashEmbeddingProvider",
    "synthesize_embedding",
    "tokenize",
]
