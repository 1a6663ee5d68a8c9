"""Tests for vector-only lookup against a persistent index."""

from __future__ import annotations

from hybrid_search.embeddings import HashEmbeddingProvider
from hybrid_search.search import IndexLookupEngine, LookupQuery, cosine_similarity
from hybrid_search.storage import DocumentIndex


def _lookup_index(records: list[dict]) -> DocumentIndex:
    index = DocumentIndex(require_text=False, require_embedding=True)
    index.upsert_many(records)
    return index


def test_synthesized_query_scores_are_reproducible(vector_records) -> None:
    engine = IndexLookupEngine(_lookup_index(vector_records))
    query = LookupQuery(text="customer churn risk", min_score=0.0)

    first = engine.search(query)
    second = engine.search(query)

    assert first.to_dict() == second.to_dict()
    assert first.used_index_size == 2

    provider = HashEmbeddingProvider(dim=16, multiplier=37)
    for record in vector_records:
        scores = {
            cosine_similarity(provider.embed_query("customer churn risk"), record["embedding"])
            for _ in range(3)
        }
        assert len(scores) == 1


def test_lookup_applies_min_score_and_orders_matches(vector_records) -> None:
    engine = IndexLookupEngine(_lookup_index(vector_records))

    result = engine.search(LookupQuery(text="ignored", embedding=(0.9, 0.1, 0.1, 0.2), min_score=0.3))

    assert [match.id for match in result.matches] == ["vec-2", "vec-1"]
    assert result.matches[0].score == 1.0
    assert result.matches[0].metadata == {"topic": "sales"}
    assert 0.3 <= result.matches[1].score < 0.5


def test_lookup_floor_excludes_weak_matches(vector_records) -> None:
    engine = IndexLookupEngine(_lookup_index(vector_records))

    result = engine.search(LookupQuery(text="", embedding=(0.9, 0.1, 0.1, 0.2), min_score=0.5))

    assert [match.id for match in result.matches] == ["vec-2"]


def test_lookup_top_k_truncates(vector_records) -> None:
    engine = IndexLookupEngine(_lookup_index(vector_records))

    result = engine.search(
        LookupQuery(text="", embedding=(1.0, 1.0, 1.0, 1.0), top_k=1, min_score=0.0)
    )

    assert len(result.matches) == 1
    assert result.to_dict()["used_index_size"] == 2


def test_lookup_on_empty_index() -> None:
    engine = IndexLookupEngine(_lookup_index([]))

    result = engine.search(LookupQuery(text="anything"))

    assert result.to_dict() == {"query": "anything", "matches": [], "used_index_size": 0}
