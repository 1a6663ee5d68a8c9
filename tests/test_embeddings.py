"""Tests for tokenization and pseudo-embedding synthesis."""

from __future__ import annotations

import math

import pytest

from hybrid_search.config import resolve_settings
from hybrid_search.embeddings import (
    INDEX_EMBEDDING_DIM,
    QUERY_EMBEDDING_DIM,
    HashEmbeddingProvider,
    hash_token,
    synthesize_embedding,
)
from hybrid_search.tokenizer import tokenize


def test_tokenize_lowercases_and_strips_punctuation() -> None:
    assert tokenize("Market forecast, and RISK-assessment for Q3!") == [
        "market",
        "forecast",
        "and",
        "risk",
        "assessment",
        "for",
        "q3",
    ]


def test_tokenize_drops_empty_tokens() -> None:
    assert tokenize("  \t\n ... ") == []
    assert tokenize("") == []


def test_hash_token_is_a_rolling_32_bit_hash() -> None:
    assert hash_token("a", 33) == 97
    assert hash_token("ab", 33) == 97 * 33 + 98
    assert 0 <= hash_token("z" * 40, 37) < 2**32


def test_single_token_lands_in_its_bucket() -> None:
    embedding = synthesize_embedding("a", dim=12, multiplier=33)

    assert embedding[97 % 12] == pytest.approx(1.0)
    assert sum(embedding) == pytest.approx(1.0)


def test_embedding_is_unit_length() -> None:
    embedding = synthesize_embedding(
        "customer churn risk for enterprise accounts", dim=16, multiplier=37
    )

    assert math.sqrt(sum(value * value for value in embedding)) == pytest.approx(1.0)


def test_text_without_tokens_yields_zero_vector() -> None:
    assert synthesize_embedding("!!! ???", dim=12, multiplier=33) == [0.0] * 12
    assert synthesize_embedding("", dim=4, multiplier=33) == [0.0] * 4


def test_embedding_is_deterministic() -> None:
    first = synthesize_embedding("forecast risk", dim=12, multiplier=33)
    second = synthesize_embedding("forecast risk", dim=12, multiplier=33)

    assert first == second


def test_query_and_index_parameters_stay_distinct() -> None:
    settings = resolve_settings()
    query_vector = settings.query_embedding_provider().embed_query("forecast risk")
    index_vector = settings.index_embedding_provider().embed_query("forecast risk")

    assert len(query_vector) == QUERY_EMBEDDING_DIM
    assert len(index_vector) == INDEX_EMBEDDING_DIM


def test_provider_embed_texts_preserves_order() -> None:
    provider = HashEmbeddingProvider(dim=8, multiplier=31)

    embeddings = provider.embed_texts(["alpha", "beta"])

    assert embeddings == [provider.embed_query("alpha"), provider.embed_query("beta")]


def test_provider_rejects_non_positive_dimension() -> None:
    with pytest.raises(ValueError):
        HashEmbeddingProvider(dim=0)


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("HYBRID_SEARCH_QUERY_EMBEDDING_DIM", "24")
    monkeypatch.setenv("HYBRID_SEARCH_LOG_FORMAT", "JSON")

    settings = resolve_settings()

    assert settings.query_embedding_dim == 24
    assert settings.query_hash_multiplier == 33
    assert settings.log_format == "json"
    assert resolve_settings(query_embedding_dim=6).query_embedding_dim == 6


def test_settings_reject_invalid_integers(monkeypatch) -> None:
    monkeypatch.setenv("HYBRID_SEARCH_INDEX_EMBEDDING_DIM", "sixteen")

    with pytest.raises(ValueError):
        resolve_settings()
