"""
Configuration helpers for search parameters and logging.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .embeddings import (
    INDEX_EMBEDDING_DIM,
    INDEX_HASH_MULTIPLIER,
    QUERY_EMBEDDING_DIM,
    QUERY_HASH_MULTIPLIER,
    HashEmbeddingProvider,
)


ENV_QUERY_EMBEDDING_DIM = "HYBRID_SEARCH_QUERY_EMBEDDING_DIM"
ENV_QUERY_HASH_MULTIPLIER = "HYBRID_SEARCH_QUERY_HASH_MULTIPLIER"
ENV_INDEX_EMBEDDING_DIM = "HYBRID_SEARCH_INDEX_EMBEDDING_DIM"
ENV_INDEX_HASH_MULTIPLIER = "HYBRID_SEARCH_INDEX_HASH_MULTIPLIER"
ENV_LOG_LEVEL = "HYBRID_SEARCH_LOG_LEVEL"
ENV_LOG_FORMAT = "HYBRID_SEARCH_LOG_FORMAT"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"


@dataclass(frozen=True)
class SearchSettings:
    """Resolved runtime settings."""

    query_embedding_dim: int = QUERY_EMBEDDING_DIM
    query_hash_multiplier: int = QUERY_HASH_MULTIPLIER
    index_embedding_dim: int = INDEX_EMBEDDING_DIM
    index_hash_multiplier: int = INDEX_HASH_MULTIPLIER
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT

    def query_embedding_provider(self) -> HashEmbeddingProvider:
        return HashEmbeddingProvider(
            dim=self.query_embedding_dim,
            multiplier=self.query_hash_multiplier,
        )

    def index_embedding_provider(self) -> HashEmbeddingProvider:
        return HashEmbeddingProvider(
            dim=self.index_embedding_dim,
            multiplier=self.index_hash_multiplier,
        )


def _resolve_int(override: int | None, env_name: str, default: int) -> int:
    if override is not None:
        return override
    raw = os.getenv(env_name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{env_name} must be an integer, got {raw!r}.") from exc
    if value < 1:
        raise ValueError(f"{env_name} must be positive, got {value}.")
    return value


def resolve_settings(
    *,
    query_embedding_dim: int | None = None,
    query_hash_multiplier: int | None = None,
    index_embedding_dim: int | None = None,
    index_hash_multiplier: int | None = None,
    log_level: str | None = None,
    log_format: str | None = None,
) -> SearchSettings:
    """
    Resolve settings from explicit overrides, env vars, or defaults.

    Precedence:
    1) explicit keyword argument
    2) HYBRID_SEARCH_* environment variable
    3) default value
    """
    return SearchSettings(
        query_embedding_dim=_resolve_int(
            query_embedding_dim, ENV_QUERY_EMBEDDING_DIM, QUERY_EMBEDDING_DIM
        ),
        query_hash_multiplier=_resolve_int(
            query_hash_multiplier, ENV_QUERY_HASH_MULTIPLIER, QUERY_HASH_MULTIPLIER
        ),
        index_embedding_dim=_resolve_int(
            index_embedding_dim, ENV_INDEX_EMBEDDING_DIM, INDEX_EMBEDDING_DIM
        ),
        index_hash_multiplier=_resolve_int(
            index_hash_multiplier, ENV_INDEX_HASH_MULTIPLIER, INDEX_HASH_MULTIPLIER
        ),
        log_level=(log_level or os.getenv(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
        log_format=(log_format or os.getenv(ENV_LOG_FORMAT) or DEFAULT_LOG_FORMAT).lower(),
    )
