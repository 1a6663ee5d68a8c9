from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal, TypeAlias, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .coercion import clamp_number, coerce_text, finite_floats
from .search import FusionWeights, HybridQuery, LookupQuery
from .search.fusion import DEFAULT_TEXT_WEIGHT, DEFAULT_VECTOR_WEIGHT
from .search.lookup import DEFAULT_MIN_SCORE
from .search.query import DEFAULT_TOP_K, MAX_TOP_K

ToolPhase: TypeAlias = Literal["recebe", "colhe", "processa", "fornece"]
HealthStatus: TypeAlias = Literal["healthy", "degraded", "down"]

_RequestT = TypeVar("_RequestT", bound="_ToolRequest")


class _ToolRequest(BaseModel):
    """Shared coercion for loosely typed tool payloads."""

    model_config = ConfigDict(extra="ignore")

    query: str = Field(default="", description="Free-text query")
    query_embedding: tuple[float, ...] = Field(
        default=(), description="Precomputed query vector; non-finite entries are dropped"
    )
    top_k: int = Field(default=DEFAULT_TOP_K, description="Maximum number of results")

    @classmethod
    def from_payload(cls: type[_RequestT], payload: Any) -> _RequestT:
        """Validate a raw tool payload; non-mapping payloads count as empty."""
        if not isinstance(payload, Mapping):
            payload = {}
        return cls.model_validate(dict(payload))

    @field_validator("query", mode="before")
    @classmethod
    def _coerce_query(cls, value: Any) -> str:
        return coerce_text(value)

    @field_validator("query_embedding", mode="before")
    @classmethod
    def _coerce_embedding(cls, value: Any) -> tuple[float, ...]:
        return finite_floats(value)

    @field_validator("top_k", mode="before")
    @classmethod
    def _clamp_top_k(cls, value: Any) -> int:
        return int(clamp_number(value, 1, MAX_TOP_K, DEFAULT_TOP_K))


class HybridSearchRequest(_ToolRequest):
    """Input to the hybrid search tool: an ad hoc corpus plus query options."""

    documents: list[Any] = Field(
        default_factory=list, description="Raw documents: {id, text, embedding?, metadata?}"
    )
    text_weight: float = Field(default=DEFAULT_TEXT_WEIGHT, description="Lexical weight")
    vector_weight: float = Field(default=DEFAULT_VECTOR_WEIGHT, description="Vector weight")

    @field_validator("documents", mode="before")
    @classmethod
    def _coerce_documents(cls, value: Any) -> list[Any]:
        return list(value) if isinstance(value, (list, tuple)) else []

    @field_validator("text_weight", mode="before")
    @classmethod
    def _clamp_text_weight(cls, value: Any) -> float:
        return clamp_number(value, 0.0, 1.0, DEFAULT_TEXT_WEIGHT)

    @field_validator("vector_weight", mode="before")
    @classmethod
    def _clamp_vector_weight(cls, value: Any) -> float:
        return clamp_number(value, 0.0, 1.0, DEFAULT_VECTOR_WEIGHT)

    def to_query(self) -> HybridQuery:
        return HybridQuery(
            text=self.query.strip(),
            embedding=self.query_embedding,
            top_k=self.top_k,
            weights=FusionWeights.normalize(self.text_weight, self.vector_weight),
        )


class EmbeddingLookupRequest(_ToolRequest):
    """Input to the embedding lookup tool."""

    index: list[Any] | None = Field(
        default=None, description="Records to upsert before the lookup: {id, embedding, metadata?}"
    )
    min_score: float = Field(default=DEFAULT_MIN_SCORE, description="Similarity floor")

    @model_validator(mode="before")
    @classmethod
    def _accept_embedding_alias(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("query_embedding") is None:
            data = {**data, "query_embedding": data.get("embedding")}
        return data

    @field_validator("index", mode="before")
    @classmethod
    def _coerce_index(cls, value: Any) -> list[Any] | None:
        return list(value) if isinstance(value, (list, tuple)) else None

    @field_validator("min_score", mode="before")
    @classmethod
    def _clamp_min_score(cls, value: Any) -> float:
        return clamp_number(value, 0.0, 1.0, DEFAULT_MIN_SCORE)

    def to_query(self) -> LookupQuery:
        return LookupQuery(
            text=self.query.strip(),
            embedding=self.query_embedding,
            top_k=self.top_k,
            min_score=self.min_score,
        )


class ToolOutput(BaseModel):
    """Envelope returned by every tool execution"""

    tool_id: str = Field(description="Stable tool identifier")
    tool_name: str = Field(description="Human-readable tool name")
    success: bool = Field(description="Whether the tool produced an output")
    output: dict[str, Any] | None = Field(default=None, description="Tool-specific output")
    error: str | None = Field(default=None, description="Error message when success is false")
    duration_ms: int = Field(description="Wall-clock duration of the execution")
    timestamp: datetime = Field(description="Completion time")


class ToolHealth(BaseModel):
    """Health summary derived from execution counters"""

    tool_name: str
    status: HealthStatus
    last_check: datetime
    avg_latency_ms: int
    success_rate: float
