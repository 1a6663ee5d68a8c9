"""
Tool handlers exposing hybrid search and embedding lookup.

A tool wraps one engine call in the envelope the tool harness expects: it
times the run, records it in injected ``ToolMetrics`` and turns any exception
into a ``success=False`` envelope instead of raising.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

import structlog

from .config import SearchSettings, resolve_settings
from .metrics import ToolMetrics
from .models import (
    EmbeddingLookupRequest,
    HybridSearchRequest,
    ToolHealth,
    ToolOutput,
    ToolPhase,
)
from .search import HybridQueryEngine, IndexLookupEngine
from .storage import DocumentIndex

logger = structlog.get_logger(__name__)


class SearchTool(ABC):
    """Base class for tool handlers with timing, failure mapping and health."""

    id: str = ""
    name: str = ""
    phase: ToolPhase = "colhe"
    version: str = "2.0.0"
    idle_latency_ms: int = 10

    def __init__(
        self,
        *,
        settings: SearchSettings | None = None,
        metrics: ToolMetrics | None = None,
    ) -> None:
        self.settings = settings or resolve_settings()
        self.metrics = metrics or ToolMetrics()

    @abstractmethod
    def run(self, payload: Any) -> dict[str, Any]:
        """Run the engine on *payload* and return the JSON-ready output."""

    def execute(self, payload: Any) -> ToolOutput:
        start = time.perf_counter()
        self.metrics.record_start()
        try:
            output = self.run(payload)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            self.metrics.record_failure(duration_ms)
            logger.exception("tool execution failed", tool=self.name, duration_ms=duration_ms)
            return self._envelope(
                success=False,
                error=str(exc) or f"{self.name} failed",
                duration_ms=duration_ms,
            )

        duration_ms = (time.perf_counter() - start) * 1000
        self.metrics.record_success(duration_ms)
        logger.info("tool executed", tool=self.name, duration_ms=round(duration_ms, 3))
        return self._envelope(success=True, output=output, duration_ms=duration_ms)

    def health_check(self) -> ToolHealth:
        snapshot = self.metrics.snapshot()
        return ToolHealth(
            tool_name=self.name,
            status="healthy" if snapshot.is_healthy else "degraded",
            last_check=datetime.now(timezone.utc),
            avg_latency_ms=snapshot.avg_latency_ms(self.idle_latency_ms),
            success_rate=round(snapshot.success_rate, 2),
        )

    def _envelope(
        self,
        *,
        success: bool,
        duration_ms: float,
        output: dict[str, Any] | None = None,
        error: str | None = None,
    ) -> ToolOutput:
        return ToolOutput(
            tool_id=self.id,
            tool_name=self.name,
            success=success,
            output=output,
            error=error,
            duration_ms=int(duration_ms),
            timestamp=datetime.now(timezone.utc),
        )


class HybridSearchTool(SearchTool):
    """Rank an ad hoc document list against a query."""

    id = "T8"
    name = "HybridSearch"
    idle_latency_ms = 9

    def run(self, payload: Any) -> dict[str, Any]:
        request = HybridSearchRequest.from_payload(payload)
        index = DocumentIndex()
        index.upsert_many(request.documents)
        engine = HybridQueryEngine(
            index, embedding_provider=self.settings.query_embedding_provider()
        )
        return engine.search(request.to_query()).to_dict()


class EmbeddingLookupTool(SearchTool):
    """Look up the nearest records in an index kept for the tool's lifetime."""

    id = "T11"
    name = "EmbeddingLookup"
    idle_latency_ms = 11

    def __init__(
        self,
        *,
        settings: SearchSettings | None = None,
        metrics: ToolMetrics | None = None,
        index: DocumentIndex | None = None,
    ) -> None:
        super().__init__(settings=settings, metrics=metrics)
        if index is None:
            index = DocumentIndex(require_text=False, require_embedding=True)
        self.index = index
        self.engine = IndexLookupEngine(
            self.index, embedding_provider=self.settings.index_embedding_provider()
        )

    def load(self, records: Any) -> int:
        """Upsert raw records into the persistent index."""
        stored = self.index.upsert_many(records)
        logger.info("index records loaded", tool=self.name, stored=stored, size=self.index.size())
        return stored

    def run(self, payload: Any) -> dict[str, Any]:
        request = EmbeddingLookupRequest.from_payload(payload)
        if request.index is not None:
            self.load(request.index)
        return self.engine.search(request.to_query()).to_dict()
