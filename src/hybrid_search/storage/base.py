"""
Index interfaces and record models.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from ..coercion import coerce_metadata, coerce_text, finite_floats


@dataclass(frozen=True)
class DocumentRecord:
    """A normalized document held by an index."""

    id: str
    text: str
    embedding: tuple[float, ...] = ()
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_raw(
        cls,
        raw: Any,
        *,
        require_text: bool = True,
        require_embedding: bool = False,
    ) -> DocumentRecord | None:
        """Build a record from a loosely typed mapping.

        Returns ``None`` when the id is blank, or when a required text or
        embedding is missing after normalization.
        """
        if not isinstance(raw, Mapping):
            return None
        doc_id = coerce_text(raw.get("id")).strip()
        if not doc_id:
            return None
        text = coerce_text(raw.get("text"))
        if require_text and not text:
            return None
        embedding = finite_floats(raw.get("embedding"))
        if require_embedding and not embedding:
            return None
        return cls(
            id=doc_id,
            text=text,
            embedding=embedding,
            metadata=coerce_metadata(raw.get("metadata")),
        )


class IndexBackend(Protocol):
    """Protocol for document stores that queries read snapshots from."""

    def upsert(self, document: DocumentRecord) -> bool:
        """Insert or fully replace the record with the same id. Return False if skipped."""

    def upsert_many(self, records: Any) -> int:
        """Normalize and store raw records, skipping malformed ones. Return count stored."""

    def snapshot(self) -> tuple[DocumentRecord, ...]:
        """Return the current records in insertion order."""

    def size(self) -> int:
        """Return the number of stored records."""

    def get(self, doc_id: str) -> DocumentRecord | None:
        """Get a record by id."""

    def clear(self) -> None:
        """Remove every record."""
