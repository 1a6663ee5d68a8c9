"""
In-memory copy-on-write document index.

Writers serialize on a lock and publish a fresh immutable snapshot after every
change. Readers only pick up the latest published tuple, so a query never sees
a half-applied write and never holds up a writer.
"""

from __future__ import annotations

import threading
from dataclasses import asdict, replace
from typing import Any, Iterable

import structlog

from ..embeddings import HashEmbeddingProvider
from .base import DocumentRecord

logger = structlog.get_logger(__name__)


class DocumentIndex:
    """Id-keyed document store with stable insertion-ordered snapshots."""

    def __init__(
        self,
        *,
        require_text: bool = True,
        require_embedding: bool = False,
        embedding_provider: HashEmbeddingProvider | None = None,
    ) -> None:
        self.require_text = require_text
        self.require_embedding = require_embedding
        self.embedding_provider = embedding_provider
        self._write_lock = threading.Lock()
        self._records: dict[str, DocumentRecord] = {}
        self._snapshot: tuple[DocumentRecord, ...] = ()

    def __len__(self) -> int:
        return len(self._snapshot)

    def upsert(self, document: DocumentRecord) -> bool:
        """Insert *document* or replace the record that shares its id.

        The record goes through the same normalization as ``upsert_many``;
        returns ``False`` when it is skipped as malformed. A replaced record
        keeps its original position in snapshot order.
        """
        record = DocumentRecord.from_raw(
            asdict(document),
            require_text=self.require_text,
            require_embedding=self.require_embedding,
        )
        if record is None:
            logger.debug("skipped malformed record", doc_id=document.id)
            return False
        self._publish([self._prepare(record)])
        return True

    def upsert_many(self, records: Any) -> int:
        """Normalize raw mappings and store the valid ones in a single write.

        Non-list input and malformed entries are skipped without error.
        """
        if not isinstance(records, (list, tuple)):
            return 0
        prepared: list[DocumentRecord] = []
        for raw in records:
            record = DocumentRecord.from_raw(
                raw,
                require_text=self.require_text,
                require_embedding=self.require_embedding,
            )
            if record is not None:
                prepared.append(self._prepare(record))
        if prepared:
            self._publish(prepared)
        skipped = len(records) - len(prepared)
        if skipped:
            logger.debug("skipped malformed records", stored=len(prepared), skipped=skipped)
        return len(prepared)

    def snapshot(self) -> tuple[DocumentRecord, ...]:
        """Return the current records in insertion order."""
        return self._snapshot

    def size(self) -> int:
        return len(self._snapshot)

    def get(self, doc_id: str) -> DocumentRecord | None:
        for record in self._snapshot:
            if record.id == doc_id:
                return record
        return None

    def clear(self) -> None:
        with self._write_lock:
            self._records = {}
            self._snapshot = ()

    def _prepare(self, document: DocumentRecord) -> DocumentRecord:
        if document.embedding or self.embedding_provider is None:
            return document
        return replace(
            document,
            embedding=tuple(self.embedding_provider.embed_query(document.text)),
        )

    def _publish(self, documents: Iterable[DocumentRecord]) -> None:
        with self._write_lock:
            records = dict(self._records)
            for document in documents:
                records[document.id] = document
            self._records = records
            self._snapshot = tuple(records.values())
