"""Document index backends."""

from .base import DocumentRecord, IndexBackend
from .memory import DocumentIndex

__all__ = [
    "DocumentRecord",
    "IndexBackend",
    "DocumentIndex",
]
