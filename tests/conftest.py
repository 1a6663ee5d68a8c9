from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture()
def planning_documents() -> list[dict[str, Any]]:
    """Three short documents where only two mention the query terms."""
    return [
        {"id": "doc-1", "text": "Market forecast and risk assessment for Q3."},
        {"id": "doc-2", "text": "User onboarding guide for enterprise accounts."},
        {"id": "doc-3", "text": "Risk mitigation strategies for supply chain issues."},
    ]


@pytest.fixture()
def vector_records() -> list[dict[str, Any]]:
    """Embedding-only records for the lookup index."""
    return [
        {"id": "vec-1", "embedding": [0.1, 0.2, 0.4, 0.1], "metadata": {"topic": "risk"}},
        {"id": "vec-2", "embedding": [0.9, 0.1, 0.1, 0.2], "metadata": {"topic": "sales"}},
    ]
