"""
Ranking helpers shared by hybrid search and index lookup.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")


def rank_by_score(
    candidates: Iterable[T],
    *,
    score: Callable[[T], float],
    limit: int,
) -> list[T]:
    """Sort by descending score and apply limit.

    The sort is stable, so equal scores keep their input order.
    """
    ordered = sorted(candidates, key=lambda candidate: -score(candidate))
    return ordered[: max(limit, 1)]
