"""
Weighted fusion of lexical and vector scores.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from ..coercion import clamp_number, round_to

MatchSource = Literal["text", "vector", "hybrid"]

DEFAULT_TEXT_WEIGHT = 0.6
DEFAULT_VECTOR_WEIGHT = 0.4


@dataclass(frozen=True)
class FusionWeights:
    """Normalized text/vector weights applied to every document of a query."""

    text_weight: float = DEFAULT_TEXT_WEIGHT
    vector_weight: float = DEFAULT_VECTOR_WEIGHT

    @classmethod
    def normalize(cls, text_weight: Any = None, vector_weight: Any = None) -> FusionWeights:
        """Clamp each weight into [0, 1] and scale the pair to sum to 1.

        A pair that sums to 0 falls back to the defaults.
        """
        text = clamp_number(text_weight, 0.0, 1.0, DEFAULT_TEXT_WEIGHT)
        vector = clamp_number(vector_weight, 0.0, 1.0, DEFAULT_VECTOR_WEIGHT)
        total = text + vector
        if total == 0:
            return cls(DEFAULT_TEXT_WEIGHT, DEFAULT_VECTOR_WEIGHT)
        return cls(text / total, vector / total)

    def to_dict(self) -> dict[str, float]:
        return {"text_weight": self.text_weight, "vector_weight": self.vector_weight}


@dataclass(frozen=True)
class FusedScore:
    """Fused score of one document with its rounded inputs and provenance."""

    score: float
    text_score: float
    vector_score: float
    source: MatchSource


def match_source(text_score: float, vector_score: float) -> MatchSource:
    if text_score and vector_score:
        return "hybrid"
    if vector_score:
        return "vector"
    return "text"


def fuse_scores(text_score: float, vector_score: float, weights: FusionWeights) -> FusedScore:
    """Combine raw scores; negative vector scores lower the result."""
    fused = text_score * weights.text_weight + vector_score * weights.vector_weight
    return FusedScore(
        score=round_to(fused, 4),
        text_score=round_to(text_score, 4),
        vector_score=round_to(vector_score, 4),
        source=match_source(text_score, vector_score),
    )
