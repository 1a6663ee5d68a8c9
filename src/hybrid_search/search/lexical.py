"""
Token-overlap scoring.
"""

from __future__ import annotations

from ..tokenizer import tokenize


class LexicalScorer:
    """Score documents by the share of query tokens they contain."""

    def score(self, query_tokens: list[str], doc_text: str) -> float:
        """Return distinct shared tokens divided by the full query token count.

        Repeated query tokens count in the denominator but can only match once,
        so "risk risk" against a document containing "risk" scores 0.5.
        """
        if not query_tokens:
            return 0.0
        shared = set(query_tokens).intersection(tokenize(doc_text))
        return len(shared) / max(1, len(query_tokens))
