"""
Excerpt extraction around the query match.
"""

from __future__ import annotations


SNIPPET_BEFORE = 40
SNIPPET_AFTER = 60
SNIPPET_FALLBACK_LENGTH = 140


def build_snippet(text: str, query: str) -> str:
    """Return the text around the first case-insensitive match of *query*.

    Without a match, the first 140 characters of *text* are returned.
    """
    position = text.lower().find(query.lower())
    if position == -1 or not query:
        return text[:SNIPPET_FALLBACK_LENGTH]
    start = max(0, position - SNIPPET_BEFORE)
    end = min(len(text), position + len(query) + SNIPPET_AFTER)
    return text[start:end].strip()
