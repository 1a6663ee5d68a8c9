"""
Text normalization shared by lexical scoring and pseudo-embeddings.
"""

from __future__ import annotations

import re


_NON_TOKEN_RE = re.compile(r"[^a-z0-9\s]")


def tokenize(text: str) -> list[str]:
    """Lowercase *text*, blank out punctuation and split on whitespace."""
    return _NON_TOKEN_RE.sub(" ", text.lower()).split()
