"""Turn a free-text query into an FTS5 OR-expression."""
from __future__ import annotations

import re

from .vocabulary import STOP_WORDS, SYNONYMS

MAX_SEARCH_TERMS = 20
MIN_TERM_LEN = 3

_NON_WORD_RE = re.compile(r"[^\w\s]")


def extract_terms(query: str) -> list[str]:
    """
    Content terms of the query plus synonym expansions.

    Lower-cases, replaces punctuation with spaces, drops tokens shorter
    than three characters and stop words, then appends the synonyms of
    every surviving token. Duplicates are removed keeping first-seen
    order and the list is capped at MAX_SEARCH_TERMS.
    """
    if not query or not isinstance(query, str):
        return []

    normalized = _NON_WORD_RE.sub(" ", query.lower().strip())
    words = [w for w in normalized.split() if len(w) >= MIN_TERM_LEN and w not in STOP_WORDS]

    expanded = list(words)
    for word in words:
        expanded.extend(SYNONYMS.get(word, ()))

    seen: set[str] = set()
    terms: list[str] = []
    for term in expanded:
        if term in seen:
            continue
        seen.add(term)
        terms.append(term)
    return terms[:MAX_SEARCH_TERMS]


def extract_search_terms(query: str) -> str:
    """FTS5 MATCH expression for the query; empty string when nothing survives."""
    return " OR ".join(extract_terms(query))
