"""
Query understanding and case retrieval for the legal guidance service.

This package provides:
- Ordered query gates (language, gibberish, relevance, clarification)
- Keyword-overlap intent classification
- FTS5 search-term extraction with synonym expansion
- Two-tier retrieval over the SQLite case store
- Composition of the guidance answer payload
"""

from .composer import compose_answer
from .gates import GateThresholds, run_gates
from .intent import Intent, classify_intent
from .pipeline import GuidancePipeline
from .retrieval import CaseStore, SearchBackendFailure, StoreUnavailable, retrieve
from .search_terms import extract_search_terms

__all__ = [
    "CaseStore",
    "GateThresholds",
    "GuidancePipeline",
    "Intent",
    "SearchBackendFailure",
    "StoreUnavailable",
    "classify_intent",
    "compose_answer",
    "extract_search_terms",
    "retrieve",
    "run_gates",
]
