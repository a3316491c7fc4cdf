"""
Two-tier case retrieval over the SQLite case store.

Tier 1: FTS5 ranked search with the extracted OR-expression (best rank first).
Tier 2: category lookup keyed by the classified intent (newest first).

The store is opened read-only; every lookup uses its own short-lived
connection so concurrent requests never share a cursor.
"""
from __future__ import annotations

import logging
import os
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from models import CaseRecord

from .intent import Intent, category_for
from .search_terms import extract_search_terms

logger = logging.getLogger("guidance.retrieval")

MAX_RESULTS = 3
DB_TIMEOUT = float(os.environ.get("LEGAL_CASES_DB_TIMEOUT", "5.0"))


class StoreUnavailable(RuntimeError):
    """The case store could not be opened or queried."""


class SearchBackendFailure(RuntimeError):
    """The FTS index rejected the search expression."""


def _to_records(rows: list[sqlite3.Row]) -> list[CaseRecord]:
    try:
        return [CaseRecord.from_row(r) for r in rows]
    except ValidationError as e:
        raise StoreUnavailable(f"Malformed case row in store: {e}") from e


class CaseStore:
    """Read-only access to the `cases` table and its `cases_fts` index."""

    def __init__(self, db_path: str | Path, timeout: float = DB_TIMEOUT):
        self.db_path = Path(db_path)
        self.timeout = timeout

    def connect(self) -> sqlite3.Connection:
        if not self.db_path.exists():
            raise StoreUnavailable(f"Case store not found at {self.db_path}")
        try:
            conn = sqlite3.connect(
                self.db_path.resolve().as_uri() + "?mode=ro",
                uri=True,
                timeout=self.timeout,
                check_same_thread=False,
            )
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA query_only = ON")
        except sqlite3.Error as e:
            raise StoreUnavailable(f"Cannot open case store {self.db_path}: {e}") from e
        return conn

    def search_ranked(self, expression: str, limit: int = MAX_RESULTS) -> list[CaseRecord]:
        """FTS5 search ordered by rank (best first)."""
        conn = self.connect()
        try:
            rows = conn.execute(
                """
                SELECT c.*, rank
                FROM cases_fts
                JOIN cases c ON cases_fts.rowid = c.rowid
                WHERE cases_fts MATCH ?
                ORDER BY rank
                LIMIT ?
                """,
                (expression, limit),
            ).fetchall()
        except sqlite3.OperationalError as e:
            raise SearchBackendFailure(str(e)) from e
        except sqlite3.Error as e:
            raise StoreUnavailable(str(e)) from e
        finally:
            conn.close()
        return _to_records(rows)

    def by_category(self, category: str, limit: int = MAX_RESULTS) -> list[CaseRecord]:
        """Cases of one category, newest first."""
        conn = self.connect()
        try:
            rows = conn.execute(
                "SELECT * FROM cases WHERE category = ? ORDER BY year DESC LIMIT ?",
                (category, limit),
            ).fetchall()
        except sqlite3.Error as e:
            raise StoreUnavailable(str(e)) from e
        finally:
            conn.close()
        return _to_records(rows)

    def count(self) -> int:
        conn = self.connect()
        try:
            return conn.execute("SELECT COUNT(*) FROM cases").fetchone()[0]
        except sqlite3.Error as e:
            raise StoreUnavailable(str(e)) from e
        finally:
            conn.close()

    def categories(self) -> dict[str, int]:
        conn = self.connect()
        try:
            rows = conn.execute(
                "SELECT category, COUNT(*) AS n FROM cases GROUP BY category ORDER BY n DESC"
            ).fetchall()
        except sqlite3.Error as e:
            raise StoreUnavailable(str(e)) from e
        finally:
            conn.close()
        return {r["category"]: r["n"] for r in rows}


@dataclass
class RetrievalResult:
    cases: list[CaseRecord] = field(default_factory=list)
    tier: str = "none"  # search | fallback | none
    expression: str = ""
    category: str | None = None

    @property
    def found(self) -> bool:
        return bool(self.cases)


def retrieve(store: CaseStore, query: str, intent: Intent, limit: int = MAX_RESULTS) -> RetrievalResult:
    """
    Look up precedent cases for a classified query.

    Raises StoreUnavailable if the store itself fails; a rejected search
    expression only skips to the category fallback.
    """
    expression = extract_search_terms(query)
    logger.info("Search terms: %s", expression or "<none>")

    if expression:
        try:
            cases = store.search_ranked(expression, limit)
        except SearchBackendFailure as e:
            logger.warning("FTS5 error, falling back: %s", e)
        else:
            logger.info("Found %d matches via FTS5", len(cases))
            if cases:
                return RetrievalResult(cases=cases, tier="search", expression=expression)

    category = category_for(intent)
    cases = store.by_category(category, limit)
    logger.info("Using fallback: %s cases (%d)", category, len(cases))
    return RetrievalResult(
        cases=cases,
        tier="fallback" if cases else "none",
        expression=expression,
        category=category,
    )
