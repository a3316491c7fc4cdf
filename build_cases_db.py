#!/usr/bin/env python3
"""
Build the SQLite FTS5 case store from a tabular export of precedent cases.

Reads from:
  - a TSV file with columns case_id, title, year, court, category, url,
    key_holding, legal_sections, practical_takeaway
  - or a directory of Parquet shards with the same columns

Produces:
  - data/legal_cases.db (SQLite with FTS5 full-text search)

The DB schema matches what guidance_stack.retrieval expects.

Usage:
    python3 build_cases_db.py --tsv data/legal_cases_2020_2025.tsv
    python3 build_cases_db.py --parquet data/parquet --db /tmp/cases.db
    python3 build_cases_db.py --tsv data/cases.tsv --full-rebuild
"""
from __future__ import annotations

import argparse
import csv
import logging
import re
import sqlite3
import time
from pathlib import Path
from typing import Iterable, Iterator

from pydantic import ValidationError

from db_schema import INSERT_COLUMNS, INSERT_OR_REPLACE_SQL, SCHEMA_SQL
from models import CaseRecord

logger = logging.getLogger("build_cases_db")

BATCH_SIZE = 50
MAX_KEYWORDS = 100
MIN_KEYWORD_LEN = 4

KEYWORD_STOP_WORDS = frozenset({
    "this", "that", "with", "from", "have", "been", "were", "their",
    "there", "where", "which", "these", "those", "will", "would", "could",
    "should", "about", "after", "before", "under", "over", "such", "also",
})

# ── Text cleaning ────────────────────────────────────────────

_HTML_TAG_RE = re.compile(r"<[^>]+>")
_MULTI_SPACE_RE = re.compile(r"\s+")
_NON_WORD_RE = re.compile(r"[^\w\s]")


def _clean_text(text: str | None) -> str:
    """Strip HTML tags and collapse whitespace."""
    if not text:
        return ""
    text = _HTML_TAG_RE.sub(" ", str(text))
    return _MULTI_SPACE_RE.sub(" ", text).strip()


def extract_keywords(case: dict) -> str:
    """Searchable keyword blob: unique content words from the descriptive fields."""
    text = " ".join(
        case.get(f) or ""
        for f in ("title", "key_holding", "practical_takeaway", "category", "legal_sections")
    ).lower()
    words = [
        w for w in _NON_WORD_RE.sub(" ", text).split()
        if len(w) >= MIN_KEYWORD_LEN and w not in KEYWORD_STOP_WORDS
    ]
    return " ".join(list(dict.fromkeys(words))[:MAX_KEYWORDS])


def to_case_record(row: dict, row_number: int) -> CaseRecord:
    """Normalize one raw export row into a CaseRecord."""
    case = {
        "id": (row.get("case_id") or row.get("id") or "").strip()
        or f"case_{int(time.time() * 1000)}_{row_number}",
        "title": _clean_text(row.get("title")),
        "year": row.get("year"),
        "court": _clean_text(row.get("court")),
        "category": _clean_text(row.get("category")),
        "url": (row.get("url") or "").strip(),
        "key_holding": _clean_text(row.get("key_holding")),
        "legal_sections": _clean_text(row.get("legal_sections")),
        "practical_takeaway": _clean_text(row.get("practical_takeaway")),
    }
    record = CaseRecord(**case)
    return record.model_copy(update={"keywords": extract_keywords(record.model_dump())})


def insert_cases(conn: sqlite3.Connection, records: list[CaseRecord]) -> int:
    values = [tuple(getattr(r, col) for col in INSERT_COLUMNS) for r in records]
    with conn:
        conn.executemany(INSERT_OR_REPLACE_SQL, values)
    return len(values)


def read_tsv(path: Path) -> Iterator[dict]:
    with open(path, encoding="utf-8", newline="") as f:
        yield from csv.DictReader(f, delimiter="\t")


def read_parquet(parquet_dir: Path) -> Iterator[dict]:
    import pyarrow.parquet as pq

    for pf in sorted(parquet_dir.glob("*.parquet")):
        table = pq.read_table(pf)
        for batch in table.to_batches():
            yield from batch.to_pylist()


def import_rows(conn: sqlite3.Connection, rows: Iterable[dict]) -> tuple[int, int]:
    """Insert rows in batches. Returns (imported, skipped)."""
    imported = 0
    skipped = 0
    batch: list[CaseRecord] = []
    for n, row in enumerate(rows, start=1):
        try:
            batch.append(to_case_record(row, n))
        except ValidationError as e:
            logger.warning(f"Skipping row {n}: {e}")
            skipped += 1
            continue
        if len(batch) >= BATCH_SIZE:
            imported += insert_cases(conn, batch)
            logger.info(f"  Inserted {imported} cases...")
            batch = []
    if batch:
        imported += insert_cases(conn, batch)
    return imported, skipped


def open_database(db_path: Path, full_rebuild: bool = False) -> sqlite3.Connection:
    if full_rebuild and db_path.exists():
        db_path.unlink()
        logger.info(f"Removed existing database {db_path}")
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    # REPLACE deletes the old row; the delete trigger must fire to keep FTS in sync
    conn.execute("PRAGMA recursive_triggers = ON")
    conn.executescript(SCHEMA_SQL)
    return conn


def verify_database(conn: sqlite3.Connection) -> dict:
    """Row counts for the table and its index, plus a sample ranked query."""
    cases = conn.execute("SELECT COUNT(*) FROM cases").fetchone()[0]
    fts = conn.execute("SELECT COUNT(*) FROM cases_fts").fetchone()[0]
    sample = conn.execute(
        """
        SELECT c.id, c.title, rank
        FROM cases_fts
        JOIN cases c ON cases_fts.rowid = c.rowid
        WHERE cases_fts MATCH 'arrest warrant'
        ORDER BY rank
        LIMIT 3
        """
    ).fetchall()
    return {"cases": cases, "fts": fts, "sample": [r["id"] for r in sample]}


def build_database(
    db_path: Path,
    tsv_path: Path | None = None,
    parquet_dir: Path | None = None,
    full_rebuild: bool = False,
) -> dict:
    if tsv_path is None and parquet_dir is None:
        raise ValueError("Provide a TSV file or a Parquet directory")

    t0 = time.time()
    conn = open_database(db_path, full_rebuild=full_rebuild)
    try:
        imported = skipped = 0
        if tsv_path is not None:
            logger.info(f"Reading TSV file: {tsv_path}")
            i, s = import_rows(conn, read_tsv(tsv_path))
            imported += i
            skipped += s
        if parquet_dir is not None:
            logger.info(f"Reading Parquet shards: {parquet_dir}")
            i, s = import_rows(conn, read_parquet(parquet_dir))
            imported += i
            skipped += s

        stats = verify_database(conn)
    finally:
        conn.close()

    stats.update(imported=imported, skipped=skipped)
    logger.info(
        f"Import complete in {time.time() - t0:.1f}s: {imported} imported, {skipped} skipped, "
        f"{stats['cases']} in table, {stats['fts']} in FTS index"
    )
    if stats["cases"] != stats["fts"]:
        logger.warning("Case table and FTS index row counts differ")
    logger.info(f"Sample 'arrest warrant' matches: {stats['sample']}")
    return stats


def main():
    parser = argparse.ArgumentParser(description="Build the FTS5 case store")
    parser.add_argument("--tsv", type=str, default=None, help="TSV export of cases")
    parser.add_argument("--parquet", type=str, default=None, help="Directory of Parquet shards")
    parser.add_argument(
        "--db", type=str, default="data/legal_cases.db",
        help="Database path (default: data/legal_cases.db)"
    )
    parser.add_argument(
        "--full-rebuild", action="store_true",
        help="Delete the existing database before importing"
    )
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args()
    if not args.tsv and not args.parquet:
        parser.error("one of --tsv or --parquet is required")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    build_database(
        Path(args.db),
        tsv_path=Path(args.tsv) if args.tsv else None,
        parquet_dir=Path(args.parquet) if args.parquet else None,
        full_rebuild=args.full_rebuild,
    )


if __name__ == "__main__":
    main()
