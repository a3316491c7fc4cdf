"""Shared fixtures: small SQLite case stores built from db_schema."""
from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from db_schema import INSERT_COLUMNS, INSERT_OR_REPLACE_SQL, SCHEMA_SQL


def make_case(**overrides) -> dict:
    row = {col: "" for col in INSERT_COLUMNS}
    row.update(
        {
            "id": "placeholder",
            "title": "Untitled Case",
            "year": 2020,
            "court": "Supreme Court of India",
            "category": "General",
            "url": "https://example.invalid/case",
        }
    )
    row.update(overrides)
    return row


CORE_CASES = [
    make_case(
        id="case_001",
        title="D.K. Basu v. State of West Bengal",
        year=1997,
        category="Police Misconduct",
        key_holding="Police must follow custody guidelines including an arrest memo attested by a witness.",
        legal_sections="Article 21, Article 22",
        practical_takeaway="Insist on an arrest memo signed by an independent witness.",
        keywords="custody torture guidelines memo witness",
    ),
    make_case(
        id="case_002",
        title="Arnesh Kumar v. State of Bihar",
        year=2014,
        category="False Arrest",
        key_holding="No automatic arrest for offences punishable up to seven years; police must record reasons.",
        legal_sections="Section 41 CrPC",
        practical_takeaway="Ask police to record the reasons for arrest in writing.",
        keywords="arrest warrant reasons checklist",
    ),
    make_case(
        id="case_003",
        title="Joginder Kumar v. State of UP",
        year=1994,
        category="False Arrest",
        key_holding="",
        legal_sections="Article 21",
        practical_takeaway="",
        keywords="justified informed relative",
    ),
    make_case(
        id="case_004",
        title="Lalita Kumari v. Government of UP",
        year=2013,
        category="Criminal Procedure",
        key_holding="Registration of FIR is mandatory for cognizable offences.",
        legal_sections="Section 154 CrPC",
        practical_takeaway="If police refuse your FIR, send it to the Superintendent of Police.",
        keywords="fir registration cognizable",
    ),
]

BAIL_CASES = [
    make_case(
        id="case_005",
        title="Sanjay Chandra v. CBI",
        year=2011,
        category="Bail",
        key_holding="Pre-trial detention is not punishment; seriousness alone does not justify denial.",
        legal_sections="Section 437 CrPC",
        practical_takeaway="Point out how long you have been in custody when applying.",
        keywords="detention punishment seriousness",
    ),
    make_case(
        id="case_006",
        title="Satender Kumar Antil v. CBI",
        year=2022,
        category="Bail",
        key_holding="Bail is the rule and jail the exception.",
        legal_sections="Section 41A CrPC",
        practical_takeaway="Apply for regular bail citing the bail-is-the-rule principle.",
        keywords="rule exception jail",
    ),
]


def build_store(db_path: Path, cases: list[dict]) -> Path:
    conn = sqlite3.connect(db_path)
    conn.executescript(SCHEMA_SQL)
    conn.executemany(
        INSERT_OR_REPLACE_SQL,
        [tuple(c[col] for col in INSERT_COLUMNS) for c in cases],
    )
    conn.commit()
    conn.close()
    return db_path


@pytest.fixture()
def case_db(tmp_path: Path) -> Path:
    return build_store(tmp_path / "legal_cases.db", CORE_CASES + BAIL_CASES)


@pytest.fixture()
def no_bail_db(tmp_path: Path) -> Path:
    return build_store(tmp_path / "no_bail.db", CORE_CASES)


# NULL is accepted in a non-INTEGER primary key column
ORPHAN_CASE = make_case(
    id=None,
    title="Orphan row",
    year=2023,
    category="False Arrest",
    keywords="checklist orphan",
)


@pytest.fixture()
def malformed_db(tmp_path: Path) -> Path:
    return build_store(tmp_path / "malformed.db", CORE_CASES + [ORPHAN_CASE])
