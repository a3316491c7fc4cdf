"""
Schema for precedent cases and the guidance response payloads.

CaseRecord mirrors one row of the `cases` table (see db_schema.py).
The payload models are what POST /api/query returns; JSON keys are
camelCase, so every model is dumped with by_alias=True.
"""

from __future__ import annotations

import re
import sqlite3
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DISCLAIMER = "⚠️ NOT LEGAL ADVICE"

# Categories the seeded corpus uses. The fallback lookup only ever asks for
# the first four.
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")

CASE_CATEGORIES = (
    "False Arrest",
    "Bail",
    "Police Misconduct",
    "Criminal Procedure",
    "General",
)


class CaseRecord(BaseModel):
    """A single precedent case as stored in the case table."""

    id: str = Field(..., description="Unique case identifier (e.g., 'case_017')")
    title: str = Field("Untitled Case", description="Case name as reported")
    year: Optional[int] = Field(None, description="Year of the judgment")
    court: str = Field("", description="Deciding court")
    category: str = Field(
        "General",
        description="Topic bucket: False Arrest, Bail, Police Misconduct, "
        "Criminal Procedure, General",
    )
    url: str = Field("", description="Link to the judgment text")
    key_holding: str = Field("", description="Ratio of the judgment in one or two sentences")
    legal_sections: str = Field("", description="Statutory/constitutional provisions relied on")
    practical_takeaway: str = Field("", description="What a person in this situation should do")
    keywords: str = Field("", description="Precomputed keyword blob indexed for search")

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("case id must be non-empty")
        return v

    @field_validator("year", mode="before")
    @classmethod
    def validate_year(cls, v):
        if v is None or v == "":
            return None
        # leading integer, so "2019 (SC)" and "2014.0" both give the year
        m = _LEADING_INT_RE.match(str(v))
        return int(m.group(1)) if m else None

    @field_validator("title", mode="before")
    @classmethod
    def default_title(cls, v):
        return str(v) if v else "Untitled Case"

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, v):
        return str(v) if v else "General"

    @field_validator(
        "court", "url", "key_holding", "legal_sections",
        "practical_takeaway", "keywords",
        mode="before",
    )
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else str(v)

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> CaseRecord:
        data = dict(row)
        data.pop("rank", None)
        return cls(**data)


# ============================================================
# Response payloads
# ============================================================


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Clarification(BaseModel):
    question: str
    suggestions: list[str]
    reason: str
    message: Optional[str] = None


class ClarificationPayload(_Payload):
    """Shapes (a) language and (d) needs-clarification."""

    needs_clarification: Literal[True] = Field(True, alias="needsClarification")
    clarification: Clarification
    disclaimer: str


class UnableMessage(_Payload):
    title: str
    explanation: str
    suggestions: list[str]
    future_note: str = Field(..., alias="futureNote")
    disclaimer: str


class UnableToAnswerPayload(_Payload):
    """Shapes (b) gibberish, (c) off-topic, and the no-match outcome."""

    unable_to_answer: Literal[True] = Field(True, alias="unableToAnswer")
    message: UnableMessage
    audit_id: str = Field(..., alias="auditId")


class ProcessStep(BaseModel):
    step: int
    action: str
    basis: str


class Process(BaseModel):
    steps: list[ProcessStep]


class ScamFlag(BaseModel):
    name: str
    indicator: str
    counter: str
    severity: Literal["CRITICAL", "HIGH"]


class Source(BaseModel):
    title: str
    year: Optional[int] = None
    holding: str
    url: str
    category: str


class AnswerPayload(_Payload):
    """Shape (e): the full guidance answer."""

    disclaimer: str = DISCLAIMER
    intent: str
    process: Process
    scam_flags: list[ScamFlag] = Field(..., alias="scamFlags")
    sources: list[Source]
    audit_id: str = Field(..., alias="auditId")


class ErrorPayload(_Payload):
    """Generic internal-error outcome (store unavailable)."""

    error: str = "Internal server error"
    disclaimer: str = f"{DISCLAIMER} - CONSULT LAWYER"


GuidancePayload = (
    ClarificationPayload | UnableToAnswerPayload | AnswerPayload | ErrorPayload
)
