"""End-to-end tests of GuidancePipeline.answer over a tmp case store."""
from __future__ import annotations

import re

import pytest

from guidance_stack import CaseStore, GateThresholds, GuidancePipeline
from guidance_stack.vocabulary import (
    CLARIFICATION_DISCLAIMER,
    GIBBERISH_MESSAGE,
    LANGUAGE_REJECTION,
    NO_MATCH_MESSAGE,
    OFF_TOPIC_MESSAGE,
)
from models import (
    AnswerPayload,
    ClarificationPayload,
    ErrorPayload,
    UnableToAnswerPayload,
)

AUDIT_RE = re.compile(r"audit_\d+_[0-9a-f]{8}")


@pytest.fixture()
def pipeline(case_db):
    return GuidancePipeline(CaseStore(case_db))


# ── Gate outcomes ────────────────────────────────────────────


def test_regional_script_payload(pipeline):
    data = pipeline.answer("पुलिस ने मुझे गिरफ्तार किया").to_json()
    assert data == {
        "needsClarification": True,
        "clarification": {
            "question": LANGUAGE_REJECTION["question"],
            "suggestions": list(LANGUAGE_REJECTION["suggestions"]),
            "reason": "language",
            "message": LANGUAGE_REJECTION["message"],
        },
        "disclaimer": LANGUAGE_REJECTION["disclaimer"],
    }


def test_gibberish_payload(pipeline):
    payload = pipeline.answer("asdfghjkl qwrtyp zxcvbnm")
    assert isinstance(payload, UnableToAnswerPayload)
    data = payload.to_json()
    assert data["unableToAnswer"] is True
    assert data["message"]["title"] == GIBBERISH_MESSAGE["title"]
    assert data["message"]["futureNote"] == GIBBERISH_MESSAGE["futureNote"]
    assert AUDIT_RE.fullmatch(data["auditId"])


def test_off_topic_payload(pipeline):
    data = pipeline.answer("What is the best recipe for chocolate cake").to_json()
    assert data["unableToAnswer"] is True
    assert data["message"]["title"] == OFF_TOPIC_MESSAGE["title"]
    assert data["message"]["suggestions"] == list(OFF_TOPIC_MESSAGE["suggestions"])


@pytest.mark.parametrize("query", [None, "", "help"])
def test_empty_and_vague_queries_are_off_topic(pipeline, query):
    data = pipeline.answer(query).to_json()
    assert data["message"]["title"] == OFF_TOPIC_MESSAGE["title"]


def test_clarification_payload(pipeline):
    data = pipeline.answer("bail").to_json()
    assert data["needsClarification"] is True
    assert data["clarification"]["reason"] == "incomplete"
    assert data["clarification"]["question"] == 'Can you provide more context about "bail"?'
    assert "message" not in data["clarification"]
    assert data["disclaimer"] == CLARIFICATION_DISCLAIMER


def test_ambiguous_payload(pipeline):
    payload = pipeline.answer("I was arrested and want bail")
    assert isinstance(payload, ClarificationPayload)
    assert payload.clarification.reason == "ambiguous"


def test_thresholds_flow_into_gates():
    strict = GuidancePipeline(None, thresholds=GateThresholds(max_token_len=5))
    payload = strict.answer("police arrested")
    assert payload.message.title == GIBBERISH_MESSAGE["title"]


# ── Answers ──────────────────────────────────────────────────


def test_arrest_answer(pipeline):
    payload = pipeline.answer("Police arrested me without showing warrant")
    assert isinstance(payload, AnswerPayload)
    data = payload.to_json()
    assert data["intent"] == "arrest"
    assert 1 <= len(data["sources"]) <= 3
    assert len(data["process"]["steps"]) == 4
    assert 1 <= len(data["scamFlags"]) <= 3
    assert AUDIT_RE.fullmatch(data["auditId"])


def test_bail_answer_uses_bail_case(pipeline):
    payload = pipeline.answer("Bail application denied by sessions")
    assert isinstance(payload, AnswerPayload)
    assert payload.intent == "bail"
    assert payload.sources[0].category == "Bail"
    assert payload.process.steps[1].basis.startswith("Based on ")
    assert [f.severity for f in payload.scam_flags] == ["HIGH"]


def test_no_match_payload(no_bail_db):
    payload = GuidancePipeline(CaseStore(no_bail_db)).answer("Bail application denied by sessions")
    assert isinstance(payload, UnableToAnswerPayload)
    assert payload.message.title == NO_MATCH_MESSAGE["title"]
    assert payload.message.future_note == NO_MATCH_MESSAGE["futureNote"]


# ── Failures ─────────────────────────────────────────────────


def test_missing_store_is_error(tmp_path, caplog):
    pipeline = GuidancePipeline(CaseStore(tmp_path / "missing.db"))
    payload = pipeline.answer("Police arrested me without showing warrant")
    assert isinstance(payload, ErrorPayload)
    assert payload.to_json() == {
        "error": "Internal server error",
        "disclaimer": "⚠️ NOT LEGAL ADVICE - CONSULT LAWYER",
    }
    assert "Case store unavailable" in caplog.text


def test_no_store_configured_is_error():
    payload = GuidancePipeline(None).answer("Police arrested me without showing warrant")
    assert isinstance(payload, ErrorPayload)


def test_gates_do_not_touch_store(tmp_path):
    # gate outcomes never need the store
    pipeline = GuidancePipeline(CaseStore(tmp_path / "missing.db"))
    assert isinstance(pipeline.answer("bail"), ClarificationPayload)


def test_malformed_row_is_error(malformed_db, caplog):
    payload = GuidancePipeline(CaseStore(malformed_db)).answer("warrant checklist")
    assert isinstance(payload, ErrorPayload)
    assert "Case store unavailable" in caplog.text
