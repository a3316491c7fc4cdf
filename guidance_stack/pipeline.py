"""
End-to-end guidance pipeline: gates → intent → retrieval → composition.

Every branch of ``GuidancePipeline.answer`` yields one of the payload
models in models.py; store failures become an ErrorPayload.
"""
from __future__ import annotations

import logging

from models import (
    Clarification,
    ClarificationPayload,
    ErrorPayload,
    GuidancePayload,
    UnableMessage,
    UnableToAnswerPayload,
)

from .composer import compose_answer, new_audit_id
from .gates import (
    DEFAULT_THRESHOLDS,
    GateThresholds,
    Gibberish,
    LanguageRejected,
    NeedsClarification,
    OffTopic,
    Verdict,
    run_gates,
)
from .retrieval import CaseStore, StoreUnavailable, retrieve
from .vocabulary import (
    CLARIFICATION_DISCLAIMER,
    GIBBERISH_MESSAGE,
    LANGUAGE_REJECTION,
    NO_MATCH_MESSAGE,
    OFF_TOPIC_MESSAGE,
)

logger = logging.getLogger("guidance.pipeline")


def language_payload() -> ClarificationPayload:
    return ClarificationPayload(
        clarification=Clarification(
            question=LANGUAGE_REJECTION["question"],
            suggestions=list(LANGUAGE_REJECTION["suggestions"]),
            reason="language",
            message=LANGUAGE_REJECTION["message"],
        ),
        disclaimer=LANGUAGE_REJECTION["disclaimer"],
    )


def clarification_payload(verdict: NeedsClarification) -> ClarificationPayload:
    return ClarificationPayload(
        clarification=Clarification(
            question=verdict.question,
            suggestions=list(verdict.suggestions),
            reason=verdict.reason,
        ),
        disclaimer=CLARIFICATION_DISCLAIMER,
    )


def unable_payload(message) -> UnableToAnswerPayload:
    return UnableToAnswerPayload(
        message=UnableMessage(
            title=message["title"],
            explanation=message["explanation"],
            suggestions=list(message["suggestions"]),
            future_note=message["futureNote"],
            disclaimer=message["disclaimer"],
        ),
        audit_id=new_audit_id(),
    )


class GuidancePipeline:
    def __init__(self, store: CaseStore | None, thresholds: GateThresholds = DEFAULT_THRESHOLDS):
        self.store = store
        self.thresholds = thresholds

    def classify(self, query: str) -> Verdict:
        return run_gates(query, self.thresholds)

    def answer(self, query: str | None) -> GuidancePayload:
        query = query or ""
        logger.info("Query received: %r", query)

        verdict = self.classify(query)
        if isinstance(verdict, LanguageRejected):
            return language_payload()
        if isinstance(verdict, Gibberish):
            return unable_payload(GIBBERISH_MESSAGE)
        if isinstance(verdict, OffTopic):
            return unable_payload(OFF_TOPIC_MESSAGE)
        if isinstance(verdict, NeedsClarification):
            return clarification_payload(verdict)

        intent = verdict.intent  # Classified
        logger.info("Intent classified: %s", intent.value)

        if self.store is None:
            logger.error("No case store configured")
            return ErrorPayload()
        try:
            result = retrieve(self.store, query, intent)
        except StoreUnavailable:
            logger.exception("Case store unavailable")
            return ErrorPayload()

        if not result.found:
            logger.info("Unable to find relevant cases (category=%s)", result.category)
            return unable_payload(NO_MATCH_MESSAGE)

        return compose_answer(result.cases, intent)
