"""
Compose the guidance answer from matched cases.

Deterministic apart from the audit id: the same cases and intent always
produce the same steps, flags and sources.
"""
from __future__ import annotations

import time
import uuid

from models import (
    DISCLAIMER,
    AnswerPayload,
    CaseRecord,
    Process,
    ProcessStep,
    ScamFlag,
    Source,
)

from .intent import Intent
from .vocabulary import BASELINE_STEPS, DEFAULT_SCAM_FLAGS, FLAGGED_CATEGORIES, GENERIC_SCAM_FLAGS

STEP_OVERRIDE_LEN = 150
DEFAULT_STEP_OVERRIDE_LEN = 100
TITLE_BASIS_LEN = 40
INDICATOR_LEN = 80
MAX_FLAGS = 3
MAX_SOURCES = 3


def new_audit_id() -> str:
    """Per-response token for log correlation."""
    return f"audit_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


def build_steps(cases: list[CaseRecord], intent: Intent) -> list[ProcessStep]:
    """Baseline rights steps, with one step replaced by the top case's takeaway."""
    steps = [
        ProcessStep(step=i, action=action, basis=basis)
        for i, (action, basis) in enumerate(BASELINE_STEPS, start=1)
    ]
    if not cases or not cases[0].practical_takeaway:
        return steps

    top = cases[0]
    takeaway = top.practical_takeaway
    if intent == Intent.BAIL:
        steps[1] = ProcessStep(
            step=2,
            action=takeaway[:STEP_OVERRIDE_LEN],
            basis=f"Based on {top.title[:TITLE_BASIS_LEN]}...",
        )
    elif intent == Intent.POLICE_MISCONDUCT:
        steps[2] = ProcessStep(
            step=3,
            action=takeaway[:STEP_OVERRIDE_LEN],
            basis=f"Legal remedy: {top.legal_sections or 'See case for details'}",
        )
    else:
        steps[1] = steps[1].model_copy(update={"action": takeaway[:DEFAULT_STEP_OVERRIDE_LEN]})
    return steps


def build_scam_flags(cases: list[CaseRecord], intent: Intent) -> list[ScamFlag]:
    """Flags from misconduct/false-arrest cases, else the intent's defaults."""
    flags: list[ScamFlag] = []
    for case in cases:
        if case.category not in FLAGGED_CATEGORIES:
            continue
        flags.append(ScamFlag(
            name=case.category.upper(),
            indicator=(
                case.key_holding[:INDICATOR_LEN] + "..."
                if case.key_holding else "Check for violations"
            ),
            counter=case.practical_takeaway or "Consult lawyer immediately",
            severity="CRITICAL",
        ))

    if not flags:
        defaults = DEFAULT_SCAM_FLAGS.get(intent.value, GENERIC_SCAM_FLAGS)
        flags = [
            ScamFlag(name=name, indicator=indicator, counter=counter, severity=severity)
            for name, indicator, counter, severity in defaults
        ]
    return flags[:MAX_FLAGS]


def format_source(case: CaseRecord) -> Source:
    return Source(
        title=case.title,
        year=case.year,
        holding=case.key_holding or case.practical_takeaway,
        url=case.url,
        category=case.category,
    )


def compose_answer(cases: list[CaseRecord], intent: Intent) -> AnswerPayload:
    return AnswerPayload(
        disclaimer=DISCLAIMER,
        intent=intent.value,
        process=Process(steps=build_steps(cases, intent)),
        scam_flags=build_scam_flags(cases, intent),
        sources=[format_source(c) for c in cases[:MAX_SOURCES]],
        audit_id=new_audit_id(),
    )
