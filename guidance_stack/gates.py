"""
Query gates: the short-circuiting front half of the guidance pipeline.

Stages, in order:
    1. language gate     : reject regional (non-Latin) scripts
    2. gibberish filter  : reject keyboard noise
    3. relevance check   : reject queries outside the legal domain
    4. clarification     : flag queries too vague to search

Each stage is a function ``(query, thresholds) -> Verdict | None``; the
first stage returning a verdict ends the chain. A query that passes every
gate gets a ``Classified`` verdict carrying its intent.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Callable, Union

from .intent import Intent, classify_intent
from .vocabulary import (
    CLARIFICATION_PROMPTS,
    CLARIFICATION_RULES,
    COMMON_WORDS,
    LEGAL_KEYWORDS,
    LEGAL_QUESTION_PATTERNS,
    NON_ENGLISH_DENYLIST,
    REGIONAL_SCRIPT_RANGES,
    VOWELS,
)

logger = logging.getLogger("guidance.gates")


# ── Verdicts ──────────────────────────────────────────────────


@dataclass(frozen=True)
class LanguageRejected:
    reason: str = "language"


@dataclass(frozen=True)
class Gibberish:
    heuristic: str


@dataclass(frozen=True)
class OffTopic:
    pass


@dataclass(frozen=True)
class NeedsClarification:
    reason: str
    question: str
    suggestions: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Classified:
    intent: Intent


Verdict = Union[LanguageRejected, Gibberish, OffTopic, NeedsClarification, Classified]


# ── Thresholds ────────────────────────────────────────────────


@dataclass(frozen=True)
class GateThresholds:
    max_token_len: int = 25
    min_vowel_ratio: float = 0.10
    max_vowel_ratio: float = 0.80
    min_letters: int = 3
    repeat_run: int = 6
    min_words_for_vocab_check: int = 3
    min_query_length: int = 3

    @classmethod
    def from_env(cls) -> GateThresholds:
        """Read overrides from GIBBERISH_* / CLARIFY_* environment variables."""
        env = os.environ
        defaults = cls()
        return cls(
            max_token_len=int(env.get("GIBBERISH_MAX_TOKEN_LEN", defaults.max_token_len)),
            min_vowel_ratio=float(env.get("GIBBERISH_MIN_VOWEL_RATIO", defaults.min_vowel_ratio)),
            max_vowel_ratio=float(env.get("GIBBERISH_MAX_VOWEL_RATIO", defaults.max_vowel_ratio)),
            min_letters=int(env.get("GIBBERISH_MIN_LETTERS", defaults.min_letters)),
            repeat_run=int(env.get("GIBBERISH_REPEAT_RUN", defaults.repeat_run)),
            min_words_for_vocab_check=int(
                env.get("GIBBERISH_MIN_WORDS", defaults.min_words_for_vocab_check)
            ),
            min_query_length=int(env.get("CLARIFY_MIN_LENGTH", defaults.min_query_length)),
        )


DEFAULT_THRESHOLDS = GateThresholds()


# ── 1. Language gate ──────────────────────────────────────────


def detect_regional_script(query: str) -> str | None:
    """Name of the first regional script found in the query, if any."""
    for ch in query or "":
        cp = ord(ch)
        for name, lo, hi in REGIONAL_SCRIPT_RANGES:
            if lo <= cp <= hi:
                return name
    return None


def is_english(query: str) -> bool:
    """Best-effort: False for regional scripts or denylisted words."""
    if not query:
        return True
    if detect_regional_script(query):
        return False
    return not any(word in query for word in NON_ENGLISH_DENYLIST)


def language_gate(query: str, thresholds: GateThresholds = DEFAULT_THRESHOLDS) -> Verdict | None:
    if is_english(query):
        return None
    logger.info("Language gate: non-English script (%s)", detect_regional_script(query) or "denylist")
    return LanguageRejected()


# ── 2. Gibberish filter ───────────────────────────────────────


def gibberish_heuristic(query: str, thresholds: GateThresholds = DEFAULT_THRESHOLDS) -> str | None:
    """Return the name of the first gibberish heuristic that fires, else None."""
    if not query or len(query.strip()) < 3:
        return None

    normalized = query.lower().strip()
    words = normalized.split()

    if any(len(word) > thresholds.max_token_len for word in words):
        return "long_token"

    # only the vowel ratio needs letters; the other heuristics apply to any text
    letters = re.sub(r"[^a-z]", "", normalized)
    if len(letters) >= thresholds.min_letters:
        vowel_ratio = sum(1 for ch in letters if ch in VOWELS) / len(letters)
        if vowel_ratio < thresholds.min_vowel_ratio or vowel_ratio > thresholds.max_vowel_ratio:
            return "vowel_ratio"

    if re.search(r"(.)\1{%d,}" % (thresholds.repeat_run - 1), normalized):
        return "repeated_char"

    recognized = [w for w in words if len(w) > 2 and w in COMMON_WORDS]
    if len(words) >= thresholds.min_words_for_vocab_check and not recognized:
        return "no_known_words"

    return None


def is_gibberish(query: str, thresholds: GateThresholds = DEFAULT_THRESHOLDS) -> bool:
    return gibberish_heuristic(query, thresholds) is not None


def gibberish_gate(query: str, thresholds: GateThresholds = DEFAULT_THRESHOLDS) -> Verdict | None:
    heuristic = gibberish_heuristic(query, thresholds)
    if heuristic is None:
        return None
    logger.info("Gibberish filter: %s", heuristic)
    return Gibberish(heuristic=heuristic)


# ── 3. Relevance classifier ───────────────────────────────────


def is_legal_query(query: str) -> bool:
    """True if the query names a legal keyword or matches a legal question template."""
    if not query:
        return False
    normalized = query.lower()
    if any(keyword in normalized for keyword in LEGAL_KEYWORDS):
        return True
    return any(pattern.search(query) for pattern in LEGAL_QUESTION_PATTERNS)


def relevance_gate(query: str, thresholds: GateThresholds = DEFAULT_THRESHOLDS) -> Verdict | None:
    if is_legal_query(query):
        return None
    logger.info("Relevance check: off-topic query")
    return OffTopic()


# ── 4. Clarification detector ─────────────────────────────────


def _clarify(reason: str, query: str) -> NeedsClarification:
    question, suggestions = CLARIFICATION_PROMPTS[reason]
    return NeedsClarification(
        reason=reason,
        question=question.format(query=query),
        suggestions=tuple(suggestions),
    )


def detect_clarification(
    query: str, thresholds: GateThresholds = DEFAULT_THRESHOLDS
) -> NeedsClarification | None:
    """First matching clarification rule, or None when the query is searchable."""
    if not query or len(query.strip()) < thresholds.min_query_length:
        return _clarify("empty", query or "")

    for reason, patterns in CLARIFICATION_RULES:
        if any(pattern.search(query) for pattern in patterns):
            return _clarify(reason, query)
    return None


def clarification_gate(query: str, thresholds: GateThresholds = DEFAULT_THRESHOLDS) -> Verdict | None:
    verdict = detect_clarification(query, thresholds)
    if verdict is not None:
        logger.info("Clarification needed: %s", verdict.reason)
    return verdict


# ── Chain ─────────────────────────────────────────────────────

Gate = Callable[[str, GateThresholds], Union[Verdict, None]]

GATES: tuple[tuple[str, Gate], ...] = (
    ("language", language_gate),
    ("gibberish", gibberish_gate),
    ("relevance", relevance_gate),
    ("clarification", clarification_gate),
)


def run_gates(
    query: str,
    thresholds: GateThresholds = DEFAULT_THRESHOLDS,
    gates: tuple[tuple[str, Gate], ...] = GATES,
) -> Verdict:
    """Run the gate chain; a query that passes every gate is classified."""
    for _name, gate in gates:
        verdict = gate(query, thresholds)
        if verdict is not None:
            return verdict
    return Classified(intent=classify_intent(query))
