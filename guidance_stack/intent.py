"""
Topic intent classification by keyword overlap.

Each intent owns a keyword list (vocabulary.INTENT_KEYWORDS); the score is
the number of those keywords found as substrings of the lower-cased query.
Highest score wins, earlier-declared intents win ties, and an all-zero
score means GENERAL.
"""
from __future__ import annotations

from enum import Enum

from .vocabulary import INTENT_KEYWORDS


class Intent(str, Enum):
    ARREST = "arrest"
    BAIL = "bail"
    POLICE_MISCONDUCT = "police_misconduct"
    FALSE_ACCUSATION = "false_accusation"
    LEGAL_PROCEDURE = "legal_procedure"
    GENERAL = "general"


# Category the fallback lookup reads for each intent.
INTENT_CATEGORIES: dict[Intent, str] = {
    Intent.ARREST: "False Arrest",
    Intent.BAIL: "Bail",
    Intent.POLICE_MISCONDUCT: "Police Misconduct",
    Intent.FALSE_ACCUSATION: "False Arrest",
    Intent.LEGAL_PROCEDURE: "Criminal Procedure",
}
DEFAULT_CATEGORY = "False Arrest"


def score_intents(query: str) -> list[tuple[Intent, int]]:
    """Keyword-overlap score per topic intent, in declaration order."""
    normalized = (query or "").lower()
    return [
        (Intent(name), sum(1 for kw in keywords if kw in normalized))
        for name, keywords in INTENT_KEYWORDS
    ]


def classify_intent(query: str) -> Intent:
    best, best_score = Intent.GENERAL, 0
    for intent, score in score_intents(query):
        # strict > keeps the first-declared intent on ties
        if score > best_score:
            best, best_score = intent, score
    return best


def category_for(intent: Intent) -> str:
    return INTENT_CATEGORIES.get(intent, DEFAULT_CATEGORY)
