"""
Fixed vocabulary tables for query understanding.

Every classifier in guidance_stack reads its keywords, patterns and
canned texts from here. Tables are tuples / frozensets / read-only
mappings so they can be shared across requests without copying.
Ordered tables (intent keywords, clarification patterns) are tuples of
pairs: the first matching entry wins.
"""
from __future__ import annotations

import re
from types import MappingProxyType

# ── Language gate ─────────────────────────────────────────────

# Unicode blocks of regional Indian scripts (inclusive ranges).
REGIONAL_SCRIPT_RANGES: tuple[tuple[str, int, int], ...] = (
    ("devanagari", 0x0900, 0x097F),
    ("bengali", 0x0980, 0x09FF),
    ("gurmukhi", 0x0A00, 0x0A7F),
    ("gujarati", 0x0A80, 0x0AFF),
    ("tamil", 0x0B80, 0x0BFF),
    ("telugu", 0x0C00, 0x0C7F),
    ("kannada", 0x0C80, 0x0CFF),
    ("malayalam", 0x0D00, 0x0D7F),
)

NON_ENGLISH_DENYLIST: tuple[str, ...] = (
    "मैं", "मुझे", "क्या", "कैसे", "कब", "कहाँ", "पुलिस", "गिरफ्तार",
)

# ── Gibberish filter ──────────────────────────────────────────

VOWELS = frozenset("aeiou")

COMMON_WORDS: frozenset[str] = frozenset({
    "the", "be", "to", "of", "and", "a", "in", "that", "have", "i",
    "it", "for", "not", "on", "with", "he", "as", "you", "do", "at",
    "this", "but", "his", "by", "from", "they", "we", "say", "her", "she",
    "or", "an", "will", "my", "one", "all", "would", "there", "their",
    # legal
    "police", "arrest", "bail", "court", "lawyer", "case", "law", "legal",
    "me", "was", "is", "are", "am", "been", "being", "what", "when", "where",
})

# ── Relevance classifier ──────────────────────────────────────

LEGAL_KEYWORDS: tuple[str, ...] = (
    # people / roles
    "police", "cop", "officer", "constable", "inspector", "authority", "law enforcement",
    "lawyer", "advocate", "attorney", "counsel", "judge", "magistrate", "court",
    # actions
    "arrest", "detained", "custody", "apprehended", "caught", "seized", "imprisoned",
    "bail", "release", "bond", "surety", "parole",
    "charge", "accused", "defendant", "plaintiff", "prosecution", "defense",
    # legal concepts
    "fir", "case", "complaint", "chargesheet", "hearing", "trial", "verdict", "judgment",
    "warrant", "summon", "notice", "subpoena",
    "rights", "law", "legal", "illegal", "crime", "criminal", "offense", "violation",
    # offenses
    "harassment", "assault", "theft", "robbery", "fraud", "cheating", "forgery",
    "murder", "rape", "violence", "abuse", "domestic", "bribe", "corruption", "extortion",
    # documents
    "constitution", "article", "section", "act", "code", "ipc", "bns", "crpc",
    "innocent", "guilty", "evidence", "witness", "testimony", "confession",
    # situations
    "jail", "prison", "lockup", "remand",
    "investigation", "interrogation", "statement",
    "victim", "complainant", "suspect",
)

LEGAL_QUESTION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"can (police|they|i) (arrest|detain|charge)", re.IGNORECASE),
    re.compile(r"what (are|is) my (rights|right)", re.IGNORECASE),
    re.compile(r"how (to|do i) (file|lodge|register) (fir|complaint|case)", re.IGNORECASE),
    re.compile(r"(is it|it is) (legal|illegal|crime|criminal)", re.IGNORECASE),
    re.compile(r"can i (sue|file case|get bail|appeal)", re.IGNORECASE),
    re.compile(r"(was|am|been) (arrested|detained|charged|accused)", re.IGNORECASE),
    re.compile(r"need (lawyer|legal help|legal advice)", re.IGNORECASE),
)

# ── Clarification detector ────────────────────────────────────

VAGUE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^help$", re.IGNORECASE),
    re.compile(r"^what to do$", re.IGNORECASE),
    re.compile(r"^legal advice$", re.IGNORECASE),
    re.compile(r"^tell me$", re.IGNORECASE),
    re.compile(r"^i need help$", re.IGNORECASE),
)

INCOMPLETE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^police$", re.IGNORECASE),
    re.compile(r"^arrest$", re.IGNORECASE),
    re.compile(r"^bail$", re.IGNORECASE),
    re.compile(r"^case$", re.IGNORECASE),
)

AMBIGUOUS_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"arrested.*and.*bail", re.IGNORECASE),
    re.compile(r"police.*money.*case", re.IGNORECASE),
)

# reason -> (question, suggestions). "{query}" is filled with the raw query.
CLARIFICATION_PROMPTS = MappingProxyType({
    "empty": (
        "Could you please describe your legal situation in more detail?",
        (
            'Example: "Police arrested me without showing warrant"',
            'Example: "Bail application was denied"',
            'Example: "Police officer asked for money"',
        ),
    ),
    "vague": (
        "I need more details to help you. Can you describe what happened?",
        (
            "Were you arrested? Describe the circumstances",
            "Do you need information about bail?",
            "Are you facing police harassment?",
        ),
    ),
    "incomplete": (
        'Can you provide more context about "{query}"?',
        (
            "What exactly happened?",
            "When did this occur?",
            "What is your main concern?",
        ),
    ),
    "ambiguous": (
        "Your query covers multiple topics. Which is your primary concern?",
        (
            "Arrest procedures and rights",
            "Bail application process",
            "Police misconduct or harassment",
        ),
    ),
})

# Checked in this order after the empty-query check.
CLARIFICATION_RULES: tuple[tuple[str, tuple[re.Pattern[str], ...]], ...] = (
    ("vague", VAGUE_PATTERNS),
    ("incomplete", INCOMPLETE_PATTERNS),
    ("ambiguous", AMBIGUOUS_PATTERNS),
)

# ── Intent classifier ─────────────────────────────────────────

# Declaration order is the tie-break order.
INTENT_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("arrest", ("arrest", "detained", "custody", "apprehended", "caught", "seized")),
    ("bail", ("bail", "release", "bond", "surety", "parole")),
    ("police_misconduct", ("bribe", "extortion", "torture", "harassment", "money", "beating", "abuse")),
    ("false_accusation", ("false", "fake", "fabricated", "malicious", "wrongful", "innocent")),
    ("legal_procedure", ("court", "hearing", "trial", "chargesheet", "fir", "case", "judge", "magistrate")),
)

# ── Search-term extractor ─────────────────────────────────────

STOP_WORDS: frozenset[str] = frozenset({
    "the", "is", "at", "which", "on", "a", "an", "and", "or", "but", "in", "with",
    "to", "for", "of", "as", "by", "from", "this", "that", "these", "those",
    "was", "were", "been", "being", "have", "has", "had", "do", "does", "did",
    "will", "would", "could", "should", "may", "might", "can", "am", "are",
    "what", "when", "where", "who", "whom", "how", "why", "me", "my", "myself",
    "we", "our", "ours", "ourselves", "you", "your", "yours", "yourself",
})

SYNONYMS = MappingProxyType({
    "arrested": ("detained", "custody", "apprehended", "caught", "seized"),
    "police": ("cop", "officer", "law enforcement", "constable"),
    "bail": ("release", "bond", "surety", "parole"),
    "warrant": ("order", "writ", "authorization"),
    "bribe": ("money", "extortion", "corruption", "payoff"),
    "false": ("fake", "fabricated", "wrongful", "malicious"),
    "lawyer": ("advocate", "attorney", "counsel", "legal advisor"),
    "court": ("magistrate", "judge", "tribunal", "judicial"),
})

# ── Canned response texts ─────────────────────────────────────

LANGUAGE_REJECTION = MappingProxyType({
    "question": "I can only provide guidance in English at this time.",
    "suggestions": (
        "Please rephrase your query in English",
        'Example: "Police arrested me without showing warrant"',
        'Example: "Bail application was denied"',
    ),
    "message": (
        "🌐 I am currently learning to support multiple Indian languages. "
        "For now, please ask your question in English, and I will do my best to help you."
    ),
    "disclaimer": "⚠️ NOT LEGAL ADVICE - English queries only",
})

CLARIFICATION_DISCLAIMER = "⚠️ NOT LEGAL ADVICE - Please provide more details"

_CONSULT_DISCLAIMER = (
    "⚠️ This is NOT legal advice. Always consult a qualified lawyer for your specific situation."
)

GIBBERISH_MESSAGE = MappingProxyType({
    "title": "I cannot understand this query.",
    "explanation": (
        "Your input appears to be random characters or nonsensical text. I need a clear "
        "description of your legal situation in plain English to help you."
    ),
    "suggestions": (
        "🔹 Describe your situation in a complete sentence",
        '🔹 Example: "Police arrested me without showing warrant"',
        '🔹 Example: "My bail application was denied"',
        "🔹 Use normal words to explain what happened",
    ),
    "futureNote": "💡 Tip: I work best when you describe your legal issue in simple, clear English sentences.",
    "disclaimer": _CONSULT_DISCLAIMER,
})

OFF_TOPIC_MESSAGE = MappingProxyType({
    "title": "This doesn't appear to be a legal question.",
    "explanation": (
        "I am a specialized legal guidance tool for Indian law. I can only help with legal "
        "matters like arrests, bail, police conduct, court procedures, and your legal rights."
    ),
    "suggestions": (
        "🔹 I can help with: Police arrests, bail procedures, false accusations",
        "🔹 I can help with: Court hearings, legal rights, FIR filing",
        "🔹 I can help with: Police harassment, legal procedures, criminal cases",
        '🔹 Example: "Police arrested me without showing warrant"',
        '🔹 Example: "How to file FIR for harassment?"',
    ),
    "futureNote": (
        "💡 For non-legal questions, please try a general search engine or appropriate "
        "specialized service."
    ),
    "disclaimer": "⚠️ This tool provides legal information only, not advice on other topics.",
})

NO_MATCH_MESSAGE = MappingProxyType({
    "title": "I apologize, but I cannot provide specific guidance for your query at this moment.",
    "explanation": (
        "I am still learning and expanding my knowledge base. Your question may be too "
        "specific or outside my current expertise."
    ),
    "suggestions": (
        "🔹 Try rephrasing your query with more general terms",
        "🔹 Focus on the main legal issue (arrest, bail, police conduct, etc.)",
        "🔹 Consult a qualified lawyer for immediate assistance",
    ),
    "futureNote": (
        "📚 I am continuously being updated with more cases and better understanding. "
        "Please try again in the future, and I should be able to assist you better."
    ),
    "disclaimer": _CONSULT_DISCLAIMER,
})

# ── Response composer ─────────────────────────────────────────

BASELINE_STEPS: tuple[tuple[str, str], ...] = (
    ("Remain silent", "Article 20(3) - Right against self-incrimination"),
    ("Demand written grounds of arrest", "Article 22(1) - Constitutional right"),
    ("Request magistrate inspection within 24 hours", "Article 22(2)"),
    ("CONSULT LAWYER IMMEDIATELY", "Mandatory for legal protection"),
)

FLAGGED_CATEGORIES: frozenset[str] = frozenset({"Police Misconduct", "False Arrest"})

_NO_WARRANT = ("NO WARRANT", "Refuses to show FIR or grounds of arrest", "Demand written grounds (Art 22)", "CRITICAL")

# intent -> default flags as (name, indicator, counter, severity)
DEFAULT_SCAM_FLAGS = MappingProxyType({
    "arrest": (
        _NO_WARRANT,
        ("NO LAWYER ACCESS", "Denies lawyer during interrogation", "Demand lawyer within 3 hours (Sec 50 BNS)", "CRITICAL"),
    ),
    "police_misconduct": (
        ("EXTORTION", "Officer asks for cash to settle", "File FIR under Sec 170 BNS (Report to CBI)", "CRITICAL"),
        ("TORTURE", "Physical abuse during custody", "Get medical exam + FIR against officer", "CRITICAL"),
    ),
    "bail": (
        ("UNREASONABLE BAIL", "Bail amount exceeds financial capacity", "Petition court to modify bail conditions", "HIGH"),
    ),
})

GENERIC_SCAM_FLAGS: tuple[tuple[str, str, str, str], ...] = (
    _NO_WARRANT,
    ("EXTORTION", "Officer asks for cash to settle", "File FIR under Sec 170 BNS", "CRITICAL"),
    ("DELAYED PRODUCTION", "Not produced before magistrate in 24h", "Demand immediate magistrate inspection", "HIGH"),
)
