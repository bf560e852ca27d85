"""
Tool names, descriptions and input schemas (JSON Schema subset).

Every schema is closed (``additionalProperties: false``); the validator
rejects unexpected fields, wrong JSON types, and values outside
``minimum``/``maximum``/``minLength``/``enum``.
"""

from __future__ import annotations

from profesor.contracts.llm_types import ToolParametersDict
from profesor.services.spanish.constants import MAX_NUMBER, SUPPORTED_TENSES

CONJUGATE_VERB = "conjugate_verb"
SPANISH_IPA = "spanish_ipa"
NUMBER_TO_SPANISH = "number_to_spanish"
WEB_SEARCH = "web_search"

DESCRIPTIONS: dict[str, str] = {
    CONJUGATE_VERB: (
        "Conjugate a Spanish infinitive (-ar/-er/-ir, plus ser, ir, estar, tener, haber) "
        "for all six persons in the present or preterite. Returns a small table."
    ),
    SPANISH_IPA: (
        "Approximate IPA for a Spanish word (Castilian-leaning, no stress marks)."
    ),
    NUMBER_TO_SPANISH: (
        "Convert an integer 0–9999 into Spanish words and return pieces for a small table."
    ),
    WEB_SEARCH: (
        "Search the web for facts the other tools cannot provide (usage, etymology, "
        "cultural notes). Returns a short numbered list of sources."
    ),
}

SCHEMAS: dict[str, ToolParametersDict] = {
    CONJUGATE_VERB: {
        "type": "object",
        "properties": {
            "verb": {"type": "string", "description": "Infinitive, e.g. hablar", "minLength": 1},
            "tense": {
                "type": "string",
                "description": "Tense to conjugate (default present)",
                "enum": list(SUPPORTED_TENSES),
            },
        },
        "required": ["verb"],
        "additionalProperties": False,
    },
    SPANISH_IPA: {
        "type": "object",
        "properties": {
            "word": {"type": "string", "description": "A single Spanish word"},
        },
        "required": ["word"],
        "additionalProperties": False,
    },
    NUMBER_TO_SPANISH: {
        "type": "object",
        "properties": {
            "n": {
                "type": "integer",
                "description": f"Integer between 0 and {MAX_NUMBER}",
                "minimum": 0,
                "maximum": MAX_NUMBER,
            },
        },
        "required": ["n"],
        "additionalProperties": False,
    },
    WEB_SEARCH: {
        "type": "object",
        "properties": {
            "query": {"type": "string", "description": "Search query", "minLength": 1},
        },
        "required": ["query"],
        "additionalProperties": False,
    },
}

ALL_TOOL_NAMES: tuple[str, ...] = (CONJUGATE_VERB, SPANISH_IPA, NUMBER_TO_SPANISH, WEB_SEARCH)
