"""Intent classification entrypoints."""

from __future__ import annotations

import logging

from profesor.core.intent.models import IntentResult, IntentTag
from profesor.core.intent.normalization import normalize, tokens
from profesor.core.intent.patterns import RULES

logger = logging.getLogger(__name__)


def _is_single_word(norm: str) -> bool:
    toks = tokens(norm)
    return len(toks) == 1 and toks[0].replace("-", "").isalpha()


def classify_with_reason(question: str) -> IntentResult:
    """Tag a question and report which rule decided it."""
    norm = normalize(question)

    for rule in RULES:
        if rule.pattern.search(norm):
            return IntentResult(rule.tag, f"rule:{rule.name}")

    if _is_single_word(norm):
        return IntentResult(IntentTag.WORD_LOOKUP, "single_token")

    return IntentResult(IntentTag.GENERAL, "no_match")


def classify(question: str) -> IntentTag:
    """Deterministic and total: every string maps to exactly one tag."""
    result = classify_with_reason(question)
    logger.debug(f"classified as {result.tag.value} ({result.reason})")
    return result.tag
