"""
Intent tagging and question augmentation.

Public API:
    classify(question) -> IntentTag
    classify_with_reason(question) -> IntentResult
    augment(question, tag) -> AugmentedPrompt
"""

from profesor.core.intent.augment import INSTRUCTIONS, augment
from profesor.core.intent.models import AugmentedPrompt, IntentResult, IntentTag, Rule
from profesor.core.intent.normalization import normalize
from profesor.core.intent.patterns import RULES
from profesor.core.intent.routing import classify, classify_with_reason

__all__ = [
    "AugmentedPrompt",
    "INSTRUCTIONS",
    "IntentResult",
    "IntentTag",
    "RULES",
    "Rule",
    "augment",
    "classify",
    "classify_with_reason",
    "normalize",
]
