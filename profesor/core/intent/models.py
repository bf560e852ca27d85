"""Dataclass models for intent tagging and question augmentation."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class IntentTag(str, Enum):
    GRAMMAR = "GRAMMAR"
    PRONUNCIATION = "PRONUNCIATION"
    NUMBER = "NUMBER"
    WORD_LOOKUP = "WORD_LOOKUP"
    GENERAL = "GENERAL"


@dataclass(frozen=True)
class Rule:
    """A pattern-based intent rule, tested against the normalised question."""
    name: str
    tag: IntentTag
    pattern: re.Pattern[str]


@dataclass(frozen=True)
class IntentResult:
    """Result of classification, with the rule that fired (for logs)."""
    tag: IntentTag
    reason: str


@dataclass(frozen=True)
class AugmentedPrompt:
    """A question rewritten for the model: tag marker, instruction, original text."""
    tag: IntentTag
    instruction: str
    question: str

    @property
    def text(self) -> str:
        if not self.instruction:
            return self.question
        return f"[{self.tag.value}] {self.instruction}\n\n{self.question}"
