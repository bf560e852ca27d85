"""Approximate IPA for Spanish words (Castilian-leaning, no stress marks)."""
from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Any, Optional

from profesor.services.spanish.constants import PHONETIC_RULES, VOWELS

# Combining marks that carry letter identity in Spanish and survive stripping:
# tilde (ñ) and diaeresis (ü). Acute/grave accents only mark stress.
_KEPT_MARKS = {"\u0303", "\u0308"}


@dataclass(frozen=True)
class PhoneticResult:
    ipa: str
    note: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"ipa": self.ipa}
        if self.note is not None:
            data["note"] = self.note
        return data


def strip_stress_marks(text: str) -> str:
    """Decompose, drop stress accents, recompose (á → a, ñ and ü untouched)."""
    decomposed = unicodedata.normalize("NFD", text)
    kept = "".join(
        ch for ch in decomposed
        if not unicodedata.combining(ch) or ch in _KEPT_MARKS
    )
    return unicodedata.normalize("NFC", kept)


def to_approximate_ipa(word: str) -> PhoneticResult:
    w = (word or "").strip().lower()
    if not w:
        return PhoneticResult(ipa="", note="No word provided.")

    s = strip_stress_marks(w)
    for pattern, replacement in PHONETIC_RULES:
        s = pattern.sub(replacement, s)
    s = "".join(VOWELS.get(ch, ch) for ch in s)
    return PhoneticResult(ipa=f"/{s}/")
