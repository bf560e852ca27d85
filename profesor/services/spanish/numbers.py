"""Integers 0–9999 to Spanish words, with the decomposition used."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from profesor.services.spanish.constants import HUNDREDS, MAX_NUMBER, TEENS, TENS, UNITS

# Fused 21–29 forms; the rest of the decade is "veinti" + unit word.
_TWENTIES_FUSED: dict[int, str] = {1: "veintiún", 2: "veintidós", 3: "veintitrés"}


@dataclass(frozen=True)
class NumberPart:
    part: str
    meaning: str


@dataclass(frozen=True)
class NumberResult:
    spanish: str
    parts: tuple[NumberPart, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "spanish": self.spanish,
            "parts": [{"part": p.part, "meaning": p.meaning} for p in self.parts],
        }


def _twenties(unit: int) -> str:
    return _TWENTIES_FUSED.get(unit, f"veinti{UNITS[unit]}")


def number_to_spanish(n: int) -> NumberResult:
    """Spell ``n`` in Spanish.

    Raises:
        ValueError: ``n`` is not an integer in [0, 9999].
    """
    if isinstance(n, bool) or not isinstance(n, int) or not 0 <= n <= MAX_NUMBER:
        raise ValueError(f"n must be an integer in [0, {MAX_NUMBER}], got {n!r}")

    if n == 100:
        return NumberResult("cien", (NumberPart("cien", "one hundred"),))
    if n < 10:
        return NumberResult(UNITS[n], (NumberPart(UNITS[n], "unit"),))
    if 10 < n < 20:
        return NumberResult(TEENS[n], (NumberPart(TEENS[n], "11–19"),))

    words: list[str] = []
    parts: list[NumberPart] = []
    remaining = n

    if remaining >= 1000:
        k = remaining // 1000
        word = "mil" if k == 1 else f"{UNITS[k]} mil"
        words.append(word)
        parts.append(NumberPart(word, "thousand"))
        remaining %= 1000

    if remaining >= 100:
        h = remaining // 100
        words.append(HUNDREDS[h])
        parts.append(NumberPart(HUNDREDS[h], "hundreds"))
        remaining %= 100

    if remaining >= 20:
        t, u = divmod(remaining, 10)
        if t == 2 and u > 0:
            word = _twenties(u)
            words.append(word)
            parts.append(NumberPart(word, "twenties merged form"))
        else:
            words.append(f"{TENS[t]} y {UNITS[u]}" if u else TENS[t])
            parts.append(NumberPart(TENS[t], "tens"))
            if u:
                parts.append(NumberPart(UNITS[u], "unit"))
    elif remaining > 0:
        if remaining == 10:
            word = "diez"
        elif remaining in TEENS:
            word = TEENS[remaining]
        else:
            word = UNITS[remaining]
        words.append(word)
        parts.append(NumberPart(word, "unit/ten"))

    return NumberResult(" ".join(words), tuple(parts))
