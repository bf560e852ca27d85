"""Verb conjugation for the present and preterite indicative.

Irregular table first, then the regular -ar/-er/-ir ending tables.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from profesor.services.spanish.constants import ENDINGS, IRREGULARS, PERSONS, SUPPORTED_TENSES

VERB_GROUPS: tuple[str, ...] = ("ar", "er", "ir")


@dataclass(frozen=True)
class ConjugationRow:
    person: str
    form: str


@dataclass(frozen=True)
class ConjugationResult:
    """Either a six-row table or a note explaining why there is none."""
    verb: str = ""
    tense: str = ""
    rows: tuple[ConjugationRow, ...] = ()
    note: Optional[str] = None

    @property
    def is_note(self) -> bool:
        return self.note is not None

    def to_dict(self) -> dict[str, Any]:
        if self.note is not None:
            return {"note": self.note}
        return {
            "verb": self.verb,
            "tense": self.tense,
            "rows": [{"person": r.person, "form": r.form} for r in self.rows],
        }


def _rows(forms: tuple[str, ...]) -> tuple[ConjugationRow, ...]:
    return tuple(ConjugationRow(person, form) for person, form in zip(PERSONS, forms))


def regular_form(stem: str, group: str, tense: str, person_index: int) -> str:
    """One regular form; depends only on its own arguments."""
    return stem + ENDINGS[tense][group][person_index]


def conjugate(verb: str, tense: str = "present") -> ConjugationResult:
    """Conjugate ``verb`` in ``tense`` for all six persons."""
    v = (verb or "").strip().lower()
    t = (tense or "").strip().lower()
    if not v:
        return ConjugationResult(note="No verb provided.")

    irregular = IRREGULARS.get(v, {}).get(t)
    if irregular is not None:
        return ConjugationResult(verb=v, tense=t, rows=_rows(irregular))

    group = v[-2:]
    if group not in VERB_GROUPS:
        return ConjugationResult(note="Only infinitives ending in -ar/-er/-ir are supported.")

    if t not in ENDINGS:
        return ConjugationResult(
            note=f"Unsupported tense '{tense}'. Supported tenses: {', '.join(SUPPORTED_TENSES)}."
        )

    stem = v[:-2]
    forms = tuple(regular_form(stem, group, t, i) for i in range(len(PERSONS)))
    return ConjugationResult(verb=v, tense=t, rows=_rows(forms))


def format_conjugation_table(result: ConjugationResult) -> str:
    """Render a result as a small markdown table (notes are returned as-is)."""
    if result.note is not None:
        return result.note
    lines = [
        f"{result.verb} ({result.tense})",
        "",
        "| person | form |",
        "|---|---|",
    ]
    lines.extend(f"| {row.person} | {row.form} |" for row in result.rows)
    return "\n".join(lines)
