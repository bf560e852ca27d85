"""Deterministic Spanish helpers: conjugation, approximate IPA, number words.

Pure functions with no network or model dependency.
"""
from __future__ import annotations

from profesor.services.spanish.constants import PERSONS, SUPPORTED_TENSES
from profesor.services.spanish.conjugation import (
    ConjugationResult,
    ConjugationRow,
    conjugate,
    format_conjugation_table,
)
from profesor.services.spanish.numbers import NumberPart, NumberResult, number_to_spanish
from profesor.services.spanish.phonetics import PhoneticResult, to_approximate_ipa

__all__ = [
    "PERSONS",
    "SUPPORTED_TENSES",
    "ConjugationResult",
    "ConjugationRow",
    "conjugate",
    "format_conjugation_table",
    "NumberPart",
    "NumberResult",
    "number_to_spanish",
    "PhoneticResult",
    "to_approximate_ipa",
]
