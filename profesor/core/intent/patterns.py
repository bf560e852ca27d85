"""Ordered pattern rules. First match wins, so list order is the priority."""

from __future__ import annotations

import re

from profesor.core.intent.models import IntentTag, Rule

_PRONOUNS = r"yo|tú|tu|usted|nosotros|nosotras|vosotros|vosotras|ellos|ellas|ustedes"
_DEMONSTRATIVES = r"este|esta|estos|estas|ese|esa|esos|esas|aquel|aquella|aquellos|aquellas"
_ISOLATED_LETTER = r"(?:^|[\s\"'(])(?:ñ|ll|rr|[áéíóúü])(?=$|[\s\"'?.!,)])"

RULES: list[Rule] = [
    # Grammar
    Rule("grammar_vocab", IntentTag.GRAMMAR,
         re.compile(r"\b(conjugat\w*|tenses?|pronouns?|grammar|verbs?|preterite|imperfect|subjunctive"
                    r"|infinitives?|articles?|gender|plurals?|singular|masculine|feminine|demonstratives?)\b")),
    Rule("ser_estar", IntentTag.GRAMMAR, re.compile(r"\b(ser|estar)\b")),
    Rule("subject_pronoun", IntentTag.GRAMMAR, re.compile(rf"\b({_PRONOUNS})\b")),
    Rule("pronoun_order", IntentTag.GRAMMAR, re.compile(r"\bcomes? (after|before)\b")),
    Rule("demonstrative", IntentTag.GRAMMAR, re.compile(rf"\b({_DEMONSTRATIVES})\b")),

    # Pronunciation
    Rule("pronunciation_vocab", IntentTag.PRONUNCIATION,
         re.compile(r"\b(pronounc\w*|pronunciation|sounds?|accents?|ipa|phonetic\w*|stress|roll(ed)?)\b")),
    Rule("isolated_letter", IntentTag.PRONUNCIATION, re.compile(_ISOLATED_LETTER)),

    # Numbers
    Rule("numeric_only", IntentTag.NUMBER, re.compile(r"^[\d\s.,]+\??$")),
    Rule("say_number", IntentTag.NUMBER,
         re.compile(r"\b(say|write|spell|count|read)\b.*\b\d{1,4}\b")),
    Rule("number_in_spanish", IntentTag.NUMBER, re.compile(r"\b\d{1,4}\b.*\bin spanish\b")),
    Rule("number_vocab", IntentTag.NUMBER, re.compile(r"\bnumbers?\b")),

    # Word lookups
    Rule("lexical_vocab", IntentTag.WORD_LOOKUP,
         re.compile(r"\b(mean|means|meaning|definition|define|origin|etymology|etymological"
                    r"|break (it )?down|breakdown|root|prefix|suffix|synonyms?|antonyms?)\b")),
]
