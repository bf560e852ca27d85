"""Reference tables for the Spanish helpers.

Illustrative beginner data, not a complete grammar.
"""
from __future__ import annotations

import re

# Canonical person order. Every conjugation table below follows it.
PERSONS: tuple[str, ...] = (
    "yo",
    "tú",
    "él/ella/usted",
    "nosotros/as",
    "vosotros/as",
    "ellos/ellas/ustedes",
)

SUPPORTED_TENSES: tuple[str, ...] = ("present", "preterite")

ENDINGS: dict[str, dict[str, tuple[str, ...]]] = {
    "present": {
        "ar": ("o", "as", "a", "amos", "áis", "an"),
        "er": ("o", "es", "e", "emos", "éis", "en"),
        "ir": ("o", "es", "e", "imos", "ís", "en"),
    },
    "preterite": {
        "ar": ("é", "aste", "ó", "amos", "asteis", "aron"),
        "er": ("í", "iste", "ió", "imos", "isteis", "ieron"),
        "ir": ("í", "iste", "ió", "imos", "isteis", "ieron"),
    },
}

IRREGULARS: dict[str, dict[str, tuple[str, ...]]] = {
    "ser": {
        "present": ("soy", "eres", "es", "somos", "sois", "son"),
        "preterite": ("fui", "fuiste", "fue", "fuimos", "fuisteis", "fueron"),
    },
    "ir": {
        "present": ("voy", "vas", "va", "vamos", "vais", "van"),
        # same as ser
        "preterite": ("fui", "fuiste", "fue", "fuimos", "fuisteis", "fueron"),
    },
    "estar": {
        "present": ("estoy", "estás", "está", "estamos", "estáis", "están"),
        "preterite": ("estuve", "estuviste", "estuvo", "estuvimos", "estuvisteis", "estuvieron"),
    },
    "tener": {
        "present": ("tengo", "tienes", "tiene", "tenemos", "tenéis", "tienen"),
        "preterite": ("tuve", "tuviste", "tuvo", "tuvimos", "tuvisteis", "tuvieron"),
    },
    "haber": {
        "present": ("he", "has", "ha/hay", "hemos", "habéis", "han"),
        "preterite": ("hube", "hubiste", "hubo", "hubimos", "hubisteis", "hubieron"),
    },
}

# Grapheme → phoneme rules. ORDER IS SIGNIFICANT: digraphs (ch, ll, rr, gü, qu)
# must be consumed before the single-letter rules for r, c, z, h, y.
PHONETIC_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"ch"), "t͡ʃ"),
    (re.compile(r"ll"), "ʝ"),
    (re.compile(r"rr"), "r"),
    (re.compile(r"r(?=[bdgvlrmn])"), "ɾ"),
    (re.compile(r"r"), "r"),
    (re.compile(r"ñ"), "ɲ"),
    (re.compile(r"j"), "x"),
    (re.compile(r"gü"), "ɡw"),
    (re.compile(r"gue"), "ɡe"),
    (re.compile(r"gui"), "ɡi"),
    (re.compile(r"qu"), "k"),
    (re.compile(r"c([ei])"), r"θ\1"),
    (re.compile(r"c"), "k"),
    (re.compile(r"z"), "θ"),
    (re.compile(r"v"), "b"),
    (re.compile(r"h"), ""),
    (re.compile(r"y"), "ʝ"),
    (re.compile(r"x"), "ks"),
)

# Identity mapping; kept explicit as the extension point for vowel quality.
VOWELS: dict[str, str] = {"a": "a", "e": "e", "i": "i", "o": "o", "u": "u"}

# Number words
UNITS: tuple[str, ...] = (
    "cero", "uno", "dos", "tres", "cuatro",
    "cinco", "seis", "siete", "ocho", "nueve",
)
TENS: tuple[str, ...] = (
    "", "diez", "veinte", "treinta", "cuarenta",
    "cincuenta", "sesenta", "setenta", "ochenta", "noventa",
)
TEENS: dict[int, str] = {
    11: "once",
    12: "doce",
    13: "trece",
    14: "catorce",
    15: "quince",
    16: "dieciséis",
    17: "diecisiete",
    18: "dieciocho",
    19: "diecinueve",
}
HUNDREDS: tuple[str, ...] = (
    "", "ciento", "doscientos", "trescientos", "cuatrocientos",
    "quinientos", "seiscientos", "setecientos", "ochocientos", "novecientos",
)

MAX_NUMBER = 9999
