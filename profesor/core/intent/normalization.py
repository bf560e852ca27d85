"""Text normalization utilities for intent pattern matching."""

from __future__ import annotations

import re
import unicodedata

_QUOTES = {
    "“": '"', "”": '"', "«": '"', "»": '"',
    "‘": "'", "’": "'",
}
_TOKEN_STRIP = "\"'¿?¡!.,;:()[]"


def normalize(text: str) -> str:
    """NFC, lowercase, straight quotes, single spaces."""
    t = unicodedata.normalize("NFC", text or "").strip().lower()
    for curly, straight in _QUOTES.items():
        t = t.replace(curly, straight)
    return re.sub(r"\s+", " ", t).strip()


def tokens(norm: str) -> list[str]:
    """Whitespace tokens with surrounding punctuation removed; empties dropped."""
    out = []
    for raw in norm.split(" "):
        tok = raw.strip(_TOKEN_STRIP)
        if tok:
            out.append(tok)
    return out
