"""
Input sanitisation for questions before they reach the model.

Strips:
  - C0/C1 control characters except TAB, LF, CR
  - Zero-width and invisible formatting characters (ZWSP, ZWJ, BOM, bidi overrides)
  - Any literal <user_question> / </user_question> tags, which delimit the
    question inside the prompt

Preserves all printable Unicode, including accents, ñ, ¿ and ¡.
Length limits are enforced at the request boundary, not here.
"""

import re
import unicodedata

# C0/C1 control chars except TAB (09), LF (0A), CR (0D)
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f\x80-\x9f]")

# ZWSP..RLM, bidi overrides, invisible operators, deprecated formatting, BOM
_INVISIBLE_RE = re.compile(
    r"[\u200b-\u200f\u202a-\u202e\u2060-\u2064\u206a-\u206f\ufeff]"
)

_BLANK_LINES_RE = re.compile(r"\n{3,}")

_DELIMITER_RE = re.compile(r"</?\s*user_question\s*>", re.IGNORECASE)


def normalise_user_input(raw: str) -> str:
    """NFC-normalise a question and strip invisible or delimiter characters."""
    text = unicodedata.normalize("NFC", raw)
    text = _CONTROL_RE.sub("", text)
    text = _INVISIBLE_RE.sub("", text)
    text = _DELIMITER_RE.sub("", text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _BLANK_LINES_RE.sub("\n\n", text)
    text = "\n".join(line.rstrip() for line in text.split("\n"))
    return text.strip()
