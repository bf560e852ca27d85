"""Question augmentation: tag marker plus a tag-specific instruction."""

from __future__ import annotations

from profesor.core.intent.models import AugmentedPrompt, IntentTag

INSTRUCTIONS: dict[IntentTag, str] = {
    IntentTag.WORD_LOOKUP: (
        "Give a structured lexical breakdown: meaning(s) with part of speech and register, "
        "pronunciation (IPA and syllables with stress), morphology as a small table "
        "(prefix / stem / suffix, gender and number for nouns), origin, 2–4 common "
        "collocations, 2–3 example sentences with English translations, and synonyms or "
        "antonyms where they exist. Use the spanish_ipa tool for the IPA."
    ),
    IntentTag.NUMBER: (
        "Spell the number in Spanish and show how it is built as a small decomposition "
        "table (part → meaning). Use the number_to_spanish tool for the exact words."
    ),
    IntentTag.GRAMMAR: (
        "Explain the rule with the subject pronoun order (yo, tú, él/ella/usted, "
        "nosotros/as, vosotros/as, ellos/ellas/ustedes). When a verb is involved, call the "
        "conjugate_verb tool and show its table; note stem changes or irregulars and give "
        "a memory tip."
    ),
    IntentTag.PRONUNCIATION: (
        "Explain mouth and tongue position in plain English, give minimal pairs and 2–3 "
        "example words, and a simple mnemonic. Use the spanish_ipa tool for example words."
    ),
    IntentTag.GENERAL: "",
}


def augment(question: str, tag: IntentTag) -> AugmentedPrompt:
    """Never fails; ``question`` is always contained in the result's text."""
    return AugmentedPrompt(tag=tag, instruction=INSTRUCTIONS.get(tag, ""), question=question)
