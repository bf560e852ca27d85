"""Async tool handlers. Each takes validated arguments and returns text."""

from __future__ import annotations

import json
import logging

from profesor.contracts.json_types import JSONObject
from profesor.core.errors import ToolExecutionError
from profesor.core.tools.metadata import ToolHandler
from profesor.services.spanish import (
    conjugate,
    format_conjugation_table,
    number_to_spanish,
    to_approximate_ipa,
)
from profesor.services.web_search import WebSearchClient

logger = logging.getLogger(__name__)


async def conjugate_verb_handler(arguments: JSONObject) -> str:
    verb = str(arguments.get("verb", ""))
    tense = str(arguments.get("tense") or "present")
    result = conjugate(verb, tense)
    if result.is_note:
        return json.dumps(result.to_dict(), ensure_ascii=False)
    return format_conjugation_table(result)


async def spanish_ipa_handler(arguments: JSONObject) -> str:
    word = str(arguments.get("word", ""))
    result = to_approximate_ipa(word)
    if result.note:
        return result.note
    return f'"{word.strip()}" ≈ {result.ipa}'


async def number_to_spanish_handler(arguments: JSONObject) -> str:
    n = arguments.get("n")
    if isinstance(n, bool) or not isinstance(n, int):
        return json.dumps({"note": "n must be an integer."})
    try:
        result = number_to_spanish(n)
    except ValueError as e:
        return json.dumps({"note": str(e)})
    return json.dumps(result.to_dict(), ensure_ascii=False)


def make_web_search_handler(client: WebSearchClient) -> ToolHandler:
    """Bind a handler to a shared ``WebSearchClient``."""

    async def web_search_handler(arguments: JSONObject) -> str:
        query = str(arguments.get("query", "")).strip()
        try:
            return await client.search(query)
        except ToolExecutionError as e:
            logger.warning(f"web_search failed: {e.message}")
            return f"Web search failed: {e.message}."

    return web_search_handler
