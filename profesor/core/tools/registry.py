"""Tool registry: build once per process, then read-only."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Optional

from profesor.config import Settings
from profesor.contracts.llm_types import ToolSchemaDict
from profesor.core.tools.definitions import (
    ALL_TOOL_NAMES,
    CONJUGATE_VERB,
    DESCRIPTIONS,
    NUMBER_TO_SPANISH,
    SCHEMAS,
    SPANISH_IPA,
    WEB_SEARCH,
)
from profesor.core.tools.handlers import (
    conjugate_verb_handler,
    make_web_search_handler,
    number_to_spanish_handler,
    spanish_ipa_handler,
)
from profesor.core.tools.metadata import ToolHandler, ToolSpec
from profesor.services.web_search import WebSearchClient

logger = logging.getLogger(__name__)

ToolRegistry = Mapping[str, ToolSpec]


def _spec(name: str, handler: ToolHandler) -> ToolSpec:
    return ToolSpec(
        name=name,
        description=DESCRIPTIONS[name],
        input_schema=SCHEMAS[name],
        handler=handler,
    )


def build_tool_registry(
    settings: Settings,
    web_search: Optional[WebSearchClient] = None,
    include: Optional[Iterable[str]] = None,
) -> ToolRegistry:
    """
    Build the immutable name → ToolSpec mapping.

    Args:
        settings: Used to construct a ``WebSearchClient`` when none is passed.
        web_search: Shared client for the ``web_search`` tool (the caller owns
            its lifecycle).
        include: Restrict the registry to these tool names (default: all).

    Raises:
        ValueError: ``include`` names a tool that does not exist.
    """
    wanted = tuple(include) if include is not None else ALL_TOOL_NAMES
    unknown = [name for name in wanted if name not in ALL_TOOL_NAMES]
    if unknown:
        raise ValueError(f"Unknown tool(s): {', '.join(unknown)}")

    tools: dict[str, ToolSpec] = {}
    if CONJUGATE_VERB in wanted:
        tools[CONJUGATE_VERB] = _spec(CONJUGATE_VERB, conjugate_verb_handler)
    if SPANISH_IPA in wanted:
        tools[SPANISH_IPA] = _spec(SPANISH_IPA, spanish_ipa_handler)
    if NUMBER_TO_SPANISH in wanted:
        tools[NUMBER_TO_SPANISH] = _spec(NUMBER_TO_SPANISH, number_to_spanish_handler)
    if WEB_SEARCH in wanted:
        client = web_search or WebSearchClient(settings)
        if not client.configured:
            logger.info("web_search registered without a credential; it will answer with a note")
        tools[WEB_SEARCH] = _spec(WEB_SEARCH, make_web_search_handler(client))

    logger.debug(f"Tool registry built: {', '.join(tools)}")
    return MappingProxyType(tools)


def tool_schemas(registry: ToolRegistry) -> list[ToolSchemaDict]:
    """OpenAI tool definitions for every registered tool, in registry order."""
    return [spec.schema() for spec in registry.values()]
