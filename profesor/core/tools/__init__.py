"""
Tools the orchestrator may call, and the registry that exposes them.

  conjugate_verb     — six-person table for present/preterite
  spanish_ipa        — approximate IPA for a single word
  number_to_spanish  — integer 0–9999 to words plus decomposition
  web_search         — numbered web results (note when unconfigured)
"""
from __future__ import annotations

from profesor.core.tools.definitions import (
    ALL_TOOL_NAMES,
    CONJUGATE_VERB,
    NUMBER_TO_SPANISH,
    SPANISH_IPA,
    WEB_SEARCH,
)
from profesor.core.tools.metadata import ToolHandler, ToolSpec
from profesor.core.tools.registry import (
    ToolRegistry,
    build_tool_registry,
    tool_schemas,
)

__all__ = [
    "ALL_TOOL_NAMES",
    "CONJUGATE_VERB",
    "NUMBER_TO_SPANISH",
    "SPANISH_IPA",
    "WEB_SEARCH",
    "ToolHandler",
    "ToolSpec",
    "ToolRegistry",
    "build_tool_registry",
    "tool_schemas",
]
