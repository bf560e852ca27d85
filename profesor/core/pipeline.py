"""
Question pipeline.

Flow:
1) Sanitise and validate the question (InputError before any backend call)
2) Tag it (intent.classify) and rewrite it (intent.augment)
3) Run the bounded agent loop against the backend with the tool registry

The response shape is decided later by the assembler.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from profesor.config import Settings
from profesor.core.errors import InputError
from profesor.core.intent import AugmentedPrompt, IntentTag, augment, classify_with_reason
from profesor.core.llm_client import LLMClient
from profesor.core.orchestrator import AgentOutcome, run_agent
from profesor.core.prompts import system_prompt
from profesor.core.sanitize import normalise_user_input
from profesor.core.tools.registry import ToolRegistry
from profesor.core.tracing import get_trace_context, trace_span

logger = logging.getLogger(__name__)

MISSING_QUESTION = "Missing question"


@dataclass(frozen=True)
class PipelineOutput:
    tag: IntentTag
    prompt: AugmentedPrompt
    outcome: AgentOutcome


def prepare_question(raw: object, max_chars: int) -> str:
    """
    Boundary checks for a question.

    Raises:
        InputError: not a string, empty after trimming, or longer than ``max_chars``.
    """
    if not isinstance(raw, str):
        raise InputError(MISSING_QUESTION)
    question = normalise_user_input(raw)
    if not question:
        raise InputError(MISSING_QUESTION)
    if len(question) > max_chars:
        raise InputError(f"Question too long (max {max_chars} characters)")
    return question


async def run_pipeline(
    question: str,
    *,
    llm: LLMClient,
    registry: ToolRegistry,
    settings: Settings,
) -> PipelineOutput:
    """Classify, augment and answer one question."""
    question = prepare_question(question, settings.max_question_chars)
    ctx = get_trace_context()

    with trace_span(ctx, "classify", {"question_length": len(question)}) as span:
        result = classify_with_reason(question)
        span.set_attribute("intent", result.tag.value)
        span.set_attribute("reason", result.reason)

    prompt = augment(question, result.tag)
    outcome = await run_agent(
        prompt,
        llm=llm,
        registry=registry,
        system=system_prompt(),
        max_rounds=settings.max_tool_rounds,
    )
    logger.info(
        f"[{ctx.short_id}] answered {result.tag.value} question: "
        f"{outcome.rounds} tool round(s), bound_exceeded={outcome.bound_exceeded}",
        extra=ctx.summary(),
    )
    return PipelineOutput(tag=result.tag, prompt=prompt, outcome=outcome)
