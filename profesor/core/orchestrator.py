"""
Agent orchestrator: a bounded reason → call → observe loop.

States:
    START      — prompt, system instructions and registry received; history seeded
    REASONING  — backend decides: final text (→ FINISH) or one tool call (→ TOOL_CALL)
    TOOL_CALL  — arguments validated; the tool runs, or the violation becomes the observation
    OBSERVING  — observation appended to history as a ``tool`` message; back to REASONING
    FINISH     — terminal; the backend's text is the answer
    FAILED     — terminal; a backend error aborted the request

Invariants:
    1. At most ``max_rounds`` tool calls per request, valid or not.
    2. When the bound is hit, one final backend call is made with no tools
       offered; the best partial text is the fallback answer.
    3. Backend errors are never retried and never turned into an answer.
    4. History is strictly sequential: each tool result is observed before
       the next reasoning step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from profesor.contracts.llm_types import ChatMessage
from profesor.core.errors import ToolArgumentError
from profesor.core.intent.models import AugmentedPrompt
from profesor.core.llm_client import LLMClient, ToolCall, enforce_single_tool
from profesor.core.prompts import FINAL_ANSWER_INSTRUCTION, user_message
from profesor.core.tool_validation import validate_tool_call
from profesor.core.tools.registry import ToolRegistry, tool_schemas
from profesor.core.tracing import get_trace_context, log_tool_call, trace_span

logger = logging.getLogger(__name__)


class AgentState(str, Enum):
    START = "start"
    REASONING = "reasoning"
    TOOL_CALL = "tool_call"
    OBSERVING = "observing"
    FINISH = "finish"
    FAILED = "failed"


TERMINAL_STATES: frozenset[AgentState] = frozenset({AgentState.FINISH, AgentState.FAILED})

_TRANSITIONS: dict[AgentState, frozenset[AgentState]] = {
    AgentState.START: frozenset({AgentState.REASONING, AgentState.FAILED}),
    AgentState.REASONING: frozenset({AgentState.TOOL_CALL, AgentState.FINISH, AgentState.FAILED}),
    AgentState.TOOL_CALL: frozenset({AgentState.OBSERVING, AgentState.FAILED}),
    AgentState.OBSERVING: frozenset({AgentState.REASONING, AgentState.FAILED}),
    AgentState.FINISH: frozenset(),
    AgentState.FAILED: frozenset(),
}


class InvalidTransitionError(Exception):
    """Raised when a state transition violates the state machine."""

    def __init__(self, from_state: AgentState, to_state: AgentState):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(f"Invalid transition: {from_state.value} → {to_state.value}")


def assert_transition(from_state: AgentState, to_state: AgentState) -> None:
    """Raise InvalidTransitionError if ``from_state → to_state`` is not allowed."""
    if to_state not in _TRANSITIONS.get(from_state, frozenset()):
        raise InvalidTransitionError(from_state, to_state)


@dataclass
class ToolStep:
    """One tool call and the observation fed back to the model."""
    call: ToolCall
    observation: str
    valid: bool


@dataclass
class AgentTurn:
    """Per-request orchestrator state. Never shared across requests."""
    state: AgentState = AgentState.START
    messages: list[ChatMessage] = field(default_factory=list)
    steps: list[ToolStep] = field(default_factory=list)
    rounds: int = 0
    bound_exceeded: bool = False
    partial_text: str = ""

    def advance(self, to_state: AgentState) -> None:
        assert_transition(self.state, to_state)
        logger.debug(f"agent: {self.state.value} → {to_state.value}")
        self.state = to_state

    def note_text(self, content: Optional[str]) -> None:
        """Remember the latest non-empty text as the best partial answer."""
        if content and content.strip():
            self.partial_text = content.strip()


@dataclass(frozen=True)
class AgentOutcome:
    answer: str
    steps: tuple[ToolStep, ...]
    rounds: int
    bound_exceeded: bool


def _observation_for_invalid(call: ToolCall, error: ToolArgumentError) -> str:
    if any(e.code == "UNKNOWN_TOOL" for e in error.errors):
        return f"unknown tool '{call.name}'"
    return "invalid arguments: " + "; ".join(str(e) for e in error.errors)


async def _run_tool(call: ToolCall, registry: ToolRegistry) -> ToolStep:
    """Validate and invoke one call. Argument problems become observations."""
    try:
        if call.arguments_error:
            log_tool_call(call.name, call.params, valid=False, error=call.arguments_error)
            return ToolStep(call, f"invalid arguments: {call.arguments_error}", valid=False)

        result = validate_tool_call(call.name, call.params, registry)
        if not result.valid:
            raise ToolArgumentError(call.name, result.errors)

        observation = await registry[call.name].invoke(result.params)
        log_tool_call(call.name, call.params, valid=True)
        return ToolStep(call, observation, valid=True)

    except ToolArgumentError as e:
        log_tool_call(call.name, call.params, valid=False, error=str(e))
        return ToolStep(call, _observation_for_invalid(call, e), valid=False)


async def run_agent(
    prompt: AugmentedPrompt,
    *,
    llm: LLMClient,
    registry: ToolRegistry,
    system: str,
    max_rounds: int,
) -> AgentOutcome:
    """
    Drive the loop for one question and return the final answer text.

    Raises:
        BackendError: the backend failed in any state (turn ends in FAILED).
    """
    turn = AgentTurn(messages=[
        {"role": "system", "content": system},
        {"role": "user", "content": user_message(prompt)},
    ])
    schemas = tool_schemas(registry)
    ctx = get_trace_context()

    try:
        turn.advance(AgentState.REASONING)
        while True:
            with trace_span(ctx, "reasoning", {"round": turn.rounds}):
                response = await llm.chat_completion(turn.messages, tools=schemas or None)
            enforce_single_tool(response)
            turn.note_text(response.content)

            if not response.has_tool_calls:
                turn.advance(AgentState.FINISH)
                return AgentOutcome(
                    answer=(response.content or "").strip() or turn.partial_text,
                    steps=tuple(turn.steps),
                    rounds=turn.rounds,
                    bound_exceeded=False,
                )

            if turn.rounds >= max_rounds:
                turn.bound_exceeded = True
                break

            call = response.tool_calls[0]
            turn.advance(AgentState.TOOL_CALL)
            with trace_span(ctx, "tool_call", {"tool": call.name}):
                step = await _run_tool(call, registry)
            turn.rounds += 1

            turn.advance(AgentState.OBSERVING)
            turn.messages.append({
                "role": "assistant",
                "content": response.content,
                "tool_calls": [call.to_entry()],
            })
            turn.messages.append({
                "role": "tool",
                "tool_call_id": call.id,
                "content": step.observation,
            })
            turn.steps.append(step)
            turn.advance(AgentState.REASONING)

        logger.warning(
            f"Tool-round bound reached ({max_rounds}); forcing a final answer"
        )
        turn.messages.append({"role": "user", "content": FINAL_ANSWER_INSTRUCTION})
        with trace_span(ctx, "final_answer"):
            response = await llm.chat_completion(turn.messages)
        turn.note_text(response.content)
        turn.advance(AgentState.FINISH)
        return AgentOutcome(
            answer=turn.partial_text,
            steps=tuple(turn.steps),
            rounds=turn.rounds,
            bound_exceeded=True,
        )

    except Exception:
        if turn.state not in TERMINAL_STATES:
            turn.advance(AgentState.FAILED)
        raise
