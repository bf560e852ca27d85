"""
Tests for the bounded agent loop (profesor/core/orchestrator.py).

The backend is scripted (tests/fakes.py); tools are the real registry.
"""
from __future__ import annotations

import pytest

from fakes import AlwaysToolLLM, ScriptedLLM, text_reply, tool_reply
from profesor.core.errors import BackendError
from profesor.core.intent import IntentTag, augment
from profesor.core.llm_client import LLMResponse, ToolCall
from profesor.core.orchestrator import (
    AgentState,
    AgentTurn,
    InvalidTransitionError,
    assert_transition,
    run_agent,
)
from profesor.core.prompts import FINAL_ANSWER_INSTRUCTION, system_prompt


def _prompt(question: str = "conjugate hablar in preterite", tag: IntentTag = IntentTag.GRAMMAR):
    return augment(question, tag)


async def _run(llm, registry, *, max_rounds: int = 4, prompt=None):
    return await run_agent(
        prompt or _prompt(),
        llm=llm,
        registry=registry,
        system=system_prompt(),
        max_rounds=max_rounds,
    )


# ---------------------------------------------------------------------------
# Happy paths
# ---------------------------------------------------------------------------


class TestRunAgent:

    async def test_direct_answer_without_tools(self, registry) -> None:
        llm = ScriptedLLM(text_reply("  Hola means hello.  "))
        outcome = await _run(llm, registry)

        assert outcome.answer == "Hola means hello."
        assert outcome.rounds == 0
        assert outcome.steps == ()
        assert not outcome.bound_exceeded
        assert len(llm.calls) == 1

    async def test_first_call_seeds_system_and_wrapped_question(self, registry) -> None:
        llm = ScriptedLLM(text_reply("ok"))
        await _run(llm, registry)

        messages = llm.calls[0]["messages"]
        assert [m["role"] for m in messages] == ["system", "user"]
        assert messages[0]["content"] == system_prompt()
        user = messages[1]["content"]
        assert user.startswith("[GRAMMAR] ")
        assert "<user_question>\nconjugate hablar in preterite\n</user_question>" in user
        assert [t["function"]["name"] for t in llm.calls[0]["tools"]] == list(registry)

    async def test_conjugation_tool_result_observed(self, registry) -> None:
        llm = ScriptedLLM(
            tool_reply("conjugate_verb", verb="hablar", tense="preterite"),
            text_reply("Here is hablar in the preterite. Try it: Ayer yo ___ con mi madre."),
        )
        outcome = await _run(llm, registry)

        assert outcome.rounds == 1
        assert outcome.answer.startswith("Here is hablar")
        assert outcome.steps[0].valid

        second = llm.calls[1]["messages"]
        assistant, tool = second[-2], second[-1]
        assert assistant["role"] == "assistant"
        assert assistant["tool_calls"][0]["function"]["name"] == "conjugate_verb"
        assert tool["role"] == "tool"
        assert tool["tool_call_id"] == "call_1"
        for form in ("hablé", "hablaste", "habló", "hablamos", "hablasteis", "hablaron"):
            assert f"| {form} |" in tool["content"]

    async def test_history_is_sequential(self, registry) -> None:
        llm = ScriptedLLM(
            tool_reply("spanish_ipa", id="c1", word="perro"),
            tool_reply("number_to_spanish", id="c2", n=21),
            text_reply("done"),
        )
        outcome = await _run(llm, registry)

        assert outcome.rounds == 2
        roles = [m["role"] for m in llm.calls[2]["messages"]]
        assert roles == ["system", "user", "assistant", "tool", "assistant", "tool"]
        assert [m.get("tool_call_id") for m in llm.calls[2]["messages"] if m["role"] == "tool"] == ["c1", "c2"]
        # The second call saw exactly one observation.
        assert len(llm.calls[1]["messages"]) == 4

    async def test_only_first_of_several_tool_calls_runs(self, registry) -> None:
        llm = ScriptedLLM(
            LLMResponse(tool_calls=[
                ToolCall(name="spanish_ipa", params={"word": "perro"}, id="a"),
                ToolCall(name="spanish_ipa", params={"word": "gato"}, id="b"),
            ]),
            text_reply("ok"),
        )
        outcome = await _run(llm, registry)
        assert [s.call.id for s in outcome.steps] == ["a"]

    async def test_web_search_without_credential_still_answers(self, registry) -> None:
        llm = ScriptedLLM(tool_reply("web_search", query="etimología de almohada"), text_reply("From Arabic."))
        outcome = await _run(llm, registry)
        assert outcome.answer == "From Arabic."
        assert "no search credential" in outcome.steps[0].observation

    async def test_empty_final_text_falls_back_to_partial(self, registry) -> None:
        llm = ScriptedLLM(
            tool_reply("spanish_ipa", content="Let me check the sound.", word="perro"),
            text_reply("   "),
        )
        outcome = await _run(llm, registry)
        assert outcome.answer == "Let me check the sound."


# ---------------------------------------------------------------------------
# Argument problems become observations
# ---------------------------------------------------------------------------


class TestInvalidCalls:

    async def test_out_of_range_argument(self, registry) -> None:
        llm = ScriptedLLM(tool_reply("number_to_spanish", n=123456), text_reply("Numbers up to 9999 only."))
        outcome = await _run(llm, registry)

        step = outcome.steps[0]
        assert not step.valid
        assert step.observation.startswith("invalid arguments: n: Value 123456 is out of range")
        assert llm.calls[1]["messages"][-1]["content"] == step.observation
        assert outcome.answer == "Numbers up to 9999 only."

    async def test_unknown_tool(self, registry) -> None:
        llm = ScriptedLLM(tool_reply("translate", text="hola"), text_reply("Hola means hello."))
        outcome = await _run(llm, registry)
        assert outcome.steps[0].observation == "unknown tool 'translate'"
        assert outcome.rounds == 1

    async def test_undecodable_arguments(self, registry) -> None:
        bad = LLMResponse(tool_calls=[
            ToolCall(name="spanish_ipa", params={}, id="x", arguments_error="arguments are not valid JSON"),
        ])
        llm = ScriptedLLM(bad, text_reply("ok"))
        outcome = await _run(llm, registry)
        assert outcome.steps[0].observation == "invalid arguments: arguments are not valid JSON"


# ---------------------------------------------------------------------------
# Termination
# ---------------------------------------------------------------------------


class TestBound:

    @pytest.mark.parametrize("max_rounds", [1, 2, 4])
    async def test_always_tool_backend_terminates(self, registry, max_rounds: int) -> None:
        llm = AlwaysToolLLM()
        outcome = await _run(llm, registry, max_rounds=max_rounds)

        assert outcome.bound_exceeded
        assert outcome.rounds == max_rounds
        assert len(outcome.steps) == max_rounds
        # max_rounds tool rounds, the call that hit the bound, then one forced final call.
        assert len(llm.calls) == max_rounds + 2

    async def test_forced_final_call_offers_no_tools(self, registry) -> None:
        llm = AlwaysToolLLM()
        await _run(llm, registry, max_rounds=1)
        final = llm.calls[-1]
        assert final["tools"] is None
        assert final["messages"][-1] == {"role": "user", "content": FINAL_ANSWER_INSTRUCTION}

    async def test_forced_final_text_is_the_answer(self, registry) -> None:
        llm = ScriptedLLM(
            tool_reply("number_to_spanish", id="c1", n=1),
            tool_reply("number_to_spanish", id="c2", n=2),
            text_reply("uno, dos"),
        )
        outcome = await _run(llm, registry, max_rounds=1)
        assert outcome.bound_exceeded
        assert outcome.answer == "uno, dos"

    async def test_invalid_calls_count_toward_bound(self, registry) -> None:
        llm = AlwaysToolLLM(name="translate", params={"text": "x"})
        outcome = await _run(llm, registry, max_rounds=3)
        assert outcome.rounds == 3
        assert all(not s.valid for s in outcome.steps)


# ---------------------------------------------------------------------------
# Backend failure
# ---------------------------------------------------------------------------


class TestBackendFailure:

    async def test_first_call_failure_propagates(self, registry) -> None:
        llm = ScriptedLLM(BackendError("Language model unreachable"))
        with pytest.raises(BackendError):
            await _run(llm, registry)

    async def test_failure_after_tool_propagates_without_answer(self, registry) -> None:
        llm = ScriptedLLM(tool_reply("spanish_ipa", content="partial", word="perro"), BackendError("boom"))
        with pytest.raises(BackendError):
            await _run(llm, registry)
        assert len(llm.calls) == 2


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


class TestStateMachine:

    @pytest.mark.parametrize(
        "src, dst",
        [
            (AgentState.START, AgentState.REASONING),
            (AgentState.REASONING, AgentState.TOOL_CALL),
            (AgentState.REASONING, AgentState.FINISH),
            (AgentState.TOOL_CALL, AgentState.OBSERVING),
            (AgentState.OBSERVING, AgentState.REASONING),
            (AgentState.OBSERVING, AgentState.FAILED),
        ],
    )
    def test_allowed(self, src: AgentState, dst: AgentState) -> None:
        assert_transition(src, dst)

    @pytest.mark.parametrize(
        "src, dst",
        [
            (AgentState.START, AgentState.FINISH),
            (AgentState.TOOL_CALL, AgentState.REASONING),
            (AgentState.OBSERVING, AgentState.FINISH),
            (AgentState.FINISH, AgentState.REASONING),
            (AgentState.FAILED, AgentState.FINISH),
        ],
    )
    def test_rejected(self, src: AgentState, dst: AgentState) -> None:
        with pytest.raises(InvalidTransitionError):
            assert_transition(src, dst)

    def test_turn_advance_and_partial_text(self) -> None:
        turn = AgentTurn()
        turn.advance(AgentState.REASONING)
        turn.note_text("  first ")
        turn.note_text("   ")
        turn.note_text(None)
        assert turn.partial_text == "first"
        with pytest.raises(InvalidTransitionError):
            turn.advance(AgentState.OBSERVING)
        assert turn.state == AgentState.REASONING
