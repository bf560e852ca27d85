"""
Tests for the /api/v1/ask endpoint.

The backend is a ScriptedLLM injected through dependency overrides (see
conftest.py); the tool registry is real.
"""
from __future__ import annotations

import httpx
import pytest

from fakes import text_reply, tool_reply
from profesor.api.routes.ask import get_llm_client
from profesor.core.assembler import AGENT_FAILED, BACKEND_FAILED, BACKEND_TIMED_OUT
from profesor.core.errors import BackendError, BackendTimeoutError
from profesor.core.llm_client import LLMClient
from profesor.main import app

ASK = "/api/v1/ask"


# ---------------------------------------------------------------------------
# Input rejection (no backend call)
# ---------------------------------------------------------------------------


class TestInput:

    @pytest.mark.anyio
    @pytest.mark.parametrize("body", [{"question": ""}, {"question": "   "}, {}, {"other": "x"}])
    async def test_empty_or_missing_question_post(self, client, llm, body) -> None:
        response = await client.post(ASK, json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Missing question"}
        assert llm.calls == []

    @pytest.mark.anyio
    async def test_missing_question_get(self, client, llm) -> None:
        response = await client.get(ASK)
        assert response.status_code == 400
        assert response.json() == {"error": "Missing question"}
        assert llm.calls == []

    @pytest.mark.anyio
    async def test_blank_q(self, client, llm) -> None:
        response = await client.get(ASK, params={"q": "  "})
        assert response.status_code == 400
        assert llm.calls == []

    @pytest.mark.anyio
    async def test_malformed_json(self, client, llm) -> None:
        response = await client.post(ASK, content=b"{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json() == {"error": "Malformed JSON body"}
        assert llm.calls == []

    @pytest.mark.anyio
    async def test_non_object_body(self, client) -> None:
        response = await client.post(ASK, json=["hola"])
        assert response.status_code == 400
        assert response.json() == {"error": "Request body must be a JSON object"}

    @pytest.mark.anyio
    async def test_non_string_question(self, client) -> None:
        response = await client.post(ASK, json={"question": 5})
        assert response.status_code == 400
        assert response.json() == {"error": "Missing question"}

    @pytest.mark.anyio
    async def test_question_too_long(self, client, llm, test_settings) -> None:
        response = await client.post(ASK, json={"question": "a" * (test_settings.max_question_chars + 1)})
        assert response.status_code == 400
        assert "too long" in response.json()["error"]
        assert llm.calls == []

    @pytest.mark.anyio
    @pytest.mark.parametrize("method", ["PUT", "PATCH", "DELETE"])
    async def test_wrong_method(self, client, llm, method: str) -> None:
        response = await client.request(method, ASK, json={"question": "hola"})
        assert response.status_code == 405
        assert response.json() == {"error": "Use GET or POST"}
        assert response.headers["allow"] == "GET, POST"
        assert llm.calls == []


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------


class TestAnswer:

    @pytest.mark.anyio
    async def test_post_answer(self, client, llm) -> None:
        llm.script(text_reply("“Guapo” means good-looking. Try it: Él es muy guapo."))
        response = await client.post(ASK, json={"question": 'What does "guapo" mean?'})
        assert response.status_code == 200
        assert response.json() == {"answer": "“Guapo” means good-looking. Try it: Él es muy guapo."}

    @pytest.mark.anyio
    async def test_get_with_q(self, client, llm) -> None:
        llm.script(text_reply("Hola means hello."))
        response = await client.get(ASK, params={"q": "hola"})
        assert response.status_code == 200
        assert response.json() == {"answer": "Hola means hello."}
        assert "hola" in llm.calls[0]["messages"][1]["content"]

    @pytest.mark.anyio
    async def test_body_wins_over_query(self, client, llm) -> None:
        llm.script(text_reply("ok"))
        await client.post(ASK, params={"q": "from query"}, json={"question": "from body"})
        user = llm.calls[0]["messages"][1]["content"]
        assert "from body" in user
        assert "from query" not in user

    @pytest.mark.anyio
    async def test_query_used_when_body_question_blank(self, client, llm) -> None:
        llm.script(text_reply("ok"))
        response = await client.post(ASK, params={"q": "from query"}, json={"question": ""})
        assert response.status_code == 200
        assert "from query" in llm.calls[0]["messages"][1]["content"]

    @pytest.mark.anyio
    async def test_conjugation_flow(self, client, llm) -> None:
        llm.script(
            tool_reply("conjugate_verb", verb="hablar", tense="preterite"),
            text_reply("hablé, hablaste, habló, hablamos, hablasteis, hablaron"),
        )
        response = await client.post(ASK, json={"question": "conjugate hablar in preterite"})
        assert response.status_code == 200
        tool_message = llm.calls[1]["messages"][-1]
        assert tool_message["role"] == "tool"
        assert "| hablaron |" in tool_message["content"]

    @pytest.mark.anyio
    async def test_web_search_without_credential_still_answers(self, client, llm) -> None:
        llm.script(tool_reply("web_search", query="almohada origin"), text_reply("It comes from Arabic."))
        response = await client.post(ASK, json={"question": "What is the origin of almohada?"})
        assert response.status_code == 200
        assert response.json() == {"answer": "It comes from Arabic."}

    @pytest.mark.anyio
    async def test_empty_model_text_fallback(self, client, llm) -> None:
        llm.script(text_reply(""))
        response = await client.get(ASK, params={"q": "hola"})
        assert response.json() == {"answer": "Sorry, no answer."}


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:

    @pytest.mark.anyio
    async def test_backend_error_is_502(self, client, llm) -> None:
        llm.script(BackendError("Language model request failed", status_code=500, detail="upstream HTTP 500"))
        response = await client.post(ASK, json={"question": "hola"})
        assert response.status_code == 502
        assert response.json() == {"error": BACKEND_FAILED, "detail": "upstream HTTP 500"}

    @pytest.mark.anyio
    async def test_backend_error_after_tool_has_no_partial_answer(self, client, llm) -> None:
        llm.script(tool_reply("spanish_ipa", content="partial", word="perro"), BackendError("boom"))
        response = await client.post(ASK, json={"question": "pronounce perro"})
        assert response.status_code == 502
        assert "answer" not in response.json()

    @pytest.mark.anyio
    async def test_timeout_is_502_with_distinct_message(self, client, llm) -> None:
        llm.script(BackendTimeoutError("Language model request timed out", detail="no response within 30s"))
        response = await client.post(ASK, json={"question": "hola"})
        assert response.status_code == 502
        assert response.json() == {"error": BACKEND_TIMED_OUT, "detail": "no response within 30s"}

    @pytest.mark.anyio
    async def test_unexpected_error_is_generic_500(self, client, llm) -> None:
        llm.script(RuntimeError("secret internals"))
        response = await client.post(ASK, json={"question": "hola"})
        assert response.status_code == 500
        assert response.json() == {"error": AGENT_FAILED}
        assert "secret" not in response.text

    @pytest.mark.anyio
    async def test_unreadable_backend_payload_is_502(self, client, test_settings) -> None:
        payload = {"choices": [{"message": {"content": "hi", "tool_calls": 5}}]}
        http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json=payload)))
        app.dependency_overrides[get_llm_client] = lambda: LLMClient(test_settings, http_client=http)

        response = await client.post(ASK, json={"question": "hola"})
        assert response.status_code == 502
        assert response.json()["error"] == BACKEND_FAILED
        await http.aclose()

    @pytest.mark.anyio
    async def test_rate_limit(self, client) -> None:
        statuses = [(await client.get(ASK)).status_code for _ in range(61)]
        assert statuses[:60] == [400] * 60
        assert statuses[60] == 429
