"""
LLM client for the Spanish tutor.

Talks to any OpenAI-compatible chat completions endpoint (Groq by default,
OpenRouter as an alternative) with:
- Tool calling in OpenAI function format
- Single-tool enforcement for a strictly sequential loop
- No retries: every failure surfaces as BackendError for the current request
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Optional

import httpx

from profesor.config import Settings
from profesor.contracts.json_types import JSONObject
from profesor.contracts.llm_types import (
    ChatCompletionResponse,
    ChatMessage,
    ChatRequestPayload,
    ToolCallEntry,
    ToolSchemaDict,
    UsageStats,
)
from profesor.core.errors import BackendError, BackendTimeoutError
from profesor.core.tracing import log_llm_call

logger = logging.getLogger(__name__)


@dataclass
class ToolCall:
    """A tool call requested by the model.

    ``arguments_error`` is set when the model's ``arguments`` string could not
    be decoded into a JSON object; ``params`` is then empty.
    """

    name: str
    params: JSONObject
    id: str = ""
    arguments_error: Optional[str] = None

    def to_entry(self) -> ToolCallEntry:
        """OpenAI ``tool_calls`` entry for replaying this call in history."""
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": json.dumps(self.params, ensure_ascii=False)},
        }


@dataclass
class LLMResponse:
    """Response from the LLM."""
    content: Optional[str] = None
    tool_calls: list[ToolCall] = field(default_factory=list)
    finish_reason: Optional[str] = None
    usage: Optional[UsageStats] = None

    @property
    def has_tool_calls(self) -> bool:
        return len(self.tool_calls) > 0


def enforce_single_tool(response: LLMResponse) -> LLMResponse:
    """Keep only the first requested tool call."""
    if len(response.tool_calls) <= 1:
        return response
    dropped = len(response.tool_calls) - 1
    response.tool_calls = response.tool_calls[:1]
    logger.warning(f"Enforced single tool: dropped {dropped} extra calls")
    return response


def _token_count(value: object) -> int:
    """Token count from a usage block; anything non-numeric counts as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)


def _parse_tool_call(raw: object, index: int) -> Optional[ToolCall]:
    if not isinstance(raw, dict):
        return None
    function = raw.get("function")
    if not isinstance(function, dict):
        return None
    name = str(function.get("name") or "")
    call_id = str(raw.get("id") or f"call_{index}")
    args = function.get("arguments", "{}")

    if isinstance(args, dict):
        return ToolCall(name=name, params=args, id=call_id)
    try:
        decoded = json.loads(args) if args else {}
    except (TypeError, ValueError):
        return ToolCall(name=name, params={}, id=call_id, arguments_error="arguments are not valid JSON")
    if not isinstance(decoded, dict):
        return ToolCall(name=name, params={}, id=call_id, arguments_error="arguments must be a JSON object")
    return ToolCall(name=name, params=decoded, id=call_id)


class LLMClient:
    """
    Async client for one OpenAI-compatible backend.

    The underlying ``httpx.AsyncClient`` is created lazily and reused across
    requests; call ``close()`` on shutdown.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.provider = settings.llm_provider
        self.api_key = settings.llm_api_key or ""
        self.model = settings.llm_model
        self.timeout = settings.llm_timeout
        self.temperature = settings.llm_temperature
        self.max_tokens = settings.llm_max_tokens
        self.base_url = settings.llm_base_url.rstrip("/")
        self._client = http_client

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=5.0),
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        tools: Optional[list[ToolSchemaDict]] = None,
        tool_choice: Optional[str] = None,
    ) -> LLMResponse:
        """
        Send one chat completion request. Never retried.

        Raises:
            BackendTimeoutError: the request exceeded ``llm_timeout``.
            BackendError: transport failure, non-2xx status (including 429),
                or a response that is not a usable completion.
        """
        payload: ChatRequestPayload = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        if tools:
            payload["tools"] = tools
            payload["tool_choice"] = tool_choice or "auto"

        logger.debug(f"LLM request: {len(messages)} messages, {len(tools) if tools else 0} tools")

        start = time.time()
        try:
            response = await self.client.post(
                f"{self.base_url}/v1/chat/completions",
                json=payload,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException:
            logger.error(f"LLM request timed out after {self.timeout}s")
            raise BackendTimeoutError(
                "Language model request timed out",
                detail=f"no response within {self.timeout:g}s",
            ) from None
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"LLM request failed: HTTP {status}")
            if status == 429:
                raise BackendError(
                    "Language model rate limit reached",
                    status_code=status,
                    detail="upstream rate limit (HTTP 429)",
                ) from None
            raise BackendError(
                "Language model request failed",
                status_code=status,
                detail=f"upstream HTTP {status}",
            ) from None
        except httpx.HTTPError as e:
            logger.error(f"LLM transport error: {type(e).__name__}")
            raise BackendError(
                "Language model unreachable",
                detail="could not connect to the model provider",
            ) from None
        except ValueError:
            raise BackendError(
                "Language model returned an unreadable response",
                detail="response body is not JSON",
            ) from None

        duration_ms = (time.time() - start) * 1000
        parsed = self._parse_response(data)
        usage = parsed.usage or {}
        log_llm_call(
            self.model,
            _token_count(usage.get("prompt_tokens")),
            _token_count(usage.get("completion_tokens")),
            duration_ms,
            parsed.has_tool_calls,
        )
        return parsed

    def _parse_response(self, data: ChatCompletionResponse) -> LLMResponse:
        """Parse an OpenAI-compatible response; anything unusable is a BackendError."""
        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            raise BackendError(
                "Language model returned an unreadable response",
                detail="response has no choices",
            )
        choice = choices[0]
        message = choice.get("message")
        if not isinstance(message, dict):
            raise BackendError(
                "Language model returned an unreadable response",
                detail="choice has no message",
            )

        content = message.get("content")
        usage = data.get("usage")
        response = LLMResponse(
            content=content if isinstance(content, str) else None,
            finish_reason=choice.get("finish_reason"),
            usage=usage if isinstance(usage, dict) else None,
        )

        raw_calls = message.get("tool_calls") or []
        if not isinstance(raw_calls, list):
            raise BackendError(
                "Language model returned an unreadable response",
                detail="tool_calls is not a list",
            )
        for i, raw in enumerate(raw_calls):
            call = _parse_tool_call(raw, i)
            if call is None:
                logger.warning("Skipping malformed tool call entry")
                continue
            response.tool_calls.append(call)

        return response
