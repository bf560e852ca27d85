"""Typed structures for OpenAI-format chat messages and tool schemas.

Every shape exchanged with ``LLMClient`` is defined here as a TypedDict.

Organisation:
  Chat messages          → ``SystemMessage``, ``UserMessage``,
                           ``AssistantMessage``, ``ToolResultMessage``,
                           ``ChatMessage`` (union)
  Tool schemas           → ``PropertyDef``, ``ToolParametersDict``,
                           ``ToolFunctionDict``, ``ToolSchemaDict``
  Token usage            → ``UsageStats``
  Request payload        → ``ChatRequestPayload``
  Response               → ``ResponseFunction``, ``ResponseToolCall``,
                           ``ResponseMessage``, ``ResponseChoice``,
                           ``ChatCompletionResponse``
"""
from __future__ import annotations

from typing import Literal, Union

from typing_extensions import NotRequired, Required, TypedDict

from profesor.contracts.json_types import JSONValue


# ── Chat message shapes ────────────────────────────────────────────────────────


class ToolCallFunction(TypedDict):
    """The ``function`` field inside an OpenAI tool call.

    ``arguments`` is a JSON-encoded string; callers must ``json.loads`` it.
    """

    name: str
    arguments: str


class ToolCallEntry(TypedDict):
    """One tool call in an assistant message."""

    id: str
    type: str
    function: ToolCallFunction


class SystemMessage(TypedDict):
    role: Literal["system"]
    content: str


class UserMessage(TypedDict):
    role: Literal["user"]
    content: str


class AssistantMessage(TypedDict, total=False):
    """An assistant reply; text-only or carrying one tool call."""

    role: Required[Literal["assistant"]]
    content: str | None
    tool_calls: list[ToolCallEntry]


class ToolResultMessage(TypedDict):
    """A tool observation returned to the model after a tool call."""

    role: Literal["tool"]
    tool_call_id: str
    content: str


ChatMessage = Union[SystemMessage, UserMessage, AssistantMessage, ToolResultMessage]
"""Union of all chat message shapes."""


# ── Tool schema shapes (OpenAI function-calling format) ───────────────────────


class PropertyDef(TypedDict, total=False):
    """JSON Schema for one tool parameter (the subset the validator enforces)."""

    type: Required[str]       # "string", "integer", "number", "boolean"
    description: str
    enum: list[str]
    minimum: float
    maximum: float
    minLength: int
    default: JSONValue


class ToolParametersDict(TypedDict, total=False):
    """JSON Schema ``parameters`` block inside a tool definition."""

    type: str
    properties: dict[str, PropertyDef]
    required: list[str]
    additionalProperties: bool


class ToolFunctionDict(TypedDict):
    name: str
    description: str
    parameters: NotRequired[ToolParametersDict]


class ToolSchemaDict(TypedDict):
    """A single OpenAI-format tool definition (``{type: function, function: {...}}``)."""

    type: str
    function: ToolFunctionDict


# ── Token usage ───────────────────────────────────────────────────────────────


class UsageStats(TypedDict, total=False):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


# ── Request payload ───────────────────────────────────────────────────────────


class ChatRequestPayload(TypedDict, total=False):
    """Request body sent to an OpenAI-compatible chat completions endpoint."""

    model: Required[str]
    messages: Required[list[ChatMessage]]
    temperature: float
    max_tokens: int
    tools: list[ToolSchemaDict]
    tool_choice: str


# ── Response shapes ───────────────────────────────────────────────────────────


class ResponseFunction(TypedDict, total=False):
    name: str
    arguments: str


class ResponseToolCall(TypedDict, total=False):
    id: str
    type: str
    function: ResponseFunction


class ResponseMessage(TypedDict, total=False):
    content: str | None
    tool_calls: list[ResponseToolCall]


class ResponseChoice(TypedDict, total=False):
    message: ResponseMessage
    finish_reason: str | None


class ChatCompletionResponse(TypedDict, total=False):
    """Full (non-streaming) response body from an OpenAI-compatible API."""

    choices: list[ResponseChoice]
    usage: UsageStats
