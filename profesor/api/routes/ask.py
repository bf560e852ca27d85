"""
/ask endpoint: one question in, one answer (or error) out.

- GET or POST; question from JSON body ``question`` or query ``q`` (body wins)
- Empty or missing question → 400 before any backend call
- Other methods → 405
- Backend failures → 502, local failures → 500
"""
from __future__ import annotations

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from slowapi import Limiter
from slowapi.util import get_remote_address

from profesor.config import Settings, get_settings, settings
from profesor.core.assembler import assemble_answer, assemble_error
from profesor.core.errors import InputError
from profesor.core.llm_client import LLMClient
from profesor.core.pipeline import MISSING_QUESTION, run_pipeline
from profesor.core.tools.registry import ToolRegistry
from profesor.core.tracing import create_trace_context
from profesor.models.requests import AskRequest
from profesor.models.responses import AnswerResponse, ErrorResponse

router = APIRouter()
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

WRONG_METHOD = "Use GET or POST"


def get_llm_client(request: Request) -> LLMClient:
    """Process-wide backend client created in the app lifespan."""
    return request.app.state.llm_client


def get_tool_registry(request: Request) -> ToolRegistry:
    """Immutable tool registry created in the app lifespan."""
    return request.app.state.tool_registry


def get_app_settings() -> Settings:
    return get_settings()


async def _read_question(request: Request, q: Optional[str]) -> Optional[str]:
    """Question from the JSON body when present and non-empty, else from ``q``."""
    if request.method != "POST":
        return q

    raw = await request.body()
    if not raw.strip():
        return q
    try:
        data = json.loads(raw)
    except ValueError:
        raise InputError("Malformed JSON body") from None
    if not isinstance(data, dict):
        raise InputError("Request body must be a JSON object")
    try:
        body = AskRequest.model_validate(data)
    except ValidationError:
        raise InputError(MISSING_QUESTION) from None

    if body.question and body.question.strip():
        return body.question
    return q


def _error_response(exc: BaseException) -> JSONResponse:
    status_code, body = assemble_error(exc)
    headers = {"Allow": "GET, POST"} if status_code == 405 else None
    return JSONResponse(status_code=status_code, content=body.to_payload(), headers=headers)


@router.api_route(
    "/ask",
    methods=["GET", "POST"],
    response_model=AnswerResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
@limiter.limit(settings.ask_rate_limit)
async def ask(
    request: Request,
    q: Optional[str] = Query(default=None, description="Question (used when the body has none)"),
    llm: LLMClient = Depends(get_llm_client),
    registry: ToolRegistry = Depends(get_tool_registry),
    app_settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """Answer one beginner-Spanish question."""
    ctx = create_trace_context()
    try:
        question = await _read_question(request, q)
        if question is None:
            raise InputError(MISSING_QUESTION)
        output = await run_pipeline(
            question,
            llm=llm,
            registry=registry,
            settings=app_settings,
        )
    except Exception as exc:
        logger.info(f"[{ctx.short_id}] /ask failed: {type(exc).__name__}")
        return _error_response(exc)

    return JSONResponse(content=assemble_answer(output.outcome.answer).model_dump())


@router.api_route("/ask", methods=["PUT", "PATCH", "DELETE"], include_in_schema=False)
async def ask_wrong_method() -> JSONResponse:
    return _error_response(InputError(WRONG_METHOD, status_code=405))
