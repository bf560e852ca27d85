"""
Response assembler: turns pipeline output or a failure into the boundary shape.

    success             → 200 {answer}
    InputError          → 400 (405 for a wrong method) {error}
    BackendTimeoutError → 502 {error, detail}
    BackendError        → 502 {error, detail}
    anything else       → 500 {error: "Agent failed"}

Never includes stack traces, credentials or upstream response bodies.
"""

from __future__ import annotations

import logging

from profesor.core.errors import BackendError, BackendTimeoutError, InputError
from profesor.models.responses import AnswerResponse, ErrorResponse

logger = logging.getLogger(__name__)

NO_ANSWER = "Sorry, no answer."
AGENT_FAILED = "Agent failed"
BACKEND_FAILED = "Language model backend failed"
BACKEND_TIMED_OUT = "Language model backend timed out"


def assemble_answer(text: str | None) -> AnswerResponse:
    """Trim the final text; empty becomes an explicit fallback."""
    answer = (text or "").strip()
    return AnswerResponse(answer=answer or NO_ANSWER)


def assemble_error(exc: BaseException) -> tuple[int, ErrorResponse]:
    """Map a failure to ``(status_code, ErrorResponse)``."""
    if isinstance(exc, InputError):
        return exc.status_code, ErrorResponse(error=exc.message)

    if isinstance(exc, BackendTimeoutError):
        logger.warning(f"Backend timeout: {exc.message}")
        return 502, ErrorResponse(error=BACKEND_TIMED_OUT, detail=exc.detail or exc.message)

    if isinstance(exc, BackendError):
        logger.warning(f"Backend error: {exc.message} (upstream status={exc.status_code})")
        return 502, ErrorResponse(error=BACKEND_FAILED, detail=exc.detail or exc.message)

    logger.error(f"Unhandled pipeline failure: {type(exc).__name__}", exc_info=exc)
    return 500, ErrorResponse(error=AGENT_FAILED)
