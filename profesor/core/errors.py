"""
Error taxonomy for the question-answering pipeline.

    InputError          — bad request at the boundary; never reaches the orchestrator
    ToolArgumentError   — backend supplied arguments that fail a tool schema;
                          recovered inside the loop as an observation
    ToolExecutionError  — a tool's own operation failed; converted to a text note
    BackendError        — reasoning backend unreachable / rate-limited / unparseable;
                          fatal for the current request, never retried within it
    BackendTimeoutError — BackendError subtype for timeouts
    ConfigurationError  — process cannot start (e.g. missing model credential)

Messages on these exceptions are shown to callers, so they must never carry
credentials, raw upstream bodies, or stack traces.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from profesor.core.tool_validation.models import ValidationError


class ProfesorError(Exception):
    """Base class for all pipeline errors."""
    pass


class ConfigurationError(ProfesorError):
    """Raised at startup when required configuration is missing or invalid."""
    pass


class InputError(ProfesorError):
    """Raised when the inbound request is unusable (empty question, wrong method, bad body)."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ToolArgumentError(ProfesorError):
    """Raised when tool arguments fail schema validation."""

    def __init__(self, tool_name: str, errors: Sequence["ValidationError"]):
        self.tool_name = tool_name
        self.errors = tuple(errors)
        super().__init__(
            f"invalid arguments for {tool_name}: " + "; ".join(str(e) for e in errors)
        )


class ToolExecutionError(ProfesorError):
    """Raised by a tool backend when its own operation fails."""

    def __init__(self, tool_name: str, message: str):
        self.tool_name = tool_name
        self.message = message
        super().__init__(f"{tool_name}: {message}")


class BackendError(ProfesorError):
    """Raised when the language-model backend fails."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code  # upstream HTTP status, when there was one
        self.detail = detail
        super().__init__(message)


class BackendTimeoutError(BackendError):
    """Raised when a backend call exceeds its timeout."""
    pass
