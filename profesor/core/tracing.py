"""
Per-question trace for the /ask pipeline.

One ``TraceContext`` per question lives in a ContextVar, so the pipeline, the
agent loop and the backend client log under the same short id without
passing it around. Stages (classify, reasoning, tool_call, final_answer) are
timed with ``trace_span``; backend and tool calls are counted on the context.

Usage:
    ctx = create_trace_context()
    with trace_span(ctx, "classify") as span:
        result = classify_with_reason(question)
        span.set_attribute("intent", result.tag.value)
    logger.info("done", extra=ctx.summary())
"""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

logger = logging.getLogger(__name__)


@dataclass
class Span:
    """One timed stage of a question."""
    name: str
    started: float
    parent: Optional[str] = None
    elapsed_ms: Optional[float] = None
    error_type: Optional[str] = None
    attributes: dict[str, Any] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return self.error_type is not None

    def set_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value


@dataclass
class TraceContext:
    trace_id: str
    spans: list[Span] = field(default_factory=list)
    backend_calls: int = 0
    tool_calls: int = 0
    _open: list[Span] = field(default_factory=list)

    @property
    def short_id(self) -> str:
        return self.trace_id[:8]

    @property
    def current_span(self) -> Optional[Span]:
        return self._open[-1] if self._open else None

    def summary(self) -> dict[str, Any]:
        """Counters and stage names, suitable for ``extra=`` on a log call."""
        return {
            "trace_id": self.trace_id,
            "backend_calls": self.backend_calls,
            "tool_calls": self.tool_calls,
            "stages": [s.name for s in self.spans],
        }


_trace_context: ContextVar[Optional[TraceContext]] = ContextVar("trace_context", default=None)


def create_trace_context() -> TraceContext:
    """Start a fresh trace for the current question."""
    ctx = TraceContext(trace_id=uuid.uuid4().hex)
    _trace_context.set(ctx)
    return ctx


def get_trace_context() -> TraceContext:
    """Current trace; one is created if the caller never started one."""
    ctx = _trace_context.get()
    if ctx is None:
        ctx = create_trace_context()
    return ctx


def clear_trace_context() -> None:
    _trace_context.set(None)


@contextmanager
def trace_span(
    ctx: TraceContext,
    name: str,
    attributes: Optional[dict[str, Any]] = None,
) -> Iterator[Span]:
    """Time a stage; nested spans record their parent's name."""
    parent = ctx.current_span
    span = Span(
        name=name,
        started=time.perf_counter(),
        parent=parent.name if parent else None,
        attributes=dict(attributes or {}),
    )
    ctx.spans.append(span)
    ctx._open.append(span)
    try:
        yield span
    except Exception as e:
        span.error_type = type(e).__name__
        raise
    finally:
        span.elapsed_ms = (time.perf_counter() - span.started) * 1000
        ctx._open.pop()
        _log_span(ctx, span)


def _log_span(ctx: TraceContext, span: Span) -> None:
    extra = {
        "trace_id": ctx.trace_id,
        "span_name": span.name,
        "parent_span": span.parent,
        "duration_ms": span.elapsed_ms,
        **span.attributes,
    }
    if span.failed:
        logger.error(f"[{ctx.short_id}] ✗ {span.name} ({span.error_type})", extra=extra)
    else:
        logger.info(f"[{ctx.short_id}] ✓ {span.name} ({span.elapsed_ms:.0f}ms)", extra=extra)


def log_tool_call(
    tool_name: str,
    params: dict[str, Any],
    valid: bool,
    error: Optional[str] = None,
) -> None:
    """Count and log one tool call. Argument values are never logged."""
    ctx = get_trace_context()
    ctx.tool_calls += 1
    logger.log(
        logging.INFO if valid else logging.WARNING,
        f"[{ctx.short_id}] {'✓' if valid else '✗'} tool {tool_name}",
        extra={
            "trace_id": ctx.trace_id,
            "event": "tool_call",
            "tool_name": tool_name,
            "valid": valid,
            "error": error,
            "params_keys": sorted(params),
        },
    )


def log_llm_call(
    model: str,
    prompt_tokens: int,
    completion_tokens: int,
    duration_ms: float,
    has_tool_calls: bool,
) -> None:
    """Count and log one backend round trip."""
    ctx = get_trace_context()
    ctx.backend_calls += 1
    logger.info(
        f"[{ctx.short_id}] backend call #{ctx.backend_calls}: {model} "
        f"({prompt_tokens}+{completion_tokens} tokens, {duration_ms:.0f}ms)",
        extra={
            "trace_id": ctx.trace_id,
            "event": "llm_call",
            "model": model,
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "duration_ms": duration_ms,
            "has_tool_calls": has_tool_calls,
        },
    )
