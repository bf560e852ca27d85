"""profesor — command-line access to the tutor and its Spanish tools.

Usage::

    profesor ask "conjugate hablar in preterite"
    profesor ask "What does guapo mean?" --json
    profesor conjugate tener --tense preterite
    profesor ipa guitarra
    profesor number 1999
    profesor serve --port 8000

``ask`` runs the same pipeline as ``/api/v1/ask``; the other commands call
the deterministic helpers directly and need no credentials.
"""
from __future__ import annotations

import asyncio
import enum
import json
import logging
from typing import Annotated, Optional

import typer

from profesor.config import require_llm_credentials, settings
from profesor.core.assembler import assemble_answer, assemble_error
from profesor.core.errors import ConfigurationError, InputError
from profesor.core.llm_client import LLMClient
from profesor.core.pipeline import run_pipeline
from profesor.core.tools.registry import build_tool_registry
from profesor.core.tracing import create_trace_context
from profesor.services.spanish import (
    conjugate as conjugate_verb,
    format_conjugation_table,
    number_to_spanish,
    to_approximate_ipa,
)
from profesor.services.spanish.constants import MAX_NUMBER
from profesor.services.web_search import WebSearchClient

logger = logging.getLogger(__name__)

cli = typer.Typer(
    name="profesor",
    help="Beginner Spanish tutor: ask questions or use the Spanish tools directly.",
    no_args_is_help=True,
)


class ExitCode(enum.IntEnum):
    """Exit codes.

    0 — success
    1 — user error (empty question, bad arguments)
    2 — configuration invalid (e.g. missing model credential)
    3 — backend or internal error
    """

    SUCCESS = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    INTERNAL_ERROR = 3


async def _ask_async(question: str) -> str:
    """Answer one question with freshly created clients, closed afterwards."""
    create_trace_context()
    web_search = WebSearchClient(settings)
    llm = LLMClient(settings)
    try:
        registry = build_tool_registry(settings, web_search=web_search)
        output = await run_pipeline(question, llm=llm, registry=registry, settings=settings)
        return assemble_answer(output.outcome.answer).answer
    finally:
        await llm.close()
        await web_search.close()


@cli.command("ask")
def ask(
    question: Annotated[str, typer.Argument(help="Question about beginner Spanish.")],
    output_json: Annotated[bool, typer.Option("--json", help="Emit the /ask JSON shape.")] = False,
) -> None:
    """Ask the tutor a question."""
    try:
        require_llm_credentials(settings)
    except ConfigurationError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(code=ExitCode.CONFIG_ERROR)

    try:
        answer = asyncio.run(_ask_async(question))
    except Exception as exc:
        _, body = assemble_error(exc)
        if output_json:
            typer.echo(json.dumps(body.to_payload(), ensure_ascii=False))
        else:
            typer.echo(f"{body.error}" + (f": {body.detail}" if body.detail else ""), err=True)
        code = ExitCode.USER_ERROR if isinstance(exc, InputError) else ExitCode.INTERNAL_ERROR
        raise typer.Exit(code=code)

    if output_json:
        typer.echo(json.dumps({"answer": answer}, ensure_ascii=False))
    else:
        typer.echo(answer)


@cli.command("conjugate")
def conjugate(
    verb: Annotated[str, typer.Argument(help="Infinitive, e.g. hablar.")],
    tense: Annotated[str, typer.Option("--tense", "-t", help="present or preterite.")] = "present",
) -> None:
    """Print a six-person conjugation table."""
    result = conjugate_verb(verb, tense)
    typer.echo(format_conjugation_table(result))
    if result.is_note:
        raise typer.Exit(code=ExitCode.USER_ERROR)


@cli.command("ipa")
def ipa(word: Annotated[str, typer.Argument(help="A Spanish word.")]) -> None:
    """Print an approximate IPA transcription."""
    result = to_approximate_ipa(word)
    if result.note:
        typer.echo(result.note, err=True)
        raise typer.Exit(code=ExitCode.USER_ERROR)
    typer.echo(result.ipa)


@cli.command("number")
def number(
    n: Annotated[int, typer.Argument(min=0, max=MAX_NUMBER, help=f"Integer 0–{MAX_NUMBER}.")],
    output_json: Annotated[bool, typer.Option("--json", help="Emit words and parts as JSON.")] = False,
) -> None:
    """Spell a number in Spanish and show how it is built."""
    result = number_to_spanish(n)
    if output_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False))
        return
    typer.echo(result.spanish)
    for part in result.parts:
        typer.echo(f"  {part.part} — {part.meaning}")


@cli.command("serve")
def serve(
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address.")] = None,
    port: Annotated[Optional[int], typer.Option("--port", help="Bind port.")] = None,
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("profesor.main:app", host=host or settings.host, port=port or settings.port)


if __name__ == "__main__":
    cli()
