"""
Spanish Profesor API

FastAPI application answering beginner-Spanish questions with a language
model and deterministic Spanish tools.
"""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from profesor.api.routes import ask, health
from profesor.config import require_llm_credentials, settings
from profesor.core.llm_client import LLMClient
from profesor.core.tools.registry import build_tool_registry
from profesor.services.web_search import WebSearchClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Refuse to start without a model credential; own the shared clients."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"LLM provider: {settings.llm_provider}")
    logger.info(f"LLM model: {settings.llm_model}")

    require_llm_credentials(settings)
    if not settings.web_search_configured:
        logger.warning("No search credential configured; web_search will reply with a note")

    web_search = WebSearchClient(settings)
    llm_client = LLMClient(settings)
    app.state.web_search = web_search
    app.state.llm_client = llm_client
    app.state.tool_registry = build_tool_registry(settings, web_search=web_search)

    yield

    logger.info("Shutting down...")
    await llm_client.close()
    await web_search.close()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Beginner Spanish tutor: conjugations, pronunciation, numbers and vocabulary.",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
)

# Rate limiter shared with the /ask route
app.state.limiter = ask.limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler,  # type: ignore[arg-type]  # slowapi handler signature is (Request, RateLimitExceeded)
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(ask.router, prefix="/api/v1", tags=["ask"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with service info."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "ask": "/api/v1/ask",
    }
