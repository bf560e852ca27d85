"""Health check endpoints."""
from __future__ import annotations

from fastapi import APIRouter

from profesor.config import settings
from profesor.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness plus which backends are configured (never their credentials)."""
    return HealthResponse(
        status="ok",
        service=settings.app_name,
        version=settings.app_version,
        llm_provider=settings.llm_provider,
        llm_model=settings.llm_model,
        web_search_configured=settings.web_search_configured,
    )
