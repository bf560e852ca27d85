"""Response models for the /ask boundary. Exactly one shape per response."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class AnswerResponse(BaseModel):
    """Successful answer."""
    answer: str


class ErrorResponse(BaseModel):
    """Failure; ``detail`` only for downstream (backend) failures."""
    error: str
    detail: Optional[str] = None

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    llm_provider: str
    llm_model: str
    web_search_configured: bool
