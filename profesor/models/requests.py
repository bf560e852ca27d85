"""Request models for the /ask endpoint."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AskRequest(BaseModel):
    """JSON body of an /ask request. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    question: Optional[str] = Field(
        default=None,
        description="Question about beginner Spanish",
        examples=['What does "guapo" mean?', "conjugate hablar in preterite"],
    )
