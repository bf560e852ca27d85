"""
Spanish Profesor Configuration

Environment-based configuration for the question-answering service.
"""
import logging
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from profesor.core.errors import ConfigurationError


def _app_version_from_package() -> str:
    """Read version from pyproject.toml — the single source of truth."""
    try:
        from importlib.metadata import version
        return version("spanish-profesor")
    except Exception:
        pass
    # Fallback: parse pyproject.toml directly (dev / non-installed mode)
    try:
        from pathlib import Path
        import re
        pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
        match = re.search(r'^version\s*=\s*"([^"]+)"', pyproject.read_text(), re.MULTILINE)
        if match:
            return match.group(1)
    except Exception:
        pass
    return "0.0.0-unknown"


# OpenAI-compatible chat endpoints per provider (the client appends /v1/chat/completions).
LLM_BASE_URLS: dict[str, str] = {
    "groq": "https://api.groq.com/openai",
    "openrouter": "https://openrouter.ai/api",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service Info
    app_name: str = "Spanish Profesor"
    app_version: str = _app_version_from_package()
    debug: bool = False

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # Language-model backend (OpenAI-compatible chat completions)
    llm_provider: str = "groq"
    llm_model: str = Field(
        default="llama-3.1-8b-instant",
        validation_alias=AliasChoices("PROFESOR_LLM_MODEL", "GROQ_MODEL"),
    )
    llm_timeout: float = Field(default=30.0, gt=0)  # seconds, per backend call
    llm_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    llm_max_tokens: int = Field(default=800, ge=1)

    # API keys. The bare GROQ_API_KEY name is accepted for existing deployments.
    groq_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("PROFESOR_GROQ_API_KEY", "GROQ_API_KEY"),
    )
    openrouter_api_key: Optional[str] = None

    # Web search tool (optional; missing key disables only that tool)
    search_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("PROFESOR_SEARCH_API_KEY", "TAVILY_API_KEY"),
    )
    search_timeout: float = Field(default=10.0, gt=0)
    search_max_results: int = Field(default=3, ge=1, le=10)

    # Orchestration
    max_tool_rounds: int = Field(default=4, ge=1, le=9)  # tool calls per question

    # Request limits
    ask_rate_limit: str = "60/minute"
    max_question_chars: int = Field(default=4000, ge=1)

    # CORS Settings (fail closed: no default origins)
    cors_origins: list[str] = []

    model_config = SettingsConfigDict(
        env_prefix="PROFESOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _warn_cors_wildcard_in_production(self) -> "Settings":
        """Warn when CORS allows all origins in non-debug (production) mode."""
        if not self.debug and self.cors_origins and "*" in self.cors_origins:
            logging.getLogger(__name__).warning(
                "CORS allows all origins (*) with PROFESOR_DEBUG=false. "
                "Set PROFESOR_CORS_ORIGINS to exact origins in production."
            )
        return self

    @property
    def llm_api_key(self) -> Optional[str]:
        """API key for the active provider, or None."""
        if self.llm_provider == "groq":
            return self.groq_api_key
        if self.llm_provider == "openrouter":
            return self.openrouter_api_key
        return None

    @property
    def llm_base_url(self) -> str:
        try:
            return LLM_BASE_URLS[self.llm_provider]
        except KeyError:
            raise ConfigurationError(f"Unknown LLM provider: {self.llm_provider}") from None

    @property
    def web_search_configured(self) -> bool:
        return bool(self.search_api_key)


def require_llm_credentials(settings: Settings) -> None:
    """Refuse to run without a credential for the configured model backend."""
    if settings.llm_provider not in LLM_BASE_URLS:
        raise ConfigurationError(f"Unknown LLM provider: {settings.llm_provider}")
    if not (settings.llm_api_key or "").strip():
        raise ConfigurationError(
            f"No API key configured for LLM provider '{settings.llm_provider}'. "
            f"Set PROFESOR_{settings.llm_provider.upper()}_API_KEY."
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience access
settings = get_settings()
