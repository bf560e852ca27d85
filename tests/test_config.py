"""Tests for settings and startup checks (profesor/config.py, profesor/main.py)."""
from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi import FastAPI

from profesor.config import Settings, require_llm_credentials
from profesor.core.errors import ConfigurationError
from profesor.core.llm_client import LLMClient
from profesor.main import lifespan
from profesor.services.web_search import WebSearchClient


class TestSettings:

    def test_defaults(self, test_settings) -> None:
        assert test_settings.llm_provider == "groq"
        assert test_settings.llm_base_url == "https://api.groq.com/openai"
        assert 1 <= test_settings.max_tool_rounds <= 9
        assert not test_settings.web_search_configured

    def test_bare_groq_key_accepted(self, monkeypatch) -> None:
        monkeypatch.delenv("PROFESOR_GROQ_API_KEY", raising=False)
        monkeypatch.setenv("GROQ_API_KEY", "bare-key")
        assert Settings().llm_api_key == "bare-key"

    def test_bare_groq_model_accepted(self, monkeypatch) -> None:
        monkeypatch.delenv("PROFESOR_LLM_MODEL", raising=False)
        monkeypatch.setenv("GROQ_MODEL", "llama-3.3-70b-versatile")
        assert Settings(PROFESOR_GROQ_API_KEY="k").llm_model == "llama-3.3-70b-versatile"

    def test_prefixed_model_wins_over_bare(self, monkeypatch) -> None:
        monkeypatch.setenv("PROFESOR_LLM_MODEL", "prefixed")
        monkeypatch.setenv("GROQ_MODEL", "bare")
        assert Settings(PROFESOR_GROQ_API_KEY="k").llm_model == "prefixed"

    def test_tavily_key_accepted(self, monkeypatch) -> None:
        monkeypatch.setenv("TAVILY_API_KEY", "tvly-key")
        assert Settings().web_search_configured

    def test_round_bound_validated(self) -> None:
        with pytest.raises(ValueError):
            Settings(PROFESOR_GROQ_API_KEY="k", max_tool_rounds=0)

    def test_unknown_provider_base_url(self) -> None:
        s = Settings(PROFESOR_GROQ_API_KEY="k", llm_provider="nope")
        with pytest.raises(ConfigurationError):
            s.llm_base_url


class TestRequireCredentials:

    def test_ok(self, test_settings) -> None:
        require_llm_credentials(test_settings)

    @pytest.mark.parametrize("key", [None, "", "   "])
    def test_missing_key(self, key) -> None:
        with pytest.raises(ConfigurationError, match="PROFESOR_GROQ_API_KEY"):
            require_llm_credentials(Settings(PROFESOR_GROQ_API_KEY=key))

    def test_openrouter_needs_its_own_key(self) -> None:
        s = Settings(PROFESOR_GROQ_API_KEY="k", llm_provider="openrouter")
        with pytest.raises(ConfigurationError, match="openrouter"):
            require_llm_credentials(s)

    def test_unknown_provider(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown LLM provider"):
            require_llm_credentials(Settings(PROFESOR_GROQ_API_KEY="k", llm_provider="nope"))


class TestLifespan:

    @pytest.mark.anyio
    async def test_refuses_to_start_without_credential(self) -> None:
        with patch("profesor.main.settings", Settings(PROFESOR_GROQ_API_KEY=None)):
            with pytest.raises(ConfigurationError):
                async with lifespan(FastAPI()):
                    pass

    @pytest.mark.anyio
    async def test_creates_and_closes_shared_clients(self, test_settings) -> None:
        app = FastAPI()
        with patch("profesor.main.settings", test_settings):
            async with lifespan(app):
                assert isinstance(app.state.llm_client, LLMClient)
                assert isinstance(app.state.web_search, WebSearchClient)
                assert set(app.state.tool_registry) == {
                    "conjugate_verb", "spanish_ipa", "number_to_spanish", "web_search",
                }
                app.state.llm_client.client  # force creation
        assert app.state.llm_client._client is None
