"""Pytest configuration and fixtures."""
import logging
import os

# Settings are read once at import time; give the app a model credential and
# no search credential before anything under ``profesor`` is imported.
os.environ["PROFESOR_GROQ_API_KEY"] = "test-groq-key"
os.environ.pop("GROQ_API_KEY", None)
os.environ.pop("PROFESOR_SEARCH_API_KEY", None)
os.environ.pop("TAVILY_API_KEY", None)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fakes import ScriptedLLM
from profesor.api.routes.ask import get_app_settings, get_llm_client, get_tool_registry, limiter
from profesor.config import Settings
from profesor.core.tools import build_tool_registry
from profesor.core.tracing import clear_trace_context
from profesor.main import app


def pytest_configure(config):
    """Ensure asyncio_mode is auto so async fixtures work when pyproject is not in cwd."""
    if hasattr(config.option, "asyncio_mode") and config.option.asyncio_mode is None:
        config.option.asyncio_mode = "auto"
    logging.getLogger("httpcore").setLevel(logging.CRITICAL)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _reset_request_state():
    """Fresh trace context and rate-limit counters per test."""
    clear_trace_context()
    limiter.reset()
    yield
    clear_trace_context()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(PROFESOR_GROQ_API_KEY="test-groq-key", PROFESOR_SEARCH_API_KEY=None, max_tool_rounds=4)


@pytest.fixture
def registry(test_settings):
    return build_tool_registry(test_settings)


@pytest.fixture
def llm() -> ScriptedLLM:
    return ScriptedLLM()


@pytest_asyncio.fixture
async def client(llm, registry, test_settings):
    """Async test client with the backend, registry and settings injected."""
    app.dependency_overrides[get_llm_client] = lambda: llm
    app.dependency_overrides[get_tool_registry] = lambda: registry
    app.dependency_overrides[get_app_settings] = lambda: test_settings
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
