"""E2E test fixtures for API layer testing."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from cycle_breaker.infrastructure.api.main import create_app
from cycle_breaker.infrastructure.config import reset_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test against default ANALYSIS_* settings."""
    for name in (
        "ANALYSIS_MAX_CYCLES",
        "ANALYSIS_PARALLEL",
        "ANALYSIS_MAX_CONCURRENT_SCCS",
        "ANALYSIS_FORCED_STRATEGY",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Provide an HTTP client bound to a fresh application instance."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
