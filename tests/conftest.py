"""Test configuration and shared fixtures.

Pattern: Pytest fixtures, conftest.py
"""

from collections.abc import Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tests.fakes.fake_clients import FakeZendeskClient
from tests.fakes.fake_clock import FakeClock
from zendesk_datasource.api.error_handlers import register_error_handlers
from zendesk_datasource.api.routes import health_router, query_router, resources_router
from zendesk_datasource.cache import CacheConfig, CacheManager
from zendesk_datasource.core.config import Settings
from zendesk_datasource.plugin.datasource import Datasource


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with safe defaults."""
    return Settings(
        zendesk_subdomain="acme",
        zendesk_email="agent@acme.com",
        zendesk_api_token="secret-token",
        log_level="DEBUG",
        _env_file=None,
    )


# ============================================================================
# Cache Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> CacheManager:
    """Create a TTL cache manager driven by the fake clock."""
    return CacheManager(CacheConfig(), clock=clock)


# ============================================================================
# Datasource Fixtures
# ============================================================================

@pytest.fixture
def fake_client() -> FakeZendeskClient:
    """Create a fake Zendesk client with sample records."""
    return FakeZendeskClient()


@pytest.fixture
def datasource(fake_client: FakeZendeskClient, cache: CacheManager) -> Datasource:
    """Create a datasource over the fake client and fake-clock cache."""
    return Datasource(client=fake_client, cache=cache)


# ============================================================================
# API Fixtures
# ============================================================================

def _build_app(datasource: Datasource | None, cache: CacheManager | None) -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(query_router)
    app.include_router(resources_router)
    app.include_router(health_router)
    app.state.datasource = datasource
    app.state.cache = cache
    return app


@pytest.fixture
def app(datasource: Datasource, cache: CacheManager) -> FastAPI:
    """Create test FastAPI app backed by the fake datasource."""
    return _build_app(datasource, cache)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Create test client."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def make_app() -> Callable[[Datasource | None, CacheManager | None], FastAPI]:
    """Factory for apps with a custom datasource (or none)."""
    return _build_app
