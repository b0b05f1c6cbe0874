"""Root conftest — shared test configuration and app fixtures.

Invariants:
    - Tests never use real credentials (fake keys set before Settings load)
    - Every test gets a fresh app with all upstreams configured
    - Outbound HTTP is mocked with respx; ASGI calls go straight to the app
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("WEBFLOW_API_KEY", "wf-test-fake-key")
os.environ.setdefault("SITE_ID", "site-test")

from relay.config import Settings  # noqa: E402
from relay.main import create_app  # noqa: E402

def _make_settings(**overrides) -> Settings:
    values = dict(
        webflow_api_key="wf-test-key",
        site_id="site-123",
        webflow_item_collection_id="items-col",
        cms_collection_id="cms-col",
        airtable_api_key="at-test-key",
        airtable_base_id="appBase",
        airtable_table_id="tblPing",
        foxycart_client_id="foxy-client",
        foxycart_client_secret="foxy-secret",
        foxycart_refresh_token="foxy-refresh",
        proxy_allowed_hosts=["api.example.com"],
        log_format="text",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def make_settings():
    """Factory for Settings with per-test overrides."""
    return _make_settings


@pytest.fixture
def settings() -> Settings:
    return _make_settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app):
    """FastAPI test client; unhandled app errors come back as 500 responses."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
