"""Storefront Relay API — FastAPI application factory and process entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RelayError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Upstream clients built once per app and closed on shutdown
    - Missing required configuration → exit status 1 before binding the port

Design Decisions:
    - create_app(settings) over a module-level app: settings are an explicit
      object, tests build apps with their own Settings
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
import sys
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from relay import __version__
from relay.api.error_handlers import register_error_handlers
from relay.api.routes import (
    airtable, auth_check, foxycart, health, proxy, webflow_collections, webflow_pages,
)
from relay.config import Settings, get_settings
from relay.infrastructure.foxycart_auth import FoxyCartTokenProvider
from relay.infrastructure.observability import setup_logging
from relay.infrastructure.upstream_client import (
    build_airtable_client,
    build_foxycart_client,
    build_proxy_client,
    build_webflow_client,
)

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]


def _attach_upstreams(app: FastAPI, settings: Settings) -> None:
    """Build one UpstreamClient per configured upstream on app.state."""
    timeout = settings.upstream_timeout_seconds
    app.state.webflow = build_webflow_client(
        settings.webflow_api_key, settings.webflow_api_base_url, timeout,
    )
    app.state.proxy = build_proxy_client(timeout)

    app.state.airtable = None
    if settings.airtable_configured:
        app.state.airtable = build_airtable_client(
            settings.airtable_api_key, settings.airtable_api_base_url, timeout,
        )

    app.state.foxycart = None
    app.state.foxycart_tokens = None
    if settings.foxycart_configured:
        token_http = httpx.AsyncClient(
            base_url=settings.foxycart_api_base_url,
            timeout=httpx.Timeout(timeout),
        )
        app.state.foxycart_tokens = FoxyCartTokenProvider(
            token_http,
            client_id=settings.foxycart_client_id,
            client_secret=settings.foxycart_client_secret,
            refresh_token=settings.foxycart_refresh_token,
            expiry_skew_seconds=settings.foxycart_token_expiry_skew_seconds,
        )
        app.state.foxycart = build_foxycart_client(
            settings.foxycart_api_base_url, timeout, app.state.foxycart_tokens,
        )


async def _close_upstreams(app: FastAPI) -> None:
    for name in ("webflow", "airtable", "foxycart", "proxy"):
        client = getattr(app.state, name, None)
        if client is not None:
            await client.aclose()
    tokens = getattr(app.state, "foxycart_tokens", None)
    if tokens is not None:
        await tokens.aclose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    logger.info(
        "Storefront relay started",
        extra={"upstream": ",".join(_enabled_upstreams(settings))},
    )
    yield
    await _close_upstreams(app)
    logger.info("Storefront relay shutting down")


def _enabled_upstreams(settings: Settings) -> list[str]:
    enabled = ["webflow"]
    if settings.airtable_configured:
        enabled.append("airtable")
    if settings.foxycart_configured:
        enabled.append("foxycart")
    if settings.proxy_allowed_hosts:
        enabled.append("proxy")
    return enabled


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the relay application around one Settings object."""
    settings = settings or get_settings()
    app = FastAPI(
        title="Storefront Relay", version=__version__, lifespan=lifespan,
    )
    app.state.settings = settings
    _attach_upstreams(app, settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    # Routes, registered explicitly
    app.include_router(health.router)
    app.include_router(auth_check.router)
    app.include_router(webflow_pages.router)
    app.include_router(webflow_collections.router)
    app.include_router(airtable.router)
    app.include_router(foxycart.router)
    app.include_router(proxy.router)

    register_error_handlers(app)
    return app


def load_settings_or_exit() -> Settings:
    """Settings from the environment; exits with status 1 when invalid."""
    try:
        return get_settings()
    except ValidationError as e:
        missing = [
            ".".join(str(p) for p in err["loc"]).upper() for err in e.errors()
        ]
        logger.critical(
            f"Missing or invalid configuration: {', '.join(missing)}",
        )
        sys.exit(1)


def run() -> None:
    """Console entry point: validate config, then serve with uvicorn."""
    setup_logging()
    settings = load_settings_or_exit()
    setup_logging(settings.log_level, settings.log_format)
    app = create_app(settings)
    logger.info(f"Server is running on port {settings.port}")
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
