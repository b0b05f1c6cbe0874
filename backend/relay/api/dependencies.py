"""Route Dependencies — hand the Settings object and upstream clients to handlers.

Invariants:
    - Everything comes from app.state, populated once by create_app()
    - Unconfigured optional upstreams raise ServiceNotConfiguredError (503)
"""

from fastapi import Request

from relay.config import Settings
from relay.core.errors import ServiceNotConfiguredError
from relay.infrastructure.upstream_client import UpstreamClient


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_webflow_client(request: Request) -> UpstreamClient:
    return request.app.state.webflow


def get_airtable_client(request: Request) -> UpstreamClient:
    client = request.app.state.airtable
    if client is None:
        raise ServiceNotConfiguredError("Airtable")
    return client


def get_foxycart_client(request: Request) -> UpstreamClient:
    client = request.app.state.foxycart
    if client is None:
        raise ServiceNotConfiguredError("FoxyCart")
    return client


def get_proxy_client(request: Request) -> UpstreamClient:
    return request.app.state.proxy
