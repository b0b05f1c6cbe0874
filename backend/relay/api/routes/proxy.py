"""Generic Proxy Route — forwards to an allow-listed absolute URL taken from the path.

Invariants:
    - Target host must be in PROXY_ALLOWED_HOSTS (empty list → every target 403)
    - Inbound method, headers (minus Host, Origin, Accept-Encoding) and body forwarded
    - Upstream JSON body returned exactly; upstream errors mapped like every route
"""

import logging

from fastapi import APIRouter, Depends, Request

from relay.api.dependencies import get_app_settings, get_proxy_client
from relay.config import Settings
from relay.infrastructure.upstream_client import UpstreamClient
from relay.services.forwarding import forwardable_headers, resolve_proxy_target

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/proxy", tags=["proxy"])

FORWARDED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/{target:path}", methods=FORWARDED_METHODS)
async def proxy(
    target: str,
    request: Request,
    client: UpstreamClient = Depends(get_proxy_client),
    settings: Settings = Depends(get_app_settings),
):
    url = resolve_proxy_target(
        target, request.url.query, settings.proxy_allowed_hosts,
    )
    logger.info(f"Proxying {request.method} to {url}", extra={"method": request.method})
    return await client.request(
        request.method, url,
        operation="proxy request",
        content=await request.body(),
        headers=forwardable_headers(request.headers),
    )
