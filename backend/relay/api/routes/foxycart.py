"""FoxyCart Route — forwards any method under /foxycart/ to the FoxyCart API.

Invariants:
    - Access token obtained from FoxyCartTokenProvider (cached until near expiry)
    - Method, sub-path, query string and body forwarded unchanged
    - Unconfigured FoxyCart → 503 before any upstream call
"""

from fastapi import APIRouter, Depends, Request

from relay.api.dependencies import get_foxycart_client
from relay.infrastructure.upstream_client import UpstreamClient

router = APIRouter(prefix="/foxycart", tags=["foxycart"])

FORWARDED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/{path:path}", methods=FORWARDED_METHODS)
async def forward_to_foxycart(
    path: str,
    request: Request,
    foxycart: UpstreamClient = Depends(get_foxycart_client),
):
    headers = {}
    if "content-type" in request.headers:
        headers["content-type"] = request.headers["content-type"]
    return await foxycart.request(
        request.method, f"/{path}",
        operation="forward request to FoxyCart",
        content=await request.body(),
        params=list(request.query_params.multi_items()),
        headers=headers,
    )
