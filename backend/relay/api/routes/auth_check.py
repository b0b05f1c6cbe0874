"""Credential Check — verifies the Webflow API key via the token introspection endpoint.

Invariants:
    - Success → {"success": true, "message", "data"}
    - Upstream failure → upstream status with {"success": false, "message", "details"}
    - Same behavior for GET and POST
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from relay.api.dependencies import get_webflow_client
from relay.core.errors import UpstreamError, UpstreamUnavailableError
from relay.infrastructure.upstream_client import UpstreamClient

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])

AUTHORIZED_BY_PATH = "/v2/token/authorized_by"


@router.api_route("/test_auth", methods=["GET", "POST"])
async def test_auth(webflow: UpstreamClient = Depends(get_webflow_client)):
    try:
        data = await webflow.request(
            "GET", AUTHORIZED_BY_PATH, operation="verify Webflow credentials",
        )
    except (UpstreamError, UpstreamUnavailableError) as e:
        logger.warning(
            f"Authorization check failed: {e.message}",
            extra={"upstream": "webflow", "status_code": e.http_status},
        )
        return JSONResponse(
            status_code=e.http_status,
            content={
                "success": False,
                "message": "Authorization failed.",
                "details": e.details,
            },
        )
    return {"success": True, "message": "Authorization successful!", "data": data}
