"""Webflow Page Routes — page metadata, DOM content and custom code.

Invariants:
    - Blank page_id → 400 "page_id is required." before any upstream call
    - Body objects validated by schemas/webflow.py (→ 400) before any upstream call
    - Upstream JSON returned unchanged
"""

from fastapi import APIRouter, Depends

from relay.api.dependencies import get_webflow_client
from relay.api.path_params import require_path_param
from relay.infrastructure.upstream_client import UpstreamClient
from relay.schemas.webflow import CustomCodeBody, FieldDataBody, PageContentBody

router = APIRouter(prefix="/webflow/pages", tags=["webflow-pages"])


@router.get("/{page_id:segment}/meta")
async def get_page_meta(
    page_id: str, webflow: UpstreamClient = Depends(get_webflow_client),
):
    page_id = require_path_param(page_id, "page_id")
    return await webflow.request(
        "GET", f"/pages/{page_id}", operation="fetch page metadata",
    )


@router.put("/{page_id:segment}/meta")
async def update_page_meta(
    page_id: str,
    body: FieldDataBody,
    webflow: UpstreamClient = Depends(get_webflow_client),
):
    page_id = require_path_param(page_id, "page_id")
    return await webflow.request(
        "PUT", f"/pages/{page_id}", operation="update page metadata",
        json={"fieldData": body.fieldData},
    )


@router.get("/{page_id:segment}/content")
async def get_page_content(
    page_id: str, webflow: UpstreamClient = Depends(get_webflow_client),
):
    page_id = require_path_param(page_id, "page_id")
    return await webflow.request(
        "GET", f"/pages/{page_id}/dom", operation="fetch page content",
    )


@router.post("/{page_id:segment}/content")
async def update_page_content(
    page_id: str,
    body: PageContentBody,
    webflow: UpstreamClient = Depends(get_webflow_client),
):
    """Update page DOM; script/body identifiers forwarded only when supplied."""
    page_id = require_path_param(page_id, "page_id")
    return await webflow.request(
        "POST", f"/pages/{page_id}/dom", operation="update page content",
        json=body.model_dump(exclude_unset=True),
    )


@router.get("/{page_id:segment}/custom_code")
async def get_custom_code(
    page_id: str, webflow: UpstreamClient = Depends(get_webflow_client),
):
    page_id = require_path_param(page_id, "page_id")
    return await webflow.request(
        "GET", f"/pages/{page_id}/custom_code",
        operation="fetch custom code for page",
    )


@router.put("/{page_id:segment}/custom_code")
async def upsert_custom_code(
    page_id: str,
    body: CustomCodeBody,
    webflow: UpstreamClient = Depends(get_webflow_client),
):
    page_id = require_path_param(page_id, "page_id")
    return await webflow.request(
        "PUT", f"/pages/{page_id}/custom_code",
        operation="add/update custom code for page",
        json={"customCode": body.customCode},
    )
