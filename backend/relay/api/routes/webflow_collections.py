"""Webflow Collection Routes — live items, item creation, CMS item listing, site info.

Invariants:
    - Blank collection_id → 400 before any upstream call
    - POST /webflow forwards only fieldData.name, as a published (non-draft) item
    - /cms/collection/items reads every page; projection comes from Settings
"""

from fastapi import APIRouter, Depends

from relay.api.dependencies import get_app_settings, get_webflow_client
from relay.api.path_params import require_path_param
from relay.config import Settings
from relay.infrastructure.upstream_client import UpstreamClient
from relay.schemas.webflow import CollectionItemCreate, FieldDataBody
from relay.services.cms_items import list_cms_items

router = APIRouter(tags=["webflow-collections"])


@router.get("/webflow/collections/{collection_id:segment}/items/live")
async def get_live_items(
    collection_id: str, webflow: UpstreamClient = Depends(get_webflow_client),
):
    collection_id = require_path_param(collection_id, "collection_id")
    return await webflow.request(
        "GET", f"/collections/{collection_id}/items/live",
        operation="fetch live collection item",
    )


@router.patch("/webflow/collections/{collection_id:segment}/items/live")
async def update_live_items(
    collection_id: str,
    body: FieldDataBody,
    webflow: UpstreamClient = Depends(get_webflow_client),
):
    collection_id = require_path_param(collection_id, "collection_id")
    return await webflow.request(
        "PATCH", f"/collections/{collection_id}/items/live",
        operation="update live collection item",
        json={"fieldData": body.fieldData},
    )


@router.post("/webflow")
async def create_collection_item(
    body: CollectionItemCreate,
    webflow: UpstreamClient = Depends(get_webflow_client),
    settings: Settings = Depends(get_app_settings),
):
    return await webflow.request(
        "POST", f"/v2/collections/{settings.webflow_item_collection_id}/items",
        operation="send data to Webflow API",
        json=body.to_upstream(),
    )


@router.get("/cms/collection/items")
async def get_cms_items(
    webflow: UpstreamClient = Depends(get_webflow_client),
    settings: Settings = Depends(get_app_settings),
):
    """All items of the configured collection, projected when CMS_ITEM_FIELDS is set."""
    return await list_cms_items(
        webflow,
        settings.cms_collection_id,
        settings.cms_item_fields,
        page_size=settings.cms_page_size,
    )


@router.get("/webflow/site")
async def get_site(
    webflow: UpstreamClient = Depends(get_webflow_client),
    settings: Settings = Depends(get_app_settings),
):
    return await webflow.request(
        "GET", f"/v2/sites/{settings.site_id}", operation="fetch site",
    )
