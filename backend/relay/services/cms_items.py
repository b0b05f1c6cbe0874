"""CMS Collection Items — read every item of one collection, optionally projected.

Invariants:
    - Pages through /v2/collections/{id}/items with limit/offset until pagination.total
    - Empty projection → raw payload (items merged across pages)
    - Non-empty projection → list of projected records, same length as items
"""

import logging
from typing import Any

from relay.core.projection import FieldProjection, project_records
from relay.infrastructure.upstream_client import UpstreamClient

logger = logging.getLogger(__name__)

_OPERATION = "fetch collection items"


def _page_items(page: Any) -> list:
    if isinstance(page, dict) and isinstance(page.get("items"), list):
        return page["items"]
    return []


def _page_total(page: Any, default: int) -> int:
    pagination = page.get("pagination") if isinstance(page, dict) else None
    total = pagination.get("total") if isinstance(pagination, dict) else None
    return total if isinstance(total, int) else default


async def fetch_collection_items(
    client: UpstreamClient, collection_id: str, page_size: int = 100,
) -> Any:
    """Fetch all items of a collection; returns the first page's payload
    with ``items`` holding every item."""
    path = f"/v2/collections/{collection_id}/items"
    first = await client.request(
        "GET", path, operation=_OPERATION,
        params={"limit": page_size, "offset": 0},
    )
    if not isinstance(first, dict):
        return first

    items = list(_page_items(first))
    total = _page_total(first, len(items))
    pages = 1
    while len(items) < total:
        page = await client.request(
            "GET", path, operation=_OPERATION,
            params={"limit": page_size, "offset": len(items)},
        )
        batch = _page_items(page)
        if not batch:
            break
        items.extend(batch)
        pages += 1

    if pages == 1:
        return first
    logger.info(
        f"Fetched {len(items)} items from collection {collection_id} in {pages} pages",
        extra={"upstream": client.name},
    )
    return {
        **first,
        "items": items,
        "pagination": {"limit": len(items), "offset": 0, "total": total},
    }


async def list_cms_items(
    client: UpstreamClient,
    collection_id: str,
    projection: FieldProjection,
    page_size: int = 100,
) -> Any:
    payload = await fetch_collection_items(client, collection_id, page_size)
    if not projection:
        return payload
    return project_records(_page_items(payload), projection)
