"""Airtable Routes — credential ping against the configured base/table.

Invariants:
    - Reads at most one record (maxRecords=1)
    - Unconfigured Airtable → 503 before any upstream call
"""

from urllib.parse import quote

from fastapi import APIRouter, Depends

from relay.api.dependencies import get_airtable_client, get_app_settings
from relay.config import Settings
from relay.infrastructure.upstream_client import UpstreamClient

router = APIRouter(prefix="/airtable", tags=["airtable"])


@router.get("/ping")
async def ping(
    airtable: UpstreamClient = Depends(get_airtable_client),
    settings: Settings = Depends(get_app_settings),
):
    table = quote(settings.airtable_table_id, safe="")
    data = await airtable.request(
        "GET", f"/v0/{settings.airtable_base_id}/{table}",
        operation="reach Airtable", params={"maxRecords": 1},
    )
    records = data.get("records") if isinstance(data, dict) else None
    return {
        "success": True,
        "message": "Airtable connection successful!",
        "record": records[0] if records else None,
    }
