"""Webflow Page Routes — relay of page metadata, content and custom code.

Invariants:
    - Blank page_id → 400 "page_id is required." and no outbound call
    - Missing / non-object fieldData or customCode → 400 and no outbound call
    - Upstream non-2xx → same status, upstream body under error.details
    - Network failure → 500 with generic message
"""

import json

import httpx
import pytest
from respx import MockRouter

WEBFLOW = "https://api.webflow.com"


# ─── Happy paths ────────────────────────────────────────────────

async def test_get_page_meta(client, respx_mock: MockRouter):
    page = {"id": "page-1", "title": "Home", "slug": "home"}
    route = respx_mock.get(f"{WEBFLOW}/pages/page-1").mock(
        return_value=httpx.Response(200, json=page),
    )

    res = await client.get("/webflow/pages/page-1/meta")

    assert res.status_code == 200
    assert res.json() == page
    assert route.calls.last.request.headers["authorization"] == "Bearer wf-test-key"


async def test_update_page_meta_forwards_field_data(client, respx_mock: MockRouter):
    route = respx_mock.put(f"{WEBFLOW}/pages/page-1").mock(
        return_value=httpx.Response(200, json={"id": "page-1", "title": "New"}),
    )

    res = await client.put(
        "/webflow/pages/page-1/meta",
        json={"fieldData": {"title": "New"}, "ignored": 1},
    )

    assert res.status_code == 200
    assert json.loads(route.calls.last.request.content) == {"fieldData": {"title": "New"}}


async def test_get_page_content_hits_dom_endpoint(client, respx_mock: MockRouter):
    respx_mock.get(f"{WEBFLOW}/pages/page-1/dom").mock(
        return_value=httpx.Response(200, json={"nodes": []}),
    )

    res = await client.get("/webflow/pages/page-1/content")

    assert res.json() == {"nodes": []}


async def test_update_page_content_forwards_identifiers(client, respx_mock: MockRouter):
    route = respx_mock.post(f"{WEBFLOW}/pages/page-1/dom").mock(
        return_value=httpx.Response(200, json={"ok": True}),
    )

    res = await client.post("/webflow/pages/page-1/content", json={
        "fieldData": {"text": "Hello"},
        "script_id": "s-1",
        "script_version": "1.0.0",
    })

    assert res.status_code == 200
    assert json.loads(route.calls.last.request.content) == {
        "fieldData": {"text": "Hello"},
        "script_id": "s-1",
        "script_version": "1.0.0",
    }


async def test_get_custom_code(client, respx_mock: MockRouter):
    respx_mock.get(f"{WEBFLOW}/pages/page-1/custom_code").mock(
        return_value=httpx.Response(200, json={"scripts": []}),
    )

    res = await client.get("/webflow/pages/page-1/custom_code")

    assert res.json() == {"scripts": []}


async def test_put_custom_code_forwards_object(client, respx_mock: MockRouter):
    route = respx_mock.put(f"{WEBFLOW}/pages/page-1/custom_code").mock(
        return_value=httpx.Response(200, json={"scripts": [{"id": "s-1"}]}),
    )
    custom = {"scripts": [{"id": "s-1", "location": "header", "version": "1.0.0"}]}

    res = await client.put(
        "/webflow/pages/page-1/custom_code", json={"customCode": custom},
    )

    assert res.status_code == 200
    assert json.loads(route.calls.last.request.content) == {"customCode": custom}


# ─── Validation (no outbound call) ──────────────────────────────

@pytest.mark.parametrize("method,suffix", [
    ("GET", "meta"), ("GET", "content"), ("GET", "custom_code"),
])
@pytest.mark.parametrize("page_id", ["", "%20"])
async def test_blank_page_id_is_400(
    client, respx_mock: MockRouter, method, suffix, page_id,
):
    res = await client.request(method, f"/webflow/pages/{page_id}/{suffix}")

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "page_id is required."
    assert len(respx_mock.calls) == 0


async def test_blank_page_id_with_valid_body_is_400(client, respx_mock: MockRouter):
    res = await client.put(
        "/webflow/pages/%20/meta", json={"fieldData": {"title": "x"}},
    )

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "MISSING_PARAMETER"
    assert len(respx_mock.calls) == 0


@pytest.mark.parametrize("body", [
    {}, {"fieldData": None}, {"fieldData": "title"}, {"fieldData": [1, 2]},
])
async def test_invalid_field_data_is_400(client, respx_mock: MockRouter, body):
    res = await client.put("/webflow/pages/page-1/meta", json=body)

    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "Valid fieldData object is required."
    assert len(respx_mock.calls) == 0


async def test_missing_body_is_400(client, respx_mock: MockRouter):
    res = await client.post("/webflow/pages/page-1/content")

    assert res.status_code == 400
    assert len(respx_mock.calls) == 0


async def test_invalid_custom_code_is_400(client, respx_mock: MockRouter):
    res = await client.put(
        "/webflow/pages/page-1/custom_code", json={"customCode": "<script>"},
    )

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Valid customCode object is required."
    assert len(respx_mock.calls) == 0


# ─── Upstream failures ──────────────────────────────────────────

async def test_upstream_error_status_and_details_mirrored(
    client, respx_mock: MockRouter,
):
    upstream_error = {"code": "resource_not_found", "message": "Requested resource not found"}
    respx_mock.get(f"{WEBFLOW}/pages/nope").mock(
        return_value=httpx.Response(404, json=upstream_error),
    )

    res = await client.get("/webflow/pages/nope/meta")

    assert res.status_code == 404
    error = res.json()["error"]
    assert error["message"] == "Failed to fetch page metadata."
    assert error["details"] == upstream_error


async def test_network_failure_is_generic_500(client, respx_mock: MockRouter):
    respx_mock.get(f"{WEBFLOW}/pages/page-1/dom").mock(
        side_effect=httpx.ConnectError("connection refused"),
    )

    res = await client.get("/webflow/pages/page-1/content")

    assert res.status_code == 500
    error = res.json()["error"]
    assert error["message"] == "Internal Server Error"
    assert "connection refused" not in res.text
