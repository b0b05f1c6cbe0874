"""Credential Check — /test_auth success and failure envelopes."""

import httpx
import pytest
from respx import MockRouter

AUTHORIZED_BY = "https://api.webflow.com/v2/token/authorized_by"


@pytest.mark.parametrize("method", ["GET", "POST"])
async def test_success(client, respx_mock: MockRouter, method):
    user = {"id": "u-1", "email": "owner@example.com"}
    respx_mock.get(AUTHORIZED_BY).mock(return_value=httpx.Response(200, json=user))

    res = await client.request(method, "/test_auth")

    assert res.status_code == 200
    assert res.json() == {
        "success": True, "message": "Authorization successful!", "data": user,
    }


async def test_rejected_key_mirrors_status(client, respx_mock: MockRouter):
    respx_mock.get(AUTHORIZED_BY).mock(
        return_value=httpx.Response(401, json={"err": "Unauthorized"}),
    )

    res = await client.get("/test_auth")

    assert res.status_code == 401
    assert res.json() == {
        "success": False,
        "message": "Authorization failed.",
        "details": {"err": "Unauthorized"},
    }


async def test_network_failure_is_500(client, respx_mock: MockRouter):
    respx_mock.get(AUTHORIZED_BY).mock(side_effect=httpx.ConnectTimeout("slow"))

    res = await client.get("/test_auth")

    assert res.status_code == 500
    assert res.json()["success"] is False
    assert res.json()["details"] == {"message": "Internal Server Error"}
