"""Error Handlers — catch-all 500 and validation message wording."""

from fastapi import APIRouter
from fastapi.exceptions import RequestValidationError

from relay.api.error_handlers import _describe_first_error


async def test_unexpected_exception_is_generic_500(app, client):
    router = APIRouter()

    @router.get("/boom")
    async def boom():
        raise RuntimeError("secret internal detail")

    app.include_router(router)

    res = await client.get("/boom")

    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["message"] == "An unexpected error occurred"
    assert "secret internal detail" not in res.text


def test_describe_object_field():
    errors = [{"loc": ("body", "fieldData"), "type": "dict_type"}]
    assert _describe_first_error(errors) == "Valid fieldData object is required."


def test_describe_nested_field():
    errors = [{"loc": ("body", "fieldData", "name"), "type": "missing"}]
    assert _describe_first_error(errors) == "Valid fieldData.name is required."


def test_describe_whole_body_missing():
    errors = [{"loc": ("body",), "type": "missing"}]
    assert _describe_first_error(errors) == "Invalid request data"


def test_describe_malformed_json():
    errors = RequestValidationError(
        [{"loc": ("body", 7), "type": "json_invalid", "msg": "JSON decode error"}],
    ).errors()
    assert _describe_first_error(errors) == "Invalid request data"
