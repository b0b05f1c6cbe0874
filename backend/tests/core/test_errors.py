"""Error Hierarchy — status codes and response envelopes of relay errors."""

from relay.core.errors import (
    ErrorCategory,
    InvalidProxyTargetError,
    MissingParameterError,
    ProxyTargetForbiddenError,
    RelayError,
    ServiceNotConfiguredError,
    UpstreamError,
    UpstreamUnavailableError,
)


def test_missing_parameter_is_400_with_name_in_message():
    err = MissingParameterError("page_id")
    assert err.http_status == 400
    assert err.message == "page_id is required."
    assert err.category == ErrorCategory.VALIDATION


def test_upstream_error_mirrors_status_and_carries_details():
    err = UpstreamError("fetch page metadata", 404, {"message": "Page not found"})
    assert err.http_status == 404
    assert err.message == "Failed to fetch page metadata."
    body = err.to_response()["error"]
    assert body["code"] == "UPSTREAM_ERROR"
    assert body["details"] == {"message": "Page not found"}


def test_upstream_error_defaults_to_500_without_status():
    assert UpstreamError("fetch page metadata", None).http_status == 500


def test_upstream_unavailable_is_generic_500():
    err = UpstreamUnavailableError("fetch page metadata")
    assert err.http_status == 500
    assert err.message == "Internal Server Error"
    assert err.details == {"message": "Internal Server Error"}
    assert err.context.operation == "fetch page metadata"


def test_response_omits_details_when_absent():
    body = ServiceNotConfiguredError("Airtable").to_response()["error"]
    assert "details" not in body
    assert body["code"] == "SERVICE_NOT_CONFIGURED"


def test_proxy_errors_status_codes():
    assert InvalidProxyTargetError("nope").http_status == 400
    assert ProxyTargetForbiddenError("evil.example").http_status == 403


def test_all_errors_share_base_class():
    for err in (
        MissingParameterError("x"),
        UpstreamError("op", 502),
        UpstreamUnavailableError("op"),
        ServiceNotConfiguredError("FoxyCart"),
    ):
        assert isinstance(err, RelayError)
        assert set(err.to_response()["error"]) >= {
            "code", "message", "category", "severity", "timestamp",
        }
