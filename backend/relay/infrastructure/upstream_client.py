"""Upstream Client — authenticated forwarding call shared by every route.

Invariants:
    - Body sent only for methods that carry one (never GET/HEAD)
    - 2xx → parsed JSON returned unchanged (None for empty body)
    - non-2xx → UpstreamError with upstream status and body as details
    - transport failure (connect, timeout, protocol) → UpstreamUnavailableError
    - No retries, no backoff: exactly one outbound request per call

Design Decisions:
    - One httpx.AsyncClient per upstream, carrying base_url, timeout and fixed
      headers (static bearer included); per-call auth via an optional TokenProvider
    - Absolute URLs bypass base_url (httpx merge rules), used by the generic proxy
"""

import logging
import time
from typing import Any, Protocol

import httpx

from relay.core.errors import ErrorContext, UpstreamError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

BODYLESS_METHODS = frozenset({"GET", "HEAD"})


class TokenProvider(Protocol):
    async def get_token(self) -> str: ...

    def invalidate(self) -> None: ...


def read_error_body(response: httpx.Response) -> Any:
    """Upstream error payload: JSON when parseable, else raw text, None when empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class UpstreamClient:
    """Forwards one request to a fixed upstream and maps its outcome."""

    def __init__(
        self,
        name: str,
        http_client: httpx.AsyncClient,
        token_provider: TokenProvider | None = None,
    ):
        self.name = name
        self.http = http_client
        self.token_provider = token_provider

    async def request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        json: Any = None,
        content: bytes | None = None,
        params: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Issue one request and return the upstream JSON body."""
        method = method.upper()
        send_headers = dict(headers or {})
        if self.token_provider is not None:
            token = await self.token_provider.get_token()
            send_headers["authorization"] = f"Bearer {token}"

        kwargs: dict[str, Any] = {"params": params, "headers": send_headers}
        if method not in BODYLESS_METHODS:
            if json is not None:
                kwargs["json"] = json
            elif content:
                kwargs["content"] = content

        context = ErrorContext(upstream=self.name, operation=operation)
        started = time.perf_counter()
        try:
            response = await self.http.request(method, path, **kwargs)
        except httpx.TransportError as e:
            logger.error(
                f"{self.name} request failed: {type(e).__name__}: {e}",
                extra={
                    "upstream": self.name, "method": method, "path": path,
                    "operation": operation,
                },
            )
            raise UpstreamUnavailableError(operation, context=context) from e

        duration_ms = round((time.perf_counter() - started) * 1000, 1)
        logger.info(
            f"{self.name} {method} {path} → {response.status_code}",
            extra={
                "upstream": self.name, "method": method, "path": path,
                "status_code": response.status_code, "duration_ms": duration_ms,
            },
        )

        if not response.is_success:
            details = read_error_body(response)
            logger.warning(
                f"{self.name} API error during '{operation}': {details}",
                extra={"upstream": self.name, "status_code": response.status_code},
            )
            if response.status_code == 401 and self.token_provider is not None:
                # Revoked token: the next call fetches a fresh one
                self.token_provider.invalidate()
            raise UpstreamError(
                operation, response.status_code, details, context=context,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                operation, 502, response.text, context=context,
            ) from e

    async def aclose(self) -> None:
        await self.http.aclose()


# ─── Factories ──────────────────────────────────────────────────

def _timeout(seconds: float) -> httpx.Timeout:
    return httpx.Timeout(seconds)


def build_webflow_client(api_key: str, base_url: str, timeout: float) -> UpstreamClient:
    return UpstreamClient("webflow", httpx.AsyncClient(
        base_url=base_url,
        timeout=_timeout(timeout),
        headers={
            "accept": "application/json",
            "authorization": f"Bearer {api_key}",
            "content-type": "application/json",
        },
    ))


def build_airtable_client(api_key: str, base_url: str, timeout: float) -> UpstreamClient:
    return UpstreamClient("airtable", httpx.AsyncClient(
        base_url=base_url,
        timeout=_timeout(timeout),
        headers={
            "accept": "application/json",
            "authorization": f"Bearer {api_key}",
        },
    ))


def build_foxycart_client(
    base_url: str, timeout: float, token_provider: TokenProvider,
) -> UpstreamClient:
    return UpstreamClient("foxycart", httpx.AsyncClient(
        base_url=base_url,
        timeout=_timeout(timeout),
        headers={"FOXY-API-VERSION": "1", "accept": "application/json"},
    ), token_provider=token_provider)


def build_proxy_client(timeout: float) -> UpstreamClient:
    # No default headers: the inbound request's headers are forwarded as-is
    return UpstreamClient("proxy", httpx.AsyncClient(timeout=_timeout(timeout)))
