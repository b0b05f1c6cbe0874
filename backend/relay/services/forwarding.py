"""Forwarding Helpers — header filtering and proxy target resolution.

Invariants:
    - Host and Origin never forwarded; Content-Length recomputed by httpx
    - Accept-Encoding dropped: httpx negotiates and decodes the upstream body itself
    - Proxy targets must be absolute http(s) URLs whose host is allow-listed
    - Empty allow-list rejects every target (proxy disabled)
"""

import re
from collections.abc import Iterable, Mapping

import httpx

from relay.core.errors import InvalidProxyTargetError, ProxyTargetForbiddenError

STRIPPED_REQUEST_HEADERS = frozenset({
    "host", "origin", "content-length", "connection", "transfer-encoding",
    "accept-encoding",
})

# Some clients and servers collapse "https://" to "https:/" inside a path
_COLLAPSED_SCHEME = re.compile(r"^(https?):/+", re.IGNORECASE)


def forwardable_headers(
    headers: Mapping[str, str], extra_stripped: Iterable[str] = (),
) -> dict[str, str]:
    stripped = STRIPPED_REQUEST_HEADERS | {h.lower() for h in extra_stripped}
    return {k: v for k, v in headers.items() if k.lower() not in stripped}


def resolve_proxy_target(
    target: str, query: str, allowed_hosts: Iterable[str],
) -> str:
    """Validate the destination taken from the inbound path; return the full URL."""
    url = _COLLAPSED_SCHEME.sub(lambda m: f"{m.group(1)}://", target.strip(), count=1)
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise InvalidProxyTargetError(target) from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidProxyTargetError(target)

    host = parsed.host.lower()
    if host not in set(allowed_hosts):
        raise ProxyTargetForbiddenError(host)
    return f"{url}?{query}" if query else url
