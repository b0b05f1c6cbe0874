"""FoxyCart Token Provider — refresh-token grant with an expiring in-memory cache.

Invariants:
    - At most one token request in flight (asyncio.Lock)
    - Cached token reused until expires_in minus skew seconds have elapsed
    - Token endpoint failures map to UpstreamError / UpstreamUnavailableError
    - Credentials come from Settings, never hardcoded

Design Decisions:
    - Lazy refresh on demand instead of a background task: no work while idle
    - time.monotonic for expiry: immune to wall-clock jumps
"""

import asyncio
import logging
import time
from typing import Callable

import httpx

from relay.core.errors import ErrorContext, UpstreamError, UpstreamUnavailableError
from relay.infrastructure.upstream_client import read_error_body

logger = logging.getLogger(__name__)

TOKEN_PATH = "/token"
_OPERATION = "refresh cart access token"
# Used when the token endpoint omits expires_in
_DEFAULT_EXPIRES_IN = 3600


class FoxyCartTokenProvider:
    """Issues FoxyCart access tokens and caches them until near expiry."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        client_id: str,
        client_secret: str,
        refresh_token: str,
        expiry_skew_seconds: int = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._http = http_client
        self._client_id = client_id
        self._client_secret = client_secret
        self._refresh_token = refresh_token
        self._skew = expiry_skew_seconds
        self._clock = clock
        self._lock = asyncio.Lock()
        self._token: str | None = None
        self._expires_at = 0.0

    @property
    def has_valid_token(self) -> bool:
        return self._token is not None and self._clock() < self._expires_at

    def invalidate(self) -> None:
        self._token = None
        self._expires_at = 0.0

    async def get_token(self) -> str:
        """Return a cached token, refreshing it first when expired."""
        if self.has_valid_token:
            return self._token
        async with self._lock:
            # Another request may have refreshed while we waited
            if self.has_valid_token:
                return self._token
            await self._refresh()
            return self._token

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _refresh(self) -> None:
        context = ErrorContext(upstream="foxycart", operation=_OPERATION)
        try:
            response = await self._http.post(
                TOKEN_PATH,
                data={
                    "grant_type": "refresh_token",
                    "refresh_token": self._refresh_token,
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                },
                headers={"FOXY-API-VERSION": "1"},
            )
        except httpx.TransportError as e:
            logger.error(
                f"FoxyCart token request failed: {type(e).__name__}: {e}",
                extra={"upstream": "foxycart", "operation": _OPERATION},
            )
            raise UpstreamUnavailableError(_OPERATION, context=context) from e

        if not response.is_success:
            details = read_error_body(response)
            logger.warning(
                f"FoxyCart token endpoint rejected refresh: {details}",
                extra={"upstream": "foxycart", "status_code": response.status_code},
            )
            raise UpstreamError(
                _OPERATION, response.status_code, details, context=context,
            )

        try:
            payload = response.json()
            token = payload["access_token"]
            expires_in = float(payload.get("expires_in") or _DEFAULT_EXPIRES_IN)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise UpstreamError(
                _OPERATION, 502, read_error_body(response), context=context,
            ) from e

        self._token = token
        self._expires_at = self._clock() + max(expires_in - self._skew, 0.0)
        logger.info(
            f"FoxyCart access token refreshed (expires in {expires_in}s)",
            extra={"upstream": "foxycart", "operation": _OPERATION},
        )
