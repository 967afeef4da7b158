"""UPS OAuth token cache.

Owns the single bearer credential for one configured UPS account.
``get_token`` reuses the cached token while it has more than
``TOKEN_REFRESH_BUFFER_SECONDS`` left, otherwise exchanges the client
credentials for a new one. ``refresh_token`` is for callers that just
saw the token rejected and must not trust the cache.

Acquisition is single-flight: an ``asyncio.Lock`` serializes exchanges,
and callers that waited on the lock re-check the cache before issuing
their own exchange, so N concurrent callers with a stale cache cause one
token request. The cache does not retry; retry policy belongs to the
rating client.
"""

import asyncio
import base64
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Callable

from shiprate.config import UPSConfig
from shiprate.errors import CarrierError
from shiprate.services.http_transport import (
    HttpTransport,
    TransportError,
    TransportTimeout,
)
from shiprate.services.ups_constants import (
    TOKEN_REFRESH_BUFFER_SECONDS,
    UPS_OAUTH_GRANT_TYPE,
    UPS_TOKEN_PATH,
)
from shiprate.utils.redaction import redact_for_logging, sanitize_error_message

logger = logging.getLogger(__name__)

_API_SUFFIX = re.compile(r"/api/?$")


@dataclass(frozen=True)
class CachedToken:
    """Bearer token plus its absolute expiry (epoch seconds).

    Replaced wholesale on refresh, never mutated.
    """

    access_token: str
    expires_at: float

    def is_fresh(self, now: float, buffer_seconds: float = TOKEN_REFRESH_BUFFER_SECONDS) -> bool:
        """Whether the token outlives ``now`` by more than the buffer."""
        return self.expires_at > now + buffer_seconds


def _parse_expires_in(value: Any) -> float | None:
    """Parse ``expires_in`` seconds; UPS sends it as a number or numeric string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        seconds = float(value)
    elif isinstance(value, str):
        try:
            seconds = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if seconds != seconds or seconds in (float("inf"), float("-inf")):
        return None
    return seconds


class UPSAuthClient:
    """One-slot OAuth token cache for a UPS client-credentials pair.

    Attributes:
        _config: UPS credentials and base URL.
        _transport: HTTP transport capability.
        _timeout_ms: Per-call timeout for the token exchange.
        _clock: Returns current epoch seconds (injectable for tests).
        _cache: The live CachedToken, or None.
        _lock: Serializes token exchanges.
    """

    def __init__(
        self,
        config: UPSConfig,
        transport: HttpTransport,
        timeout_ms: float,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._transport = transport
        self._timeout_ms = timeout_ms
        self._clock = clock
        self._cache: CachedToken | None = None
        self._lock = asyncio.Lock()

    @property
    def token_url(self) -> str:
        """Token endpoint: base URL without a trailing ``/api``."""
        base = _API_SUFFIX.sub("", self._config.base_url.rstrip("/"))
        return f"{base}{UPS_TOKEN_PATH}"

    @property
    def cached_token(self) -> CachedToken | None:
        """The currently cached token, if any."""
        return self._cache

    def _fresh_cached(self) -> str | None:
        cached = self._cache
        if cached is not None and cached.is_fresh(self._clock()):
            return cached.access_token
        return None

    async def get_token(self) -> str:
        """Return a usable bearer token, exchanging credentials if needed.

        Raises:
            CarrierError: AUTH_FAILED, NETWORK_ERROR, or TIMEOUT.
        """
        token = self._fresh_cached()
        if token is not None:
            return token
        async with self._lock:
            # Another caller may have refreshed while we waited
            token = self._fresh_cached()
            if token is not None:
                return token
            return await self._acquire()

    async def refresh_token(self, rejected_token: str | None = None) -> str:
        """Discard the cached token and exchange credentials again.

        Args:
            rejected_token: The token the server just rejected. When given
                and a concurrent refresh already replaced it, the newer
                token is returned without another exchange.

        Raises:
            CarrierError: AUTH_FAILED, NETWORK_ERROR, or TIMEOUT.
        """
        async with self._lock:
            cached = self._cache
            if (
                rejected_token is not None
                and cached is not None
                and cached.access_token != rejected_token
                and cached.is_fresh(self._clock())
            ):
                return cached.access_token
            self._cache = None
            return await self._acquire()

    def clear_cache(self) -> None:
        """Drop the cached token."""
        self._cache = None

    def _basic_auth_header(self) -> str:
        raw = f"{self._config.client_id}:{self._config.client_secret}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")

    async def _acquire(self) -> str:
        """Exchange client credentials for a token and cache it.

        Must be called with ``_lock`` held.
        """
        url = self.token_url
        try:
            res = await self._transport.post_form(
                url,
                {"grant_type": UPS_OAUTH_GRANT_TYPE},
                headers={"Authorization": self._basic_auth_header()},
                timeout_ms=self._timeout_ms,
            )
        except TransportTimeout as e:
            raise CarrierError.timeout("UPS OAuth token request timed out") from e
        except TransportError as e:
            raise CarrierError.network(
                f"UPS OAuth token request failed: {sanitize_error_message(str(e))}"
            ) from e

        if res.status == 401:
            raise CarrierError.auth_failed("Invalid UPS client ID or secret")

        if res.status != 200:
            description = None
            if isinstance(res.body, dict):
                description = res.body.get("error_description")
                logger.debug("UPS OAuth error body: %s", redact_for_logging(res.body))
            logger.warning("UPS OAuth returned %d", res.status)
            raise CarrierError.auth_failed(
                str(description) if description else f"UPS OAuth returned {res.status}"
            )

        data = res.body if isinstance(res.body, dict) else {}
        access_token = data.get("access_token")
        expires_in = _parse_expires_in(data.get("expires_in"))
        if not access_token or not isinstance(access_token, str) or expires_in is None:
            raise CarrierError.auth_failed("Invalid UPS token response shape")

        self._cache = CachedToken(
            access_token=access_token,
            expires_at=self._clock() + expires_in,
        )
        if expires_in <= TOKEN_REFRESH_BUFFER_SECONDS:
            # Usable for this call only; the next get_token exchanges again
            logger.warning(
                "UPS token lifetime %ds is within the %ds refresh buffer",
                int(expires_in), int(TOKEN_REFRESH_BUFFER_SECONDS),
            )
        logger.info("Acquired UPS access token (expires in %ds)", int(expires_in))
        return access_token
