"""UPS Rating API client.

Runs one logical rate call: build the wire request, attach a bearer
token, send, and either parse the quotes or raise a CarrierError.

A 401 on the rating call triggers exactly one token refresh and one
re-send of the same payload. Nothing else is retried here; 429 and 5xx
are raised with ``retryable=True`` and left to the caller's backoff.

Example:
    client = UPSRatingClient(config, auth, transport, "cybership", 30_000)
    result = await client.get_rates(request)
"""

import logging
import re
import secrets
import string
import time
from typing import Any, Callable

from shiprate.config import UPSConfig
from shiprate.domain.models import RateQuoteResult, RateRequest
from shiprate.errors import CarrierError, extract_ups_error
from shiprate.services.http_transport import (
    HttpResponse,
    HttpTransport,
    TransportError,
    TransportTimeout,
)
from shiprate.services.ups_auth import UPSAuthClient
from shiprate.services.ups_constants import (
    UPS_RATING_VERSION,
    UPS_TRANS_ID_HEADER,
    UPS_TRANS_ID_MAX_LEN,
    UPS_TRANSACTION_SRC_HEADER,
)
from shiprate.services.ups_payload_builder import build_rating_request, request_option_for
from shiprate.services.ups_response_parser import parse_rating_response
from shiprate.utils.redaction import redact_headers, sanitize_error_message

logger = logging.getLogger(__name__)

_API_SUFFIX = re.compile(r"/api/?$")
_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_request_id(clock: Callable[[], float] = time.time) -> str:
    """Generate a correlation id: ``ups-<epoch ms>-<7 random base36 chars>``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(7))
    return f"ups-{int(clock() * 1000)}-{suffix}"


class UPSRatingClient:
    """Client for the UPS Rating API.

    Attributes:
        _config: UPS credentials and base URL.
        _auth: Token cache shared with other calls on this carrier.
        _transport: HTTP transport capability.
        _transaction_src: Value of the transactionSrc header.
        _timeout_ms: Per-call timeout for rating requests.
    """

    def __init__(
        self,
        config: UPSConfig,
        auth: UPSAuthClient,
        transport: HttpTransport,
        transaction_src: str,
        timeout_ms: float,
        request_id_factory: Callable[[], str] = new_request_id,
    ) -> None:
        self._config = config
        self._auth = auth
        self._transport = transport
        self._transaction_src = transaction_src
        self._timeout_ms = timeout_ms
        self._request_id_factory = request_id_factory

    def rating_url(self, request: RateRequest) -> str:
        """Rating endpoint for the request's mode (Rate or Shop)."""
        base = _API_SUFFIX.sub("", self._config.base_url.rstrip("/"))
        option = request_option_for(request).value
        return f"{base}/api/rating/{UPS_RATING_VERSION}/{option}"

    def _headers(self, token: str, request_id: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            UPS_TRANS_ID_HEADER: request_id[:UPS_TRANS_ID_MAX_LEN],
            UPS_TRANSACTION_SRC_HEADER: self._transaction_src,
        }

    async def _send(
        self,
        url: str,
        payload: dict[str, Any],
        token: str,
        request_id: str,
    ) -> HttpResponse:
        """POST the payload, mapping transport failures to CarrierError."""
        headers = self._headers(token, request_id)
        logger.debug("UPS rating POST %s headers=%s", url, redact_headers(headers))
        try:
            return await self._transport.post(
                url, payload, headers=headers, timeout_ms=self._timeout_ms,
            )
        except TransportTimeout as e:
            raise CarrierError.timeout("UPS Rating request timed out") from e
        except TransportError as e:
            raise CarrierError.network(
                f"UPS Rating request failed: {sanitize_error_message(str(e))}"
            ) from e

    async def get_rates(self, request: RateRequest) -> RateQuoteResult:
        """Get normalized rate quotes for a validated request.

        Args:
            request: Validated domain rate request.

        Returns:
            RateQuoteResult with quotes in carrier order and the call's
            correlation id.

        Raises:
            CarrierError: AUTH_FAILED, AUTH_TOKEN_EXPIRED, NETWORK_ERROR,
                TIMEOUT, RATE_LIMITED, BAD_REQUEST, or CARRIER_ERROR.
        """
        url = self.rating_url(request)
        payload = build_rating_request(request)
        request_id = self._request_id_factory()

        token = await self._auth.get_token()
        res = await self._send(url, payload, token, request_id)

        if res.status == 401:
            logger.warning(
                "UPS rejected access token (request %s); refreshing and retrying once",
                request_id,
            )
            try:
                token = await self._auth.refresh_token(rejected_token=token)
                res = await self._send(url, payload, token, request_id)
            except CarrierError as e:
                raise CarrierError.token_expired(
                    "UPS token expired and refresh failed"
                ) from e
            if res.status == 401:
                raise CarrierError.token_expired(
                    "UPS rejected the refreshed access token"
                )

        self._raise_for_status(res)

        quotes = parse_rating_response(res.body)
        logger.info(
            "UPS rating call %s returned %d quote(s)", request_id, len(quotes),
        )
        return RateQuoteResult(quotes=tuple(quotes), request_id=request_id)

    @staticmethod
    def _raise_for_status(res: HttpResponse) -> None:
        """Raise the CarrierError for a non-200 rating response.

        Raises:
            CarrierError: RATE_LIMITED (429), BAD_REQUEST (400/403), or
                CARRIER_ERROR (anything else, retryable when >= 500).
        """
        if res.status == 200:
            return

        logger.warning("UPS Rating returned %d", res.status)
        carrier_code, carrier_message = extract_ups_error(res.body)

        if res.status == 429:
            raise CarrierError.rate_limited("UPS rate limit exceeded", res.status)

        if res.status in (400, 403):
            raise CarrierError.bad_request(
                carrier_message or f"UPS returned {res.status}",
                status_code=res.status,
                carrier_code=carrier_code,
            )

        raise CarrierError.carrier_error(
            f"UPS Rating returned {res.status}",
            status_code=res.status,
            carrier_code=carrier_code,
            retryable=res.status >= 500,
        )
