"""HTTP transport capability used by carrier clients.

Carrier clients depend on the ``HttpTransport`` protocol, not on httpx
directly, so tests can inject a stub. ``HttpxTransport`` is the default
implementation over a shared ``httpx.AsyncClient``.

Transport failures are raised as ``TransportTimeout`` or
``TransportError``; HTTP error statuses are returned, never raised, since
interpreting them is the carrier client's job.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30_000


class TransportError(Exception):
    """Request could not be completed (connection, DNS, protocol)."""


class TransportTimeout(TransportError):
    """Request exceeded its timeout and was aborted."""


@dataclass(frozen=True)
class HttpResponse:
    """Status, headers, and decoded body of an HTTP response.

    Attributes:
        status: HTTP status code.
        headers: Response headers.
        body: Decoded JSON when the response declared JSON, else the text.
    """

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None


class HttpTransport(Protocol):
    """Capability to POST JSON or form bodies with a per-call timeout."""

    async def post(
        self,
        url: str,
        json_body: Any,
        *,
        headers: Mapping[str, str] | None = None,
        timeout_ms: float | None = None,
    ) -> HttpResponse:
        ...

    async def post_form(
        self,
        url: str,
        form: Mapping[str, str],
        *,
        headers: Mapping[str, str] | None = None,
        timeout_ms: float | None = None,
    ) -> HttpResponse:
        ...


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body.

    JSON is parsed only when the content type says so and the text is
    non-empty; undecodable JSON falls back to the raw text.
    """
    text = response.text
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type and text:
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return text
    return text


class HttpxTransport:
    """HttpTransport implementation backed by httpx.AsyncClient.

    Usage:
        async with HttpxTransport(default_timeout_ms=10_000) as transport:
            resp = await transport.post(url, {"a": 1})
    """

    def __init__(
        self,
        default_timeout_ms: float = DEFAULT_TIMEOUT_MS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            default_timeout_ms: Timeout applied when a call passes none.
            client: Optional pre-built client (e.g. with a MockTransport).
        """
        self._default_timeout_ms = default_timeout_ms
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _timeout(self, timeout_ms: float | None) -> float:
        ms = self._default_timeout_ms if timeout_ms is None else timeout_ms
        return ms / 1000.0

    async def _send(
        self,
        url: str,
        timeout_ms: float | None,
        headers: dict[str, str],
        **kwargs: Any,
    ) -> HttpResponse:
        try:
            resp = await self._get_client().post(
                url, headers=headers, timeout=self._timeout(timeout_ms), **kwargs,
            )
        except httpx.TimeoutException as e:
            raise TransportTimeout(f"Request to {url} timed out") from e
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__) from e

        logger.debug("POST %s -> %d", url, resp.status_code)
        return HttpResponse(
            status=resp.status_code,
            headers=dict(resp.headers),
            body=decode_body(resp),
        )

    async def post(
        self,
        url: str,
        json_body: Any,
        *,
        headers: Mapping[str, str] | None = None,
        timeout_ms: float | None = None,
    ) -> HttpResponse:
        """POST a JSON body."""
        merged = {"Content-Type": "application/json", **(headers or {})}
        return await self._send(
            url, timeout_ms, merged, content=json.dumps(json_body).encode("utf-8"),
        )

    async def post_form(
        self,
        url: str,
        form: Mapping[str, str],
        *,
        headers: Mapping[str, str] | None = None,
        timeout_ms: float | None = None,
    ) -> HttpResponse:
        """POST a url-encoded form body."""
        merged = {"Content-Type": "application/x-www-form-urlencoded", **(headers or {})}
        return await self._send(url, timeout_ms, merged, data=dict(form))
