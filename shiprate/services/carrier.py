"""Carrier adapter interface and the UPS implementation.

An adapter exposes the operations a carrier supports behind one shared
shape, so the service can dispatch by carrier id without knowing wire
details.
"""

import time
from typing import Callable, Protocol

from shiprate.config import UPSConfig
from shiprate.domain.models import CarrierId, OperationType, RateQuoteResult, RateRequest
from shiprate.services.http_transport import HttpTransport
from shiprate.services.ups_auth import UPSAuthClient
from shiprate.services.ups_constants import UPS_CARRIER_ID
from shiprate.services.ups_rating_client import UPSRatingClient


class CarrierAdapter(Protocol):
    """Capability shared by every carrier adapter."""

    @property
    def carrier_id(self) -> CarrierId:
        ...

    @property
    def supported_operations(self) -> frozenset[OperationType]:
        ...

    async def execute_rate(self, request: RateRequest) -> RateQuoteResult:
        ...


class UPSCarrier:
    """UPS adapter: owns one token cache and one rating client."""

    carrier_id: CarrierId = UPS_CARRIER_ID
    supported_operations: frozenset[OperationType] = frozenset({"rate"})

    def __init__(
        self,
        config: UPSConfig,
        transport: HttpTransport,
        transaction_src: str,
        timeout_ms: float,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.auth = UPSAuthClient(config, transport, timeout_ms, clock=clock)
        self.rating = UPSRatingClient(
            config, self.auth, transport, transaction_src, timeout_ms,
        )

    async def execute_rate(self, request: RateRequest) -> RateQuoteResult:
        """Rate a validated request against UPS."""
        return await self.rating.get_rates(request)
