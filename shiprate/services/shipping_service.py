"""Public rate-quoting entry point.

``ShippingCarrierService`` validates a raw request, looks up the adapter
for the requested carrier, and delegates. ``create_shipping_service``
builds the registry from config: an adapter is registered only for a
carrier whose credentials are present.

Example:
    service = create_shipping_service()
    result = await service.get_rates({
        "origin": {...}, "destination": {...}, "package": {...},
    })
"""

import logging
from collections.abc import Mapping
from typing import Any

from shiprate.config import AppConfig, load_config
from shiprate.domain.models import RateQuoteResult, RateRequest
from shiprate.domain.validation import validate_rate_request
from shiprate.errors import CarrierError
from shiprate.services.carrier import CarrierAdapter, UPSCarrier
from shiprate.services.http_transport import HttpTransport, HttpxTransport
from shiprate.services.ups_constants import UPS_CARRIER_ID

logger = logging.getLogger(__name__)


class ShippingCarrierService:
    """Dispatches rate requests to registered carrier adapters."""

    def __init__(self, adapters: Mapping[str, CarrierAdapter]) -> None:
        self._adapters = dict(adapters)

    @property
    def carrier_ids(self) -> list[str]:
        """Identifiers of registered carriers."""
        return sorted(self._adapters)

    def get_adapter(self, carrier_id: str) -> CarrierAdapter | None:
        return self._adapters.get(carrier_id)

    async def get_rates(
        self,
        request: RateRequest | Mapping[str, Any],
        carrier_id: str = UPS_CARRIER_ID,
    ) -> RateQuoteResult:
        """Get normalized rate quotes from one carrier.

        Validation happens before any network call.

        Args:
            request: RateRequest or raw mapping.
            carrier_id: Registered carrier identifier.

        Returns:
            RateQuoteResult.

        Raises:
            CarrierError: VALIDATION_ERROR for schema violations and
                unsupported carriers, otherwise the carrier's error kind.
        """
        validated = validate_rate_request(request)

        adapter = self._adapters.get(carrier_id)
        if adapter is None:
            raise CarrierError.validation(f"Unsupported carrier: {carrier_id}")
        if "rate" not in adapter.supported_operations:
            raise CarrierError.validation(
                f"Carrier {carrier_id} does not support rate operation"
            )

        return await adapter.execute_rate(validated)


def create_shipping_service(
    config: AppConfig | None = None,
    transport: HttpTransport | None = None,
) -> ShippingCarrierService:
    """Build a service with adapters for every configured carrier.

    Args:
        config: Resolved config; loaded from file/env when None
            (credentials optional).
        transport: HTTP transport; an HttpxTransport using the configured
            timeout when None.

    Returns:
        ShippingCarrierService.
    """
    cfg = config if config is not None else load_config(require_ups=False)
    http = transport if transport is not None else HttpxTransport(cfg.http_timeout_ms)

    adapters: dict[str, CarrierAdapter] = {}
    if cfg.ups.is_configured:
        adapters[UPS_CARRIER_ID] = UPSCarrier(
            cfg.ups, http, cfg.transaction_src, cfg.http_timeout_ms,
        )
    else:
        logger.info("UPS credentials not configured; UPS adapter not registered")

    return ShippingCarrierService(adapters)
