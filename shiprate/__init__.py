"""shiprate: carrier-agnostic shipping rate quotes.

Turns a carrier-agnostic rate request into a carrier API call and back
into a normalized quote list. UPS is the supported carrier.
"""

from shiprate.config import AppConfig, ConfigError, UPSConfig, load_config
from shiprate.domain import (
    Address,
    CarrierId,
    PackageDimensions,
    Parcel,
    RateQuote,
    RateQuoteResult,
    RateRequest,
    validate_rate_request,
)
from shiprate.errors import CarrierError, CarrierErrorDetails, ErrorKind
from shiprate.services.shipping_service import (
    ShippingCarrierService,
    create_shipping_service,
)

__all__ = [
    "Address",
    "AppConfig",
    "CarrierError",
    "CarrierErrorDetails",
    "CarrierId",
    "ConfigError",
    "ErrorKind",
    "PackageDimensions",
    "Parcel",
    "RateQuote",
    "RateQuoteResult",
    "RateRequest",
    "ShippingCarrierService",
    "UPSConfig",
    "create_shipping_service",
    "load_config",
    "validate_rate_request",
]
