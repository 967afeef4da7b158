"""Carrier-agnostic domain types and request validation."""

from shiprate.domain.models import (
    Address,
    CarrierId,
    OperationType,
    PackageDimensions,
    Parcel,
    RateQuote,
    RateQuoteResult,
    RateRequest,
)
from shiprate.domain.validation import validate_rate_request

__all__ = [
    "Address",
    "CarrierId",
    "OperationType",
    "PackageDimensions",
    "Parcel",
    "RateQuote",
    "RateQuoteResult",
    "RateRequest",
    "validate_rate_request",
]
