"""UPS rating response parsing.

Turns a UPS ``RateResponse`` body into normalized RateQuote objects.
Parsing is deliberately lossy: a rated shipment without a usable
monetary amount is dropped rather than failing the whole call, so one
malformed entry in a Shop response does not hide the other services.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from shiprate.domain.models import RateQuote
from shiprate.services.ups_constants import DEFAULT_CURRENCY_CODE, UPS_CARRIER_ID
from shiprate.services.ups_service_codes import SERVICE_CODE_NAMES

logger = logging.getLogger(__name__)


def _to_decimal(value: Any) -> Decimal | None:
    """Parse a UPS numeric string field, returning None unless finite."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _select_charge(rated: dict[str, Any]) -> dict[str, Any]:
    """Pick the charge block to quote from.

    Negotiated (account-specific) charges take precedence over the
    published charge whenever they carry a usable amount; an unparseable
    negotiated value falls back to the published charge.
    """
    negotiated = _as_dict(_as_dict(rated.get("NegotiatedRateCharges")).get("TotalCharge"))
    amount = _to_decimal(negotiated.get("MonetaryValue"))
    if amount is not None and amount >= 0:
        return negotiated
    return _as_dict(rated.get("TotalCharge")) or _as_dict(rated.get("TotalCharges"))


def parse_quote(rated: Any) -> RateQuote | None:
    """Parse one UPS RatedShipment into a RateQuote.

    Args:
        rated: A single ``RatedShipment`` entry.

    Returns:
        RateQuote, or None when the entry has no finite non-negative amount.
    """
    if not isinstance(rated, dict):
        return None

    charge = _select_charge(rated)
    amount = _to_decimal(charge.get("MonetaryValue"))
    if amount is None or amount < 0:
        return None

    service = _as_dict(rated.get("Service"))
    service_code = str(service.get("Code") or "")
    service_name = (
        service.get("Description")
        or SERVICE_CODE_NAMES.get(service_code)
        or service_code
        or "Unknown"
    )

    transit_days = None
    days = _to_decimal(
        _as_dict(rated.get("GuaranteedDelivery")).get("BusinessDaysInTransit")
    )
    if days is not None and days == days.to_integral_value():
        transit_days = int(days)

    return RateQuote(
        carrier=UPS_CARRIER_ID,
        service_code=service_code,
        service_name=str(service_name),
        amount=amount,
        currency=str(charge.get("CurrencyCode") or DEFAULT_CURRENCY_CODE),
        estimated_transit_days=transit_days,
    )


def parse_rating_response(body: Any) -> list[RateQuote]:
    """Parse a UPS rating response body into quotes.

    Output order matches the ``RatedShipment`` order. Entries that fail
    to parse are skipped, so the result may be shorter than the input.
    A body without rated shipments yields an empty list.

    Args:
        body: Decoded response body.

    Returns:
        List of RateQuote in carrier order.
    """
    if not isinstance(body, dict):
        return []
    rated_shipments = _as_dict(body.get("RateResponse")).get("RatedShipment")
    # UPS returns a bare object instead of a list for a single service
    if isinstance(rated_shipments, dict):
        rated_shipments = [rated_shipments]
    if not isinstance(rated_shipments, list):
        return []

    quotes = []
    for rated in rated_shipments:
        quote = parse_quote(rated)
        if quote is not None:
            quotes.append(quote)

    dropped = len(rated_shipments) - len(quotes)
    if dropped:
        logger.warning(
            "Dropped %d of %d UPS rated shipments without a usable amount",
            dropped, len(rated_shipments),
        )
    return quotes
