"""UPS payload builder for rating requests.

Transforms a validated RateRequest into the UPS Rating API
``RateRequest`` wrapper. Pure functions: no I/O, no shared state.

Example:
    from shiprate.services.ups_payload_builder import build_rating_request

    payload = build_rating_request(request)
    option = payload["RateRequest"]["Request"]["RequestOption"]  # "Shop"
"""

from typing import Any

from shiprate.domain.models import Address, Parcel, RateRequest
from shiprate.services.ups_constants import (
    BLANK_ACCOUNT_NUMBER,
    NUM_OF_PIECES,
    PACKAGING_CODE,
    PACKAGING_DESCRIPTION,
    RESIDENTIAL_INDICATOR,
    SHIPMENT_CHARGE_TYPE_TRANSPORTATION,
    UPS_DIMENSION_UNIT,
    UPS_DIMENSION_UNIT_DESCRIPTION,
    UPS_MAX_ADDRESS_LINES,
    UPS_WEIGHT_UNIT,
    UPS_WEIGHT_UNIT_DESCRIPTION,
    RequestOption,
)
from shiprate.services.ups_service_codes import resolve_service_level


def format_measure(value: float) -> str:
    """Render a weight or dimension as a UPS string field.

    Whole numbers drop the trailing ``.0`` (``5.0`` → ``"5"``); no unit
    conversion is applied.
    """
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def request_option_for(request: RateRequest) -> RequestOption:
    """Return Rate mode when a service level is given, else Shop mode."""
    return RequestOption.RATE if request.service_level else RequestOption.SHOP


def to_ups_address(address: Address) -> dict[str, Any]:
    """Build a UPS Address block.

    Args:
        address: Domain address.

    Returns:
        Dict matching the UPS Address schema.
    """
    ups_address: dict[str, Any] = {
        "AddressLine": list(address.address_lines[:UPS_MAX_ADDRESS_LINES]),
        "City": address.city,
        "PostalCode": address.postal_code,
        "CountryCode": address.country_code,
    }
    if address.state_province_code:
        ups_address["StateProvinceCode"] = address.state_province_code
    # Residential indicator affects rate (residential surcharge)
    if address.residential:
        ups_address["ResidentialAddressIndicator"] = RESIDENTIAL_INDICATOR
    return ups_address


def to_ups_package(parcel: Parcel) -> dict[str, Any]:
    """Build a UPS Package block for a single piece."""
    dims = parcel.dimensions
    return {
        "PackagingType": {"Code": PACKAGING_CODE, "Description": PACKAGING_DESCRIPTION},
        "Dimensions": {
            "UnitOfMeasurement": {
                "Code": UPS_DIMENSION_UNIT,
                "Description": UPS_DIMENSION_UNIT_DESCRIPTION,
            },
            "Length": format_measure(dims.length_inches),
            "Width": format_measure(dims.width_inches),
            "Height": format_measure(dims.height_inches),
        },
        "PackageWeight": {
            "UnitOfMeasurement": {
                "Code": UPS_WEIGHT_UNIT,
                "Description": UPS_WEIGHT_UNIT_DESCRIPTION,
            },
            "Weight": format_measure(parcel.weight_lbs),
        },
    }


def build_rating_request(request: RateRequest) -> dict[str, Any]:
    """Transform a validated RateRequest into a full UPS RateRequest wrapper.

    Shop mode (no service level) asks UPS for every applicable service.
    Rate mode adds ``Shipment.Service`` with the resolved code; an
    unrecognized hint is sent as a literal code.

    Args:
        request: Validated domain rate request.

    Returns:
        Full UPS API RateRequest wrapper.
    """
    origin = to_ups_address(request.origin)

    shipment: dict[str, Any] = {
        "Shipper": {
            "Name": "Shipper",
            "Address": origin,
            "ShipperNumber": BLANK_ACCOUNT_NUMBER,
        },
        "ShipTo": {
            "Name": "ShipTo",
            "Address": to_ups_address(request.destination),
        },
        "ShipFrom": {
            "Name": "ShipFrom",
            "Address": to_ups_address(request.origin),
        },
        # Placeholder payment block; billing account is left blank
        "PaymentDetails": {
            "ShipmentCharge": [
                {
                    "Type": SHIPMENT_CHARGE_TYPE_TRANSPORTATION,
                    "BillShipper": {"AccountNumber": BLANK_ACCOUNT_NUMBER},
                }
            ]
        },
        "NumOfPieces": NUM_OF_PIECES,
        "Package": to_ups_package(request.package),
    }

    service_code = resolve_service_level(request.service_level)
    if service_code:
        shipment["Service"] = {
            "Code": service_code,
            "Description": request.service_level,
        }

    return {
        "RateRequest": {
            "Request": {"RequestOption": request_option_for(request).value},
            "Shipment": shipment,
        }
    }
