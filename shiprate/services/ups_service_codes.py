"""Canonical UPS service code definitions.

Maps carrier-agnostic service-level hints to UPS service codes and
provides display names for quotes that arrive without a description.
"""

from enum import Enum


class ServiceCode(str, Enum):
    """UPS service codes for rating.

    These codes correspond to UPS API service type identifiers.
    """

    NEXT_DAY_AIR = "01"
    SECOND_DAY_AIR = "02"
    GROUND = "03"
    WORLDWIDE_EXPRESS = "07"
    WORLDWIDE_EXPEDITED = "08"
    UPS_STANDARD = "11"
    THREE_DAY_SELECT = "12"
    NEXT_DAY_AIR_SAVER = "13"
    NEXT_DAY_AIR_EARLY = "14"
    WORLDWIDE_EXPRESS_PLUS = "54"
    SECOND_DAY_AIR_AM = "59"
    WORLDWIDE_SAVER = "65"


# Known service levels accepted on a RateRequest. Matching is exact.
SERVICE_LEVEL_TO_CODE: dict[str, ServiceCode] = {
    "ground": ServiceCode.GROUND,
    "next_day_air": ServiceCode.NEXT_DAY_AIR,
    "second_day_air": ServiceCode.SECOND_DAY_AIR,
    "three_day_select": ServiceCode.THREE_DAY_SELECT,
    "worldwide_express": ServiceCode.WORLDWIDE_EXPRESS,
    "worldwide_expedited": ServiceCode.WORLDWIDE_EXPEDITED,
}

# Display names: code value → human-readable name
SERVICE_CODE_NAMES: dict[str, str] = {
    "01": "UPS Next Day Air",
    "02": "UPS 2nd Day Air",
    "03": "UPS Ground",
    "07": "UPS Worldwide Express",
    "08": "UPS Worldwide Expedited",
    "11": "UPS Standard",
    "12": "UPS 3 Day Select",
    "13": "UPS Next Day Air Saver",
    "14": "UPS Next Day Air Early",
    "54": "UPS Worldwide Express Plus",
    "59": "UPS 2nd Day Air A.M.",
    "65": "UPS Worldwide Saver",
}


def resolve_service_level(service_level: str | None) -> str | None:
    """Resolve a service-level hint to a UPS service code.

    Unrecognized hints are returned unchanged and sent to UPS as a
    literal service code, so callers can request codes that have no
    named level here (e.g. "13").

    Args:
        service_level: Service-level hint, or None for all services.

    Returns:
        UPS service code string, or None when no hint was given.
    """
    if not service_level:
        return None
    matched = SERVICE_LEVEL_TO_CODE.get(service_level)
    if matched is not None:
        return matched.value
    return service_level


def is_known_service_level(service_level: str) -> bool:
    """Whether a hint is one of the named service levels."""
    return service_level in SERVICE_LEVEL_TO_CODE
