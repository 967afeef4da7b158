"""Validation of raw rate requests into domain models.

Runs before any network call. Failures surface as a ``VALIDATION_ERROR``
CarrierError whose message lists every offending field.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from shiprate.domain.models import RateRequest
from shiprate.errors import CarrierError

logger = logging.getLogger(__name__)


def validate_rate_request(raw: RateRequest | Mapping[str, Any]) -> RateRequest:
    """Validate a raw rate request.

    Args:
        raw: A RateRequest, or a mapping with snake_case or camelCase keys.

    Returns:
        The validated RateRequest.

    Raises:
        CarrierError: VALIDATION_ERROR listing ``path: message`` per failure.
    """
    if isinstance(raw, RateRequest):
        return raw
    if not isinstance(raw, Mapping):
        raise CarrierError.validation(
            f"Rate request must be an object, got {type(raw).__name__}"
        )
    try:
        return RateRequest.model_validate(dict(raw))
    except ValidationError as e:
        message = format_validation_errors(e)
        logger.debug("Rejected rate request: %s", message)
        raise CarrierError.validation(message) from e


def format_validation_errors(error: ValidationError) -> str:
    """Render pydantic errors as ``path: message`` pairs joined by ``; ``."""
    parts = []
    for item in error.errors():
        path = ".".join(str(p) for p in item["loc"])
        parts.append(f"{path}: {item['msg']}")
    return "; ".join(parts)
