"""Error handling framework for shiprate.

This package provides:
- The closed error kind taxonomy with per-kind retryability
- CarrierError, the single structured error raised by the core
- Extraction of carrier-native error details from UPS bodies
"""

from shiprate.errors.carrier import (
    CarrierError,
    CarrierErrorDetails,
    format_error,
)
from shiprate.errors.registry import (
    ERROR_REGISTRY,
    ErrorKind,
    ErrorKindSpec,
    get_kind_spec,
    retryable_kinds,
)
from shiprate.errors.ups_translation import extract_ups_error

__all__ = [
    # Registry
    "ErrorKind",
    "ErrorKindSpec",
    "ERROR_REGISTRY",
    "get_kind_spec",
    "retryable_kinds",
    # Errors
    "CarrierError",
    "CarrierErrorDetails",
    "format_error",
    # UPS translation
    "extract_ups_error",
]
