"""Extraction of carrier-native error details from UPS response bodies.

UPS error bodies vary in structure between APIs and gateway layers.
These helpers pull the first error code and message out of whichever
shape is present so the rating client can attach them to a CarrierError.
"""

from typing import Any


def extract_ups_error(body: Any) -> tuple[str | None, str | None]:
    """Extract error code and message from a UPS API response body.

    Handles the common formats:
    - ``{"response": {"errors": [{"code", "message"}]}}``
    - ``{"errors": [{"code", "message"}]}``
    - ``{"Fault": {"detail": {"Errors": {"ErrorDetail": ...}}}}``

    Args:
        body: Decoded response body (dict, text, or None).

    Returns:
        Tuple of (error_code, error_message), either may be None.
    """
    if not isinstance(body, dict):
        return (None, None)

    # Format 1: response.errors[0] (Rating API)
    inner = body.get("response")
    if isinstance(inner, dict):
        found = _first_error(inner.get("errors"))
        if found is not None:
            return found

    # Format 2: errors[0]
    found = _first_error(body.get("errors"))
    if found is not None:
        return found

    # Format 3: Fault format
    fault = body.get("Fault")
    if isinstance(fault, dict):
        errors = (fault.get("detail") or {}).get("Errors")
        if isinstance(errors, dict) and "ErrorDetail" in errors:
            ed = errors["ErrorDetail"]
            if isinstance(ed, list):
                ed = ed[0] if ed else {}
            primary = ed.get("PrimaryErrorCode", {}) if isinstance(ed, dict) else {}
            return (_as_text(primary.get("Code")), _as_text(primary.get("Description")))

    return (None, None)


def _first_error(errors: Any) -> tuple[str | None, str | None] | None:
    """Return (code, message) of the first entry in an errors list."""
    if not isinstance(errors, list) or not errors:
        return None
    err = errors[0]
    if not isinstance(err, dict):
        return None
    return (_as_text(err.get("code")), _as_text(err.get("message")))


def _as_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)
