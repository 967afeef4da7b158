"""Secret redaction for carrier request logging.

Rating calls carry a bearer token, token exchanges carry Basic client
credentials, and OAuth bodies carry ``access_token``. Anything logged
from those calls passes through here first.
"""

import re
from collections.abc import Mapping
from typing import Any

REDACTED = "***REDACTED***"

# Lower-cased key fragments whose values never reach a log line
SENSITIVE_KEY_FRAGMENTS = frozenset({
    "authorization",
    "secret",
    "token",
    "password",
    "client_id",
    "credential",
})

_AUTH_SCHEME = re.compile(r"^\s*(Bearer|Basic)\s+\S", re.IGNORECASE)

_FREE_TEXT_SECRETS = re.compile(
    r"(?i)"
    # Authorization: Bearer abc / Basic abc
    r"\b(?-i:Bearer|Basic)\s+[A-Za-z0-9._~+/=-]+"
    # "access_token": "abc"
    r'|"[a-z_]*(?:secret|token|password|client_id|credential)[a-z_]*"\s*:\s*"[^"]*"'
    # client_secret=abc, access_token: abc
    r"|\b[a-z_]*(?:secret|token|password|client_id|credential)[a-z_]*\s*[=:]\s*[^\s,;&]+"
)


def _is_sensitive(key: Any) -> bool:
    lowered = str(key).lower()
    return any(fragment in lowered for fragment in SENSITIVE_KEY_FRAGMENTS)


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy request headers with credential values hidden.

    The auth scheme is kept (``Bearer ***REDACTED***``) so logs still
    show which kind of credential was sent.
    """
    redacted = {}
    for name, value in headers.items():
        if not _is_sensitive(name):
            redacted[name] = value
            continue
        match = _AUTH_SCHEME.match(value or "")
        redacted[name] = f"{match.group(1)} {REDACTED}" if match else REDACTED
    return redacted


def redact_for_logging(obj: Mapping[str, Any]) -> dict[str, Any]:
    """Copy a decoded JSON body with sensitive values replaced.

    Recurses into nested objects and into objects inside lists. The
    input is not mutated.
    """
    result: dict[str, Any] = {}
    for key, value in obj.items():
        if _is_sensitive(key):
            result[key] = REDACTED
        elif isinstance(value, Mapping):
            result[key] = redact_for_logging(value)
        elif isinstance(value, list):
            result[key] = [
                redact_for_logging(item) if isinstance(item, Mapping) else item
                for item in value
            ]
        else:
            result[key] = value
    return result


def sanitize_error_message(msg: str | None, max_length: int = 500) -> str | None:
    """Strip credentials from transport error text and cap its length.

    Args:
        msg: Error text, e.g. ``str()`` of an httpx exception.
        max_length: Longest string returned, including the ``...`` suffix.

    Returns:
        Sanitized text, or None when msg is None.
    """
    if msg is None:
        return None
    cleaned = _FREE_TEXT_SECRETS.sub(REDACTED, msg)
    if len(cleaned) > max_length:
        cleaned = cleaned[: max_length - 3] + "..."
    return cleaned


def mask_secret(value: str, visible: int = 4) -> str:
    """Mask all but the last ``visible`` characters of a secret."""
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
