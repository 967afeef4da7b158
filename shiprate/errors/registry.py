"""Error kind registry for carrier operations.

Every failure surfaced by the rating pipeline terminates in exactly one
of these kinds. Retryability is a property of the kind, defined once
here, so callers implementing backoff branch on a single flag instead of
re-deriving it per call site.

Kinds:
- AUTH_FAILED: Credential exchange rejected or malformed
- AUTH_TOKEN_EXPIRED: Token rejected downstream and refresh did not recover
- NETWORK_ERROR / TIMEOUT: Transport failures
- RATE_LIMITED: Carrier throttled the call (HTTP 429)
- BAD_REQUEST: Carrier rejected the payload (HTTP 400/403)
- CARRIER_ERROR: Any other non-success status
- VALIDATION_ERROR: Request rejected before any network call
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of carrier error kinds."""

    AUTH_FAILED = "AUTH_FAILED"
    AUTH_TOKEN_EXPIRED = "AUTH_TOKEN_EXPIRED"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    RATE_LIMITED = "RATE_LIMITED"
    BAD_REQUEST = "BAD_REQUEST"
    CARRIER_ERROR = "CARRIER_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"


@dataclass(frozen=True)
class ErrorKindSpec:
    """Definition of an error kind with metadata.

    Attributes:
        kind: The error kind.
        title: Short title for display.
        remediation: Action the caller should take to resolve.
        is_retryable: Whether a caller-level retry can plausibly succeed.
    """

    kind: ErrorKind
    title: str
    remediation: str
    is_retryable: bool = False


ERROR_REGISTRY: dict[ErrorKind, ErrorKindSpec] = {
    ErrorKind.AUTH_FAILED: ErrorKindSpec(
        kind=ErrorKind.AUTH_FAILED,
        title="Carrier Authentication Failed",
        remediation="Check the carrier client ID and secret.",
    ),
    ErrorKind.AUTH_TOKEN_EXPIRED: ErrorKindSpec(
        kind=ErrorKind.AUTH_TOKEN_EXPIRED,
        title="Carrier Token Expired",
        remediation="The access token was rejected and could not be refreshed. Retry shortly.",
        is_retryable=True,
    ),
    ErrorKind.NETWORK_ERROR: ErrorKindSpec(
        kind=ErrorKind.NETWORK_ERROR,
        title="Network Error",
        remediation="Check connectivity to the carrier API and retry.",
        is_retryable=True,
    ),
    ErrorKind.TIMEOUT: ErrorKindSpec(
        kind=ErrorKind.TIMEOUT,
        title="Carrier Request Timed Out",
        remediation="Retry the request or raise the HTTP timeout.",
        is_retryable=True,
    ),
    ErrorKind.RATE_LIMITED: ErrorKindSpec(
        kind=ErrorKind.RATE_LIMITED,
        title="Carrier Rate Limit Exceeded",
        remediation="Wait before retrying and reduce request volume.",
        is_retryable=True,
    ),
    ErrorKind.BAD_REQUEST: ErrorKindSpec(
        kind=ErrorKind.BAD_REQUEST,
        title="Carrier Rejected Request",
        remediation="Correct the request using the carrier's error message.",
    ),
    ErrorKind.CARRIER_ERROR: ErrorKindSpec(
        kind=ErrorKind.CARRIER_ERROR,
        title="Carrier Error",
        remediation="Retry if the carrier reported a server error, otherwise contact support.",
    ),
    ErrorKind.VALIDATION_ERROR: ErrorKindSpec(
        kind=ErrorKind.VALIDATION_ERROR,
        title="Invalid Rate Request",
        remediation="Fix the listed fields and resubmit.",
    ),
}


def get_kind_spec(kind: ErrorKind) -> ErrorKindSpec:
    """Get the registry entry for an error kind.

    Args:
        kind: The error kind to look up.

    Returns:
        ErrorKindSpec for the kind.
    """
    return ERROR_REGISTRY[kind]


def retryable_kinds() -> list[ErrorKind]:
    """List the kinds a caller's retry loop may retry."""
    return [spec.kind for spec in ERROR_REGISTRY.values() if spec.is_retryable]
