"""Structured carrier error raised by the rating pipeline.

One constructor per error kind keeps retryability a function of the
kind (see ``registry.py``). ``CARRIER_ERROR`` is the only kind whose
flag is decided by the call site, since a 5xx is transient and a 4xx
is not.

Usage:
    raise CarrierError.rate_limited("UPS rate limit exceeded")

    try:
        result = await service.get_rates(request)
    except CarrierError as e:
        if e.retryable:
            ...
"""

from dataclasses import dataclass, field
from typing import Any

from shiprate.errors.registry import ErrorKind, get_kind_spec


@dataclass(frozen=True)
class CarrierErrorDetails:
    """Immutable details attached to a CarrierError.

    Attributes:
        kind: Error kind from the closed taxonomy.
        message: Human-readable error message.
        status_code: HTTP status, when the failure came from a response.
        carrier_code: Carrier-native error code, when the body provided one.
        retryable: Whether a caller-level retry can plausibly succeed.
    """

    kind: ErrorKind
    message: str
    status_code: int | None = None
    carrier_code: str | None = None
    retryable: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable dict of the details."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
            "carrier_code": self.carrier_code,
            "retryable": self.retryable,
        }


@dataclass(eq=False)
class CarrierError(Exception):
    """Error from a carrier operation.

    Attributes:
        details: Structured error details.
    """

    details: CarrierErrorDetails
    remediation: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        super().__init__(self.details.message)
        if not self.remediation:
            self.remediation = get_kind_spec(self.details.kind).remediation

    def __str__(self) -> str:
        """Return formatted error message."""
        return f"[{self.details.kind.value}] {self.details.message}"

    @property
    def kind(self) -> ErrorKind:
        return self.details.kind

    @property
    def message(self) -> str:
        return self.details.message

    @property
    def status_code(self) -> int | None:
        return self.details.status_code

    @property
    def carrier_code(self) -> str | None:
        return self.details.carrier_code

    @property
    def retryable(self) -> bool:
        return self.details.retryable

    def to_dict(self) -> dict[str, Any]:
        """Return the structured error value for programmatic branching."""
        return self.details.to_dict()

    @classmethod
    def _of_kind(
        cls,
        kind: ErrorKind,
        message: str,
        status_code: int | None = None,
        carrier_code: str | None = None,
    ) -> "CarrierError":
        return cls(
            CarrierErrorDetails(
                kind=kind,
                message=message,
                status_code=status_code,
                carrier_code=carrier_code,
                retryable=get_kind_spec(kind).is_retryable,
            )
        )

    @classmethod
    def auth_failed(cls, message: str) -> "CarrierError":
        return cls._of_kind(ErrorKind.AUTH_FAILED, message)

    @classmethod
    def token_expired(cls, message: str) -> "CarrierError":
        return cls._of_kind(ErrorKind.AUTH_TOKEN_EXPIRED, message)

    @classmethod
    def network(cls, message: str) -> "CarrierError":
        return cls._of_kind(ErrorKind.NETWORK_ERROR, message)

    @classmethod
    def timeout(cls, message: str) -> "CarrierError":
        return cls._of_kind(ErrorKind.TIMEOUT, message)

    @classmethod
    def rate_limited(cls, message: str, status_code: int = 429) -> "CarrierError":
        return cls._of_kind(ErrorKind.RATE_LIMITED, message, status_code=status_code)

    @classmethod
    def bad_request(
        cls,
        message: str,
        status_code: int | None = None,
        carrier_code: str | None = None,
    ) -> "CarrierError":
        return cls._of_kind(
            ErrorKind.BAD_REQUEST, message,
            status_code=status_code, carrier_code=carrier_code,
        )

    @classmethod
    def carrier_error(
        cls,
        message: str,
        status_code: int | None = None,
        carrier_code: str | None = None,
        retryable: bool = False,
    ) -> "CarrierError":
        return cls(
            CarrierErrorDetails(
                kind=ErrorKind.CARRIER_ERROR,
                message=message,
                status_code=status_code,
                carrier_code=carrier_code,
                retryable=retryable,
            )
        )

    @classmethod
    def validation(cls, message: str) -> "CarrierError":
        return cls._of_kind(ErrorKind.VALIDATION_ERROR, message)


def format_error(error: CarrierError, include_remediation: bool = True) -> str:
    """Format error for display to a user.

    Args:
        error: The CarrierError to format.
        include_remediation: Whether to include remediation steps.

    Returns:
        Multi-line formatted string.
    """
    lines = [str(error)]
    if error.status_code is not None:
        lines.append(f"  HTTP status: {error.status_code}")
    if error.carrier_code:
        lines.append(f"  Carrier code: {error.carrier_code}")
    lines.append(f"  Retryable: {'yes' if error.retryable else 'no'}")
    if include_remediation and error.remediation:
        lines.append(f"  Action: {error.remediation}")
    return "\n".join(lines)
