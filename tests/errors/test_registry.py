"""Tests for the error kind registry."""

from shiprate.errors import ERROR_REGISTRY, ErrorKind, get_kind_spec, retryable_kinds


class TestErrorRegistry:
    """Test registry completeness and retryability."""

    def test_every_kind_registered(self):
        """Test each ErrorKind has exactly one registry entry."""
        assert set(ERROR_REGISTRY) == set(ErrorKind)
        for kind, spec in ERROR_REGISTRY.items():
            assert spec.kind is kind
            assert spec.title
            assert spec.remediation

    def test_retryable_kinds(self):
        """Test the transient kinds are the retryable ones."""
        assert set(retryable_kinds()) == {
            ErrorKind.AUTH_TOKEN_EXPIRED,
            ErrorKind.NETWORK_ERROR,
            ErrorKind.TIMEOUT,
            ErrorKind.RATE_LIMITED,
        }

    def test_non_retryable_kinds(self):
        """Test permanent kinds are not retryable."""
        for kind in (
            ErrorKind.AUTH_FAILED,
            ErrorKind.BAD_REQUEST,
            ErrorKind.VALIDATION_ERROR,
            ErrorKind.CARRIER_ERROR,
        ):
            assert get_kind_spec(kind).is_retryable is False

    def test_kind_values_are_names(self):
        """Test kinds serialize to their upper-case names."""
        assert ErrorKind.RATE_LIMITED.value == "RATE_LIMITED"
        assert ErrorKind("BAD_REQUEST") is ErrorKind.BAD_REQUEST
