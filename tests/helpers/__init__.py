"""Test helper utilities for carrier client testing."""

from tests.helpers.stub_transport import StubCall, StubTransport

__all__ = [
    "StubCall",
    "StubTransport",
]
