"""Root-level pytest fixtures for all tests.

Provides:
- Config and transport fixtures for the UPS adapter
- A controllable clock for token expiry
- Canonical rate requests
"""

import pytest

from shiprate.config import AppConfig, UPSConfig
from shiprate.services.shipping_service import create_shipping_service
from tests.helpers import StubTransport


# ============================================================================
# Environment
# ============================================================================


_CONFIG_ENV_VARS = (
    "UPS_CLIENT_ID",
    "UPS_CLIENT_SECRET",
    "UPS_BASE_URL",
    "HTTP_TIMEOUT_MS",
    "TRANSACTION_SRC",
)


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch, tmp_path):
    """Keep developer env vars and config files out of every test."""
    for key in _CONFIG_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


# ============================================================================
# Clock
# ============================================================================


class FakeClock:
    """Manually advanced epoch-seconds clock."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ============================================================================
# Config / transport
# ============================================================================


@pytest.fixture
def ups_config() -> UPSConfig:
    return UPSConfig(
        client_id="test_client",
        client_secret="test_secret",
        base_url="https://wwwcie.ups.com",
    )


@pytest.fixture
def app_config(ups_config) -> AppConfig:
    return AppConfig(ups=ups_config, http_timeout_ms=5000, transaction_src="testsuite")


@pytest.fixture
def stub() -> StubTransport:
    return StubTransport()


@pytest.fixture
def service(app_config, stub):
    """ShippingCarrierService wired to the stub transport."""
    return create_shipping_service(app_config, stub)


# ============================================================================
# Requests
# ============================================================================


@pytest.fixture
def rate_request() -> dict:
    """Timonium, MD → Alpharetta, GA; 5 lb, 10x8x6 in; all services."""
    return {
        "origin": {
            "addressLine": ["123 Main St"],
            "city": "Timonium",
            "stateProvinceCode": "MD",
            "postalCode": "21093",
            "countryCode": "US",
        },
        "destination": {
            "addressLine": ["456 Oak Ave"],
            "city": "Alpharetta",
            "stateProvinceCode": "GA",
            "postalCode": "30005",
            "countryCode": "US",
        },
        "package": {
            "weightLbs": 5,
            "dimensions": {"lengthInches": 10, "widthInches": 8, "heightInches": 6},
        },
    }
