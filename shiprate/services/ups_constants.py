"""Canonical UPS rating constants.

Single source of truth for UPS endpoint versions, header limits,
packaging and unit codes, and token-cache timing. Payload and client
modules import from here instead of using inline magic values.
"""

from enum import Enum


# ---------------------------------------------------------------------------
# Carrier identity
# ---------------------------------------------------------------------------

UPS_CARRIER_ID = "ups"

# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

UPS_RATING_VERSION = "v2409"
UPS_TOKEN_PATH = "/security/v1/oauth/token"
UPS_OAUTH_GRANT_TYPE = "client_credentials"


class RequestOption(str, Enum):
    """UPS Rating API request options."""

    RATE = "Rate"  # Single requested service
    SHOP = "Shop"  # Every applicable service


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------

UPS_TRANS_ID_HEADER = "transId"
UPS_TRANS_ID_MAX_LEN = 32
UPS_TRANSACTION_SRC_HEADER = "transactionSrc"

# ---------------------------------------------------------------------------
# Token cache
# ---------------------------------------------------------------------------

# A cached token is only handed out while it has more than this left.
TOKEN_REFRESH_BUFFER_SECONDS = 60.0

# ---------------------------------------------------------------------------
# Package defaults
# ---------------------------------------------------------------------------

PACKAGING_CODE = "02"  # Customer supplied package
PACKAGING_DESCRIPTION = "Package"
UPS_DIMENSION_UNIT = "IN"
UPS_DIMENSION_UNIT_DESCRIPTION = "Inches"
UPS_WEIGHT_UNIT = "LBS"
UPS_WEIGHT_UNIT_DESCRIPTION = "Pounds"
NUM_OF_PIECES = "1"
UPS_MAX_ADDRESS_LINES = 3

# ---------------------------------------------------------------------------
# Billing placeholders (billing configuration is not handled here)
# ---------------------------------------------------------------------------

SHIPMENT_CHARGE_TYPE_TRANSPORTATION = "01"
BLANK_ACCOUNT_NUMBER = ""

# ---------------------------------------------------------------------------
# Response defaults
# ---------------------------------------------------------------------------

DEFAULT_CURRENCY_CODE = "USD"
RESIDENTIAL_INDICATOR = "Y"
