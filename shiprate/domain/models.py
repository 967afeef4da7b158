"""Carrier-agnostic domain models for rate quoting.

These are the types callers exchange with the service. Carrier wire
shapes never leak past the adapters in ``shiprate.services``. All models
are frozen: a request is constructed once and a quote is never mutated
after parsing.

Request models accept either snake_case field names or the camelCase
keys used by JSON rate requests (``addressLine``, ``weightLbs``, ...).
"""

from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool


CarrierId = Literal["ups", "fedex", "usps", "dhl"]

OperationType = Literal["rate"]

AddressLine = Annotated[str, Field(min_length=1, max_length=35)]

# Strict: bools and numeric strings are rejected, ints are accepted
PositiveMeasure = Annotated[float, Field(gt=0, allow_inf_nan=False, strict=True)]


class _RequestModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Address(_RequestModel):
    """Postal address of an origin or destination."""

    address_lines: tuple[AddressLine, ...] = Field(
        ..., min_length=1, max_length=3, alias="addressLine",
    )
    city: str = Field(..., min_length=1, max_length=30)
    state_province_code: str | None = Field(
        None, min_length=2, max_length=2, alias="stateProvinceCode",
    )
    postal_code: str = Field(..., min_length=1, max_length=9, alias="postalCode")
    country_code: str = Field(..., min_length=2, max_length=2, alias="countryCode")
    residential: StrictBool | None = None


class PackageDimensions(_RequestModel):
    """Package dimensions in inches."""

    length_inches: PositiveMeasure = Field(..., alias="lengthInches")
    width_inches: PositiveMeasure = Field(..., alias="widthInches")
    height_inches: PositiveMeasure = Field(..., alias="heightInches")


class Parcel(_RequestModel):
    """Single package: weight in pounds plus dimensions in inches."""

    weight_lbs: PositiveMeasure = Field(..., alias="weightLbs")
    dimensions: PackageDimensions


class RateRequest(_RequestModel):
    """Carrier-agnostic rate request.

    ``service_level`` is a free-form hint. Known levels map to a carrier
    service code; anything else is passed to the carrier as a literal code.
    Omitting it asks the carrier for every applicable service.
    """

    origin: Address
    destination: Address
    package: Parcel
    service_level: str | None = Field(
        None, min_length=1, max_length=50, alias="serviceLevel",
    )


class RateQuote(BaseModel):
    """One normalized quote for a carrier service."""

    model_config = ConfigDict(frozen=True)

    carrier: CarrierId
    service_code: str
    service_name: str
    amount: Decimal = Field(..., ge=0, allow_inf_nan=False)
    currency: str = "USD"
    estimated_transit_days: int | None = None


class RateQuoteResult(BaseModel):
    """Quotes in the carrier's response order plus the call's correlation id."""

    model_config = ConfigDict(frozen=True)

    quotes: tuple[RateQuote, ...] = ()
    request_id: str
