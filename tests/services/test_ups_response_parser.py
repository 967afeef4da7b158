"""Tests for UPS rating response parsing."""

import logging
from decimal import Decimal

from shiprate.services.ups_response_parser import parse_quote, parse_rating_response
from tests.helpers.ups_responses import RATE_NEGOTIATED, SHOP_BODY


def _rated(**overrides):
    rated = {
        "Service": {"Code": "03", "Description": "UPS Ground"},
        "TotalCharge": {"CurrencyCode": "USD", "MonetaryValue": "12.45"},
        "GuaranteedDelivery": {"BusinessDaysInTransit": "3"},
    }
    rated.update(overrides)
    return rated


class TestParseRatingResponse:
    """Test parsing of full RateResponse bodies."""

    def test_shop_response(self):
        """Test three services parse in carrier order."""
        quotes = parse_rating_response(SHOP_BODY)
        assert [q.service_code for q in quotes] == ["03", "02", "01"]
        assert [q.amount for q in quotes] == [
            Decimal("12.45"), Decimal("24.99"), Decimal("48.00"),
        ]
        assert [q.estimated_transit_days for q in quotes] == [3, 2, 1]
        assert all(q.carrier == "ups" and q.currency == "USD" for q in quotes)
        assert quotes[1].service_name == "2nd Day Air"

    def test_single_object_wrapped(self):
        """Test a bare RatedShipment object yields one quote."""
        quotes = parse_rating_response({"RateResponse": {"RatedShipment": _rated()}})
        assert len(quotes) == 1
        assert quotes[0].service_code == "03"

    def test_negotiated_preferred(self):
        """Test negotiated total wins over published total."""
        quotes = parse_rating_response(RATE_NEGOTIATED.body)
        assert quotes[0].amount == Decimal("11.25")

    def test_missing_structure(self):
        """Test bodies without rated shipments yield no quotes."""
        assert parse_rating_response({}) == []
        assert parse_rating_response({"RateResponse": {}}) == []
        assert parse_rating_response("not json") == []
        assert parse_rating_response(None) == []

    def test_bad_entries_dropped(self, caplog):
        """Test unusable entries are skipped and logged."""
        body = {
            "RateResponse": {
                "RatedShipment": [
                    _rated(TotalCharge={"CurrencyCode": "USD", "MonetaryValue": "abc"}),
                    _rated(Service={"Code": "02"}),
                    "garbage",
                ]
            }
        }
        with caplog.at_level(logging.WARNING):
            quotes = parse_rating_response(body)
        assert [q.service_code for q in quotes] == ["02"]
        assert "Dropped 2 of 3" in caplog.text


class TestParseQuote:
    """Test single RatedShipment parsing."""

    def test_total_charges_fallback(self):
        """Test TotalCharges is used when TotalCharge is absent."""
        rated = _rated()
        del rated["TotalCharge"]
        rated["TotalCharges"] = {"CurrencyCode": "CAD", "MonetaryValue": "9.10"}
        quote = parse_quote(rated)
        assert quote.amount == Decimal("9.10")
        assert quote.currency == "CAD"

    def test_negotiated_without_value_ignored(self):
        """Test an empty negotiated block falls back to published."""
        quote = parse_quote(_rated(NegotiatedRateCharges={"TotalCharge": {}}))
        assert quote.amount == Decimal("12.45")

    def test_unparseable_negotiated_falls_back(self):
        """Test a garbage negotiated value does not drop a valid published charge."""
        rated = _rated(
            TotalCharge={"CurrencyCode": "USD", "MonetaryValue": "15.00"},
            NegotiatedRateCharges={"TotalCharge": {"MonetaryValue": "N/A"}},
        )
        quote = parse_quote(rated)
        assert quote is not None
        assert quote.amount == Decimal("15.00")

    def test_negative_negotiated_falls_back(self):
        """Test a negative negotiated value falls back to the published charge."""
        rated = _rated(NegotiatedRateCharges={"TotalCharge": {"MonetaryValue": "-3.00"}})
        assert parse_quote(rated).amount == Decimal("12.45")

    def test_missing_amount(self):
        """Test entries without an amount are rejected."""
        assert parse_quote(_rated(TotalCharge={})) is None

    def test_negative_or_non_finite_amount(self):
        """Test negative, NaN and infinite amounts are rejected."""
        for value in ("-1.00", "NaN", "Infinity"):
            assert parse_quote(_rated(TotalCharge={"MonetaryValue": value})) is None

    def test_zero_amount_allowed(self):
        """Test a zero charge is a valid quote."""
        assert parse_quote(_rated(TotalCharge={"MonetaryValue": "0"})).amount == 0

    def test_default_currency(self):
        """Test currency defaults to USD."""
        assert parse_quote(_rated(TotalCharge={"MonetaryValue": "1"})).currency == "USD"

    def test_name_from_code_table(self):
        """Test name falls back to the known code name."""
        assert parse_quote(_rated(Service={"Code": "12"})).service_name == "UPS 3 Day Select"

    def test_name_falls_back_to_code(self):
        """Test unknown codes use the code as the name."""
        assert parse_quote(_rated(Service={"Code": "ZZ"})).service_name == "ZZ"

    def test_name_unknown(self):
        """Test missing service block still yields a quote."""
        quote = parse_quote(_rated(Service=None))
        assert quote.service_code == ""
        assert quote.service_name == "Unknown"

    def test_transit_days(self):
        """Test transit days only when present and whole."""
        assert parse_quote(_rated(GuaranteedDelivery={})).estimated_transit_days is None
        assert parse_quote(_rated(GuaranteedDelivery=None)).estimated_transit_days is None
        fractional = _rated(GuaranteedDelivery={"BusinessDaysInTransit": "2.5"})
        assert parse_quote(fractional).estimated_transit_days is None
        assert parse_quote(
            _rated(GuaranteedDelivery={"BusinessDaysInTransit": "x"})
        ).estimated_transit_days is None
