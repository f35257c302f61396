"""Tests for row parsing and cache keys."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from fx_ledger.models import Conversion, ConversionKey, RateKey, Row


def test_row_from_payload_reads_backend_fields() -> None:
    row = Row.from_payload(
        {
            "id": 42,
            "amount_local": "10.5",
            "local_currency": "usd",
            "cashflow_local": -10.5,
            "date": "2024-01-01T09:00:00Z",
            "fx_rates": {"USD-VND": 24500, "USD-USD": 1},
        }
    )

    assert row.id == "42"
    assert row.amount_local == Decimal("10.5")
    assert row.cashflow_local == Decimal("-10.5")
    assert row.local_currency == "USD"
    assert row.bucket == "2024-01-01"
    assert row.embedded_rate("vnd") == Decimal("24500")


def test_row_from_payload_applies_defaults() -> None:
    row = Row.from_payload({"amount_local": "garbage"})

    assert row.id == "unknown"
    assert row.amount_local == Decimal("0")
    assert row.cashflow_local == Decimal("0")
    assert row.local_currency == "USD"
    assert row.embedded_rates == {}
    assert row.bucket == "today"


@pytest.mark.parametrize("raw", [0, -5, "abc", None, float("nan"), float("inf")])
def test_embedded_rate_ignores_malformed_values(raw: object) -> None:
    row = Row(id="1", amount_local=Decimal("1"), local_currency="USD", embedded_rates={"USD-VND": raw})

    assert row.embedded_rate("VND") is None


def test_embedded_rate_only_matches_direct_pair() -> None:
    row = Row(id="1", amount_local=Decimal("1"), local_currency="USD", embedded_rates={"VND-USD": 0.00004})

    assert row.embedded_rate("VND") is None


def test_keys_are_upper_cased_and_bucketed() -> None:
    row = Row(id=7, amount_local=1, local_currency="vnd", date=date(2024, 3, 9))

    assert row.rate_key("usd") == RateKey("VND", "USD", "2024-03-09")
    assert row.rate_key("usd").rate_date == date(2024, 3, 9)
    assert row.conversion_key("usd") == ConversionKey("7", "USD")
    assert str(row.rate_key("usd")) == "VND-USD-2024-03-09"


def test_today_bucket_has_no_rate_date() -> None:
    key = RateKey("USD", "VND", "today")

    assert key.rate_date is None


def test_conversion_at_rate_scales_amount_and_cashflow() -> None:
    row = Row(id="1", amount_local=Decimal("10"), local_currency="USD", cashflow_local=Decimal("-10"))

    conversion = Conversion.at_rate(row, Decimal("24000"), is_loading=True)

    assert conversion == Conversion(Decimal("240000"), Decimal("-240000"), True)
