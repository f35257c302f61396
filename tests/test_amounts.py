from __future__ import annotations

from decimal import Decimal

import pytest

from fx_ledger.utils.amounts import positive_rate, to_decimal


@pytest.mark.parametrize(
    "value, expected",
    [
        (10, Decimal("10")),
        (0.1, Decimal("0.1")),
        ("1,250.50", Decimal("1250.50")),
        (Decimal("-3"), Decimal("-3")),
    ],
)
def test_to_decimal_accepts_numbers_and_numeric_strings(value: object, expected: Decimal) -> None:
    assert to_decimal(value) == expected


@pytest.mark.parametrize("value", [None, "", "abc", True, float("nan"), float("inf"), object()])
def test_to_decimal_returns_default_for_unusable_values(value: object) -> None:
    assert to_decimal(value) is None
    assert to_decimal(value, Decimal("0")) == Decimal("0")


@pytest.mark.parametrize("value", [0, -1, "0", "-24000", None, "n/a", float("nan"), False])
def test_positive_rate_rejects_non_positive_or_malformed(value: object) -> None:
    assert positive_rate(value) is None


def test_positive_rate_accepts_positive_values() -> None:
    assert positive_rate(24500) == Decimal("24500")
    assert positive_rate("0.00004") == Decimal("0.00004")


@pytest.mark.parametrize("value", ["9E+999999", "1E+101", Decimal("-1E+500"), "1E-101", 10**200])
def test_to_decimal_rejects_out_of_range_magnitudes(value: object) -> None:
    assert to_decimal(value) is None
    assert positive_rate(value) is None


def test_to_decimal_keeps_values_at_the_range_edges() -> None:
    assert to_decimal("9.99E+100") == Decimal("9.99E+100")
    assert to_decimal("1E-100") == Decimal("1E-100")
    assert to_decimal("0E-500") == Decimal("0E-500")
