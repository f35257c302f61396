from __future__ import annotations

from decimal import Decimal

import pytest

from fx_ledger.fallback import FallbackPolicy


def test_default_policy_knows_usd_vnd() -> None:
    policy = FallbackPolicy()

    assert policy.estimate("USD", "VND") == Decimal("24000")
    assert policy.estimate("vnd", "usd") == Decimal("1") / Decimal("24000")


@pytest.mark.parametrize("pair", [("EUR", "VND"), ("USD", "EUR"), ("GBP", "JPY"), ("USD", "USD")])
def test_unknown_and_identity_pairs_estimate_one(pair: tuple[str, str]) -> None:
    assert FallbackPolicy().estimate(*pair) == Decimal("1")


def test_estimate_is_deterministic() -> None:
    policy = FallbackPolicy()

    assert {policy.estimate("USD", "VND") for _ in range(5)} == {Decimal("24000")}


def test_custom_table() -> None:
    policy = FallbackPolicy({("eur", "usd"): "1.10"})

    assert policy.estimate("EUR", "USD") == Decimal("1.10")
    assert policy.estimate("USD", "VND") == Decimal("1")


@pytest.mark.parametrize("bad", [0, -24000, "n/a", None])
def test_non_positive_table_entries_are_rejected(bad: object) -> None:
    with pytest.raises(ValueError, match="USD-VND"):
        FallbackPolicy({("USD", "VND"): bad})
