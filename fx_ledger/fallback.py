"""Deterministic placeholder rates shown while a real rate is being fetched."""

from __future__ import annotations

from decimal import Decimal
from typing import Mapping

from fx_ledger.config import DEFAULT_FALLBACK_RATES
from fx_ledger.utils.amounts import positive_rate

ONE = Decimal("1")


class FallbackPolicy:
    """Best-effort cross rates for rendering before the authoritative rate lands.

    Only the pairs in ``cross_rates`` (and their inverses) are known. Any other
    pair estimates to ``1``. The values are never meant to be cached.
    """

    __slots__ = ("_rates",)

    def __init__(self, cross_rates: Mapping[tuple[str, str], object] | None = None) -> None:
        table = DEFAULT_FALLBACK_RATES if cross_rates is None else cross_rates
        rates: dict[tuple[str, str], Decimal] = {}
        for (source, target), raw in table.items():
            rate = positive_rate(raw)
            if rate is None:
                raise ValueError(f"Fallback rate for {source}-{target} must be a positive number")
            rates[(source.upper(), target.upper())] = rate
        self._rates = rates

    def estimate(self, source: str, target: str) -> Decimal:
        """Return the placeholder rate for converting ``source`` into ``target``."""

        pair = (source.upper(), target.upper())
        if pair[0] == pair[1]:
            return ONE
        direct = self._rates.get(pair)
        if direct is not None:
            return direct
        inverse = self._rates.get((pair[1], pair[0]))
        if inverse is not None:
            return ONE / inverse
        return ONE


__all__ = ["FallbackPolicy"]
