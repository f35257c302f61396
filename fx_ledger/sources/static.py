"""In-memory rate source for development and tests."""

from __future__ import annotations

import asyncio
from datetime import date
from decimal import Decimal
from typing import Mapping

from fx_ledger.errors import RateSourceError
from fx_ledger.utils.amounts import positive_rate
from fx_ledger.utils.logger import get_logger

LOGGER = get_logger(__name__)


class StaticRateSource:
    """Answer rate lookups from a fixed ``{(source, target): rate}`` table.

    The inverse of every configured pair is derived automatically. Dates are
    ignored; ``delay`` adds artificial latency so callers can observe the
    in-flight state.
    """

    def __init__(
        self,
        rates: Mapping[tuple[str, str], object],
        *,
        default: object | None = None,
        delay: float = 0.0,
    ) -> None:
        self.rates: dict[tuple[str, str], Decimal] = {}
        for (source, target), raw in rates.items():
            rate = positive_rate(raw)
            if rate is None:
                raise ValueError(f"Rate for {source}-{target} must be a positive number")
            self.rates[(source.upper(), target.upper())] = rate
        self.default = positive_rate(default)
        self.delay = delay
        self.calls: list[tuple[str, str, date | None]] = []

    def lookup(self, source: str, target: str) -> Decimal:
        pair = (source.upper(), target.upper())
        if pair[0] == pair[1]:
            return Decimal("1")
        if pair in self.rates:
            return self.rates[pair]
        inverse = self.rates.get((pair[1], pair[0]))
        if inverse is not None:
            return Decimal("1") / inverse
        if self.default is not None:
            return self.default
        raise RateSourceError(f"No rate configured for {pair[0]}-{pair[1]}")

    async def get_rate(
        self, source: str, target: str, rate_date: date | None = None
    ) -> Decimal:
        self.calls.append((source, target, rate_date))
        LOGGER.debug("Static rate lookup %s-%s on %s", source, target, rate_date or "today")
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.lookup(source, target)


__all__ = ["StaticRateSource"]
