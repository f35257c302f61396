"""Abstractions for pluggable exchange-rate sources."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Protocol


class RateSource(Protocol):
    """Contract for looking up an authoritative exchange rate.

    ``rate_date`` is ``None`` when the caller wants today's rate. Implementations
    signal failure by raising; the resolver does not inspect the reason.
    """

    async def get_rate(
        self, source: str, target: str, rate_date: date | None = None
    ) -> Decimal | float:
        ...  # pragma: no cover - protocol definition


__all__ = ["RateSource"]
