"""Data models shared by the caches, the resolver and the rate sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, NamedTuple

from fx_ledger.utils.amounts import positive_rate, to_decimal
from fx_ledger.utils.dates import bucket_date, rate_bucket

ZERO = Decimal("0")


class RateKey(NamedTuple):
    """Key of the rate cache and the pending tracker."""

    source: str
    target: str
    bucket: str

    @property
    def rate_date(self) -> date | None:
        """Calendar day to ask the rate source for (``None`` means today)."""
        return bucket_date(self.bucket)

    def __str__(self) -> str:
        return f"{self.source}-{self.target}-{self.bucket}"


class ConversionKey(NamedTuple):
    """Key of the conversion cache."""

    row_id: str
    target: str


@dataclass(slots=True)
class Row:
    """A transaction row as delivered by the ledger backend."""

    id: str
    amount_local: Decimal
    local_currency: str
    cashflow_local: Decimal = ZERO
    date: Any = None
    embedded_rates: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.id = str(self.id)
        self.local_currency = self.local_currency.upper()
        self.amount_local = to_decimal(self.amount_local, ZERO)
        self.cashflow_local = to_decimal(self.cashflow_local, ZERO)
        if self.embedded_rates is None:
            self.embedded_rates = {}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Row":
        """Build a row from a backend transaction payload.

        Missing numbers default to zero, a missing currency to ``USD`` and the
        backend's ``fx_rates`` map becomes :attr:`embedded_rates`.
        """

        row_id = payload.get("id")
        return cls(
            id="unknown" if row_id is None else str(row_id),
            amount_local=to_decimal(payload.get("amount_local"), ZERO),
            local_currency=str(payload.get("local_currency") or "USD"),
            cashflow_local=to_decimal(payload.get("cashflow_local"), ZERO),
            date=payload.get("date"),
            embedded_rates=dict(payload.get("fx_rates") or {}),
        )

    @property
    def bucket(self) -> str:
        return rate_bucket(self.date)

    def rate_key(self, target: str) -> RateKey:
        return RateKey(self.local_currency, target.upper(), self.bucket)

    def conversion_key(self, target: str) -> ConversionKey:
        return ConversionKey(self.id, target.upper())

    def embedded_rate(self, target: str) -> Decimal | None:
        """Return the embedded ``SRC-DST`` rate when it is finite and positive."""

        raw = self.embedded_rates.get(f"{self.local_currency}-{target.upper()}")
        return positive_rate(raw)


@dataclass(frozen=True, slots=True)
class Conversion:
    """What the renderer shows for one row in one display currency."""

    amount: Decimal
    cashflow: Decimal
    is_loading: bool = False

    @classmethod
    def at_rate(cls, row: Row, rate: Decimal, *, is_loading: bool = False) -> "Conversion":
        return cls(
            amount=row.amount_local * rate,
            cashflow=row.cashflow_local * rate,
            is_loading=is_loading,
        )


__all__ = ["Conversion", "ConversionKey", "RateKey", "Row", "ZERO"]
