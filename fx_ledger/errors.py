"""Exceptions raised by fx_ledger components."""

from __future__ import annotations


class FxLedgerError(Exception):
    """Base class for every fx_ledger specific error."""


class RateSourceError(FxLedgerError):
    """A rate source could not produce a rate for the requested pair/date."""


class InvalidRateError(RateSourceError):
    """A rate source answered, but with a missing, non-numeric or non-positive rate."""


__all__ = ["FxLedgerError", "InvalidRateError", "RateSourceError"]
