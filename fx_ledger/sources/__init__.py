"""Rate sources consulted when no cached or embedded rate is available."""

from __future__ import annotations

from fx_ledger.sources.base import RateSource
from fx_ledger.sources.static import StaticRateSource

__all__ = ["HttpRateSource", "RateSource", "StaticRateSource"]


def __getattr__(name: str):
    """Defer the ``requests`` import until the HTTP source is asked for."""

    if name == "HttpRateSource":
        from fx_ledger.sources.http import HttpRateSource as _source

        return _source
    raise AttributeError(f"module 'fx_ledger.sources' has no attribute {name}")
