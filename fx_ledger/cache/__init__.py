"""In-memory stores owned by a single :class:`~fx_ledger.resolver.RateResolver`."""

from __future__ import annotations

from fx_ledger.cache.pending import PendingRequestTracker
from fx_ledger.cache.stores import ConversionCache, KeyValueStore, RateCache

__all__ = ["ConversionCache", "KeyValueStore", "PendingRequestTracker", "RateCache"]
