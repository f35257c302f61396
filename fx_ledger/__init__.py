"""Public interface for the fx_ledger package."""

from __future__ import annotations

from importlib import metadata as importlib_metadata
from typing import Any

from fx_ledger.cache import ConversionCache, PendingRequestTracker, RateCache
from fx_ledger.config import ResolverSettings
from fx_ledger.errors import FxLedgerError, InvalidRateError, RateSourceError
from fx_ledger.fallback import FallbackPolicy
from fx_ledger.models import Conversion, ConversionKey, RateKey, Row
from fx_ledger.resolver import RateResolver
from fx_ledger.sources.base import RateSource
from fx_ledger.sources.static import StaticRateSource

__all__ = [
    "__version__",
    "Conversion",
    "ConversionCache",
    "ConversionKey",
    "FallbackPolicy",
    "FxLedgerError",
    "HttpRateSource",
    "InvalidRateError",
    "PendingRequestTracker",
    "RateCache",
    "RateKey",
    "RateResolver",
    "RateSource",
    "RateSourceError",
    "ResolverSettings",
    "Row",
    "StaticRateSource",
]

try:
    __version__ = importlib_metadata.version("fx-ledger")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


def __getattr__(name: str) -> Any:
    """Lazily import the HTTP source so ``requests`` is only loaded when used."""

    if name == "HttpRateSource":
        from fx_ledger.sources.http import HttpRateSource as _source

        return _source
    raise AttributeError(f"module 'fx_ledger' has no attribute {name}")
