"""Write-once key/value stores for converted amounts and exchange rates."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Generic, Hashable, TypeVar

from fx_ledger.models import ConversionKey, RateKey
from fx_ledger.utils.logger import get_logger

LOGGER = get_logger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class KeyValueStore(Generic[K, V]):
    """Append-mostly mapping scoped to the lifetime of one view.

    Entries are never replaced: the first value written for a key wins.
    Once :meth:`close` has been called the store is empty and ignores writes,
    which lets late completions from abandoned fetches fall through silently.
    """

    name = "store"

    def __init__(self) -> None:
        self._entries: Dict[K, V] = {}
        self._live = True

    @property
    def live(self) -> bool:
        return self._live

    def get(self, key: K, default: V | None = None) -> V | None:
        return self._entries.get(key, default)

    def set(self, key: K, value: V) -> bool:
        """Store ``value`` under ``key``; return ``False`` if nothing was written."""

        if not self._live:
            LOGGER.debug("Ignoring write to closed %s for %s", self.name, key)
            return False
        if key in self._entries:
            return False
        self._entries[key] = value
        LOGGER.debug("%s[%s] = %s", self.name, key, value)
        return True

    def clear(self) -> None:
        self._entries.clear()

    def close(self) -> None:
        self._live = False
        self._entries.clear()

    def stats(self) -> Dict[str, Any]:
        return {"size": len(self._entries), "keys": [str(key) for key in self._entries]}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class ConversionCache(KeyValueStore[ConversionKey, Decimal]):
    """(row id, target currency) -> amount converted at a confirmed rate."""

    name = "conversion_cache"


class RateCache(KeyValueStore[RateKey, Decimal]):
    """(source, target, day bucket) -> confirmed exchange rate."""

    name = "rate_cache"

    def set(self, key: RateKey, value: Decimal) -> bool:
        if value <= 0:
            raise ValueError(f"Refusing to cache non-positive rate {value} for {key}")
        return super().set(key, value)


__all__ = ["ConversionCache", "KeyValueStore", "RateCache"]
