"""Synchronous per-row currency conversion backed by asynchronous rate lookups."""

from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import Any, Callable, Iterable, List, Optional, Set

from fx_ledger.cache.pending import PendingRequestTracker
from fx_ledger.cache.stores import ConversionCache, RateCache
from fx_ledger.fallback import FallbackPolicy
from fx_ledger.models import ZERO, Conversion, ConversionKey, RateKey, Row
from fx_ledger.sources.base import RateSource
from fx_ledger.utils.amounts import positive_rate
from fx_ledger.utils.logger import get_logger

LOGGER = get_logger(__name__)

UpdateCallback = Callable[[RateKey], Any]


class RateResolver:
    """Answer "what is this row worth in ``target`` right now" without blocking.

    One resolver is built per transaction view and owns its three stores. The
    lookup order is: same currency, converted-amount cache, the row's embedded
    rate, the rate cache, and finally a :class:`FallbackPolicy` estimate while
    the rate source is queried in the background. Fallback estimates are never
    cached, so the first render after a fetch lands shows the real value.
    """

    def __init__(
        self,
        source: RateSource,
        *,
        fallback: FallbackPolicy | None = None,
        conversion_cache: ConversionCache | None = None,
        rate_cache: RateCache | None = None,
        pending: PendingRequestTracker | None = None,
        on_update: UpdateCallback | None = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.source = source
        self.fallback = fallback or FallbackPolicy()
        self.conversion_cache = conversion_cache if conversion_cache is not None else ConversionCache()
        self.rate_cache = rate_cache if rate_cache is not None else RateCache()
        self.pending = pending if pending is not None else PendingRequestTracker()
        self.on_update = on_update
        self._loop = loop
        self._tasks: Set[asyncio.Task[None]] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def resolve(self, row: Row, target_currency: str) -> Conversion:
        """Return the converted amount and cash flow of ``row`` in ``target_currency``."""

        target = target_currency.upper()
        if row.local_currency == target:
            return Conversion(row.amount_local, row.cashflow_local, is_loading=False)

        conversion_key = row.conversion_key(target)
        cached_amount = self.conversion_cache.get(conversion_key)
        if cached_amount is not None:
            return Conversion(cached_amount, self._scaled_cashflow(row, cached_amount))

        embedded = row.embedded_rate(target)
        if embedded is not None:
            return self._resolved(row, conversion_key, embedded)

        rate_key = row.rate_key(target)
        cached_rate = self.rate_cache.get(rate_key)
        if cached_rate is not None:
            return self._resolved(row, conversion_key, cached_rate)

        if self.pending.mark_pending(rate_key):
            self._dispatch(rate_key, conversion_key, row.amount_local)
        estimate = self.fallback.estimate(row.local_currency, target)
        return Conversion.at_rate(row, estimate, is_loading=True)

    def resolve_many(self, rows: Iterable[Row], target_currency: str) -> List[Conversion]:
        """Resolve every visible row for one render pass."""

        return [self.resolve(row, target_currency) for row in rows]

    async def drain(self) -> None:
        """Wait until every fetch dispatched so far has completed."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def stats(self) -> dict[str, int]:
        return {
            "conversions": len(self.conversion_cache),
            "rates": len(self.rate_cache),
            "pending": len(self.pending),
            "tasks": len(self._tasks),
        }

    def close(self) -> None:
        """Tear the view down; fetches still in flight will find dead stores."""

        if self._closed:
            return
        self._closed = True
        self.conversion_cache.close()
        self.rate_cache.close()
        self.pending.close()
        LOGGER.debug("Resolver closed with %s fetch(es) still in flight", len(self._tasks))

    def __enter__(self) -> "RateResolver":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _resolved(self, row: Row, conversion_key: ConversionKey, rate: Decimal) -> Conversion:
        conversion = Conversion.at_rate(row, rate)
        self.conversion_cache.set(conversion_key, conversion.amount)
        return conversion

    @staticmethod
    def _scaled_cashflow(row: Row, amount: Decimal) -> Decimal:
        if row.amount_local == 0:
            return ZERO
        return row.cashflow_local * (amount / row.amount_local)

    def _dispatch(
        self, rate_key: RateKey, conversion_key: ConversionKey, amount_local: Decimal
    ) -> None:
        try:
            loop = self._loop or asyncio.get_running_loop()
        except RuntimeError:
            LOGGER.warning("No running event loop; cannot fetch rate %s", rate_key)
            self.pending.clear_pending(rate_key)
            return
        fetch = self._fetch(rate_key, conversion_key, amount_local)
        try:
            task = loop.create_task(fetch)
        except RuntimeError as exc:
            fetch.close()
            LOGGER.warning("Cannot schedule fetch for rate %s: %s", rate_key, exc)
            self.pending.clear_pending(rate_key)
            return
        LOGGER.info("Fetching rate %s for row %s", rate_key, conversion_key.row_id)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _fetch(
        self, rate_key: RateKey, conversion_key: ConversionKey, amount_local: Decimal
    ) -> None:
        try:
            raw = await self.source.get_rate(rate_key.source, rate_key.target, rate_key.rate_date)
        except Exception as exc:  # any failure leaves the key retryable
            LOGGER.warning("Rate lookup %s failed: %s", rate_key, exc)
            return
        finally:
            self.pending.clear_pending(rate_key)

        rate = positive_rate(raw)
        if rate is None:
            LOGGER.warning("Rate lookup %s returned unusable rate %r", rate_key, raw)
            return
        if self._closed:
            LOGGER.debug("Dropping rate %s for %s; resolver already closed", rate, rate_key)
            return
        self.rate_cache.set(rate_key, rate)
        self.conversion_cache.set(conversion_key, amount_local * rate)
        LOGGER.info("Resolved rate %s = %s", rate_key, rate)
        if self.on_update is not None:
            try:
                self.on_update(rate_key)
            except Exception:  # the host's re-render hook must not kill the task
                LOGGER.exception("Update callback failed for rate %s", rate_key)


__all__ = ["RateResolver"]
