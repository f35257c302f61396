"""Tracks which rate lookups currently have a fetch in flight."""

from __future__ import annotations

from typing import Set

from fx_ledger.models import RateKey


class PendingRequestTracker:
    """At most one outstanding rate source call per :class:`RateKey`."""

    __slots__ = ("_pending", "_live")

    def __init__(self) -> None:
        self._pending: Set[RateKey] = set()
        self._live = True

    @property
    def live(self) -> bool:
        return self._live

    def is_pending(self, key: RateKey) -> bool:
        return key in self._pending

    def mark_pending(self, key: RateKey) -> bool:
        """Flag ``key`` as in flight; ``False`` means it already was (or we are closed)."""

        if not self._live or key in self._pending:
            return False
        self._pending.add(key)
        return True

    def clear_pending(self, key: RateKey) -> None:
        self._pending.discard(key)

    def close(self) -> None:
        self._live = False
        self._pending.clear()

    def __len__(self) -> int:
        return len(self._pending)


__all__ = ["PendingRequestTracker"]
