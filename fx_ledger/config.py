"""Configuration defaults for fx_ledger."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Final, Mapping

if TYPE_CHECKING:  # pragma: no cover - import only for static analyzers
    from fx_ledger.resolver import RateResolver
    from fx_ledger.sources.base import RateSource

# The ledger only knows one fiat cross rate offline.
DEFAULT_FALLBACK_RATES: Final[Mapping[tuple[str, str], Decimal]] = {
    ("USD", "VND"): Decimal("24000"),
}

STABLECOIN_ALIASES: Final[frozenset[str]] = frozenset(
    {"USDT", "USDC", "BUSD", "TUSD", "FDUSD", "USDP", "DAI"}
)

DEFAULT_HTTP_TIMEOUT: Final[float] = 10.0
DEFAULT_HTTP_MAX_ATTEMPTS: Final[int] = 3


@dataclass(slots=True)
class ResolverSettings:
    """Knobs used when wiring a :class:`~fx_ledger.resolver.RateResolver` for a view."""

    fallback_rates: Mapping[tuple[str, str], Any] = field(
        default_factory=lambda: dict(DEFAULT_FALLBACK_RATES)
    )
    api_base_url: str | None = None
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    http_max_attempts: int = DEFAULT_HTTP_MAX_ATTEMPTS

    def build_source(self) -> "RateSource":
        """Return an HTTP rate source for :attr:`api_base_url`."""

        if not self.api_base_url:
            raise ValueError("api_base_url is required to build an HTTP rate source")
        from fx_ledger.sources.http import HttpRateSource

        return HttpRateSource(
            self.api_base_url,
            timeout=self.http_timeout,
            max_attempts=self.http_max_attempts,
        )

    def build_resolver(
        self,
        source: "RateSource | None" = None,
        *,
        on_update: Callable[..., Any] | None = None,
    ) -> "RateResolver":
        """Create a resolver with fresh, empty stores."""

        from fx_ledger.fallback import FallbackPolicy
        from fx_ledger.resolver import RateResolver

        return RateResolver(
            source or self.build_source(),
            fallback=FallbackPolicy(self.fallback_rates),
            on_update=on_update,
        )


__all__ = [
    "DEFAULT_FALLBACK_RATES",
    "DEFAULT_HTTP_MAX_ATTEMPTS",
    "DEFAULT_HTTP_TIMEOUT",
    "STABLECOIN_ALIASES",
    "ResolverSettings",
]
