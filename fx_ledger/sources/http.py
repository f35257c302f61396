"""requests-based client for the ledger backend's FX endpoints."""

from __future__ import annotations

import asyncio
from datetime import date
from decimal import Decimal
from typing import Any, Optional

import requests
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from fx_ledger.config import DEFAULT_HTTP_MAX_ATTEMPTS, DEFAULT_HTTP_TIMEOUT, STABLECOIN_ALIASES
from fx_ledger.errors import InvalidRateError, RateSourceError
from fx_ledger.utils.amounts import positive_rate
from fx_ledger.utils.logger import get_logger

LOGGER = get_logger(__name__)

TODAY_PATH = "/api/fx/today"
HISTORY_PATH = "/api/fx/history"


def normalise_currency(code: str) -> str:
    """Upper-case ``code`` and treat USD-pegged stablecoins as ``USD``."""

    upper = code.strip().upper()
    return "USD" if upper in STABLECOIN_ALIASES else upper


class HttpRateSource:
    """Fetch today's or a historical rate from the ledger backend.

    Connection problems and timeouts are retried with exponential backoff up to
    ``max_attempts`` times. HTTP error statuses and unusable payloads are not
    retried; they surface as :class:`RateSourceError` /
    :class:`InvalidRateError`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        max_attempts: int = DEFAULT_HTTP_MAX_ATTEMPTS,
        backoff_seconds: float = 0.5,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url must not be empty")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        if session is None:
            session = requests.Session()
            session.headers.update({"Accept": "application/json"})
        self.session = session

    async def get_rate(
        self, source: str, target: str, rate_date: date | None = None
    ) -> Decimal:
        # requests blocks, so keep it off the event loop thread.
        return await asyncio.to_thread(self.fetch_rate, source, target, rate_date)

    def fetch_rate(self, source: str, target: str, rate_date: date | None = None) -> Decimal:
        """Blocking lookup of the ``source`` -> ``target`` rate on ``rate_date``."""

        from_code = normalise_currency(source)
        to_code = normalise_currency(target)
        if from_code == to_code:
            return Decimal("1")

        if rate_date is None:
            url = f"{self.base_url}{TODAY_PATH}"
            params = {"from": from_code, "to": to_code}
        else:
            day = rate_date.isoformat()
            url = f"{self.base_url}{HISTORY_PATH}"
            params = {"from": from_code, "to": to_code, "start": day, "end": day}

        LOGGER.info("Fetching %s-%s rate for %s", from_code, to_code, rate_date or "today")
        payload = self._get_json(url, params)
        rate = self._extract_rate(payload, historical=rate_date is not None)
        if rate is None:
            raise InvalidRateError(
                f"Invalid rate received for {from_code}-{to_code} on {rate_date or 'today'}"
            )
        return rate

    def _get_json(self, url: str, params: dict[str, str]) -> Any:
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.backoff_seconds, max=10),
            retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RateSourceError(f"FX request to {url} failed: {exc}") from exc

        self._raise_with_context(response, url)
        try:
            return response.json()
        except ValueError as exc:
            raise InvalidRateError(f"FX endpoint {url} returned a non-JSON body") from exc

    @staticmethod
    def _raise_with_context(response: requests.Response, url: str) -> None:
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise RateSourceError(
                f"FX endpoint responded with HTTP {response.status_code} for {url}"
            ) from exc

    @staticmethod
    def _extract_rate(payload: Any, *, historical: bool) -> Decimal | None:
        if historical:
            if not isinstance(payload, list) or not payload:
                return None
            payload = payload[0]
        if not isinstance(payload, dict):
            return None
        raw = payload.get("rate")
        if raw is None:
            raw = payload.get("Rate")
        return positive_rate(raw)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpRateSource":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["HISTORY_PATH", "HttpRateSource", "TODAY_PATH", "normalise_currency"]
