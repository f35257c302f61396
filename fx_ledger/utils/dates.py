"""Helpers for turning transaction dates into rate-cache buckets."""

from __future__ import annotations

from datetime import date, datetime, timezone

TODAY_BUCKET = "today"


def parse_date(value: object) -> date | None:
    """Parse ``value`` into a calendar day, returning ``None`` when it is unusable.

    ``datetime`` values carrying a timezone are normalised to UTC before the
    day is taken, so ``2024-01-01T23:30:00-05:00`` lands in ``2024-01-02``.
    """

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return parse_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        return None


def rate_bucket(value: object) -> str:
    """Return the ISO day bucket for ``value`` or :data:`TODAY_BUCKET`."""

    day = parse_date(value)
    return day.isoformat() if day is not None else TODAY_BUCKET


def bucket_date(bucket: str) -> date | None:
    """Inverse of :func:`rate_bucket`; the ``today`` bucket maps to ``None``."""

    if bucket == TODAY_BUCKET:
        return None
    return date.fromisoformat(bucket)


__all__ = ["TODAY_BUCKET", "bucket_date", "parse_date", "rate_bucket"]
