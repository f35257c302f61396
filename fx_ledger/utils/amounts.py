"""Numeric coercion helpers shared by rows, rate sources and the resolver."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

# Magnitudes outside 1E-100 .. 1E+100 are rejected so every product and
# quotient the resolver forms stays within the default decimal context.
MAX_ADJUSTED_EXPONENT = 100


def to_decimal(value: object | None, default: Decimal | None = None) -> Decimal | None:
    """Coerce ``value`` into a finite :class:`Decimal` or return ``default``."""

    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        candidate = value
    elif isinstance(value, (int, float)):
        # ``str`` keeps 0.1 as 0.1 instead of its binary expansion.
        candidate = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if not cleaned:
            return default
        try:
            candidate = Decimal(cleaned)
        except InvalidOperation:
            return default
    else:
        return default
    if not candidate.is_finite():
        return default
    if candidate and abs(candidate.adjusted()) > MAX_ADJUSTED_EXPONENT:
        return default
    return candidate


def positive_rate(value: object | None) -> Decimal | None:
    """Return ``value`` as a usable exchange rate, or ``None`` if it is not one."""

    rate = to_decimal(value)
    if rate is None or rate <= 0:
        return None
    return rate


__all__ = ["MAX_ADJUSTED_EXPONENT", "positive_rate", "to_decimal"]
