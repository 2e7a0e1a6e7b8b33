"""General utilities for GoalPlan

Contents
--------
- Input coercion (lenient numeric parsing at the record boundary)
- Rate helpers (percent ↔ fraction, compounding)
- IEEE arithmetic (powers and quotients that return inf/NaN instead of raising)
- Finiteness guards
- Display helpers (format_amount)
"""

from __future__ import annotations

import math
from typing import Any, Optional

import numpy as np

from .constants import PERCENT, DEFAULT_CURRENCY_SYMBOL

__all__ = [
    # Coercion
    "coerce_number",
    "coerce_optional_number",
    # Rates
    "pct_to_fraction",
    "power",
    "safe_divide",
    "compound",
    # Finiteness
    "finite_or_zero",
    # Display
    "format_amount",
]


# ---------------------------------------------------------------------------
# Input coercion
# ---------------------------------------------------------------------------

def _parse(value: Any) -> Optional[float]:
    """Parse *value* into a finite float, or None if it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        cleaned = value.replace(",", "").strip()
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
    if math.isnan(number):
        return None
    return number


def coerce_number(value: Any) -> float:
    """Coerce user input to float; missing or invalid input becomes 0.0.

    Strings may carry thousands separators ("5,000" → 5000.0).
    """
    number = _parse(value)
    return 0.0 if number is None else number


def coerce_optional_number(value: Any) -> Optional[float]:
    """Coerce user input to float; missing or invalid input becomes None.

    Used for optional overrides where "unset" must stay distinguishable
    from an explicit zero.
    """
    return _parse(value)


# ---------------------------------------------------------------------------
# Rates
# ---------------------------------------------------------------------------

def pct_to_fraction(rate_pct: float) -> float:
    """Convert an annual percentage (2.5) to a fraction (0.025)."""
    return float(rate_pct) / PERCENT


def power(base: float, exponent: float) -> float:
    """``base ** exponent`` in IEEE arithmetic.

    Never raises: ``0 ** -n`` is inf, overflow is inf and a negative base
    with a fractional exponent is NaN.

    Examples
    --------
    >>> power(0.0, -2.0)
    inf
    >>> power(-0.5, 2.5)
    nan
    """
    with np.errstate(all="ignore"):
        return float(np.power(np.float64(base), np.float64(exponent)))


def safe_divide(numerator: float, denominator: float) -> float:
    """``numerator / denominator`` in IEEE arithmetic (x/0 is ±inf, 0/0 is NaN)."""
    with np.errstate(all="ignore"):
        return float(np.divide(np.float64(numerator), np.float64(denominator)))


def compound(amount: float, rate: float, periods: float) -> float:
    """Return ``amount * (1 + rate) ** periods``.

    *periods* may be zero or negative (negative discounts instead of growing).
    Degenerate inputs yield inf or NaN rather than an exception.
    """
    with np.errstate(all="ignore"):
        return float(np.float64(amount) * power(1.0 + float(rate), periods))


# ---------------------------------------------------------------------------
# Finiteness / display
# ---------------------------------------------------------------------------

def finite_or_zero(value: float) -> float:
    """Return *value*, or 0.0 if it is NaN or infinite."""
    value = float(value)
    return value if np.isfinite(value) else 0.0


def format_amount(value: float, *, symbol: str = DEFAULT_CURRENCY_SYMBOL, decimals: int = 0) -> str:
    """
    Format an amount for tables and reports.

    Non-finite values render as zero; the engine leaves rounding to callers.

    Examples
    --------
    >>> format_amount(5384.4531)
    '5,384'
    >>> format_amount(float("inf"))
    '0'
    >>> format_amount(1234.5, symbol="$", decimals=2)
    '$1,234.50'
    """
    val = finite_or_zero(value)
    if decimals == 0:
        val = round(val)
        text = f"{val:,.0f}"
        if text == "-0":
            text = "0"
    else:
        text = f"{val:,.{decimals}f}"
    return f"{symbol}{text}"
