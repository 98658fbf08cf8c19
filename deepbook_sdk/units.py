"""
Decimal <-> on-chain integer unit conversion.

On-chain amounts are integral base units. A human amount `A` of a coin with
scalar `S` (10**decimals) becomes `round(A * S)`, where the product is taken
in binary64 floating point and ties round half away from zero. Prices are
stored as quote units per base unit, scaled by `FLOAT_SCALAR`.

Decoded values are rounded to 9 decimal places for display stability.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from numbers import Real
from typing import Union

from .constants import FLOAT_SCALAR, U64_MAX

Number = Union[int, float, Decimal]

DISPLAY_PLACES = 9

# Wide enough to hold any finite binary64 value exactly.
_EXACT = Context(prec=400)


def _as_float(value: Number, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise ValueError(f"{what} must be a number, got {type(value).__name__}")
    f = float(value)
    if not math.isfinite(f):
        raise ValueError(f"{what} must be finite, got {value!r}")
    return f


def round_half_away(x: float) -> int:
    """Round a float to the nearest integer, ties away from zero."""
    return int(Decimal(x).quantize(Decimal(1), rounding=ROUND_HALF_UP, context=_EXACT))


def _check_u64(n: int, what: str) -> int:
    if n < 0:
        raise ValueError(f"{what} must be non-negative, got {n}")
    if n > U64_MAX:
        raise ValueError(f"{what} overflows u64: {n}")
    return n


def to_base_units(amount: Number, scalar: int, *, what: str = "amount") -> int:
    """
    Convert a human amount into integer base units: round(amount * scalar).

    >>> to_base_units(1.5, 10**9)
    1500000000
    """
    if scalar <= 0:
        raise ValueError(f"scalar must be positive, got {scalar}")
    scaled = _as_float(amount, what) * float(scalar)
    return _check_u64(round_half_away(scaled), what)


def price_to_units(price: Number, base_scalar: int, quote_scalar: int, *, what: str = "price") -> int:
    """
    Convert a quote-per-base price into the on-chain representation:
    round(price * FLOAT_SCALAR * quote_scalar / base_scalar).
    """
    scaled = (_as_float(price, what) * FLOAT_SCALAR * quote_scalar) / base_scalar
    return _check_u64(round_half_away(scaled), what)


def round_display(x: float, places: int = DISPLAY_PLACES) -> float:
    """round(x * 10**places) / 10**places with ties away from zero."""
    factor = 10 ** places
    return round_half_away(x * factor) / factor


def from_base_units(value: int, scalar: int) -> float:
    """Integer base units back to a human amount, rounded to 9 decimals."""
    return round_display(value / scalar)


def units_to_price(value: int, base_scalar: int, quote_scalar: int) -> float:
    """On-chain price back to quote-per-base, rounded to 9 decimals."""
    return round_display(value / FLOAT_SCALAR / quote_scalar * base_scalar)


__all__ = [
    "DISPLAY_PLACES",
    "round_half_away",
    "to_base_units",
    "price_to_units",
    "round_display",
    "from_base_units",
    "units_to_price",
]
