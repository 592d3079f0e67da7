"""Integer digit helpers and rounding, factorial and power functions."""

from __future__ import annotations

import math

__all__ = [
    "split_uint",
    "join_uint",
    "pow10",
    "round_to",
    "floor_to",
    "ceil_to",
    "factorial",
    "factorial_big",
    "bin_pow",
    "bin_pow_big",
]

_U64 = 1 << 64
_MASK = _U64 - 1


def _wrap_i64(value: int) -> int:
    value &= _MASK
    return value - _U64 if value >= 1 << 63 else value


def split_uint(n: int) -> list[int]:
    """Split a non-negative integer into its decimal digits: 1234 -> [1, 2, 3, 4]."""
    if n < 0:
        raise ValueError(f"n must not be negative, got {n}")
    return [int(digit) for digit in str(n)]


def join_uint(parts: list[int]) -> int:
    """Join decimal digits back into an unsigned 64-bit integer."""
    total = sum(part * pow10(exp) for exp, part in enumerate(reversed(parts)))
    return total & _MASK


def pow10(n: int) -> int:
    """Return 10**n as an unsigned 64-bit integer, or 0 if ``n`` is negative."""
    if n < 0:
        return 0
    return (10**n) & _MASK


def _round_half_away(x: float) -> float:
    if not math.isfinite(x):
        return x
    whole = float(math.trunc(x))
    if abs(x - whole) >= 0.5:
        whole += math.copysign(1.0, x)
    return whole


def _scale(places: int) -> float:
    factor = 1.0
    for _ in range(places):
        factor *= 10
    return factor


def round_to(x: float, places: int) -> float:
    """Round ``x`` to ``places`` decimals, halves away from zero."""
    if places == 0:
        return _round_half_away(x)
    factor = _scale(places)
    return _round_half_away(x * factor) / factor


def floor_to(x: float, places: int) -> float:
    """Round ``x`` down to ``places`` decimals."""
    if places == 0:
        return float(math.floor(x)) if math.isfinite(x) else x
    factor = _scale(places)
    return math.floor(x * factor) / factor


def ceil_to(x: float, places: int) -> float:
    """Round ``x`` up to ``places`` decimals."""
    if places == 0:
        return float(math.ceil(x)) if math.isfinite(x) else x
    factor = _scale(places)
    return math.ceil(x * factor) / factor


def factorial(n: int) -> int:
    """Return n! for n <= 20, and 0 for larger n (use :func:`factorial_big`)."""
    if n > 20:
        return 0
    return math.prod(range(2, n + 1))


def factorial_big(n: int) -> str:
    """Return n! as a decimal string."""
    return str(math.prod(range(2, n + 1)))


def bin_pow(a: int, b: int) -> int:
    """Return a**b with signed 64-bit wrap-around; 1 when ``b`` is not positive."""
    if b <= 0:
        return 1
    return _wrap_i64(pow(a, b, _U64))


def bin_pow_big(a: int, b: int) -> str:
    """Return a**b as a decimal string; "1" when ``b`` is not positive."""
    if b <= 0:
        return "1"
    return str(a**b)