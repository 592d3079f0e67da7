"""Helpers for building SQL conditions."""

from __future__ import annotations

from typing import Any, Callable

from dokit.values import is_zero

__all__ = ["field_with_alias", "with_where"]


def field_with_alias(field: str, alias: str, default_alias: str) -> str:
    """Prefix ``field`` with ``alias``, or ``default_alias`` if ``alias`` is empty."""
    alias = alias or default_alias
    return f"{alias}.{field}" if alias else field


def with_where(
    value: Any, cond: Callable[[str, Any], str], field: str, *args: Any
) -> str:
    """Return ``cond(field, value)`` unless ``value`` is zero, else ``""``.

    A value with an ``is_zero()`` method decides for itself. If a replacement
    is given, it is passed to ``cond`` instead of ``value``.
    """
    checker = getattr(value, "is_zero", None)
    zero = checker() if callable(checker) else is_zero(value)
    if zero:
        return ""
    if args:
        value = args[0]
    return cond(field, value)