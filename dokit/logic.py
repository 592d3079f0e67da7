"""Adapters that turn functions of various shapes into logic callables.

A logic callable takes ``(ctx, param)`` and returns a result; failures are
raised as exceptions.
"""

from __future__ import annotations

import functools
from typing import Any, Callable

__all__ = [
    "logic_from",
    "logic_from_wp",
    "logic_from_wr",
    "logic_from_wpr",
    "logic_from_we",
    "logic_from_wpe",
    "logic_from_wre",
    "logic_from_wpre",
    "run_if",
    "run_logic_if",
]

Logic = Callable[[Any, Any], Any]


def logic_from(func: Callable[[Any, Any], Any]) -> Logic:
    """Adapt ``func(ctx, param) -> result``, which already has the logic shape."""
    if not callable(func):
        raise TypeError(f"unsupported logic: {func!r}")

    @functools.wraps(func)
    def logic(ctx: Any, param: Any) -> Any:
        return func(ctx, param)

    return logic


def logic_from_wp(func: Callable[[Any], Any]) -> Logic:
    """Adapt ``func(ctx) -> result``; the parameter is ignored."""

    @functools.wraps(func)
    def logic(ctx: Any, param: Any) -> Any:
        return func(ctx)

    return logic


def logic_from_wr(func: Callable[[Any, Any], Any]) -> Logic:
    """Adapt ``func(ctx, param)`` that gives no result; the logic returns ``None``."""

    @functools.wraps(func)
    def logic(ctx: Any, param: Any) -> None:
        func(ctx, param)

    return logic


def logic_from_wpr(func: Callable[[Any], Any]) -> Logic:
    """Adapt ``func(ctx)`` that takes no parameter and gives no result."""

    @functools.wraps(func)
    def logic(ctx: Any, param: Any) -> None:
        func(ctx)

    return logic


def logic_from_we(func: Callable[[Any, Any], Any]) -> Logic:
    """Adapt ``func(ctx, param) -> result`` that never fails."""

    @functools.wraps(func)
    def logic(ctx: Any, param: Any) -> Any:
        return func(ctx, param)

    return logic


def logic_from_wpe(func: Callable[[Any], Any]) -> Logic:
    """Adapt ``func(ctx) -> result`` that never fails."""

    @functools.wraps(func)
    def logic(ctx: Any, param: Any) -> Any:
        return func(ctx)

    return logic


def logic_from_wre(func: Callable[[Any, Any], Any]) -> Logic:
    """Adapt ``func(ctx, param)`` that gives no result and never fails."""

    @functools.wraps(func)
    def logic(ctx: Any, param: Any) -> None:
        func(ctx, param)

    return logic


def logic_from_wpre(func: Callable[[Any], Any]) -> Logic:
    """Adapt ``func(ctx)`` that takes no parameter, gives no result and never fails."""

    @functools.wraps(func)
    def logic(ctx: Any, param: Any) -> None:
        func(ctx)

    return logic


def _as_logic(func: Any) -> Logic:
    to_logic = getattr(func, "to_logic", None)
    if callable(to_logic):
        return to_logic()
    if callable(func):
        return func
    raise TypeError(f"unsupported logic: {func!r}")


def run_if(cond: bool, ctx: Any, param: Any, func: Any) -> Any:
    """Run ``func`` with ``(ctx, param)`` if ``cond`` holds, else return ``None``.

    ``func`` is a logic callable or an object with a ``to_logic()`` method.
    """
    if not cond:
        return None
    return _as_logic(func)(ctx, param)


def run_logic_if(cond: bool, ctx: Any, param: Any, func: Logic) -> Any:
    """Run the logic callable ``func`` if ``cond`` holds, else return ``None``."""
    if not cond:
        return None
    return func(ctx, param)