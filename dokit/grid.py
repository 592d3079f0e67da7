"""Two-dimensional grids filled with an initial value."""

from __future__ import annotations

from typing import Any

__all__ = ["rectangle", "square"]

_ZERO = 0


def _cell(initial: tuple[Any, ...], columns: int, column: int) -> Any:
    count = len(initial)
    if 0 < count < columns:
        return initial[0]
    if count == columns and count > 0:
        return initial[column]
    return _ZERO


def rectangle(m: int, n: int, *args: Any) -> list[list[Any]]:
    """Return an ``m`` by ``n`` grid.

    With one or more (but fewer than ``n``) initial values, every cell holds
    the first one; with exactly ``n`` values, column ``j`` holds value ``j``;
    otherwise every cell is ``0``.
    """
    row_template = [_cell(args, n, column) for column in range(max(n, 0))]
    return [list(row_template) for _ in range(max(m, 0))]


def square(n: int, *args: Any) -> list[list[Any]]:
    """Return an ``n`` by ``n`` grid, filled like :func:`rectangle`."""
    return rectangle(n, n, *args)