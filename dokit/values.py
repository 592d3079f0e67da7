"""Small helpers about values: equality, zero values and coalescing."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

__all__ = ["EnumItem", "equal", "is_zero", "coalesce"]

T = TypeVar("T")


@dataclass(frozen=True)
class EnumItem(Generic[T]):
    """A named enumeration value."""

    name: str
    value: T


def equal(left: Any, right: Any) -> bool:
    """Return whether the two values are equal."""
    return left == right


def is_zero(value: Any) -> bool:
    """Return whether ``value`` is the zero value of its kind.

    ``None``, false, numeric zero and empty sequences are zero; a dataclass
    instance is zero when every one of its fields is zero.
    """
    if value is None:
        return True
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return all(
            is_zero(getattr(value, field.name)) for field in dataclasses.fields(value)
        )
    return not value


def coalesce(*args: Any) -> Any:
    """Return the first argument that is not zero.

    If every argument is zero the last one is returned; with no arguments
    the result is ``None``.
    """
    for value in args:
        if not is_zero(value):
            return value
    return args[-1] if args else None