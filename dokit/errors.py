"""Error wrappers and helpers that raise or log errors passed as values."""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

__all__ = [
    "InnerError",
    "RawError",
    "must",
    "must_values",
    "log_error",
    "log_values",
    "ignore_last",
    "match_error",
    "convert_error",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InnerError(Exception, Generic[T]):
    """An error carrying an arbitrary inner element; its text is the element's."""

    def __init__(self, inner: T) -> None:
        super().__init__(inner)
        self.inner = inner

    def __str__(self) -> str:
        return str(self.inner)


class RawError(Exception):
    """Wraps an original error, shown as ``raw error: <error>``."""

    def __init__(self, raw: BaseException) -> None:
        super().__init__(raw)
        self.raw = raw

    def __str__(self) -> str:
        return f"raw error: {self.raw}"


def _wrap(err: BaseException) -> InnerError[RawError]:
    return InnerError(RawError(err))


def _split_last(args: tuple[Any, ...]) -> Any:
    if not args:
        raise TypeError("at least one argument is required")
    rest = args[:-1]
    return rest[0] if len(rest) == 1 else rest


def must(err: BaseException | None) -> None:
    """Raise ``err`` wrapped in :class:`InnerError` if it is not ``None``."""
    if err is not None:
        raise _wrap(err) from err


def must_values(*args: Any) -> Any:
    """Treat the last argument as an error: raise it, or return the others.

    One remaining value is returned alone, several as a tuple.
    """
    result = _split_last(args)
    must(args[-1])
    return result


def log_error(err: BaseException | None) -> None:
    """Log ``err`` if it is not ``None`` and carry on."""
    if err is not None:
        logger.error("%s", _wrap(err))


def log_values(*args: Any) -> Any:
    """Log the last argument if it is an error, and return the others."""
    result = _split_last(args)
    log_error(args[-1])
    return result


def ignore_last(*args: Any) -> Any:
    """Drop the last argument and return the others."""
    return _split_last(args)


def match_error(value: Any) -> bool:
    """Return whether ``value`` is an error raised by :func:`must`."""
    return convert_error(value) is not None


def convert_error(value: Any) -> InnerError[RawError] | None:
    """Return ``value`` if it is an error raised by :func:`must`, else ``None``."""
    if isinstance(value, InnerError) and isinstance(value.inner, RawError):
        return value
    return None