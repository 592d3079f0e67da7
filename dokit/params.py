"""Parse request parameters with a decoder and validate the result."""

from __future__ import annotations

from typing import Any, Callable

__all__ = ["ParamParser"]

_CO_VARARGS = 0x04


def _accepts_argument(func: Callable[..., Any]) -> bool:
    target = getattr(func, "__func__", func)
    code = getattr(target, "__code__", None)
    if code is None:
        return False
    bound = 1 if target is not func else 0
    return code.co_argcount - bound > 0 or bool(code.co_flags & _CO_VARARGS)


class ParamParser:
    """Decodes raw data (query values, a body) into a target object.

    ``decoder`` is a callable ``(data, target)`` or an object with a
    ``decode(data, target)`` method.
    """

    def __init__(self, decoder: Any) -> None:
        decode = getattr(decoder, "decode", None)
        self._decode = decode if callable(decode) else decoder
        if not callable(self._decode):
            raise TypeError(f"{decoder!r} is not a decoder")

    def parse(self, data: Any, target: Any) -> Any:
        """Decode ``data`` into ``target`` and return ``target``."""
        self._decode(data, target)
        return target

    def parse_and_check(self, ctx: Any, data: Any, target: Any) -> Any:
        """Decode ``data`` into ``target``, then run its ``check`` method if it has one.

        ``check`` is called with ``ctx`` if it takes an argument, otherwise
        with none; it signals a problem by raising.
        """
        self.parse(data, target)
        check = getattr(target, "check", None)
        if callable(check):
            if _accepts_argument(check):
                check(ctx)
            else:
                check()
        return target