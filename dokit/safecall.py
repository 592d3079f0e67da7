"""Call functions so that exceptions are logged, and find the calling function's name."""

from __future__ import annotations

import logging
import os
import sys
import threading
import traceback
from concurrent.futures import Future
from typing import Any, Callable

__all__ = ["go", "go_r", "call_in_def_rec", "call_in_def_rec2", "func_name"]

logger = logging.getLogger(__name__)


def _log_panic(exc: BaseException) -> None:
    stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error("panic: %s \nstack: %s", exc, stack)


def call_in_def_rec(ctx: Any, param: Any, func: Callable[[Any, Any], Any]) -> Any:
    """Return ``func(ctx, param)``; if it raises, log the exception and return ``None``."""
    try:
        return func(ctx, param)
    except Exception as exc:
        _log_panic(exc)
        return None


def call_in_def_rec2(ctx: Any, param: Any, func: Callable[[Any, Any], Any]) -> Any:
    """Return ``func(ctx, param)``; if it raises, log it and raise ``RuntimeError("failed: ...")``."""
    try:
        return func(ctx, param)
    except Exception as exc:
        _log_panic(exc)
        raise RuntimeError(f"failed: {exc}") from exc


def go_r(ctx: Any, param: Any, func: Callable[[Any, Any], Any]) -> Future:
    """Run ``func(ctx, param)`` on a new thread; the future holds its result, or ``None`` if it raised."""
    future: Future = Future()

    def target() -> None:
        future.set_result(call_in_def_rec(ctx, param, func))

    threading.Thread(target=target, daemon=True).start()
    return future


def go(ctx: Any, param: Any, func: Callable[[Any, Any], Any]) -> Future:
    """Run ``func(ctx, param)`` on a new thread, logging any exception; the future completes with ``None``."""

    def discard(c: Any, p: Any) -> None:
        func(c, p)

    return go_r(ctx, param, discard)


def func_name(skip: int, with_file_info: bool) -> str:
    """Return the name of the function ``skip`` frames up the stack.

    ``skip=0`` is this function itself and ``skip=1`` its caller. The name is
    the stem of the function's source file, a dot and its qualified name.
    With ``with_file_info`` the name is prefixed by ``file:line``. Returns
    ``""`` when the stack is not that deep.
    """
    if skip < 0:
        return ""
    try:
        frame = sys._getframe(skip)
    except ValueError:
        return ""
    code = frame.f_code
    qualname = getattr(code, "co_qualname", code.co_name)
    stem = os.path.splitext(os.path.basename(code.co_filename))[0]
    name = f"{stem}.{qualname}" if stem else qualname
    if with_file_info:
        return f"{code.co_filename}:{frame.f_lineno} {name}"
    return name