"""Run functions as a pipeline, as an event with success and failure handlers, or in a loop."""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Callable

__all__ = ["EventEntity", "EventLoop", "pipe", "pipes", "event"]

logger = logging.getLogger(__name__)

Step = Callable[[Any, Any], Any]


def pipe(ctx: Any, value: Any, before: Step, do: Step, after: Step) -> Any:
    """Run ``before``, ``do`` and ``after`` in order, each fed the previous result."""
    return after(ctx, do(ctx, before(ctx, value)))


def _runner(step: Any) -> Step:
    run = getattr(step, "run", None)
    return run if callable(run) else step


def pipes(ctx: Any, value: Any, before: Any, do: Any, after: Any) -> Any:
    """Like :func:`pipe`, for steps that are callables or objects with ``run(ctx, value)``."""
    return pipe(ctx, value, _runner(before), _runner(do), _runner(after))


def event(
    ctx: Any,
    param: Any,
    do: Step,
    success: Step,
    failed: Callable[[Any, Exception], Any],
) -> Any:
    """Run ``do``; pass its result to ``success``, or its exception to ``failed``."""
    try:
        outcome = do(ctx, param)
    except Exception as exc:
        return failed(ctx, exc)
    return success(ctx, outcome)


@dataclass
class EventEntity:
    """An event to run in an :class:`EventLoop`; ``handler`` gets ``(result, error)``."""

    param: Any
    do: Step
    success: Step
    failed: Callable[[Any, Exception], Any]
    handler: Callable[[Any, Exception | None], None] | None = None


_STOP = object()


class EventLoop:
    """Runs queued events one after another on a background thread."""

    def __init__(self, ctx: Any = None, size: int = 0) -> None:
        self._ctx = ctx
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=max(size, 0))
        self._lock = threading.Lock()
        self._stopped = False
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while True:
            entity = self._queue.get()
            if entity is _STOP:
                return
            error: Exception | None = None
            try:
                result = event(
                    self._ctx, entity.param, entity.do, entity.success, entity.failed
                )
            except Exception as exc:
                result, error = None, exc
            if entity.handler is None:
                continue
            try:
                entity.handler(result, error)
            except Exception:
                logger.exception("event handler failed")

    def send(self, entity: EventEntity) -> None:
        """Queue ``entity``; raise :class:`RuntimeError` once the loop is stopped."""
        with self._lock:
            if self._stopped:
                raise RuntimeError("send on stopped event loop")
            self._queue.put(entity)

    def stop(self) -> None:
        """Stop the loop after the events already queued have run."""
        with self._lock:
            if self._stopped:
                return
            self._stopped = True
            self._queue.put(_STOP)
        if threading.current_thread() is not self._thread:
            self._thread.join()

    def __enter__(self) -> EventLoop:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()