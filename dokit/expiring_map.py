"""A thread-safe dictionary whose keys can expire."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Generic, Hashable, TypeVar

__all__ = ["ExpiringMap"]

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass
class _Entry(Generic[V]):
    value: V
    deadline: float | None


class ExpiringMap(Generic[K, V]):
    """A dictionary whose entries may carry a timeout.

    Expired entries are hidden at once and purged by a background thread
    every ``watch_interval`` seconds.
    """

    def __init__(
        self,
        watch_interval: float = 15.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if watch_interval <= 0:
            raise ValueError("watch_interval must be positive")
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[K, _Entry[V]] = {}
        self._expiring: dict[K, _Entry[V]] = {}
        self._closed = threading.Event()
        self._watcher = threading.Thread(
            target=self._watch, args=(watch_interval,), daemon=True
        )
        self._watcher.start()

    @staticmethod
    def _expired(entry: _Entry[Any], now: float) -> bool:
        return entry.deadline is not None and now >= entry.deadline

    def insert(self, key: K, value: V, timeout: float | timedelta | None = None) -> None:
        """Store ``value`` under ``key``; it expires after ``timeout`` seconds if given."""
        deadline = None
        if timeout:
            seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else timeout
            deadline = self._clock() + seconds
        entry = _Entry(value, deadline)
        with self._lock:
            self._entries[key] = entry
            if deadline is None:
                self._expiring.pop(key, None)
            else:
                self._expiring[key] = entry

    def lookup(self, key: K) -> V:
        """Return the value for ``key``; raise :class:`KeyError` if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
        if entry is None or self._expired(entry, self._clock()):
            raise KeyError(key)
        return entry.value

    def get(self, key: K, default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` if missing or expired."""
        try:
            return self.lookup(key)
        except KeyError:
            return default

    def items(self) -> list[tuple[K, V]]:
        """Return the live (key, value) pairs."""
        now = self._clock()
        with self._lock:
            return [
                (key, entry.value)
                for key, entry in self._entries.items()
                if not self._expired(entry, now)
            ]

    def remove(self, key: K) -> None:
        """Remove ``key`` if present."""
        with self._lock:
            self._entries.pop(key, None)
            self._expiring.pop(key, None)

    def close(self) -> None:
        """Stop the background purge thread."""
        self._closed.set()
        if threading.current_thread() is not self._watcher:
            self._watcher.join()

    def __contains__(self, key: object) -> bool:
        try:
            self.lookup(key)  # type: ignore[arg-type]
        except KeyError:
            return False
        return True

    def __enter__(self) -> ExpiringMap[K, V]:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _purge(self) -> None:
        with self._lock:
            now = self._clock()
            for key, entry in list(self._expiring.items()):
                if self._expired(entry, now):
                    del self._expiring[key]
                    if self._entries.get(key) is entry:
                        del self._entries[key]
                    logger.debug("delete key %r at %s", key, now)

    def _watch(self, interval: float) -> None:
        while not self._closed.wait(interval):
            self._purge()