from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class LockTable:
    """Per-key mutexes for in-process critical sections.

    One `threading.Lock` per key, created on first use. Callers only ever hold a
    single key at a time, so there is no lock ordering to worry about.
    """

    def __init__(self) -> None:
        self._locks: dict[str, threading.Lock] = {}
        self._table_lock = threading.Lock()

    def _lock_for(self, key: str) -> threading.Lock:
        with self._table_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def guard(self, key: str) -> Iterator[None]:
        lock = self._lock_for(key)
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
