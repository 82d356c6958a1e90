"""Per-key mutual exclusion for compile operations.

The initial scan and the watch worker may both dispatch the same definition
file at once. The compiler database is not reentrant for one key, so work on
a given path is serialized while different paths proceed in parallel.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator, Hashable

__all__ = ["KeyedLock"]


class KeyedLock:
    """Lock table that creates one lock per key on demand.

    Entries are reference counted and dropped when the last holder (or
    waiter) leaves, so the table does not grow with every file ever seen.

    Example:
        >>> locks = KeyedLock()
        >>> with locks.hold("/src/a.messages.js"):
        ...     len(locks)
        1
        >>> len(locks)
        0
    """

    __slots__ = ("_guard", "_locks")

    def __init__(self) -> None:
        self._guard = threading.Lock()
        # key -> (lock, number of holders and waiters)
        self._locks: dict[Hashable, tuple[threading.Lock, int]] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, key: Hashable) -> Generator[None]:
        """Hold the lock for key for the duration of the block."""
        with self._guard:
            lock, users = self._locks.get(key, (None, 0))
            if lock is None:
                lock = threading.Lock()
            self._locks[key] = (lock, users + 1)

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                _, users = self._locks[key]
                if users == 1:
                    del self._locks[key]
                else:
                    self._locks[key] = (lock, users - 1)
