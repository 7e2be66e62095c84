"""Per-key mutual exclusion.

``KeyedLock`` hands out one mutex per key (a user's email in this domain).
Entries are reference counted and dropped once the last holder or waiter
leaves, so the table only holds keys that have requests in flight.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from shopping.shared.errors import InfrastructureError


class _Entry:
    __slots__ = ("lock", "refs")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.refs = 0


class KeyedLock:
    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    def _checkout(self, key: str) -> _Entry:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.refs += 1
            return entry

    def _checkin(self, key: str, entry: _Entry) -> None:
        with self._guard:
            entry.refs -= 1
            if entry.refs == 0:
                del self._entries[key]

    @contextmanager
    def hold(self, key: str, timeout: float | None = None) -> Iterator[None]:
        """Hold the lock for ``key`` for the duration of the block.

        Raises ``InfrastructureError`` if the lock is not acquired within
        ``timeout`` seconds. ``None`` waits without a bound.
        """
        entry = self._checkout(key)
        acquired = False
        try:
            acquired = entry.lock.acquire(timeout=-1 if timeout is None else timeout)
            if not acquired:
                raise InfrastructureError(f"Timed out after {timeout}s waiting for the lock on {key!r}")
            yield
        finally:
            if acquired:
                entry.lock.release()
            self._checkin(key, entry)
