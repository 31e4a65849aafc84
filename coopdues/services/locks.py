"""In-process lock registries serialising writers on the same key."""

import threading
from contextlib import ExitStack, contextmanager
from typing import Hashable, Iterator


class LockRegistry:
    """Hands out one re-entrant lock per key.

    Locks are acquired in sorted key order by ``hold`` so two writers asking
    for overlapping key sets cannot deadlock.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[Hashable, threading.RLock] = {}

    def get(self, key: Hashable) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.RLock()
            return lock

    @contextmanager
    def hold(self, *keys: Hashable) -> Iterator[None]:
        with ExitStack() as stack:
            for key in sorted(set(keys)):
                stack.enter_context(self.get(key))
            yield


# Single-due read-modify-write
due_locks = LockRegistry()
# Schedule generation per (coop_member_id, year)
schedule_locks = LockRegistry()

__all__ = ["LockRegistry", "due_locks", "schedule_locks"]
