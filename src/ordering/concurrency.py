"""Keyed mutation locks.

Cart, checkout and payment commands for one owner, and status changes for one
order, are processed one at a time inside this process. Writes from other
processes are caught by the repository's aggregate version check, which
raises ``ExpectedVersionError``.
"""

import threading
import weakref
from contextlib import contextmanager

from protean.utils.globals import current_domain

_registry_lock = threading.Lock()
# Entries vanish once no caller holds the lock
_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()


def owner_key(owner_id: str) -> str:
    return f"owner:{owner_id}"


def order_key(order_id: str) -> str:
    return f"order:{order_id}"


def lock_for(key: str) -> threading.Lock:
    with _registry_lock:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.Lock()
        return lock


@contextmanager
def serialized(key: str):
    """Hold the lock for ``key`` until the block exits."""
    with lock_for(key):
        yield


def process_serialized(key: str, command):
    """Process ``command`` synchronously while holding the lock for ``key``.

    The lock is held across the whole Unit of Work, including its commit.
    """
    with serialized(key):
        return current_domain.process(command, asynchronous=False)
