"""Per-user serialization of mutating planner operations."""
import threading
from contextlib import contextmanager
from typing import Dict

_registry_lock = threading.Lock()
_user_locks: Dict[str, threading.RLock] = {}


def get_user_lock(user_id: str) -> threading.RLock:
    with _registry_lock:
        lock = _user_locks.get(user_id)
        if lock is None:
            lock = _user_locks[user_id] = threading.RLock()
        return lock


@contextmanager
def user_lock(user_id: str):
    """Hold the user's lock; re-entrant within one thread"""
    lock = get_user_lock(user_id)
    with lock:
        yield
