"""Compute-once cache for generated RequireJS configs."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Hashable, TypeVar

from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResolutionCache:
    """Process-lifetime cache keyed by normalized prefix chain and output kind.

    The first caller for a key runs the factory while holding that key's
    lock; concurrent callers for the same key wait on it and then read the
    stored value. Different keys never block each other. There is no TTL or
    eviction: the installed webjars do not change while the process runs.
    """

    def __init__(self) -> None:
        self._values: Dict[Hashable, Any] = {}
        self._key_locks: Dict[Hashable, threading.Lock] = {}
        self._lock = threading.Lock()

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._key_locks[key] = lock
            return lock

    def get_or_compute(self, key: Hashable, factory: Callable[[], T]) -> T:
        """Return the cached value for ``key``, computing it at most once.

        A factory that raises leaves the key uncached, so a later call retries.
        """
        with self._lock:
            if key in self._values:
                return self._values[key]

        with self._lock_for(key):
            with self._lock:
                if key in self._values:
                    return self._values[key]
            if is_debug_enabled(logger):
                logger.debug(
                    "Computing cached value",
                    extra=extra_context(event="cache_miss", component="cache", action="get_or_compute")
                )
            value = factory()
            with self._lock:
                self._values[key] = value
            return value

    def clear(self) -> None:
        """Forget every cached value (tests only)."""
        with self._lock:
            self._values.clear()
            self._key_locks.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._values
