"""
Capacity-bounded, TTL-aware in-memory cache for provider responses.

Only positive provider results are stored here. Expiry is enforced lazily:
an entry past its deadline is dropped the next time it is read, and memory is
bounded by capacity (least-recently-touched eviction) rather than by a
background sweep.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .exceptions import InvalidCapacityError, InvalidTTLError

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass(slots=True)
class CacheEntry(Generic[V]):
    """A cached value and the absolute instant after which it is stale."""

    value: V
    expires_at: float


class ExpiringCache(Generic[V]):
    """LRU cache whose entries expire after a per-entry time-to-live.

    Both a `set` and a successful `get` count as a touch, so the eviction
    victim at capacity is the least-recently-touched entry, not merely the
    oldest insertion.

    Args:
        capacity: Maximum number of live entries held at once.
        default_ttl_seconds: TTL applied when `set` is called without one.
        name: Label used in log messages.
        clock: Monotonic time source in seconds. Injectable for tests.
    """

    def __init__(
        self,
        capacity: int,
        default_ttl_seconds: float,
        *,
        name: str = "cache",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if capacity < 1:
            raise InvalidCapacityError(capacity)
        if default_ttl_seconds < 0:
            raise InvalidTTLError(default_ttl_seconds, "default_ttl_seconds")

        self._capacity = int(capacity)
        self._default_ttl = float(default_ttl_seconds)
        self._name = name
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry[V]] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def default_ttl_seconds(self) -> float:
        return self._default_ttl

    def get(self, key: str) -> V | None:
        """Return the live value for `key`, or None if missing or expired.

        An expired entry is evicted as a side effect. A hit moves the entry to
        the most-recently-used position.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() > entry.expires_at:
                del self._entries[key]
                logger.debug("%s: evicted expired entry %s on read", self._name, key)
                return None
            self._entries.move_to_end(key)
            return entry.value

    def set(self, key: str, value: V, ttl_seconds: float | None = None) -> None:
        """Insert or replace `key` with an expiry of now + ttl.

        When the cache is full and `key` is new, exactly one entry (the least
        recently touched) is evicted before insertion.

        Raises:
            InvalidTTLError: If `ttl_seconds` is negative.
        """
        ttl = self._default_ttl if ttl_seconds is None else float(ttl_seconds)
        if ttl < 0:
            raise InvalidTTLError(ttl)

        with self._lock:
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self._capacity:
                victim, _ = self._entries.popitem(last=False)
                logger.debug("%s: capacity reached, evicted %s", self._name, victim)
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl)

    def delete(self, key: str) -> bool:
        """Remove `key` if present. Returns True when an entry was removed."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        # Does not count as a touch and does not evict.
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[arg-type]
            return entry is not None and self._clock() <= entry.expires_at

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def keys(self) -> list[str]:
        """Return stored keys from least to most recently touched."""
        with self._lock:
            return list(self._entries.keys())
