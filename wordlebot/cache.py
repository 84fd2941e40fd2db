"""
cache.py

Least-recently-used cache whose entries also expire after a fixed TTL.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from typing import Callable, Generic, Hashable, Optional, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class TTLCache(Generic[K, V]):
    def __init__(self, max_size: int, ttl: float, clock: Callable[[], float] = time.monotonic) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self.max_size = max_size
        self.ttl = ttl
        self._clock = clock
        self._items: "OrderedDict[K, Tuple[V, float]]" = OrderedDict()

    def get(self, key: K) -> Optional[V]:
        """Return the cached value, or None if missing or expired."""
        item = self._items.get(key)
        if item is None:
            return None
        value, expiry = item
        if self._clock() > expiry:
            del self._items[key]
            return None
        self._items.move_to_end(key)
        return value

    def set(self, key: K, value: V) -> None:
        if key in self._items:
            del self._items[key]
        elif len(self._items) >= self.max_size:
            self._items.popitem(last=False)
        self._items[key] = (value, self._clock() + self.ttl)

    def clean_expired(self) -> None:
        now = self._clock()
        for key in [k for k, (_, expiry) in self._items.items() if now > expiry]:
            del self._items[key]

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None  # type: ignore[arg-type]
