# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import OrderedDict
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from threading import Lock
from typing import Generic, TypeVar

from authportal.shared.logging import logger

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(slots=True)
class CacheEntry(Generic[V]):  # noqa: UP046
    value: V
    inserted_at: float


class InMemoryTTLCache(Generic[K, V]):  # noqa: UP046
    """Per-owner cache of ``key -> (value, inserted_at)``.

    Entries older than ``ttl_seconds`` are misses. Once ``max_entries`` is
    reached the oldest insertion is evicted.
    """

    def __init__(
        self,
        ttl_seconds: float,
        *,
        max_entries: int = 128,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._max_entries = max(1, max_entries)
        self._clock = clock
        self._lock = Lock()
        self._store: OrderedDict[K, CacheEntry[V]] = OrderedDict()

    def _is_fresh(self, entry: CacheEntry[V], now: float) -> bool:
        return now - entry.inserted_at < self._ttl

    def get_or_set(self, key: K, factory: Callable[[], V]) -> tuple[V, bool]:
        """Return ``(value, hit)``; ``factory`` runs only on a miss."""
        with self._lock:
            entry = self._store.get(key)
            if entry and self._is_fresh(entry, self._clock()):
                logger.debug(f"cache: hit key={key}")
                return entry.value, True

        logger.debug(f"cache: miss key={key}")
        value = factory()
        with self._lock:
            self._store.pop(key, None)
            while len(self._store) >= self._max_entries:
                evicted, _ = self._store.popitem(last=False)
                logger.debug(f"cache: evict key={evicted}")
            self._store[key] = CacheEntry(value=value, inserted_at=self._clock())
        return value, False

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


__all__ = ["CacheEntry", "InMemoryTTLCache"]
