# src/pricing/cache.py — v1
"""Process-wide live price cache: LRU-bounded, TTL-gated.

Entries older than the TTL are ignored on read but stay in place until they
are overwritten or pushed out by the capacity bound. Only successful
resolutions are ever written.
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from typing import Callable

from watchbutler.core.models import LivePrice, PriceCacheEntry

logger = logging.getLogger(__name__)

DEFAULT_TTL_S = 300.0
DEFAULT_MAX_ENTRIES = 1024


def make_cache_key(
    brand: str | None,
    model_name: str | None,
    reference_number: str | None,
) -> str:
    """Normalize a (brand, model, reference) tuple into ``brand|model|ref``."""
    return "|".join(
        (part or "").lower().strip()
        for part in (brand, model_name, reference_number)
    )


def is_cacheable_key(key: str) -> bool:
    """Keys with neither brand nor model would conflate unrelated lookups."""
    brand, model_name, _ = key.split("|", 2)
    return bool(brand or model_name)


class PriceCache:
    """Bounded key → LivePrice map with a staleness window.

    Args:
        ttl_s: Age in seconds after which an entry is ignored.
        max_entries: Capacity; least recently used entries are evicted first.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        ttl_s: float = DEFAULT_TTL_S,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_s <= 0:
            raise ValueError("ttl_s must be > 0")
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._ttl_s = ttl_s
        self._max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, PriceCacheEntry] = OrderedDict()

    @property
    def ttl_s(self) -> float:
        return self._ttl_s

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: str) -> LivePrice | None:
        """Return a copy of the fresh entry marked ``cached=True``, else None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        age = self._clock() - entry.timestamp
        if age >= self._ttl_s:
            logger.debug("Stale price cache entry for %r (age %.1fs)", key, age)
            return None
        self._entries.move_to_end(key)
        return entry.value.model_copy(update={"cached": True})

    def put(self, key: str, value: LivePrice) -> None:
        """Insert or overwrite, evicting the least recently used slot when full."""
        self._entries[key] = PriceCacheEntry(
            key=key,
            timestamp=self._clock(),
            value=value.model_copy(update={"cached": False}),
        )
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted price cache entry %r", evicted)

    def clear(self) -> None:
        self._entries.clear()
