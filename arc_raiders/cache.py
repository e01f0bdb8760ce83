"""
In-memory TTL cache for API responses.

One ``TTLCache`` is owned by each ``ArcRaidersClient``. Entries expire a fixed
``ttl`` after they were written and are evicted lazily: an expired entry is
only noticed (and deleted) when it is looked up. There is no background sweep,
no capacity bound and no LRU policy, so a long-lived client accumulates one
entry per distinct key. That is a known limitation, acceptable for CLI and
scripting workloads.

The cache is not thread-safe. Under asyncio two concurrent misses for the
same key both run the full fetch and the later ``set`` wins.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class CacheEntry:
    """A cached value and the monotonic time after which it is stale."""

    value: Any
    expires_at: float


class TTLCache:
    """Key → value store with per-entry expiry.

    Args:
        ttl_seconds: Lifetime of every entry, measured from its ``set``.
        clock: Zero-arg callable returning the current time in seconds.
            Defaults to ``time.monotonic``; tests pass a manual clock.
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}.")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or ``None`` if missing or expired.

        Expiry is exclusive: an entry is stale once ``now > expires_at``.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() > entry.expires_at:
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: Any) -> None:
        """Insert or overwrite ``key`` with a fresh expiry of ``now + ttl``."""
        self._entries[key] = CacheEntry(
            value=value, expires_at=self._clock() + self.ttl_seconds
        )

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
