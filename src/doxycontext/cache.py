"""In-memory caches owned by a single crawler instance.

Two instances are used per crawler: raw page bodies keyed by exact URL and
search indexes keyed by site address, each with its own freshness window.
Nothing is persisted; ``clear()`` drops everything.

There is no locking. All access happens on one event loop, and no await
point separates a lookup from the write that follows a miss.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Generic, TypeVar

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import timedelta

log = structlog.get_logger()

V = TypeVar("V")


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class _Slot(Generic[V]):
    value: V
    stored_at: datetime


class TtlCache(Generic[V]):
    """Key/value store whose entries go stale after a fixed window.

    Stale entries are never returned by ``get``; they stay in memory until
    overwritten, purged by ``purge_expired`` or dropped by ``clear``.
    """

    def __init__(
        self,
        name: str,
        ttl: timedelta,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.name = name
        self.ttl = ttl
        self._clock = clock
        self._slots: dict[str, _Slot[V]] = {}

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, key: object) -> bool:
        return key in self._slots

    def now(self) -> datetime:
        return self._clock()

    def is_fresh(self, stored_at: datetime) -> bool:
        return self._clock() - stored_at < self.ttl

    def get(self, key: str) -> V | None:
        """Return the value for ``key`` if present and fresh, else ``None``."""
        slot = self._slots.get(key)
        if slot is None or not self.is_fresh(slot.stored_at):
            return None
        return slot.value

    def set(self, key: str, value: V, *, stored_at: datetime | None = None) -> None:
        """Store ``value``, replacing any previous entry for ``key``."""
        self._slots[key] = _Slot(value=value, stored_at=stored_at or self._clock())

    def purge_expired(self) -> int:
        """Drop stale entries. Returns the number removed."""
        expired = [key for key, slot in self._slots.items() if not self.is_fresh(slot.stored_at)]
        for key in expired:
            del self._slots[key]
        if expired:
            log.debug("cache_purged", cache=self.name, removed=len(expired))
        return len(expired)

    def clear(self) -> None:
        self._slots.clear()
