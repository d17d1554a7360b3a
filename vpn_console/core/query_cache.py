"""Keyed read cache with invalidation and in-flight de-duplication."""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Hashable, Optional


@dataclass
class _Entry:
    value: Any = None
    fresh: bool = False
    fetched_at: float = 0.0
    generation: int = 0
    inflight: Optional[asyncio.Future] = None


class QueryCache:
    """Freshness-flag map plus one shared fetch per key.

    A read of a fresh key returns the stored value, unless the caller's
    ``stale_after`` bound has passed since it was fetched. A read of a stale
    key starts a fetch, or joins the one already running. ``invalidate``
    bumps the key's generation, so a fetch that was already running when the
    key was invalidated never marks it fresh again; the next read refetches.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._entries: dict[Hashable, _Entry] = {}

    def _entry(self, key: Hashable) -> _Entry:
        if key not in self._entries:
            self._entries[key] = _Entry()
        return self._entries[key]

    def _usable(self, entry: _Entry, stale_after: Optional[float]) -> bool:
        if not entry.fresh:
            return False
        if stale_after is None:
            return True
        return self.clock() - entry.fetched_at < stale_after

    async def fetch(
        self,
        key: Hashable,
        loader: Callable[[], Awaitable[Any]],
        stale_after: Optional[float] = None
    ) -> Any:
        entry = self._entry(key)
        if self._usable(entry, stale_after):
            return entry.value

        if entry.inflight is None:
            entry.inflight = asyncio.ensure_future(
                self._load(entry, entry.generation, loader)
            )
        # shield: one cancelled caller must not cancel the shared fetch
        return await asyncio.shield(entry.inflight)

    async def _load(
        self,
        entry: _Entry,
        generation: int,
        loader: Callable[[], Awaitable[Any]]
    ) -> Any:
        try:
            value = await loader()
        finally:
            if entry.generation == generation:
                entry.inflight = None

        if entry.generation == generation:
            entry.value = value
            entry.fresh = True
            entry.fetched_at = self.clock()
        return value

    def invalidate(self, *keys: Hashable) -> None:
        """Drop keys; a key never read is left out of the map."""
        for key in keys:
            entry = self._entries.pop(key, None)
            if entry is not None:
                entry.generation += 1

    def __len__(self) -> int:
        return len(self._entries)
