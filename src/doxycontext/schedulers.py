"""Background scheduler coroutine for in-memory cache maintenance."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from doxycontext.state import AppState

log = structlog.get_logger()


def _purge(state: AppState) -> None:
    if state.crawler is None:
        return
    removed = state.crawler.purge_expired()
    log.info("cache_cleanup_complete", removed=removed)


async def run_cache_cleanup_scheduler(state: AppState) -> None:
    """Purge stale cache entries at startup and (HTTP mode) on the configured interval.

    Stale entries are never served either way; purging only bounds memory
    for long-running servers.
    """
    _purge(state)

    if state.settings.server.transport != "http":
        return

    interval_seconds = state.settings.crawler.cleanup_interval_seconds
    while True:
        await asyncio.sleep(interval_seconds)
        _purge(state)
