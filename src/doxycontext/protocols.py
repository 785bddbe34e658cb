"""Protocol interfaces for swappable components.

The crawler references these protocols, not the concrete implementations,
so tests can substitute an in-memory page source for the HTTP fetcher.
"""

from __future__ import annotations

from typing import Protocol


class FetcherProtocol(Protocol):
    """Interface for the HTTP page fetcher."""

    async def fetch(self, url: str) -> str: ...
