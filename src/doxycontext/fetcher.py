"""HTTP page fetcher.

All network I/O for documentation pages goes through a single Fetcher
instance. The Fetcher receives an httpx.AsyncClient via constructor
injection; the lifespan owns the client lifecycle. Memoisation lives in the
crawler, not here: every call to ``fetch`` issues a request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from doxycontext.config import DEFAULT_USER_AGENT
from doxycontext.errors import FetchError

if TYPE_CHECKING:
    from doxycontext.config import CrawlerSettings

log = structlog.get_logger()


def build_http_client(settings: CrawlerSettings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        headers={"User-Agent": settings.user_agent},
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
        ),
    )


class Fetcher:
    """Plain GET fetcher with a fixed descriptive User-Agent."""

    def __init__(self, client: httpx.AsyncClient, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self._client = client
        self._user_agent = user_agent

    async def fetch(self, url: str) -> str:
        """Return the response body for ``url``.

        Raises FetchError on non-2xx responses (with status code and reason)
        and on transport failures (with the underlying message). No retry.
        """
        try:
            response = await self._client.get(url, headers={"User-Agent": self._user_agent})
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.warning("fetch_failed", url=url, error=str(exc))
            raise FetchError(url, reason=str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            log.warning("fetch_failed", url=url, status_code=response.status_code)
            raise FetchError(
                url,
                status_code=response.status_code,
                reason=response.reason_phrase,
            )

        log.info(
            "fetch_complete",
            url=url,
            status_code=response.status_code,
            content_length=len(response.text),
        )
        return response.text
