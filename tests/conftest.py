"""Shared test fixtures for the doxycontext test suite.

``mock_site`` serves a small Doxygen-style site at SITE through respx:
paths missing from ``site_pages`` answer 404, integer entries answer with
that status code.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import httpx
import pytest
import respx

from doxycontext.crawler import DoxygenCrawler
from doxycontext.fetcher import Fetcher
from tests.doxygen_site import SITE, UNREACHABLE_SITE, default_pages

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator


class FakeClock:
    """Manually advanced UTC clock for freshness-window tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2026, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def site_pages() -> dict[str, str | int]:
    """Mutable page map served by ``mock_site``; tests may edit it."""
    return default_pages()


@pytest.fixture()
def mock_site(site_pages: dict[str, str | int]) -> Iterator[respx.Route]:
    """Serve ``site_pages`` at SITE; UNREACHABLE_SITE fails to connect."""

    def _respond(request: httpx.Request) -> httpx.Response:
        page = site_pages.get(request.url.path.lstrip("/"))
        if page is None:
            return httpx.Response(404)
        if isinstance(page, int):
            return httpx.Response(page)
        return httpx.Response(200, text=page)

    with respx.mock(assert_all_called=False) as router:
        router.route(host=httpx.URL(UNREACHABLE_SITE).host).mock(
            side_effect=httpx.ConnectError("Name or service not known")
        )
        yield router.route(host=httpx.URL(SITE).host).mock(side_effect=_respond)


@pytest.fixture()
async def http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture()
def crawler(http_client: httpx.AsyncClient, clock: FakeClock) -> DoxygenCrawler:
    return DoxygenCrawler(Fetcher(http_client), clock=clock)
