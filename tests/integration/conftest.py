"""Integration test fixtures.

Provides a fully wired AppState whose crawler talks to the respx-mocked
documentation site from tests/conftest.py.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from doxycontext.config import Settings
from doxycontext.state import AppState
from tests.doxygen_site import SITE

if TYPE_CHECKING:
    import httpx
    import respx

    from doxycontext.crawler import DoxygenCrawler


@pytest.fixture()
def app_state(
    http_client: httpx.AsyncClient,
    crawler: DoxygenCrawler,
    mock_site: respx.Route,
) -> AppState:
    """AppState with SITE configured as the default documentation root."""
    return AppState(
        settings=Settings(site={"base_url": SITE}),
        http_client=http_client,
        crawler=crawler,
    )


@pytest.fixture()
def bare_state(crawler: DoxygenCrawler) -> AppState:
    """AppState with no default documentation root."""
    return AppState(settings=Settings(site={"base_url": None}), crawler=crawler)
