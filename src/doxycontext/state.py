"""Application state container.

AppState is created once at server startup (inside the FastMCP lifespan context
manager) and injected into every tool handler via the MCP Context object.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from doxycontext.errors import DoxyContextError, ErrorCode

if TYPE_CHECKING:
    import httpx

    from doxycontext.config import Settings
    from doxycontext.crawler import DoxygenCrawler


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every tool handler."""

    settings: Settings
    http_client: httpx.AsyncClient | None = None
    crawler: DoxygenCrawler | None = None

    def resolve_site(self, base_url: str | None) -> str:
        """Pick the documentation root for a tool call.

        An explicit ``base_url`` wins over the configured default.
        """
        site = base_url or self.settings.site.base_url
        if not site:
            raise DoxyContextError(
                code=ErrorCode.BASE_URL_MISSING,
                message="Base URL not provided.",
                suggestion=(
                    "Pass 'base_url' in the call or start the server with --base-url."
                ),
                recoverable=False,
            )
        return site.rstrip("/")
