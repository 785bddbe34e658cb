"""Tool handler for search_docs.

Receives AppState, validates input and delegates to the crawler's search.
No MCP or FastMCP imports; server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from doxycontext.errors import DoxyContextError, ErrorCode
from doxycontext.models.tools import SearchDocsInput, SearchDocsOutput

if TYPE_CHECKING:
    from doxycontext.state import AppState


async def handle(
    query: str,
    base_url: str | None,
    max_results: int,
    state: AppState,
) -> dict:
    """Handle a search_docs tool call."""
    log = structlog.get_logger().bind(tool="search_docs", query=query)
    log.info("handler_called")

    try:
        validated = SearchDocsInput(query=query, base_url=base_url, max_results=max_results)
    except ValueError as exc:
        raise DoxyContextError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a query (max 500 chars) and an http(s) base_url.",
            recoverable=False,
        ) from exc

    if state.crawler is None:
        raise RuntimeError("Crawler not initialized")

    site = state.resolve_site(validated.base_url)
    results = await state.crawler.search_docs(site, validated.query, validated.max_results)
    log.info("search_complete", site=site, result_count=len(results))

    output = SearchDocsOutput(site=site, query=validated.query, results=results)
    return output.model_dump(mode="json")
