"""Tool handler for get_page_content."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from doxycontext.errors import DoxyContextError, ErrorCode
from doxycontext.models.tools import GetPageContentInput, GetPageContentOutput

if TYPE_CHECKING:
    from doxycontext.state import AppState


async def handle(path: str, base_url: str | None, state: AppState) -> dict:
    """Handle a get_page_content tool call."""
    log = structlog.get_logger().bind(tool="get_page_content", path=path)
    log.info("handler_called")

    try:
        validated = GetPageContentInput(path=path, base_url=base_url)
    except ValueError as exc:
        raise DoxyContextError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a site-relative page path (e.g. 'classFoo.html') or a full URL.",
            recoverable=False,
        ) from exc

    if state.crawler is None:
        raise RuntimeError("Crawler not initialized")

    # Absolute URLs do not need a site
    if validated.path.startswith("http"):
        site = validated.base_url or ""
    else:
        site = state.resolve_site(validated.base_url)

    page = await state.crawler.read_page(site, validated.path)
    log.info("page_read", url=page.url, kind=page.kind, content_length=len(page.content))

    output = GetPageContentOutput(url=page.url, kind=page.kind, content=page.content)
    return output.model_dump(mode="json")
