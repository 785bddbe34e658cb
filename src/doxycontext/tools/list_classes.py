"""Tool handler for list_classes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from doxycontext.errors import DoxyContextError, ErrorCode
from doxycontext.models.tools import ListClassesOutput, SiteInput

if TYPE_CHECKING:
    from doxycontext.state import AppState


async def handle(base_url: str | None, state: AppState) -> dict:
    """Handle a list_classes tool call."""
    log = structlog.get_logger().bind(tool="list_classes", base_url=base_url)
    log.info("handler_called")

    try:
        validated = SiteInput(base_url=base_url)
    except ValueError as exc:
        raise DoxyContextError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide an http(s) base_url for the documentation site.",
            recoverable=False,
        ) from exc

    if state.crawler is None:
        raise RuntimeError("Crawler not initialized")

    site = state.resolve_site(validated.base_url)
    listing = await state.crawler.list_classes(site)

    output = ListClassesOutput(site=site, classes=listing.value, warnings=listing.warnings)
    return output.model_dump(mode="json")
