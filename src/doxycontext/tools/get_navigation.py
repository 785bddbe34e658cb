"""Tool handler for get_navigation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from doxycontext.errors import DoxyContextError, ErrorCode
from doxycontext.models.tools import GetNavigationOutput, SiteInput

if TYPE_CHECKING:
    from doxycontext.state import AppState


async def handle(base_url: str | None, state: AppState) -> dict:
    """Handle a get_navigation tool call."""
    log = structlog.get_logger().bind(tool="get_navigation", base_url=base_url)
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
    navigation = await state.crawler.get_navigation_structure(site)
    if navigation.warnings:
        log.info("navigation_partial", skipped=len(navigation.warnings))

    output = GetNavigationOutput(
        site=site,
        navigation=navigation.value,
        warnings=navigation.warnings,
    )
    return output.model_dump(mode="json")
