"""Tool handler for list_functions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from doxycontext.errors import DoxyContextError, ErrorCode
from doxycontext.models.tools import ListFunctionsOutput, SiteInput

if TYPE_CHECKING:
    from doxycontext.state import AppState


async def handle(base_url: str | None, state: AppState) -> dict:
    """Handle a list_functions tool call."""
    log = structlog.get_logger().bind(tool="list_functions", base_url=base_url)
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
    functions = await state.crawler.get_functions(site)

    output = ListFunctionsOutput(site=site, functions=functions.value, warnings=functions.warnings)
    return output.model_dump(mode="json")
