"""Tool handler for get_class_details."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from doxycontext.errors import DoxyContextError, ErrorCode
from doxycontext.models.tools import GetClassDetailsInput, GetClassDetailsOutput

if TYPE_CHECKING:
    from doxycontext.state import AppState


async def handle(class_name: str, base_url: str | None, state: AppState) -> dict:
    """Handle a get_class_details tool call."""
    log = structlog.get_logger().bind(tool="get_class_details", class_name=class_name)
    log.info("handler_called")

    try:
        validated = GetClassDetailsInput(class_name=class_name, base_url=base_url)
    except ValueError as exc:
        raise DoxyContextError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a non-empty class name (max 500 chars).",
            recoverable=False,
        ) from exc

    if state.crawler is None:
        raise RuntimeError("Crawler not initialized")

    site = state.resolve_site(validated.base_url)
    details = await state.crawler.get_class_details(site, validated.class_name)
    if details is None:
        raise DoxyContextError(
            code=ErrorCode.CLASS_NOT_FOUND,
            message=f"No class matching '{validated.class_name}' on {site}.",
            suggestion="Call list_classes to see the class names the site documents.",
            recoverable=False,
        )

    output = GetClassDetailsOutput(site=site, details=details)
    return output.model_dump(mode="json")
