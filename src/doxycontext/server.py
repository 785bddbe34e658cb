"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register tools
- Parse the command line and start the correct transport (stdio or HTTP)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from contextlib import asynccontextmanager, suppress
from datetime import timedelta
from typing import TYPE_CHECKING

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent

import doxycontext.tools.get_class_details as t_class_details
import doxycontext.tools.get_navigation as t_navigation
import doxycontext.tools.get_page_content as t_page_content
import doxycontext.tools.list_classes as t_list_classes
import doxycontext.tools.list_functions as t_list_functions
import doxycontext.tools.search_docs as t_search
from doxycontext import __version__
from doxycontext.config import Settings
from doxycontext.crawler import DoxygenCrawler
from doxycontext.errors import DoxyContextError
from doxycontext.fetcher import Fetcher, build_http_client
from doxycontext.schedulers import run_cache_cleanup_scheduler
from doxycontext.state import AppState
from doxycontext.transport import run_http_server

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Sequence

log = structlog.get_logger()

BASE_URL_ENV = "DOXYCONTEXT__SITE__BASE_URL"


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr; stdout is reserved for the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


def build_state(settings: Settings) -> AppState:
    """Wire the HTTP client, fetcher and crawler for one server lifetime."""
    http_client = build_http_client(settings.crawler)
    crawler = DoxygenCrawler(
        Fetcher(http_client, user_agent=settings.crawler.user_agent),
        page_ttl=timedelta(seconds=settings.crawler.page_ttl_seconds),
        index_ttl=timedelta(seconds=settings.crawler.index_ttl_seconds),
    )
    return AppState(settings=settings, http_client=http_client, crawler=crawler)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    """Create and tear down all shared resources for the server's lifetime."""
    settings = Settings()
    _setup_logging(settings)

    log.info(
        "server_starting",
        version=__version__,
        transport=settings.server.transport,
        default_site=settings.site.base_url,
    )

    state = build_state(settings)
    cleanup_task = asyncio.create_task(run_cache_cleanup_scheduler(state))

    log.info("server_started", version=__version__, transport=settings.server.transport)

    try:
        yield state
    finally:
        cleanup_task.cancel()
        with suppress(asyncio.CancelledError):
            await cleanup_task
        if state.crawler is not None:
            await state.crawler.close()
        if state.http_client is not None:
            await state.http_client.aclose()
        log.info("server_stopping")


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP("doxycontext", lifespan=lifespan)
# FastMCP doesn't expose a version kwarg, so set it on the underlying Server
# so the MCP initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


def _serialise_tool_error(error: DoxyContextError) -> CallToolResult:
    """Convert a DoxyContextError to the MCP tool error result envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(error.to_dict()))],
        isError=True,
    )


async def _run_tool(tool: str, call: Awaitable[dict]) -> object:
    """Await a handler, mapping expected failures to MCP error results."""
    try:
        return await call
    except DoxyContextError as exc:
        log.warning(
            "tool_error",
            tool=tool,
            code=exc.code,
            message=exc.message,
            recoverable=exc.recoverable,
        )
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool=tool, exc_info=True)
        raise


def _state(ctx: Context) -> AppState:
    return ctx.request_context.lifespan_context


@mcp.tool()
async def search_docs(
    query: str,
    ctx: Context,
    base_url: str | None = None,
    max_results: int = 10,
) -> object:
    """Search a Doxygen documentation site.

    Matches the query against a sampled index of the site (main page and the
    first few classes, files and modules). Title matches are listed first.
    """
    return await _run_tool(
        "search_docs", t_search.handle(query, base_url, max_results, _state(ctx))
    )


@mcp.tool()
async def get_page_content(path: str, ctx: Context, base_url: str | None = None) -> object:
    """Get the plain-text content of a documentation page.

    ``path`` is relative to the site root (e.g. ``classFoo.html``) or a full URL.
    """
    return await _run_tool(
        "get_page_content", t_page_content.handle(path, base_url, _state(ctx))
    )


@mcp.tool()
async def list_classes(ctx: Context, base_url: str | None = None) -> object:
    """List all classes, structs and interfaces in the documentation."""
    return await _run_tool("list_classes", t_list_classes.handle(base_url, _state(ctx)))


@mcp.tool()
async def get_class_details(
    class_name: str, ctx: Context, base_url: str | None = None
) -> object:
    """Get methods, properties and inheritance for a class.

    Matches by exact name, then case-insensitively, then by substring.
    """
    return await _run_tool(
        "get_class_details", t_class_details.handle(class_name, base_url, _state(ctx))
    )


@mcp.tool()
async def get_navigation(ctx: Context, base_url: str | None = None) -> object:
    """Get the site structure: main page, related pages, modules, classes and files."""
    return await _run_tool("get_navigation", t_navigation.handle(base_url, _state(ctx)))


@mcp.tool()
async def list_functions(ctx: Context, base_url: str | None = None) -> object:
    """List free functions linked from the documentation's main page."""
    return await _run_tool("list_functions", t_list_functions.handle(base_url, _state(ctx)))


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags; unknown flags are ignored."""
    parser = argparse.ArgumentParser(prog="doxycontext", description=__doc__)
    parser.add_argument(
        "--base-url",
        "--baseUrl",
        dest="base_url",
        default=None,
        help="Default Doxygen site root used when a tool call omits base_url.",
    )
    args, _ = parser.parse_known_args(argv)
    return args


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    if args.base_url:
        # Picked up by Settings() in the lifespan
        os.environ[BASE_URL_ENV] = args.base_url

    settings = Settings()

    if settings.server.transport == "http":
        _setup_logging(settings)
        run_http_server(mcp, settings)
        return

    mcp.run()


if __name__ == "__main__":
    main()
