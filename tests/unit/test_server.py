"""Unit tests for command-line parsing, state wiring and tool error mapping."""

from __future__ import annotations

import json
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from mcp.types import CallToolResult

import doxycontext.server as server_module
from doxycontext.config import Settings
from doxycontext.crawler import DoxygenCrawler
from doxycontext.errors import DoxyContextError, ErrorCode, FetchError
from doxycontext.server import BASE_URL_ENV, _run_tool, build_state, main, parse_args


class TestParseArgs:
    def test_base_url(self) -> None:
        assert parse_args(["--base-url", "https://d.example"]).base_url == "https://d.example"

    def test_camel_case_alias(self) -> None:
        assert parse_args(["--baseUrl=https://d.example"]).base_url == "https://d.example"

    def test_unknown_flags_ignored(self) -> None:
        args = parse_args(["--verbose", "--base-url", "https://d.example", "extra"])
        assert args.base_url == "https://d.example"

    def test_no_flags(self) -> None:
        assert parse_args([]).base_url is None


class TestMain:
    def test_base_url_flag_reaches_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        # main() writes the variable directly; setenv first so teardown removes it
        monkeypatch.setenv(BASE_URL_ENV, "unset")
        monkeypatch.delenv("DOXYCONTEXT__SERVER__TRANSPORT", raising=False)
        run = MagicMock()
        monkeypatch.setattr(server_module.mcp, "run", run)

        main(["--base-url", "https://docs.example.com/"])

        assert Settings().site.base_url == "https://docs.example.com"
        run.assert_called_once_with()


class TestBuildState:
    async def test_wires_crawler_from_settings(self) -> None:
        settings = Settings(crawler={"page_ttl_seconds": 60, "index_ttl_seconds": 120})
        state = build_state(settings)
        try:
            assert isinstance(state.crawler, DoxygenCrawler)
            assert state.crawler.pages.ttl == timedelta(seconds=60)
            assert state.crawler.indexes.ttl == timedelta(seconds=120)
            assert state.settings is settings
        finally:
            assert state.http_client is not None
            await state.http_client.aclose()


class TestRunTool:
    async def test_passes_result_through(self) -> None:
        async def _ok() -> dict:
            return {"value": 1}

        assert await _run_tool("t", _ok()) == {"value": 1}

    async def test_expected_error_becomes_error_result(self) -> None:
        async def _missing() -> dict:
            raise FetchError("https://d/x.html", status_code=404, reason="Not Found")

        result = await _run_tool("t", _missing())
        assert isinstance(result, CallToolResult)
        assert result.isError is True
        payload = json.loads(result.content[0].text)
        assert payload["error"]["code"] == ErrorCode.PAGE_NOT_FOUND
        assert payload["error"]["recoverable"] is False

    async def test_unexpected_error_propagates(self) -> None:
        async def _boom() -> dict:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await _run_tool("t", _boom())

    def test_error_envelope_shape(self) -> None:
        error = DoxyContextError(
            code=ErrorCode.BASE_URL_MISSING, message="m", suggestion="s", recoverable=False
        )
        assert error.to_dict() == {
            "error": {
                "code": "BASE_URL_MISSING",
                "message": "m",
                "suggestion": "s",
                "recoverable": False,
            }
        }
