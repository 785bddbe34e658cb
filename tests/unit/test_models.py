"""Unit tests for tool input validation, site resolution and error mapping."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from doxycontext.config import Settings
from doxycontext.errors import DoxyContextError, ErrorCode, FetchError
from doxycontext.models.extraction import Extraction, ExtractionWarning
from doxycontext.models.tools import (
    GetClassDetailsInput,
    GetPageContentInput,
    SearchDocsInput,
    SiteInput,
)
from doxycontext.state import AppState


class TestSiteInput:
    def test_trailing_slash_stripped(self) -> None:
        assert SiteInput(base_url="https://d.example/docs/").base_url == "https://d.example/docs"

    def test_empty_means_unset(self) -> None:
        assert SiteInput(base_url="").base_url is None
        assert SiteInput().base_url is None

    @pytest.mark.parametrize("url", ["ftp://d.example", "d.example", "https://" + "a" * 2050])
    def test_rejected(self, url: str) -> None:
        with pytest.raises(ValidationError):
            SiteInput(base_url=url)


class TestSearchDocsInput:
    def test_query_kept_verbatim(self) -> None:
        assert SearchDocsInput(query="  Widget ").query == "  Widget "

    def test_default_max_results(self) -> None:
        assert SearchDocsInput(query="x").max_results == 10

    def test_query_limit(self) -> None:
        SearchDocsInput(query="a" * 500)
        with pytest.raises(ValidationError):
            SearchDocsInput(query="a" * 501)


class TestOtherInputs:
    def test_page_path_stripped(self) -> None:
        assert GetPageContentInput(path=" classFoo.html ").path == "classFoo.html"

    def test_blank_class_name(self) -> None:
        with pytest.raises(ValidationError):
            GetClassDetailsInput(class_name="  ")


class TestResolveSite:
    def test_explicit_wins(self) -> None:
        state = AppState(settings=Settings(site={"base_url": "https://default.example"}))
        assert state.resolve_site("https://explicit.example/") == "https://explicit.example"

    def test_falls_back_to_configured(self) -> None:
        state = AppState(settings=Settings(site={"base_url": "https://default.example/"}))
        assert state.resolve_site(None) == "https://default.example"

    def test_missing(self) -> None:
        state = AppState(settings=Settings(site={"base_url": None}))
        with pytest.raises(DoxyContextError) as exc_info:
            state.resolve_site(None)
        assert exc_info.value.code == ErrorCode.BASE_URL_MISSING


class TestFetchError:
    def test_network_failure(self) -> None:
        error = FetchError("https://d/x.html", reason="Connection refused")
        assert error.message == "Network error fetching https://d/x.html: Connection refused"
        assert error.recoverable is True

    def test_status_line_without_reason(self) -> None:
        error = FetchError("https://d/x.html", status_code=503)
        assert error.message == "HTTP 503 fetching https://d/x.html"
        assert error.code == ErrorCode.PAGE_FETCH_FAILED

    def test_is_a_structured_error(self) -> None:
        assert isinstance(FetchError("u", status_code=404), DoxyContextError)


class TestExtraction:
    def test_complete(self) -> None:
        assert Extraction([1, 2]).complete
        partial = Extraction([], [ExtractionWarning(source="u", message="m")])
        assert not partial.complete
