"""Crawl-cache-extract-search engine for one or more Doxygen sites.

A DoxygenCrawler owns two caches: raw page bodies (short freshness window)
and per-site search indexes (longer window, since rebuilding one costs up to
eleven page fetches). Both are cleared by ``close()``; nothing is shared
between instances.

Failure policy: an operation that cannot produce any meaningful result
raises FetchError (unreachable main index page, unreachable class page).
Failures confined to one part of a composite result are recorded as
``ExtractionWarning``s on the returned ``Extraction`` and logged.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any

import structlog

from doxycontext.cache import TtlCache, utc_now
from doxycontext.errors import FetchError
from doxycontext.extractors.classes import (
    CLASS_LISTING_PAGES,
    extract_classes,
    find_class,
    merge_unique,
)
from doxycontext.extractors.functions import extract_function, function_links
from doxycontext.extractors.listings import (
    FILES_PAGE,
    MODULES_PAGE,
    extract_files,
    extract_modules,
)
from doxycontext.extractors.markup import parse_html
from doxycontext.extractors.members import extract_class_details
from doxycontext.extractors.navigation import extract_related_pages
from doxycontext.extractors.pages import classify_page, readable_text
from doxycontext.models.cache import PageCacheEntry
from doxycontext.models.docs import NavigationStructure, PageContent
from doxycontext.models.extraction import Extraction, ExtractionWarning
from doxycontext.models.index import SearchIndex
from doxycontext.search import build_page_record, search_index, select_index_targets

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from datetime import datetime

    from doxycontext.models.docs import (
        ClassDetails,
        ClassInfo,
        FileInfo,
        FunctionInfo,
        ModuleInfo,
    )
    from doxycontext.models.index import PageRecord, SearchResult
    from doxycontext.protocols import FetcherProtocol

log = structlog.get_logger()

PAGE_TTL = timedelta(minutes=5)
INDEX_TTL = timedelta(minutes=30)

MAIN_PAGE = "index.html"


class DoxygenCrawler:
    """Fetches, caches, extracts and searches Doxygen documentation.

    ``site`` arguments are documentation roots without a trailing slash;
    page URLs are built by appending ``/<page>``.
    """

    def __init__(
        self,
        fetcher: FetcherProtocol,
        *,
        page_ttl: timedelta = PAGE_TTL,
        index_ttl: timedelta = INDEX_TTL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._fetcher = fetcher
        self._clock = clock
        self.pages: TtlCache[PageCacheEntry] = TtlCache("pages", page_ttl, clock=clock)
        self.indexes: TtlCache[SearchIndex] = TtlCache("search_index", index_ttl, clock=clock)

    # ------------------------------------------------------------------
    # Fetch cache
    # ------------------------------------------------------------------

    async def fetch_page(self, url: str) -> str:
        """Return the body of ``url``, from cache when fresh.

        Keys are the exact URL string. Raises FetchError on a miss that
        cannot be fetched.
        """
        cached = self.pages.get(url)
        if cached is not None:
            log.debug("cache_hit", cache="pages", url=url)
            return cached.body

        body = await self._fetcher.fetch(url)
        now = self._clock()
        self.pages.set(url, PageCacheEntry(url=url, body=body, fetched_at=now), stored_at=now)
        return body

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def get_modules(self, site: str) -> Extraction[list[ModuleInfo]]:
        """Entries of ``modules.html``; a missing page yields an empty list."""
        url = f"{site}/{MODULES_PAGE}"
        try:
            markup = await self.fetch_page(url)
        except FetchError as exc:
            log.info("listing_unavailable", url=url, error=exc.message)
            return Extraction([], [ExtractionWarning(source=url, message=exc.message)])
        return Extraction(extract_modules(parse_html(markup), site))

    async def get_files(self, site: str) -> Extraction[list[FileInfo]]:
        """Entries of ``files.html``; a missing page yields an empty list."""
        url = f"{site}/{FILES_PAGE}"
        try:
            markup = await self.fetch_page(url)
        except FetchError as exc:
            log.info("listing_unavailable", url=url, error=exc.message)
            return Extraction([], [ExtractionWarning(source=url, message=exc.message)])
        return Extraction(extract_files(parse_html(markup), site))

    async def list_classes(self, site: str) -> Extraction[list[ClassInfo]]:
        """Classes from every conventional listing page, unique by exact name.

        Never raises: a listing page that cannot be fetched is skipped and
        reported as a warning. An empty ``site`` yields an empty result.
        """
        if not site:
            return Extraction([])

        known: dict[str, ClassInfo] = {}
        warnings: list[ExtractionWarning] = []
        for page in CLASS_LISTING_PAGES:
            url = f"{site}/{page}"
            try:
                markup = await self.fetch_page(url)
            except FetchError as exc:
                log.warning("class_listing_failed", url=url, error=exc.message)
                warnings.append(ExtractionWarning(source=url, message=exc.message))
                continue
            merge_unique(known, extract_classes(parse_html(markup), site, section=page))

        log.info("classes_listed", site=site, count=len(known), skipped=len(warnings))
        return Extraction(list(known.values()), warnings)

    async def get_class_details(self, site: str, class_name: str) -> ClassDetails | None:
        """Members and inheritance of the best-matching class, or ``None``."""
        classes = await self.list_classes(site)
        info = find_class(classes.value, class_name)
        if info is None:
            log.info("class_not_found", site=site, class_name=class_name)
            return None

        markup = await self.fetch_page(info.url)
        details = extract_class_details(parse_html(markup), info)
        log.info(
            "class_details_extracted",
            class_name=details.name,
            methods=len(details.methods),
            properties=len(details.properties),
        )
        return details

    async def get_functions(self, site: str) -> Extraction[list[FunctionInfo]]:
        """Free functions linked from the main page.

        An unreachable main page raises FetchError; an unreachable function
        page is skipped with a warning.
        """
        markup = await self.fetch_page(f"{site}/{MAIN_PAGE}")
        links = function_links(parse_html(markup), site)

        functions: list[FunctionInfo] = []
        warnings: list[ExtractionWarning] = []
        for url in links:
            try:
                page = await self.fetch_page(url)
            except FetchError as exc:
                log.warning("function_page_failed", url=url, error=exc.message)
                warnings.append(ExtractionWarning(source=url, message=exc.message))
                continue
            function = extract_function(parse_html(page), url)
            if function is not None:
                functions.append(function)
        return Extraction(functions, warnings)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    async def get_navigation_structure(self, site: str) -> Extraction[NavigationStructure]:
        """Consolidated site structure.

        Raises FetchError only when the main index page is unreachable;
        modules, classes and files are each best-effort.
        """
        main_page = f"{site}/{MAIN_PAGE}"
        markup = await self.fetch_page(main_page)
        related_pages = extract_related_pages(parse_html(markup), site)

        warnings: list[ExtractionWarning] = []

        async def _collect(
            name: str, extract: Callable[[str], Awaitable[Extraction[list[Any]]]]
        ) -> list[Any]:
            try:
                result = await extract(site)
            except Exception as exc:
                log.warning("navigation_part_failed", part=name, site=site, exc_info=True)
                warnings.append(ExtractionWarning(source=name, message=str(exc)))
                return []
            warnings.extend(result.warnings)
            return result.value

        modules = await _collect("modules", self.get_modules)
        classes = await _collect("classes", self.list_classes)
        files = await _collect("files", self.get_files)

        structure = NavigationStructure(
            main_page=main_page,
            related_pages=related_pages,
            modules=modules,
            classes=classes,
            files=files,
        )
        return Extraction(structure, warnings)

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    async def read_page(self, site: str, path: str) -> PageContent:
        """Fetch a page by site-relative path or absolute URL and render it as text."""
        url = path if path.startswith("http") else f"{site}/{path.lstrip('/')}"
        markup = await self.fetch_page(url)
        soup = parse_html(markup)
        kind = classify_page(url, soup)
        return PageContent(url=url, kind=kind, content=readable_text(soup))

    async def get_page_content(self, site: str, path: str) -> str:
        """Plain-text body of a page with navigation and scripts stripped."""
        page = await self.read_page(site, path)
        return page.content

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def build_search_index(self, site: str) -> Extraction[SearchIndex]:
        """Return the site's index, rebuilding it when missing or stale.

        Pages are fetched one at a time to keep load on the site flat.
        A page that cannot be fetched is left out; the build as a whole
        fails only when the main index page is unreachable.
        """
        cached = self.indexes.get(site)
        if cached is not None:
            log.debug("cache_hit", cache="search_index", site=site)
            return Extraction(cached)

        navigation = await self.get_navigation_structure(site)
        warnings = list(navigation.warnings)

        pages: list[PageRecord] = []
        for target in select_index_targets(navigation.value):
            try:
                markup = await self.fetch_page(target.url)
            except FetchError as exc:
                log.info("index_page_skipped", url=target.url, error=exc.message)
                warnings.append(ExtractionWarning(source=target.url, message=exc.message))
                continue
            pages.append(build_page_record(target, markup, self._clock()))

        built_at = self._clock()
        index = SearchIndex(site=site, pages=pages, built_at=built_at)
        self.indexes.set(site, index, stored_at=built_at)
        log.info("search_index_built", site=site, pages=len(pages), skipped=len(warnings))
        return Extraction(index, warnings)

    async def search_docs(
        self, site: str, query: str, max_results: int = 10
    ) -> list[SearchResult]:
        """Ranked hits for ``query`` over the site's sampled index.

        Returns ``[]`` without any I/O for an empty query or a non-positive
        ``max_results``.
        """
        if not query or max_results <= 0:
            return []

        index = await self.build_search_index(site)
        results = search_index(index.value, query, max_results)
        log.info("search_complete", site=site, query=query, hits=len(results))
        return results

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def purge_expired(self) -> int:
        """Drop stale entries from both caches. Returns the number removed."""
        return self.pages.purge_expired() + self.indexes.purge_expired()

    async def close(self) -> None:
        """Clear both caches. Safe to call more than once."""
        self.pages.clear()
        self.indexes.clear()
