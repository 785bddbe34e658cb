"""Search index sampling, page reduction and query matching.

The index covers a fixed, representative sample of a site rather than the
whole site: the main page, the first 5 classes, the first 3 files and the
first 2 modules. Each sampled page is reduced to at most ``MAX_BODY_CHARS``
characters of plain text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from doxycontext.extractors.markup import body_text, parse_html, strip_chrome
from doxycontext.extractors.pages import page_title
from doxycontext.models.index import MAX_BODY_CHARS, PageRecord, SearchResult

if TYPE_CHECKING:
    from datetime import datetime

    from doxycontext.models.docs import NavigationStructure, PageKind
    from doxycontext.models.index import SearchIndex

INDEX_CLASS_SAMPLE = 5
INDEX_FILE_SAMPLE = 3
INDEX_MODULE_SAMPLE = 2

SNIPPET_CONTEXT_CHARS = 100
SNIPPET_FALLBACK_CHARS = 200
ELLIPSIS = "..."


@dataclass(frozen=True)
class IndexTarget:
    url: str
    kind: PageKind
    section: str


def select_index_targets(navigation: NavigationStructure) -> list[IndexTarget]:
    """Pages to index for a site, in the order they will be fetched."""
    targets = [IndexTarget(url=navigation.main_page, kind="page", section="main")]
    targets.extend(
        IndexTarget(url=c.url, kind="class", section="classes")
        for c in navigation.classes[:INDEX_CLASS_SAMPLE]
    )
    targets.extend(
        IndexTarget(url=f.url, kind="file", section="files")
        for f in navigation.files[:INDEX_FILE_SAMPLE]
    )
    targets.extend(
        IndexTarget(url=m.url, kind="module", section="modules")
        for m in navigation.modules[:INDEX_MODULE_SAMPLE]
    )
    return targets


def build_page_record(target: IndexTarget, markup: str, indexed_at: datetime) -> PageRecord:
    soup = parse_html(markup)
    title = page_title(soup)
    strip_chrome(soup)
    return PageRecord(
        url=target.url,
        title=title,
        body=body_text(soup)[:MAX_BODY_CHARS],
        kind=target.kind,
        section=target.section,
        indexed_at=indexed_at,
    )


def create_snippet(body: str, query: str) -> str:
    """Excerpt of ``body`` around the first case-insensitive match of ``query``.

    Keeps 100 characters of context on each side, marking truncation with
    an ellipsis. Without a match the first 200 characters are returned.
    """
    position = body.lower().find(query.lower())
    if position == -1:
        return body[:SNIPPET_FALLBACK_CHARS] + ELLIPSIS

    start = max(0, position - SNIPPET_CONTEXT_CHARS)
    end = min(len(body), position + len(query) + SNIPPET_CONTEXT_CHARS)
    snippet = body[start:end]
    if start > 0:
        snippet = ELLIPSIS + snippet
    if end < len(body):
        snippet = snippet + ELLIPSIS
    return snippet.strip()


def search_index(index: SearchIndex, query: str, max_results: int) -> list[SearchResult]:
    """Match ``query`` against titles and bodies; title matches rank first.

    Pages are considered in index order and collection stops at
    ``max_results`` hits, so ranking only reorders the collected hits.
    """
    if not query or max_results <= 0:
        return []

    needle = query.lower()
    hits: list[tuple[bool, SearchResult]] = []
    for page in index.pages:
        if len(hits) >= max_results:
            break
        title_match = needle in page.title.lower()
        if not title_match and needle not in page.body.lower():
            continue
        hits.append(
            (
                title_match,
                SearchResult(
                    title=page.title,
                    url=page.url,
                    snippet=create_snippet(page.body, query),
                    kind=page.kind,
                    section=page.section,
                ),
            )
        )

    # sorted() is stable: order within each group is preserved
    hits = sorted(hits, key=lambda hit: not hit[0])
    return [result for _, result in hits]
