"""Module and file listing pages (``modules.html``, ``files.html``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from doxycontext.extractors.markup import href_of, join_url, text_of
from doxycontext.models.docs import FileInfo, ModuleInfo

if TYPE_CHECKING:
    from collections.abc import Iterator

    from bs4 import BeautifulSoup

MODULES_PAGE = "modules.html"
FILES_PAGE = "files.html"


@dataclass(frozen=True)
class _ListingRow:
    name: str
    href: str
    description: str


def _listing_rows(soup: BeautifulSoup) -> Iterator[_ListingRow]:
    """Table rows that contain a named link; description is the last cell."""
    for row in soup.find_all("tr"):
        anchor = row.find("a")
        if anchor is None:
            continue
        href = href_of(anchor)
        name = text_of(anchor)
        if not href or not name:
            continue
        cells = row.find_all("td")
        yield _ListingRow(
            name=name,
            href=href,
            description=text_of(cells[-1]) if cells else "",
        )


def extract_modules(soup: BeautifulSoup, site: str) -> list[ModuleInfo]:
    return [
        ModuleInfo(name=row.name, url=join_url(site, row.href), description=row.description)
        for row in _listing_rows(soup)
    ]


def extract_files(soup: BeautifulSoup, site: str) -> list[FileInfo]:
    # Directory rows and source-listing anchors are skipped: only .html targets
    return [
        FileInfo(
            name=row.name,
            url=join_url(site, row.href),
            description=row.description,
            path=row.name,
        )
        for row in _listing_rows(soup)
        if row.href.endswith(".html")
    ]
