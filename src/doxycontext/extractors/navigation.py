from __future__ import annotations

from typing import TYPE_CHECKING

from doxycontext.extractors.markup import href_of, join_url, text_of

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

# Doxygen's tab bars and breadcrumb trail across generator versions
NAV_LINK_SELECTOR = ":is(.tabs, .navpath, .nav, #navrow1, #navrow2) a"


def extract_related_pages(soup: BeautifulSoup, site: str) -> list[str]:
    """Site-relative navigation links that point at "related pages".

    A link qualifies when its text mentions "related" or its href mentions
    "pages". Fragment-only and absolute links are ignored.
    """
    related: list[str] = []
    for anchor in soup.select(NAV_LINK_SELECTOR):
        href = href_of(anchor)
        if not href or href.startswith("#") or href.startswith("http"):
            continue
        if "related" in text_of(anchor).lower() or "pages" in href:
            related.append(join_url(site, href))
    return related
