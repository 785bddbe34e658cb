"""Class listing extraction.

A listing page is scanned by each strategy in ``CLASS_STRATEGIES`` in turn.
Candidates are merged with first-found-wins semantics on the exact class
name, across strategies and across listing pages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from doxycontext.extractors.markup import href_of, join_url, text_of
from doxycontext.models.docs import ClassInfo

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from bs4 import BeautifulSoup, Tag

    ClassStrategy = Callable[[BeautifulSoup, str, str], Iterator[ClassInfo]]

# Conventional Doxygen listing pages, scanned in this order
CLASS_LISTING_PAGES = ("annotated.html", "classes.html", "hierarchy.html")

_CLASS_ANCHOR_SELECTOR = "a[href*='class'], a[href*='struct'], a[href*='interface']"


def _anchor_description(anchor: Tag) -> str:
    parent = anchor.parent
    if parent is not None:
        brief = "".join(el.get_text() for el in parent.select(".brief"))
        if brief:
            return brief.strip()
    row = anchor.find_parent("tr")
    if row is not None:
        cells = row.find_all("td")
        if cells:
            return text_of(cells[-1])
    return ""


def anchor_classes(soup: BeautifulSoup, site: str, section: str) -> Iterator[ClassInfo]:
    """Anchors whose href names a class, struct or interface page."""
    for anchor in soup.select(_CLASS_ANCHOR_SELECTOR):
        href = href_of(anchor)
        name = text_of(anchor)
        if not href or not name:
            continue
        yield ClassInfo(
            name=name,
            url=join_url(site, href),
            description=_anchor_description(anchor),
            section=section,
        )


def definition_list_classes(soup: BeautifulSoup, site: str, section: str) -> Iterator[ClassInfo]:
    """``<dt><a href="class…">Name</a></dt><dd>description</dd>`` pairs."""
    for term in soup.find_all("dt"):
        anchor = term.find("a")
        if anchor is None:
            continue
        href = href_of(anchor)
        name = text_of(anchor)
        if not href or not name or not ("class" in href or "struct" in href):
            continue
        definition = term.find_next_sibling()
        if definition is not None and definition.name != "dd":
            definition = None
        yield ClassInfo(
            name=name,
            url=join_url(site, href),
            description=text_of(definition),
            section=section,
        )


CLASS_STRATEGIES: tuple[ClassStrategy, ...] = (anchor_classes, definition_list_classes)


def extract_classes(
    soup: BeautifulSoup,
    site: str,
    section: str,
    strategies: Iterable[ClassStrategy] = CLASS_STRATEGIES,
) -> Iterator[ClassInfo]:
    """All candidates on one listing page, in strategy then markup order."""
    for strategy in strategies:
        yield from strategy(soup, site, section)


def merge_unique(known: dict[str, ClassInfo], candidates: Iterable[ClassInfo]) -> None:
    """Add candidates whose exact name is not yet known. First found wins."""
    for candidate in candidates:
        if candidate.name not in known:
            known[candidate.name] = candidate


def find_class(classes: Iterable[ClassInfo], name: str) -> ClassInfo | None:
    """Locate a class by exact, then case-insensitive, then substring match."""
    classes = list(classes)
    for info in classes:
        if info.name == name:
            return info
    lowered = name.lower()
    for info in classes:
        if info.name.lower() == lowered:
            return info
    for info in classes:
        if name in info.name:
            return info
    return None
