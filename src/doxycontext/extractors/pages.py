"""Whole-page extraction: titles, readable text and page classification."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doxycontext.extractors.markup import (
    CONTENT_SELECTOR,
    body_text,
    strip_chrome,
    text_of,
)

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

    from doxycontext.models.docs import PageKind


def page_title(soup: BeautifulSoup) -> str:
    """``<title>``, else the first ``<h1>``, else ``"Untitled"``."""
    title = text_of(soup.title) or text_of(soup.find("h1"))
    return title or "Untitled"


def readable_text(soup: BeautifulSoup) -> str:
    """Main documentation text with page chrome removed.

    Mutates ``soup``. Returns the first content container's text, falling
    back to the whitespace-collapsed body.
    """
    strip_chrome(soup)
    main = soup.select_one(CONTENT_SELECTOR)
    if main is not None:
        return text_of(main)
    return body_text(soup)


def classify_page(url: str, soup: BeautifulSoup) -> PageKind:
    """Guess what a page documents from its URL and headings."""
    title = "".join(el.get_text() for el in soup.select(".title"))
    if "class" in url or "Class" in title:
        return "class"
    if "namespace" in url or "Namespace" in title:
        return "namespace"
    if "module" in url or "Module" in title:
        return "module"
    if "file" in url or (url.endswith(".html") and soup.find("code") is not None):
        return "file"
    headings = "".join(el.get_text() for el in soup.select("h1, h2, h3"))
    if "function" in headings.lower():
        return "function"
    return "page"
