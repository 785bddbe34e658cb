"""Shared helpers for parsing pages and resolving links."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

# Page chrome removed before text extraction
CHROME_SELECTOR = "nav, .navpath, .footer, script, style, .tabs"

# Candidates for the main documentation area, first match wins
CONTENT_SELECTOR = ".contents, .textblock, .memitem, .memdoc, main, .documentation"

_WHITESPACE_RE = re.compile(r"\s+")


def parse_html(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


def join_url(site: str, href: str) -> str:
    """Resolve ``href`` against the site root by plain concatenation.

    Absolute ``http(s)`` hrefs are returned unchanged. ``site`` is expected to
    carry no trailing slash.
    """
    if href.startswith("http"):
        return href
    return f"{site}/{href}"


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def text_of(element: Tag | None) -> str:
    """Trimmed text content of ``element``, or ``""`` when absent."""
    if element is None:
        return ""
    return element.get_text().strip()


def href_of(element: Tag) -> str:
    href = element.get("href")
    if isinstance(href, list):  # Multi-valued attribute; not expected on <a>
        href = " ".join(href)
    return href or ""


def strip_chrome(soup: BeautifulSoup) -> None:
    """Remove navigation, footer, script and style elements in place."""
    for element in soup.select(CHROME_SELECTOR):
        element.decompose()


def body_text(soup: BeautifulSoup) -> str:
    """Whitespace-collapsed text of ``<body>`` (or the whole document)."""
    root = soup.body or soup
    return collapse_whitespace(root.get_text())
