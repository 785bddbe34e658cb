from __future__ import annotations

from typing import TYPE_CHECKING

from doxycontext.extractors import tokens
from doxycontext.extractors.markup import href_of, join_url, text_of
from doxycontext.models.docs import FunctionInfo

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

MAX_FUNCTION_PAGES = 3


def function_links(soup: BeautifulSoup, site: str) -> list[str]:
    """URLs of the first few function pages linked from the main page."""
    urls: list[str] = []
    for anchor in soup.select("a[href*='function']")[:MAX_FUNCTION_PAGES]:
        href = href_of(anchor)
        if href:
            urls.append(join_url(site, href))
    return urls


def extract_function(soup: BeautifulSoup, url: str) -> FunctionInfo | None:
    """Describe the first documented member on a function page, if callable."""
    item = soup.select_one(".memitem")
    if item is None:
        return None
    prototype = item.select_one(".memproto")
    if prototype is None:
        return None

    signature = text_of(prototype)
    if not tokens.is_callable(signature):
        return None
    name = tokens.method_name(signature)
    if name == tokens.UNKNOWN:
        return None

    return FunctionInfo(
        name=name,
        url=url,
        description=text_of(item.select_one(".memdoc")),
        signature=signature,
        parameters=tokens.parse_parameters(signature),
        return_type=tokens.return_type(signature),
    )
