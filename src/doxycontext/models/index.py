from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from doxycontext.models.docs import PageKind

# Upper bound on indexed body text; keeps index memory and snippet cost flat
MAX_BODY_CHARS = 800


class PageRecord(BaseModel):
    """One sampled page in a search index."""

    model_config = ConfigDict(frozen=True)

    url: str
    title: str
    body: str = Field(max_length=MAX_BODY_CHARS)  # Whitespace-collapsed plain text
    kind: PageKind
    section: str  # Where the page came from: "main", "classes", "files", "modules"
    indexed_at: datetime


class SearchIndex(BaseModel):
    """Sampled pages for exactly one documentation site."""

    model_config = ConfigDict(frozen=True)

    site: str
    pages: list[PageRecord] = []
    built_at: datetime


class SearchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    url: str
    snippet: str
    kind: PageKind
    section: str | None = None
