from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PageCacheEntry(BaseModel):
    """Raw page body memoised by exact URL string."""

    model_config = ConfigDict(frozen=True)

    url: str
    body: str
    fetched_at: datetime
