"""Domain models used across the application."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PageKind(str, Enum):
    """Whether a URL points at a single article or at a listing of articles."""

    ARTICLE = "article"
    LISTING = "listing"


class ScrapeRequest(BaseModel):
    """Body accepted by the scrape endpoint."""

    model_config = ConfigDict(str_strip_whitespace=True)

    url: str = ""


class NewsItem(BaseModel):
    """A single extracted news entry."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1)
    link: str = Field(..., min_length=1)
    summary: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None


class ArticleContent(NewsItem):
    """Full text of a single article page."""

    content: str = Field(..., min_length=1)


class ScrapeResult(BaseModel):
    """Response returned for a scraped URL."""

    url: str
    domain: str
    count: int
    items: List[NewsItem] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_count(self) -> "ScrapeResult":
        if self.count != len(self.items):
            raise ValueError(f"count {self.count} does not match {len(self.items)} items")
        return self

    @classmethod
    def from_items(cls, url: str, domain: str, items: List[NewsItem]) -> "ScrapeResult":
        return cls(url=url, domain=domain, count=len(items), items=items)
