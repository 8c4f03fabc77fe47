"""Base class for site-specific extraction strategies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, List, Sequence

from bs4 import BeautifulSoup, Tag

from fxnews.errors import ExtractionError
from fxnews.models import ArticleContent, NewsItem
from fxnews.sources.parsing import (
    article_title,
    collect_paragraphs,
    element_text,
    first_match,
    first_value,
    has_type,
    iter_json_ld,
    json_ld_author,
    scan_anchors,
    time_value,
)

__all__ = [
    "ARTICLE_TYPES",
    "ArticleFields",
    "CONTENT_TOO_SHORT",
    "GenericStrategy",
    "MIN_CONTENT_LENGTH",
    "SourceStrategy",
]

MIN_CONTENT_LENGTH = 100
CONTENT_TOO_SHORT = (
    "Could not extract article content. "
    "The page might be protected or have a different structure."
)

ARTICLE_TYPES = ("NewsArticle", "Article")


@dataclass
class ArticleFields:
    """Values read from an article page before validation."""

    title: str = ""
    content: str = ""
    author: str = ""
    date: str = ""


class SourceStrategy:
    """Extraction rules for one news site.

    Subclasses tune the class-level selectors and override the listing or
    article hooks where a site needs more than selector changes.
    """

    name: ClassVar[str] = "generic"
    domain: ClassVar[str | None] = None

    article_containers: ClassVar[Sequence[str]] = ("article", "main", "body")
    author_selectors: ClassVar[Sequence[str]] = ('meta[name="author"]', '[rel="author"]')
    date_selectors: ClassVar[Sequence[str]] = (
        'meta[property="article:published_time"]',
        "time",
    )
    skip_words: ClassVar[Sequence[str]] = ()
    #: How JSON-LD article metadata is used: ``"fill"`` blanks, ``"override"`` DOM values, or ``None``.
    structured_data: ClassVar[str | None] = "fill"

    def matches(self, hostname: str) -> bool:
        return self.domain is not None and self.domain in hostname.lower()

    def extract_listing(self, soup: BeautifulSoup, base_url: str) -> List[NewsItem]:
        """Return news items linked from a listing page."""

        return scan_anchors(soup, base_url)

    def extract_article(
        self,
        soup: BeautifulSoup,
        url: str,
        *,
        min_content_length: int = MIN_CONTENT_LENGTH,
    ) -> ArticleContent:
        """Return the article on ``url``.

        Raises :class:`~fxnews.errors.ExtractionError` when the body text is
        ``min_content_length`` characters or shorter.
        """

        fields = self.read_article(soup)
        if len(fields.content) <= min_content_length:
            raise ExtractionError(CONTENT_TOO_SHORT)

        return ArticleContent(
            title=fields.title or url,
            link=url,
            content=fields.content,
            author=fields.author or None,
            date=fields.date or None,
        )

    def read_article(self, soup: BeautifulSoup) -> ArticleFields:
        fields = ArticleFields(
            title=article_title(soup),
            content=collect_paragraphs(
                first_match(soup, self.article_containers), skip_words=self.skip_words
            ),
            author=first_value(soup, self.author_selectors, _author_value),
            date=first_value(soup, self.date_selectors, time_value),
        )
        if self.structured_data:
            self._apply_structured_data(fields, soup, override=self.structured_data == "override")
        return fields

    def _apply_structured_data(
        self, fields: ArticleFields, soup: BeautifulSoup, *, override: bool
    ) -> None:
        data = next((obj for obj in iter_json_ld(soup) if has_type(obj, *ARTICLE_TYPES)), None)
        if data is None:
            return

        author = json_ld_author(data.get("author"))
        date = _string(data.get("datePublished")) or _string(data.get("dateModified"))
        if author and (override or not fields.author):
            fields.author = author
        if date and (override or not fields.date):
            fields.date = date
        if not fields.title:
            fields.title = _string(data.get("headline"))


class GenericStrategy(SourceStrategy):
    """Fallback rules for allow-listed sites without dedicated handling."""


def _author_value(element: Tag | None) -> str:
    if element is None:
        return ""
    if element.name == "meta":
        return (element.get("content") or "").strip()
    return element_text(element)


def _string(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""
