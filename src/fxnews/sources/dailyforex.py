"""Extraction rules for dailyforex.com.

DailyForex pages carry most of their metadata as JSON-LD, so both listings
and article bylines are read from structured data first and the DOM second.
"""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup

from fxnews.models import NewsItem
from fxnews.sources.base import ARTICLE_TYPES, SourceStrategy
from fxnews.sources.parsing import has_type, iter_json_ld, make_item, scan_anchors

__all__ = ["DailyForexStrategy"]


class DailyForexStrategy(SourceStrategy):
    name = "dailyforex"
    domain = "dailyforex.com"

    article_containers = ("div.content-body.article-content", "div.article-content", "article")
    author_selectors = ('[rel="author"]', ".author-name")
    date_selectors = ("time",)
    structured_data = "override"

    def extract_listing(self, soup: BeautifulSoup, base_url: str) -> List[NewsItem]:
        items = self._structured_listing(soup, base_url)
        if items:
            return items
        return scan_anchors(soup, base_url)

    def _structured_listing(self, soup: BeautifulSoup, base_url: str) -> List[NewsItem]:
        items: List[NewsItem] = []
        for obj in iter_json_ld(soup):
            elements = obj.get("itemListElement")
            if isinstance(elements, list):
                for element in elements:
                    if not isinstance(element, dict):
                        continue
                    nested = element.get("item") if isinstance(element.get("item"), dict) else {}
                    link = (
                        element.get("url")
                        or element.get("@id")
                        or nested.get("url")
                        or nested.get("@id")
                    )
                    title = element.get("name") or nested.get("name")
                    item = make_item(title, link, base_url)
                    if item is not None:
                        items.append(item)

            if has_type(obj, *ARTICLE_TYPES):
                link = obj.get("url") or obj.get("mainEntityOfPage")
                if isinstance(link, dict):
                    link = link.get("@id")
                title = obj.get("headline") or obj.get("name")
                item = make_item(title, link, base_url, summary=obj.get("description"))
                if item is not None:
                    items.append(item)
        return items
