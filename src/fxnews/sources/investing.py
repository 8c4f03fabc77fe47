"""Extraction rules for investing.com."""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup

from fxnews.models import NewsItem
from fxnews.sources.base import SourceStrategy
from fxnews.sources.parsing import element_text, make_item, scan_anchors

__all__ = ["InvestingStrategy"]

TITLE_LINK = 'a[data-test="article-title-link"]'


class InvestingStrategy(SourceStrategy):
    name = "investing"
    domain = "investing.com"

    article_containers = ("div#article", "article")
    author_selectors = (
        'a[data-test="article-provider-link"]',
        ".author-name",
        '[rel="author"]',
    )
    date_selectors = ('time[data-test="article-publish-date"]', "time")
    skip_words = ("advertisement",)
    structured_data = None

    def extract_listing(self, soup: BeautifulSoup, base_url: str) -> List[NewsItem]:
        anchors = soup.select(f'{TITLE_LINK}, a[class*="title"], article a')
        items = scan_anchors(
            soup, base_url, anchors=anchors, also_accept=lambda link: "/news" in link
        )
        if items:
            return items
        return self._article_block_links(soup, base_url)

    def _article_block_links(self, soup: BeautifulSoup, base_url: str) -> List[NewsItem]:
        """Take the headline link of every ``<article>`` block."""

        items: List[NewsItem] = []
        for block in soup.find_all("article"):
            anchor = block.select_one(TITLE_LINK) or block.find("a")
            if anchor is None:
                continue
            item = make_item(element_text(anchor), anchor.get("href"), base_url)
            if item is not None:
                items.append(item)
        return items
