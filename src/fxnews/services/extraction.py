"""Turn fetched page bodies into news items."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, List, Sequence

from bs4 import BeautifulSoup

from fxnews.errors import ExtractionError
from fxnews.models import ArticleContent, NewsItem
from fxnews.sources import DEFAULT_STRATEGY, strategy_for
from fxnews.sources.base import MIN_CONTENT_LENGTH
from fxnews.sources.parsing import make_item

__all__ = [
    "PAYLOAD_LOCATORS",
    "extract_article",
    "extract_listing",
    "extract_payload_items",
    "looks_like_json",
    "parse_html",
]

logger = logging.getLogger(__name__)

#: Where a JSON listing payload may keep its entries, tried in order.
PAYLOAD_LOCATORS: Sequence[Callable[[Any], Any]] = (
    lambda payload: payload.get("items") if isinstance(payload, dict) else None,
    lambda payload: (
        payload["page"].get("items")
        if isinstance(payload, dict) and isinstance(payload.get("page"), dict)
        else None
    ),
    lambda payload: payload,
)

HREF_KEYS = ("href", "url", "link")
TITLE_KEYS = ("titleText", "title", "name")


def parse_html(raw_body: str) -> BeautifulSoup:
    return BeautifulSoup(raw_body, "lxml")


def looks_like_json(raw_body: str, content_type: str = "") -> bool:
    stripped = raw_body.lstrip()
    return "application/json" in content_type.lower() or stripped.startswith(("{", "["))


def _first_value(entry: dict, keys: Sequence[str]) -> Any:
    return next((entry[key] for key in keys if entry.get(key)), None)


def extract_payload_items(raw_body: str, source_url: str) -> List[NewsItem]:
    """Map a JSON listing payload onto news items.

    The first locator that yields a non-empty list of usable entries wins.
    """

    try:
        payload = json.loads(raw_body)
    except ValueError as exc:
        logger.debug("Body of %s is not JSON: %s", source_url, exc)
        return []

    for locate in PAYLOAD_LOCATORS:
        candidates = locate(payload)
        if not isinstance(candidates, list) or not candidates:
            continue

        items: List[NewsItem] = []
        for entry in candidates:
            if not isinstance(entry, dict):
                continue
            item = make_item(_first_value(entry, TITLE_KEYS), _first_value(entry, HREF_KEYS), source_url)
            if item is not None:
                items.append(item)
        if items:
            return items
    return []


def extract_listing(
    raw_body: str, content_type: str, source_url: str, source_domain: str
) -> List[NewsItem]:
    """Extract news links from a listing page.

    Tries a structured JSON payload first, then the DOM rules registered for
    ``source_domain``, then a generic anchor scan.
    """

    if looks_like_json(raw_body, content_type):
        items = extract_payload_items(raw_body, source_url)
        if items:
            logger.info("Extracted %d items from JSON payload", len(items))
            return items

    soup = parse_html(raw_body)
    strategy = strategy_for(source_domain)
    items = strategy.extract_listing(soup, source_url)
    if items:
        logger.info("Extracted %d items with %s rules", len(items), strategy.name)
        return items

    if strategy is not DEFAULT_STRATEGY:
        items = DEFAULT_STRATEGY.extract_listing(soup, source_url)
        logger.info("Extracted %d items with generic anchor scan", len(items))
    return items


def extract_article(
    document: BeautifulSoup | str,
    source_domain: str,
    url: str,
    *,
    min_content_length: int = MIN_CONTENT_LENGTH,
) -> ArticleContent:
    """Extract the article on ``url`` using the rules for ``source_domain``.

    Raises :class:`~fxnews.errors.ExtractionError` when no usable content is found.
    """

    soup = parse_html(document) if isinstance(document, str) else document
    strategy = strategy_for(source_domain)
    try:
        article = strategy.extract_article(soup, url, min_content_length=min_content_length)
    except ExtractionError:
        logger.warning("Failed to extract article content from %s with %s rules", url, strategy.name)
        raise
    logger.info(
        "Extracted article from %s: title %d chars, content %d chars",
        url,
        len(article.title),
        len(article.content),
    )
    return article
