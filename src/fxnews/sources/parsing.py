"""HTML and JSON-LD helpers shared by the source strategies."""

from __future__ import annotations

import json
import logging
import re
from typing import Callable, Iterable, Iterator, List, Sequence
from urllib.parse import urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup, Tag
from pydantic import ValidationError

from fxnews.models import NewsItem

__all__ = [
    "article_title",
    "collect_paragraphs",
    "element_text",
    "first_match",
    "first_value",
    "has_type",
    "iter_json_ld",
    "json_ld_author",
    "looks_like_news",
    "make_item",
    "normalize_url",
    "scan_anchors",
    "time_value",
]

logger = logging.getLogger(__name__)

_NEWS_HREF_RE = re.compile(r"/article|/story|/press|/analysis|/articles/", re.IGNORECASE)
_NEWS_TEXT_RE = re.compile(r"news|article|press|analysis|report|headline", re.IGNORECASE)

MIN_PARAGRAPH_LENGTH = 20


def normalize_url(base_url: str, href: str | None) -> str | None:
    """Resolve ``href`` against ``base_url``; ``None`` when it is not a usable web link."""

    if not href or not isinstance(href, str):
        return None
    try:
        absolute = urljoin(base_url, href.strip())
        parts = urlsplit(absolute)
    except ValueError:
        return None
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        return None
    return urlunsplit((parts.scheme, parts.netloc, parts.path, parts.query, ""))


def looks_like_news(href: str | None, text: str | None) -> bool:
    """Best-effort check whether a link or its anchor text refers to news content."""

    if not href and not text:
        return False
    lowered_href = (href or "").lower()
    if "/news" in lowered_href or _NEWS_HREF_RE.search(lowered_href):
        return True
    return bool(_NEWS_TEXT_RE.search(text or ""))


def make_item(
    title: object, href: object, base_url: str, *, summary: object = None
) -> NewsItem | None:
    """Build a :class:`NewsItem` from raw candidate values, or ``None`` if unusable."""

    clean_title = str(title).strip() if title else ""
    if not clean_title:
        logger.debug("Dropping candidate without title: %r", href)
        return None

    link = normalize_url(base_url, href if isinstance(href, str) else None)
    if link is None:
        logger.debug("Dropping candidate %r with unusable link %r", clean_title, href)
        return None

    clean_summary = str(summary).strip() if summary else None
    try:
        return NewsItem(title=clean_title, link=link, summary=clean_summary or None)
    except ValidationError as exc:
        logger.debug("Dropping invalid candidate %r: %s", clean_title, exc)
        return None


def element_text(element: Tag | None) -> str:
    if element is None:
        return ""
    return " ".join(element.get_text().split())


def first_match(root: BeautifulSoup | Tag, selectors: Sequence[str]) -> Tag | None:
    """Return the first element matched by the earliest selector that matches anything."""

    for selector in selectors:
        found = root.select_one(selector)
        if found is not None:
            return found
    return None


def first_value(
    root: BeautifulSoup | Tag,
    selectors: Sequence[str],
    read: Callable[[Tag], str] = element_text,
) -> str:
    """Return the first non-empty ``read`` value over every element the selectors match.

    Elements that yield nothing, such as ``<link rel="author">`` in the page
    head, are skipped in favour of later matches.
    """

    for selector in selectors:
        for element in root.select(selector):
            value = read(element)
            if value:
                return value
    return ""


def time_value(element: Tag | None) -> str:
    """Return the ``datetime`` attribute of a time-like element, else its text."""

    if element is None:
        return ""
    value = element.get("datetime") or element.get("content")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return element_text(element)


def article_title(soup: BeautifulSoup) -> str:
    """Return the social preview title, else the first heading, else an empty string."""

    meta = soup.select_one('meta[property="og:title"]')
    if meta is not None:
        content = (meta.get("content") or "").strip()
        if content:
            return content
    return element_text(soup.find("h1"))


def collect_paragraphs(
    container: Tag | None,
    *,
    min_length: int = MIN_PARAGRAPH_LENGTH,
    skip_words: Iterable[str] = (),
) -> str:
    """Join the paragraph texts of ``container`` separated by blank lines.

    Paragraphs of ``min_length`` characters or fewer, and those containing any
    of ``skip_words`` (case-insensitive), are left out.
    """

    if container is None:
        return ""
    banned = [word.lower() for word in skip_words]
    parts: List[str] = []
    for paragraph in container.find_all("p"):
        text = element_text(paragraph)
        if len(text) <= min_length:
            continue
        lowered = text.lower()
        if any(word in lowered for word in banned):
            continue
        parts.append(text)
    return "\n\n".join(parts)


def iter_json_ld(soup: BeautifulSoup) -> Iterator[dict]:
    """Yield every JSON-LD object embedded in ``soup``.

    Top-level arrays and ``@graph`` containers are flattened. Blocks that do
    not parse are skipped.
    """

    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        raw = script.string if script.string is not None else script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            logger.debug("Skipping unparsable JSON-LD block: %s", exc)
            continue
        yield from _flatten_json_ld(payload)


def _flatten_json_ld(payload: object) -> Iterator[dict]:
    if isinstance(payload, list):
        for entry in payload:
            yield from _flatten_json_ld(entry)
    elif isinstance(payload, dict):
        yield payload
        graph = payload.get("@graph")
        if isinstance(graph, list):
            yield from _flatten_json_ld(graph)


def has_type(obj: dict, *names: str) -> bool:
    """Return ``True`` when the JSON-LD ``@type`` of ``obj`` is one of ``names``."""

    declared = obj.get("@type")
    if isinstance(declared, str):
        return declared in names
    if isinstance(declared, list):
        return any(entry in names for entry in declared if isinstance(entry, str))
    return False


def json_ld_author(value: object) -> str:
    """Return an author name from a JSON-LD ``author`` value."""

    if isinstance(value, str):
        return value.strip()
    if isinstance(value, dict):
        name = value.get("name")
        return name.strip() if isinstance(name, str) else ""
    if isinstance(value, list):
        for entry in value:
            name = json_ld_author(entry)
            if name:
                return name
    return ""


def scan_anchors(
    soup: BeautifulSoup | Tag,
    base_url: str,
    *,
    anchors: Iterable[Tag] | None = None,
    also_accept: Callable[[str], bool] | None = None,
) -> List[NewsItem]:
    """Return items for anchors that pass :func:`looks_like_news`.

    ``also_accept`` may admit additional links by their normalised URL.
    """

    items: List[NewsItem] = []
    for anchor in anchors if anchors is not None else soup.find_all("a"):
        href = anchor.get("href")
        title = element_text(anchor)
        if not title:
            continue
        link = normalize_url(base_url, href)
        if link is None:
            continue
        if not looks_like_news(href, title) and not (also_accept and also_accept(link)):
            continue
        items.append(NewsItem(title=title, link=link))
    return items
