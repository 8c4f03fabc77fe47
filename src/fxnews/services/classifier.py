"""Decide from a URL alone whether it points at an article or a listing."""

from __future__ import annotations

import re
from urllib.parse import urlsplit, urlunsplit

from fxnews.models import PageKind

__all__ = ["ARTICLE_PATTERNS", "classify_page", "is_article_url"]

ARTICLE_PATTERNS = (
    re.compile(r"/news/forex-news/[^/]+$"),  # investing.com
    re.compile(r"/forex-technical-analysis/\d{4}/\d{2}/"),  # dailyforex.com
    re.compile(r"/articles/"),
    re.compile(r"/analysis/"),
    re.compile(r"-\d{5,}$"),
)


def _strip_query(url: str) -> str:
    parts = urlsplit(url.strip())
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def is_article_url(url: str) -> bool:
    """Return ``True`` when ``url`` looks like a single article page."""

    candidate = _strip_query(url)
    return any(pattern.search(candidate) for pattern in ARTICLE_PATTERNS)


def classify_page(url: str) -> PageKind:
    """Classify ``url`` as :attr:`PageKind.ARTICLE` or :attr:`PageKind.LISTING`."""

    return PageKind.ARTICLE if is_article_url(url) else PageKind.LISTING
