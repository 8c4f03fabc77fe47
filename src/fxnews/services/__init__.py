"""Service layer entry points for FX News."""

from __future__ import annotations

from .assembler import assemble  # noqa: F401
from .classifier import classify_page  # noqa: F401
from .extraction import extract_article, extract_listing  # noqa: F401
from .fetcher import FetchResponse, PageFetcher  # noqa: F401
from .scraper import NewsScraper, validate_target  # noqa: F401

__all__ = [
    "FetchResponse",
    "NewsScraper",
    "PageFetcher",
    "assemble",
    "classify_page",
    "extract_article",
    "extract_listing",
    "validate_target",
]
