"""Scrape pipeline tying validation, fetching and extraction together."""

from __future__ import annotations

import logging
from typing import Iterable, Tuple
from urllib.parse import urlsplit

from fxnews.config import ScraperConfig
from fxnews.errors import InvalidRequestError, UpstreamFetchError
from fxnews.models import PageKind, ScrapeResult
from fxnews.services.assembler import assemble
from fxnews.services.classifier import classify_page
from fxnews.services.extraction import extract_article, extract_listing
from fxnews.services.fetcher import PageFetcher

__all__ = ["NewsScraper", "validate_target"]

logger = logging.getLogger(__name__)


def validate_target(url: str | None, allowed_domains: Iterable[str]) -> Tuple[str, str]:
    """Return the stripped URL and its hostname, or raise :class:`InvalidRequestError`.

    The hostname must contain one of ``allowed_domains``.
    """

    candidate = (url or "").strip()
    if not candidate:
        raise InvalidRequestError("url is required")

    try:
        parts = urlsplit(candidate)
        hostname = parts.hostname
        parts.port  # raises ValueError for a non-numeric or out-of-range port
    except ValueError as exc:
        raise InvalidRequestError("invalid url") from exc
    if parts.scheme not in {"http", "https"} or not hostname:
        raise InvalidRequestError("invalid url")

    if not any(domain in hostname for domain in allowed_domains):
        logger.warning("Rejected request for disallowed domain %s", hostname)
        raise InvalidRequestError("domain not allowed")
    return candidate, hostname


class NewsScraper:
    """Scrape a single allow-listed news URL."""

    def __init__(
        self, config: ScraperConfig | None = None, fetcher: PageFetcher | None = None
    ) -> None:
        self.config = config or ScraperConfig.load()
        self._fetcher = fetcher or PageFetcher(
            user_agents=self.config.user_agents,
            max_attempts=self.config.max_attempts,
            timeout=self.config.request_timeout,
        )

    def scrape(self, url: str) -> ScrapeResult:
        """Fetch ``url`` and return either its article or the news items it lists.

        Raises :class:`~fxnews.errors.ScrapeError` subclasses for rejected
        requests, upstream failures and unusable article pages.
        """

        target, hostname = validate_target(url, self.config.allowed_domains)
        source = self.config.source_for(hostname)
        kind = classify_page(target)

        logger.info("Fetching %s URL: %s", source.name if source else hostname, target)
        response = self._fetcher.fetch(target)
        if not response.ok:
            logger.error("Fetch failed with status: %s", response.status_code)
            raise UpstreamFetchError(
                f"fetch failed: {response.status_code}", upstream_status=response.status_code
            )
        logger.info(
            "Received %d bytes, content-type: %s", len(response.text), response.content_type
        )

        if kind is PageKind.ARTICLE:
            logger.info("Detected as article page, extracting content")
            article = extract_article(
                response.text,
                hostname,
                target,
                min_content_length=self.config.min_content_length,
            )
            return ScrapeResult.from_items(target, hostname, [article])

        logger.info("Detected as listing page, extracting news links")
        items = extract_listing(response.text, response.content_type, target, hostname)
        result = assemble(target, hostname, items, max_items=self.config.max_items)
        logger.info("Returning %d unique items for %s", result.count, target)
        return result
