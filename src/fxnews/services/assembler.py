"""Shape extracted listing items into the response payload."""

from __future__ import annotations

from typing import Iterable, List

from fxnews.models import NewsItem, ScrapeResult

__all__ = ["MAX_ITEMS", "assemble", "dedupe_items"]

MAX_ITEMS = 1000


def dedupe_items(items: Iterable[NewsItem]) -> List[NewsItem]:
    """Return ``items`` with repeated links removed; the first occurrence wins."""

    seen: set[str] = set()
    unique: List[NewsItem] = []
    for item in items:
        if not item.link or item.link in seen:
            continue
        seen.add(item.link)
        unique.append(NewsItem(title=item.title, link=item.link, summary=item.summary))
    return unique


def assemble(
    url: str, domain: str, items: Iterable[NewsItem], *, max_items: int = MAX_ITEMS
) -> ScrapeResult:
    """Deduplicate, cap and wrap listing items."""

    unique = dedupe_items(items)[:max_items]
    return ScrapeResult.from_items(url, domain, unique)
