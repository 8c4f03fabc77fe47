"""Exception types raised by the scrape pipeline.

Each error carries the HTTP status the API reports for it so that the route
layer can translate failures without knowing where they came from.
"""

from __future__ import annotations

__all__ = [
    "ExtractionError",
    "FetchError",
    "InvalidRequestError",
    "ScrapeError",
    "UpstreamFetchError",
]


class ScrapeError(Exception):
    """Base class for expected scrape failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequestError(ScrapeError):
    """The request body, URL or target domain was rejected."""

    status_code = 400


class UpstreamFetchError(ScrapeError):
    """The target site was unreachable or answered with a non-success status."""

    status_code = 502

    def __init__(self, message: str, *, upstream_status: int | None = None) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status


class FetchError(UpstreamFetchError):
    """Raised by the fetcher once every attempt failed at the network level."""


class ExtractionError(ScrapeError):
    """The page was fetched but no usable article content could be located."""

    status_code = 400
