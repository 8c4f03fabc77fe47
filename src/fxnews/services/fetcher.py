"""HTTP fetching with browser-like headers and retry/backoff."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Sequence, Tuple, TypeVar

import requests

from fxnews.config import DEFAULT_USER_AGENTS
from fxnews.errors import FetchError, InvalidRequestError

__all__ = [
    "BASE_HEADERS",
    "FetchResponse",
    "PageFetcher",
    "THROTTLE_STATUSES",
    "UNFETCHABLE_URL_ERRORS",
    "backoff_delay",
    "build_headers",
    "retry_call",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")

THROTTLE_STATUSES = frozenset({403, 429})

#: Errors requests raises before any network traffic; retrying cannot help.
UNFETCHABLE_URL_ERRORS = (
    requests.exceptions.InvalidURL,
    requests.exceptions.InvalidSchema,
    requests.exceptions.MissingSchema,
)

BASE_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "DNT": "1",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Cache-Control": "max-age=0",
}


@dataclass
class FetchResponse:
    """Raw body and metadata of a fetched page."""

    url: str
    status_code: int
    text: str
    content_type: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def throttled(self) -> bool:
        return self.status_code in THROTTLE_STATUSES


def build_headers(user_agents: Sequence[str], rng: random.Random | None = None) -> dict[str, str]:
    """Return request headers with a user agent picked uniformly from ``user_agents``."""

    chooser = rng or random
    headers = {"User-Agent": chooser.choice(list(user_agents))}
    headers.update(BASE_HEADERS)
    return headers


def backoff_delay(outcome: object, rng: random.Random | None = None) -> float:
    """Return the pause in seconds before retrying after ``outcome``.

    ``outcome`` is either the exception raised by the attempt or the throttled
    :class:`FetchResponse` it produced.
    """

    source = rng or random
    if isinstance(outcome, BaseException):
        return 0.5 + source.random() * 0.8
    return source.uniform(1.0, 3.0)


def retry_call(
    func: Callable[[], T],
    *,
    attempts: int,
    should_retry: Callable[[T], bool],
    delay: Callable[[object], float],
    sleep: Callable[[float], None] = time.sleep,
    retry_on: Tuple[type[BaseException], ...] = (Exception,),
) -> T:
    """Call ``func`` up to ``attempts`` times.

    A result for which ``should_retry`` is true, or an exception listed in
    ``retry_on``, triggers another attempt after ``delay(outcome)`` seconds.
    When attempts run out the last retryable result is returned, or the last
    exception re-raised.
    """

    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    for attempt in range(1, attempts + 1):
        last_attempt = attempt == attempts
        try:
            result = func()
        except retry_on as exc:
            if last_attempt:
                raise
            outcome: object = exc
        else:
            if last_attempt or not should_retry(result):
                return result
            outcome = result

        pause = delay(outcome)
        logger.warning(
            "Attempt %d/%d failed (%s); retrying in %.2fs",
            attempt,
            attempts,
            _describe(outcome),
            pause,
        )
        sleep(pause)

    raise AssertionError("unreachable")  # pragma: no cover


def _describe(outcome: object) -> str:
    if isinstance(outcome, FetchResponse):
        return f"HTTP {outcome.status_code}"
    return f"{type(outcome).__name__}: {outcome}"


class PageFetcher:
    """Fetch pages from news sites the way a desktop browser would."""

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        user_agents: Sequence[str] | None = None,
        max_attempts: int = 3,
        timeout: Tuple[float, float] = (10, 30),
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self._session = session or requests.Session()
        self._user_agents = list(user_agents or DEFAULT_USER_AGENTS)
        self._max_attempts = max_attempts
        self._timeout = timeout
        self._sleep = sleep
        self._rng = rng or random.Random()

    def fetch(self, url: str, max_attempts: int | None = None) -> FetchResponse:
        """Fetch ``url``, retrying network errors and 403/429 answers.

        Other non-2xx responses are returned as-is for the caller to handle.
        Raises :class:`~fxnews.errors.FetchError` when every attempt failed at
        the network level, and :class:`~fxnews.errors.InvalidRequestError`
        without retrying when requests cannot build a request for ``url``.
        """

        attempts = max_attempts or self._max_attempts
        try:
            return retry_call(
                lambda: self._get(url),
                attempts=attempts,
                should_retry=lambda response: response.throttled,
                delay=lambda outcome: backoff_delay(outcome, self._rng),
                sleep=self._sleep,
                retry_on=(requests.RequestException,),
            )
        except requests.RequestException as exc:
            raise FetchError(f"fetch failed: {exc}") from exc

    def _get(self, url: str) -> FetchResponse:
        headers = build_headers(self._user_agents, self._rng)
        logger.debug("GET %s (UA: %s...)", url, headers["User-Agent"][:40])
        try:
            response = self._session.get(url, headers=headers, timeout=self._timeout)
        except UNFETCHABLE_URL_ERRORS as exc:
            logger.warning("Refusing to retry unfetchable URL %s: %s", url, exc)
            raise InvalidRequestError("invalid url") from exc

        content_type = (response.headers.get("content-type") or "").lower()
        if "charset" not in content_type:
            # requests assumes ISO-8859-1 for text/* without a declared charset
            response.encoding = response.apparent_encoding or "utf-8"
        return FetchResponse(
            url=url,
            status_code=response.status_code,
            text=response.text,
            content_type=content_type,
        )
