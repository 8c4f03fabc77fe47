from __future__ import annotations

from typing import Callable

import pytest

from fxnews.services.fetcher import FetchResponse


@pytest.fixture
def html_response() -> Callable[..., FetchResponse]:
    def build(text: str, *, url: str = "https://example.com", status_code: int = 200) -> FetchResponse:
        return FetchResponse(
            url=url, status_code=status_code, text=text, content_type="text/html; charset=utf-8"
        )

    return build
