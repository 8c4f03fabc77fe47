"""Tests for the HTTP surface in :mod:`fxnews.api`."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import patch

import pytest
import requests
from fastapi.testclient import TestClient

from fixtures import (
    DAILYFOREX_ARTICLE_HTML,
    DAILYFOREX_ARTICLE_URL,
    DAILYFOREX_PARAGRAPHS,
    INVESTING_LISTING_HTML,
    INVESTING_LISTING_URL,
    SpyFetcher,
)
from fxnews.api.app import create_app
from fxnews.config import ScraperConfig, SourceConfig
from fxnews.services.fetcher import PageFetcher
from fxnews.services.scraper import NewsScraper


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def _install_spy(monkeypatch, spy: SpyFetcher) -> None:
    monkeypatch.setattr(
        "fxnews.api.routes.build_scraper",
        lambda: NewsScraper(ScraperConfig(), fetcher=spy),
    )


def _assert_cors(response) -> None:
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]
    assert "content-type" in response.headers["access-control-allow-headers"]


def test_disallowed_domain_is_rejected_without_fetching(client, monkeypatch, html_response) -> None:
    spy = SpyFetcher(html_response("<html></html>"))
    _install_spy(monkeypatch, spy)

    response = client.post("/api/scrape", json={"url": "https://evil.com/news"})

    assert response.status_code == 400
    assert response.json() == {"error": "domain not allowed"}
    assert spy.calls == []
    _assert_cors(response)


def test_article_scrape_returns_single_item(client, monkeypatch, html_response) -> None:
    _install_spy(monkeypatch, SpyFetcher(html_response(DAILYFOREX_ARTICLE_HTML)))

    response = client.post("/api/scrape", json={"url": DAILYFOREX_ARTICLE_URL})

    assert response.status_code == 200
    payload = response.json()
    assert payload["url"] == DAILYFOREX_ARTICLE_URL
    assert payload["domain"] == "dailyforex.com"
    assert payload["count"] == 1
    assert payload["items"] == [
        {
            "title": "EUR/USD Technical Analysis: Bulls Regroup",
            "link": DAILYFOREX_ARTICLE_URL,
            "content": "\n\n".join(DAILYFOREX_PARAGRAPHS),
            "author": "Jane Trader",
            "date": "2024-01-15T08:00:00Z",
        }
    ]
    _assert_cors(response)


def test_listing_scrape_omits_empty_fields(client, monkeypatch, html_response) -> None:
    _install_spy(monkeypatch, SpyFetcher(html_response(INVESTING_LISTING_HTML)))

    response = client.post("/api/scrape", json={"url": INVESTING_LISTING_URL})

    assert response.status_code == 200
    payload = response.json()
    assert payload["count"] == len(payload["items"]) == 2
    assert set(payload["items"][0]) == {"title", "link"}


def test_upstream_failure_maps_to_bad_gateway(client, monkeypatch, html_response) -> None:
    _install_spy(monkeypatch, SpyFetcher(html_response("", status_code=503)))

    response = client.post("/api/scrape", json={"url": INVESTING_LISTING_URL})

    assert response.status_code == 502
    assert response.json() == {"error": "fetch failed: 503"}


def test_url_rejected_by_the_http_client_is_a_client_error(client, monkeypatch) -> None:
    session = SimpleNamespace(calls=[])

    def get(url, headers, timeout):
        session.calls.append(url)
        raise requests.exceptions.InvalidURL("Failed to parse")

    session.get = get
    sleeps: list[float] = []
    fetcher = PageFetcher(session, sleep=sleeps.append)
    monkeypatch.setattr(
        "fxnews.api.routes.build_scraper",
        lambda: NewsScraper(ScraperConfig(), fetcher=fetcher),
    )

    response = client.post("/api/scrape", json={"url": INVESTING_LISTING_URL})

    assert response.status_code == 400
    assert response.json() == {"error": "invalid url"}
    assert len(session.calls) == 1
    assert sleeps == []


def test_extraction_failure_is_a_client_error(client, monkeypatch, html_response) -> None:
    _install_spy(monkeypatch, SpyFetcher(html_response("<html><body><p>Access denied</p></body></html>")))

    response = client.post("/api/scrape", json={"url": DAILYFOREX_ARTICLE_URL})

    assert response.status_code == 400
    assert "Could not extract article content" in response.json()["error"]


def test_unexpected_error_returns_500_with_stack(client, monkeypatch) -> None:
    def explode(url: str):
        raise RuntimeError("parser exploded")

    _install_spy(monkeypatch, SpyFetcher(explode))

    response = client.post("/api/scrape", json={"url": INVESTING_LISTING_URL})

    assert response.status_code == 500
    payload = response.json()
    assert payload["error"] == "parser exploded"
    assert "RuntimeError" in payload["stack"]
    _assert_cors(response)


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"content": "not json", "headers": {"content-type": "application/json"}}, "invalid json body"),
        ({"json": {}}, "url is required"),
        ({"json": {"url": "   "}}, "url is required"),
        ({"json": {"url": 42}}, "url is required"),
        ({"json": ["https://www.investing.com/news"]}, "url is required"),
        ({"json": {"url": "investing.com/news"}}, "invalid url"),
        ({"json": {"url": "https://www.investing.com:99999/news"}}, "invalid url"),
        ({"json": {"url": "https://www.investing.com:port/news"}}, "invalid url"),
    ],
)
def test_invalid_bodies_are_rejected(client, kwargs, message) -> None:
    response = client.post("/api/scrape", **kwargs)

    assert response.status_code == 400
    assert response.json() == {"error": message}


def test_preflight_returns_no_content(client) -> None:
    response = client.options(
        "/api/scrape",
        headers={"Origin": "https://dashboard.example.com", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 204
    assert response.content == b""
    _assert_cors(response)
    assert response.headers["access-control-max-age"] == "86400"


def test_other_methods_are_not_allowed(client) -> None:
    response = client.get("/api/scrape")

    assert response.status_code == 405
    assert response.json() == {"error": "Method Not Allowed"}
    _assert_cors(response)


def test_list_sources_returns_configured_domains(client) -> None:
    config = ScraperConfig(
        sources=[
            SourceConfig(name="Investing.com", domain="investing.com"),
            SourceConfig(name="DailyForex", domain="DailyForex.com"),
        ]
    )

    with patch("fxnews.api.routes.ScraperConfig.load", return_value=config):
        response = client.get("/api/sources")

    assert response.status_code == 200
    assert response.json() == {
        "sources": [
            {"name": "Investing.com", "domain": "investing.com"},
            {"name": "DailyForex", "domain": "dailyforex.com"},
        ]
    }


def test_invalid_configuration_is_reported(client) -> None:
    with patch("fxnews.api.routes.ScraperConfig.load", side_effect=ValueError("bad config")):
        response = client.get("/api/sources")

    assert response.status_code == 500
    assert response.json() == {"error": "bad config"}


def test_health(client) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
