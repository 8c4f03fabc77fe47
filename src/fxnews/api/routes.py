"""API routes exposing the news scraper."""

from __future__ import annotations

import logging
import traceback
from typing import List

from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field, ValidationError

from fxnews.config import ScraperConfig
from fxnews.errors import ScrapeError
from fxnews.models import ScrapeRequest, ScrapeResult
from fxnews.services.scraper import NewsScraper

logger = logging.getLogger(__name__)

router = APIRouter()


class SourceEntry(BaseModel):
    name: str
    domain: str


class SourcesResponse(BaseModel):
    sources: List[SourceEntry] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str = "ok"


def load_config() -> ScraperConfig:
    """Load the scraper configuration, surfacing problems as a 500 response."""

    try:
        return ScraperConfig.load()
    except ValueError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


def build_scraper() -> NewsScraper:
    return NewsScraper(load_config())


async def _read_scrape_request(request: Request) -> ScrapeRequest:
    try:
        body = await request.json()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="invalid json body") from exc

    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="url is required")
    try:
        payload = ScrapeRequest.model_validate(body)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail="url is required") from exc
    if not payload.url:
        raise HTTPException(status_code=400, detail="url is required")
    return payload


@router.options("/scrape", status_code=204)
async def scrape_preflight() -> Response:
    """Answer the browser's CORS preflight request."""

    return Response(status_code=204)


@router.post("/scrape", response_model=ScrapeResult, response_model_exclude_none=True)
async def scrape_news(request: Request) -> ScrapeResult:
    """Scrape an allow-listed news URL and return its article or listed items."""

    payload = await _read_scrape_request(request)
    scraper = build_scraper()

    try:
        return await run_in_threadpool(scraper.scrape, payload.url)
    except ScrapeError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    except Exception as exc:  # noqa: BLE001 - reported to the client as a 500
        logger.exception("Scrape error for %s", payload.url)
        raise HTTPException(
            status_code=500,
            detail={"error": str(exc) or type(exc).__name__, "stack": traceback.format_exc()},
        ) from exc


@router.get("/sources", response_model=SourcesResponse)
async def list_sources() -> SourcesResponse:
    """Return the news sites the scraper is allowed to fetch from."""

    config = load_config()
    return SourcesResponse(
        sources=[SourceEntry(name=source.name, domain=source.domain) for source in config.sources]
    )


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()
