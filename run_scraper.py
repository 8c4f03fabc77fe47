"""Convenience script for scraping a single news URL locally."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure the src directory is on the Python path so the fxnews package can be imported
SRC_PATH = Path(__file__).resolve().parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from fxnews.config import ScraperConfig  # noqa: E402  (import after path setup)
from fxnews.errors import ScrapeError  # noqa: E402
from fxnews.services.scraper import NewsScraper  # noqa: E402


def main(argv: list[str] | None = None) -> None:
    """Scrape the given URL with the configured sources and print the JSON result."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("url", help="Article or listing URL on an allow-listed site")
    parser.add_argument("--config", help="Path to a sources.json configuration file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        config = ScraperConfig.from_file(args.config) if args.config else ScraperConfig.load()
    except (FileNotFoundError, ValueError) as exc:
        logging.error("Could not load scraper configuration: %s", exc)
        sys.exit(1)

    scraper = NewsScraper(config)
    try:
        result = scraper.scrape(args.url)
    except ScrapeError as exc:
        logging.error("Failed to scrape %s: %s", args.url, exc)
        sys.exit(1)

    logging.info("Found %d items", result.count)
    print(json.dumps(result.model_dump(exclude_none=True), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
