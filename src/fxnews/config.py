"""Configuration models and helpers for the FX news scraper."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import List, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

__all__ = [
    "ScraperConfig",
    "SourceConfig",
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_USER_AGENTS",
]

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "data" / "sources.json"
CONFIG_ENV_VAR = "FXNEWS_CONFIG"

DEFAULT_USER_AGENTS = [
    (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_0) "
        "AppleWebKit/605.1.15 (KHTML, like Gecko) "
        "Version/16.0 Safari/605.1.15"
    ),
    (
        "Mozilla/5.0 (X11; Linux x86_64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/119.0.0.0 Safari/537.36"
    ),
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
]


class SourceConfig(BaseModel):
    """A news site the scraper is permitted to fetch from."""

    name: str = Field(..., description="Human friendly source name")
    domain: str = Field(
        ...,
        description="Domain fragment that a requested hostname must contain, e.g. 'investing.com'",
    )

    @field_validator("domain")
    @classmethod
    def _normalise_domain(cls, value: str) -> str:
        domain = value.strip().lower()
        if not domain:
            raise ValueError("domain must not be empty")
        return domain

    def matches(self, hostname: str) -> bool:
        """Return ``True`` when ``hostname`` belongs to this source."""

        return self.domain in hostname.lower()


def _default_sources() -> List[SourceConfig]:
    return [
        SourceConfig(name="Investing.com", domain="investing.com"),
        SourceConfig(name="DailyForex", domain="dailyforex.com"),
    ]


class ScraperConfig(BaseModel):
    """Runtime settings for the scrape pipeline."""

    sources: List[SourceConfig] = Field(default_factory=_default_sources)
    max_attempts: int = Field(default=3, ge=1, description="Fetch attempts per request")
    request_timeout: Tuple[float, float] = Field(
        default=(10, 30),
        description="Connect and read timeout in seconds for outbound requests",
    )
    max_items: int = Field(default=1000, ge=1, description="Upper bound on returned listing items")
    min_content_length: int = Field(
        default=100,
        ge=0,
        description="Article bodies of this many characters or fewer are rejected",
    )
    user_agents: List[str] = Field(default_factory=lambda: list(DEFAULT_USER_AGENTS), min_length=1)

    @property
    def allowed_domains(self) -> List[str]:
        """Return the allow-listed domain fragments."""

        return [source.domain for source in self.sources]

    def source_for(self, hostname: str) -> SourceConfig | None:
        """Return the configured source matching ``hostname`` if there is one."""

        return next((source for source in self.sources if source.matches(hostname)), None)

    @classmethod
    def default_path(cls) -> Path:
        """Return the configuration path, honouring ``FXNEWS_CONFIG``."""

        override = os.environ.get(CONFIG_ENV_VAR)
        return Path(override) if override else DEFAULT_CONFIG_PATH

    @classmethod
    def from_file(cls, path: Path | str | None = None) -> "ScraperConfig":
        """Load configuration data from a JSON file."""

        config_path = Path(path) if path else cls.default_path()
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise FileNotFoundError(f"Configuration file not found: {config_path}") from exc
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in configuration file: {config_path}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Configuration file is invalid: {config_path}\n{exc}") from exc

    @classmethod
    def load(cls, path: Path | str | None = None) -> "ScraperConfig":
        """Load configuration from disk, falling back to built-in defaults when missing."""

        try:
            return cls.from_file(path)
        except FileNotFoundError:
            return cls()

    def dump(self, path: Path | str | None = None) -> None:
        """Persist the configuration back to disk as JSON."""

        config_path = Path(path) if path else self.default_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
