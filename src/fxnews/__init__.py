"""FX News package exposing configuration, API, and scraping helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import MutableMapping

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _load_local_env(
    env_path: Path = PROJECT_ROOT / ".env",
    environ: MutableMapping[str, str] = os.environ,
) -> None:
    """Copy ``KEY=value`` lines from ``env_path`` into ``environ``.

    Variables already set win over the file, so ``FXNEWS_CONFIG`` exported in
    the shell still overrides a project ``.env``. An ``export`` prefix and
    matching quotes around values are accepted.
    """

    if not env_path.is_file():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = (part.strip() for part in line.split("=", 1))
        if not key or key in environ:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        environ[key] = value


_load_local_env()

from .config import ScraperConfig, SourceConfig  # noqa: E402,F401

__all__ = ["ScraperConfig", "SourceConfig"]
