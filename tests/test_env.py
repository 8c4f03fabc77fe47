from pathlib import Path

from fxnews import _load_local_env


def test_env_file_populates_missing_variables(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text(
        "# local overrides\n"
        "\n"
        'FXNEWS_CONFIG="/srv/fxnews/sources.json"\n'
        "export LOG_LEVEL=debug\n"
        "PROXY_NOTE='a=b'\n"
        "not a pair\n"
        "=orphan\n",
        encoding="utf-8",
    )
    environ: dict[str, str] = {}

    _load_local_env(env_path, environ)

    assert environ == {
        "FXNEWS_CONFIG": "/srv/fxnews/sources.json",
        "LOG_LEVEL": "debug",
        "PROXY_NOTE": "a=b",
    }


def test_existing_variables_are_not_overridden(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("FXNEWS_CONFIG=/from/file.json\n", encoding="utf-8")
    environ = {"FXNEWS_CONFIG": "/from/shell.json"}

    _load_local_env(env_path, environ)

    assert environ == {"FXNEWS_CONFIG": "/from/shell.json"}


def test_missing_env_file_is_ignored(tmp_path: Path) -> None:
    environ: dict[str, str] = {}

    _load_local_env(tmp_path / ".env", environ)

    assert environ == {}
