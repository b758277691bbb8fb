"""Read lockfile text from a filesystem path or an http(s) URL."""

from __future__ import annotations

from pathlib import Path

import requests
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

USER_AGENT = "yarn-lockfile-parser"


class SourceError(RuntimeError):
    """Raised when a lockfile source cannot be read."""


def is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_get(url: str) -> Response:
    return requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=30)


def fetch_lockfile(url: str) -> str:
    """Return the text of a lockfile served at ``url``."""
    try:
        response = _http_get(url)
    except requests.RequestException as exc:  # pragma: no cover - network failure path
        raise SourceError(f"Failed to fetch lockfile: {exc}") from exc

    if response.status_code != 200:
        raise SourceError(f"Unexpected status code {response.status_code} fetching {url}")

    return response.content.decode("utf-8", errors="replace")


def read_lockfile_text(source: str | Path) -> str:
    """Return lockfile text from a URL or a path."""
    if isinstance(source, str) and is_url(source):
        return fetch_lockfile(source)

    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(f"Failed to read {path}: {exc}") from exc
