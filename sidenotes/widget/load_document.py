"""Load page HTML from a file or URL, caching downloads locally."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

import requests  # type: ignore[import-untyped]
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

CACHE_DIR = Path.home() / ".sidenotes"


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _fetch_html(url: str, cache_dir: Path) -> str:
    """Return the HTML at ``url``, downloading it only once.

    Args:
        url: Address of the rendered page.
        cache_dir: Directory holding downloaded pages.

    Returns:
        The page HTML.
    """

    cache_dir.mkdir(parents=True, exist_ok=True)
    digest = hashlib.sha1(url.encode("utf-8")).hexdigest()
    cache_file = cache_dir / f"{digest}.html"

    if cache_file.exists():
        logger.debug("Using cached copy of %s", url)
        return cache_file.read_text(encoding="utf-8")

    response = requests.get(url, timeout=30)
    response.raise_for_status()
    html = response.text
    cache_file.write_text(html, encoding="utf-8")
    return html


def load_document(
    source: str, cache_dir: Path | None = None
) -> BeautifulSoup:
    """Parse the page found at ``source``.

    Args:
        source: Path of an HTML file or an ``http(s)`` URL.
        cache_dir: Directory used for caching downloaded pages.

    Returns:
        The parsed document.
    """

    if is_url(source):
        html = _fetch_html(source, cache_dir or CACHE_DIR)
    else:
        html = Path(source).read_text(encoding="utf-8")

    return BeautifulSoup(html, "html.parser")
