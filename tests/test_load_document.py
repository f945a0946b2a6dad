"""Tests for loading pages from files and URLs."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock, patch

from sidenotes import widget

HTML = '<html><body><span class="sn">hi</span></body></html>'


def test_load_document_reads_files(tmp_path: Path) -> None:
    path = tmp_path / "post.html"
    path.write_text(HTML, encoding="utf-8")

    soup = widget.load_document(str(path))

    assert soup.find("span", class_="sn").get_text() == "hi"


def test_load_document_caches_downloads(tmp_path: Path) -> None:
    """Downloads a page only once and reuses the cached copy."""

    url = "https://blog.example.org/posts/parsers.html"
    response = Mock(text=HTML)

    with patch("requests.get", return_value=response) as mock_get:
        soup = widget.load_document(url, cache_dir=tmp_path)
        mock_get.assert_called_once_with(url, timeout=30)

    response.raise_for_status.assert_called_once()
    assert len(list(tmp_path.glob("*.html"))) == 1
    assert soup.find("span", class_="sn") is not None

    with patch("requests.get", return_value=response) as mock_get:
        widget.load_document(url, cache_dir=tmp_path)
        mock_get.assert_not_called()


def test_is_url() -> None:
    assert widget.is_url("http://example.org")
    assert widget.is_url("https://example.org/a.html")
    assert not widget.is_url("posts/a.html")
