"""Shared fixtures for side-note tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup

SAMPLE_PAGE = """
<html>
  <head><title>Notes on parsers</title></head>
  <body>
    <article>
      <p>First paragraph.<span class="sn">hello</span></p>
      <p>Second paragraph.<span class="sn">Some <em>emphasised</em> text.</span></p>
      <p>Third paragraph.<span class="sn">last one</span></p>
    </article>
  </body>
</html>
"""


@pytest.fixture
def sample_soup() -> BeautifulSoup:
    """Return the sample page with three side notes."""

    return BeautifulSoup(SAMPLE_PAGE, "html.parser")


@pytest.fixture
def sample_page(tmp_path: Path) -> Path:
    """Write the sample page to a temporary file."""

    path = tmp_path / "page.html"
    path.write_text(SAMPLE_PAGE, encoding="utf-8")
    return path
