"""Common type aliases for side-note structures."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bs4.element import PageElement

if TYPE_CHECKING:
    from .note import Note  # noqa: F401


NoteList = list["Note"]
NodeList = list[PageElement]
Snapshot = tuple[PageElement, ...]
