"""A single side note found in a rendered page."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from attrs import define, field
from bs4.element import Tag

from .types import Snapshot


class NoteState(str, Enum):
    """Visual state of a side note."""

    EXPANDED = "expanded"
    COLLAPSED = "collapsed"


@define(slots=True)
class Note:
    """A marker element turned into a collapsible widget.

    Attributes:
        note_id: Identifier derived from the document-order index.
        element: Live marker element the note renders into.
        snapshot: Children of the expanded note captured at
            initialization. Rendering inserts copies of these nodes, the
            tuple itself is never modified.
        state: Current visual state.
        text: Plain text of the original note body.
    """

    note_id: str
    element: Tag = field(repr=False, eq=False)
    snapshot: Snapshot = field(converter=tuple, repr=False, eq=False)
    state: NoteState = NoteState.COLLAPSED
    text: str = ""

    @property
    def expanded(self) -> bool:
        return self.state is NoteState.EXPANDED

    def as_dict(self) -> dict[str, Any]:
        """Return the serializable part of the note."""

        return {
            "note_id": self.note_id,
            "state": self.state.value,
            "text": self.text,
        }


def normalize_text(text: str) -> str:
    """Collapse consecutive whitespace and tidy punctuation spacing."""

    cleaned = re.sub(r"\s+", " ", text).strip()
    return re.sub(r"\s+([,.;:!?\)])", r"\1", cleaned)
