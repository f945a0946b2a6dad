"""Collapsible side-note widgets for rendered blog pages."""

from .controller import NoteWidgetController, UnknownNoteError, initialize
from .load_document import is_url, load_document
from .note import Note, NoteState
from .reducer import NoteEvent, reduce

__all__ = [
    "Note",
    "NoteEvent",
    "NoteState",
    "NoteWidgetController",
    "UnknownNoteError",
    "initialize",
    "is_url",
    "load_document",
    "reduce",
]
