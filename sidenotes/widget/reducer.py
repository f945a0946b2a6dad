"""State transitions of a side note."""

from __future__ import annotations

from enum import Enum

from .note import NoteState


class NoteEvent(str, Enum):
    """Click received by a note, classified by its target."""

    CLICK_NOTE = "click_note"
    CLICK_TOGGLE = "click_toggle"


# Pairs missing from the table leave the state unchanged.
_TRANSITIONS: dict[tuple[NoteState, NoteEvent], NoteState] = {
    (NoteState.COLLAPSED, NoteEvent.CLICK_NOTE): NoteState.EXPANDED,
    (NoteState.COLLAPSED, NoteEvent.CLICK_TOGGLE): NoteState.EXPANDED,
    (NoteState.EXPANDED, NoteEvent.CLICK_TOGGLE): NoteState.COLLAPSED,
}


def reduce(state: NoteState, event: NoteEvent) -> NoteState:
    """Return the state following ``event``.

    A collapsed note expands on any click. An expanded note only collapses
    when its toggle label is clicked.
    """

    return _TRANSITIONS.get((state, event), state)
