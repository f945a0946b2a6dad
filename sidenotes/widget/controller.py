"""Turn side-note marker elements into collapsible widgets."""

from __future__ import annotations

import logging
from typing import Any

from bs4.element import Tag

from sidenotes.config import WidgetConfig

from . import markup
from .note import Note, NoteState
from .reducer import NoteEvent, reduce
from .types import NoteList

logger = logging.getLogger(__name__)


class UnknownNoteError(KeyError):
    """Raised when a note identifier is not registered."""


class NoteWidgetController:
    """Owns the side notes of a document and dispatches clicks to them.

    Notes are registered by :meth:`initialize`. A single dispatcher,
    :meth:`click`, stands in for the page's event listeners: it resolves
    the note owning the clicked node and feeds the click to the reducer.
    """

    def __init__(self, config: WidgetConfig | None = None) -> None:
        self.config = config or WidgetConfig()
        self._notes: NoteList = []

        # Marker elements keyed by identity, bs4 tags compare by value.
        self._by_element: dict[int, Note] = {}

    @property
    def notes(self) -> NoteList:
        """Registered notes in document order."""

        return list(self._notes)

    def initialize(self, document: Tag) -> NoteList:
        """Convert every outermost marker element of ``document``.

        Markers nested inside another marker stay plain content of the
        outer note. Elements registered by an earlier call are skipped.

        Args:
            document: Parsed page or fragment.

        Returns:
            Notes created by this call, in document order.
        """

        created: NoteList = []
        for element in self._find_markers(document):
            if self._lookup(element) is not None:
                continue

            snapshot = markup.decorate(element, self.config)
            note = Note(
                note_id=f"{self.config.marker_class}-{len(self._notes)}",
                element=element,
                snapshot=snapshot,
                text=markup.snapshot_text(snapshot, self.config),
            )
            self._notes.append(note)
            self._by_element[id(element)] = note

            # Every note starts collapsed.
            markup.apply(note, NoteState.COLLAPSED, self.config)
            created.append(note)

        logger.debug("Initialized %d side notes", len(created))
        return created

    def get(self, note_id: str) -> Note:
        """Return the note registered as ``note_id``."""

        for note in self._notes:
            if note.note_id == note_id:
                return note
        raise UnknownNoteError(note_id)

    def click(self, target: Any) -> Note | None:  # noqa: ANN401
        """Dispatch a click on ``target``.

        Args:
            target: Node that received the click. Nodes detached from the
                tree, such as controls replaced by an earlier transition,
                belong to no note.

        Returns:
            The note that changed state, or ``None`` when the click caused
            no transition.
        """

        note = self._owner(target)
        if note is None:
            logger.debug("Click outside of any side note ignored")
            return None

        event = (
            NoteEvent.CLICK_TOGGLE
            if self._on_toggle(target, note)
            else NoteEvent.CLICK_NOTE
        )
        state = reduce(note.state, event)
        if state is note.state:
            return None

        self._transition(note, state)
        return note

    def expand(self, note: Note) -> None:
        self._transition(note, NoteState.EXPANDED)

    def collapse(self, note: Note) -> None:
        self._transition(note, NoteState.COLLAPSED)

    def toggle(self, note: Note) -> None:
        if note.expanded:
            self.collapse(note)
        else:
            self.expand(note)

    def _transition(self, note: Note, state: NoteState) -> None:
        logger.debug(
            "%s: %s -> %s", note.note_id, note.state.value, state.value
        )
        markup.apply(note, state, self.config)

    def _find_markers(self, document: Tag) -> list[Tag]:
        marker = self.config.marker_class

        # Resolve nesting before any element is rewritten.
        return [
            element
            for element in document.find_all(class_=marker)
            if not any(markup.has_class(p, marker) for p in element.parents)
        ]

    def _lookup(self, node: Any) -> Note | None:  # noqa: ANN401
        note = self._by_element.get(id(node))
        if note is not None and note.element is node:
            return note
        return None

    def _owner(self, target: Any) -> Note | None:  # noqa: ANN401
        # Walk up from the target to the closest registered marker.
        node = target
        while node is not None:
            note = self._lookup(node)
            if note is not None:
                return note
            node = node.parent
        return None

    def _on_toggle(self, target: Any, note: Note) -> bool:  # noqa: ANN401
        node = target
        while node is not None and node is not note.element:
            if markup.has_class(node, self.config.toggle_class):
                return True
            node = node.parent
        return False


def initialize(
    document: Tag, config: WidgetConfig | None = None
) -> NoteWidgetController:
    """Convert the side notes of ``document`` with a new controller."""

    controller = NoteWidgetController(config)
    controller.initialize(document)
    return controller
