"""Build and inspect the nodes making up a side-note widget."""

from __future__ import annotations

import copy
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import NavigableString, Tag

from sidenotes.config import WidgetConfig

from .note import Note, NoteState, normalize_text
from .types import NodeList, Snapshot

# Text placed between the note body and the trailing toggle label.
SEPARATOR = "  "


def _classes(tag: Any) -> list[str]:  # noqa: ANN401
    """Return the class list of ``tag`` whether stored as list or string."""

    if not isinstance(tag, Tag):
        return []
    classes = tag.get("class") or []
    if isinstance(classes, str):
        return classes.split()
    return list(classes)


def has_class(tag: Any, name: str) -> bool:  # noqa: ANN401
    return name in _classes(tag)


def add_class(tag: Tag, name: str) -> None:
    classes = _classes(tag)
    if name not in classes:
        classes.append(name)
    tag["class"] = classes


def remove_class(tag: Tag, name: str) -> None:
    classes = [c for c in _classes(tag) if c != name]
    if classes:
        tag["class"] = classes
    elif tag.has_attr("class"):
        del tag["class"]


def _new_tag(name: str, **attrs: Any) -> Tag:
    # A builder-backed tag knows which elements are void, so ``<img>``
    # renders without a closing tag.
    return BeautifulSoup("", "html.parser").new_tag(name, attrs=attrs)


def avatar_node(config: WidgetConfig) -> Tag:
    """Return the avatar image leading an expanded note."""

    return _new_tag(
        "img",
        **{
            "class": [config.avatar_class],
            "src": config.avatar_src,
            "alt": config.avatar_alt,
        },
    )


def toggle_node(config: WidgetConfig, label: str) -> Tag:
    """Return a clickable label switching the note state."""

    tag = _new_tag("span", **{"class": [config.toggle_class]})
    tag.string = label
    return tag


def decorate(element: Tag, config: WidgetConfig) -> Snapshot:
    """Add the widget furniture to ``element`` and capture its children.

    Args:
        element: Marker element still holding its original content.
        config: Markup conventions to apply.

    Returns:
        Copies of the decorated children, used as the expanded content.
    """

    add_class(element, config.visible_class)
    element.insert(0, avatar_node(config))
    element.append(NavigableString(SEPARATOR))
    element.append(toggle_node(config, config.hide_label))

    return tuple(copy.copy(child) for child in element.contents)


def snapshot_text(snapshot: Snapshot, config: WidgetConfig) -> str:
    """Return the text of the original body held in ``snapshot``."""

    parts: list[str] = []
    for node in snapshot:
        # Skip the avatar and toggle furniture added by ``decorate``.
        if has_class(node, config.avatar_class) or has_class(
            node, config.toggle_class
        ):
            continue
        if isinstance(node, Tag):
            parts.append(node.get_text(" "))
        elif type(node) is NavigableString:
            parts.append(str(node))

    return normalize_text(" ".join(parts))


def render(note: Note, state: NoteState, config: WidgetConfig) -> NodeList:
    """Return fresh children displaying ``note`` in ``state``."""

    if state is NoteState.EXPANDED:
        return [copy.copy(node) for node in note.snapshot]
    return [toggle_node(config, config.note_label)]


def apply(note: Note, state: NoteState, config: WidgetConfig) -> None:
    """Replace the content and presentation classes of the note element."""

    element = note.element
    element.clear()
    for node in render(note, state, config):
        element.append(node)

    if state is NoteState.EXPANDED:
        add_class(element, config.expanded_class)
        remove_class(element, config.collapsed_class)
    else:
        add_class(element, config.collapsed_class)
        remove_class(element, config.expanded_class)

    note.state = state
