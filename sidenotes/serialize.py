"""Serialize side-note state as JSON or YAML."""

from __future__ import annotations

try:
    import orjson  # type: ignore[import-not-found]
except ImportError:  # pragma: no cover - optional dependency
    orjson = None  # type: ignore[assignment]

import json
from collections.abc import Iterable
from typing import Any

import yaml  # type: ignore[import-untyped]

from sidenotes.widget.note import Note

FORMATS = ("json", "yaml")


def notes_to_dicts(notes: Iterable[Note]) -> list[dict[str, Any]]:
    return [note.as_dict() for note in notes]


def dump_notes(notes: Iterable[Note], fmt: str = "json") -> str:
    """Render the state of ``notes`` in the requested format.

    Args:
        notes: Notes to describe.
        fmt: Either ``json`` or ``yaml``.

    Returns:
        Serialized list of ``{note_id, state, text}`` mappings.
    """

    data = notes_to_dicts(notes)
    if fmt == "json":
        if orjson is not None:
            return orjson.dumps(data).decode()
        return json.dumps(data, ensure_ascii=False)
    if fmt == "yaml":
        return yaml.safe_dump(data, allow_unicode=True, sort_keys=False)
    raise ValueError(f"Unsupported format: {fmt}")
