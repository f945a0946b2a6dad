"""Widget configuration loaded from the environment or a YAML file."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from attrs import Attribute, define, evolve, field, fields
from attrs.validators import instance_of

# Prefix shared by all environment variables read by ``from_env``.
ENV_PREFIX = "SIDENOTES_"


def _not_empty(instance: Any, attribute: Attribute, value: str) -> None:
    if not value.strip():
        raise ValueError(f"{attribute.name} must not be empty")


def _single_class(instance: Any, attribute: Attribute, value: str) -> None:
    if len(value.split()) != 1:
        raise ValueError(
            f"{attribute.name} must be a single CSS class, got {value!r}"
        )


def _text_option(default: str) -> Any:  # noqa: ANN401
    return field(default=default, validator=[instance_of(str), _not_empty])


@define(frozen=True, slots=True)
class WidgetConfig:
    """Markup conventions shared with the page stylesheet.

    Attributes:
        marker_class: CSS class flagging an element as a side note. The
            presentation classes are derived from it.
        avatar_src: Image shown at the start of an expanded note.
        avatar_alt: Alternative text of the avatar image.
        hide_label: Label of the control collapsing an expanded note.
        note_label: Label shown in place of a collapsed note.
    """

    marker_class: str = field(
        default="sn", validator=[instance_of(str), _not_empty, _single_class]
    )
    avatar_src: str = _text_option("/img/avatar.jpg")
    avatar_alt: str = _text_option("avatar")
    hide_label: str = _text_option("[hide]")
    note_label: str = _text_option("[note]")

    @property
    def visible_class(self) -> str:
        return f"{self.marker_class}--visible"

    @property
    def expanded_class(self) -> str:
        return f"{self.marker_class}--expanded"

    @property
    def collapsed_class(self) -> str:
        return f"{self.marker_class}--collapsed"

    @property
    def avatar_class(self) -> str:
        return f"{self.marker_class}-avatar"

    @property
    def toggle_class(self) -> str:
        return f"{self.marker_class}-toggle"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> WidgetConfig:
        """Build a configuration from ``SIDENOTES_*`` variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            Configuration with defaults for unset variables.
        """

        environ = os.environ if environ is None else environ

        # Only pass the values that are actually set so defaults apply.
        values = {}
        for attribute in fields(cls):
            key = ENV_PREFIX + attribute.name.upper()
            if key in environ:
                values[attribute.name] = environ[key]

        return cls(**values)


def load_config(path: Path, base: WidgetConfig | None = None) -> WidgetConfig:
    """Read configuration overrides from a YAML mapping.

    Args:
        path: Location of the YAML file.
        base: Configuration the file overrides. Defaults to the one built
            from the environment.

    Returns:
        The merged configuration.

    Throws:
        ValueError: If the file is not a mapping, names unknown options or
            holds invalid values.
    """

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: configuration must be a mapping")

    known = {attribute.name for attribute in fields(WidgetConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"{path}: unknown options {', '.join(unknown)}")

    if base is None:
        base = WidgetConfig.from_env()

    # Non-string values are rejected by the validators with a TypeError.
    try:
        return evolve(base, **data)
    except TypeError as exc:
        raise ValueError(f"{path}: {exc}") from exc
