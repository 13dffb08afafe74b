"""Load and persist editor settings from a TOML file.

Settings live in ``~/.config/pagebuilder/config.toml`` unless the
``PAGEBUILDER_CONFIG_FILE`` environment variable points elsewhere. Only the
``[editor]`` table is read:

.. code-block:: toml

    [editor]
    history_limit = 50
    coalesce_window = 0.4
    document_path = "page.json"

A missing file yields the defaults. Writing goes through tomlkit so comments
and unrelated tables survive a round trip.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import os
import typing as typ
from pathlib import Path

import tomlkit
import tomlkit.exceptions
import tomlkit.items

from ._constants import COALESCE_WINDOW_SECONDS, HISTORY_LIMIT

DEFAULT_SETTINGS_PATH = Path(
    os.getenv(
        "PAGEBUILDER_CONFIG_FILE",
        Path.home() / ".config" / "pagebuilder" / "config.toml",
    )
)
DEFAULT_DOCUMENT_PATH = Path("page.json")


class SettingsError(ValueError):
    """Raised when the settings file holds invalid values."""


@dc.dataclass(slots=True)
class EditorSettings:
    """Tunables for the editing engine."""

    history_limit: int = HISTORY_LIMIT
    coalesce_window: float = COALESCE_WINDOW_SECONDS
    document_path: Path = DEFAULT_DOCUMENT_PATH

    @classmethod
    def from_mapping(
        cls, data: cabc.Mapping[str, typ.Any], *, path: Path | None = None
    ) -> EditorSettings:
        """Build settings from an ``[editor]`` table, validating each value."""
        location = f" in {path}" if path else ""
        base = cls()
        history_limit = data.get("history_limit", base.history_limit)
        if isinstance(history_limit, bool) or not isinstance(history_limit, int) or history_limit < 1:
            msg = f"history_limit must be a positive integer{location}"
            raise SettingsError(msg)
        coalesce_window = data.get("coalesce_window", base.coalesce_window)
        if isinstance(coalesce_window, bool) or not isinstance(coalesce_window, (int, float)):
            msg = f"coalesce_window must be a number of seconds{location}"
            raise SettingsError(msg)
        if coalesce_window < 0:
            msg = f"coalesce_window cannot be negative{location}"
            raise SettingsError(msg)
        document_path = data.get("document_path", str(base.document_path))
        if not isinstance(document_path, str) or not document_path.strip():
            msg = f"document_path must be a non-empty string{location}"
            raise SettingsError(msg)
        return cls(
            history_limit=int(history_limit),
            coalesce_window=float(coalesce_window),
            document_path=Path(document_path),
        )


def load_settings(path: Path = DEFAULT_SETTINGS_PATH) -> EditorSettings:
    """Return settings stored at ``path``, or defaults when it is absent.

    Raises
    ------
    SettingsError
        If the file cannot be parsed or holds invalid values.
    """
    if not path.exists():
        return EditorSettings()
    try:
        document = tomlkit.parse(path.read_text(encoding="utf-8"))
    except tomlkit.exceptions.ParseError as exc:
        msg = f"Unable to parse settings TOML at {path}"
        raise SettingsError(msg) from exc
    table = document.get("editor")
    match table:
        case None:
            data: dict[str, typ.Any] = {}
        case tomlkit.items.Table():
            data = table.unwrap()
        case _:
            msg = f"[editor] must be a table in {path}"
            raise SettingsError(msg)
    return EditorSettings.from_mapping(data, path=path)


def save_settings(settings: EditorSettings, *, path: Path = DEFAULT_SETTINGS_PATH) -> None:
    """Write ``settings`` into the ``[editor]`` table, preserving the rest."""
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        document = tomlkit.parse(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        document = tomlkit.document()
    except tomlkit.exceptions.ParseError as exc:
        msg = f"Unable to parse settings TOML at {path}"
        raise SettingsError(msg) from exc

    table = document.get("editor")
    if not isinstance(table, tomlkit.items.Table):
        table = tomlkit.table()
    table["history_limit"] = settings.history_limit
    table["coalesce_window"] = settings.coalesce_window
    table["document_path"] = str(settings.document_path)
    document["editor"] = table
    path.write_text(tomlkit.dumps(document), encoding="utf-8")


__all__ = [
    "DEFAULT_DOCUMENT_PATH",
    "DEFAULT_SETTINGS_PATH",
    "EditorSettings",
    "SettingsError",
    "load_settings",
    "save_settings",
]
