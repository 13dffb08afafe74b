"""Cyclopts CLI for inspecting and rewriting stored page documents.

The ``pagebuilder`` console script exposes the editing engine to shell
pipelines. It lists catalog layouts, re-normalizes documents written by older
editor versions, switches a group's layout with the same reconciliation the
editor uses, and prints a document outline. Every option can also be
supplied through ``PAGEBUILDER_*`` environment variables.

Examples
--------
List the layouts a hero section may use:

>>> from pagebuilder.cli import app
>>> app.run(["layouts", "--section-type", "hero"])  # doctest: +SKIP

Switch a group to three columns in place:

>>> app.run(
...     ["relayout", "--document", "page.json", "--section", "s1",
...      "--group", "g1", "--layout", "3col-equal"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import os
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .catalog import LAYOUT_TEMPLATES, get_layout, get_layouts, get_section_type
from .editor import EditorStore
from .persistence import load_document, save_document
from .settings import load_settings

if typ.TYPE_CHECKING:
    from .document import Group
    from .persistence import LoadedDocument

app = App(name="pagebuilder", config=cyclopts.config.Env("PAGEBUILDER_", command=False))  # type: ignore[unknown-argument]


def _display_path(path: Path) -> str:
    """Show ``path`` relative to the working directory when it lives below it."""
    resolved = path.resolve()
    cwd = Path.cwd().resolve()
    return str(resolved.relative_to(cwd)) if resolved.is_relative_to(cwd) else str(path)


def _resolve_document_path(document: Path | None) -> Path:
    return document if document is not None else load_settings().document_path


def _read_document(path: Path) -> LoadedDocument:
    loaded = load_document(path)
    if loaded is None:
        msg = f"No usable page document at {_display_path(path)}"
        raise ValueError(msg)
    return loaded


def _describe_group(group: Group) -> list[str]:
    lines = [f"  group {group.id} '{group.label}' layout={group.layout.id}"]
    for slot in group.layout.slots:
        members = sorted(
            (block for block in group.flow_blocks() if block.slot == slot),
            key=lambda block: block.order,
        )
        names = ", ".join(f"{block.type}#{block.id}" for block in members) or "-"
        lines.append(f"    [{slot}] {names}")
    floating = [block for block in group.blocks if block.is_absolute]
    if floating:
        names = ", ".join(f"{block.type}#{block.id}" for block in floating)
        lines.append(f"    (absolute) {names}")
    return lines


@app.command(help="List catalog layouts, optionally those a section type allows.")
def layouts(
    *,
    section_type: typ.Annotated[
        str | None,
        Parameter(help="Only show layouts allowed for this section type"),
    ] = None,
) -> None:
    """Print one line per layout: id, column count, and slot names.

    Raises
    ------
    ValueError
        If ``section_type`` is not a registered section tag.
    """
    if section_type is None:
        selected = list(LAYOUT_TEMPLATES)
    else:
        entry = get_section_type(section_type)
        if entry is None:
            msg = f"Unknown section type: {section_type}"
            raise ValueError(msg)
        selected = get_layouts(entry.allowed_layouts)
    for layout in selected:
        print(f"{layout.id}\t{layout.columns}\t{', '.join(layout.slots)}")


@app.command(help="Re-normalize a stored document and write it back out.")
def normalize(
    *,
    source: typ.Annotated[Path, Parameter(help="Document to read (.json or .yaml)")],
    output: typ.Annotated[
        Path | None,
        Parameter(help="Destination; defaults to overwriting the source"),
    ] = None,
) -> None:
    """Upgrade legacy shapes, drop unknown types, and densify orders.

    Raises
    ------
    ValueError
        If ``source`` is missing, unparsable, or a discarded legacy document.
    """
    loaded = _read_document(source)
    written = save_document(output or source, loaded.sections, loaded.global_style)
    print(f"wrote {_display_path(written)}")


@app.command(help="Switch a group to another layout, remapping its blocks.")
def relayout(
    *,
    section: typ.Annotated[str, Parameter(help="Section id")],
    group: typ.Annotated[str, Parameter(help="Group id")],
    layout: typ.Annotated[str, Parameter(help="Target layout id")],
    document: typ.Annotated[
        Path | None,
        Parameter(help="Document path; defaults to the configured document_path"),
    ] = None,
) -> None:
    """Apply a layout change and save the document in place.

    Raises
    ------
    ValueError
        If the document, section, group, or layout cannot be found.
    """
    path = _resolve_document_path(document)
    loaded = _read_document(path)
    store = EditorStore(loaded.sections, loaded.global_style, settings=load_settings())
    target = store.find_group(section, group)
    if target is None:
        msg = f"No group {group} in section {section}"
        raise ValueError(msg)
    if get_layout(layout) is None:
        msg = f"Unknown layout: {layout}"
        raise ValueError(msg)
    owner = store.find_section(section)
    entry = get_section_type(owner.type) if owner else None
    if owner is not None and entry is not None and layout not in entry.allowed_layouts:
        msg = f"Layout {layout} is not allowed in {owner.type} sections"
        raise ValueError(msg)
    if not store.update_group_layout(section, group, layout):
        print(f"group {group} already uses {layout}")
        return
    save_document(path, store.sections, store.global_style)
    store.mark_saved()
    for line in _describe_group(target):
        print(line)
    print(f"wrote {_display_path(path)}")


@app.command(help="Print an outline of a stored document.")
def inspect(
    *,
    document: typ.Annotated[
        Path | None,
        Parameter(help="Document path; defaults to the configured document_path"),
    ] = None,
) -> None:
    """Print sections, groups, and the blocks in each slot.

    Raises
    ------
    ValueError
        If the document is missing or unusable.
    """
    loaded = _read_document(_resolve_document_path(document))
    style = loaded.global_style
    print(f"style font={style.font_family} primary={style.primary_color} radius={style.border_radius}")
    for section in loaded.sections:
        hidden = "" if section.is_visible else " (hidden)"
        print(f"section {section.id} {section.type}{hidden}")
        for item in section.sorted_groups():
            for line in _describe_group(item):
                print(line)


def main() -> None:
    """Invoke the Cyclopts application behind the ``pagebuilder`` command.

    The log level comes from ``PAGEBUILDER_LOG_LEVEL`` (default ``WARNING``).
    """
    logging.basicConfig(level=os.getenv("PAGEBUILDER_LOG_LEVEL", "WARNING").upper())
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
