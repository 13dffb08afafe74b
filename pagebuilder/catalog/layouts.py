"""Static registry of the column layouts a group can adopt.

Every group copies a :class:`LayoutTemplate` in by value, so editing this table
never changes documents that were created earlier. Navbar layouts are tagged
once here with ``semantic_kind="navbar"``; reconciliation reads the tag instead
of sniffing ids or slot names.

Examples
--------
>>> from pagebuilder.catalog.layouts import get_layout
>>> get_layout("2col-50-50").slots
('left', 'right')
>>> get_layout("nav-brand-links-actions").is_navbar
True
>>> get_layout("missing") is None
True
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .models import NAVBAR_SLOTS, LayoutTemplate

DEFAULT_LAYOUT_ID = "1col"

_ALIGNMENTS = ("top", "center", "bottom")
_DIRECTIONS = ("row", "row-reverse")

LAYOUT_TEMPLATES: tuple[LayoutTemplate, ...] = (
    # 1 column
    LayoutTemplate("1col", "Centered", 1, "100", "center", "row", ("main",)),
    LayoutTemplate("1col-left", "Left Aligned", 1, "100", "top", "row", ("main",)),
    # 2 columns
    LayoutTemplate("2col-50-50", "Split", 2, "50-50", "center", "row", ("left", "right")),
    LayoutTemplate(
        "2col-50-50-reverse",
        "Split Reversed",
        2,
        "50-50",
        "center",
        "row-reverse",
        ("left", "right"),
    ),
    LayoutTemplate("2col-33-67", "Wide Right", 2, "33-67", "center", "row", ("left", "right")),
    LayoutTemplate("2col-67-33", "Wide Left", 2, "67-33", "center", "row", ("left", "right")),
    LayoutTemplate("2col-25-75", "Sidebar Left", 2, "25-75", "top", "row", ("left", "right")),
    LayoutTemplate("2col-75-25", "Sidebar Right", 2, "75-25", "top", "row", ("left", "right")),
    # 3 columns
    LayoutTemplate(
        "3col-equal", "Equal", 3, "33-33-33", "top", "row", ("left", "center", "right")
    ),
    LayoutTemplate(
        "3col-25-50-25",
        "Feature Center",
        3,
        "25-50-25",
        "top",
        "row",
        ("left", "center", "right"),
    ),
    LayoutTemplate(
        "3col-50-25-25", "Wide Left", 3, "50-25-25", "top", "row", ("left", "center", "right")
    ),
    LayoutTemplate(
        "3col-25-25-50", "Wide Right", 3, "25-25-50", "top", "row", ("left", "center", "right")
    ),
    # Navigation bars
    LayoutTemplate(
        "nav-brand-links-actions",
        "Brand, Links, Actions",
        3,
        "25-50-25",
        "center",
        "row",
        ("brand", "links", "actions"),
        "navbar",
    ),
    LayoutTemplate(
        "nav-brand-actions",
        "Brand and Actions",
        2,
        "50-50",
        "center",
        "row",
        ("brand", "actions"),
        "navbar",
    ),
    LayoutTemplate(
        "nav-links-brand-actions",
        "Centered Brand",
        3,
        "40-20-40",
        "center",
        "row",
        ("links", "brand", "actions"),
        "navbar",
    ),
)

_LAYOUTS_BY_ID: dict[str, LayoutTemplate] = {
    layout.id: layout for layout in LAYOUT_TEMPLATES
}


def get_layout(layout_id: object) -> LayoutTemplate | None:
    """Return the catalog layout registered under ``layout_id``, if any."""
    if not isinstance(layout_id, str):
        return None
    return _LAYOUTS_BY_ID.get(layout_id)


def get_layouts(layout_ids: cabc.Iterable[str]) -> list[LayoutTemplate]:
    """Return catalog layouts for ``layout_ids`` in catalog order."""
    wanted = set(layout_ids)
    return [layout for layout in LAYOUT_TEMPLATES if layout.id in wanted]


def default_layout() -> LayoutTemplate:
    """Return the layout used when nothing better can be resolved."""
    return _LAYOUTS_BY_ID[DEFAULT_LAYOUT_ID]


def is_valid_inline_layout(payload: object) -> bool:
    """Return True when ``payload`` is a structurally complete layout mapping.

    An inline layout must carry a string ``id``, a ``columns`` count between
    one and three, and a list of unique, non-empty string slot names whose
    length matches ``columns``.
    """
    match payload:
        case {"id": str() as layout_id, "columns": int() as columns, "slots": list() as slots}:
            pass
        case _:
            return False
    if not layout_id or isinstance(columns, bool) or not 1 <= columns <= 3:
        return False
    if len(slots) != columns:
        return False
    if not all(isinstance(slot, str) and slot for slot in slots):
        return False
    return len(set(slots)) == len(slots)


def layout_from_mapping(payload: cabc.Mapping[str, typ.Any]) -> LayoutTemplate:
    """Build a :class:`LayoutTemplate` from a validated inline mapping.

    Optional presentation fields fall back to safe defaults. The semantic kind
    is decided here, once, from the id prefix and slot names.
    """
    layout_id = str(payload["id"])
    slots = tuple(str(slot) for slot in payload["slots"])
    columns = int(payload["columns"])
    alignment = payload.get("alignment")
    direction = payload.get("direction")
    distribution = payload.get("distribution")
    is_navbar = layout_id.startswith("nav-") or any(slot in NAVBAR_SLOTS for slot in slots)
    return LayoutTemplate(
        id=layout_id,
        label=str(payload.get("label") or layout_id),
        columns=columns,
        distribution=str(distribution) if distribution else "-".join(["1"] * columns),
        alignment=alignment if alignment in _ALIGNMENTS else "top",
        direction=direction if direction in _DIRECTIONS else "row",
        slots=slots,
        semantic_kind="navbar" if is_navbar else "none",
    )


def layout_to_mapping(layout: LayoutTemplate) -> dict[str, typ.Any]:
    """Return the plain-data form of ``layout`` used in stored documents."""
    return {
        "id": layout.id,
        "label": layout.label,
        "columns": layout.columns,
        "distribution": layout.distribution,
        "alignment": layout.alignment,
        "direction": layout.direction,
        "slots": list(layout.slots),
    }


__all__ = [
    "DEFAULT_LAYOUT_ID",
    "LAYOUT_TEMPLATES",
    "default_layout",
    "get_layout",
    "get_layouts",
    "is_valid_inline_layout",
    "layout_from_mapping",
    "layout_to_mapping",
]
