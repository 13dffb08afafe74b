"""Typed dataclasses describing the static editor catalogs."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

SemanticKind = typ.Literal["none", "navbar"]
Alignment = typ.Literal["top", "center", "bottom"]
Direction = typ.Literal["row", "row-reverse"]

NAVBAR_SLOTS = frozenset({"brand", "links", "actions"})


@dc.dataclass(slots=True, frozen=True)
class LayoutTemplate:
    """Column arrangement a group copies in by value.

    Attributes
    ----------
    id : str
        Catalog identifier, for example ``"2col-50-50"``.
    label : str
        Human-friendly name shown in the layout picker.
    columns : int
        Number of columns (1, 2 or 3).
    distribution : str
        Column weights joined by dashes, for example ``"33-67"``.
    alignment : str
        Vertical alignment of the columns.
    direction : str
        ``"row"`` or ``"row-reverse"``.
    slots : tuple[str, ...]
        Slot names in reading order.
    semantic_kind : str
        ``"navbar"`` when slots carry brand/links/actions meaning.
    """

    id: str
    label: str
    columns: int
    distribution: str
    alignment: Alignment
    direction: Direction
    slots: tuple[str, ...]
    semantic_kind: SemanticKind = "none"

    @property
    def is_navbar(self) -> bool:
        """Return True when blocks are placed by type rather than position."""
        return self.semantic_kind == "navbar"


@dc.dataclass(slots=True, frozen=True)
class FieldOption:
    """Choice offered by a select-style control."""

    label: str
    value: str


@dc.dataclass(slots=True, frozen=True)
class EditableField:
    """Descriptor for a prop or style key the settings panel can edit."""

    key: str
    label: str
    control: str
    options: tuple[FieldOption, ...] = ()
    minimum: float | None = None
    maximum: float | None = None
    step: float | None = None


@dc.dataclass(slots=True, frozen=True)
class BlockTypeEntry:
    """Registry entry for a block type tag."""

    label: str
    icon: str
    category: str
    default_props: cabc.Mapping[str, typ.Any]
    default_style: cabc.Mapping[str, typ.Any]
    editable_props: tuple[EditableField, ...] = ()
    editable_styles: tuple[EditableField, ...] = ()
    inline_editable: bool = False


@dc.dataclass(slots=True, frozen=True)
class BlockSeed:
    """Block blueprint used when a section type is instantiated."""

    type: str
    slot: str
    order: int = 0
    props: cabc.Mapping[str, typ.Any] = dc.field(default_factory=dict)
    style: cabc.Mapping[str, typ.Any] = dc.field(default_factory=dict)


@dc.dataclass(slots=True, frozen=True)
class GroupSeed:
    """Group blueprint used when a section type is instantiated."""

    label: str
    layout_id: str
    blocks: tuple[BlockSeed, ...] = ()
    style: cabc.Mapping[str, typ.Any] = dc.field(default_factory=dict)


@dc.dataclass(slots=True, frozen=True)
class SectionTypeEntry:
    """Registry entry for a section type tag."""

    label: str
    icon: str
    description: str
    allowed_layouts: tuple[str, ...]
    default_layout_id: str
    default_style: cabc.Mapping[str, typ.Any]
    allowed_block_types: tuple[str, ...]
    default_groups: tuple[GroupSeed, ...]
    max_blocks_per_slot: int | None = None


__all__ = [
    "NAVBAR_SLOTS",
    "Alignment",
    "BlockSeed",
    "BlockTypeEntry",
    "Direction",
    "EditableField",
    "FieldOption",
    "GroupSeed",
    "LayoutTemplate",
    "SectionTypeEntry",
    "SemanticKind",
]
