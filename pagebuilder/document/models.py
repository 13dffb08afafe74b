"""Typed dataclasses describing the in-memory page document."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from pagebuilder._constants import POSITION_ABSOLUTE

if typ.TYPE_CHECKING:
    from pagebuilder.catalog.models import LayoutTemplate


@dc.dataclass(slots=True)
class SlotPlacement:
    """Where one flow block sat under a particular layout."""

    slot: str
    order: int


@dc.dataclass(slots=True)
class LayoutSlotMemory:
    """Snapshot of every flow block's placement under one layout.

    Attributes
    ----------
    source_slots : list[str]
        Slot names of the layout the snapshot was taken under.
    by_block_id : dict[str, SlotPlacement]
        Placement per block id.
    """

    source_slots: list[str]
    by_block_id: dict[str, SlotPlacement] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class Block:
    """A single content element placed inside a group."""

    id: str
    type: str
    slot: str
    order: int
    props: dict[str, typ.Any] = dc.field(default_factory=dict)
    style: dict[str, typ.Any] = dc.field(default_factory=dict)

    @property
    def is_absolute(self) -> bool:
        """Return True when the block floats free of slot/order bookkeeping."""
        return self.style.get("positionMode") == POSITION_ABSOLUTE


@dc.dataclass(slots=True)
class Group:
    """Layout container arranging blocks into the slots of its layout."""

    id: str
    label: str
    order: int
    layout: LayoutTemplate
    blocks: list[Block] = dc.field(default_factory=list)
    style: dict[str, typ.Any] = dc.field(default_factory=dict)
    layout_slot_memory: LayoutSlotMemory | None = None
    layout_slot_memories: dict[str, LayoutSlotMemory] = dc.field(default_factory=dict)

    def find_block(self, block_id: str | None) -> Block | None:
        """Return the block with ``block_id`` or None."""
        return next((block for block in self.blocks if block.id == block_id), None)

    def flow_blocks(self) -> list[Block]:
        """Return blocks that take part in slot/order normalization."""
        return [block for block in self.blocks if not block.is_absolute]


@dc.dataclass(slots=True)
class Section:
    """Top-level page unit owning an ordered list of groups."""

    id: str
    type: str
    groups: list[Group] = dc.field(default_factory=list)
    style: dict[str, typ.Any] = dc.field(default_factory=dict)
    is_visible: bool = True

    def find_group(self, group_id: str | None) -> Group | None:
        """Return the group with ``group_id`` or None."""
        return next((group for group in self.groups if group.id == group_id), None)

    def sorted_groups(self) -> list[Group]:
        """Return groups ordered by their ``order`` field."""
        return sorted(self.groups, key=lambda group: group.order)


@dc.dataclass(slots=True)
class GlobalStyle:
    """Page-wide typography and colour settings."""

    font_family: str = "Inter"
    primary_color: str = "#00e5a0"
    border_radius: str = "md"


@dc.dataclass(slots=True)
class Selection:
    """Ids of the entities the editor currently points at."""

    section_id: str | None = None
    group_id: str | None = None
    block_id: str | None = None

    def clear(self) -> None:
        """Point at nothing."""
        self.section_id = None
        self.group_id = None
        self.block_id = None


__all__ = [
    "Block",
    "GlobalStyle",
    "Group",
    "LayoutSlotMemory",
    "Section",
    "Selection",
    "SlotPlacement",
]
