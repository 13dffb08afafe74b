"""Utility helpers that keep the document tree well formed.

The normalization passes here are the only place slot/order and group order
values are rewritten; every structural mutation finishes by calling one of
them so the dense-ordering invariants never depend on the caller.
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import logging
import secrets
import string
import typing as typ

from pagebuilder._constants import ID_LENGTH
from pagebuilder.catalog import get_block_type

from .models import Block, Group, LayoutSlotMemory, Section, SlotPlacement

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_letters + string.digits + "_-"


def new_id() -> str:
    """Return a fresh random identifier for a section, group or block."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(ID_LENGTH))


def normalize_block_order(group: Group, slots: cabc.Sequence[str] | None = None) -> None:
    """Rewrite flow block slots and orders so each slot is dense from zero.

    Parameters
    ----------
    group : Group
        Group whose blocks are normalized in place.
    slots : Sequence[str], optional
        Slot set to normalize against; defaults to the group's current layout.

    Notes
    -----
    Flow blocks whose slot is not part of ``slots`` move to the first slot,
    after the blocks already there. Absolute blocks are left untouched.
    """
    slot_names = list(group.layout.slots if slots is None else slots)
    if not slot_names:
        return
    buckets: dict[str, list[tuple[int, int, int, Block]]] = {
        slot: [] for slot in slot_names
    }
    for index, block in enumerate(group.blocks):
        if block.is_absolute:
            continue
        if block.slot in buckets:
            buckets[block.slot].append((0, block.order, index, block))
        else:
            logger.debug("moving block %s out of unknown slot %r", block.id, block.slot)
            buckets[slot_names[0]].append((1, block.order, index, block))
    for slot, entries in buckets.items():
        entries.sort(key=lambda entry: entry[:3])
        for order, (_rank, _old, _index, block) in enumerate(entries):
            block.slot = slot
            block.order = order


def normalize_group_order(section: Section) -> None:
    """Rewrite group ``order`` values into a dense ``0..n-1`` sequence.

    The ``groups`` list itself is re-sorted so list position and ``order``
    agree.
    """
    section.groups.sort(key=lambda group: group.order)
    for order, group in enumerate(section.groups):
        group.order = order


def slot_blocks(group: Group, slot: str) -> list[Block]:
    """Return the flow blocks of ``slot`` in their current order."""
    members = [block for block in group.blocks if not block.is_absolute and block.slot == slot]
    return sorted(members, key=lambda block: block.order)


def next_order(group: Group, slot: str) -> int:
    """Return ``max(order) + 1`` for the flow blocks in ``slot``."""
    orders = [block.order for block in slot_blocks(group, slot)]
    return max(orders) + 1 if orders else 0


def capture_slot_memory(group: Group) -> LayoutSlotMemory:
    """Snapshot where every flow block currently sits."""
    return LayoutSlotMemory(
        source_slots=list(group.layout.slots),
        by_block_id={
            block.id: SlotPlacement(slot=block.slot, order=block.order)
            for block in group.flow_blocks()
        },
    )


def forget_block(group: Group, block_id: str) -> None:
    """Drop ``block_id`` from every slot memory the group keeps."""
    memories = list(group.layout_slot_memories.values())
    if group.layout_slot_memory is not None:
        memories.append(group.layout_slot_memory)
    for memory in memories:
        memory.by_block_id.pop(block_id, None)


def instantiate_block(
    block_type: str,
    *,
    slot: str,
    order: int,
    props: cabc.Mapping[str, typ.Any] | None = None,
    style: cabc.Mapping[str, typ.Any] | None = None,
) -> Block | None:
    """Create a block of ``block_type`` from registry defaults.

    Returns None when the type tag is not registered. Seed overrides are
    merged over the registry defaults; both are deep-copied so instances never
    share mutable values with the catalog.
    """
    entry = get_block_type(block_type)
    if entry is None:
        return None
    merged_props = copy.deepcopy(dict(entry.default_props))
    merged_props.update(copy.deepcopy(dict(props or {})))
    merged_style = copy.deepcopy(dict(entry.default_style))
    merged_style.update(copy.deepcopy(dict(style or {})))
    return Block(
        id=new_id(),
        type=block_type,
        slot=slot,
        order=order,
        props=merged_props,
        style=merged_style,
    )


def clone_group(group: Group) -> Group:
    """Deep-copy ``group`` giving it and all its blocks fresh ids.

    Slot memories are re-keyed to the new block ids so layout toggles on the
    copy behave like they would on the original.
    """
    clone = copy.deepcopy(group)
    clone.id = new_id()
    renamed: dict[str, str] = {}
    for block in clone.blocks:
        fresh = new_id()
        renamed[block.id] = fresh
        block.id = fresh
    memories = list(clone.layout_slot_memories.values())
    if clone.layout_slot_memory is not None:
        memories.append(clone.layout_slot_memory)
    for memory in memories:
        memory.by_block_id = {
            renamed[block_id]: placement
            for block_id, placement in memory.by_block_id.items()
            if block_id in renamed
        }
    return clone


def clone_block(block: Block) -> Block:
    """Deep-copy ``block`` under a fresh id."""
    clone = copy.deepcopy(block)
    clone.id = new_id()
    return clone


def clone_section(section: Section) -> Section:
    """Deep-copy ``section`` giving every nested entity a fresh id."""
    return Section(
        id=new_id(),
        type=section.type,
        groups=[clone_group(group) for group in section.groups],
        style=copy.deepcopy(section.style),
        is_visible=section.is_visible,
    )


__all__ = [
    "capture_slot_memory",
    "clone_block",
    "clone_group",
    "clone_section",
    "forget_block",
    "instantiate_block",
    "new_id",
    "next_order",
    "normalize_block_order",
    "normalize_group_order",
    "slot_blocks",
]
