"""Remap block placement when a group switches to a different layout.

Every layout change snapshots where flow blocks sat under the outgoing layout,
keyed by that layout's id, so switching back later replays the exact earlier
arrangement. When no snapshot exists for the target, blocks are placed by a
deterministic positional rule; navbar layouts place blocks by type instead.
Absolute blocks are never touched.

Typical usage goes through :meth:`pagebuilder.editor.EditorStore.update_group_layout`,
but the engine can be driven directly:

>>> from pagebuilder.document import build_default_groups
>>> from pagebuilder.reconcile import apply_layout_change
>>> group = build_default_groups("cta")[0]
>>> apply_layout_change(group, "2col-50-50")
True
>>> apply_layout_change(group, "no-such-layout")
False
"""

from __future__ import annotations

import copy
import logging
import typing as typ

from pagebuilder.catalog import get_layout
from pagebuilder.document.helpers import capture_slot_memory, normalize_block_order

if typ.TYPE_CHECKING:
    from pagebuilder.document.models import Block, Group, LayoutSlotMemory

logger = logging.getLogger(__name__)

# (rank, primary, secondary): remembered placements sort before fallbacks.
_SortKey = tuple[int, int, int]

_LINK_TYPES = frozenset({"list", "text"})


def classify_navbar_slot(block_type: str) -> str:
    """Return the navbar slot a block of ``block_type`` belongs in.

    >>> classify_navbar_slot("button")
    'actions'
    >>> classify_navbar_slot("list")
    'links'
    >>> classify_navbar_slot("image")
    'brand'
    """
    if block_type == "button":
        return "actions"
    if block_type in _LINK_TYPES:
        return "links"
    return "brand"


def apply_layout_change(group: Group, layout_id: str) -> bool:
    """Switch ``group`` to the catalog layout ``layout_id`` in place.

    Parameters
    ----------
    group : Group
        Group owning the blocks to remap. Its slot memories are updated.
    layout_id : str
        Catalog id of the target layout.

    Returns
    -------
    bool
        False when the layout id is unknown or already active (the group is
        left untouched), True otherwise.
    """
    target = get_layout(layout_id)
    if target is None:
        logger.debug("ignoring unknown layout id %r", layout_id)
        return False
    previous = group.layout
    if previous.id == target.id:
        return False
    old_slots = list(previous.slots)
    new_slots = list(target.slots)
    if old_slots == new_slots:
        group.layout = target
        return True

    normalize_block_order(group, old_slots)
    snapshot = capture_slot_memory(group)
    group.layout_slot_memories[previous.id] = snapshot
    if len(old_slots) > 1 and len(new_slots) == 1:
        group.layout_slot_memory = copy.deepcopy(snapshot)

    remembered = _remembered_placements(group, old_slots, new_slots, target.id)
    semantic = previous.is_navbar or target.is_navbar
    flow = group.flow_blocks()
    reading_index = _reading_positions(flow)

    placements: dict[str, list[tuple[_SortKey, Block]]] = {slot: [] for slot in new_slots}
    for block in flow:
        if block.id in remembered:
            slot, key = remembered[block.id]
        else:
            slot = _fallback_slot(block, old_slots, new_slots, reading_index, semantic=semantic)
            key = (1, old_slots.index(block.slot), block.order)
        placements[slot].append((key, block))

    for slot, entries in placements.items():
        entries.sort(key=lambda entry: entry[0])
        for order, (_key, block) in enumerate(entries):
            block.slot = slot
            block.order = order

    group.layout = target
    normalize_block_order(group)
    group.layout_slot_memories[target.id] = capture_slot_memory(group)
    return True


def _remembered_placements(
    group: Group, old_slots: list[str], new_slots: list[str], target_id: str
) -> dict[str, tuple[str, _SortKey]]:
    """Return placements replayed from memory, keyed by block id."""
    memory = group.layout_slot_memories.get(target_id)
    if memory is not None:
        return {
            block_id: (placement.slot, (0, 0, placement.order))
            for block_id, placement in memory.by_block_id.items()
            if placement.slot in new_slots
        }
    if len(old_slots) == 1 and len(new_slots) > 1 and group.layout_slot_memory is not None:
        return _project_memory(group.layout_slot_memory, new_slots)
    return {}


def _project_memory(
    memory: LayoutSlotMemory, new_slots: list[str]
) -> dict[str, tuple[str, _SortKey]]:
    """Map a memory taken under other slots onto ``new_slots`` by index."""
    projected: dict[str, tuple[str, _SortKey]] = {}
    last = len(new_slots) - 1
    for block_id, placement in memory.by_block_id.items():
        try:
            index = memory.source_slots.index(placement.slot)
        except ValueError:
            index = 0
        projected[block_id] = (new_slots[min(index, last)], (0, index, placement.order))
    return projected


def _reading_positions(flow: list[Block]) -> dict[str, int]:
    """Return each block's position within its slot in reading order."""
    positions: dict[str, int] = {}
    by_slot: dict[str, list[Block]] = {}
    for block in flow:
        by_slot.setdefault(block.slot, []).append(block)
    for members in by_slot.values():
        for index, block in enumerate(sorted(members, key=lambda item: item.order)):
            positions[block.id] = index
    return positions


def _fallback_slot(
    block: Block,
    old_slots: list[str],
    new_slots: list[str],
    reading_index: dict[str, int],
    *,
    semantic: bool,
) -> str:
    """Resolve a slot for a block no memory knows about."""
    if semantic:
        preferred = classify_navbar_slot(block.type)
        if preferred in new_slots:
            if block.type == "list" and preferred == "links":
                block.props["inline"] = True
            return preferred
    if len(old_slots) == 1:
        index = reading_index.get(block.id, 0)
    else:
        index = old_slots.index(block.slot)
    return new_slots[min(index, len(new_slots) - 1)]


__all__ = ["apply_layout_change", "classify_navbar_slot"]
