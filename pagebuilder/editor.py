"""Editor store exposing the mutation API over a page document.

:class:`EditorStore` owns the section list, the global style record, the
current selection, and the undo/redo journal. Every structural operation
(add, remove, duplicate, reorder, layout change) records a snapshot of the
pre-mutation sections before applying the change; prop and style edits are
coalesced per entity so a continuous edit produces one history entry.
Operations never raise for unknown ids or tags: they leave the document
untouched and report it through their return value.

Typical usage mirrors the editor UI:

>>> store = EditorStore()
>>> section_id = store.add_section("cta")
>>> group_id = store.sections[0].groups[0].id
>>> store.update_group_layout(section_id, group_id, "2col-50-50")
True
>>> store.undo()
True
>>> store.sections[0].groups[0].layout.id
'1col'
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import dataclasses as dc
import logging
import typing as typ

from ._constants import ABSOLUTE_BLOCK_DEFAULTS, POSITION_ABSOLUTE, POSITION_FLOW
from .catalog import get_block_type, get_layout, get_section_type
from .document import (
    GlobalStyle,
    Section,
    Selection,
    build_default_groups,
    build_empty_group,
    clone_block,
    clone_group,
    clone_section,
    forget_block,
    instantiate_block,
    new_id,
    next_order,
    normalize_block_order,
    slot_blocks,
)
from .history import HistoryJournal, StyleEditCoalescer
from .reconcile import apply_layout_change
from .settings import EditorSettings

if typ.TYPE_CHECKING:
    from .document import Block, Group
    from .history import BurstKey, Clock

logger = logging.getLogger(__name__)

_ABSOLUTE_ONLY_KEYS = ("positionX", "positionY", "zIndex", "scale")
_GLOBAL_STYLE_FIELDS = frozenset(field.name for field in dc.fields(GlobalStyle))


class EditorStore:
    """Single-editor, in-memory state for the page builder."""

    def __init__(
        self,
        sections: list[Section] | None = None,
        global_style: GlobalStyle | None = None,
        *,
        settings: EditorSettings | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialise the store.

        Parameters
        ----------
        sections : list[Section], optional
            Initial, already normalized, sections. Defaults to an empty page.
        global_style : GlobalStyle, optional
            Initial page-wide style. Defaults to :class:`GlobalStyle`.
        settings : EditorSettings, optional
            History cap and coalescing window; defaults to built-in values.
        clock : Callable[[], float], optional
            Time source for edit coalescing, injectable for tests.
        """
        resolved = settings or EditorSettings()
        self.sections: list[Section] = sections if sections is not None else []
        self.global_style = global_style or GlobalStyle()
        self.selection = Selection()
        self.journal: HistoryJournal[list[Section]] = HistoryJournal(
            limit=resolved.history_limit
        )
        self.coalescer = StyleEditCoalescer(resolved.coalesce_window, clock=clock)
        self.is_dirty = False

    def find_section(self, section_id: str | None) -> Section | None:
        """Return the section with ``section_id`` or None."""
        return next((section for section in self.sections if section.id == section_id), None)

    def find_group(self, section_id: str | None, group_id: str | None) -> Group | None:
        """Return the group ``group_id`` inside ``section_id`` or None."""
        section = self.find_section(section_id)
        return section.find_group(group_id) if section else None

    def find_block(
        self, section_id: str | None, group_id: str | None, block_id: str | None
    ) -> Block | None:
        """Return the block ``block_id`` inside the given group or None."""
        group = self.find_group(section_id, group_id)
        return group.find_block(block_id) if group else None

    def add_section(self, section_type: str, index: int | None = None) -> str | None:
        """Insert a section seeded from the registry and select it."""
        entry = get_section_type(section_type)
        if entry is None:
            logger.debug("refusing to add section of unknown type %r", section_type)
            return None
        section = Section(
            id=new_id(),
            type=section_type,
            groups=build_default_groups(section_type),
            style=copy.deepcopy(dict(entry.default_style)),
        )
        self._record()
        position = len(self.sections) if index is None else _clamp(index, 0, len(self.sections))
        self.sections.insert(position, section)
        self.select_section(section.id)
        self._touch()
        return section.id

    def remove_section(self, section_id: str) -> bool:
        """Delete a section, reselecting a neighbour if it was selected."""
        index = self._section_index(section_id)
        if index is None:
            return False
        self._record()
        del self.sections[index]
        if self.selection.section_id == section_id:
            neighbour = _neighbour(self.sections, index)
            self.select_section(neighbour.id if neighbour else None)
        self._touch()
        return True

    def duplicate_section(self, section_id: str) -> str | None:
        """Insert a deep copy with fresh ids after the original and select it."""
        index = self._section_index(section_id)
        if index is None:
            return None
        self._record()
        clone = clone_section(self.sections[index])
        self.sections.insert(index + 1, clone)
        self.select_section(clone.id)
        self._touch()
        return clone.id

    def reorder_sections(self, from_index: int, to_index: int) -> bool:
        """Move the section at ``from_index`` to ``to_index``."""
        if not _valid_move(len(self.sections), from_index, to_index):
            return False
        self._record()
        moved = self.sections.pop(from_index)
        self.sections.insert(to_index, moved)
        self._touch()
        return True

    def toggle_section_visibility(self, section_id: str) -> bool:
        """Flip whether a section is rendered on the page."""
        section = self.find_section(section_id)
        if section is None:
            return False
        self._record()
        section.is_visible = not section.is_visible
        self._touch()
        return True

    def update_section_style(self, section_id: str, style: cabc.Mapping[str, typ.Any]) -> bool:
        """Shallow-merge ``style`` into a section's style (coalesced)."""
        section = self.find_section(section_id)
        if section is None:
            return False
        self._record_coalesced(("section", section_id, "style"))
        section.style.update(style)
        self._touch()
        return True

    def add_group(
        self, section_id: str, layout_id: str | None = None, index: int | None = None
    ) -> str | None:
        """Insert an empty group into a section and select it."""
        section = self.find_section(section_id)
        if section is None:
            return None
        if layout_id is not None and not _allows_layout(section, layout_id):
            logger.debug("refusing to add group with layout %r to %s", layout_id, section.type)
            return None
        group = build_empty_group(section.type, layout_id=layout_id, order=len(section.groups))
        self._record()
        position = len(section.groups) if index is None else _clamp(index, 0, len(section.groups))
        section.groups.insert(position, group)
        _reindex_groups(section)
        self.select_group(section_id, group.id)
        self._touch()
        return group.id

    def remove_group(self, section_id: str, group_id: str) -> bool:
        """Delete a group; a section's last remaining group is never removed."""
        section = self.find_section(section_id)
        if section is None:
            return False
        index = next(
            (position for position, group in enumerate(section.groups) if group.id == group_id),
            None,
        )
        if index is None:
            return False
        if len(section.groups) <= 1:
            logger.debug("refusing to remove the last group of section %s", section_id)
            return False
        self._record()
        del section.groups[index]
        _reindex_groups(section)
        if self.selection.group_id == group_id:
            neighbour = _neighbour(section.groups, index)
            self.select_group(section_id, neighbour.id if neighbour else None)
        self._touch()
        return True

    def duplicate_group(self, section_id: str, group_id: str) -> str | None:
        """Insert a copy of a group after the original and select it."""
        section = self.find_section(section_id)
        group = section.find_group(group_id) if section else None
        if section is None or group is None:
            return None
        self._record()
        clone = clone_group(group)
        section.groups.insert(section.groups.index(group) + 1, clone)
        _reindex_groups(section)
        self.select_group(section_id, clone.id)
        self._touch()
        return clone.id

    def reorder_groups(self, section_id: str, from_index: int, to_index: int) -> bool:
        """Move a group within its section by list index."""
        section = self.find_section(section_id)
        if section is None or not _valid_move(len(section.groups), from_index, to_index):
            return False
        self._record()
        moved = section.groups.pop(from_index)
        section.groups.insert(to_index, moved)
        _reindex_groups(section)
        self._touch()
        return True

    def rename_group(self, section_id: str, group_id: str, label: str) -> bool:
        """Change a group's label (coalesced while typing)."""
        group = self.find_group(section_id, group_id)
        if group is None or not label.strip():
            return False
        self._record_coalesced(("group", section_id, group_id, "label"))
        group.label = label.strip()
        self._touch()
        return True

    def update_group_layout(self, section_id: str, group_id: str, layout_id: str) -> bool:
        """Switch a group's layout, remapping its flow blocks.

        Unknown layout ids, layouts the section type does not allow, and
        re-selecting the active layout are no-ops.
        """
        section = self.find_section(section_id)
        group = section.find_group(group_id) if section else None
        if section is None or group is None:
            return False
        if group.layout.id == layout_id:
            return False
        if not _allows_layout(section, layout_id):
            logger.debug(
                "refusing layout %r for %s section %s", layout_id, section.type, section_id
            )
            return False
        self._record()
        changed = apply_layout_change(group, layout_id)
        self._touch()
        return changed

    def update_group_style(
        self, section_id: str, group_id: str, style: cabc.Mapping[str, typ.Any]
    ) -> bool:
        """Shallow-merge ``style`` into a group's style (coalesced)."""
        group = self.find_group(section_id, group_id)
        if group is None:
            return False
        self._record_coalesced(("group", section_id, group_id, "style"))
        group.style.update(style)
        self._touch()
        return True

    def add_block(
        self,
        section_id: str,
        group_id: str,
        block_type: str,
        slot: str | None = None,
        *,
        add_as_absolute: bool = False,
    ) -> str | None:
        """Append a block of ``block_type`` to a slot and select it.

        Flow blocks land after the last block in the slot. Absolute blocks are
        seeded at the default free position instead. Types the section does
        not allow, and flow blocks beyond the section's per-slot cap, are
        refused.
        """
        section = self.find_section(section_id)
        group = section.find_group(group_id) if section else None
        if section is None or group is None or get_block_type(block_type) is None:
            return None
        entry = get_section_type(section.type)
        if entry is not None and block_type not in entry.allowed_block_types:
            logger.debug("%s sections do not accept %s blocks", section.type, block_type)
            return None
        target_slot = slot if slot in group.layout.slots else group.layout.slots[0]
        if (
            not add_as_absolute
            and entry is not None
            and entry.max_blocks_per_slot is not None
            and len(slot_blocks(group, target_slot)) >= entry.max_blocks_per_slot
        ):
            logger.debug("slot %s of group %s is full", target_slot, group_id)
            return None
        if add_as_absolute:
            order = sum(1 for block in group.blocks if block.is_absolute)
        else:
            order = next_order(group, target_slot)
        block = instantiate_block(block_type, slot=target_slot, order=order)
        if block is None:
            return None
        if add_as_absolute:
            block.style.update(ABSOLUTE_BLOCK_DEFAULTS)
        self._record()
        group.blocks.append(block)
        normalize_block_order(group)
        self.select_block(section_id, group_id, block.id)
        self._touch()
        return block.id

    def remove_block(self, section_id: str, group_id: str, block_id: str) -> bool:
        """Delete a block and drop it from the group's slot memories."""
        group = self.find_group(section_id, group_id)
        block = group.find_block(block_id) if group else None
        if group is None or block is None:
            return False
        siblings = [] if block.is_absolute else slot_blocks(group, block.slot)
        self._record()
        group.blocks.remove(block)
        forget_block(group, block_id)
        normalize_block_order(group)
        if self.selection.block_id == block_id:
            remaining = [sibling for sibling in siblings if sibling.id != block_id]
            neighbour = _neighbour(remaining, siblings.index(block)) if siblings else None
            if neighbour is not None:
                self.select_block(section_id, group_id, neighbour.id)
            else:
                self.select_group(section_id, group_id)
        self._touch()
        return True

    def duplicate_block(self, section_id: str, group_id: str, block_id: str) -> str | None:
        """Insert a copy right after the original in its slot and select it."""
        group = self.find_group(section_id, group_id)
        block = group.find_block(block_id) if group else None
        if group is None or block is None:
            return None
        self._record()
        clone = clone_block(block)
        if not block.is_absolute:
            for sibling in slot_blocks(group, block.slot):
                if sibling.order > block.order:
                    sibling.order += 1
            clone.order = block.order + 1
        group.blocks.insert(group.blocks.index(block) + 1, clone)
        normalize_block_order(group)
        self.select_block(section_id, group_id, clone.id)
        self._touch()
        return clone.id

    def reorder_blocks(
        self, section_id: str, group_id: str, slot: str, from_index: int, to_index: int
    ) -> bool:
        """Move a flow block within ``slot`` by position."""
        group = self.find_group(section_id, group_id)
        if group is None:
            return False
        members = slot_blocks(group, slot)
        if not _valid_move(len(members), from_index, to_index):
            return False
        self._record()
        moved = members.pop(from_index)
        members.insert(to_index, moved)
        for order, member in enumerate(members):
            member.order = order
        normalize_block_order(group)
        self._touch()
        return True

    def move_block(
        self, section_id: str, group_id: str, block_id: str, slot: str, index: int
    ) -> bool:
        """Move a flow block into ``slot`` at position ``index``."""
        group = self.find_group(section_id, group_id)
        block = group.find_block(block_id) if group else None
        if group is None or block is None or block.is_absolute:
            return False
        if slot not in group.layout.slots:
            return False
        source = slot_blocks(group, block.slot)
        if slot == block.slot and source.index(block) == _clamp(index, 0, len(source) - 1):
            return False
        self._record()
        source.remove(block)
        target = source if slot == block.slot else slot_blocks(group, slot)
        target.insert(_clamp(index, 0, len(target)), block)
        block.slot = slot
        for members in (source, target):
            for order, member in enumerate(members):
                member.order = order
        normalize_block_order(group)
        self._touch()
        return True

    def set_block_position_mode(
        self, section_id: str, group_id: str, block_id: str, mode: str
    ) -> bool:
        """Convert a block between flow and absolute positioning."""
        group = self.find_group(section_id, group_id)
        block = group.find_block(block_id) if group else None
        if group is None or block is None or not _switches_mode(block, mode):
            return False
        self._record()
        _convert_position(group, block, mode)
        self._touch()
        return True

    def update_block_prop(
        self, section_id: str, group_id: str, block_id: str, key: str, value: typ.Any
    ) -> bool:
        """Set one prop on a block (coalesced while typing)."""
        block = self.find_block(section_id, group_id, block_id)
        if block is None:
            return False
        self._record_coalesced(("block", section_id, group_id, block_id, "props"))
        block.props[key] = value
        self._touch()
        return True

    def update_block_style(
        self,
        section_id: str,
        group_id: str,
        block_id: str,
        style: cabc.Mapping[str, typ.Any],
    ) -> bool:
        """Shallow-merge ``style`` into a block's style (coalesced).

        A ``positionMode`` change is structural: the conversion and the
        remaining keys land in a single history entry that is never coalesced.
        """
        group = self.find_group(section_id, group_id)
        block = group.find_block(block_id) if group else None
        if group is None or block is None:
            return False
        changes = dict(style)
        mode = changes.pop("positionMode", None)
        if mode is not None and _switches_mode(block, mode):
            self._record()
            _convert_position(group, block, mode)
        elif not changes:
            return False
        else:
            self._record_coalesced(("block", section_id, group_id, block_id, "style"))
        block.style.update(changes)
        self._touch()
        return True

    def update_global_style(self, **changes: typ.Any) -> bool:
        """Replace page-wide style fields; not journaled."""
        unknown = set(changes) - _GLOBAL_STYLE_FIELDS
        if unknown:
            logger.debug("ignoring unknown global style keys: %s", ", ".join(sorted(unknown)))
        known = {key: value for key, value in changes.items() if key in _GLOBAL_STYLE_FIELDS}
        if not known:
            return False
        self.global_style = dc.replace(self.global_style, **known)
        self._touch()
        return True

    def select_section(self, section_id: str | None) -> bool:
        """Point the selection at a section (or nothing)."""
        if section_id is not None and self.find_section(section_id) is None:
            return False
        self.selection = Selection(section_id=section_id)
        return True

    def select_group(self, section_id: str, group_id: str | None) -> bool:
        """Point the selection at a group inside ``section_id``."""
        if self.find_section(section_id) is None:
            return False
        if group_id is not None and self.find_group(section_id, group_id) is None:
            return False
        self.selection = Selection(section_id=section_id, group_id=group_id)
        return True

    def select_block(self, section_id: str, group_id: str, block_id: str | None) -> bool:
        """Point the selection at a block inside the given group."""
        if self.find_group(section_id, group_id) is None:
            return False
        if block_id is not None and self.find_block(section_id, group_id, block_id) is None:
            return False
        self.selection = Selection(section_id=section_id, group_id=group_id, block_id=block_id)
        return True

    def undo(self) -> bool:
        """Restore the state before the latest journaled change."""
        previous = self.journal.undo(self.sections)
        if previous is None:
            return False
        self._install(previous)
        return True

    def redo(self) -> bool:
        """Re-apply the most recently undone change."""
        following = self.journal.redo(self.sections)
        if following is None:
            return False
        self._install(following)
        return True

    @property
    def can_undo(self) -> bool:
        return self.journal.history_depth > 0

    @property
    def can_redo(self) -> bool:
        return self.journal.future_depth > 0

    @property
    def history_depth(self) -> int:
        return self.journal.history_depth

    @property
    def future_depth(self) -> int:
        return self.journal.future_depth

    def load_document(
        self, sections: list[Section], global_style: GlobalStyle | None = None
    ) -> None:
        """Replace the whole document, forgetting history and open bursts."""
        self.sections = sections
        if global_style is not None:
            self.global_style = global_style
        self.journal.clear()
        self.coalescer.clear()
        self.selection.clear()
        self.is_dirty = False

    def mark_saved(self) -> None:
        """Record that the current document has been persisted."""
        self.is_dirty = False

    def _record(self) -> None:
        """Journal the current sections before a structural change."""
        self.journal.record(self.sections)
        self.coalescer.clear()

    def _record_coalesced(self, key: BurstKey) -> None:
        if self.coalescer.should_record(key):
            self.journal.record(self.sections)

    def _install(self, sections: list[Section]) -> None:
        self.sections = sections
        self.coalescer.clear()
        self._repair_selection()
        self._touch()

    def _repair_selection(self) -> None:
        """Drop selection levels that no longer exist in the document."""
        current = self.selection
        section = self.find_section(current.section_id)
        if section is None:
            self.selection = Selection()
            return
        group = section.find_group(current.group_id)
        if group is None:
            self.selection = Selection(section_id=section.id)
            return
        block_id = current.block_id if group.find_block(current.block_id) else None
        self.selection = Selection(section_id=section.id, group_id=group.id, block_id=block_id)

    def _section_index(self, section_id: str) -> int | None:
        return next(
            (index for index, section in enumerate(self.sections) if section.id == section_id),
            None,
        )

    def _touch(self) -> None:
        self.is_dirty = True


def _reindex_groups(section: Section) -> None:
    """Make list position the source of truth for group ``order``."""
    for order, group in enumerate(section.groups):
        group.order = order


_Item = typ.TypeVar("_Item")


def _neighbour(items: list[_Item], removed_index: int) -> _Item | None:
    """Return the previous sibling of a removed item, else the next one."""
    if not items:
        return None
    return items[removed_index - 1] if removed_index > 0 else items[0]


def _allows_layout(section: Section, layout_id: str) -> bool:
    entry = get_section_type(section.type)
    if entry is None or get_layout(layout_id) is None:
        return False
    return layout_id in entry.allowed_layouts


def _switches_mode(block: Block, mode: str) -> bool:
    if mode not in (POSITION_FLOW, POSITION_ABSOLUTE):
        return False
    return block.is_absolute != (mode == POSITION_ABSOLUTE)


def _convert_position(group: Group, block: Block, mode: str) -> None:
    """Move ``block`` between flow and absolute positioning in place.

    Entering absolute mode seeds the free-position defaults without
    overwriting existing values. Leaving it drops those keys and appends the
    block to the end of its slot.
    """
    if mode == POSITION_ABSOLUTE:
        for key, value in ABSOLUTE_BLOCK_DEFAULTS.items():
            block.style.setdefault(key, value)
        block.style["positionMode"] = POSITION_ABSOLUTE
    else:
        for key in _ABSOLUTE_ONLY_KEYS:
            block.style.pop(key, None)
        block.style["positionMode"] = POSITION_FLOW
        if block.slot not in group.layout.slots:
            block.slot = group.layout.slots[0]
        block.order = next_order(group, block.slot)
    normalize_block_order(group)


def _valid_move(size: int, from_index: int, to_index: int) -> bool:
    return 0 <= from_index < size and 0 <= to_index < size and from_index != to_index


def _clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))


__all__ = ["EditorStore"]
