"""In-memory page document: sections, groups and blocks.

This subpackage holds the dataclasses that make up an editable page, the
normalization passes that keep group and block ordering dense, and the
construction paths that produce well-formed documents either from catalog
seeds (:func:`build_default_groups`) or from untrusted stored data
(:func:`normalize_incoming_sections`).

Examples
--------
>>> from pagebuilder.document import normalize_incoming_sections
>>> sections = normalize_incoming_sections([{"type": "hero"}])
>>> len(sections[0].groups) >= 1
True
"""

from .helpers import (
    capture_slot_memory,
    clone_block,
    clone_group,
    clone_section,
    forget_block,
    instantiate_block,
    new_id,
    next_order,
    normalize_block_order,
    normalize_group_order,
    slot_blocks,
)
from .loader import (
    build_default_groups,
    build_empty_group,
    normalize_global_style,
    normalize_incoming_sections,
)
from .models import (
    Block,
    GlobalStyle,
    Group,
    LayoutSlotMemory,
    Section,
    Selection,
    SlotPlacement,
)

__all__ = [
    "Block",
    "GlobalStyle",
    "Group",
    "LayoutSlotMemory",
    "Section",
    "Selection",
    "SlotPlacement",
    "build_default_groups",
    "build_empty_group",
    "capture_slot_memory",
    "clone_block",
    "clone_group",
    "clone_section",
    "forget_block",
    "instantiate_block",
    "new_id",
    "next_order",
    "normalize_block_order",
    "normalize_global_style",
    "normalize_group_order",
    "normalize_incoming_sections",
    "slot_blocks",
]
