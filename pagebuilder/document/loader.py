"""Build well-formed documents from catalog seeds or untrusted input."""

from __future__ import annotations

import collections.abc as cabc
import copy
import logging
import typing as typ

from pagebuilder.catalog import (
    default_layout,
    get_block_type,
    get_layout,
    get_section_type,
    is_valid_inline_layout,
    layout_from_mapping,
)

from .helpers import instantiate_block, new_id, normalize_block_order, normalize_group_order
from .models import (
    Block,
    GlobalStyle,
    Group,
    LayoutSlotMemory,
    Section,
    SlotPlacement,
)

if typ.TYPE_CHECKING:
    from pagebuilder.catalog import LayoutTemplate, SectionTypeEntry

logger = logging.getLogger(__name__)

_BORDER_RADII = ("none", "sm", "md", "lg", "full")


def build_default_groups(section_type: str) -> list[Group]:
    """Instantiate the seed groups registered for ``section_type``.

    Parameters
    ----------
    section_type : str
        Section type tag from the section registry.

    Returns
    -------
    list[Group]
        Freshly identified groups with dense ``order`` values, or an empty
        list when the tag is unknown.

    Examples
    --------
    >>> groups = build_default_groups("cta")
    >>> [block.type for block in groups[0].blocks]
    ['heading', 'text', 'button']
    >>> build_default_groups("cta")[0].id != groups[0].id
    True
    """
    entry = get_section_type(section_type)
    if entry is None:
        return []
    groups: list[Group] = []
    for order, seed in enumerate(entry.default_groups):
        layout = get_layout(seed.layout_id) or _section_default_layout(entry)
        blocks: list[Block] = []
        for block_seed in seed.blocks:
            block = instantiate_block(
                block_seed.type,
                slot=block_seed.slot,
                order=block_seed.order,
                props=block_seed.props,
                style=block_seed.style,
            )
            if block is not None:
                blocks.append(block)
        group = Group(
            id=new_id(),
            label=seed.label,
            order=order,
            layout=layout,
            blocks=blocks,
            style=copy.deepcopy(dict(seed.style)),
        )
        normalize_block_order(group)
        groups.append(group)
    if not groups:
        groups.append(build_empty_group(section_type))
    return groups


def build_empty_group(
    section_type: str, *, layout_id: str | None = None, order: int = 0
) -> Group:
    """Return a block-less group using ``layout_id`` or the section default."""
    entry = get_section_type(section_type)
    layout = get_layout(layout_id) if layout_id else None
    if layout is None:
        layout = _section_default_layout(entry) if entry else default_layout()
    return Group(id=new_id(), label=f"Group {order + 1}", order=order, layout=layout)


def normalize_incoming_sections(raw: object) -> list[Section]:
    """Turn an untrusted decoded tree into well-formed sections.

    Parameters
    ----------
    raw : object
        Value decoded from storage or an import file. Anything that is not a
        list yields an empty document.

    Returns
    -------
    list[Section]
        Sections whose type tags are registered, each holding at least one
        group, with dense group orders, dense per-slot block orders and
        document-unique ids.

    Notes
    -----
    Sections with an unknown ``type`` are dropped. A section with no usable
    groups falls back to the registry's seed groups. The legacy shape with a
    ``layout`` and flat ``blocks`` list directly on the section is upgraded
    into one synthetic group. This function never raises for malformed input.

    Examples
    --------
    >>> normalize_incoming_sections(None)
    []
    >>> normalize_incoming_sections([{"type": "unknown"}])
    []
    >>> [section.type for section in normalize_incoming_sections([{"type": "cta"}])]
    ['cta']
    """
    if not isinstance(raw, list):
        return []
    seen_ids: set[str] = set()
    sections: list[Section] = []
    for candidate in raw:
        match candidate:
            case {"type": str() as section_type, **_rest}:
                pass
            case _:
                logger.debug("dropping section without a type tag")
                continue
        entry = get_section_type(section_type)
        if entry is None:
            logger.info("dropping section with unknown type %r", section_type)
            continue
        sections.append(_build_section(candidate, section_type, entry, seen_ids))
    return sections


def normalize_global_style(raw: object) -> GlobalStyle:
    """Merge a stored global style mapping over the defaults."""
    base = GlobalStyle()
    if not isinstance(raw, dict):
        return base
    font_family = raw.get("fontFamily")
    primary_color = raw.get("primaryColor")
    border_radius = raw.get("borderRadius")
    return GlobalStyle(
        font_family=font_family if isinstance(font_family, str) and font_family else base.font_family,
        primary_color=(
            primary_color
            if isinstance(primary_color, str) and primary_color
            else base.primary_color
        ),
        border_radius=border_radius if border_radius in _BORDER_RADII else base.border_radius,
    )


def _build_section(
    payload: cabc.Mapping[str, typ.Any],
    section_type: str,
    entry: SectionTypeEntry,
    seen_ids: set[str],
) -> Section:
    """Build one section from a payload whose type tag is registered."""
    groups: list[Group] = []
    match payload.get("groups"):
        case list() as raw_groups if raw_groups:
            for position, raw_group in enumerate(raw_groups):
                if isinstance(raw_group, dict):
                    groups.append(_build_group(raw_group, position, entry, seen_ids))
        case _ if _is_legacy_single_layout(payload):
            logger.debug("upgrading legacy single-layout section into one group")
            groups.append(_build_group(dict(payload), 0, entry, seen_ids, label="Main"))
        case _:
            pass
    if not groups:
        groups = build_default_groups(section_type)
        for group in groups:
            _claim_ids(group, seen_ids)
    section = Section(
        id=_claim_id(payload.get("id"), seen_ids),
        type=section_type,
        groups=groups,
        style={**copy.deepcopy(dict(entry.default_style)), **_as_dict(payload.get("style"))},
        is_visible=payload.get("isVisible") is not False,
    )
    normalize_group_order(section)
    return section


def _is_legacy_single_layout(payload: cabc.Mapping[str, typ.Any]) -> bool:
    """Return True for the earlier one-layout-per-section shape."""
    return isinstance(payload.get("blocks"), list) or isinstance(
        payload.get("layout"), (dict, str)
    )


def _build_group(
    payload: cabc.Mapping[str, typ.Any],
    position: int,
    entry: SectionTypeEntry,
    seen_ids: set[str],
    *,
    label: str | None = None,
) -> Group:
    """Build one group, resolving its layout and normalizing its blocks."""
    layout = _resolve_layout(payload.get("layout"), entry)
    raw_label = payload.get("label")
    blocks: list[Block] = []
    for index, raw_block in enumerate(_as_list(payload.get("blocks"))):
        block = _build_block(raw_block, index, seen_ids)
        if block is not None:
            blocks.append(block)
    group = Group(
        id=_claim_id(payload.get("id") if label is None else None, seen_ids),
        label=raw_label if isinstance(raw_label, str) and raw_label else label or f"Group {position + 1}",
        order=_coerce_int(payload.get("order"), position),
        layout=layout,
        blocks=blocks,
        style=_as_dict(payload.get("style")) if label is None else {},
        layout_slot_memory=_parse_memory(payload.get("layoutSlotMemory")),
        layout_slot_memories={
            layout_id: memory
            for layout_id, raw_memory in _as_dict(payload.get("layoutSlotMemories")).items()
            if isinstance(layout_id, str)
            and (memory := _parse_memory(raw_memory)) is not None
        },
    )
    normalize_block_order(group)
    return group


def _resolve_layout(raw: object, entry: SectionTypeEntry) -> LayoutTemplate:
    """Prefer a catalog match, then a valid inline layout, then a default."""
    match raw:
        case str() as layout_id:
            catalog_match = get_layout(layout_id)
        case {"id": layout_id, **_rest}:
            catalog_match = get_layout(layout_id)
        case _:
            catalog_match = None
    if catalog_match is not None:
        return catalog_match
    if is_valid_inline_layout(raw):
        return layout_from_mapping(typ.cast("dict[str, typ.Any]", raw))
    return _section_default_layout(entry)


def _section_default_layout(entry: SectionTypeEntry) -> LayoutTemplate:
    return get_layout(entry.default_layout_id) or default_layout()


def _build_block(raw: object, index: int, seen_ids: set[str]) -> Block | None:
    """Build one block; unknown or missing type tags are dropped."""
    match raw:
        case {"type": str() as block_type, **_rest} if get_block_type(block_type):
            pass
        case _:
            logger.debug("dropping block with unknown type")
            return None
    slot = raw.get("slot")
    return Block(
        id=_claim_id(raw.get("id"), seen_ids),
        type=block_type,
        slot=slot if isinstance(slot, str) else "",
        order=_coerce_int(raw.get("order"), index),
        props=_as_dict(raw.get("props")),
        style=_as_dict(raw.get("style")),
    )


def _parse_memory(raw: object) -> LayoutSlotMemory | None:
    """Parse a stored slot memory, skipping malformed placements."""
    match raw:
        case {"sourceSlots": list() as source_slots, "byBlockId": dict() as by_block_id}:
            pass
        case _:
            return None
    placements: dict[str, SlotPlacement] = {}
    for block_id, placement in by_block_id.items():
        match placement:
            case {"slot": str() as slot, "order": order} if isinstance(block_id, str):
                placements[block_id] = SlotPlacement(slot=slot, order=_coerce_int(order, 0))
            case _:
                continue
    return LayoutSlotMemory(
        source_slots=[slot for slot in source_slots if isinstance(slot, str)],
        by_block_id=placements,
    )


def _claim_id(candidate: object, seen_ids: set[str]) -> str:
    """Return ``candidate`` when usable and unused, otherwise a fresh id."""
    if isinstance(candidate, str) and candidate and candidate not in seen_ids:
        identifier = candidate
    else:
        identifier = new_id()
    seen_ids.add(identifier)
    return identifier


def _claim_ids(group: Group, seen_ids: set[str]) -> None:
    seen_ids.add(group.id)
    seen_ids.update(block.id for block in group.blocks)


def _coerce_int(value: object, fallback: int) -> int:
    if isinstance(value, bool):
        return fallback
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return fallback


def _as_dict(value: object) -> dict[str, typ.Any]:
    return copy.deepcopy(value) if isinstance(value, dict) else {}


def _as_list(value: object) -> list[typ.Any]:
    return value if isinstance(value, list) else []


__all__ = [
    "build_default_groups",
    "build_empty_group",
    "normalize_global_style",
    "normalize_incoming_sections",
]
