"""Unit tests for building documents from seeds and untrusted input."""

from __future__ import annotations

import typing as typ

import pytest

from pagebuilder.document import (
    build_default_groups,
    build_empty_group,
    normalize_global_style,
    normalize_incoming_sections,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pagebuilder.document import Section

    AssertInvariants = cabc.Callable[[cabc.Sequence[Section]], None]


@pytest.mark.parametrize(
    "raw",
    [None, [], [{}], [{"type": "carousel"}], "not a list", [42, None, "hero"]],
    ids=["none", "empty", "blank-object", "unknown-type", "string", "junk-items"],
)
def test_malformed_input_yields_empty_document(raw: object) -> None:
    assert normalize_incoming_sections(raw) == [], f"expected no sections for {raw!r}"


def test_unknown_types_are_dropped_and_known_kept(assert_invariants: AssertInvariants) -> None:
    sections = normalize_incoming_sections([{"type": "carousel"}, {"type": "cta"}])

    assert [section.type for section in sections] == ["cta"]
    assert_invariants(sections)


def test_section_without_groups_gets_seed_groups() -> None:
    (section,) = normalize_incoming_sections([{"type": "cta", "id": "s1"}])

    assert section.id == "s1"
    assert len(section.groups) == 1
    assert [block.type for block in section.groups[0].blocks] == ["heading", "text", "button"]
    assert section.is_visible is True, "missing isVisible means visible"


def test_legacy_single_layout_section_is_upgraded(assert_invariants: AssertInvariants) -> None:
    raw = [
        {
            "id": "legacy",
            "type": "hero",
            "layout": "2col-50-50",
            "blocks": [
                {"id": "b1", "type": "heading", "slot": "left", "order": 0},
                {"id": "b2", "type": "image", "slot": "right", "order": 0},
            ],
        }
    ]

    (section,) = normalize_incoming_sections(raw)

    assert len(section.groups) == 1, "legacy blocks should live in one synthetic group"
    group = section.groups[0]
    assert group.label == "Main"
    assert group.layout.id == "2col-50-50"
    assert {block.id: block.slot for block in group.blocks} == {"b1": "left", "b2": "right"}
    assert_invariants([section])


def test_inline_layout_is_accepted_when_valid() -> None:
    raw = [
        {
            "type": "hero",
            "groups": [
                {
                    "id": "g1",
                    "layout": {"id": "custom-split", "columns": 2, "slots": ["aside", "body"]},
                    "blocks": [{"id": "b1", "type": "text", "slot": "body", "order": 0}],
                }
            ],
        }
    ]

    (section,) = normalize_incoming_sections(raw)
    group = section.groups[0]

    assert group.layout.id == "custom-split"
    assert group.layout.slots == ("aside", "body")
    assert group.blocks[0].slot == "body"


def test_invalid_inline_layout_falls_back_and_rehomes_blocks(
    assert_invariants: AssertInvariants,
) -> None:
    raw = [
        {
            "type": "hero",
            "groups": [
                {
                    "layout": {"id": "broken", "columns": 3, "slots": ["only-one"]},
                    "blocks": [
                        {"id": "b1", "type": "text", "slot": "only-one", "order": 4},
                        {"id": "b2", "type": "text", "slot": "left", "order": 9},
                    ],
                }
            ],
        }
    ]

    (section,) = normalize_incoming_sections(raw)
    group = section.groups[0]

    assert group.layout.id == "2col-50-50", "hero falls back to its default layout"
    assert {block.id: (block.slot, block.order) for block in group.blocks} == {
        "b2": ("left", 0),
        "b1": ("left", 1),
    }, "blocks from unknown slots join the first slot after existing ones"
    assert_invariants([section])


def test_orders_are_densified_and_groups_sorted() -> None:
    raw = [
        {
            "type": "features",
            "groups": [
                {"id": "late", "order": 7, "layout": "1col", "blocks": []},
                {
                    "id": "early",
                    "order": 3,
                    "layout": "1col",
                    "blocks": [
                        {"id": "b1", "type": "card", "slot": "main", "order": 5},
                        {"id": "b2", "type": "card", "slot": "main", "order": 2},
                    ],
                },
            ],
        }
    ]

    (section,) = normalize_incoming_sections(raw)

    assert [(group.id, group.order) for group in section.groups] == [("early", 0), ("late", 1)]
    early = section.groups[0]
    assert {block.id: block.order for block in early.blocks} == {"b2": 0, "b1": 1}


def test_duplicate_ids_are_reissued(assert_invariants: AssertInvariants) -> None:
    block = {"id": "same", "type": "text", "slot": "main", "order": 0}
    raw = [
        {"id": "dup", "type": "cta", "groups": [{"id": "g", "layout": "1col", "blocks": [block]}]},
        {"id": "dup", "type": "cta", "groups": [{"id": "g", "layout": "1col", "blocks": [block]}]},
    ]

    sections = normalize_incoming_sections(raw)

    assert sections[0].id == "dup"
    assert sections[1].id != "dup", "a repeated section id should be replaced"
    assert_invariants(sections)


def test_unknown_block_types_are_dropped() -> None:
    raw = [
        {
            "type": "cta",
            "groups": [
                {
                    "layout": "1col",
                    "blocks": [
                        {"id": "ok", "type": "text", "slot": "main", "order": 0},
                        {"id": "bad", "type": "marquee", "slot": "main", "order": 1},
                        {"slot": "main"},
                    ],
                }
            ],
        }
    ]

    (section,) = normalize_incoming_sections(raw)

    assert [block.id for block in section.groups[0].blocks] == ["ok"]


def test_slot_memories_and_visibility_survive() -> None:
    raw = [
        {
            "type": "hero",
            "isVisible": False,
            "style": {"paddingY": "xl"},
            "groups": [
                {
                    "layout": "1col",
                    "blocks": [{"id": "b1", "type": "text", "slot": "main", "order": 0}],
                    "layoutSlotMemories": {
                        "2col-50-50": {
                            "sourceSlots": ["left", "right"],
                            "byBlockId": {"b1": {"slot": "right", "order": 0}, "x": "junk"},
                        },
                        "broken": {"sourceSlots": "nope"},
                    },
                }
            ],
        }
    ]

    (section,) = normalize_incoming_sections(raw)
    memories = section.groups[0].layout_slot_memories

    assert section.is_visible is False
    assert section.style["paddingY"] == "xl", "stored style overrides registry defaults"
    assert set(memories) == {"2col-50-50"}, "malformed memories are skipped"
    assert memories["2col-50-50"].by_block_id["b1"].slot == "right"
    assert "x" not in memories["2col-50-50"].by_block_id


def test_build_default_groups_issue_fresh_ids() -> None:
    first = build_default_groups("features")
    second = build_default_groups("features")

    assert [group.order for group in first] == list(range(len(first)))
    first_ids = {group.id for group in first} | {b.id for g in first for b in g.blocks}
    second_ids = {group.id for group in second} | {b.id for g in second for b in g.blocks}
    assert not first_ids & second_ids, "each instantiation must mint new ids"
    assert build_default_groups("unknown") == []


def test_seed_blocks_do_not_share_catalog_values() -> None:
    group = build_default_groups("navbar")[0]
    menu = next(block for block in group.blocks if block.type == "list")
    menu.props["items"].append("Mutated")

    fresh = next(block for block in build_default_groups("navbar")[0].blocks if block.type == "list")
    assert "Mutated" not in fresh.props["items"], "catalog defaults must be deep-copied"


def test_build_empty_group_uses_section_default_layout() -> None:
    group = build_empty_group("hero", order=2)

    assert group.layout.id == "2col-50-50"
    assert group.label == "Group 3"
    assert group.blocks == []
    assert build_empty_group("hero", layout_id="3col-equal").layout.id == "3col-equal"


def test_normalize_global_style_reads_stored_keys() -> None:
    style = normalize_global_style(
        {"fontFamily": "Space Grotesk", "primaryColor": "#ff0066", "borderRadius": "weird"}
    )

    assert style.font_family == "Space Grotesk"
    assert style.primary_color == "#ff0066"
    assert style.border_radius == "md", "unknown radius falls back to the default"
    assert normalize_global_style(None).font_family == "Inter"
