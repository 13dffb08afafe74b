"""Shared fixtures for the page builder engine tests."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

import pytest

from pagebuilder.catalog import get_layout
from pagebuilder.document import Block, Group
from pagebuilder.editor import EditorStore

if typ.TYPE_CHECKING:
    from pagebuilder.document import Section

# (id, type, slot, order)
BlockSpec = tuple[str, str, str, int]


class FakeClock:
    """Manually advanced time source for edit coalescing."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Return a clock frozen until a test advances it."""
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> EditorStore:
    """Return an empty editor store driven by the fake clock."""
    return EditorStore(clock=clock)


@pytest.fixture
def make_group() -> cabc.Callable[..., Group]:
    """Return a factory building a group from ``(id, type, slot, order)`` specs."""

    def _make(layout_id: str, specs: cabc.Sequence[BlockSpec], **style: typ.Any) -> Group:
        layout = get_layout(layout_id)
        assert layout is not None, f"fixture layout {layout_id!r} must exist"
        return Group(
            id="group-1",
            label="Main",
            order=0,
            layout=layout,
            blocks=[
                Block(id=block_id, type=block_type, slot=slot, order=order, style=dict(style))
                for block_id, block_type, slot, order in specs
            ],
        )

    return _make


def placement(group: Group) -> dict[str, tuple[str, int]]:
    """Return ``{block_id: (slot, order)}`` for the group's flow blocks."""
    return {block.id: (block.slot, block.order) for block in group.flow_blocks()}


def check_invariants(sections: cabc.Sequence[Section]) -> None:
    """Assert the ordering, slot membership and id uniqueness invariants."""
    seen: set[str] = set()
    for section in sections:
        assert section.groups, f"section {section.id} must keep at least one group"
        orders = [group.order for group in section.groups]
        assert orders == list(range(len(orders))), (
            f"group orders in {section.id} must be dense and sorted, got {orders}"
        )
        ids = [section.id]
        for group in section.groups:
            ids.append(group.id)
            for slot in group.layout.slots:
                slot_orders = sorted(
                    block.order for block in group.flow_blocks() if block.slot == slot
                )
                assert slot_orders == list(range(len(slot_orders))), (
                    f"orders in {group.id}/{slot} must be dense, got {slot_orders}"
                )
            for block in group.blocks:
                ids.append(block.id)
                if not block.is_absolute:
                    assert block.slot in group.layout.slots, (
                        f"block {block.id} sits in {block.slot!r}, not a slot of {group.layout.id}"
                    )
        for identifier in ids:
            assert identifier not in seen, f"id {identifier} is not unique"
            seen.add(identifier)


@pytest.fixture
def placement_of() -> cabc.Callable[[Group], dict[str, tuple[str, int]]]:
    """Return the flow placement reader."""
    return placement


@pytest.fixture
def assert_invariants() -> cabc.Callable[[cabc.Sequence[Section]], None]:
    """Return the document invariant checker."""
    return check_invariants
