"""Behaviour tests for undo history around continuous style edits.

The scenarios mimic dragging a padding slider: many style edits to one block
arrive in quick succession and must collapse into a single undo step, while
edits separated by pauses stay individually undoable. A fake clock from
``tests/conftest.py`` stands in for wall time.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from pagebuilder.editor import EditorStore

if typ.TYPE_CHECKING:
    from conftest import FakeClock

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "history_coalescing.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share the store and the heading's ids across steps."""
    return {}


def _heading_ids(scenario_state: ScenarioState) -> tuple[str, str, str]:
    return scenario_state["section_id"], scenario_state["group_id"], scenario_state["block_id"]


@given("a page with a call-to-action section")
def given_cta_page(scenario_state: ScenarioState, clock: FakeClock) -> None:
    """Create a store holding one cta section and remember its heading."""
    store = EditorStore(clock=clock)
    section_id = store.add_section("cta")
    group = store.sections[0].groups[0]
    heading = next(block for block in group.blocks if block.type == "heading")
    scenario_state.update(
        store=store,
        clock=clock,
        section_id=section_id,
        group_id=group.id,
        block_id=heading.id,
        original_style=dict(heading.style),
    )


@when(parsers.parse("the heading padding is dragged through {count:d} values within the window"))
def when_drag(scenario_state: ScenarioState, count: int) -> None:
    """Fire ``count`` style edits 50 ms apart."""
    store: EditorStore = scenario_state["store"]
    for value in range(count):
        store.update_block_style(*_heading_ids(scenario_state), {"paddingY": value})
        scenario_state["clock"].advance(0.05)


@when(parsers.parse("the heading padding is set {count:d} times with pauses in between"))
def when_spaced_edits(scenario_state: ScenarioState, count: int) -> None:
    """Fire ``count`` style edits a full second apart."""
    store: EditorStore = scenario_state["store"]
    for value in range(count):
        store.update_block_style(*_heading_ids(scenario_state), {"paddingY": value})
        scenario_state["clock"].advance(1.0)


@when("the last change is undone")
def when_undo(scenario_state: ScenarioState) -> None:
    """Undo the most recent journaled change."""
    assert scenario_state["store"].undo() is True


@then(parsers.parse("the history holds {count:d} entries"))
def then_history_depth(scenario_state: ScenarioState, count: int) -> None:
    """Check the undo stack depth."""
    depth = scenario_state["store"].history_depth
    assert depth == count, f"expected {count} history entries, got {depth}"


@then("the heading has its original style")
def then_original_style(scenario_state: ScenarioState) -> None:
    """Check that undo rewound to before the first edit of the burst."""
    block = scenario_state["store"].find_block(*_heading_ids(scenario_state))
    assert block is not None
    assert block.style == scenario_state["original_style"]
