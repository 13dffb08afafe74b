"""Unit tests for the undo/redo journal and style-edit coalescing."""

from __future__ import annotations

import typing as typ

from pagebuilder.editor import EditorStore
from pagebuilder.history import HistoryJournal, StyleEditCoalescer
from pagebuilder.settings import EditorSettings

if typ.TYPE_CHECKING:
    from conftest import FakeClock


def test_journal_caps_history_and_drops_oldest() -> None:
    journal: HistoryJournal[list[int]] = HistoryJournal(limit=3)
    for value in range(5):
        journal.record([value])

    assert journal.history == [[2], [3], [4]], "oldest snapshots go first"


def test_record_clears_redo_path() -> None:
    journal: HistoryJournal[list[str]] = HistoryJournal()
    journal.record(["a"])
    assert journal.undo(["b"]) == ["a"]
    assert journal.future_depth == 1

    journal.record(["c"])

    assert journal.future_depth == 0, "a new edit invalidates the redo stack"


def test_undo_then_redo_round_trips() -> None:
    journal: HistoryJournal[list[str]] = HistoryJournal()
    journal.record(["before"])

    previous = journal.undo(["after"])
    following = journal.redo(previous or [])

    assert previous == ["before"]
    assert following == ["after"]
    assert journal.history_depth == 1
    assert journal.undo(["x"]) == ["before"]
    assert journal.undo(["x"]) is None, "undo on an empty history is a no-op"


def test_snapshots_are_independent_copies() -> None:
    journal: HistoryJournal[list[dict[str, int]]] = HistoryJournal()
    state = [{"value": 1}]
    journal.record(state)
    state[0]["value"] = 99

    assert journal.history[0] == [{"value": 1}], "later mutation must not leak into history"


def test_coalescer_records_once_per_burst(clock: FakeClock) -> None:
    coalescer = StyleEditCoalescer(0.4, clock=clock)
    key = ("block", "b1", "style")

    decisions = []
    for _ in range(5):
        decisions.append(coalescer.should_record(key))
        clock.advance(0.3)

    assert decisions == [True, False, False, False, False], (
        "each edit inside the window extends the same burst"
    )


def test_coalescer_opens_new_burst_after_quiet_period(clock: FakeClock) -> None:
    coalescer = StyleEditCoalescer(0.4, clock=clock)
    key = ("block", "b1", "style")

    decisions = []
    for _ in range(3):
        decisions.append(coalescer.should_record(key))
        clock.advance(1.0)

    assert decisions == [True, True, True]


def test_coalescer_tracks_keys_independently(clock: FakeClock) -> None:
    coalescer = StyleEditCoalescer(0.4, clock=clock)

    assert coalescer.should_record(("block", "a", "style")) is True
    assert coalescer.should_record(("block", "b", "style")) is True
    assert coalescer.should_record(("block", "a", "style")) is False
    assert coalescer.open_bursts == 2

    coalescer.clear()

    assert coalescer.open_bursts == 0
    assert coalescer.should_record(("block", "a", "style")) is True


def _store_with_block(store: EditorStore) -> tuple[str, str, str]:
    section_id = store.add_section("cta")
    assert section_id is not None
    section = store.sections[0]
    group = section.groups[0]
    block = group.blocks[0]
    return section_id, group.id, block.id


def test_style_burst_produces_one_history_entry(store: EditorStore, clock: FakeClock) -> None:
    section_id, group_id, block_id = _store_with_block(store)
    baseline = store.history_depth
    before = store.find_block(section_id, group_id, block_id)
    assert before is not None
    original_style = dict(before.style)

    for size in range(10, 20):
        store.update_block_style(section_id, group_id, block_id, {"paddingX": size})
        clock.advance(0.05)

    assert store.history_depth == baseline + 1, "a slider drag should be one undo step"

    assert store.undo() is True
    restored = store.find_block(section_id, group_id, block_id)
    assert restored is not None
    assert restored.style == original_style, "undo restores the state before the first edit"


def test_spaced_edits_each_produce_an_entry(store: EditorStore, clock: FakeClock) -> None:
    section_id, group_id, block_id = _store_with_block(store)
    baseline = store.history_depth

    for size in range(3):
        store.update_block_style(section_id, group_id, block_id, {"paddingX": size})
        clock.advance(1.0)

    assert store.history_depth == baseline + 3


def test_undo_clears_open_bursts(store: EditorStore) -> None:
    section_id, group_id, block_id = _store_with_block(store)
    store.update_block_prop(section_id, group_id, block_id, "text", "Hello")
    store.update_block_prop(section_id, group_id, block_id, "text", "Hello!")
    assert store.coalescer.open_bursts == 1

    store.undo()

    assert store.coalescer.open_bursts == 0, "undo must not leave a stale burst behind"
    depth = store.history_depth
    store.update_block_prop(section_id, group_id, block_id, "text", "Again")
    assert store.history_depth == depth + 1, "the first edit after undo is recorded"


def test_history_limit_comes_from_settings() -> None:
    store = EditorStore(settings=EditorSettings(history_limit=2))
    for _ in range(4):
        store.add_section("cta")

    assert store.history_depth == 2
    assert len(store.sections) == 4
