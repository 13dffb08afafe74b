"""Tests for the ``pagebuilder`` CLI commands."""

from __future__ import annotations

import typing as typ

import pytest

from pagebuilder import cli
from pagebuilder.editor import EditorStore
from pagebuilder.persistence import load_document, save_document
from pagebuilder.settings import EditorSettings

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture


@pytest.fixture
def document_path(tmp_path: Path) -> Path:
    """Write a one-section cta document and return its path."""
    store = EditorStore()
    store.add_section("cta")
    path = tmp_path / "page.json"
    save_document(path, store.sections, store.global_style)
    return path


def test_layouts_lists_every_layout(capsys: pytest.CaptureFixture[str]) -> None:
    cli.layouts()

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "1col\t1\tmain"
    assert any(line.startswith("nav-brand-links-actions\t3\t") for line in lines)


def test_layouts_filters_by_section_type(capsys: pytest.CaptureFixture[str]) -> None:
    cli.layouts(section_type="navbar")

    out = capsys.readouterr().out
    assert "nav-brand-actions" in out
    assert "3col-equal" not in out, "navbar sections only allow navbar layouts"


def test_layouts_rejects_unknown_section_type() -> None:
    with pytest.raises(ValueError, match="Unknown section type"):
        cli.layouts(section_type="carousel")


def test_normalize_upgrades_legacy_shape(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = tmp_path / "legacy.json"
    source.write_text(
        '{"sections": [{"id": "s1", "type": "cta", "layout": "1col",'
        ' "blocks": [{"id": "b1", "type": "text", "slot": "main", "order": 4}]}]}',
        encoding="utf-8",
    )
    output = tmp_path / "clean.yaml"

    cli.normalize(source=source, output=output)

    assert "wrote" in capsys.readouterr().out
    loaded = load_document(output)
    assert loaded is not None
    group = loaded.sections[0].groups[0]
    assert group.label == "Main"
    assert [(block.id, block.order) for block in group.blocks] == [("b1", 0)]


def test_normalize_reports_paths_relative_to_cwd(
    document_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(document_path.parent)

    cli.normalize(source=document_path)

    assert capsys.readouterr().out.strip() == f"wrote {document_path.name}"


def test_normalize_rejects_unreadable_source(tmp_path: Path) -> None:
    source = tmp_path / "broken.json"
    source.write_text("{", encoding="utf-8")

    with pytest.raises(ValueError, match="No usable page document"):
        cli.normalize(source=source)


def test_relayout_rewrites_document(
    document_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    loaded = load_document(document_path)
    assert loaded is not None
    section = loaded.sections[0]
    group = section.groups[0]

    cli.relayout(
        document=document_path, section=section.id, group=group.id, layout="2col-50-50"
    )

    out = capsys.readouterr().out
    assert "[left]" in out and "[right]" in out
    reloaded = load_document(document_path)
    assert reloaded is not None
    assert reloaded.sections[0].groups[0].layout.id == "2col-50-50"
    assert "1col" in reloaded.sections[0].groups[0].layout_slot_memories


def test_relayout_same_layout_reports_no_change(
    document_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    loaded = load_document(document_path)
    assert loaded is not None
    section = loaded.sections[0]
    before = document_path.read_bytes()

    cli.relayout(
        document=document_path, section=section.id, group=section.groups[0].id, layout="1col"
    )

    assert "already uses 1col" in capsys.readouterr().out
    assert document_path.read_bytes() == before


def test_relayout_rejects_unknown_ids(document_path: Path) -> None:
    loaded = load_document(document_path)
    assert loaded is not None
    section = loaded.sections[0]

    with pytest.raises(ValueError, match="No group"):
        cli.relayout(document=document_path, section=section.id, group="nope", layout="1col")
    with pytest.raises(ValueError, match="Unknown layout"):
        cli.relayout(
            document=document_path,
            section=section.id,
            group=section.groups[0].id,
            layout="4col",
        )


def test_relayout_rejects_layout_outside_section_rules(document_path: Path) -> None:
    loaded = load_document(document_path)
    assert loaded is not None
    section = loaded.sections[0]
    before = document_path.read_bytes()

    with pytest.raises(ValueError, match="not allowed in cta sections"):
        cli.relayout(
            document=document_path,
            section=section.id,
            group=section.groups[0].id,
            layout="nav-brand-links-actions",
        )
    assert document_path.read_bytes() == before


def test_relayout_defaults_to_configured_document(
    document_path: Path, mocker: MockerFixture, capsys: pytest.CaptureFixture[str]
) -> None:
    mocker.patch.object(
        cli, "load_settings", return_value=EditorSettings(document_path=document_path)
    )
    loaded = load_document(document_path)
    assert loaded is not None
    section = loaded.sections[0]

    cli.relayout(section=section.id, group=section.groups[0].id, layout="3col-equal")

    assert "[center]" in capsys.readouterr().out
    cli.load_settings.assert_called()  # type: ignore[attr-defined]


def test_inspect_prints_outline(
    document_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.inspect(document=document_path)

    out = capsys.readouterr().out
    assert out.startswith("style font=Inter")
    assert " cta" in out
    assert "[main] heading#" in out
