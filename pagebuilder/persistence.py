"""Serialize page documents to plain data, JSON, and YAML.

Stored documents use the editor's camelCase keys so files written here can be
read by the browser editor and vice versa:

.. code-block:: json

    {
      "version": 2,
      "sections": [{"id": "...", "type": "hero", "isVisible": true, "groups": []}],
      "globalStyle": {"fontFamily": "Inter", "primaryColor": "#00e5a0", "borderRadius": "md"}
    }

Reading always goes through :func:`pagebuilder.document.normalize_incoming_sections`,
so malformed input degrades to a renderable document instead of raising.
Documents from the first editor schema, whose sections carry a ``variant`` and
flat ``props`` with no groups, blocks or layout, cannot be upgraded and are
discarded whole.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

import msgspec
import msgspec.json
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import DOCUMENT_VERSION
from .catalog import layout_to_mapping
from .document import GlobalStyle, normalize_global_style, normalize_incoming_sections

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .document import Block, Group, LayoutSlotMemory, Section

logger = logging.getLogger(__name__)

JSON_SUFFIXES = frozenset({".json"})
YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class DocumentFileError(ValueError):
    """Raised when a document path has a suffix no codec handles."""


@dc.dataclass(slots=True)
class LoadedDocument:
    """A normalized document ready to hand to the editor store."""

    sections: list[Section]
    global_style: GlobalStyle
    version: int = DOCUMENT_VERSION


def encode_document(
    sections: cabc.Sequence[Section], global_style: GlobalStyle | None = None
) -> dict[str, typ.Any]:
    """Return the plain-data form of a document.

    The output contains only dicts, lists, strings, numbers and booleans, so
    it can be handed to any serializer. Encoding the same document twice
    yields equal values.
    """
    return {
        "version": DOCUMENT_VERSION,
        "sections": [_encode_section(section) for section in sections],
        "globalStyle": _encode_global_style(global_style or GlobalStyle()),
    }


def decode_document(payload: object) -> LoadedDocument | None:
    """Normalize a decoded payload into a :class:`LoadedDocument`.

    Returns None when ``payload`` is not a mapping or is a legacy document
    that must be discarded.

    Examples
    --------
    >>> decode_document([]) is None
    True
    >>> decode_document({"sections": [{"type": "hero", "variant": "split", "props": {}}]}) is None
    True
    >>> [section.type for section in decode_document({"sections": [{"type": "cta"}]}).sections]
    ['cta']
    """
    if not isinstance(payload, dict):
        logger.warning("ignoring stored document that is not a mapping")
        return None
    raw_sections = payload.get("sections")
    if _is_legacy_document(raw_sections):
        logger.warning("discarding stored document from an earlier editor schema")
        return None
    return LoadedDocument(
        sections=normalize_incoming_sections(raw_sections),
        global_style=normalize_global_style(payload.get("globalStyle")),
    )


def dumps_document(
    sections: cabc.Sequence[Section], global_style: GlobalStyle | None = None
) -> bytes:
    """Return the document as indented JSON bytes."""
    encoded = msgspec.json.encode(encode_document(sections, global_style))
    return msgspec.json.format(encoded, indent=2) + b"\n"


def loads_document(data: bytes | str) -> LoadedDocument | None:
    """Parse JSON produced by :func:`dumps_document`; None on parse failure."""
    try:
        payload = msgspec.json.decode(data)
    except (msgspec.DecodeError, UnicodeDecodeError) as exc:
        logger.warning("stored document is not valid JSON: %s", exc)
        return None
    return decode_document(payload)


def save_document(
    path: Path, sections: cabc.Sequence[Section], global_style: GlobalStyle | None = None
) -> Path:
    """Write a document to ``path`` as JSON or YAML depending on its suffix.

    Raises
    ------
    DocumentFileError
        If the suffix is neither ``.json`` nor ``.yaml``/``.yml``.
    """
    suffix = _codec_suffix(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix in JSON_SUFFIXES:
        path.write_bytes(dumps_document(sections, global_style))
        return path
    yaml = _build_yaml()
    with path.open("w", encoding="utf-8") as handle:
        yaml.dump(encode_document(sections, global_style), handle)
    return path


def load_document(path: Path) -> LoadedDocument | None:
    """Read a document from ``path``; None when missing or unreadable.

    Raises
    ------
    DocumentFileError
        If the suffix is neither ``.json`` nor ``.yaml``/``.yml``.
    """
    suffix = _codec_suffix(path)
    if not path.exists():
        return None
    if suffix in JSON_SUFFIXES:
        return loads_document(path.read_bytes())
    yaml = _build_yaml()
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle)
    except (YAMLError, UnicodeDecodeError) as exc:
        logger.warning("stored document %s is not valid YAML: %s", path, exc)
        return None
    return decode_document(payload)


def _codec_suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in JSON_SUFFIXES | YAML_SUFFIXES:
        msg = f"Unsupported document format '{path.suffix}' for {path}; use .json or .yaml"
        raise DocumentFileError(msg)
    return suffix


def _build_yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.version = (1, 2)
    yaml.default_flow_style = False
    yaml.sort_base_mapping_type_on_output = False
    return yaml


def _is_legacy_document(raw_sections: object) -> bool:
    """Return True when sections use the first, non-upgradable schema."""
    if not isinstance(raw_sections, list):
        return False
    for candidate in raw_sections:
        if not isinstance(candidate, dict):
            continue
        has_structure = any(key in candidate for key in ("groups", "blocks", "layout"))
        if not has_structure and ("variant" in candidate or "props" in candidate):
            return True
    return False


def _encode_section(section: Section) -> dict[str, typ.Any]:
    return {
        "id": section.id,
        "type": section.type,
        "isVisible": section.is_visible,
        "style": dict(section.style),
        "groups": [_encode_group(group) for group in section.sorted_groups()],
    }


def _encode_group(group: Group) -> dict[str, typ.Any]:
    payload: dict[str, typ.Any] = {
        "id": group.id,
        "label": group.label,
        "order": group.order,
        "layout": layout_to_mapping(group.layout),
        "style": dict(group.style),
        "blocks": [_encode_block(block) for block in group.blocks],
        "layoutSlotMemories": {
            layout_id: _encode_memory(memory)
            for layout_id, memory in group.layout_slot_memories.items()
        },
    }
    if group.layout_slot_memory is not None:
        payload["layoutSlotMemory"] = _encode_memory(group.layout_slot_memory)
    return payload


def _encode_block(block: Block) -> dict[str, typ.Any]:
    return {
        "id": block.id,
        "type": block.type,
        "slot": block.slot,
        "order": block.order,
        "props": dict(block.props),
        "style": dict(block.style),
    }


def _encode_memory(memory: LayoutSlotMemory) -> dict[str, typ.Any]:
    return {
        "sourceSlots": list(memory.source_slots),
        "byBlockId": {
            block_id: {"slot": placement.slot, "order": placement.order}
            for block_id, placement in memory.by_block_id.items()
        },
    }


def _encode_global_style(global_style: GlobalStyle) -> dict[str, str]:
    return {
        "fontFamily": global_style.font_family,
        "primaryColor": global_style.primary_color,
        "borderRadius": global_style.border_radius,
    }


__all__ = [
    "DocumentFileError",
    "LoadedDocument",
    "decode_document",
    "dumps_document",
    "encode_document",
    "load_document",
    "loads_document",
    "save_document",
]
