"""Read-only catalogs the editing engine instantiates documents from.

This subpackage holds three static registries: the layout catalog (column
arrangements a group can adopt), the block type registry (default props,
styles and editable fields per block tag), and the section type registry
(default style, allowed layouts and seed groups per section tag). Nothing here
carries state; the engine deep-copies seed values whenever it instantiates a
new entity.

Examples
--------
>>> from pagebuilder.catalog import get_layout, get_section_type
>>> get_layout("3col-equal").columns
3
>>> get_section_type("navbar").default_layout_id
'nav-brand-links-actions'
"""

from .blocks import BLOCK_REGISTRY, get_block_type
from .layouts import (
    DEFAULT_LAYOUT_ID,
    LAYOUT_TEMPLATES,
    default_layout,
    get_layout,
    get_layouts,
    is_valid_inline_layout,
    layout_from_mapping,
    layout_to_mapping,
)
from .models import (
    BlockSeed,
    BlockTypeEntry,
    EditableField,
    FieldOption,
    GroupSeed,
    LayoutTemplate,
    SectionTypeEntry,
)
from .sections import SECTION_REGISTRY, get_section_type

__all__ = [
    "BLOCK_REGISTRY",
    "DEFAULT_LAYOUT_ID",
    "LAYOUT_TEMPLATES",
    "SECTION_REGISTRY",
    "BlockSeed",
    "BlockTypeEntry",
    "EditableField",
    "FieldOption",
    "GroupSeed",
    "LayoutTemplate",
    "SectionTypeEntry",
    "default_layout",
    "get_block_type",
    "get_layout",
    "get_layouts",
    "get_section_type",
    "is_valid_inline_layout",
    "layout_from_mapping",
    "layout_to_mapping",
]
