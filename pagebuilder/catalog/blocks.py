"""Block type registry: default props, styles and editable fields per tag."""

from __future__ import annotations

from .models import BlockTypeEntry, EditableField, FieldOption

_ALIGN_FIELD = EditableField(
    "textAlign",
    "Align",
    "align-picker",
    (
        FieldOption("Left", "left"),
        FieldOption("Center", "center"),
        FieldOption("Right", "right"),
    ),
)
_LETTER_SPACING_FIELD = EditableField(
    "letterSpacing", "Letter Spacing", "slider", minimum=0, maximum=12, step=0.5
)
_FONT_STYLE_FIELD = EditableField(
    "fontStyle",
    "Style",
    "size-picker",
    (FieldOption("Normal", "normal"), FieldOption("Italic", "italic")),
)
_OPACITY_FIELD = EditableField("opacity", "Opacity", "slider", minimum=0, maximum=100, step=5)
_WIDTH_FIELD = EditableField(
    "width",
    "Width",
    "size-picker",
    (
        FieldOption("Auto", "auto"),
        FieldOption("S", "sm"),
        FieldOption("M", "md"),
        FieldOption("L", "lg"),
        FieldOption("Full", "full"),
    ),
)


def _size_field(*values: tuple[str, str]) -> EditableField:
    return EditableField(
        "fontSize",
        "Size",
        "size-picker",
        tuple(FieldOption(label, value) for label, value in values),
    )


BLOCK_REGISTRY: dict[str, BlockTypeEntry] = {
    "heading": BlockTypeEntry(
        label="Heading",
        icon="title",
        category="basic",
        default_props={"text": "Heading text", "textStyle": "default"},
        default_style={
            "fontSize": "4xl",
            "fontWeight": "bold",
            "fontStyle": "normal",
            "letterSpacing": 0,
            "textAlign": "left",
        },
        editable_props=(
            EditableField("text", "Text", "short-text"),
            EditableField(
                "textStyle",
                "Style",
                "select",
                (FieldOption("Default", "default"), FieldOption("Gradient", "gradient")),
            ),
        ),
        editable_styles=(
            _size_field(("S", "xl"), ("M", "2xl"), ("L", "3xl"), ("XL", "4xl"), ("2XL", "5xl")),
            EditableField(
                "fontWeight",
                "Weight",
                "size-picker",
                (
                    FieldOption("Normal", "normal"),
                    FieldOption("Medium", "medium"),
                    FieldOption("Bold", "bold"),
                ),
            ),
            _FONT_STYLE_FIELD,
            _LETTER_SPACING_FIELD,
            _ALIGN_FIELD,
        ),
        inline_editable=True,
    ),
    "text": BlockTypeEntry(
        label="Text",
        icon="notes",
        category="basic",
        default_props={
            "text": "Body text goes here. Write something compelling for your visitors."
        },
        default_style={
            "fontSize": "base",
            "fontStyle": "normal",
            "letterSpacing": 0,
            "textAlign": "left",
        },
        editable_props=(EditableField("text", "Text", "long-text"),),
        editable_styles=(
            _size_field(("S", "sm"), ("M", "base"), ("L", "lg"), ("XL", "xl")),
            _FONT_STYLE_FIELD,
            _LETTER_SPACING_FIELD,
            _ALIGN_FIELD,
            _OPACITY_FIELD,
        ),
        inline_editable=True,
    ),
    "button": BlockTypeEntry(
        label="Button",
        icon="smart_button",
        category="basic",
        default_props={
            "text": "Get Started",
            "url": "#",
            "variant": "solid",
            "iconLeft": "",
            "iconRight": "",
        },
        default_style={"fontSize": "base", "textAlign": "left"},
        editable_props=(
            EditableField("text", "Button Text", "short-text"),
            EditableField("url", "Button Link", "url"),
            EditableField(
                "variant",
                "Style",
                "select",
                (
                    FieldOption("Solid", "solid"),
                    FieldOption("Outline", "outline"),
                    FieldOption("Ghost", "ghost"),
                    FieldOption("Link", "link"),
                ),
            ),
            EditableField("iconLeft", "Left Icon", "icon-picker"),
            EditableField("iconRight", "Right Icon", "icon-picker"),
        ),
        editable_styles=(
            _size_field(("S", "sm"), ("M", "base"), ("L", "lg")),
            _ALIGN_FIELD,
        ),
        inline_editable=True,
    ),
    "card": BlockTypeEntry(
        label="Card",
        icon="crop_portrait",
        category="layout",
        default_props={
            "title": "Card title",
            "description": "Describe a feature or benefit in a sentence or two.",
            "icon": "bolt",
        },
        default_style={"fontSize": "base", "textAlign": "left", "width": "full"},
        editable_props=(
            EditableField("title", "Title", "short-text"),
            EditableField("description", "Description", "long-text"),
            EditableField("icon", "Icon", "icon-picker"),
        ),
        editable_styles=(
            _size_field(("S", "sm"), ("M", "base"), ("L", "lg")),
            _ALIGN_FIELD,
            _WIDTH_FIELD,
        ),
    ),
    "image": BlockTypeEntry(
        label="Image",
        icon="image",
        category="media",
        default_props={"src": "", "alt": ""},
        default_style={"width": "full"},
        editable_props=(
            EditableField("src", "Image", "image"),
            EditableField("alt", "Alt Text", "short-text"),
        ),
        editable_styles=(_WIDTH_FIELD, _OPACITY_FIELD),
    ),
    "icon": BlockTypeEntry(
        label="Icon",
        icon="star",
        category="media",
        default_props={
            "icon": "star",
            "label": "",
            "displayStyle": "plain",
            "bgOpacity": "medium",
        },
        default_style={"fontSize": "xl", "textAlign": "left"},
        editable_props=(
            EditableField("icon", "Icon", "icon-picker"),
            EditableField("label", "Label", "short-text"),
            EditableField(
                "displayStyle",
                "Display",
                "select",
                (FieldOption("Plain", "plain"), FieldOption("Circle", "circle")),
            ),
        ),
        editable_styles=(
            _size_field(("S", "lg"), ("M", "xl"), ("L", "2xl"), ("XL", "3xl")),
            _ALIGN_FIELD,
        ),
    ),
    "spacer": BlockTypeEntry(
        label="Spacer",
        icon="height",
        category="layout",
        default_props={},
        default_style={"height": 32},
        editable_styles=(
            EditableField("height", "Height", "slider", minimum=8, maximum=160, step=4),
        ),
    ),
    "badge": BlockTypeEntry(
        label="Badge",
        icon="new_releases",
        category="basic",
        default_props={"text": "NEW", "variant": "subtle"},
        default_style={"fontSize": "base", "textAlign": "left"},
        editable_props=(
            EditableField("text", "Text", "short-text"),
            EditableField(
                "variant",
                "Style",
                "select",
                (
                    FieldOption("Subtle", "subtle"),
                    FieldOption("Solid", "solid"),
                    FieldOption("Outline", "outline"),
                ),
            ),
        ),
        editable_styles=(
            _size_field(("S", "sm"), ("M", "base"), ("L", "lg")),
            _ALIGN_FIELD,
        ),
        inline_editable=True,
    ),
    "divider": BlockTypeEntry(
        label="Divider",
        icon="horizontal_rule",
        category="layout",
        default_props={},
        default_style={"marginTop": 16, "marginBottom": 16},
        editable_styles=(
            EditableField("marginTop", "Space Above", "slider", minimum=0, maximum=96, step=4),
            EditableField(
                "marginBottom", "Space Below", "slider", minimum=0, maximum=96, step=4
            ),
        ),
    ),
    "list": BlockTypeEntry(
        label="List",
        icon="format_list_bulleted",
        category="basic",
        default_props={
            "items": [
                {"label": "First item", "url": ""},
                {"label": "Second item", "url": ""},
                {"label": "Third item", "url": ""},
            ],
            "inline": False,
        },
        default_style={"fontSize": "base", "textAlign": "left"},
        editable_props=(
            EditableField("items", "Items", "repeater"),
            EditableField("inline", "Show in a row", "toggle"),
        ),
        editable_styles=(
            _size_field(("S", "sm"), ("M", "base"), ("L", "lg")),
            _ALIGN_FIELD,
        ),
    ),
    "quote": BlockTypeEntry(
        label="Quote",
        icon="format_quote",
        category="basic",
        default_props={"quote": "A memorable quote.", "author": "", "role": ""},
        default_style={"fontSize": "lg", "fontStyle": "italic", "textAlign": "left"},
        editable_props=(
            EditableField("quote", "Quote", "long-text"),
            EditableField("author", "Author", "short-text"),
            EditableField("role", "Role", "short-text"),
        ),
        editable_styles=(
            _size_field(("M", "base"), ("L", "lg"), ("XL", "xl")),
            _FONT_STYLE_FIELD,
            _ALIGN_FIELD,
        ),
        inline_editable=True,
    ),
}


def get_block_type(tag: object) -> BlockTypeEntry | None:
    """Return the registry entry for ``tag`` or None when it is unknown."""
    if not isinstance(tag, str):
        return None
    return BLOCK_REGISTRY.get(tag)


__all__ = ["BLOCK_REGISTRY", "get_block_type"]
