"""Section type registry: default style, allowed layouts and seed groups."""

from __future__ import annotations

from .models import BlockSeed, GroupSeed, SectionTypeEntry

_ALL_BLOCK_TYPES = (
    "heading",
    "text",
    "button",
    "card",
    "image",
    "icon",
    "spacer",
    "badge",
    "divider",
    "list",
    "quote",
)
_CONTENT_LAYOUTS = (
    "1col",
    "1col-left",
    "2col-50-50",
    "2col-50-50-reverse",
    "2col-33-67",
    "2col-67-33",
    "2col-25-75",
    "2col-75-25",
    "3col-equal",
    "3col-25-50-25",
    "3col-50-25-25",
    "3col-25-25-50",
)
_NAV_LAYOUTS = (
    "nav-brand-links-actions",
    "nav-brand-actions",
    "nav-links-brand-actions",
    "1col",
)


def _dark_style(background: str, padding_y: int) -> dict[str, object]:
    return {
        "backgroundColor": background,
        "textColor": "#ffffff",
        "accentColor": "#00e5a0",
        "paddingY": padding_y,
        "backgroundType": "solid",
    }


SECTION_REGISTRY: dict[str, SectionTypeEntry] = {
    "navbar": SectionTypeEntry(
        label="Navigation",
        icon="menu",
        description="Top navigation bar with logo and links",
        allowed_layouts=_NAV_LAYOUTS,
        default_layout_id="nav-brand-links-actions",
        default_style=_dark_style("#0d1512", 0),
        allowed_block_types=("heading", "text", "button", "image", "icon", "list", "badge"),
        default_groups=(
            GroupSeed(
                label="Navigation",
                layout_id="nav-brand-links-actions",
                blocks=(
                    BlockSeed("heading", "brand", 0, {"text": "Brand"}, {"fontSize": "xl"}),
                    BlockSeed(
                        "list",
                        "links",
                        0,
                        {
                            "items": [
                                {"label": "Home", "url": "#"},
                                {"label": "About", "url": "#"},
                                {"label": "Contact", "url": "#"},
                            ],
                            "inline": True,
                        },
                    ),
                    BlockSeed("button", "actions", 0, {"text": "Get Started", "url": "#"}),
                ),
            ),
        ),
        max_blocks_per_slot=4,
    ),
    "hero": SectionTypeEntry(
        label="Hero Section",
        icon="star",
        description="Main hero area with headline, subheadline, and CTA",
        allowed_layouts=_CONTENT_LAYOUTS,
        default_layout_id="2col-50-50",
        default_style=_dark_style("#0a0f0d", 80),
        allowed_block_types=_ALL_BLOCK_TYPES,
        default_groups=(
            GroupSeed(
                label="Hero",
                layout_id="2col-50-50",
                blocks=(
                    BlockSeed("badge", "left", 0, {"text": "NEW"}),
                    BlockSeed("heading", "left", 1, {"text": "Build Faster. Design Better."}),
                    BlockSeed(
                        "text",
                        "left",
                        2,
                        {
                            "text": "Create stunning, high-converting landing pages in "
                            "minutes without writing a single line of code."
                        },
                    ),
                    BlockSeed("button", "left", 3, {"text": "Start Building Free"}),
                    BlockSeed("image", "right", 0, {"src": "", "alt": "Product preview"}),
                ),
            ),
        ),
    ),
    "features": SectionTypeEntry(
        label="Features Grid",
        icon="grid_view",
        description="Showcase features or benefits with icons",
        allowed_layouts=_CONTENT_LAYOUTS,
        default_layout_id="3col-equal",
        default_style=_dark_style("#0d1512", 80),
        allowed_block_types=_ALL_BLOCK_TYPES,
        default_groups=(
            GroupSeed(
                label="Heading",
                layout_id="1col",
                blocks=(
                    BlockSeed(
                        "heading",
                        "main",
                        0,
                        {"text": "Everything you need"},
                        {"textAlign": "center"},
                    ),
                ),
            ),
            GroupSeed(
                label="Feature cards",
                layout_id="3col-equal",
                blocks=(
                    BlockSeed(
                        "card",
                        "left",
                        0,
                        {
                            "icon": "bolt",
                            "title": "Lightning Fast",
                            "description": "Optimized for speed and performance out of the box.",
                        },
                    ),
                    BlockSeed(
                        "card",
                        "center",
                        0,
                        {
                            "icon": "palette",
                            "title": "Smart Styles",
                            "description": "Global styles that adapt to your brand automatically.",
                        },
                    ),
                    BlockSeed(
                        "card",
                        "right",
                        0,
                        {
                            "icon": "shield",
                            "title": "Secure",
                            "description": "Enterprise grade security for all your pages.",
                        },
                    ),
                ),
            ),
        ),
    ),
    "cta": SectionTypeEntry(
        label="Call to Action",
        icon="campaign",
        description="Call-to-action section with headline and button",
        allowed_layouts=_CONTENT_LAYOUTS,
        default_layout_id="1col",
        default_style=_dark_style("#0d1512", 80),
        allowed_block_types=_ALL_BLOCK_TYPES,
        default_groups=(
            GroupSeed(
                label="Call to action",
                layout_id="1col",
                blocks=(
                    BlockSeed("heading", "main", 0, {"text": "Ready to get started?"}),
                    BlockSeed(
                        "text",
                        "main",
                        1,
                        {"text": "Join thousands of creators building beautiful websites."},
                    ),
                    BlockSeed("button", "main", 2, {"text": "Start Free"}),
                ),
            ),
        ),
    ),
    "testimonials": SectionTypeEntry(
        label="Testimonials",
        icon="format_quote",
        description="Customer reviews and social proof",
        allowed_layouts=_CONTENT_LAYOUTS,
        default_layout_id="3col-equal",
        default_style=_dark_style("#0a0f0d", 80),
        allowed_block_types=_ALL_BLOCK_TYPES,
        default_groups=(
            GroupSeed(
                label="Heading",
                layout_id="1col",
                blocks=(BlockSeed("heading", "main", 0, {"text": "What our customers say"}),),
            ),
            GroupSeed(
                label="Quotes",
                layout_id="3col-equal",
                blocks=(
                    BlockSeed(
                        "quote",
                        "left",
                        0,
                        {
                            "quote": "This builder made it incredibly easy to launch our "
                            "landing page in just a few hours.",
                            "author": "Sarah Johnson",
                            "role": "Marketing Director",
                        },
                    ),
                    BlockSeed(
                        "quote",
                        "center",
                        0,
                        {
                            "quote": "The templates are beautiful and the editor is so "
                            "intuitive. Highly recommend!",
                            "author": "Mike Chen",
                            "role": "Founder, StartupXYZ",
                        },
                    ),
                    BlockSeed(
                        "quote",
                        "right",
                        0,
                        {
                            "quote": "We switched from a more complex tool and never looked "
                            "back. Simple and effective.",
                            "author": "Emily Davis",
                            "role": "Freelance Designer",
                        },
                    ),
                ),
            ),
        ),
    ),
    "faq": SectionTypeEntry(
        label="FAQ",
        icon="help",
        description="Frequently asked questions section",
        allowed_layouts=_CONTENT_LAYOUTS,
        default_layout_id="1col",
        default_style=_dark_style("#0a0f0d", 80),
        allowed_block_types=_ALL_BLOCK_TYPES,
        default_groups=(
            GroupSeed(
                label="Questions",
                layout_id="1col",
                blocks=(
                    BlockSeed("heading", "main", 0, {"text": "Frequently asked questions"}),
                    BlockSeed("heading", "main", 1, {"text": "How do I get started?"}),
                    BlockSeed(
                        "text",
                        "main",
                        2,
                        {
                            "text": "Simply sign up for a free account, choose a template, "
                            "and start customizing with our drag-and-drop editor."
                        },
                    ),
                    BlockSeed("heading", "main", 3, {"text": "Is there a free plan?"}),
                    BlockSeed(
                        "text",
                        "main",
                        4,
                        {"text": "Yes, our free plan includes all core features."},
                    ),
                ),
            ),
        ),
    ),
    "footer": SectionTypeEntry(
        label="Footer",
        icon="bottom_navigation",
        description="Page footer with links and social icons",
        allowed_layouts=_CONTENT_LAYOUTS,
        default_layout_id="3col-equal",
        default_style=_dark_style("#080c0a", 60),
        allowed_block_types=_ALL_BLOCK_TYPES,
        default_groups=(
            GroupSeed(
                label="Link columns",
                layout_id="3col-equal",
                blocks=(
                    BlockSeed("heading", "left", 0, {"text": "Brand"}, {"fontSize": "xl"}),
                    BlockSeed(
                        "list",
                        "center",
                        0,
                        {
                            "items": [
                                {"label": "Features", "url": "#"},
                                {"label": "Pricing", "url": "#"},
                                {"label": "Templates", "url": "#"},
                            ]
                        },
                    ),
                    BlockSeed(
                        "list",
                        "right",
                        0,
                        {
                            "items": [
                                {"label": "About", "url": "#"},
                                {"label": "Blog", "url": "#"},
                                {"label": "Contact", "url": "#"},
                            ]
                        },
                    ),
                ),
            ),
            GroupSeed(
                label="Copyright",
                layout_id="1col",
                blocks=(
                    BlockSeed(
                        "text",
                        "main",
                        0,
                        {"text": "© 2026 Brand. All rights reserved."},
                        {"fontSize": "sm", "textAlign": "center"},
                    ),
                ),
            ),
        ),
    ),
}


def get_section_type(tag: object) -> SectionTypeEntry | None:
    """Return the registry entry for ``tag`` or None when it is unknown."""
    if not isinstance(tag, str):
        return None
    return SECTION_REGISTRY.get(tag)


__all__ = ["SECTION_REGISTRY", "get_section_type"]
