"""Editing engine for a visual page builder.

Pages are sections holding groups holding blocks. Groups arrange their blocks
into the slots of a column layout and remember earlier arrangements so layout
toggles are reversible. :class:`EditorStore` is the mutation API with undo and
redo; :mod:`pagebuilder.persistence` reads and writes stored documents.
"""

from .cli import app, main
from .editor import EditorStore

__all__ = ["EditorStore", "app", "main"]
