"""
Funnel Builder v1.0 — éditeur de pages des étapes d'un funnel (workflow / campagne).

Usage (moteur) :
    >>> from funnel_builder import PageLayout, add, duplicate, new_block
    >>> layout = add(PageLayout(), new_block("heading", content="Seus Dados"))
    >>> layout = duplicate(layout, layout.blocks[0].id)

Usage (session d'édition) :
    >>> from funnel_builder import EditorSession, LayoutStore
    >>> session = EditorSession.open("campaigns", campaign_id, "initial_data", LayoutStore())
    >>> session.add_block("text")
    >>> await session.save()
"""

# ── Blocs ───────────────────────────────────────────────────────────────────
from .blocks import (
    BaseBlock, UnknownBlock,
    HeadingBlock, TextBlock, ImageBlock, ButtonBlock, FormFieldBlock,
    SpacerBlock, DividerBlock, CardBlock, CustomEditorBlock,
    Block, BLOCK_REGISTRY,
    parse_block, dump_block, new_block, block_catalog,
)

# ── Document + erreurs ──────────────────────────────────────────────────────
from .core import (
    PageLayout, ProgressIndicator, WorkflowStep, ParentRecord,
    LayoutError, NotFound, InvalidVariantTransition,
    PersistenceFailure, ParentRecordMissingStep, ParentRecordNotFound,
    reindex, normalize, is_dense,
)

# ── Moteur ──────────────────────────────────────────────────────────────────
from .engine import (
    add, remove, update, move_up, move_down, duplicate,
    reorder_by_drag, swap_by_drag_exact,
    SelectionController, Selected, Unselected, DragSession,
)

# ── Layouts par défaut + persistance ────────────────────────────────────────
from .defaults import synthesize, available_roles
from .persistence import load, save, editable_steps, LayoutStore
from .editor import EditorSession
from .views import structure_rows, block_label

__version__ = "1.0.0"

__all__ = [
    # blocs
    "BaseBlock", "UnknownBlock",
    "HeadingBlock", "TextBlock", "ImageBlock", "ButtonBlock", "FormFieldBlock",
    "SpacerBlock", "DividerBlock", "CardBlock", "CustomEditorBlock",
    "Block", "BLOCK_REGISTRY",
    "parse_block", "dump_block", "new_block", "block_catalog",
    # document
    "PageLayout", "ProgressIndicator", "WorkflowStep", "ParentRecord",
    "LayoutError", "NotFound", "InvalidVariantTransition",
    "PersistenceFailure", "ParentRecordMissingStep", "ParentRecordNotFound",
    "reindex", "normalize", "is_dense",
    # moteur
    "add", "remove", "update", "move_up", "move_down", "duplicate",
    "reorder_by_drag", "swap_by_drag_exact",
    "SelectionController", "Selected", "Unselected", "DragSession",
    # défauts / persistance / session
    "synthesize", "available_roles",
    "load", "save", "editable_steps", "LayoutStore",
    "EditorSession",
    "structure_rows", "block_label",
]
