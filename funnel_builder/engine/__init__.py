"""Moteur d'édition : mutations pures, sélection, glisser-déposer."""
from .mutations import (
    add,
    add_block,
    remove,
    update,
    move_up,
    move_down,
    duplicate,
    duplicate_block,
    reorder_by_drag,
    swap_by_drag_exact,
)
from .selection import SelectionController, Selected, Unselected, SelectionState, selected_path
from .drag import DragSession, drop_zone_id, parse_drop_zone, zone_to_target_index

__all__ = [
    "add", "add_block", "remove", "update", "move_up", "move_down",
    "duplicate", "duplicate_block", "reorder_by_drag", "swap_by_drag_exact",
    "SelectionController", "Selected", "Unselected", "SelectionState", "selected_path",
    "DragSession", "drop_zone_id", "parse_drop_zone", "zone_to_target_index",
]
