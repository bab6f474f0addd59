"""Persistance du layout dans le parent record (workflow template / campagne)."""
from .adapter import load, save, editable_steps
from .store import LayoutStore

__all__ = ["load", "save", "editable_steps", "LayoutStore"]
