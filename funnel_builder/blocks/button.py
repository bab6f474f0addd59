"""Bloc Bouton — `onClick` est un tag d'action interprété par le runtime du funnel."""
from typing import Literal, Optional
from .base import BaseBlock, Align


class ButtonBlock(BaseBlock):
    type: Literal["button"] = "button"
    text: str = "Clique aqui"
    variant: Literal["default", "outline", "secondary", "ghost"] = "default"
    size: Literal["sm", "default", "lg"] = "default"
    align: Align = "center"
    on_click: Optional[str] = None
