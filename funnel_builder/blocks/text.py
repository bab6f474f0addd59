"""Bloc Texte — paragraphe libre."""
from typing import Literal, Optional
from .base import BaseBlock, Align


class TextBlock(BaseBlock):
    type: Literal["text"] = "text"
    content: str = "Novo texto"
    align: Align = "left"
    color: Optional[str] = None
    font_size: Optional[str] = None
