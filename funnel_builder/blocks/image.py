"""Bloc Image — image seule, dimensions optionnelles."""
from typing import Literal, Optional
from .base import BaseBlock, Align


class ImageBlock(BaseBlock):
    type: Literal["image"] = "image"
    src: str = ""
    alt: str = "Imagem"
    align: Align = "center"
    width: Optional[str] = None
    height: Optional[str] = None
