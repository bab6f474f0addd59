"""Bloc Titre — h1 à h6."""
from typing import Literal, Optional
from pydantic import Field
from .base import BaseBlock, Align


class HeadingBlock(BaseBlock):
    type: Literal["heading"] = "heading"
    content: str = "Novo Título"
    level: int = Field(default=2, ge=1, le=6)
    align: Align = "left"
    color: Optional[str] = None
