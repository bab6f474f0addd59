"""Bloc Espaceur — hauteur CSS ("20px", "2rem")."""
from typing import Literal
from .base import BaseBlock


class SpacerBlock(BaseBlock):
    type: Literal["spacer"] = "spacer"
    height: str = "2rem"
