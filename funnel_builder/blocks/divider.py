"""Bloc Séparateur."""
from typing import Literal, Optional
from .base import BaseBlock


class DividerBlock(BaseBlock):
    type: Literal["divider"] = "divider"
    color: Optional[str] = None
    thickness: Optional[str] = None
