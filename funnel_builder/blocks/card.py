"""Bloc Card — conteneur ordonné de blocs enfants."""
from typing import List, Literal
from pydantic import Field
from .base import BaseBlock


class CardBlock(BaseBlock):
    type: Literal["card"] = "card"
    children: List["Block"] = Field(default_factory=list)

    def to_json(self) -> dict:
        data = super().to_json()
        data["children"] = [child.to_json() for child in self.children]
        return data
