"""Bloc Champ de formulaire — lié à une clé des données collectées (`dataKey`)."""
from typing import List, Literal, Optional
from pydantic import Field
from .base import BaseBlock

FieldKind = Literal["text", "email", "tel", "number", "select"]


class FormFieldBlock(BaseBlock):
    type: Literal["form_field"] = "form_field"
    field_type: FieldKind = "text"
    label: str = "Campo"
    placeholder: Optional[str] = None
    required: bool = False
    data_key: str = Field(default="field")
    options: Optional[List[str]] = None  # select uniquement
