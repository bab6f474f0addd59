"""
Bloc de base du funnel builder.
Champs communs (id, type, order, className) + alias camelCase du format JSON stocké.
"""
import uuid
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

Align = Literal["left", "center", "right"]


def new_block_id(block_type: str) -> str:
    """Id unique pour le process : "<type>-<12 hex>" (jamais réutilisé)."""
    return f"{block_type}-{uuid.uuid4().hex[:12]}"


def plain_number(value: float):
    """3.0 → 3 ; les ordres fractionnaires transitoires restent des float."""
    return int(value) if float(value).is_integer() else value


def dump_fields(model: BaseModel, exclude=None) -> dict:
    """model_dump par alias. Un champ à None n'est écrit que s'il a été fourni (null stocké conservé)."""
    data = model.model_dump(by_alias=True, exclude=exclude)
    for name, field in type(model).model_fields.items():
        if name not in model.model_fields_set and getattr(model, name) is None:
            data.pop(field.alias or name, None)
    return data


class BaseBlock(BaseModel):
    """Bloc de base (classe parente de tous les blocs). Clés inconnues conservées telles quelles."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    id: str
    type: str
    order: float = 0
    class_name: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _assign_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("id"):
            default = cls.model_fields["type"].default
            block_type = data.get("type") or (default if isinstance(default, str) else "block")
            data = {**data, "id": new_block_id(block_type)}
        return data

    def to_json(self) -> dict:
        """Valeur JSON (clés camelCase, champs optionnels jamais fournis omis, clés inconnues intactes)."""
        data = dump_fields(self)
        data["order"] = plain_number(self.order)
        return data


class UnknownBlock(BaseBlock):
    """Type inconnu : conservé tel quel pour l'aller-retour, rendu comme un placeholder vide."""
