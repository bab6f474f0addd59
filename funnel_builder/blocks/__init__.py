"""
Blocs — exports publics + union `Block` discriminée par `type`.

Les types inconnus ne sont pas rejetés : ils tombent sur `UnknownBlock`
et sont réécrits tels quels à la sauvegarde.
"""
import uuid
from typing import Annotated, Any, Dict, List, Type, Union

from pydantic import Discriminator, Tag, TypeAdapter

from .base import BaseBlock, UnknownBlock, Align, new_block_id
from .heading import HeadingBlock
from .text import TextBlock
from .image import ImageBlock
from .button import ButtonBlock
from .form_field import FormFieldBlock, FieldKind
from .spacer import SpacerBlock
from .divider import DividerBlock
from .card import CardBlock
from .custom_editor import CustomEditorBlock, EditorKind

BLOCK_REGISTRY: Dict[str, Type[BaseBlock]] = {
    "heading":       HeadingBlock,
    "text":          TextBlock,
    "image":         ImageBlock,
    "button":        ButtonBlock,
    "form_field":    FormFieldBlock,
    "spacer":        SpacerBlock,
    "divider":       DividerBlock,
    "card":          CardBlock,
    "custom_editor": CustomEditorBlock,
}


def _block_tag(value: Any) -> str:
    block_type = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return block_type if block_type in BLOCK_REGISTRY else "unknown"


Block = Annotated[
    Union[
        Annotated[HeadingBlock, Tag("heading")],
        Annotated[TextBlock, Tag("text")],
        Annotated[ImageBlock, Tag("image")],
        Annotated[ButtonBlock, Tag("button")],
        Annotated[FormFieldBlock, Tag("form_field")],
        Annotated[SpacerBlock, Tag("spacer")],
        Annotated[DividerBlock, Tag("divider")],
        Annotated[CardBlock, Tag("card")],
        Annotated[CustomEditorBlock, Tag("custom_editor")],
        Annotated[UnknownBlock, Tag("unknown")],
    ],
    Discriminator(_block_tag),
]

CardBlock.model_rebuild()

_BLOCK_ADAPTER = TypeAdapter(Block)


def parse_block(data: Any) -> BaseBlock:
    """dict JSON (ou bloc déjà typé) → bloc typé."""
    return _BLOCK_ADAPTER.validate_python(data)


def dump_block(block: BaseBlock) -> dict:
    """Bloc → valeur JSON stockable."""
    return block.to_json()


def new_block(block_type: str, **fields) -> BaseBlock:
    """Nouveau bloc d'un type connu, valeurs par défaut de l'éditeur et id neuf."""
    block_cls = BLOCK_REGISTRY.get(block_type)
    if block_cls is None:
        raise ValueError(f"Bloc inconnu : {block_type!r}. Registry : {list(BLOCK_REGISTRY)}")
    fields.pop("id", None)
    if block_type == "form_field" and "data_key" not in fields and "dataKey" not in fields:
        fields["data_key"] = f"field_{uuid.uuid4().hex[:8]}"
    return block_cls(id=new_block_id(block_type), **fields)


def block_catalog() -> List[dict]:
    """Catalogue des blocs disponibles avec leurs JSON schemas Pydantic."""
    return [
        {"type": block_type, "schema": cls.model_json_schema(by_alias=True)}
        for block_type, cls in BLOCK_REGISTRY.items()
    ]


__all__ = [
    "BaseBlock", "UnknownBlock", "Align", "new_block_id",
    "HeadingBlock", "TextBlock", "ImageBlock", "ButtonBlock",
    "FormFieldBlock", "FieldKind", "SpacerBlock", "DividerBlock",
    "CardBlock", "CustomEditorBlock", "EditorKind",
    "Block", "BLOCK_REGISTRY",
    "parse_block", "dump_block", "new_block", "block_catalog",
]
