"""
Vue "structure" — lignes de la liste des blocs, surlignage de la sélection.

La liste et le canvas lisent le même SelectionController ; ce module ne
garde aucun état.
"""
from typing import List, Optional

from pydantic import BaseModel

from .blocks import BLOCK_REGISTRY, BaseBlock, CardBlock
from .core.i18n import DEFAULT_LANG, resolve
from .core.schemas import PageLayout
from .engine.selection import SelectionController, selected_path


class StructureRow(BaseModel):
    id:                 str
    type:               str
    label:              str
    depth:              int  = 0
    selected:           bool = False
    contains_selection: bool = False


def block_label(block: BaseBlock, lang: str = DEFAULT_LANG) -> str:
    """"Título H2", "Campo: Nome", "Editor: front"… ; type inconnu → libellé générique."""
    key = block.type if block.type in BLOCK_REGISTRY else "unknown"
    return resolve(f"@blocks.{key}", lang=lang, context=block.model_dump())


def structure_rows(document: PageLayout, selection: SelectionController,
                   lang: str = DEFAULT_LANG, expand_cards: bool = True) -> List[StructureRow]:
    selected_id: Optional[str] = selection.selected_block_id
    ancestors = set(selected_path(document, selected_id))
    rows: List[StructureRow] = []

    def visit(blocks, depth):
        for b in blocks:
            rows.append(StructureRow(
                id=b.id,
                type=b.type,
                label=block_label(b, lang),
                depth=depth,
                selected=b.id == selected_id,
                contains_selection=b.id in ancestors,
            ))
            if expand_cards and isinstance(b, CardBlock):
                visit(b.children, depth + 1)

    visit(document.blocks, 0)
    return rows
