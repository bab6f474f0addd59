"""
Moteur de mutations — opérations pures PageLayout → PageLayout.

Chaque opération renvoie un nouveau document (l'entrée n'est jamais modifiée)
et se termine par une ré-indexation du groupe de frères touché : après
chaque appel, les `order` valent 0..n-1 dans l'ordre du tableau.

Les opérations adressées par id trouvent le bloc à n'importe quelle
profondeur (enfants de card compris) et n'agissent que sur ses frères.
"""
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from ..blocks import BLOCK_REGISTRY, BaseBlock, CardBlock, UnknownBlock, new_block, new_block_id
from ..core.errors import InvalidVariantTransition, NotFound
from ..core.ordering import normalize, normalize_tree, reindex
from ..core.schemas import PageLayout

Siblings = List[BaseBlock]

# ── Clés de champs (nom Python → alias JSON) ─────────────────────────────────

def _collect_keys() -> Tuple[Dict[str, str], Dict[str, set]]:
    name_to_alias, variant_keys = {}, {}
    for tag, cls in BLOCK_REGISTRY.items():
        keys = set()
        for name, field in cls.model_fields.items():
            alias = field.alias or name
            name_to_alias[name] = alias
            keys.add(alias)
        variant_keys[tag] = keys
    return name_to_alias, variant_keys


_NAME_TO_ALIAS, _VARIANT_KEYS = _collect_keys()
_ALL_VARIANT_KEYS = set().union(*_VARIANT_KEYS.values())


def _alias_keys(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {_NAME_TO_ALIAS.get(k, k): v for k, v in fields.items()}


# ── Helpers ──────────────────────────────────────────────────────────────────

def _edit_siblings(blocks: Sequence[BaseBlock], block_id: str,
                   fn: Callable[[Siblings], Siblings]) -> Optional[Siblings]:
    """Applique fn au groupe de frères contenant block_id. None si l'id est absent."""
    if any(b.id == block_id for b in blocks):
        return fn(list(blocks))
    for i, b in enumerate(blocks):
        if isinstance(b, CardBlock):
            children = _edit_siblings(b.children, block_id, fn)
            if children is not None:
                out = list(blocks)
                out[i] = b.model_copy(update={"children": children})
                return out
    return None


def _index(blocks: Sequence[BaseBlock], block_id: str) -> int:
    return next(i for i, b in enumerate(blocks) if b.id == block_id)


def _with_blocks(document: PageLayout, blocks: Siblings) -> PageLayout:
    return document.model_copy(update={"blocks": blocks})


def _subtree_ids(block: BaseBlock) -> List[str]:
    ids = [block.id]
    if isinstance(block, CardBlock):
        for child in block.children:
            ids.extend(_subtree_ids(child))
    return ids


def _clone(block: BaseBlock) -> BaseBlock:
    """Copie du bloc (sous-arbre compris) avec des ids neufs."""
    update: Dict[str, Any] = {"id": new_block_id(block.type)}
    if isinstance(block, CardBlock):
        update["children"] = [_clone(c) for c in block.children]
    return block.model_copy(update=update)


# ── Opérations ───────────────────────────────────────────────────────────────

def add_block(document: PageLayout, template: Union[BaseBlock, str],
              parent_id: Optional[str] = None) -> Tuple[PageLayout, str]:
    """add() qui renvoie aussi l'id du bloc créé."""
    if isinstance(template, str) and template not in BLOCK_REGISTRY:
        raise InvalidVariantTransition(template, ["type"], "type de bloc inconnu")
    block = new_block(template) if isinstance(template, str) else _clone(template)

    if parent_id is None:
        block = block.model_copy(update={"order": len(document.blocks)})
        return _with_blocks(document, [*document.blocks, block]), block.id

    parent = document.find(parent_id)
    if parent is None:
        raise NotFound(parent_id)
    if not isinstance(parent, CardBlock):
        raise InvalidVariantTransition(parent.type, ["children"], "seule une card contient des blocs")

    def append_child(siblings: Siblings) -> Siblings:
        i = _index(siblings, parent_id)
        card = siblings[i]
        child = block.model_copy(update={"order": len(card.children)})
        siblings[i] = card.model_copy(update={"children": [*card.children, child]})
        return siblings

    return _with_blocks(document, _edit_siblings(document.blocks, parent_id, append_child)), block.id


def add(document: PageLayout, template: Union[BaseBlock, str],
        parent_id: Optional[str] = None) -> PageLayout:
    """Ajoute un bloc en fin de liste (ou en fin de card) avec un id neuf et order = len."""
    return add_block(document, template, parent_id)[0]


def remove(document: PageLayout, block_id: str) -> PageLayout:
    """Supprime le bloc (et tout son sous-arbre). Id absent → document inchangé."""
    blocks = _edit_siblings(
        document.blocks, block_id,
        lambda siblings: reindex([b for b in siblings if b.id != block_id]),
    )
    return document if blocks is None else _with_blocks(document, blocks)


def update(document: PageLayout, block_id: str, fields: Dict[str, Any]) -> PageLayout:
    """
    Fusionne `fields` dans le bloc. id et order restent inchangés sauf s'ils sont fournis.

    Raises:
        NotFound: id absent
        InvalidVariantTransition: champ d'un autre type de bloc, changement de `type`,
            ou valeur refusée par le schéma du bloc
    """
    block = document.find(block_id)
    if block is None:
        raise NotFound(block_id)

    data = _alias_keys(fields)
    if data.get("type", block.type) != block.type:
        raise InvalidVariantTransition(block.type, ["type"])
    if not isinstance(block, UnknownBlock):
        foreign = {k for k in data if k in _ALL_VARIANT_KEYS and k not in _VARIANT_KEYS[block.type]}
        if foreign:
            raise InvalidVariantTransition(block.type, foreign)
    try:
        updated = type(block).model_validate({**block.to_json(), **data})
    except ValidationError as e:
        raise InvalidVariantTransition(block.type, data, str(e)) from e
    if isinstance(updated, CardBlock) and "children" in data:
        updated = updated.model_copy(update={"children": normalize_tree(updated.children)})

    # ids du sous-arbre remplacé : uniques entre eux et absents du reste du document
    new_ids = _subtree_ids(updated)
    others = set(document.ids()) - set(_subtree_ids(block))
    taken = sorted(set(new_ids) & others)
    if taken or len(set(new_ids)) != len(new_ids):
        culprit = ["children"] if "children" in data else ["id"]
        raise InvalidVariantTransition(block.type, culprit, f"id déjà utilisé : {taken or new_ids}")

    def replace(siblings: Siblings) -> Siblings:
        siblings[_index(siblings, block_id)] = updated
        return normalize(siblings) if "order" in data else siblings

    return _with_blocks(document, _edit_siblings(document.blocks, block_id, replace))


def _move(document: PageLayout, block_id: str, delta: int) -> PageLayout:
    result = {"moved": False}

    def swap(siblings: Siblings) -> Siblings:
        i = _index(siblings, block_id)
        j = i + delta
        if not 0 <= j < len(siblings):
            return siblings
        siblings[i], siblings[j] = siblings[j], siblings[i]
        result["moved"] = True
        return reindex(siblings)

    blocks = _edit_siblings(document.blocks, block_id, swap)
    return _with_blocks(document, blocks) if result["moved"] else document


def move_up(document: PageLayout, block_id: str) -> PageLayout:
    """Échange avec le frère précédent. Premier bloc ou id absent → inchangé."""
    return _move(document, block_id, -1)


def move_down(document: PageLayout, block_id: str) -> PageLayout:
    """Échange avec le frère suivant. Dernier bloc ou id absent → inchangé."""
    return _move(document, block_id, +1)


def duplicate_block(document: PageLayout, block_id: str) -> Tuple[PageLayout, str]:
    """duplicate() qui renvoie aussi l'id de la copie."""
    original = document.find(block_id)
    if original is None:
        raise NotFound(block_id)
    clone = _clone(original)

    def insert_after(siblings: Siblings) -> Siblings:
        i = _index(siblings, block_id)
        if i + 1 < len(siblings):
            order = (siblings[i].order + siblings[i + 1].order) / 2
        else:
            order = siblings[i].order + 0.5
        return normalize([*siblings, clone.model_copy(update={"order": order})])

    return _with_blocks(document, _edit_siblings(document.blocks, block_id, insert_after)), clone.id


def duplicate(document: PageLayout, block_id: str) -> PageLayout:
    """
    Copie le bloc juste après l'original.

    La copie reçoit un ordre fractionnaire entre l'original et son successeur
    (original + 0.5 en fin de liste), puis le groupe est re-trié et ré-indexé.
    """
    return duplicate_block(document, block_id)[0]


def reorder_by_drag(document: PageLayout, dragged_id: str, target_index: int) -> PageLayout:
    """Retire le bloc glissé et le réinsère à target_index (borné à [0, len]). Blocs de premier niveau."""
    blocks = list(document.blocks)
    try:
        i = _index(blocks, dragged_id)
    except StopIteration:
        raise NotFound(dragged_id) from None
    dragged = blocks.pop(i)
    target = max(0, min(target_index, len(blocks)))
    if target == i:
        return document
    blocks.insert(target, dragged)
    return _with_blocks(document, reindex(blocks))


def swap_by_drag_exact(document: PageLayout, dragged_id: str, over_id: str) -> PageLayout:
    """Drop pile sur un autre bloc : le bloc glissé prend la position de over_id."""
    if dragged_id == over_id:
        return document
    try:
        target = _index(document.blocks, over_id)
    except StopIteration:
        raise NotFound(over_id) from None
    return reorder_by_drag(document, dragged_id, target)


__all__ = [
    "add", "add_block", "remove", "update", "move_up", "move_down",
    "duplicate", "duplicate_block", "reorder_by_drag", "swap_by_drag_exact",
]
