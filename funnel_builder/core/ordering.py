"""
Ordre des blocs frères : `order` dense 0..n-1 égal à la position dans le tableau.

reindex()   : ré-indexe depuis la position courante (après swap / splice / suppression)
normalize() : trie d'abord par `order` (insertion à une clé fractionnaire), puis ré-indexe
Les ordres fractionnaires ne survivent jamais à une mutation.
"""
from typing import List, Sequence

from ..blocks import BaseBlock, CardBlock


def reindex(blocks: Sequence[BaseBlock]) -> List[BaseBlock]:
    """`order` = position. Les blocs déjà à leur place sont réutilisés tels quels."""
    return [
        b if b.order == i else b.model_copy(update={"order": i})
        for i, b in enumerate(blocks)
    ]


def normalize(blocks: Sequence[BaseBlock]) -> List[BaseBlock]:
    """Tri stable par `order` puis reindex()."""
    return reindex(sorted(blocks, key=lambda b: b.order))


def normalize_tree(blocks: Sequence[BaseBlock]) -> List[BaseBlock]:
    """normalize() récursif sur les enfants des cards."""
    result = []
    for b in normalize(blocks):
        if isinstance(b, CardBlock):
            children = normalize_tree(b.children)
            if children != list(b.children):
                b = b.model_copy(update={"children": children})
        result.append(b)
    return result


def is_dense(blocks: Sequence[BaseBlock]) -> bool:
    """True si les `order` valent exactement 0..n-1 dans l'ordre du tableau (récursif)."""
    for i, b in enumerate(blocks):
        if b.order != i:
            return False
        if isinstance(b, CardBlock) and not is_dense(b.children):
            return False
    return True
