"""
Default-Layout Factory — layout pré-rempli pour une étape jamais sauvegardée.

Consultée uniquement quand l'étape n'a pas de `page_layout` : un layout
sauvegardé l'emporte toujours sur les valeurs par défaut.
"""
from typing import List

from ..blocks import BaseBlock, new_block
from ..core.i18n import DEFAULT_LANG, resolve, resolve_strings
from ..core.schemas import PageLayout
from .templates import FALLBACK_TEMPLATE, STEP_TEMPLATES


def available_roles() -> List[str]:
    return list(STEP_TEMPLATES)


def _build(entry: dict, order: int) -> BaseBlock:
    fields = dict(entry)
    block_type = fields.pop("type")
    children = fields.pop("children", None)
    if children is not None:
        fields["children"] = [_build(child, i) for i, child in enumerate(children)]
    return new_block(block_type, order=order, **fields)


def synthesize(step_role: str, step_label: str, lang: str = DEFAULT_LANG) -> PageLayout:
    """
    Layout par défaut d'un rôle d'étape.

    Même rôle → même structure (seuls les ids, neufs à chaque appel, diffèrent).
    Rôle inconnu / personnalisé → un seul titre avec le libellé de l'étape.

    Args:
        step_role: id sémantique de l'étape ("initial_data", "customize_front", ...)
        step_label: libellé affiché de l'étape ("Seus Dados")
        lang: langue des textes par défaut
    """
    label = step_label or resolve("@defaults.fallback.untitled", lang=lang)
    entries = resolve_strings(STEP_TEMPLATES.get(step_role, FALLBACK_TEMPLATE), lang, {"step_label": label})
    return PageLayout(blocks=[_build(entry, i) for i, entry in enumerate(entries)])
