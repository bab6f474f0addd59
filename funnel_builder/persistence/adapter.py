"""
Persistence Adapter — lecture / écriture du layout d'une étape dans le parent record.

Le layout vit dans `steps[i].page_layout` (JSON opaque pour le store).
save() ne remplace que le descripteur de l'étape ciblée : les autres étapes
restent les mêmes objets, ce qui évite d'écraser les éditions concurrentes
d'autres étapes. Étapes localisées par `id`, jamais par position.
"""
from typing import List, Optional

from ..core.errors import ParentRecordMissingStep
from ..core.schemas import PageLayout, ParentRecord, WorkflowStep


def _step_index(record: ParentRecord, step_id: str) -> int:
    for i, step in enumerate(record.steps):
        if step.get("id") == step_id:
            return i
    raise ParentRecordMissingStep(step_id)


def load(record: ParentRecord, step_id: str) -> Optional[PageLayout]:
    """Layout sauvegardé de l'étape, ou None si l'étape n'en a pas encore."""
    raw = record.steps[_step_index(record, step_id)].get("page_layout")
    if not raw:
        return None
    return PageLayout.from_json(raw)


def save(record: ParentRecord, step_id: str, document: PageLayout) -> ParentRecord:
    """Nouveau record où seul `page_layout` de l'étape `step_id` a changé."""
    i = _step_index(record, step_id)
    steps = list(record.steps)
    steps[i] = {**steps[i], "page_layout": document.to_json()}
    return record.model_copy(update={"steps": steps})


def editable_steps(record: ParentRecord) -> List[WorkflowStep]:
    """Étapes actives, triées par `order` (liste des pages éditables d'une campagne)."""
    return sorted((s for s in record.typed_steps() if s.enabled), key=lambda s: s.order)

