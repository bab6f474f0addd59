"""
Schémas Pydantic du funnel builder.
Structure : ParentRecord → steps[] → page_layout (PageLayout) → components[] (Block)

Le parent record (workflow template ou campagne) reste opaque : seuls `id`
et `page_layout` de chaque étape sont interprétés.
"""
import logging
from typing import Any, Dict, Iterator, List, Literal, Optional, Sequence, Set

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..blocks import BaseBlock, Block, CardBlock, new_block_id
from ..blocks.base import dump_fields
from .ordering import normalize_tree

log = logging.getLogger(__name__)

RecordKind = Literal["workflows", "campaigns"]


class ProgressIndicator(BaseModel):
    """Indicateur de progression affiché en tête d'étape (logo, numéros, barre)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow", frozen=True)

    show_logo: bool = False
    logo_url: str = ""
    logo_height: str = "64px"
    show_step_numbers: bool = True
    show_progress_bar: bool = True
    current_step: int = Field(default=1, ge=0)
    total_steps: int = Field(default=1, ge=0)
    completed_step_color: Optional[str] = None
    pending_step_color: Optional[str] = None

    def percentage(self) -> float:
        if not self.total_steps:
            return 0.0
        return max(0.0, min(100.0, self.current_step / self.total_steps * 100))


class PageLayout(BaseModel):
    """Document de layout d'une étape : blocs ordonnés + réglages de page."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow", frozen=True)

    blocks: List[Block] = Field(default_factory=list, alias="components")
    background_color: str = ""
    container_width: str = "800px"
    padding: str = "2rem"
    progress_indicator: Optional[ProgressIndicator] = None

    # ── Sérialisation ────────────────────────────────────────────────────────

    @classmethod
    def from_json(cls, value: Dict[str, Any]) -> "PageLayout":
        """
        Valeur JSON stockée → document. Ordres normalisés si la donnée ne l'est pas ;
        un id déjà vu plus haut dans le document est remplacé par un id neuf.
        """
        layout = cls.model_validate(value)
        blocks = _dedupe_ids(normalize_tree(layout.blocks), set())
        if blocks != list(layout.blocks):
            layout = layout.model_copy(update={"blocks": blocks})
        return layout

    def to_json(self) -> Dict[str, Any]:
        data = dump_fields(self, exclude={"blocks", "progress_indicator"})
        data["components"] = [b.to_json() for b in self.blocks]
        if self.progress_indicator is not None:
            data["progressIndicator"] = dump_fields(self.progress_indicator)
        elif "progress_indicator" in self.model_fields_set:
            data["progressIndicator"] = None
        return data

    # ── Navigation ───────────────────────────────────────────────────────────

    def walk(self) -> Iterator[BaseBlock]:
        """Tous les blocs, en profondeur d'abord, dans l'ordre."""
        return _walk(self.blocks)

    def find(self, block_id: str) -> Optional[BaseBlock]:
        return next((b for b in self.walk() if b.id == block_id), None)

    def ids(self) -> List[str]:
        return [b.id for b in self.walk()]


def _walk(blocks) -> Iterator[BaseBlock]:
    for b in blocks:
        yield b
        if isinstance(b, CardBlock):
            yield from _walk(b.children)


def _dedupe_ids(blocks: Sequence[BaseBlock], seen: Set[str]) -> List[BaseBlock]:
    result = []
    for b in blocks:
        if b.id in seen:
            fresh = new_block_id(b.type)
            log.warning("Id de bloc dupliqué %r renommé en %r", b.id, fresh)
            b = b.model_copy(update={"id": fresh})
        seen.add(b.id)
        if isinstance(b, CardBlock):
            children = _dedupe_ids(b.children, seen)
            if children != list(b.children):
                b = b.model_copy(update={"children": children})
        result.append(b)
    return result


# ── Parent record ────────────────────────────────────────────────────────────

class WorkflowStep(BaseModel):
    """Vue typée d'une étape du parent record (clés inconnues conservées)."""
    model_config = ConfigDict(extra="allow")

    id: str
    label: str = ""
    order: int = 0
    enabled: bool = True
    is_custom: bool = False
    description: Optional[str] = None
    page_layout: Optional[Dict[str, Any]] = None

    @property
    def has_custom_layout(self) -> bool:
        return bool(self.page_layout)


class ParentRecord(BaseModel):
    """
    Workflow template ou campagne. `steps` garde les descripteurs JSON bruts :
    une sauvegarde ne touche qu'au `page_layout` de l'étape ciblée.
    """
    model_config = ConfigDict(frozen=True)

    kind: RecordKind = "workflows"
    id: str
    name: str = ""
    steps: List[Dict[str, Any]] = Field(default_factory=list)

    def typed_steps(self) -> List[WorkflowStep]:
        return [WorkflowStep.model_validate(s) for s in self.steps]


__all__ = [
    "RecordKind", "ProgressIndicator", "PageLayout", "WorkflowStep", "ParentRecord",
]
