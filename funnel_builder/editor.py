"""
Session d'édition d'une étape — frontière entre les collaborateurs UI et le moteur.

  ouverture → layout sauvegardé (adapter) ou layout par défaut (factory)
  intents du panneau de propriétés / de la liste → mutations du moteur (1:1)
  sélection tenue à jour → sauvegarde asynchrone → ou abandon

Les erreurs structurelles (NotFound, InvalidVariantTransition) sont absorbées
ici : le document reste inchangé. Les erreurs de persistance remontent.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, Optional, Union

from pydantic import ValidationError

from .blocks import BaseBlock
from .core.errors import InvalidVariantTransition, NotFound, PersistenceFailure
from .core.schemas import PageLayout, ParentRecord, RecordKind
from .defaults import synthesize
from .engine import mutations
from .engine.drag import Destination, DragSession
from .engine.selection import SelectionController
from .persistence import adapter
from .persistence.store import LayoutStore

log = logging.getLogger(__name__)


class EditorSession:
    """
    Usage:
        >>> session = EditorSession.open("campaigns", campaign_id, "initial_data", store)
        >>> session.add_block("heading")
        >>> session.update_selected({"content": "Seus Dados"})
        >>> await session.save()
    """

    def __init__(self, kind: RecordKind, record: ParentRecord, step_id: str,
                 document: PageLayout, store: Optional[LayoutStore] = None,
                 synthesized: bool = False):
        self.kind = kind
        self.record = record
        self.step_id = step_id
        self.store = store
        self.synthesized = synthesized
        self.selection = SelectionController()
        self.drag = DragSession()
        self.document = document
        self.dirty = synthesized
        self.saving = False
        self.last_error: Optional[PersistenceFailure] = None

    # ── Ouverture ────────────────────────────────────────────────────────────

    @classmethod
    def from_record(cls, record: ParentRecord, step_id: str,
                    store: Optional[LayoutStore] = None) -> "EditorSession":
        """Layout sauvegardé de l'étape, sinon layout par défaut de son rôle."""
        document = adapter.load(record, step_id)
        synthesized = document is None
        if synthesized:
            step = next(s for s in record.typed_steps() if s.id == step_id)
            document = synthesize(step.id, step.label)
            log.info("Étape %s sans layout — layout par défaut (%d blocs)", step_id, len(document.blocks))
        return cls(record.kind, record, step_id, document, store=store, synthesized=synthesized)

    @classmethod
    def open(cls, kind: RecordKind, record_id: str, step_id: str, store: LayoutStore) -> "EditorSession":
        return cls.from_record(store.get(kind, record_id), step_id, store=store)

    def load_document(self, document: PageLayout):
        """Remplace le document (rechargement) : la sélection repart de zéro."""
        self.document = document
        self.dirty = False
        self.selection.document_loaded()

    # ── Frontière moteur ─────────────────────────────────────────────────────

    def _apply(self, operation: Callable[..., Any], *args) -> Any:
        """Exécute une mutation ; NotFound / InvalidVariantTransition → no-op."""
        try:
            return operation(self.document, *args)
        except (NotFound, InvalidVariantTransition) as e:
            log.debug("Mutation ignorée (%s) : %s", operation.__name__, e)
            return None

    def _commit(self, document: Optional[PageLayout]) -> bool:
        if document is None or document is self.document:
            return False
        self.document = document
        self.dirty = True
        return True

    @property
    def selected_block(self) -> Optional[BaseBlock]:
        return self.selection.selected_block(self.document)

    def select(self, block_id: Optional[str]):
        self.selection.select(block_id)

    # ── Intents (liste de structure / panneau de propriétés) ─────────────────

    def add_block(self, template: Union[BaseBlock, str], parent_id: Optional[str] = None) -> Optional[str]:
        result = self._apply(mutations.add_block, template, parent_id)
        if result is None:
            return None
        document, new_id = result
        self._commit(document)
        self.selection.block_created(new_id)
        return new_id

    def update_block(self, block_id: str, fields: Dict[str, Any]) -> bool:
        return self._commit(self._apply(mutations.update, block_id, fields))

    def remove_block(self, block_id: str) -> bool:
        changed = self._commit(self._apply(mutations.remove, block_id))
        self.selection.block_removed(block_id, self.document)
        return changed

    def duplicate_block(self, block_id: str) -> Optional[str]:
        result = self._apply(mutations.duplicate_block, block_id)
        if result is None:
            return None
        document, new_id = result
        self._commit(document)
        self.selection.block_created(new_id)
        return new_id

    def move_block_up(self, block_id: str) -> bool:
        return self._commit(self._apply(mutations.move_up, block_id))

    def move_block_down(self, block_id: str) -> bool:
        return self._commit(self._apply(mutations.move_down, block_id))

    def update_selected(self, fields: Dict[str, Any]) -> bool:
        block_id = self.selection.selected_block_id
        return block_id is not None and self.update_block(block_id, fields)

    def delete_selected(self) -> bool:
        block_id = self.selection.selected_block_id
        return block_id is not None and self.remove_block(block_id)

    def duplicate_selected(self) -> Optional[str]:
        block_id = self.selection.selected_block_id
        return self.duplicate_block(block_id) if block_id is not None else None

    def move_selected_up(self) -> bool:
        block_id = self.selection.selected_block_id
        return block_id is not None and self.move_block_up(block_id)

    def move_selected_down(self) -> bool:
        block_id = self.selection.selected_block_id
        return block_id is not None and self.move_block_down(block_id)

    def update_page(self, **settings) -> bool:
        """Réglages de page (backgroundColor, containerWidth, padding, progressIndicator)."""
        aliases = {name: field.alias or name for name, field in PageLayout.model_fields.items()}
        data = {**self.document.to_json(), **{aliases.get(k, k): v for k, v in settings.items()}}
        try:
            document = PageLayout.model_validate(data)
        except ValidationError as e:
            log.debug("Réglages de page ignorés : %s", e)
            return False
        return self._commit(document)

    # ── Glisser-déposer ──────────────────────────────────────────────────────

    def drag_start(self, block_id: str):
        self.drag.drag_start(block_id)

    def drag_over(self, target: Destination):
        self.drag.drag_over(target)

    def drag_end(self, block_id: str, destination: Destination) -> bool:
        return self._commit(self._apply(self.drag.drag_end, block_id, destination))

    # ── Sauvegarde ───────────────────────────────────────────────────────────

    async def save(self) -> ParentRecord:
        """
        Écrit le layout dans le parent record sans bloquer la boucle UI.

        Les mutations locales restent possibles pendant l'écriture. En cas
        d'échec, le document local est conservé (pas de rollback) et l'erreur
        remonte : l'opérateur peut réessayer.
        """
        if self.store is None:
            raise RuntimeError("Session sans store : sauvegarde impossible")
        document = self.document
        self.saving = True
        try:
            record = await asyncio.to_thread(
                self.store.save_layout, self.kind, self.record.id, self.step_id, document,
            )
        except PersistenceFailure as e:
            self.last_error = e
            log.error("Sauvegarde de l'étape %s échouée : %s", self.step_id, e)
            raise
        finally:
            self.saving = False
        self.last_error = None
        self.record = record
        self.synthesized = False
        self.dirty = self.document is not document
        return record

    def discard(self):
        """Ferme sans sauvegarder : le store n'est jamais appelé."""
        log.info("Édition de l'étape %s abandonnée (modifications non sauvegardées : %s)", self.step_id, self.dirty)
        self.document = PageLayout()
        self.dirty = False
        self.selection.document_loaded()
