"""
Sélection — le bloc cible de l'édition de propriétés.

Source unique lue à la fois par la liste de structure et par le canvas :
les deux vues s'abonnent au même contrôleur au lieu de garder leur copie.
État éphémère, jamais persisté.
"""
import logging
from typing import Callable, List, Optional, Union

from pydantic import BaseModel, ConfigDict

from ..blocks import CardBlock
from ..core.schemas import PageLayout

log = logging.getLogger(__name__)


class Unselected(BaseModel):
    model_config = ConfigDict(frozen=True)


class Selected(BaseModel):
    model_config = ConfigDict(frozen=True)
    block_id: str


SelectionState = Union[Unselected, Selected]
Listener = Callable[[Optional[str]], None]


class SelectionController:
    """
    Usage:
        >>> selection = SelectionController()
        >>> unsubscribe = selection.subscribe(lambda block_id: print(block_id))
        >>> selection.select("heading-1a2b3c4d5e6f")
        heading-1a2b3c4d5e6f
    """

    def __init__(self):
        self._selected: Optional[str] = None
        self._listeners: List[Listener] = []

    @property
    def selected_block_id(self) -> Optional[str]:
        return self._selected

    @property
    def state(self) -> SelectionState:
        return Selected(block_id=self._selected) if self._selected is not None else Unselected()

    def is_selected(self, block_id: str) -> bool:
        return self._selected == block_id

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Enregistre un listener ; renvoie la fonction de désabonnement."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, block_id: Optional[str]):
        if block_id == self._selected:
            return
        self._selected = block_id
        for listener in list(self._listeners):
            listener(block_id)

    # ── Transitions ──────────────────────────────────────────────────────────

    def select(self, block_id: Optional[str]):
        """Clic dans la liste ou le canvas."""
        self._set(block_id)

    def clear(self):
        self._set(None)

    def document_loaded(self):
        self._set(None)

    def block_created(self, block_id: str):
        """Ajout ou duplication : la sélection suit le nouveau bloc."""
        self._set(block_id)

    def block_removed(self, block_id: str, document: PageLayout):
        """
        Appelé après remove(). `document` est le document résultant : la sélection
        est vidée si le bloc sélectionné n'y figure plus (bloc supprimé ou
        descendant d'une card supprimée).
        """
        if self._selected is None:
            return
        if self._selected == block_id or document.find(self._selected) is None:
            log.debug("Sélection %s supprimée", self._selected)
            self._set(None)

    def selected_block(self, document: PageLayout):
        """Bloc sélectionné dans `document`, ou None."""
        if self._selected is None:
            return None
        return document.find(self._selected)


def selected_path(document: PageLayout, block_id: Optional[str]) -> List[str]:
    """Ids des ancêtres (cards) du bloc, du plus haut au plus proche."""
    def search(blocks, path):
        for b in blocks:
            if b.id == block_id:
                return path
            if isinstance(b, CardBlock):
                found = search(b.children, [*path, b.id])
                if found is not None:
                    return found
        return None

    if block_id is None:
        return []
    return search(document.blocks, []) or []
