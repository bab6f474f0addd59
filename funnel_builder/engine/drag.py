"""
Glisser-déposer de la liste de structure.

Les événements "drag over" ne mettent à jour qu'un aperçu (surlignage) ;
seul "drag end" produit la mutation du document, en un seul appel moteur.
Destinations : un bloc (drop pile dessus) ou une zone entre deux blocs.
"""
import logging
import re
from typing import Optional, Tuple, Union

from ..core.schemas import PageLayout
from .mutations import reorder_by_drag, swap_by_drag_exact

log = logging.getLogger(__name__)

_DROP_ZONE_RE = re.compile(r"^drop-zone-(?P<id>.+)-(?P<index>\d+)$")

Destination = Union[str, int, None]
Preview = Optional[Tuple[str, Union[str, int]]]


def drop_zone_id(block_id: str, index: int) -> str:
    """Id d'une zone de dépôt : "drop-zone-<id>-<index>" (zone `index` = avant le bloc `index`)."""
    return f"drop-zone-{block_id}-{index}"


def parse_drop_zone(value: str) -> Optional[int]:
    """"drop-zone-heading-3f2a-2" → 2 ; None si ce n'est pas un id de zone."""
    match = _DROP_ZONE_RE.match(value)
    return int(match.group("index")) if match else None


def zone_to_target_index(document: PageLayout, dragged_id: str, zone_index: int) -> int:
    """Zone `k` = avant le bloc `k` du document courant ; compense le retrait du bloc glissé."""
    current = next((i for i, b in enumerate(document.blocks) if b.id == dragged_id), None)
    if current is not None and zone_index > current:
        return zone_index - 1
    return zone_index


class DragSession:
    """
    Un geste de glisser-déposer.

    Usage:
        >>> drag = DragSession()
        >>> drag.drag_start("text-1")
        >>> drag.drag_over(2)            # aperçu seulement
        >>> layout = drag.drag_end(layout, "text-1", 2)
    """

    def __init__(self):
        self.active_id: Optional[str] = None
        self.preview: Preview = None

    @property
    def dragging(self) -> bool:
        return self.active_id is not None

    def drag_start(self, block_id: str):
        self.active_id = block_id
        self.preview = None

    def drag_over(self, target: Destination):
        """Met à jour l'aperçu. Ne touche jamais au document."""
        if target is None:
            self.preview = None
        elif isinstance(target, int):
            self.preview = ("zone", target)
        elif (zone := parse_drop_zone(target)) is not None:
            self.preview = ("zone", zone)
        else:
            self.preview = ("block", target)

    def cancel(self):
        self.active_id = None
        self.preview = None

    def drag_end(self, document: PageLayout, block_id: str, destination: Destination) -> PageLayout:
        """
        Fin du geste : la seule mutation du document.

        destination : id d'un bloc, index ou id de zone de dépôt, ou None (lâché hors cible).
        Lève NotFound si un des ids n'est plus dans le document.
        """
        self.cancel()
        if destination is None or destination == block_id:
            return document

        if isinstance(destination, str):
            zone = parse_drop_zone(destination)
            if zone is None:
                log.debug("Drop %s sur le bloc %s", block_id, destination)
                return swap_by_drag_exact(document, block_id, destination)
            destination = zone

        log.debug("Drop %s sur la zone %d", block_id, destination)
        return reorder_by_drag(document, block_id, zone_to_target_index(document, block_id, destination))
