"""
Erreurs du funnel builder.

NotFound / InvalidVariantTransition : erreurs structurelles, absorbées par la
session d'édition (no-op). PersistenceFailure / ParentRecordMissingStep /
ParentRecordNotFound : remontent toujours à l'opérateur.
"""
from typing import Iterable, Optional


class LayoutError(Exception):
    """Erreur de base."""


class NotFound(LayoutError):
    def __init__(self, block_id: str):
        super().__init__(f"Bloc introuvable : {block_id!r}")
        self.block_id = block_id


class InvalidVariantTransition(LayoutError):
    def __init__(self, block_type: str, fields: Iterable[str] = (), detail: Optional[str] = None):
        self.block_type = block_type
        self.fields = sorted(fields)
        msg = f"Champs invalides pour un bloc {block_type!r} : {self.fields}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class PersistenceFailure(LayoutError):
    """Écriture du parent record échouée — le document local est conservé, on peut réessayer."""

    def __init__(self, record_id: str, reason: str = ""):
        super().__init__(f"Échec de sauvegarde du record {record_id!r}" + (f" : {reason}" if reason else ""))
        self.record_id = record_id
        self.retryable = True


class ParentRecordMissingStep(LayoutError):
    """L'étape n'existe plus dans le parent record (supprimée entre-temps) : recharger avant de réessayer."""

    def __init__(self, step_id: str):
        super().__init__(f"Étape introuvable dans le parent record : {step_id!r}")
        self.step_id = step_id


class ParentRecordNotFound(LayoutError):
    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} introuvable : {record_id!r}")
        self.kind = kind
        self.record_id = record_id
