"""
Store des parent records (tables `workflow_templates` / `campaigns`).

save_layout() relit le record dans sa transaction avant d'écrire : on part de
l'état courant des autres étapes, pas de la copie chargée à l'ouverture de
l'éditeur. Deux opérateurs sur deux étapes différentes ne s'écrasent pas ;
sur la même étape, la dernière sauvegarde gagne.
"""
import logging
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import database
from ..core.errors import ParentRecordNotFound, PersistenceFailure
from ..core.schemas import PageLayout, ParentRecord
from . import adapter

log = logging.getLogger(__name__)


def to_parent_record(kind: str, row) -> ParentRecord:
    return ParentRecord(kind=kind, id=row.id, name=row.name, steps=database.jl(row.workflow_config))


class LayoutStore:
    """Accès aux parent records ; chaque appel ouvre sa propre session."""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        self._session_factory = session_factory or database.new_session

    def get(self, kind: str, record_id: str) -> ParentRecord:
        try:
            with self._session_factory() as db:
                row = database.db_get_record(db, kind, record_id)
                if row is None:
                    raise ParentRecordNotFound(kind, record_id)
                return to_parent_record(kind, row)
        except SQLAlchemyError as e:
            log.error("Lecture %s/%s impossible : %s", kind, record_id, e)
            raise PersistenceFailure(record_id, str(e)) from e

    def list(self, kind: str) -> List[ParentRecord]:
        try:
            with self._session_factory() as db:
                return [to_parent_record(kind, row) for row in database.db_list_records(db, kind)]
        except SQLAlchemyError as e:
            log.error("Liste %s impossible : %s", kind, e)
            raise PersistenceFailure(kind, str(e)) from e

    def create(self, kind: str, name: str, steps: List[dict], description: Optional[str] = None) -> ParentRecord:
        try:
            with self._session_factory() as db:
                row = database.db_create_record(db, kind, name, steps, description)
                record = to_parent_record(kind, row)
        except SQLAlchemyError as e:
            log.error("Création %s %r impossible : %s", kind, name, e)
            raise PersistenceFailure(name, str(e)) from e
        log.info("%s créé : %s (%d étapes)", kind, record.id, len(steps))
        return record

    def save_layout(self, kind: str, record_id: str, step_id: str, document: PageLayout) -> ParentRecord:
        """
        Écrit le layout d'une étape dans le record courant.

        Raises:
            ParentRecordNotFound: record supprimé
            ParentRecordMissingStep: étape supprimée entre-temps
            PersistenceFailure: erreur du backend (réessayable)
        """
        try:
            with self._session_factory() as db:
                row = database.db_get_record(db, kind, record_id)
                if row is None:
                    raise ParentRecordNotFound(kind, record_id)
                record = adapter.save(to_parent_record(kind, row), step_id, document)
                database.db_update_steps(db, row, record.steps)
        except SQLAlchemyError as e:
            log.error("Sauvegarde %s/%s (étape %s) échouée : %s", kind, record_id, step_id, e)
            raise PersistenceFailure(record_id, str(e)) from e
        log.info("Layout sauvegardé — %s/%s étape %s (%d blocs)", kind, record_id, step_id, len(document.blocks))
        return record
