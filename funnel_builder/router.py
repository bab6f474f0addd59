"""
Router FastAPI — endpoints funnel_builder.

GET  /funnel-builder/catalog                                    → blocs disponibles + JSON schemas
GET  /funnel-builder/roles                                      → rôles d'étape avec layout par défaut
GET  /funnel-builder/{kind}                                     → parent records (workflows | campaigns)
POST /funnel-builder/{kind}                                     → nouveau parent record
GET  /funnel-builder/{kind}/{record_id}/steps                   → étapes éditables
GET  /funnel-builder/{kind}/{record_id}/steps/{step_id}/layout  → layout sauvegardé ou par défaut
PUT  /funnel-builder/{kind}/{record_id}/steps/{step_id}/layout  → sauvegarde du layout de l'étape
POST /funnel-builder/validate                                   → {"valid": bool, "error"?}
"""
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError

from .blocks import block_catalog
from .core.errors import ParentRecordMissingStep, ParentRecordNotFound, PersistenceFailure
from .core.schemas import PageLayout, RecordKind
from .defaults import available_roles
from .editor import EditorSession
from .models import LayoutResponse, RecordCreate, StepSummary, ValidateResponse
from .persistence.adapter import editable_steps
from .persistence.store import LayoutStore

log = logging.getLogger(__name__)

router = APIRouter(prefix="/funnel-builder", tags=["funnel_builder"])


def get_store() -> LayoutStore:
    return LayoutStore()


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, ParentRecordNotFound):
        return HTTPException(404, str(e))
    if isinstance(e, ParentRecordMissingStep):
        return HTTPException(409, f"{e} — recharger le parent record")
    log.error("Persistance indisponible : %s", e)
    return HTTPException(503, str(e))


@router.get("/catalog", summary="Liste les blocs disponibles et leurs schemas")
def catalog() -> Dict[str, Any]:
    return {"blocks": block_catalog()}


@router.get("/roles", summary="Rôles d'étape ayant un layout par défaut")
def roles() -> Dict[str, List[str]]:
    return {"roles": available_roles()}


@router.post("/validate", response_model=ValidateResponse, summary="Valide un layout sans le sauvegarder")
def validate(payload: Dict[str, Any] = Body(...)) -> ValidateResponse:
    try:
        layout = PageLayout.from_json(payload)
    except ValidationError as e:
        return ValidateResponse(valid=False, error=str(e))
    return ValidateResponse(valid=True, blocks=len(layout.ids()))


@router.get("/{kind}", summary="Liste les parent records")
def list_records(kind: RecordKind, store: LayoutStore = Depends(get_store)) -> List[Dict[str, Any]]:
    try:
        records = store.list(kind)
    except PersistenceFailure as e:
        raise _http_error(e)
    return [{"id": r.id, "name": r.name, "steps": len(r.steps)} for r in records]


@router.post("/{kind}", status_code=201, summary="Crée un parent record")
def create_record(kind: RecordKind, body: RecordCreate, store: LayoutStore = Depends(get_store)) -> Dict[str, Any]:
    try:
        record = store.create(kind, body.name, body.steps, body.description)
    except PersistenceFailure as e:
        raise _http_error(e)
    return {"id": record.id, "name": record.name, "steps": len(record.steps)}


@router.get("/{kind}/{record_id}/steps", response_model=List[StepSummary], summary="Étapes éditables")
def list_steps(kind: RecordKind, record_id: str, store: LayoutStore = Depends(get_store)) -> List[StepSummary]:
    try:
        record = store.get(kind, record_id)
    except (ParentRecordNotFound, PersistenceFailure) as e:
        raise _http_error(e)
    return [
        StepSummary(id=s.id, label=s.label, order=s.order, description=s.description,
                    has_layout=s.has_custom_layout)
        for s in editable_steps(record)
    ]


@router.get("/{kind}/{record_id}/steps/{step_id}/layout", response_model=LayoutResponse,
            summary="Layout de l'étape (layout par défaut si jamais sauvegardé)")
def get_layout(kind: RecordKind, record_id: str, step_id: str,
               store: LayoutStore = Depends(get_store)) -> LayoutResponse:
    try:
        session = EditorSession.open(kind, record_id, step_id, store)
    except (ParentRecordNotFound, ParentRecordMissingStep, PersistenceFailure) as e:
        raise _http_error(e)
    return LayoutResponse(record_id=record_id, step_id=step_id,
                          synthesized=session.synthesized, layout=session.document.to_json())


@router.put("/{kind}/{record_id}/steps/{step_id}/layout", response_model=LayoutResponse,
            summary="Sauvegarde le layout de l'étape")
def put_layout(kind: RecordKind, record_id: str, step_id: str,
               payload: Dict[str, Any] = Body(...),
               store: LayoutStore = Depends(get_store)) -> LayoutResponse:
    try:
        layout = PageLayout.from_json(payload)
    except ValidationError as e:
        raise HTTPException(422, str(e))
    try:
        store.save_layout(kind, record_id, step_id, layout)
    except (ParentRecordNotFound, ParentRecordMissingStep, PersistenceFailure) as e:
        raise _http_error(e)
    return LayoutResponse(record_id=record_id, step_id=step_id, synthesized=False, layout=layout.to_json())
