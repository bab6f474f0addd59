"""SQLite — init + session + CRUD helpers des parent records"""
import json, os
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base, CampaignDB, WorkflowTemplateDB, RECORD_MODELS

DATA_DIR = Path(__file__).parent.parent / "data"

DB_PATH      = os.getenv("DB_PATH", str(DATA_DIR / "funnel_builder.db"))
ENGINE       = create_engine(f"sqlite:///{DB_PATH}", connect_args={"check_same_thread": False})
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=ENGINE)


def init_db(db_url: Optional[str] = None):
    """Crée les tables. `db_url` rebranche le module sur une autre base (tests, autre fichier)."""
    global ENGINE
    if db_url:
        ENGINE = create_engine(db_url, connect_args={"check_same_thread": False})
        SessionLocal.configure(bind=ENGINE)
    elif ENGINE.url.database:
        Path(ENGINE.url.database).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=ENGINE)


def new_session() -> Session:
    """Session indépendante (sauvegardes exécutées hors de la boucle UI)."""
    return SessionLocal()


# ── JSON helpers ──
def jl(s: str) -> list:
    try: return json.loads(s or "[]")
    except json.JSONDecodeError: return []

def jd(o) -> str:
    return json.dumps(o, ensure_ascii=False)


# ── Parent records ──
def db_get_record(db: Session, kind: str, rid: str):
    return db.query(RECORD_MODELS[kind]).filter_by(id=rid).first()

def db_list_records(db: Session, kind: str) -> list:
    model = RECORD_MODELS[kind]
    return db.query(model).order_by(model.created_at.desc()).all()

def db_update_steps(db: Session, record, steps: list):
    record.workflow_config = jd(steps)
    db.commit(); db.refresh(record); return record


# ── Workflow templates ──
def db_create_workflow(db: Session, name: str, steps: list, description: Optional[str] = None) -> WorkflowTemplateDB:
    obj = WorkflowTemplateDB(name=name, description=description, workflow_config=jd(steps))
    db.add(obj); db.commit(); db.refresh(obj); return obj


# ── Campaigns ──
def db_create_campaign(db: Session, name: str, steps: list) -> CampaignDB:
    obj = CampaignDB(name=name, workflow_config=jd(steps))
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_create_record(db: Session, kind: str, name: str, steps: list, description: Optional[str] = None):
    if kind == "workflows":
        return db_create_workflow(db, name, steps, description)
    return db_create_campaign(db, name, steps)
