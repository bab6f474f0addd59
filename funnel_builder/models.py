"""
Data models — WorkflowTemplate, Campaign (parent records du layout)
SQLAlchemy (SQLite) + Pydantic v2

Les étapes sont stockées en JSON dans `workflow_config` ; chaque étape peut
porter son layout sous `page_layout`.
"""
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

import sqlalchemy as sa
from pydantic import BaseModel, Field
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class WorkflowTemplateDB(Base):
    __tablename__ = "workflow_templates"
    id:              Mapped[str]           = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name:            Mapped[str]           = mapped_column(sa.String, nullable=False)
    description:     Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    workflow_config: Mapped[str]           = mapped_column(sa.Text, default="[]")
    created_at:      Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at:      Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class CampaignDB(Base):
    __tablename__ = "campaigns"
    id:              Mapped[str]      = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name:            Mapped[str]      = mapped_column(sa.String, nullable=False)
    unique_link:     Mapped[str]      = mapped_column(sa.String, unique=True, default=lambda: uuid.uuid4().hex[:12])
    workflow_config: Mapped[str]      = mapped_column(sa.Text, default="[]")
    created_at:      Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at:      Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


RECORD_MODELS = {
    "workflows": WorkflowTemplateDB,
    "campaigns": CampaignDB,
}


# ── PYDANTIC SCHEMAS ────────────────────────────────────────────────────

class StepSummary(BaseModel):
    id:          str
    label:       str
    order:       int
    description: Optional[str] = None
    has_layout:  bool          = False


class LayoutResponse(BaseModel):
    record_id:   str
    step_id:     str
    synthesized: bool
    layout:      Dict[str, Any]


class ValidateResponse(BaseModel):
    valid: bool
    error: Optional[str] = None
    blocks: int = 0


class RecordCreate(BaseModel):
    name:        str
    description: Optional[str]        = None
    steps:       List[Dict[str, Any]] = Field(default_factory=list)
