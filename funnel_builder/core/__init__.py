"""Core module pour funnel_builder."""
from .errors import (
    LayoutError,
    NotFound,
    InvalidVariantTransition,
    PersistenceFailure,
    ParentRecordMissingStep,
    ParentRecordNotFound,
)
from .ordering import reindex, normalize, normalize_tree, is_dense
from .schemas import (
    RecordKind,
    ProgressIndicator,
    PageLayout,
    WorkflowStep,
    ParentRecord,
)

__all__ = [
    "LayoutError",
    "NotFound",
    "InvalidVariantTransition",
    "PersistenceFailure",
    "ParentRecordMissingStep",
    "ParentRecordNotFound",
    "reindex",
    "normalize",
    "normalize_tree",
    "is_dense",
    "RecordKind",
    "ProgressIndicator",
    "PageLayout",
    "WorkflowStep",
    "ParentRecord",
]
