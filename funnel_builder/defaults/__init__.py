"""Layouts par défaut par rôle d'étape."""
from .factory import synthesize, available_roles
from .templates import STEP_TEMPLATES, FALLBACK_TEMPLATE

__all__ = ["synthesize", "available_roles", "STEP_TEMPLATES", "FALLBACK_TEMPLATE"]
