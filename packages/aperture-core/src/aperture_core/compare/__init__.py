"""Token tree comparison, replacement suggestions and reconciliation."""

from aperture_core.compare.engine import ComparisonService, color_changes, compare, compare_documents
from aperture_core.compare.models import (
    ColorChange,
    ComparisonChanges,
    TokenComparison,
    TokenModification,
    TokenSummary,
)
from aperture_core.compare.reconcile import ReconciliationResult, ReconciliationSession
from aperture_core.compare.suggest import candidates_for, path_overlap, suggest

__all__ = [
    "ColorChange",
    "ComparisonChanges",
    "ComparisonService",
    "ReconciliationResult",
    "ReconciliationSession",
    "TokenComparison",
    "TokenModification",
    "TokenSummary",
    "candidates_for",
    "color_changes",
    "compare",
    "compare_documents",
    "path_overlap",
    "suggest",
]
