"""Aperture Core - design-token tree comparison and reconciliation."""

from aperture_core.compare import (
    ComparisonChanges,
    ComparisonService,
    ReconciliationSession,
    compare,
    compare_documents,
    suggest,
)
from aperture_core.config import ApertureConfig, load_config
from aperture_core.errors import AnalysisError, ApertureError, HistoryError, TokenLoadError
from aperture_core.tokens import TokenDocument, TokenNode, flatten, index, load_document

__version__ = "0.1.0"

__all__ = [
    "AnalysisError",
    "ApertureConfig",
    "ApertureError",
    "ComparisonChanges",
    "ComparisonService",
    "HistoryError",
    "ReconciliationSession",
    "TokenDocument",
    "TokenLoadError",
    "TokenNode",
    "compare",
    "compare_documents",
    "flatten",
    "index",
    "load_config",
    "load_document",
    "suggest",
]
