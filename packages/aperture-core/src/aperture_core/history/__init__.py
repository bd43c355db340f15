"""Persistence collaborators: comparison/import history and the baseline."""

from aperture_core.history.models import (
    ComparisonHistoryEntry,
    DesignSystemBase,
    FileSnapshot,
    ImportHistoryEntry,
)
from aperture_core.history.store import (
    DEFAULT_MAX_ENTRIES,
    BaselineStore,
    HistoryStore,
    apply_reconciliation,
)

__all__ = [
    "DEFAULT_MAX_ENTRIES",
    "BaselineStore",
    "ComparisonHistoryEntry",
    "DesignSystemBase",
    "FileSnapshot",
    "HistoryStore",
    "ImportHistoryEntry",
    "apply_reconciliation",
]
