"""Accept/reject workflow for replacements of removed tokens."""

from __future__ import annotations

import logging
import threading

from pydantic import BaseModel, ConfigDict, Field

from aperture_core.compare.models import ComparisonChanges

logger = logging.getLogger(__name__)


class ReconciliationResult(BaseModel):
    """Snapshot taken when a reconciliation is finalized."""

    model_config = ConfigDict(frozen=True)

    replacements: dict[str, str] = Field(default_factory=dict)
    unresolved: list[str] = Field(default_factory=list)


class ReconciliationSession:
    """Mutable overlay over a ComparisonChanges.

    Only ``replacement_suggestions`` and ``accepted_suggestions`` are touched.
    Every operation is a no-op on unknown paths and never raises. A lock
    serializes writers so the session can be shared between callers.
    """

    def __init__(self, changes: ComparisonChanges) -> None:
        self.changes = changes
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_replacement_suggestion(self, removed_path: str, suggested_path: str) -> None:
        with self._lock:
            self.changes.replacement_suggestions[removed_path] = suggested_path

    def remove_replacement_suggestion(self, removed_path: str) -> None:
        with self._lock:
            self.changes.replacement_suggestions.pop(removed_path, None)
            self.changes.accepted_suggestions.discard(removed_path)

    def accept_auto_suggestion(self, removed_path: str) -> None:
        with self._lock:
            if removed_path not in self.changes.replacement_suggestions:
                logger.debug("No suggestion to accept for %s", removed_path)
                return
            self.changes.accepted_suggestions.add(removed_path)

    def reject_auto_suggestion(self, removed_path: str) -> None:
        with self._lock:
            self.changes.accepted_suggestions.discard(removed_path)

    def suggest_replacement(self, removed_path: str, replacement_path: str | None) -> None:
        """Set the replacement for *removed_path*, or clear it when None."""
        if replacement_path is None:
            self.remove_replacement_suggestion(removed_path)
        else:
            self.add_replacement_suggestion(removed_path, replacement_path)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def accepted_replacements(self) -> dict[str, str]:
        with self._lock:
            return {
                removed: suggested
                for removed, suggested in self.changes.replacement_suggestions.items()
                if removed in self.changes.accepted_suggestions
            }

    def pending(self) -> list[str]:
        """Removed identities with a suggestion that is not accepted yet."""
        with self._lock:
            return [
                summary.identity
                for summary in self.changes.removed
                if summary.identity in self.changes.replacement_suggestions
                and summary.identity not in self.changes.accepted_suggestions
            ]

    def unresolved(self) -> list[str]:
        """Removed identities without any suggestion."""
        with self._lock:
            return [
                summary.identity
                for summary in self.changes.removed
                if summary.identity not in self.changes.replacement_suggestions
            ]

    def finalize(self) -> ReconciliationResult:
        with self._lock:
            result = ReconciliationResult(
                replacements=self.accepted_replacements(),
                unresolved=self.unresolved(),
            )
        logger.info(
            "Reconciliation finalized: %d replacements, %d unresolved",
            len(result.replacements),
            len(result.unresolved),
        )
        return result
