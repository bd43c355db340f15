"""JSON-file history of imports and comparisons, plus the baseline store."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from pydantic import ValidationError

from aperture_core.compare.reconcile import ReconciliationResult
from aperture_core.errors import HistoryError
from aperture_core.history.models import (
    ComparisonHistoryEntry,
    DesignSystemBase,
    HistoryFile,
    ImportHistoryEntry,
)
from aperture_core.tokens.models import TokenDocument

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 10


def _write(path: Path, payload: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")
    except OSError as e:
        raise HistoryError(f"Cannot write {path}: {e}") from e


class HistoryStore:
    """Most-recent-first history, de-duplicated by file name(s) and capped.

    Every public method holds the store lock for the whole
    read-modify-write cycle.
    """

    def __init__(self, path: str | Path, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        self.path = Path(path)
        self.max_entries = max_entries
        self._lock = threading.Lock()

    # -- persistence -----------------------------------------------------------

    def _load(self) -> HistoryFile:
        if not self.path.is_file():
            return HistoryFile()
        try:
            return HistoryFile.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.warning("Ignoring unreadable history file %s: %s", self.path, e)
            return HistoryFile()

    def _save(self, history: HistoryFile) -> None:
        _write(self.path, history.model_dump_json(by_alias=True, indent=2))

    # -- imports ---------------------------------------------------------------

    def get_import_history(self) -> list[ImportHistoryEntry]:
        with self._lock:
            return self._load().imports

    def add_import_entry(self, entry: ImportHistoryEntry) -> None:
        with self._lock:
            history = self._load()
            entries = [e for e in history.imports if e.file_name != entry.file_name]
            entries.insert(0, entry)
            history.imports = entries[: self.max_entries]
            self._save(history)

    def remove_import_entry(self, entry_id: str) -> None:
        with self._lock:
            history = self._load()
            history.imports = [e for e in history.imports if e.id != entry_id]
            self._save(history)

    def clear_import_history(self) -> None:
        with self._lock:
            history = self._load()
            history.imports = []
            self._save(history)

    # -- comparisons -----------------------------------------------------------

    def get_comparison_history(self) -> list[ComparisonHistoryEntry]:
        with self._lock:
            return self._load().comparisons

    def add_comparison_entry(self, entry: ComparisonHistoryEntry) -> None:
        with self._lock:
            history = self._load()
            entries = [e for e in history.comparisons if e.file_pair != entry.file_pair]
            entries.insert(0, entry)
            history.comparisons = entries[: self.max_entries]
            self._save(history)
        logger.debug("Recorded comparison %s -> %s", *entry.file_pair)

    def remove_comparison_entry(self, entry_id: str) -> None:
        with self._lock:
            history = self._load()
            history.comparisons = [e for e in history.comparisons if e.id != entry_id]
            self._save(history)

    def clear_comparison_history(self) -> None:
        with self._lock:
            history = self._load()
            history.comparisons = []
            self._save(history)


class BaselineStore:
    """Holds the single active DesignSystemBase in a JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def get(self) -> DesignSystemBase | None:
        with self._lock:
            if not self.path.is_file():
                return None
            try:
                return DesignSystemBase.model_validate_json(self.path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, ValidationError) as e:
                logger.warning("Ignoring unreadable baseline %s: %s", self.path, e)
                return None

    def set(self, base: DesignSystemBase) -> None:
        with self._lock:
            _write(self.path, base.model_dump_json(by_alias=True, indent=2))
        logger.info("Baseline set to %s", base.file_name)

    def clear(self) -> None:
        with self._lock:
            self.path.unlink(missing_ok=True)


def apply_reconciliation(
    file_name: str,
    document: TokenDocument,
    result: ReconciliationResult,
) -> DesignSystemBase:
    """Build the next baseline from the new *document* and accepted replacements."""
    return DesignSystemBase(
        file_name=file_name,
        metadata=document.metadata,
        tokens=document.tokens,
        replacements=dict(result.replacements),
    )
