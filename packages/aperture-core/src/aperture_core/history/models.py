"""Pydantic models for import/comparison history and the baseline."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, Field

from aperture_core.compare.models import ComparisonChanges
from aperture_core.tokens.models import TokenMetadata, TokenNode


def _now() -> datetime:
    return datetime.now(UTC)


class FileSnapshot(BaseModel):
    """Which file one side of a comparison came from."""

    file_name: str
    metadata: TokenMetadata | None = None


class ImportHistoryEntry(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    file_name: str
    imported_at: datetime = Field(default_factory=_now)
    metadata: TokenMetadata | None = None
    token_count: int = 0


class ComparisonHistoryEntry(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    old_file: FileSnapshot
    new_file: FileSnapshot
    compared_at: datetime = Field(default_factory=_now)
    summary: dict[str, int] = Field(default_factory=dict)
    changes: ComparisonChanges | None = None

    @property
    def file_pair(self) -> tuple[str, str]:
        return (self.old_file.file_name, self.new_file.file_name)


class HistoryFile(BaseModel):
    """On-disk layout of the history JSON file."""

    imports: list[ImportHistoryEntry] = Field(default_factory=list)
    comparisons: list[ComparisonHistoryEntry] = Field(default_factory=list)


class DesignSystemBase(BaseModel):
    """The token tree currently used as reference for future comparisons."""

    file_name: str
    metadata: TokenMetadata | None = None
    tokens: list[TokenNode] = Field(default_factory=list)
    replacements: dict[str, str] = Field(default_factory=dict)
    promoted_at: datetime = Field(default_factory=_now)
