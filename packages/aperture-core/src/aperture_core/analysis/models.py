"""Pydantic models for token usage reports."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class TokenUsage(BaseModel):
    """One reference to a token in a source file."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    line_number: int
    line_content: str
    match_type: str  # "." for member access, "name" for a bare identifier


class UsedToken(BaseModel):
    enum_case: str
    original_path: str
    usages: list[TokenUsage] = Field(default_factory=list)

    @property
    def usage_count(self) -> int:
        return len(self.usages)


class OrphanedToken(BaseModel):
    enum_case: str
    original_path: str

    @property
    def category(self) -> str:
        """First path segment, used to group orphans."""
        return self.original_path.split("/", 1)[0]


class ScannedDirectory(BaseModel):
    name: str
    path: str
    files_scanned: int = 0


class UsageStatistics(BaseModel):
    total_tokens: int = 0
    used_count: int = 0
    orphaned_count: int = 0
    total_usages: int = 0
    files_scanned: int = 0

    @property
    def usage_percentage(self) -> float:
        if not self.total_tokens:
            return 0.0
        return self.used_count * 100.0 / self.total_tokens

    @property
    def orphaned_percentage(self) -> float:
        if not self.total_tokens:
            return 0.0
        return self.orphaned_count * 100.0 / self.total_tokens


class TokenUsageReport(BaseModel):
    """Which tokens are referenced from the scanned code, and which are not.

    ``used_tokens`` is sorted by usage count (highest first);
    ``orphaned_tokens`` keeps tree order.
    """

    scanned_directories: list[ScannedDirectory] = Field(default_factory=list)
    used_tokens: list[UsedToken] = Field(default_factory=list)
    orphaned_tokens: list[OrphanedToken] = Field(default_factory=list)
    analyzed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def statistics(self) -> UsageStatistics:
        return UsageStatistics(
            total_tokens=len(self.used_tokens) + len(self.orphaned_tokens),
            used_count=len(self.used_tokens),
            orphaned_count=len(self.orphaned_tokens),
            total_usages=sum(t.usage_count for t in self.used_tokens),
            files_scanned=sum(d.files_scanned for d in self.scanned_directories),
        )

    def orphaned_by_category(self) -> dict[str, list[OrphanedToken]]:
        grouped: dict[str, list[OrphanedToken]] = {}
        for token in self.orphaned_tokens:
            grouped.setdefault(token.category, []).append(token)
        return dict(sorted(grouped.items()))
