"""Data models for token comparison results."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from aperture_core.tokens.models import Brand, Theme, TokenMetadata, TokenNode, TokenThemes


class TokenSummary(BaseModel):
    """Projection of a token used when reporting additions and removals."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    path: str | None = None
    modes: TokenThemes | None = None

    @classmethod
    def from_node(cls, node: TokenNode) -> TokenSummary:
        return cls(id=node.id, name=node.name, path=node.path, modes=node.modes)

    @property
    def identity(self) -> str:
        return self.path if self.path is not None else self.name


class ColorChange(BaseModel):
    """One brand/theme slot whose color differs between versions."""

    model_config = ConfigDict(frozen=True)

    brand: Brand
    theme: Theme
    old_color: str
    new_color: str


class TokenModification(BaseModel):
    model_config = ConfigDict(frozen=True)

    token_path: str
    token_name: str
    color_changes: list[ColorChange]


class ComparisonChanges(BaseModel):
    """Added, removed and modified tokens plus the reconciliation overlay.

    Only ``replacement_suggestions`` and ``accepted_suggestions`` change after
    construction; use ReconciliationSession to mutate them.
    """

    added: list[TokenSummary] = Field(default_factory=list)
    removed: list[TokenSummary] = Field(default_factory=list)
    modified: list[TokenModification] = Field(default_factory=list)
    replacement_suggestions: dict[str, str] = Field(default_factory=dict)
    accepted_suggestions: set[str] = Field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified)

    def summary(self) -> dict[str, int]:
        return {
            "added": len(self.added),
            "removed": len(self.removed),
            "modified": len(self.modified),
        }


class TokenComparison(BaseModel):
    """A comparison result together with the metadata of both documents."""

    changes: ComparisonChanges
    old_metadata: TokenMetadata | None = None
    new_metadata: TokenMetadata | None = None
    compared_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
