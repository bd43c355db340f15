from pydantic import BaseModel, Field
from typing import Literal

from aperture_core.analysis.scanner import DEFAULT_EXTENSIONS, DEFAULT_IGNORE_PATTERNS
from aperture_core.tokens.filters import TokenFilters


class HistoryConfig(BaseModel):
    directory: str = "~/.aperture"
    max_entries: int = Field(default=10, gt=0)
    record_comparisons: bool = True


class CompareConfig(BaseModel):
    auto_suggest: bool = True


class AnalysisConfig(BaseModel):
    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    ignore_patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS))
    top_used: int = Field(default=5, ge=0)


class ApertureConfig(BaseModel):
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    compare: CompareConfig = Field(default_factory=CompareConfig)
    filters: TokenFilters = Field(default_factory=TokenFilters)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
