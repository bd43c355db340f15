"""Token usage analysis: which exported tokens the code base references."""

from aperture_core.analysis.models import (
    OrphanedToken,
    ScannedDirectory,
    TokenUsage,
    TokenUsageReport,
    UsageStatistics,
    UsedToken,
)
from aperture_core.analysis.scanner import (
    DEFAULT_EXTENSIONS,
    DEFAULT_IGNORE_PATTERNS,
    analyze_usage,
    enum_case_name,
    iter_source_files,
)

__all__ = [
    "DEFAULT_EXTENSIONS",
    "DEFAULT_IGNORE_PATTERNS",
    "OrphanedToken",
    "ScannedDirectory",
    "TokenUsage",
    "TokenUsageReport",
    "UsageStatistics",
    "UsedToken",
    "analyze_usage",
    "enum_case_name",
    "iter_source_files",
]
