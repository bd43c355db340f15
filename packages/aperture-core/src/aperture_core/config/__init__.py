from .loader import load_config
from .models import (
    AnalysisConfig,
    ApertureConfig,
    CompareConfig,
    HistoryConfig,
)

__all__ = [
    "AnalysisConfig",
    "ApertureConfig",
    "CompareConfig",
    "HistoryConfig",
    "load_config",
]
