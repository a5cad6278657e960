"""Data models for the linter: rule configuration and analysis results."""

from .config import (
    ArchitecturePattern,
    ForbiddenRule,
    LinterConfig,
    load_config,
    normalize_pattern,
)
from .violation import (
    AnalysisResult,
    Report,
    ReportSummary,
    Violation,
    ViolationKind,
)

__all__ = [
    # Config
    "ArchitecturePattern",
    "ForbiddenRule",
    "LinterConfig",
    "load_config",
    "normalize_pattern",
    # Results
    "AnalysisResult",
    "Report",
    "ReportSummary",
    "Violation",
    "ViolationKind",
]
