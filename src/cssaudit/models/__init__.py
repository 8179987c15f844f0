"""Data models for css-audit."""

from cssaudit.models.records import (
    GLOBAL_SCOPE,
    ClassDefinition,
    ClassUsage,
    Confidence,
    ExtractionResult,
)
from cssaudit.models.results import (
    AnalysisMetadata,
    AnalysisResults,
    AnalysisSummary,
    Finding,
    FindingType,
)

__all__ = [
    # Record models
    "GLOBAL_SCOPE",
    "ClassDefinition",
    "ClassUsage",
    "Confidence",
    "ExtractionResult",
    # Results models
    "AnalysisMetadata",
    "AnalysisResults",
    "AnalysisSummary",
    "Finding",
    "FindingType",
]
