"""Data models for analysis results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class FindingType(Enum):
    """Kinds of class inconsistencies."""

    UNUSED = "unused"
    UNDEFINED = "undefined"


@dataclass(frozen=True)
class Finding:
    """A single reported inconsistency.

    Unused findings point at the definition, undefined findings at the usage.
    """

    type: FindingType
    class_name: str
    file: str
    line: int

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "className": self.class_name,
            "file": self.file,
            "line": self.line,
        }


@dataclass
class AnalysisMetadata:
    """Metadata about the analysis run."""

    project: str
    analyzed_at: datetime
    cssaudit_version: str
    files_analyzed: int
    definitions: int
    usages: int
    analysis_duration_ms: int

    def to_dict(self) -> dict:
        return {
            "project": self.project,
            "analyzed_at": self.analyzed_at.isoformat(),
            "cssaudit_version": self.cssaudit_version,
            "files_analyzed": self.files_analyzed,
            "definitions": self.definitions,
            "usages": self.usages,
            "analysis_duration_ms": self.analysis_duration_ms,
        }


@dataclass
class AnalysisSummary:
    """Summary of analysis results."""

    total: int
    by_type: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_findings(cls, findings: list[Finding]) -> "AnalysisSummary":
        by_type = {kind.value: 0 for kind in FindingType}
        for finding in findings:
            by_type[finding.type.value] += 1
        return cls(total=len(findings), by_type=by_type)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "by_type": self.by_type,
        }


@dataclass
class AnalysisResults:
    """Complete analysis results."""

    metadata: AnalysisMetadata | None = None
    summary: AnalysisSummary | None = None
    findings: list[Finding] = field(default_factory=list)

    @property
    def undefined(self) -> list[Finding]:
        return [f for f in self.findings if f.type is FindingType.UNDEFINED]

    @property
    def unused(self) -> list[Finding]:
        return [f for f in self.findings if f.type is FindingType.UNUSED]
