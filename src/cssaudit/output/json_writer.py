"""JSON output for findings and analysis results."""

import json
from pathlib import Path

from cssaudit.models.results import AnalysisMetadata, AnalysisSummary, Finding
from cssaudit.output.tree import relative_path


def findings_to_dict(findings: list[Finding], project_root: Path) -> dict:
    """Build the JSON report: a summary and one entry per finding."""
    issues = []
    for finding in findings:
        item = finding.to_dict()
        item["file"] = relative_path(finding.file, project_root)
        issues.append(item)

    return {
        "summary": AnalysisSummary.from_findings(findings).to_dict(),
        "issues": issues,
    }


def render_json(
    findings: list[Finding],
    project_root: Path,
    metadata: AnalysisMetadata | None = None,
) -> str:
    data = findings_to_dict(findings, project_root)
    if metadata:
        data["metadata"] = metadata.to_dict()
    return json.dumps(data, indent=2)
