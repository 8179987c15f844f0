"""Report rendering for css-audit findings."""

from pathlib import Path

from cssaudit.models.results import AnalysisMetadata, Finding
from cssaudit.output.json_writer import findings_to_dict, render_json
from cssaudit.output.tree import (
    build_findings_tree,
    console,
    display_tree,
    render_tree,
    summary_line,
)

FORMATS = ("console", "json")


def format_report(
    findings: list[Finding],
    project_root: Path,
    fmt: str = "console",
    metadata: AnalysisMetadata | None = None,
) -> str:
    """Render findings as plain text ("console") or JSON ("json")."""
    if fmt == "console":
        return render_tree(build_findings_tree(findings, project_root), summary_line(findings))
    if fmt == "json":
        return render_json(findings, project_root, metadata)
    raise ValueError(f"Unknown report format: {fmt!r} (expected one of {', '.join(FORMATS)})")


def display_report(findings: list[Finding], project_root: Path) -> None:
    """Print the findings tree and a summary line to the terminal."""
    if findings:
        display_tree(build_findings_tree(findings, project_root))
    console.print(summary_line(findings))


__all__ = [
    "FORMATS",
    "display_report",
    "findings_to_dict",
    "format_report",
    "render_json",
]
