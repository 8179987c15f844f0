"""Rich tree visualization for class findings."""

from collections import defaultdict
from io import StringIO
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.text import Text
from rich.tree import Tree

from cssaudit.models.results import Finding, FindingType

console = Console()

SECTIONS = [
    (FindingType.UNDEFINED, "Undefined classes", "red"),
    (FindingType.UNUSED, "Unused classes", "yellow"),
]


def relative_path(file: str, project_root: Path) -> str:
    """Return ``file`` relative to the project root, POSIX-style when possible."""
    try:
        return Path(file).relative_to(project_root).as_posix()
    except ValueError:
        return file


def build_findings_tree(findings: list[Finding], project_root: Path) -> Tree:
    """Build a Rich tree showing findings by type, then by file."""
    root = Tree(f"[bold]{escape(project_root.name or str(project_root))}[/]", guide_style="dim")

    for finding_type, title, color in SECTIONS:
        # Group by file
        by_file: dict[str, list[Finding]] = defaultdict(list)
        for finding in findings:
            if finding.type is finding_type:
                by_file[relative_path(finding.file, project_root)].append(finding)

        if not by_file:
            continue

        count = sum(len(items) for items in by_file.values())
        section = root.add(f"[bold {color}]{title}[/] ({count})")

        for file_path in sorted(by_file):
            file_node = section.add(f"[yellow]{escape(file_path)}[/]")
            for finding in sorted(by_file[file_path], key=lambda f: (f.line, f.class_name)):
                item_text = Text()
                item_text.append("x ", style=f"{color} bold")
                item_text.append(finding.class_name, style=color)
                item_text.append(f" (line {finding.line})", style="dim")
                file_node.add(item_text)

    return root


def summary_line(findings: list[Finding]) -> str:
    unused = sum(1 for f in findings if f.type is FindingType.UNUSED)
    undefined = sum(1 for f in findings if f.type is FindingType.UNDEFINED)
    if not findings:
        return "No issues found."
    return f"Found {unused} unused and {undefined} undefined classes."


def render_tree(tree: Tree, footer: str, width: int = 100) -> str:
    """Render a tree to plain text (no colors), for writing to a file."""
    buffer = StringIO()
    text_console = Console(file=buffer, width=width, color_system=None, force_terminal=False)
    text_console.print(tree)
    text_console.print(footer)
    return buffer.getvalue()


def display_tree(tree: Tree) -> None:
    """Display the tree to console."""
    console.print()
    console.print(tree)
    console.print()
