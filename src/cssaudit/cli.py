"""css-audit CLI - find unused and undefined CSS classes."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from cssaudit import __version__
from cssaudit.analysis.engine import Analyzer
from cssaudit.config import (
    frameworks_enabled,
    get_excludes,
    get_ignore_patterns,
    get_max_workers,
    resolve_config,
)
from cssaudit.errors import CssAuditError
from cssaudit.exclusion import FileExcluder
from cssaudit.output import FORMATS, display_report, format_report

app = typer.Typer(
    name="cssaudit",
    help="Detect unused and undefined CSS classes across a web project",
    rich_markup_mode="rich",
)
# Status output goes to stderr so JSON on stdout stays machine-readable
console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"cssaudit version {__version__}")
        raise typer.Exit()


@app.command()
def run(
    path: Path = typer.Argument(
        Path("."),
        help="Project root directory",
    ),
    ignore: Optional[list[str]] = typer.Option(
        None,
        "--ignore",
        "-i",
        help="Regex for class names to ignore (repeatable)",
    ),
    fmt: str = typer.Option(
        "console",
        "--format",
        "-f",
        help="Output format (console, json)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to this file instead of stdout",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a cssaudit.json config file (default: <path>/cssaudit.json)",
    ),
    include_ignored: bool = typer.Option(
        False,
        "--include-ignored",
        help="Include files normally excluded by defaults and .gitignore",
    ),
    no_frameworks: bool = typer.Option(
        False,
        "--no-frameworks",
        help="Do not treat utility-framework classes (e.g. Tailwind) as known",
    ),
    jobs: Optional[int] = typer.Option(
        None,
        "--jobs",
        "-j",
        min=1,
        help="Number of files to extract in parallel",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Analyze a project and report unused and undefined CSS classes.

    Exits with status 1 when any class is used but never defined.
    """
    if fmt not in FORMATS:
        raise typer.BadParameter(
            f"must be one of: {', '.join(FORMATS)}", param_hint="'--format'"
        )

    path = path.resolve()
    console.print(Panel.fit("[bold blue]css-audit - CSS Class Analysis[/]"))
    console.print(f"\n[dim]Analyzing:[/] {path}\n")

    try:
        config_data = resolve_config(path, config)
        analyzer = Analyzer(
            path,
            get_ignore_patterns(config_data) + list(ignore or []),
            excluder=FileExcluder(
                path,
                include_ignored=include_ignored,
                extra_excludes=get_excludes(config_data),
            ),
            detect_frameworks=frameworks_enabled(config_data) and not no_frameworks,
            max_workers=jobs or get_max_workers(config_data),
        )

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Extracting classes...", total=None)
            results = analyzer.analyze(on_file=lambda _: progress.advance(task))
    except (CssAuditError, OSError) as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    metadata = results.metadata
    if metadata:
        console.print(
            f"[dim]Analyzed {metadata.files_analyzed} files "
            f"({metadata.definitions} definitions, {metadata.usages} usages) "
            f"in {metadata.analysis_duration_ms} ms[/]"
        )
    if analyzer.oracle is not None and analyzer.oracle.name != "none":
        console.print(f"[dim]Framework classes excluded:[/] {analyzer.oracle.name}")

    if output:
        report = format_report(results.findings, path, fmt, metadata)
        output.write_text(report, encoding="utf-8")
        console.print(f"\n[green]Report written to:[/] {output}")
    elif fmt == "json":
        typer.echo(format_report(results.findings, path, fmt, metadata))
    else:
        display_report(results.findings, path)

    if results.undefined:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
