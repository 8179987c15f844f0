"""Resolution engine: ingest extraction records and report class inconsistencies."""

import time
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path

from cssaudit import __version__
from cssaudit.analysis.index import NameIndex, NameIndexBuilder
from cssaudit.analysis.policy import ExclusionPolicy
from cssaudit.discovery import list_project_files
from cssaudit.errors import ExtractionError
from cssaudit.exclusion import FileExcluder
from cssaudit.formats import FormatCategory, categorize, extract_file
from cssaudit.frameworks import FrameworkOracle, create_framework_oracle
from cssaudit.models.records import ExtractionResult
from cssaudit.models.results import (
    AnalysisMetadata,
    AnalysisResults,
    AnalysisSummary,
    Finding,
    FindingType,
)


def find_unused(index: NameIndex, policy: ExclusionPolicy) -> list[Finding]:
    """Report definitions with no usage they are visible to."""
    findings: list[Finding] = []

    for class_name, definitions in index.definition_entries():
        if policy.is_excluded(class_name):
            continue

        usages = index.usages_for(class_name)
        for definition in definitions:
            if definition.is_global:
                is_used = bool(usages)
            else:
                # File-scoped: only same-file usages count, whatever their confidence
                is_used = any(u.file == definition.scoped for u in usages)

            if not is_used:
                findings.append(
                    Finding(
                        type=FindingType.UNUSED,
                        class_name=class_name,
                        file=definition.file,
                        line=definition.line,
                    )
                )

    return findings


def find_undefined(index: NameIndex, policy: ExclusionPolicy) -> list[Finding]:
    """Report high-confidence usages with no definition visible from their file."""
    findings: list[Finding] = []

    for class_name, usages in index.usage_entries():
        if policy.is_excluded(class_name):
            continue

        definitions = index.definitions_for(class_name)
        for usage in usages:
            if usage.is_low_confidence:
                continue

            is_defined = any(d.visible_from(usage.file) for d in definitions)
            if not is_defined:
                findings.append(
                    Finding(
                        type=FindingType.UNDEFINED,
                        class_name=class_name,
                        file=usage.file,
                        line=usage.line,
                    )
                )

    return findings


def resolve(index: NameIndex, policy: ExclusionPolicy) -> list[Finding]:
    """Run both detection passes over a fully populated index.

    Unused findings come first, then undefined findings, each in index
    insertion order.
    """
    return find_unused(index, policy) + find_undefined(index, policy)


def extract_path(path: Path, category: FormatCategory) -> ExtractionResult:
    """Read a file and run the extractor for its format category."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ExtractionError(path, f"cannot read file: {e}") from e

    try:
        return extract_file(category, content, str(path))
    except Exception as e:
        raise ExtractionError(path, f"extraction failed: {e}") from e


class Analyzer:
    """Scans a project and reports unused and undefined CSS classes."""

    def __init__(
        self,
        root_dir: Path | str,
        ignore_patterns: Iterable[str] = (),
        *,
        oracle: FrameworkOracle | None = None,
        excluder: FileExcluder | None = None,
        detect_frameworks: bool = True,
        max_workers: int | None = None,
    ) -> None:
        """Initialize the analyzer.

        Args:
            root_dir: Root directory of the project.
            ignore_patterns: Regular expressions; matching class names are skipped.
            oracle: Pre-built framework oracle. Built from the project when omitted.
            excluder: File excluder for traversal. Defaults to gitignore + defaults.
            detect_frameworks: If False and no oracle is given, no framework
                classes are excluded.
            max_workers: Number of files read and extracted in parallel.

        Raises:
            ConfigurationError: If an ignore pattern is not a valid regex.
        """
        self.root_dir = Path(root_dir).resolve()
        self.oracle = oracle
        self.excluder = excluder
        self.detect_frameworks = detect_frameworks
        self.max_workers = max(max_workers or 1, 1)
        # Compiled now so a bad pattern fails before any file is read
        self._policy = ExclusionPolicy(ignore_patterns)

    @property
    def ignore_patterns(self) -> list[str]:
        return self._policy.patterns

    def init(self) -> FrameworkOracle:
        """Build the framework oracle once per analyzer."""
        if self.oracle is None:
            self.oracle = create_framework_oracle(self.root_dir, enabled=self.detect_frameworks)
        return self.oracle

    def run(self) -> list[Finding]:
        """Analyze the project and return the findings."""
        return self.analyze().findings

    def analyze(
        self,
        on_file: Callable[[Path], None] | None = None,
    ) -> AnalysisResults:
        """Analyze the project and return findings with run metadata.

        Args:
            on_file: Called after each file has been extracted (for progress display).
        """
        start_time = time.time()

        oracle = self.init()
        excluder = self.excluder or FileExcluder(self.root_dir)
        files = list_project_files(self.root_dir, excluder)

        index = self.build_index(files, on_file)
        findings = resolve(index, self._policy.with_oracle(oracle))

        duration_ms = int((time.time() - start_time) * 1000)

        return AnalysisResults(
            metadata=AnalysisMetadata(
                project=self.root_dir.name,
                analyzed_at=datetime.now(),
                cssaudit_version=__version__,
                files_analyzed=len(files),
                definitions=index.definition_count,
                usages=index.usage_count,
                analysis_duration_ms=duration_ms,
            ),
            summary=AnalysisSummary.from_findings(findings),
            findings=findings,
        )

    def build_index(
        self,
        files: Sequence[Path],
        on_file: Callable[[Path], None] | None = None,
    ) -> NameIndex:
        """Extract every recognized file and freeze the records into an index.

        Records are inserted on the calling thread in file order, so the
        resulting index does not depend on ``max_workers``.
        """
        builder = NameIndexBuilder()

        targets = [(path, categorize(path)) for path in files]
        targets = [(path, cat) for path, cat in targets if cat is not FormatCategory.UNRECOGNIZED]
        paths = [path for path, _ in targets]
        categories = [cat for _, cat in targets]

        if self.max_workers == 1:
            for path, category in targets:
                builder.insert_result(extract_path(path, category))
                if on_file:
                    on_file(path)
            return builder.build()

        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            for path, result in zip(paths, executor.map(extract_path, paths, categories)):
                builder.insert_result(result)
                if on_file:
                    on_file(path)
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        return builder.build()
