"""Centralized file exclusion logic for css-audit.

Handles .gitignore patterns, configured excludes, and default patterns
using the pathspec library for proper gitignore-style matching.
"""

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

import pathspec


@dataclass
class ExclusionConfig:
    """Configuration for file exclusion."""

    gitignore_patterns: list[str] = field(default_factory=list)
    config_patterns: list[str] = field(default_factory=list)
    default_patterns: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)  # For debugging/logging


# Dependency, build and tooling directories plus minified bundles
DEFAULT_EXCLUDES = [
    "node_modules",
    "bower_components",
    "vendor",
    ".git",
    ".hg",
    ".svn",
    "dist",
    "build",
    "out",
    "coverage",
    ".next",
    ".nuxt",
    ".output",
    ".svelte-kit",
    ".cache",
    ".parcel-cache",
    ".turbo",
    ".venv",
    "venv",
    "__pycache__",
    "*.min.css",
    "*.min.js",
    "*.map",
]


class FileExcluder:
    """Handles file exclusion with gitignore-style pattern matching."""

    def __init__(
        self,
        project_root: Path,
        include_ignored: bool = False,
        extra_excludes: list[str] | None = None,
    ) -> None:
        """Initialize the file excluder.

        Args:
            project_root: Root directory of the project.
            include_ignored: If True, skip defaults and .gitignore; only
                extra_excludes apply.
            extra_excludes: Additional patterns to exclude (from configuration).
        """
        self.project_root = project_root
        self.include_ignored = include_ignored
        self._config = ExclusionConfig()
        self._load_patterns(extra_excludes or [])
        self._spec = pathspec.PathSpec.from_lines("gitignore", self.patterns)

    def _load_patterns(self, extra_excludes: list[str]) -> None:
        """Load patterns from all sources."""
        if not self.include_ignored:
            # 1. Default patterns
            self._config.default_patterns = list(DEFAULT_EXCLUDES)
            self._config.sources.append("defaults")

            # 2. .gitignore patterns
            self._load_gitignore()

        # 3. Configured excludes always apply
        if extra_excludes:
            self._config.config_patterns = list(extra_excludes)
            self._config.sources.append("config")

    def _load_gitignore(self) -> None:
        """Load .gitignore patterns."""
        gitignore_path = self.project_root / ".gitignore"
        if not gitignore_path.is_file():
            return

        content = gitignore_path.read_text(encoding="utf-8", errors="replace")
        patterns = [
            line.strip()
            for line in content.splitlines()
            if line.strip() and not line.startswith("#")
        ]
        self._config.gitignore_patterns = patterns
        self._config.sources.append(str(gitignore_path))

    def _relative(self, path: Path) -> PurePosixPath | None:
        try:
            return PurePosixPath(path.relative_to(self.project_root).as_posix())
        except ValueError:
            return None

    def should_exclude(self, file_path: Path) -> bool:
        """Check if a file is excluded, directly or through one of its directories.

        Files outside the project root are never excluded.
        """
        rel_path = self._relative(file_path)
        if rel_path is None:
            return False

        if self._spec.match_file(str(rel_path)):
            return True
        # A bare name such as "node_modules" matches the directory at any depth
        return any(self._spec.match_file(part) for part in rel_path.parts[:-1])

    def should_exclude_dir(self, dir_path: Path) -> bool:
        """Check if a directory (and everything below it) should be skipped."""
        rel_path = self._relative(dir_path)
        if rel_path is None:
            return False
        # Trailing slash lets directory-only patterns such as "build/" match
        return self._spec.match_file(f"{rel_path}/")

    @property
    def sources(self) -> list[str]:
        """Where the loaded patterns came from, in load order."""
        return self._config.sources

    @property
    def patterns(self) -> list[str]:
        return (
            self._config.default_patterns
            + self._config.gitignore_patterns
            + self._config.config_patterns
        )
