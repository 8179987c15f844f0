"""File format categories and extractor dispatch."""

from enum import Enum
from pathlib import Path

from cssaudit.extractors import (
    extract_component,
    extract_markup,
    extract_script,
    extract_stylesheet,
)
from cssaudit.extractors.base import Extractor
from cssaudit.models.records import ExtractionResult


class FormatCategory(Enum):
    """Source formats the analyzer knows how to read."""

    STYLESHEET = "stylesheet"
    SCRIPT = "script"
    COMPONENT = "component"
    MARKUP = "markup"
    UNRECOGNIZED = "unrecognized"


EXTENSIONS: dict[str, FormatCategory] = {
    ".css": FormatCategory.STYLESHEET,
    ".scss": FormatCategory.STYLESHEET,
    ".less": FormatCategory.STYLESHEET,
    ".js": FormatCategory.SCRIPT,
    ".jsx": FormatCategory.SCRIPT,
    ".ts": FormatCategory.SCRIPT,
    ".tsx": FormatCategory.SCRIPT,
    ".mjs": FormatCategory.SCRIPT,
    ".cjs": FormatCategory.SCRIPT,
    ".vue": FormatCategory.COMPONENT,
    ".svelte": FormatCategory.COMPONENT,
    ".html": FormatCategory.MARKUP,
    ".htm": FormatCategory.MARKUP,
}

EXTRACTORS: dict[FormatCategory, Extractor] = {
    FormatCategory.STYLESHEET: extract_stylesheet,
    FormatCategory.SCRIPT: extract_script,
    FormatCategory.COMPONENT: extract_component,
    FormatCategory.MARKUP: extract_markup,
}


def categorize(path: Path | str) -> FormatCategory:
    """Return the format category for a file, by extension (case-insensitive)."""
    return EXTENSIONS.get(Path(path).suffix.lower(), FormatCategory.UNRECOGNIZED)


def extract_file(category: FormatCategory, content: str, file_path: str) -> ExtractionResult:
    """Run the extractor for ``category``. Unrecognized formats yield nothing."""
    if category is FormatCategory.UNRECOGNIZED:
        return ExtractionResult()
    return EXTRACTORS[category](content, file_path)
