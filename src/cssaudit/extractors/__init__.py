"""Format-specific extractors for class definitions and usages."""

from cssaudit.extractors.component import extract_component
from cssaudit.extractors.markup import extract_markup
from cssaudit.extractors.script import extract_script
from cssaudit.extractors.stylesheet import extract_stylesheet

__all__ = [
    "extract_component",
    "extract_markup",
    "extract_script",
    "extract_stylesheet",
]
