"""Shared helpers for extractors."""

import re
from bisect import bisect_right
from collections.abc import Callable

from cssaudit.models.records import ExtractionResult

Extractor = Callable[[str, str], ExtractionResult]

# Characters a class token may contain once escapes are resolved. Covers
# utility-style names such as "md:flex", "w-1/2" and "bg-[#fff]".
CLASS_TOKEN_RE = re.compile(r"^-?[A-Za-z_][\w\-:/.\[\]#%!@()&,=]*$")

# Template expressions that can appear inside class attribute values
TEMPLATE_EXPR_RE = re.compile(r"\{\{.*?\}\}|\{%.*?%\}|\{#.*?#\}|<%.*?%>|\$\{[^}]*\}")


class LineIndex:
    """Maps character offsets in a text to 1-based line numbers."""

    def __init__(self, text: str) -> None:
        self._newlines = [i for i, ch in enumerate(text) if ch == "\n"]

    def line_of(self, offset: int) -> int:
        return bisect_right(self._newlines, offset - 1) + 1


def blank(text: str) -> str:
    """Replace every character except newlines with a space.

    Used to hide comments and strings while keeping offsets and line numbers.
    """
    return re.sub(r"[^\n]", " ", text)


def class_tokens(value: str) -> list[str]:
    """Split a class attribute value into plausible class names."""
    value = TEMPLATE_EXPR_RE.sub(" ", value)
    return [token for token in value.split() if CLASS_TOKEN_RE.match(token)]
