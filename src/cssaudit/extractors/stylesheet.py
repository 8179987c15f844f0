"""Class definitions from CSS, SCSS and Less sources."""

import re
from dataclasses import dataclass, field
from pathlib import PurePath

from cssaudit.extractors.base import LineIndex, blank
from cssaudit.models.records import ClassDefinition, ExtractionResult

BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
# "//" after ":" is a URL scheme, not a comment
LINE_COMMENT_RE = re.compile(r"(?<![:\w\"'])//[^\n]*")
STRING_RE = re.compile(r""""(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*'""")
INTERPOLATION_RE = re.compile(r"#\{[^}]*\}|@\{[^}]*\}")
# Fills interpolated text so names built from it can be recognized and dropped
INTERPOLATION_MARK = "\x00"
ATTRIBUTE_SELECTOR_RE = re.compile(r"\[[^\]]*\]")
DELIMITER_RE = re.compile(r"[{};]")
CLASS_SELECTOR_RE = re.compile(r"\.((?:[A-Za-z_\-]|\\.|[^\x00-\x7f])(?:[\w\-]|\\.|[^\x00-\x7f])*)")
PARENT_SUFFIX_RE = re.compile(r"&((?:[\w\-]|\\.)+)")
ESCAPE_RE = re.compile(r"\\(.)")

KEYFRAMES_RE = re.compile(r"^@(?:-\w+-)?keyframes\b", re.IGNORECASE)

COMMENT_DIALECTS = {"scss", "less"}


@dataclass
class _Rule:
    """An open rule block while walking the stylesheet."""

    parents: list[str] = field(default_factory=list)
    keyframes: bool = False


def _unescape(token: str) -> str:
    return ESCAPE_RE.sub(r"\1", token)


def _prepare(content: str, dialect: str) -> str:
    """Hide comments, strings and interpolation, keeping offsets intact."""
    text = BLOCK_COMMENT_RE.sub(lambda m: blank(m.group()), content)
    if dialect in COMMENT_DIALECTS:
        text = LINE_COMMENT_RE.sub(lambda m: blank(m.group()), text)
    text = STRING_RE.sub(lambda m: blank(m.group()), text)
    return INTERPOLATION_RE.sub(lambda m: re.sub(r"[^\n]", INTERPOLATION_MARK, m.group()), text)


def _selector_classes(selector: str, parents: list[str]) -> list[tuple[int, str]]:
    """Return (offset, class name) pairs for one comma-separated selector.

    Names that run into an interpolation, such as ``.icon-#{$k}``, are only
    known at compile time and are skipped.
    """
    found: list[tuple[int, str]] = []

    for match in PARENT_SUFFIX_RE.finditer(selector):
        if selector.startswith(INTERPOLATION_MARK, match.end()):
            continue
        suffix = _unescape(match.group(1))
        for parent in parents:
            found.append((match.start(), parent + suffix))

    for match in CLASS_SELECTOR_RE.finditer(selector):
        if selector.startswith(INTERPOLATION_MARK, match.end()):
            continue
        found.append((match.start(), _unescape(match.group(1))))

    found.sort(key=lambda item: item[0])
    return found


def extract_stylesheet(
    content: str,
    file_path: str,
    *,
    scoped: bool = False,
    dialect: str | None = None,
    line_offset: int = 0,
) -> ExtractionResult:
    """Extract class definitions from a stylesheet.

    Args:
        content: Stylesheet source.
        file_path: Canonical path of the file the source came from.
        scoped: If True, definitions are visible only within ``file_path``.
        dialect: "css", "scss" or "less". Inferred from ``file_path`` if omitted.
        line_offset: Added to every line number (for embedded style blocks).
    """
    if dialect is None:
        dialect = PurePath(file_path).suffix.lower().lstrip(".") or "css"

    text = _prepare(content, dialect)
    lines = LineIndex(text)
    result = ExtractionResult()

    stack: list[_Rule] = [_Rule()]
    segment_start = 0

    for delimiter in DELIMITER_RE.finditer(text):
        char = delimiter.group()

        if char == ";":
            segment_start = delimiter.end()
            continue

        if char == "}":
            if len(stack) > 1:
                stack.pop()
            segment_start = delimiter.end()
            continue

        prelude = text[segment_start : delimiter.start()]
        prelude_start = segment_start
        segment_start = delimiter.end()
        current = stack[-1]
        stripped = prelude.strip()

        if current.keyframes or stripped.startswith("@"):
            # At-rules and keyframe stops define no classes; nested rules
            # keep the enclosing parent selector.
            stack.append(
                _Rule(
                    parents=current.parents,
                    keyframes=current.keyframes or bool(KEYFRAMES_RE.match(stripped)),
                )
            )
            continue

        masked = ATTRIBUTE_SELECTOR_RE.sub(lambda m: blank(m.group()), prelude)
        new_parents: list[str] = []
        offset = 0
        for selector in masked.split(","):
            classes = _selector_classes(selector, current.parents)
            for position, class_name in classes:
                line = lines.line_of(prelude_start + offset + position) + line_offset
                if scoped:
                    definition = ClassDefinition.local(class_name, file_path, line)
                else:
                    definition = ClassDefinition.global_(class_name, file_path, line)
                result.definitions.append(definition)

            if classes:
                new_parents.append(classes[-1][1])
            elif "&" in selector:
                new_parents.extend(current.parents)
            offset += len(selector) + 1

        stack.append(_Rule(parents=new_parents))

    return result
