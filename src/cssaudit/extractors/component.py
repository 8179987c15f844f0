"""Class definitions and usages from single-file components (Vue, Svelte)."""

import re
from dataclasses import dataclass, field
from pathlib import PurePath

from cssaudit.extractors.base import LineIndex, blank
from cssaudit.extractors.markup import extract_markup
from cssaudit.extractors.script import extract_script_usages
from cssaudit.extractors.stylesheet import extract_stylesheet
from cssaudit.models.records import ExtractionResult

BLOCK_OPEN_RE = re.compile(r"<(template|script|style)(\s[^>]*)?>", re.IGNORECASE)
ATTRIBUTE_RE = re.compile(r"""([\w:@.-]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s>]+)))?""")
STYLE_DIALECTS = {"scss", "less", "css"}
SCRIPT_LANGUAGES = {"ts": "typescript", "typescript": "typescript", "tsx": "tsx"}


@dataclass
class Block:
    """A top-level <template>, <script> or <style> block."""

    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    start: int = 0  # offset of the block (opening tag)
    end: int = 0  # offset just past the closing tag
    body_start: int = 0
    body: str = ""


def _parse_attrs(raw: str | None) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for match in ATTRIBUTE_RE.finditer(raw or ""):
        value = match.group(2) or match.group(3) or match.group(4) or ""
        attrs[match.group(1).lower()] = value
    return attrs


def split_blocks(content: str, *, nested_templates: bool = True) -> list[Block]:
    """Split a component into its top-level blocks.

    Vue templates may nest <template> tags, so with ``nested_templates`` a
    template block runs to the last closing tag in the file. Svelte has no
    top-level template block and its <template> elements close normally.
    """
    blocks: list[Block] = []
    position = 0

    while True:
        opening = BLOCK_OPEN_RE.search(content, position)
        if opening is None:
            break

        tag = opening.group(1).lower()
        closing_tag = f"</{tag}>"
        lowered = content.lower()
        if tag == "template" and nested_templates:
            close_at = lowered.rfind(closing_tag)
        else:
            close_at = lowered.find(closing_tag, opening.end())
        if close_at == -1 or close_at < opening.end():
            break

        blocks.append(
            Block(
                tag=tag,
                attrs=_parse_attrs(opening.group(2)),
                start=opening.start(),
                end=close_at + len(closing_tag),
                body_start=opening.end(),
                body=content[opening.end() : close_at],
            )
        )
        position = close_at + len(closing_tag)

    return blocks


def _script_language(attrs: dict[str, str]) -> str:
    return SCRIPT_LANGUAGES.get(attrs.get("lang", "").lower(), "javascript")


def _style_dialect(attrs: dict[str, str]) -> str:
    lang = attrs.get("lang", "css").lower()
    return lang if lang in STYLE_DIALECTS else "css"


def extract_component(content: str, file_path: str) -> ExtractionResult:
    """Extract definitions and usages from a .vue or .svelte file.

    Vue styles are file-scoped when marked ``scoped`` or ``module``; Svelte
    styles are always file-scoped. Unscoped Vue styles are global.
    """
    is_svelte = PurePath(file_path).suffix.lower() == ".svelte"
    lines = LineIndex(content)
    result = ExtractionResult()
    blocks = split_blocks(content, nested_templates=not is_svelte)

    for block in blocks:
        line_offset = lines.line_of(block.body_start) - 1

        if block.tag == "style":
            scoped = is_svelte or "scoped" in block.attrs or "module" in block.attrs
            result.extend(
                extract_stylesheet(
                    block.body,
                    file_path,
                    scoped=scoped,
                    dialect=_style_dialect(block.attrs),
                    line_offset=line_offset,
                )
            )
        elif block.tag == "script":
            result.usages.extend(
                extract_script_usages(
                    block.body,
                    file_path,
                    line_offset=line_offset,
                    language=_script_language(block.attrs),
                )
            )
        elif block.tag == "template" and not is_svelte:
            result.extend(extract_markup(block.body, file_path, line_offset=line_offset))

    if is_svelte:
        # Svelte markup is everything outside <script> and <style>
        markup = content
        for block in blocks:
            if block.tag in ("script", "style"):
                hidden = blank(markup[block.start : block.end])
                markup = markup[: block.start] + hidden + markup[block.end :]
        result.extend(extract_markup(markup, file_path))

    return result
