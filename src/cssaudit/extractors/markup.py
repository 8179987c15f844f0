"""Class usages from HTML and component templates."""

import re

from bs4 import BeautifulSoup

from cssaudit.extractors.base import class_tokens
from cssaudit.extractors.script import extract_class_expression, extract_script_usages
from cssaudit.models.records import ClassUsage, Confidence, ExtractionResult

# Attribute names are lowercased by html.parser
BINDING_ATTRIBUTES = {":class", "v-bind:class", "x-bind:class", "[ngclass]", "[class]"}
SVELTE_DIRECTIVE_PREFIX = "class:"
SVELTE_EXPR_RE = re.compile(r"\{[^}]*\}")
SCRIPT_TYPES = {"", "text/javascript", "module", "application/javascript"}


def _static_classes(value: str | list[str]) -> list[str]:
    if isinstance(value, list):
        value = " ".join(value)
    return class_tokens(SVELTE_EXPR_RE.sub(" ", value))


def extract_markup(
    content: str,
    file_path: str,
    *,
    line_offset: int = 0,
) -> ExtractionResult:
    """Extract class usages from markup.

    Static ``class`` attributes are high-confidence usages. Framework class
    bindings (``:class``, ``x-bind:class``, ``[ngClass]``) are read as class
    expressions, and Svelte ``class:name`` directives name a class directly.
    Inline ``<script>`` bodies are scanned like script files.
    """
    result = ExtractionResult()
    soup = BeautifulSoup(content, "html.parser")

    for tag in soup.find_all(True):
        line = (tag.sourceline or 1) + line_offset

        if tag.name == "script" and tag.string and tag.get("type", "") in SCRIPT_TYPES:
            # Inline script text starts on the line of its opening tag
            result.usages.extend(
                extract_script_usages(tag.string, file_path, line_offset=line - 1)
            )

        for attr_name, value in tag.attrs.items():
            if attr_name == "class":
                for class_name in _static_classes(value):
                    result.usages.append(ClassUsage(class_name, file_path, line, Confidence.HIGH))
            elif attr_name in BINDING_ATTRIBUTES and isinstance(value, str):
                result.usages.extend(extract_class_expression(value, file_path, line))
            elif attr_name.startswith(SVELTE_DIRECTIVE_PREFIX):
                class_name = attr_name[len(SVELTE_DIRECTIVE_PREFIX) :]
                if class_name:
                    result.usages.append(ClassUsage(class_name, file_path, line, Confidence.HIGH))

    return result
