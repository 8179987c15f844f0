"""Class usages from JavaScript and TypeScript sources (including JSX).

Sources are parsed with tree-sitter and every string literal is classified by
the syntax around it. Literals in a class-bearing position (``className=``,
``classList.add(...)``, ``clsx(...)``, selector queries) are high-confidence
usages. Any other literal that merely looks like a class list is recorded with
low confidence. Import specifiers are never usages.
"""

import re
from collections.abc import Iterator
from pathlib import PurePath

import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser

from cssaudit.extractors.base import class_tokens
from cssaudit.models.records import ClassUsage, Confidence, ExtractionResult

LANGUAGES = {
    "javascript": Language(tsjavascript.language()),
    "typescript": Language(tstypescript.language_typescript()),
    "tsx": Language(tstypescript.language_tsx()),
}
SUFFIX_LANGUAGES = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

CLASS_HELPERS = {"clsx", "classnames", "classNames", "cn", "cx", "twMerge", "twJoin"}
CLASSLIST_METHODS = {"add", "remove", "toggle", "contains", "replace"}
SELECTOR_METHODS = {"querySelector", "querySelectorAll", "closest", "matches", "$", "jQuery"}
JQUERY_CLASS_METHODS = {"addClass", "removeClass", "toggleClass", "hasClass"}
CLASS_NAME_METHODS = {"getElementsByClassName"}
CLASS_PROPERTIES = {"className", "class"}
IMPORT_CALLEES = {"require", "import"}
STYLE_MODULE = "$style"

STRING_NODES = {"string", "template_string"}
# Expressions that hand a literal's value through unchanged
PASS_THROUGH_NODES = {
    "parenthesized_expression",
    "jsx_expression",
    "array",
    "template_substitution",
    "template_string",
    "as_expression",
    "satisfies_expression",
    "non_null_expression",
    "type_assertion",
}
LOGICAL_OPERATORS = {"&&", "||", "??"}

SELECTOR_CLASS_RE = re.compile(r"\.(-?[A-Za-z_][\w\-]*)")

# Low-confidence literals: every whitespace-separated token must look like a class
MAX_LOW_CONFIDENCE_LENGTH = 200
LOW_CONFIDENCE_TOKEN_RE = re.compile(r"^-?[A-Za-z_][\w\-:/]*$")


def language_for(file_path: str) -> str:
    """Pick the grammar for a file. JSX is part of the JavaScript grammar."""
    return SUFFIX_LANGUAGES.get(PurePath(file_path).suffix.lower(), "javascript")


def parse(source: str, language: str = "javascript") -> Node:
    """Parse source and return the root node of its syntax tree."""
    # One parser per call, since extraction may run on worker threads
    parser = Parser(LANGUAGES[language])
    return parser.parse(source.encode("utf-8")).root_node


def _walk(root: Node) -> Iterator[Node]:
    """Yield every node below ``root`` in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _text(node: Node | None) -> str:
    if node is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def literal_value(node: Node) -> str:
    """Return the contents of a string or template literal.

    Template substitutions become spaces, so `card ${size}` reads as "card ".
    """
    if node.type == "string":
        return _text(node)[1:-1]

    raw = node.text
    base = node.start_byte
    parts = []
    position = base + 1
    for child in node.children:
        if child.type == "template_substitution":
            parts.append(raw[position - base : child.start_byte - base])
            position = child.end_byte
    parts.append(raw[position - base : node.end_byte - base - 1])
    return " ".join(part.decode("utf-8", errors="replace") for part in parts)


def _key_name(node: Node | None) -> str:
    if node is not None and node.type == "string":
        return literal_value(node)
    return _text(node)


def _line(node: Node, line_offset: int) -> int:
    return node.start_point[0] + 1 + line_offset


def _callee(call: Node) -> tuple[str, str]:
    """Split the callee of ``el.classList.add(...)`` into ("el.classList", "add")."""
    function = call.child_by_field_name("function")
    if function is None:
        return "", ""
    if function.type == "member_expression":
        return (
            _text(function.child_by_field_name("object")),
            _text(function.child_by_field_name("property")),
        )
    return "", _text(function)


def _call_context(call: Node) -> str | None:
    owner, name = _callee(call)
    if name in CLASS_HELPERS or name in JQUERY_CLASS_METHODS or name in CLASS_NAME_METHODS:
        return "classes"
    if name in CLASSLIST_METHODS and owner.endswith("classList"):
        return "classes"
    if name in SELECTOR_METHODS:
        return "selector"
    if name in IMPORT_CALLEES:
        return "skip"
    return None


def _passes_through(parent: Node, child: Node) -> bool:
    if parent.type in PASS_THROUGH_NODES:
        return True
    if parent.type == "ternary_expression":
        return child != parent.child_by_field_name("condition")
    if parent.type == "binary_expression":
        operator = parent.child_by_field_name("operator")
        return operator is not None and operator.type in LOGICAL_OPERATORS
    return False


def _climb(node: Node) -> tuple[Node | None, Node]:
    """Find the construct that gives a literal its meaning.

    Returns that ancestor and the child it was reached through, so that
    ``cond ? "a" : "b"`` inside ``className={...}`` resolves to the attribute.
    """
    child, parent = node, node.parent
    while parent is not None and _passes_through(parent, child):
        child, parent = parent, parent.parent
    return parent, child


def _classify(node: Node) -> str | None:
    """Classify a string literal as "classes", "selector", "skip" or None."""
    anchor, child = _climb(node)
    if anchor is None:
        return None
    kind = anchor.type

    if kind == "jsx_attribute":
        name = anchor.named_children[0] if anchor.named_children else None
        return "classes" if _text(name) in CLASS_PROPERTIES else None
    if kind == "arguments":
        call = anchor.parent
        if call is not None and call.type == "call_expression":
            return _call_context(call)
        return None
    if kind in ("assignment_expression", "augmented_assignment_expression"):
        left = anchor.child_by_field_name("left")
        if child == anchor.child_by_field_name("right") and left is not None:
            if left.type == "member_expression":
                prop = left.child_by_field_name("property")
                return "classes" if _text(prop) in CLASS_PROPERTIES else None
        return None
    if kind == "pair":
        key = anchor.child_by_field_name("key")
        if child == key:
            # Keys are only class names inside helper calls, handled separately
            return "skip"
        return "classes" if _key_name(key) in CLASS_PROPERTIES else None
    if kind == "subscript_expression":
        owner = anchor.child_by_field_name("object")
        return "classes" if _text(owner) == STYLE_MODULE else None
    if kind in ("import_statement", "export_statement"):
        return "skip"
    return None


def _low_confidence_names(value: str) -> list[str]:
    value = value.strip()
    if not value or len(value) > MAX_LOW_CONFIDENCE_LENGTH:
        return []
    tokens = value.split()
    if not all(LOW_CONFIDENCE_TOKEN_RE.match(token) for token in tokens):
        return []
    return tokens


def _object_keys(obj: Node) -> Iterator[Node]:
    for member in obj.named_children:
        if member.type == "pair":
            key = member.child_by_field_name("key")
            if key is not None and key.type in ("property_identifier", "string"):
                yield key
        elif member.type == "shorthand_property_identifier":
            yield member


def _helper_object_keys(call: Node) -> Iterator[Node]:
    """Keys of object literals passed straight to a class helper, as in clsx({ active: on })."""
    arguments = call.child_by_field_name("arguments")
    if arguments is None:
        return
    for argument in arguments.named_children:
        if argument.type == "object":
            yield from _object_keys(argument)


def _style_module_property(node: Node) -> Node | None:
    """Return ``title`` for a CSS module reference such as $style.title."""
    if _text(node.child_by_field_name("object")) != STYLE_MODULE:
        return None
    return node.child_by_field_name("property")


def _literal_usages(node: Node, file_path: str, line: int) -> list[ClassUsage]:
    context = _classify(node)
    if context == "skip":
        return []

    value = literal_value(node)
    if context == "classes":
        names, confidence = class_tokens(value), Confidence.HIGH
    elif context == "selector":
        names = [m.group(1) for m in SELECTOR_CLASS_RE.finditer(value)]
        confidence = Confidence.HIGH
    else:
        names, confidence = _low_confidence_names(value), Confidence.LOW

    return [ClassUsage(name, file_path, line, confidence) for name in names]


def extract_script_usages(
    content: str,
    file_path: str,
    *,
    line_offset: int = 0,
    language: str | None = None,
) -> list[ClassUsage]:
    """Extract class usages from script source.

    ``language`` overrides the grammar picked from the file suffix, for
    scripts embedded in components and markup.
    """
    root = parse(content, language or language_for(file_path))
    usages: list[ClassUsage] = []

    for node in _walk(root):
        if node.type in STRING_NODES:
            usages.extend(_literal_usages(node, file_path, _line(node, line_offset)))
        elif node.type == "call_expression" and _callee(node)[1] in CLASS_HELPERS:
            for key in _helper_object_keys(node):
                name = _key_name(key)
                if name:
                    usages.append(
                        ClassUsage(name, file_path, _line(key, line_offset), Confidence.HIGH)
                    )
        elif node.type == "member_expression":
            prop = _style_module_property(node)
            if prop is not None:
                usages.append(
                    ClassUsage(_text(prop), file_path, _line(prop, line_offset), Confidence.HIGH)
                )

    return usages


def _at_top_level(node: Node) -> bool:
    anchor, _ = _climb(node)
    return anchor is not None and anchor.type == "expression_statement"


def extract_class_expression(expression: str, file_path: str, line: int) -> list[ClassUsage]:
    """Extract class names from a template class binding expression.

    String literals that make up the value and the keys of an object value
    are class names, as in ``{ active: isActive, 'text-danger': hasError }``
    or ``[a ? 'x' : 'y']``.
    """
    root = parse(f"({expression})")
    names: list[str] = []

    for node in _walk(root):
        if node.type in STRING_NODES:
            if _at_top_level(node) or _classify(node) == "classes":
                names.extend(class_tokens(literal_value(node)))
        elif node.type == "object" and _at_top_level(node):
            names.extend(_key_name(key) for key in _object_keys(node))
        elif node.type == "call_expression" and _callee(node)[1] in CLASS_HELPERS:
            names.extend(_key_name(key) for key in _helper_object_keys(node))
        elif node.type == "member_expression":
            prop = _style_module_property(node)
            if prop is not None:
                names.append(_text(prop))

    return [ClassUsage(name, file_path, line, Confidence.HIGH) for name in names if name]


def extract_script(content: str, file_path: str, *, line_offset: int = 0) -> ExtractionResult:
    """Extract class usages from a script file. Scripts define no classes."""
    return ExtractionResult(
        usages=extract_script_usages(content, file_path, line_offset=line_offset)
    )
