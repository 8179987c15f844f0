"""Tailwind CSS utility-class recognition.

Tailwind generates classes on demand from a configuration file, so there is no
stylesheet in the project that defines them. This module approximates the
default Tailwind vocabulary well enough to keep those names out of the
unused/undefined report.
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILES = [
    "tailwind.config.js",
    "tailwind.config.cjs",
    "tailwind.config.mjs",
    "tailwind.config.ts",
]

DEPENDENCY_TABLES = ["dependencies", "devDependencies", "peerDependencies"]

PREFIX_RE = re.compile(r"""\bprefix\s*:\s*["']([^"']+)["']""")
FRACTION_RE = re.compile(r"^\d+/\d+$")
NUMBER_RE = re.compile(r"^\d+(\.\d+)?$")
ARBITRARY_RE = re.compile(r"^\[[^\]]+\]$")
ARBITRARY_PROPERTY_RE = re.compile(r"^\[[a-zA-Z-]+:[^\]]+\]$")

SPACING_SCALE = {
    "0", "0.5", "1", "1.5", "2", "2.5", "3", "3.5", "4", "5", "6", "7", "8",
    "9", "10", "11", "12", "14", "16", "20", "24", "28", "32", "36", "40",
    "44", "48", "52", "56", "60", "64", "72", "80", "96", "px",
}

SIZE_KEYWORDS = {
    "auto", "full", "screen", "svw", "svh", "lvw", "lvh", "dvw", "dvh",
    "min", "max", "fit", "none", "prose",
    "xs", "sm", "md", "lg", "xl", "2xl", "3xl", "4xl", "5xl", "6xl", "7xl",
    "screen-sm", "screen-md", "screen-lg", "screen-xl", "screen-2xl",
}

COLOR_NAMES = {
    "slate", "gray", "zinc", "neutral", "stone", "red", "orange", "amber",
    "yellow", "lime", "green", "emerald", "teal", "cyan", "sky", "blue",
    "indigo", "violet", "purple", "fuchsia", "pink", "rose",
}

COLOR_KEYWORDS = {"inherit", "current", "transparent", "black", "white"}

SHADES = {"50", "100", "200", "300", "400", "500", "600", "700", "800", "900", "950"}

STATIC_UTILITIES = {
    # Layout
    "container", "block", "inline-block", "inline", "flex", "inline-flex",
    "grid", "inline-grid", "table", "inline-table", "table-row", "table-cell",
    "contents", "list-item", "hidden", "flow-root",
    "static", "fixed", "absolute", "relative", "sticky",
    "visible", "invisible", "collapse", "isolate", "isolation-auto",
    "float-left", "float-right", "float-none", "clear-both", "clear-none",
    "box-border", "box-content",
    # Flexbox
    "grow", "shrink", "flex-1", "flex-auto", "flex-initial", "flex-none",
    "flex-row", "flex-row-reverse", "flex-col", "flex-col-reverse",
    "flex-wrap", "flex-wrap-reverse", "flex-nowrap",
    # Typography
    "italic", "not-italic", "underline", "overline", "line-through",
    "no-underline", "uppercase", "lowercase", "capitalize", "normal-case",
    "truncate", "antialiased", "subpixel-antialiased", "ordinal",
    "slashed-zero", "lining-nums", "oldstyle-nums", "tabular-nums",
    "proportional-nums", "normal-nums", "text-ellipsis", "text-clip",
    "text-wrap", "text-nowrap", "text-balance", "text-pretty",
    # Borders and effects
    "border", "rounded", "shadow", "ring", "ring-inset", "outline",
    "border-solid", "border-dashed", "border-dotted", "border-double",
    "border-hidden", "border-none", "border-collapse", "border-separate",
    "blur", "grayscale", "invert", "sepia", "filter", "filter-none",
    "backdrop-blur", "backdrop-filter", "drop-shadow",
    # Transitions and transforms
    "transition", "transform", "transform-gpu", "transform-none",
    # Interactivity and accessibility
    "sr-only", "not-sr-only", "resize", "resize-none", "resize-x", "resize-y",
    "appearance-none", "pointer-events-none", "pointer-events-auto",
    "select-none", "select-text", "select-all", "select-auto",
    # Grouping markers
    "group", "peer",
}

# Utility prefix -> accepted value kinds. Kinds are resolved by _value_matches.
VALUE_FAMILIES: dict[str, tuple[str, ...]] = {}


def _family(prefixes: list[str], *kinds: str) -> None:
    for prefix in prefixes:
        VALUE_FAMILIES[prefix] = VALUE_FAMILIES.get(prefix, ()) + kinds


_SIDES = ["", "x", "y", "t", "r", "b", "l", "s", "e"]
_family([f"p{side}" for side in _SIDES], "spacing")
_family([f"m{side}" for side in _SIDES], "spacing", "auto")
_family(["gap", "gap-x", "gap-y", "space-x", "space-y", "indent"], "spacing")
_family(["inset", "inset-x", "inset-y", "top", "right", "bottom", "left", "start", "end"],
        "spacing", "fraction", "auto", "full")
_family(["translate-x", "translate-y"], "spacing", "fraction", "full")
_family(["w", "h", "min-w", "min-h", "max-w", "max-h", "size", "basis"],
        "spacing", "fraction", "size")
_family(["bg", "text", "border", "border-x", "border-y", "border-t", "border-r",
         "border-b", "border-l", "ring", "ring-offset", "outline", "divide", "from",
         "via", "to", "fill", "stroke", "decoration", "placeholder", "caret",
         "accent", "shadow"], "color")
_family(["border", "border-x", "border-y", "border-t", "border-r", "border-b",
         "border-l", "ring", "ring-offset", "outline", "outline-offset", "divide-x",
         "divide-y", "stroke", "decoration", "underline-offset"], "number")
_family(["opacity", "z", "order", "grid-cols", "grid-rows", "col-span", "row-span",
         "col-start", "col-end", "row-start", "row-end", "duration", "delay", "scale",
         "scale-x", "scale-y", "rotate", "skew-x", "skew-y", "brightness", "contrast",
         "saturate", "hue-rotate", "line-clamp", "columns", "leading", "grow",
         "shrink", "flex", "backdrop-opacity"], "number")

KEYWORD_FAMILIES: dict[str, set[str]] = {
    "text": {"xs", "sm", "base", "lg", "xl", "2xl", "3xl", "4xl", "5xl", "6xl",
             "7xl", "8xl", "9xl", "left", "center", "right", "justify", "start", "end"},
    "font": {"thin", "extralight", "light", "normal", "medium", "semibold", "bold",
             "extrabold", "black", "sans", "serif", "mono"},
    "rounded": {"none", "sm", "md", "lg", "xl", "2xl", "3xl", "full"},
    "shadow": {"sm", "md", "lg", "xl", "2xl", "inner", "none"},
    "blur": {"none", "sm", "md", "lg", "xl", "2xl", "3xl"},
    "backdrop-blur": {"none", "sm", "md", "lg", "xl", "2xl", "3xl"},
    "drop-shadow": {"sm", "md", "lg", "xl", "2xl", "none"},
    "tracking": {"tighter", "tight", "normal", "wide", "wider", "widest"},
    "leading": {"none", "tight", "snug", "normal", "relaxed", "loose"},
    "ease": {"linear", "in", "out", "in-out"},
    "transition": {"none", "all", "colors", "opacity", "shadow", "transform"},
    "animate": {"none", "spin", "ping", "pulse", "bounce"},
    "justify": {"normal", "start", "end", "center", "between", "around", "evenly",
                "stretch", "items-start", "items-end", "items-center", "items-stretch"},
    "items": {"start", "end", "center", "baseline", "stretch"},
    "content": {"normal", "center", "start", "end", "between", "around", "evenly",
                "baseline", "stretch", "none"},
    "self": {"auto", "start", "end", "center", "stretch", "baseline"},
    "place-content": {"center", "start", "end", "between", "around", "evenly", "baseline",
                      "stretch"},
    "place-items": {"start", "end", "center", "baseline", "stretch"},
    "place-self": {"auto", "start", "end", "center", "stretch"},
    "overflow": {"auto", "hidden", "clip", "visible", "scroll"},
    "overflow-x": {"auto", "hidden", "clip", "visible", "scroll"},
    "overflow-y": {"auto", "hidden", "clip", "visible", "scroll"},
    "object": {"contain", "cover", "fill", "none", "scale-down", "center", "top",
               "bottom", "left", "right"},
    "aspect": {"auto", "square", "video"},
    "whitespace": {"normal", "nowrap", "pre", "pre-line", "pre-wrap", "break-spaces"},
    "break": {"normal", "words", "all", "keep"},
    "list": {"none", "disc", "decimal", "inside", "outside"},
    "align": {"baseline", "top", "middle", "bottom", "text-top", "text-bottom", "sub",
              "super"},
    "cursor": {"auto", "default", "pointer", "wait", "text", "move", "help",
               "not-allowed", "none", "progress", "grab", "grabbing", "crosshair",
               "zoom-in", "zoom-out"},
    "origin": {"center", "top", "top-right", "right", "bottom-right", "bottom",
               "bottom-left", "left", "top-left"},
    "grid-flow": {"row", "col", "dense", "row-dense", "col-dense"},
    "auto-cols": {"auto", "min", "max", "fr"},
    "auto-rows": {"auto", "min", "max", "fr"},
    "grid-cols": {"none", "subgrid"},
    "grid-rows": {"none", "subgrid"},
    "col-span": {"full"},
    "row-span": {"full"},
    "col-start": {"auto"},
    "col-end": {"auto"},
    "order": {"first", "last", "none"},
    "z": {"auto"},
    "line-clamp": {"none"},
    "outline": {"none", "dashed", "dotted", "double"},
    "decoration": {"solid", "double", "dotted", "dashed", "wavy", "auto", "from-font"},
    "bg": {"fixed", "local", "scroll", "clip-border", "clip-padding", "clip-content",
           "clip-text", "repeat", "no-repeat", "repeat-x", "repeat-y", "cover",
           "contain", "center", "top", "bottom", "left", "right", "none",
           "gradient-to-t", "gradient-to-tr", "gradient-to-r", "gradient-to-br",
           "gradient-to-b", "gradient-to-bl", "gradient-to-l", "gradient-to-tl"},
    "will-change": {"auto", "scroll", "contents", "transform"},
    "mix-blend": {"normal", "multiply", "screen", "overlay", "darken", "lighten"},
    "snap": {"start", "end", "center", "none", "x", "y", "both", "mandatory",
             "proximity"},
    "touch": {"auto", "none", "pan-x", "pan-y", "manipulation"},
    "scroll": {"auto", "smooth"},
    "columns": {"auto", "xs", "sm", "md", "lg", "xl", "2xl", "3xl"},
}

# Rounded corners share the same scale as "rounded".
for _corner in ["t", "r", "b", "l", "s", "e", "tl", "tr", "br", "bl", "ss", "se", "es", "ee"]:
    KEYWORD_FAMILIES[f"rounded-{_corner}"] = KEYWORD_FAMILIES["rounded"]


def _split_variants(class_name: str) -> list[str]:
    """Split on ':' while ignoring colons inside arbitrary values."""
    parts: list[str] = []
    depth = 0
    current = ""
    for char in class_name:
        if char == "[":
            depth += 1
        elif char == "]":
            depth = max(depth - 1, 0)
        if char == ":" and depth == 0:
            parts.append(current)
            current = ""
            continue
        current += char
    parts.append(current)
    return parts


def _is_color(value: str) -> bool:
    value = value.split("/", 1)[0]
    if value in COLOR_KEYWORDS:
        return True
    name, _, shade = value.rpartition("-")
    return name in COLOR_NAMES and shade in SHADES


def _value_matches(kind: str, value: str) -> bool:
    if kind == "spacing":
        return value in SPACING_SCALE
    if kind == "fraction":
        return bool(FRACTION_RE.match(value))
    if kind == "size":
        return value in SIZE_KEYWORDS
    if kind == "color":
        return _is_color(value)
    if kind == "number":
        return bool(NUMBER_RE.match(value))
    # Single-keyword kinds such as "auto" or "full"
    return value == kind


@dataclass(frozen=True)
class TailwindOracle:
    """Recognizes default Tailwind utilities, with an optional class prefix."""

    prefix: str = ""

    @property
    def name(self) -> str:
        return "tailwind"

    def is_framework_class(self, class_name: str) -> bool:
        parts = _split_variants(class_name)
        if any(not part for part in parts):
            return False

        utility = parts[-1]
        utility = utility.removeprefix("!").removesuffix("!")

        if self.prefix:
            if not utility.startswith(self.prefix) and not utility.startswith(f"-{self.prefix}"):
                return False
            if utility.startswith("-"):
                utility = "-" + utility[len(self.prefix) + 1 :]
            else:
                utility = utility[len(self.prefix) :]

        utility = utility.removeprefix("-")
        if not utility:
            return False

        if utility in STATIC_UTILITIES:
            return True

        if ARBITRARY_PROPERTY_RE.match(utility):
            return True

        return self._matches_family(utility)

    def _matches_family(self, utility: str) -> bool:
        # Try every split point so "border-x-2" resolves as ("border-x", "2")
        # before ("border", "x-2").
        index = utility.find("-")
        while index != -1:
            family, value = utility[:index], utility[index + 1 :]
            if value:
                if ARBITRARY_RE.match(value) and (
                    family in VALUE_FAMILIES or family in KEYWORD_FAMILIES
                ):
                    return True
                if value in KEYWORD_FAMILIES.get(family, ()):
                    return True
                kinds = VALUE_FAMILIES.get(family, ())
                if any(_value_matches(kind, value) for kind in kinds):
                    return True
            index = utility.find("-", index + 1)
        return False


def _read_prefix(config_path: Path) -> str:
    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError:
        return ""
    match = PREFIX_RE.search(content)
    return match.group(1) if match else ""


def _package_uses_tailwind(package_json: Path) -> bool:
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return False
    if not isinstance(data, dict):
        return False
    return any(
        isinstance(data.get(table), dict) and "tailwindcss" in data[table]
        for table in DEPENDENCY_TABLES
    )


def detect_tailwind(project_root: Path) -> TailwindOracle | None:
    """Build a Tailwind oracle if the project uses Tailwind, else return None."""
    for config_name in CONFIG_FILES:
        config_path = project_root / config_name
        if config_path.is_file():
            return TailwindOracle(prefix=_read_prefix(config_path))

    package_json = project_root / "package.json"
    if package_json.is_file() and _package_uses_tailwind(package_json):
        return TailwindOracle()

    return None
