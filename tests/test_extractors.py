"""Tests for the stylesheet, script, markup and component extractors."""

from cssaudit.extractors import (
    extract_component,
    extract_markup,
    extract_script,
    extract_stylesheet,
)
from cssaudit.extractors.base import LineIndex, class_tokens
from cssaudit.extractors.component import split_blocks
from cssaudit.extractors.script import extract_class_expression, language_for
from cssaudit.models.records import GLOBAL_SCOPE, Confidence


def names(records) -> list[str]:
    return [r.class_name for r in records]


def by_confidence(usages, confidence: Confidence) -> list[str]:
    return [u.class_name for u in usages if u.confidence is confidence]


class TestHelpers:
    """Tests for shared extractor helpers."""

    def test_line_index(self):
        lines = LineIndex("a\nbc\n\nd")

        assert lines.line_of(0) == 1
        assert lines.line_of(2) == 2
        assert lines.line_of(5) == 3
        assert lines.line_of(6) == 4

    def test_class_tokens(self):
        """Template expressions and non-class tokens are dropped."""
        assert class_tokens("btn {{ extra }} md:flex w-1/2 <%= x %> 123") == [
            "btn",
            "md:flex",
            "w-1/2",
        ]


class TestStylesheetExtractor:
    """Tests for extract_stylesheet."""

    def test_simple_rule(self):
        result = extract_stylesheet(".btn { color: red; }", "a.css")

        assert names(result.definitions) == ["btn"]
        assert result.definitions[0].line == 1
        assert result.definitions[0].scoped == GLOBAL_SCOPE
        assert result.usages == []

    def test_selector_lists_and_combinators(self):
        """Every class in a compound selector list is a definition."""
        css = ".a, .b > .c:hover,\n#id .d::before { margin: 0 }"

        result = extract_stylesheet(css, "a.css")

        assert names(result.definitions) == ["a", "b", "c", "d"]
        assert [d.line for d in result.definitions] == [1, 1, 1, 2]

    def test_comments_and_strings_ignored(self):
        """Classes in comments and attribute strings are not definitions."""
        css = '/* .ghost { } */\na[href$=".pdf"] { }\n.real { content: ".fake"; }'

        result = extract_stylesheet(css, "a.css")

        assert names(result.definitions) == ["real"]
        assert result.definitions[0].line == 3

    def test_media_query(self):
        """At-rule preludes define nothing; nested rules still count."""
        css = "@media (min-width: 10.5em) {\n  .wide { display: block; }\n}"

        result = extract_stylesheet(css, "a.css")

        assert names(result.definitions) == ["wide"]
        assert result.definitions[0].line == 2

    def test_keyframes_skipped(self):
        css = "@keyframes fade {\n  from { opacity: 0; }\n  to { opacity: 1; }\n}\n.after {}"

        result = extract_stylesheet(css, "a.css")

        assert names(result.definitions) == ["after"]

    def test_escaped_names(self):
        """Escaped characters are unescaped in class names."""
        css = ".md\\:flex {}\n.w-1\\/2 {}"

        result = extract_stylesheet(css, "a.css")

        assert names(result.definitions) == ["md:flex", "w-1/2"]

    def test_scss_parent_suffix(self):
        """SCSS &-suffix selectors expand against the parent class."""
        scss = (
            ".card {\n"
            "  &__title { font-weight: bold; }\n"
            "  &--active { color: red; }\n"
            "  &.selected { }\n"
            "  .inner { }\n"
            "}\n"
        )

        result = extract_stylesheet(scss, "card.scss")

        assert names(result.definitions) == [
            "card",
            "card__title",
            "card--active",
            "selected",
            "inner",
        ]
        assert [d.line for d in result.definitions] == [1, 2, 3, 4, 5]

    def test_interpolated_names_skipped(self):
        """Names completed by interpolation are not definitions."""
        scss = "@each $k in a, b {\n  .icon-#{$k} { color: red; }\n}\n"

        assert extract_stylesheet(scss, "x.scss").definitions == []

    def test_interpolation_next_to_real_classes(self):
        scss = ".btn-#{$size}, .static { }\n.card {\n  &-#{$k} { }\n  &__body { }\n}\n.@{prefix}-x, .y { }\n"

        result = extract_stylesheet(scss, "x.scss")

        assert names(result.definitions) == ["static", "card", "card__body", "y"]

    def test_scss_line_comments(self):
        """// comments are skipped in SCSS but URLs are not comments."""
        scss = "// .ghost {}\n.bg { background: url(http://x.com/a.png); }\n.after {}"

        result = extract_stylesheet(scss, "a.scss")

        assert names(result.definitions) == ["bg", "after"]

    def test_scoped_definitions(self):
        """scoped=True makes definitions local to the file."""
        result = extract_stylesheet(".card {}", "x.vue", scoped=True, dialect="css")

        assert result.definitions[0].scoped == "x.vue"

    def test_line_offset(self):
        result = extract_stylesheet("\n.card {}", "x.vue", line_offset=10)

        assert result.definitions[0].line == 12


class TestScriptExtractor:
    """Tests for extract_script."""

    def test_class_name_assignment(self):
        result = extract_script('el.className = "a b";', "app.js")

        assert by_confidence(result.usages, Confidence.HIGH) == ["a", "b"]
        assert result.definitions == []

    def test_jsx_class_name(self):
        jsx = 'export const Card = () => (\n  <div className="card active">x</div>\n);'

        result = extract_script(jsx, "Card.jsx")

        assert by_confidence(result.usages, Confidence.HIGH) == ["card", "active"]
        assert [u.line for u in result.usages] == [2, 2]

    def test_class_helpers(self):
        """Literals and object keys inside clsx() are high-confidence."""
        jsx = '<div className={clsx("btn", { active: isActive })} />'

        result = extract_script(jsx, "Button.tsx")

        assert sorted(by_confidence(result.usages, Confidence.HIGH)) == ["active", "btn"]

    def test_class_list_methods(self):
        js = 'el.classList.add("open");\nel.classList.toggle("is-hidden", flag);'

        result = extract_script(js, "menu.js")

        assert by_confidence(result.usages, Confidence.HIGH) == ["open", "is-hidden"]
        assert [u.line for u in result.usages] == [1, 2]

    def test_selector_queries(self):
        """Only the class parts of a selector are usages."""
        js = 'document.querySelectorAll(".menu .item > a#top");'

        result = extract_script(js, "menu.js")

        assert by_confidence(result.usages, Confidence.HIGH) == ["menu", "item"]

    def test_jquery(self):
        js = '$(".nav").addClass("sticky");'

        result = extract_script(js, "nav.js")

        assert by_confidence(result.usages, Confidence.HIGH) == ["nav", "sticky"]

    def test_get_elements_by_class_name(self):
        result = extract_script('document.getElementsByClassName("row")', "a.js")

        assert by_confidence(result.usages, Confidence.HIGH) == ["row"]

    def test_unrelated_literal_is_low_confidence(self):
        """Class-shaped literals outside a known position are low-confidence."""
        result = extract_script('const cls = "btn btn-primary";', "a.js")

        assert by_confidence(result.usages, Confidence.LOW) == ["btn", "btn-primary"]
        assert by_confidence(result.usages, Confidence.HIGH) == []

    def test_non_class_literals_ignored(self):
        """Paths and prose are not treated as class names."""
        js = 'fetch("/api/users");\nalert("Hello, world!");'

        assert extract_script(js, "a.js").usages == []

    def test_imports_ignored(self):
        js = 'import styles from "styles";\nconst lib = require("lodash");'

        assert extract_script(js, "a.js").usages == []

    def test_comments_ignored(self):
        js = '// el.className = "ghost";\n/* el.classList.add("ghost2") */'

        assert extract_script(js, "a.js").usages == []

    def test_template_literal(self):
        """Placeholders in template literals are not class names."""
        js = "el.className = `card ${size}`;"

        result = extract_script(js, "a.js")

        assert by_confidence(result.usages, Confidence.HIGH) == ["card"]

    def test_apostrophe_in_jsx_text(self):
        """An apostrophe in JSX text does not start a string."""
        jsx = "const A = () => (\n  <>\n    <p>Don't panic</p>\n    <div className=\"x\" />\n  </>\n);"

        result = extract_script(jsx, "a.jsx")

        assert by_confidence(result.usages, Confidence.HIGH) == ["x"]

    def test_style_module_reference(self):
        result = extract_script("const c = $style.title;", "a.js")

        assert by_confidence(result.usages, Confidence.HIGH) == ["title"]

    def test_conditional_class_name(self):
        """Both branches of a conditional inside className are classes, the condition is not."""
        jsx = '<div className={mode === "dark" ? "theme-dark" : "theme-light"} />'

        result = extract_script(jsx, "a.jsx")

        assert by_confidence(result.usages, Confidence.HIGH) == ["theme-dark", "theme-light"]
        assert by_confidence(result.usages, Confidence.LOW) == ["dark"]

    def test_variant_config_is_not_high_confidence(self):
        """Variant maps such as cva() are not read as class names."""
        ts = (
            "const button = cva('btn', {\n"
            "  variants: { intent: { primary: 'bg-blue' } },\n"
            "  defaultVariants: { intent: 'primary' },\n"
            "});\n"
        )

        result = extract_script(ts, "button.ts")

        assert by_confidence(result.usages, Confidence.HIGH) == []
        assert sorted(by_confidence(result.usages, Confidence.LOW)) == ["bg-blue", "btn", "primary"]

    def test_helper_keys_only_from_direct_arguments(self):
        """Keys of nested objects inside a helper call are not class names."""
        js = "cn({ 'is-open': open, nested: { deep: true } }, [{ other: x }]);"

        result = extract_script(js, "a.js")

        assert sorted(by_confidence(result.usages, Confidence.HIGH)) == ["is-open", "nested"]

    def test_typescript_syntax(self):
        """Type annotations do not hide class usages."""
        ts = 'const el = document.querySelector<HTMLElement>(".panel")!;\nel.classList.add(<string>"open");'

        result = extract_script(ts, "panel.ts")

        assert by_confidence(result.usages, Confidence.HIGH) == ["panel", "open"]

    def test_language_for(self):
        assert language_for("a.ts") == "typescript"
        assert language_for("a.tsx") == "tsx"
        assert language_for("a.jsx") == "javascript"
        assert language_for("Comp.vue") == "javascript"


class TestClassExpression:
    """Tests for extract_class_expression."""

    def test_object_syntax(self):
        usages = extract_class_expression("{ active: isActive, 'text-danger': hasError }", "a.vue", 3)

        assert sorted(names(usages)) == ["active", "text-danger"]
        assert {u.line for u in usages} == {3}
        assert {u.confidence for u in usages} == {Confidence.HIGH}

    def test_array_and_ternary(self):
        usages = extract_class_expression("[isOn ? 'on' : 'off', base]", "a.vue", 1)

        assert names(usages) == ["on", "off"]

    def test_style_module(self):
        usages = extract_class_expression('[$style.title, $style["sub-title"]]', "a.vue", 1)

        assert sorted(names(usages)) == ["sub-title", "title"]


class TestMarkupExtractor:
    """Tests for extract_markup."""

    def test_static_classes(self):
        html = '<html>\n<body>\n  <div class="a b">\n    <p class="c"></p>\n  </div>\n</body>\n</html>'

        result = extract_markup(html, "index.html")

        assert [(u.class_name, u.line) for u in result.usages] == [("a", 3), ("b", 3), ("c", 4)]
        assert {u.confidence for u in result.usages} == {Confidence.HIGH}
        assert result.definitions == []

    def test_template_expressions_dropped(self):
        result = extract_markup('<div class="btn {{ extra }}"></div>', "page.html")

        assert names(result.usages) == ["btn"]

    def test_vue_binding(self):
        result = extract_markup('<div :class="{ active: isOn }"></div>', "t.html")

        assert names(result.usages) == ["active"]

    def test_angular_binding(self):
        result = extract_markup("<div [ngClass]=\"{ 'is-open': open }\"></div>", "t.html")

        assert names(result.usages) == ["is-open"]

    def test_svelte_directive(self):
        result = extract_markup('<div class:selected={isSelected}></div>', "t.html")

        assert names(result.usages) == ["selected"]

    def test_inline_script(self):
        """Inline scripts are scanned with script line numbers."""
        html = '<body>\n<script>\n  document.body.classList.add("loaded");\n</script>\n</body>'

        result = extract_markup(html, "index.html")

        assert [(u.class_name, u.line) for u in result.usages] == [("loaded", 3)]

    def test_non_script_types_skipped(self):
        html = '<script type="text/template">el.className = "ghost";</script>'

        assert extract_markup(html, "index.html").usages == []


VUE_COMPONENT = """<template>
  <div class="box">
    <span class="label">x</span>
  </div>
</template>
<script>
export default { data() { return { cls: "dynamic" } } }
</script>
<style scoped>
.box { color: red; }
</style>
"""

SVELTE_COMPONENT = """<script>
  let active = false;
</script>

<div class="wrap" class:active={active}>
  <p class="{active ? 'on' : 'off'}">x</p>
</div>
<style>
  .wrap { display: flex; }
  .active { color: red; }
</style>
"""


class TestComponentExtractor:
    """Tests for extract_component."""

    def test_split_blocks(self):
        blocks = split_blocks(VUE_COMPONENT)

        assert [b.tag for b in blocks] == ["template", "script", "style"]
        assert blocks[2].attrs == {"scoped": ""}

    def test_nested_templates(self):
        """A Vue template may contain nested <template> tags."""
        vue = '<template>\n  <template v-if="x"><b class="a"></b></template>\n</template>\n<style>.a {}</style>'

        blocks = split_blocks(vue)

        assert [b.tag for b in blocks] == ["template", "style"]

    def test_svelte_template_elements_close_normally(self):
        """Without nesting, a <template> block ends at its own closing tag."""
        svelte = '<template><i class="a"></i></template>\n<style>.a {}</style>\n<template></template>'

        blocks = split_blocks(svelte, nested_templates=False)

        assert [b.tag for b in blocks] == ["template", "style", "template"]
        assert blocks[1].body == ".a {}"

    def test_svelte_styles_after_template_element(self):
        svelte = '<template><i class="a"></i></template>\n<style>\n.a {}\n</style>\n<template></template>'

        result = extract_component(svelte, "A.svelte")

        assert [(d.class_name, d.line) for d in result.definitions] == [("a", 3)]

    def test_typescript_script_block(self):
        """<script lang="ts"> is parsed as TypeScript."""
        vue = (
            '<template><div></div></template>\n'
            '<script lang="ts">\n'
            "const el = document.body as HTMLElement;\n"
            'el.classList.add(<string>"ready");\n'
            "</script>\n"
        )

        result = extract_component(vue, "T.vue")

        assert [(u.class_name, u.line) for u in result.usages] == [("ready", 4)]

    def test_vue_scoped_component(self):
        result = extract_component(VUE_COMPONENT, "Box.vue")

        assert [(u.class_name, u.line) for u in result.usages if u.confidence is Confidence.HIGH] == [
            ("box", 2),
            ("label", 3),
        ]
        assert by_confidence(result.usages, Confidence.LOW) == ["dynamic"]
        assert [(d.class_name, d.line, d.scoped) for d in result.definitions] == [
            ("box", 10, "Box.vue"),
        ]

    def test_vue_global_style(self):
        vue = '<template><i class="x"></i></template>\n<style lang="scss">\n.x { &-y {} }\n</style>'

        result = extract_component(vue, "X.vue")

        assert [(d.class_name, d.scoped) for d in result.definitions] == [
            ("x", GLOBAL_SCOPE),
            ("x-y", GLOBAL_SCOPE),
        ]

    def test_vue_css_module(self):
        vue = (
            '<template>\n  <p :class="$style.title"></p>\n</template>\n'
            "<style module>\n.title {}\n</style>\n"
        )

        result = extract_component(vue, "T.vue")

        assert names(result.usages) == ["title"]
        assert [(d.class_name, d.scoped) for d in result.definitions] == [("title", "T.vue")]

    def test_svelte_component(self):
        """Svelte styles are always file-scoped; markup is the rest of the file."""
        result = extract_component(SVELTE_COMPONENT, "Toggle.svelte")

        assert [(u.class_name, u.line) for u in result.usages] == [("wrap", 5), ("active", 5)]
        assert [(d.class_name, d.line, d.scoped) for d in result.definitions] == [
            ("wrap", 9, "Toggle.svelte"),
            ("active", 10, "Toggle.svelte"),
        ]
