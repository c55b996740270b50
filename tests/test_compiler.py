"""
End-to-end tests for compile_sync().
"""
import os
import tempfile

import pytest

from compiler import compile_file, compile_sync
from sfc.dependencies import DependencyTracker
from sfc.errors import ReferenceLoadError, StructuralError, StyleSyntaxError
from sfc.models import WarningKind


@pytest.fixture
def compile_doc(options, registry, style_cache):
    def run(content, file_path=None, **kwargs):
        kwargs.setdefault("options", options)
        kwargs.setdefault("registry", registry)
        kwargs.setdefault("style_cache", style_cache)
        return compile_sync(content, file_path, **kwargs)
    return run


class TestCompileSync:
    """Tests for the full pipeline."""

    def test_end_to_end(self, compile_doc):
        content = (
            "<template><p>hi</p></template>"
            "<script>module.exports={}</script>"
            "<style scoped>.a{color:red}</style>"
        )
        result = compile_doc(content, scope_id="_v-x")
        code = result.code

        style_at = code.index('insert(".a[_v-x]{color:red}")')
        script_at = code.index("module.exports={}")
        template_at = code.index('.template = "<p>hi</p>"')
        assert style_at < script_at < template_at
        assert result.scope_id == "_v-x"
        assert result.warnings == []

    def test_statement_counts(self, compile_doc):
        content = (
            "<template><div></div></template>\n"
            "<style>.a{}</style>\n"
            "<style scoped>.b{}</style>\n"
            "<style>.c{}</style>\n"
            "<script>module.exports = { name: 'x' }</script>\n"
        )
        code = compile_doc(content).code
        assert code.count(".template = ") == 1
        assert code.count('require("vueify-insert-css").insert(') == 3
        assert "module.exports = { name: 'x' }" in code

    def test_two_templates_fail(self, compile_doc):
        with pytest.raises(StructuralError):
            compile_doc("<template><a></a></template><template><b></b></template>")

    def test_scope_id_from_path(self, compile_doc):
        a = compile_doc("<style scoped>.a{}</style>", "/project/a.vue")
        b = compile_doc("<style scoped>.a{}</style>", "/project/b.vue")
        again = compile_doc("<style scoped>.a{}</style>", "/project/a.vue")
        assert a.scope_id != b.scope_id
        assert a.scope_id == again.scope_id
        assert a.scope_id.startswith("_v-")
        assert f".a[{a.scope_id}]" in a.code

    def test_scope_id_from_content_without_path(self, compile_doc):
        a = compile_doc("<style scoped>.a{}</style>")
        b = compile_doc("<style scoped>.b{}</style>")
        assert a.scope_id != b.scope_id

    def test_script_only(self, compile_doc):
        code = compile_doc("<script>module.exports = {}</script>").code
        assert "vueify-insert-css" not in code
        assert ".template" not in code

    def test_template_only_targets_empty_definition(self, compile_doc):
        code = compile_doc("<template><p></p></template>").code
        assert code.startswith("module.exports = {}\n")
        assert '.template = "<p></p>"' in code

    def test_missing_script_src(self, compile_doc):
        """A missing src compiles with an empty script body and a warning."""
        with tempfile.TemporaryDirectory() as tmpdir:
            doc_path = os.path.join(tmpdir, "comp.vue")
            result = compile_doc('<script src="./nope.js"></script>', doc_path)

        assert result.code == "\nif (module.exports.__esModule) module.exports = module.exports.default\n"
        assert [w.kind for w in result.warnings] == [WarningKind.REFERENCE]
        assert result.dependencies == [os.path.join(tmpdir, "nope.js")]

    def test_missing_src_strict(self, compile_doc):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ReferenceLoadError):
                compile_doc('<style src="gone.css"></style>', os.path.join(tmpdir, "c.vue"), strict=True)

    def test_invalid_css_fails(self, compile_doc):
        with pytest.raises(StyleSyntaxError):
            compile_doc("<style>.a { color: red</style>")

    def test_namespaced_selector_scoped(self, compile_doc):
        result = compile_doc("<style scoped>svg|a { fill: red }</style>", scope_id="_v-1")
        assert "svg|a[_v-1] { fill: red }" in result.code


class TestLanguageCompilers:
    """Tests for dispatch through the registry."""

    def test_compilers_applied_per_block(self, compile_doc, registry):
        registry.register("upper", lambda source, deps, path: source.upper())
        registry.register("babel", lambda source, deps, path: "/* babel */" + source)
        content = '<template lang="upper"><p>hi</p></template><script>x()</script>'
        code = compile_doc(content).code
        assert '.template = "<P>HI</P>"' in code
        assert "/* babel */x()" in code

    def test_style_compiled_before_scoping(self, compile_doc, registry):
        registry.register("nested", lambda source, deps, path: source.replace("&", ".root"))
        code = compile_doc('<style lang="nested" scoped>& { top: 0 }</style>', scope_id="_v-1").code
        assert ".root[_v-1] { top: 0 }" in code

    def test_compiler_dependencies_reported(self, compile_doc, registry):
        def fake_less(source, deps, path):
            deps.emit("/styles/vars.less")
            return source

        registry.register("less", fake_less)
        tracker = DependencyTracker()
        seen = []
        tracker.subscribe(lambda event: seen.append(event.path))

        result = compile_doc('<style lang="less">.a{}</style>', "/c.vue", dependencies=tracker)
        assert result.dependencies == ["/styles/vars.less"]
        assert seen == ["/styles/vars.less"]

    def test_compiler_error_aborts(self, compile_doc, registry):
        class SyntaxProblem(Exception):
            pass

        def broken(source, deps, path):
            raise SyntaxProblem("unexpected token")

        registry.register("babel", broken)
        with pytest.raises(SyntaxProblem):
            compile_doc("<template><p></p></template><script>nope(</script>")

    def test_script_line_numbers_preserved(self, compile_doc, registry):
        seen = {}

        def capture(source, deps, path):
            seen["source"] = source
            return source

        registry.register("babel", capture)
        compile_doc("<template>\n  <p></p>\n</template>\n\n<script>\nbad line\n</script>\n")
        assert seen["source"].split("\n")[5] == "bad line"


class TestTemplateProcessing:
    """Tests for validation, scope attributes and minification."""

    def test_validator_warnings_collected(self, compile_doc, options):
        calls = []

        def validator(node, full_source):
            calls.append(node.name)
            return ["Unknown element <blink>"]

        options.template_validator = validator
        result = compile_doc("<template><blink></blink></template>", "/c.vue")
        assert calls == ["template"]
        assert [w.kind for w in result.warnings] == [WarningKind.VALIDATION]
        assert result.warnings[0].message == "Unknown element <blink>"
        assert '.template = "<blink></blink>"' in result.code

    def test_validator_skipped_with_lang(self, compile_doc, options):
        calls = []
        options.template_validator = lambda node, full_source: calls.append(1) or []
        compile_doc('<template lang="jade">p hi</template>')
        assert calls == []

    def test_scope_attributes_opt_in(self, compile_doc, options):
        options.scope_template = True
        content = "<template><p>hi</p></template><style scoped>.a{}</style>"
        code = compile_doc(content, scope_id="_v-x").code
        assert '.template = "<p _v-x=\\"\\">hi</p>"' in code

    def test_scope_attributes_need_scoped_style(self, compile_doc, options):
        options.scope_template = True
        code = compile_doc("<template><p>hi</p></template><style>.a{}</style>", scope_id="_v-x").code
        assert '.template = "<p>hi</p>"' in code

    def test_minified_in_production(self, compile_doc, options):
        received = {}

        def minify(source, settings):
            received.update(settings)
            return source.replace("\n", "")

        options.production = True
        options.minify_html = minify
        code = compile_doc("<template>\n<p>hi</p>\n</template>").code
        assert '.template = "<p>hi</p>"' in code
        assert received["collapse_whitespace"] is True

    def test_not_minified_in_development(self, compile_doc, options):
        options.minify_html = lambda source, settings: "MINIFIED"
        code = compile_doc("<template><p>hi</p></template>").code
        assert "MINIFIED" not in code


class TestCompileFile:
    """Tests for compile_file()."""

    def test_reads_file_and_resolves_src(self, options, registry, style_cache):
        with tempfile.TemporaryDirectory() as tmpdir:
            with open(os.path.join(tmpdir, "a.js"), "w") as f:
                f.write("module.exports = { a: 1 }")
            doc_path = os.path.join(tmpdir, "comp.vue")
            with open(doc_path, "w") as f:
                f.write('<template><p></p></template>\n<script src="a.js"></script>\n')

            result = compile_file(doc_path, options=options, registry=registry, style_cache=style_cache)

        assert "module.exports = { a: 1 }" in result.code
        assert result.dependencies == [os.path.join(os.path.abspath(tmpdir), "a.js")]
