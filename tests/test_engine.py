"""
Functional test-suite for the smarttemplate engine.

• Renders the fixture templates under tests/templates (Python + JSON).
• Exercises namespace compilation/caching, add_custom merges, named
  substitution, custom parameter callbacks and attribute rendering.
"""
from __future__ import annotations

import tempfile
import textwrap
import unittest
from pathlib import Path
from typing import Any, Dict, List

from smarttemplate import (
    ContextualRenderer,
    DeferredRenderer,
    InvalidConfiguration,
    KeyNotFound,
    RenderCollection,
    StringifyError,
    TemplateEngine,
    TemplateLoadError,
    TemplateNotFound,
    contextual,
)
from smarttemplate.constants import INJECT_PRESENT

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


# --------------------------------------------------------------------------- #
#  Helpers                                                                    #
# --------------------------------------------------------------------------- #
class _FakeSource:
    def __init__(self, path: str, data: Dict[str, Any], loads: List[str], fail: bool = False) -> None:
        self._path = Path(path)
        self._data = data
        self._loads = loads
        self._fail = fail

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Dict[str, Any]:
        self._loads.append(str(self._path))
        if self._fail:
            raise TemplateLoadError(self._path, "boom")
        return self._data


class _FakeFinder:
    """In-memory finder that records every lookup and load."""

    def __init__(self, files: Dict[str, List[tuple]]) -> None:
        self.finds: List[str] = []
        self.loads: List[str] = []
        self._files = files

    def find(self, name: str) -> List[_FakeSource]:
        self.finds.append(name)
        return [_FakeSource(p, d, self.loads, fail) for p, d, fail in self._files.get(name, [])]


def _first(render: RenderCollection, *_: Any) -> RenderCollection:
    return render


# --------------------------------------------------------------------------- #
#  1. Folder templates                                                        #
# --------------------------------------------------------------------------- #
class RenderFolderTemplateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = TemplateEngine(str(TEMPLATE_DIR), uglify=True)

    def test_render_folder_template(self) -> None:
        def build(render, engine, name):
            return render["table"]({
                "{table-class}": "",
                "{thead-class}": "",
                "{cols}": render["th"]["base"]({"{text}": "column 1"}),
                "{rows}": render["tr"]["base"]({
                    "{cols}": render["td"]["base"]({"{text}": "datum"}),
                }),
            })

        result = self.engine.render("table1.py", build)

        expected = (
            '<div class="table-responsive"> <table class="table table-sm "> {content} '
            '<thead class=""> <tr><th>column 1</th></tr> </thead> <tbody> '
            '<tr><td>datum</td></tr> </tbody> </table> </div>'
        )
        self.assertEqual(expected, result)

    def test_render_deeper_folder_template(self) -> None:
        result = self.engine.render(
            "deeper/table.py",
            lambda render, *_: render["table"]({
                "{rows}": render["tr"]({"{cols}": render["td"]({"{text}": "datum"})}),
            }),
        )
        self.assertEqual('%toEscape% <table class="table table-sm"> <tr><td>datum</td></tr> </table>', result)

    def test_render_deeper_callback_template(self) -> None:
        result = self.engine.render(
            "callback/table.py",
            lambda render, *_: render["deeper"]["table"]("message for better living"),
        )
        self.assertEqual("This is a message for better living", result)

    def test_render_contextual_callback(self) -> None:
        engine = TemplateEngine(str(TEMPLATE_DIR))
        result = engine.render(
            "callback/table.py",
            lambda render, *_: render["table"]("hi", ["first col", "second col"]),
        )
        self.assertEqual('hi\n<table class="table table-sm">\n    hello\n</table>', result)

    def test_render_json_template(self) -> None:
        result = self.engine.render(
            "layout/page.json",
            lambda r, *_: r["page"](title="Home", body=r["parts"]["p"](text="welcome")),
        )
        self.assertEqual(
            "<html><head><title>Home</title></head><body><p>welcome</p></body></html>", result
        )

    def test_literal_braces_in_json_template_survive(self) -> None:
        result = self.engine.render("layout/page.json", lambda r, *_: r["parts"]["style"]())
        self.assertEqual("<style>p { margin: 0; }</style>", result)

    def test_ambiguous_name_merges_all_matches(self) -> None:
        engine = TemplateEngine(str(TEMPLATE_DIR))
        render = engine.render("table.py", _first)
        # custom/callback/table.py is merged first, custom/deeper/table.py wins on conflicts.
        self.assertEqual(["table", "row", "deeper", "tr", "td"], list(render))
        self.assertIsInstance(render["table"], DeferredRenderer)
        self.assertIn("%toEscape%", render["table"]())
        self.assertEqual("<tr><td>x</td></tr>", render["row"](text="x"))
        self.assertEqual("This is a m", render["deeper"]["table"]("m"))

    def test_template_not_found(self) -> None:
        with self.assertRaises(TemplateNotFound):
            self.engine.render("callback/table-not-present.py", lambda r, *_: r["table"]("hi"))
        self.assertIsNone(self.engine.get_collection("callback/table-not-present.py"))

    def test_missing_key_raises(self) -> None:
        with self.assertRaises(KeyNotFound):
            self.engine.render("deeper/table.py", lambda r, *_: r["nope"]())


# --------------------------------------------------------------------------- #
#  2. Resolution, caching and failure semantics                               #
# --------------------------------------------------------------------------- #
class ResolutionTests(unittest.TestCase):
    def test_end_to_end_table(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            Path(td, "table.py").write_text(textwrap.dedent("""\
                TEMPLATES = {
                    "table": "<table>{rows}</table>",
                    "row": "<tr>{text}</tr>",
                }
            """), encoding="utf-8")
            engine = TemplateEngine(td)
            result = engine.render(
                "table.py",
                lambda render, *_: render["table"]({"rows": render["row"]({"text": "hi"})}),
            )
        self.assertEqual("<table><tr>hi</tr></table>", result)

    def test_second_render_is_a_cache_hit(self) -> None:
        finder = _FakeFinder({"t": [("t.py", {"a": "<{x}>"}, False)]})
        engine = TemplateEngine(finder=finder)
        first = engine.render("t", lambda r, *_: r["a"](x="1"))
        second = engine.render("t", lambda r, *_: r["a"](x="1"))
        self.assertEqual(first, second)
        self.assertEqual(["t"], finder.finds)
        self.assertEqual(["t.py"], finder.loads)

    def test_sources_merge_in_discovery_order(self) -> None:
        finder = _FakeFinder({"t": [
            ("a.py", {"x": "A", "n": {"p": "A", "q": "A"}}, False),
            ("b.py", {"x": "B", "n": {"q": "B"}}, False),
        ]})
        engine = TemplateEngine(finder=finder)
        resolved = engine.render("t", lambda r, *_: r.resolve())
        self.assertEqual({"x": "B", "n": {"p": "A", "q": "B"}}, resolved)

    def test_failed_compilation_is_not_cached(self) -> None:
        finder = _FakeFinder({"t": [("a.py", {"x": "A"}, False), ("b.py", {}, True)]})
        engine = TemplateEngine(finder=finder)
        with self.assertRaises(TemplateLoadError):
            engine.render("t", _first)
        self.assertIsNone(engine.get_collection("t"))
        self.assertEqual((), engine.namespaces)

    def test_no_search_directory(self) -> None:
        with self.assertRaises(TemplateNotFound):
            TemplateEngine().render("anything.py", _first)

    def test_invalid_directory(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            TemplateEngine("/definitely/not/a/template/dir")

    def test_callback_receives_engine_and_name(self) -> None:
        engine = TemplateEngine().add_custom("ns", {"a": "A"})
        seen = engine.render("ns", lambda r, e, n: (r, e, n))
        self.assertIs(engine.get_collection("ns"), seen[0])
        self.assertIs(engine, seen[1])
        self.assertEqual("ns", seen[2])

    def test_callback_returning_none_yields_empty_string(self) -> None:
        engine = TemplateEngine().add_custom("ns", {"a": "A"})
        self.assertEqual("", engine.render("ns", lambda *_: None))

    def test_default_namespace(self) -> None:
        engine = TemplateEngine(default="main").add_custom("main", {"a": "A{x}"})
        self.assertEqual("main", engine.default)
        self.assertEqual("A1", engine.render(None, lambda r, *_: r["a"](x=1)))
        with self.assertRaises(TemplateNotFound):
            TemplateEngine().render(None, _first)

    def test_forget_drops_namespace(self) -> None:
        engine = TemplateEngine().add_custom("ns", {"a": "A"})
        self.assertTrue(engine.forget("ns"))
        self.assertFalse(engine.forget("ns"))
        self.assertIsNone(engine.get_collection("ns"))


# --------------------------------------------------------------------------- #
#  3. add_custom / compilation                                                #
# --------------------------------------------------------------------------- #
class AddCustomTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = TemplateEngine(str(TEMPLATE_DIR))

    def test_render_custom_template(self) -> None:
        self.engine.add_custom("custom/template/namespace", {
            "custom_template": "Custom template content: {value}",
        })
        result = self.engine.render(
            "custom/template/namespace",
            lambda r, *_: r["custom_template"]({"{value}": "my content"}),
        )
        self.assertEqual("Custom template content: my content", result)

    def test_repeated_merges_last_write_wins(self) -> None:
        self.engine.add_custom("ns", {"a": "A1", "both": "A", "n": {"x": "A", "y": "A"}})
        self.engine.add_custom("ns", {"b": "B1", "both": "B", "n": {"y": "B"}})
        resolved = self.engine.get_collection("ns").resolve()
        self.assertEqual(
            {"a": "A1", "both": "B", "n": {"x": "A", "y": "B"}, "b": "B1"}, resolved
        )

    def test_merge_is_idempotent(self) -> None:
        data = {"a": "<{x}>", "n": {"b": "[{x}]"}}
        self.engine.add_custom("ns", data)
        once = self.engine.get_collection("ns").resolve({"x": "1"})
        self.engine.add_custom("ns", data)
        twice = self.engine.get_collection("ns").resolve({"x": "1"})
        self.assertEqual(once, twice)
        self.assertEqual(["a", "n"], list(self.engine.get_collection("ns")))

    def test_namespaces_do_not_share_nested_collections(self) -> None:
        self.engine.add_custom("a", {"n": {"x": "A"}})
        self.engine.add_custom("b", self.engine.get_collection("a"))
        self.engine.add_custom("b", {"n": {"y": "B"}})

        a, b = self.engine.get_collection("a"), self.engine.get_collection("b")
        self.assertEqual(["x"], list(a["n"]))
        self.assertEqual(["x", "y"], list(b["n"]))
        self.assertIsNot(a["n"], b["n"])
        self.assertEqual("b", b["n"].namespace)
        self.assertEqual("A", b["n"]["x"]())

    def test_resolve_keeps_leaves_it_cannot_call(self) -> None:
        @contextual
        def caption(ctx, message):
            return f"{ctx.namespace}: {message}"

        self.engine.add_custom("ns", {"row": "<tr>{text}</tr>", "caption": caption})
        resolved = self.engine.get_collection("ns").resolve()
        self.assertEqual("<tr>{text}</tr>", resolved["row"])
        self.assertIsInstance(resolved["caption"], ContextualRenderer)
        self.assertEqual("ns: hi", resolved["caption"]("hi"))

    def test_add_custom_extends_file_namespace(self) -> None:
        self.engine.render("deeper/table.py", _first)
        self.engine.add_custom("deeper/table.py", {"extra": "E{x}"})
        render = self.engine.get_collection("deeper/table.py")
        self.assertEqual(["table", "tr", "td", "extra"], list(render))
        self.assertEqual("E!", render["extra"](x="!"))

    def test_every_leaf_is_compiled(self) -> None:
        fn = lambda *a: "plain"  # noqa: E731
        self.engine.add_custom("ns", {"s": "text", "n": 42, "none": None, "fn": fn, "list": ["p", "q"]})
        render = self.engine.get_collection("ns")
        self.assertIsInstance(render["s"], DeferredRenderer)
        self.assertIs(fn, render["fn"])
        self.assertEqual("42", render["n"]())
        self.assertEqual("", render["none"]())
        self.assertEqual("q", render["list"][1]())

    def test_renderer_context_points_at_namespace(self) -> None:
        self.engine.add_custom("ns", {"n": {"leaf": "x"}})
        leaf = self.engine.get_collection("ns")["n"]["leaf"]
        self.assertEqual("ns", leaf.context.namespace)
        self.assertIs(self.engine.get_collection("ns"), leaf.context.collection)
        self.assertIs(self.engine, leaf.context.engine)

    def test_uglify_collapses_whitespace(self) -> None:
        engine = TemplateEngine(uglify=True).add_custom("ns", {"a": "  <p>\n\t{x}\n  </p>  "})
        self.assertEqual("<p> y </p>", engine.get_collection("ns")["a"](x="y"))


# --------------------------------------------------------------------------- #
#  4. Named substitution                                                      #
# --------------------------------------------------------------------------- #
class SubstitutionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = TemplateEngine().add_custom("ns", {
            "pair": "{a}-{b}",
            "pct": "100% of {a}",
            "missing": "{missing}",
            "table": "<table>{rows}</table>",
            "row": "<tr>{text}</tr>",
        })
        self.r = self.engine.get_collection("ns")

    def test_pair(self) -> None:
        self.assertEqual("x-y", self.r["pair"]({"a": "x", "b": "y"}))

    def test_argument_order_does_not_matter(self) -> None:
        self.assertEqual("x-y", self.r["pair"]({"b": "y", "a": "x"}))

    def test_keyword_arguments(self) -> None:
        self.assertEqual("x-y", self.r["pair"](a="x", b="y"))
        self.assertEqual("x-z", self.r["pair"]({"a": "x", "b": "y"}, b="z"))

    def test_percent_passthrough(self) -> None:
        self.assertEqual("100% of x", self.r["pct"](a="x"))

    def test_unmatched_placeholder_passthrough(self) -> None:
        self.assertEqual("{missing}", self.r["missing"]({}))

    def test_nested_rendered_value(self) -> None:
        out = self.r["table"]({"rows": self.r["row"]({"text": "hi"})})
        self.assertEqual("<table><tr>hi</tr></table>", out)

    def test_deferred_value_is_invoked_without_arguments(self) -> None:
        self.assertEqual("<table><tr>{text}</tr></table>", self.r["table"](rows=self.r["row"]))

    def test_callable_value_receives_context(self) -> None:
        seen = []

        def rows(ctx):
            seen.append(ctx.namespace)
            return ctx.collection["row"](text="ctx")

        self.assertEqual("<table><tr>ctx</tr></table>", self.r["table"](rows=rows))
        self.assertEqual(["ns"], seen)

    def test_compiled_contextual_value_is_invoked_without_arguments(self) -> None:
        @contextual
        def rows(ctx):
            return ctx.collection["row"](text=ctx.namespace)

        self.engine.add_custom("ns", {"rows": rows})
        compiled = self.r["rows"]
        self.assertIsInstance(compiled, ContextualRenderer)
        self.assertIs(rows, compiled.func)
        self.assertEqual("<tr>ns</tr>", compiled())
        self.assertEqual("<table><tr>ns</tr></table>", self.r["table"](rows=compiled))
        self.assertEqual("<table><tr>ns</tr></table>", self.r["table"]({"rows": compiled}))

    def test_structured_values_are_stringified(self) -> None:
        self.assertEqual('{"a":2,"b":1}-[1,2]', self.r["pair"](a={"b": 1, "a": 2}, b=(1, 2)))

    def test_unstringifiable_value_raises(self) -> None:
        with self.assertRaises(StringifyError):
            self.r["pair"](a=object(), b="y")

    def test_vnsprintf_without_context(self) -> None:
        self.assertEqual("a=1", self.engine.vnsprintf("a={a}", {"a": 1}))


# --------------------------------------------------------------------------- #
#  5. Custom parameter callbacks                                              #
# --------------------------------------------------------------------------- #
class CustomParamTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = TemplateEngine()
        self.engine.add_custom_param_callback(
            "attribs", lambda v: "" if v is None else self.engine.attributes(v)
        )
        self.engine.add_custom("ns", {"div": "<div {attribs}>{text}</div>"})
        self.div = self.engine.get_collection("ns")["div"]

    def test_unset_custom_param_is_injected(self) -> None:
        self.assertEqual("<div >x</div>", self.div(text="x"))

    def test_supplied_custom_param_is_transformed(self) -> None:
        self.assertEqual('<div class="x">y</div>', self.div(attribs={"class": "x"}, text="y"))

    def test_braced_name_is_equivalent(self) -> None:
        self.assertEqual('<div class="x">y</div>', self.div({"{attribs}": {"class": "x"}, "{text}": "y"}))

    def test_present_policy_leaves_unset_param_literal(self) -> None:
        self.engine.inject_custom_params = INJECT_PRESENT
        self.assertEqual("<div {attribs}>x</div>", self.div(text="x"))
        self.assertEqual('<div class="x">y</div>', self.div(attribs={"class": "x"}, text="y"))

    def test_invalid_policy(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            TemplateEngine(inject_custom_params="sometimes")

    def test_remove_custom_param_callback(self) -> None:
        self.assertEqual(["{attribs}"], list(self.engine.custom_param_callbacks))
        self.assertTrue(self.engine.remove_custom_param_callback("attribs"))
        self.assertFalse(self.engine.remove_custom_param_callback("attribs"))
        self.assertEqual("<div {attribs}>x</div>", self.div(text="x"))


# --------------------------------------------------------------------------- #
#  6. Ad hoc renderers                                                        #
# --------------------------------------------------------------------------- #
class MakeRenderTests(unittest.TestCase):
    def test_make_render_is_not_registered(self) -> None:
        engine = TemplateEngine()
        hello = engine.make_render("Hello {name}")
        self.assertEqual("Hello Bob", hello(name="Bob"))
        self.assertEqual((), engine.namespaces)

    def test_make_render_uses_cached_namespace(self) -> None:
        engine = TemplateEngine().add_custom("ns", {"row": "<tr>{text}</tr>"})
        leaf = engine.make_render("<t>{rows}</t>", "ns")
        self.assertIs(engine.get_collection("ns"), leaf.context.collection)
        self.assertEqual(
            "<t><tr>z</tr></t>", leaf(rows=lambda ctx: ctx.collection["row"](text="z"))
        )

    def test_make_render_collection(self) -> None:
        engine = TemplateEngine()
        coll = engine.make_render_collection({"a": "{x}!", "n": {"b": "B"}})
        self.assertEqual("1!", coll["a"](x=1))
        self.assertEqual("B", coll["n"]["b"]())
        self.assertIs(coll, coll["a"].context.collection)
        self.assertEqual((), engine.namespaces)


# --------------------------------------------------------------------------- #
#  7. Attributes and helpers                                                  #
# --------------------------------------------------------------------------- #
class AttributeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = TemplateEngine()

    def test_empty(self) -> None:
        self.assertEqual("", self.engine.attributes({}))

    def test_id_is_normalized(self) -> None:
        self.assertEqual(
            'id="user-address-city" class="btn"',
            self.engine.attributes({"id": "user[address][city]", "class": "btn"}),
        )

    def test_sensitive_names_are_escaped(self) -> None:
        self.assertEqual(
            'title="a &quot;quoted&quot; &lt;b&gt;"', self.engine.attributes({"title": 'a "quoted" <b>'})
        )
        self.assertEqual('class="<x>"', self.engine.attributes({"class": "<x>"}))

    def test_configurable_sensitive_names(self) -> None:
        engine = TemplateEngine(sensitive_attributes={"data-x"})
        self.assertEqual('data-x="&lt;" title="<"', engine.attributes({"data-x": "<", "title": "<"}))

    def test_clean_drops_empty_values(self) -> None:
        self.assertEqual('c="v"', self.engine.attributes({"a": None, "b": "", "c": "v"}))
        self.assertEqual('b=""', self.engine.attributes({"b": ""}, clean=False))

    def test_deferred_values_are_resolved(self) -> None:
        self.assertEqual('title="T {x}"', self.engine.attributes({"title": self.engine.make_render("T {x}")}))

    def test_custom_composer_and_render(self) -> None:
        self.engine.set_attribute_composer(lambda n, v: f"{n}='{v}'")
        self.assertEqual("class='x'|id='a-b'", self.engine.attributes({"class": "x", "id": "a[b]"}, separator="|"))
        self.assertIs(self.engine, self.engine.set_attribute_render(lambda n, v: n))
        self.assertEqual("class", self.engine.attributes({"class": "x"}))

    def test_normalize_id(self) -> None:
        self.assertEqual("user-address-city", TemplateEngine.normalize_id("user[address][city]"))
        self.assertEqual("a", self.engine.normalize_id("[a]"))

    def test_trans_defaults_to_identity(self) -> None:
        self.assertEqual("hello", self.engine.trans("hello", {"x": 1}, "messages", "it"))
        self.assertEqual("", self.engine.trans(None))

    def test_custom_translator(self) -> None:
        class Upper:
            def trans(self, id, parameters=None, domain=None, locale=None):
                return str(id).upper()

        self.engine.translator = Upper()
        self.assertEqual("HELLO", self.engine.trans("hello"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
