"""Unit tests for the markup extractors."""

from __future__ import annotations

from doxycontext.extractors.classes import (
    anchor_classes,
    definition_list_classes,
    extract_classes,
    find_class,
    merge_unique,
)
from doxycontext.extractors.functions import extract_function, function_links
from doxycontext.extractors.listings import extract_files, extract_modules
from doxycontext.extractors.markup import join_url, parse_html
from doxycontext.extractors.members import extract_class_details, extract_inheritance
from doxycontext.extractors.navigation import extract_related_pages
from doxycontext.extractors.pages import classify_page, page_title, readable_text
from doxycontext.models.docs import ClassInfo
from tests.doxygen_site import (
    ANNOTATED_HTML,
    CLASSES_HTML,
    FILES_HTML,
    FUNCTION_SCALE_HTML,
    INDEX_HTML,
    SITE,
    WIDGET_HTML,
)

# ---------------------------------------------------------------------------
# markup helpers
# ---------------------------------------------------------------------------


class TestJoinUrl:
    def test_relative_href_appended(self) -> None:
        assert join_url(SITE, "classFoo.html") == f"{SITE}/classFoo.html"

    def test_absolute_href_unchanged(self) -> None:
        assert join_url(SITE, "https://other.org/x.html") == "https://other.org/x.html"

    def test_naive_concatenation(self) -> None:
        # No normalisation: a trailing slash on the site doubles up
        assert join_url(f"{SITE}/", "a.html") == f"{SITE}//a.html"


# ---------------------------------------------------------------------------
# navigation
# ---------------------------------------------------------------------------


class TestRelatedPages:
    def test_related_by_text_or_href(self) -> None:
        related = extract_related_pages(parse_html(INDEX_HTML), SITE)
        assert related == [f"{SITE}/pages.html", f"{SITE}/topics.html"]

    def test_skips_fragments_and_absolute_links(self) -> None:
        html = """
        <div class="tabs">
          <a href="#pages">Related</a>
          <a href="https://example.org/pages.html">Related</a>
        </div>
        """
        assert extract_related_pages(parse_html(html), SITE) == []

    def test_ignores_links_outside_navigation(self) -> None:
        html = '<div class="contents"><a href="pages.html">Related Pages</a></div>'
        assert extract_related_pages(parse_html(html), SITE) == []


# ---------------------------------------------------------------------------
# listings
# ---------------------------------------------------------------------------


class TestFileListing:
    def test_html_rows_only(self) -> None:
        files = extract_files(parse_html(FILES_HTML), SITE)
        assert [f.name for f in files] == ["widget.h", "button.h"]

    def test_fields(self) -> None:
        first = extract_files(parse_html(FILES_HTML), SITE)[0]
        assert first.url == f"{SITE}/widget_8h.html"
        assert first.description == "Widget declarations"
        assert first.path == "widget.h"
        assert first.classes == []
        assert first.functions == []


class TestModuleListing:
    def test_rows_with_links(self) -> None:
        html = """
        <table>
          <tr><td><a class="el" href="group__core.html">Core</a></td>
              <td class="desc">Core types</td></tr>
          <tr><td><a class="el" href="group__io">IO</a></td><td>Input/output</td></tr>
          <tr><td>No link here</td><td>ignored</td></tr>
          <tr><td><a href="group__empty.html"> </a></td><td>nameless</td></tr>
        </table>
        """
        modules = extract_modules(parse_html(html), SITE)
        assert [(m.name, m.url, m.description) for m in modules] == [
            ("Core", f"{SITE}/group__core.html", "Core types"),
            ("IO", f"{SITE}/group__io", "Input/output"),
        ]

    def test_empty_page(self) -> None:
        assert extract_modules(parse_html("<html></html>"), SITE) == []


# ---------------------------------------------------------------------------
# classes
# ---------------------------------------------------------------------------


class TestClassListing:
    def test_anchor_strategy_reads_row_description(self) -> None:
        found = list(anchor_classes(parse_html(ANNOTATED_HTML), SITE, "annotated.html"))
        assert found[0] == ClassInfo(
            name="Widget",
            url=f"{SITE}/classWidget.html",
            description="Base widget type",
            section="annotated.html",
        )

    def test_anchor_strategy_prefers_brief(self) -> None:
        html = '<div><a href="classFoo.html">Foo</a><span class="brief"> A foo </span></div>'
        found = list(anchor_classes(parse_html(html), SITE, "classes.html"))
        assert found[0].description == "A foo"

    def test_anchor_strategy_matches_interface(self) -> None:
        html = '<a href="interfaceIDrawable.html">IDrawable</a><a href="group__x.html">X</a>'
        found = list(anchor_classes(parse_html(html), SITE, "classes.html"))
        assert [c.name for c in found] == ["IDrawable"]

    def test_definition_list_strategy(self) -> None:
        found = list(definition_list_classes(parse_html(CLASSES_HTML), SITE, "classes.html"))
        assert found == [
            ClassInfo(
                name="Canvas",
                url=f"{SITE}/classCanvas.html",
                description="Drawing surface",
                section="classes.html",
            )
        ]

    def test_definition_list_requires_class_or_struct_href(self) -> None:
        html = '<dl><dt><a href="interfaceX.html">X</a></dt><dd>d</dd></dl>'
        assert list(definition_list_classes(parse_html(html), SITE, "classes.html")) == []

    def test_duplicate_anchors_yield_one_class(self) -> None:
        html = '<a href="classFoo.html">Foo</a><a href="classFoo.html">Foo</a>'
        known: dict[str, ClassInfo] = {}
        merge_unique(known, extract_classes(parse_html(html), SITE, "annotated.html"))
        assert list(known) == ["Foo"]

    def test_first_found_wins(self) -> None:
        known: dict[str, ClassInfo] = {}
        merge_unique(known, extract_classes(parse_html(ANNOTATED_HTML), SITE, "annotated.html"))
        merge_unique(known, extract_classes(parse_html(CLASSES_HTML), SITE, "classes.html"))
        assert list(known) == ["Widget", "Button", "Point", "Slider", "Canvas"]
        assert known["Widget"].description == "Base widget type"
        assert known["Widget"].section == "annotated.html"
        # The anchor strategy saw Canvas before the definition-list strategy
        assert known["Canvas"].description == ""


class TestFindClass:
    CLASSES = [
        ClassInfo(name="WidgetFactory", url="u1"),
        ClassInfo(name="widget", url="u2"),
        ClassInfo(name="Widget", url="u3"),
    ]

    def test_exact_match_preferred(self) -> None:
        assert find_class(self.CLASSES, "Widget").url == "u3"

    def test_case_insensitive_before_substring(self) -> None:
        assert find_class(self.CLASSES, "WIDGET").url == "u2"

    def test_substring_match(self) -> None:
        assert find_class(self.CLASSES, "Factory").url == "u1"

    def test_no_match(self) -> None:
        assert find_class(self.CLASSES, "Qx7ZpL0vTn3RbY8wKd2M") is None


# ---------------------------------------------------------------------------
# class details
# ---------------------------------------------------------------------------


class TestClassDetails:
    INFO = ClassInfo(name="Widget", url=f"{SITE}/classWidget.html", section="annotated.html")

    def _details(self):
        return extract_class_details(parse_html(WIDGET_HTML), self.INFO)

    def test_keeps_class_info(self) -> None:
        details = self._details()
        assert details.name == "Widget"
        assert details.url == f"{SITE}/classWidget.html"
        assert details.section == "annotated.html"

    def test_methods_from_both_scans_in_order(self) -> None:
        names = [m.name for m in self._details().methods]
        # Detail blocks first, then member list; computeSum appears in both
        assert names == ["computeSum", "reset", "resize", "computeSum"]

    def test_method_fields(self) -> None:
        method = self._details().methods[0]
        assert method.description == "Adds two integers."
        assert method.parameters == "int a, int b"
        assert method.return_type == "int"
        assert method.visibility == "public"

    def test_private_method(self) -> None:
        reset = self._details().methods[1]
        assert reset.visibility == "private"
        assert reset.return_type == "private void"

    def test_member_list_description_from_next_cell(self) -> None:
        resize = self._details().methods[2]
        assert resize.description == "Resize the widget."
        assert resize.parameters == "int width, int height"

    def test_properties_skip_typedefs(self) -> None:
        properties = self._details().properties
        assert [(p.name, p.type, p.visibility) for p in properties] == [
            ("MAX_SIZE", "static const int", "public"),
            ("zOrder", "protected int", "protected"),
        ]
        assert properties[0].description == "Maximum size."

    def test_block_without_memdoc_skipped(self) -> None:
        assert "undocumented" not in [m.name for m in self._details().methods]

    def test_inheritance(self) -> None:
        inheritance = self._details().inheritance
        assert inheritance.base_classes == ["Object", "Serializable"]
        assert inheritance.derived_classes == ["Button", "Slider"]

    def test_detail_blocks_capped(self) -> None:
        blocks = "".join(
            f'<div class="memitem"><div class="memproto">void m{i}()</div>'
            f'<div class="memdoc">d</div></div>'
            for i in range(20)
        )
        details = extract_class_details(parse_html(blocks), self.INFO)
        assert len(details.methods) == 15

    def test_member_cells_capped(self) -> None:
        rows = "".join(
            f'<tr><td class="memItemLeft">void f{i}()</td>'
            f'<td class="memItemRight">int v{i}</td></tr>'
            for i in range(10)
        )
        html = f'<table class="memberdecls">{rows}</table>'
        details = extract_class_details(parse_html(html), self.INFO)
        assert len(details.methods) + len(details.properties) == 10

    def test_no_inheritance(self) -> None:
        inheritance = extract_inheritance(parse_html("<div class='contents'></div>"))
        assert inheritance.base_classes == []
        assert inheritance.derived_classes == []


# ---------------------------------------------------------------------------
# functions
# ---------------------------------------------------------------------------


class TestFunctions:
    def test_links_from_main_page(self) -> None:
        links = function_links(parse_html(INDEX_HTML), SITE)
        assert links == [f"{SITE}/function_scale.html", f"{SITE}/function_missing.html"]

    def test_links_capped_at_three(self) -> None:
        html = "".join(f'<a href="function_{i}.html">f{i}</a>' for i in range(5))
        assert len(function_links(parse_html(html), SITE)) == 3

    def test_first_block_only(self) -> None:
        url = f"{SITE}/function_scale.html"
        function = extract_function(parse_html(FUNCTION_SCALE_HTML), url)
        assert function is not None
        assert function.name == "scale"
        assert function.url == url
        assert function.return_type == "double"
        assert function.signature == "double scale(double value, double factor)"
        assert function.description == "Scales a value by a factor."
        assert [(p.name, p.type) for p in function.parameters] == [
            ("value", "double"),
            ("factor", "double"),
        ]

    def test_non_callable_block(self) -> None:
        html = '<div class="memitem"><div class="memproto">int counter</div></div>'
        assert extract_function(parse_html(html), "u") is None

    def test_no_blocks(self) -> None:
        assert extract_function(parse_html("<p>nothing</p>"), "u") is None


# ---------------------------------------------------------------------------
# pages
# ---------------------------------------------------------------------------


class TestPages:
    def test_title_from_title_tag(self) -> None:
        assert page_title(parse_html(INDEX_HTML)) == "Main Page"

    def test_title_falls_back_to_h1(self) -> None:
        assert page_title(parse_html("<body><h1> Overview </h1></body>")) == "Overview"

    def test_untitled(self) -> None:
        assert page_title(parse_html("<p>x</p>")) == "Untitled"

    def test_readable_text_uses_content_area(self) -> None:
        text = readable_text(parse_html(INDEX_HTML))
        assert text.startswith("Widgets is a toolkit")
        assert "Generated by Doxygen" not in text
        assert "searchBox" not in text
        assert "Related" not in text

    def test_readable_text_falls_back_to_body(self) -> None:
        html = "<body><div>Plain\n\n   text</div><script>x()</script></body>"
        assert readable_text(parse_html(html)) == "Plain text"

    def test_classify(self) -> None:
        assert classify_page(f"{SITE}/classFoo.html", parse_html("")) == "class"
        assert classify_page(f"{SITE}/namespacefoo.html", parse_html("")) == "namespace"
        assert classify_page(f"{SITE}/group__core.html", parse_html(
            '<div class="title">Core Module</div>'
        )) == "module"
        assert classify_page(f"{SITE}/widget_8h", parse_html("")) == "page"
        assert classify_page(f"{SITE}/x.html", parse_html("<code>int x;</code>")) == "file"
        assert classify_page(f"{SITE}/x.html", parse_html("<h2>Functions</h2>")) == "function"
        assert classify_page(f"{SITE}/index.html", parse_html("<p>hi</p>")) == "page"
