"""Tests for HtmlCompiler block-level output."""

from __future__ import annotations

import pytest

from marcado import (
    Blockquote,
    Code,
    CompileConfig,
    Definition,
    Emphasis,
    Heading,
    Html,
    HtmlCompiler,
    InvalidNodeError,
    List,
    ListItem,
    Paragraph,
    Root,
    Rule,
    Table,
    TableCell,
    TableRow,
    Text,
    Yaml,
    to_html,
)


def _doc(*blocks) -> Root:  # type: ignore[no-untyped-def]
    return Root(children=blocks)


def _para(*inlines) -> Paragraph:  # type: ignore[no-untyped-def]
    return Paragraph(children=inlines)


def _text(value: str) -> Text:
    return Text(value=value)


def _item(*blocks) -> ListItem:  # type: ignore[no-untyped-def]
    return ListItem(children=blocks)


def _row(*values: str) -> TableRow:
    return TableRow(children=tuple(TableCell(children=(_text(v),)) for v in values))


class TestRoot:
    """Root joins blocks and terminates output with one newline."""

    def test_empty_root_compiles_to_empty_string(self) -> None:
        assert to_html(_doc()) == ""

    def test_blocks_joined_by_newline(self) -> None:
        html = to_html(_doc(_para(_text("a")), _para(_text("b"))))
        assert html == "<p>a</p>\n<p>b</p>\n"

    def test_non_rendering_blocks_leave_no_blank_lines(self) -> None:
        tree = _doc(
            Yaml(value="title: x"),
            _para(_text("a")),
            Definition(identifier="x", link="/x"),
            _para(_text("b")),
        )
        assert to_html(tree) == "<p>a</p>\n<p>b</p>\n"

    def test_only_definitions_is_empty(self) -> None:
        assert to_html(_doc(Definition(identifier="x", link="/x"))) == ""

    def test_trailing_newline_in_raw_html_is_not_doubled(self) -> None:
        assert to_html(_doc(Html(value="<div>\n"))) == "<div>\n"

    def test_block_node_compiles_as_sole_child_of_root(self) -> None:
        assert to_html(_para(_text("x"))) == "<p>x</p>\n"


class TestParagraph:
    """Paragraph whitespace handling."""

    def test_render_paragraph(self) -> None:
        assert to_html(_doc(_para(_text("Hello World")))) == "<p>Hello World</p>\n"

    def test_outer_whitespace_trimmed_and_tabs_expanded(self) -> None:
        assert to_html(_doc(_para(_text("  a\tb  ")))) == "<p>a b</p>\n"

    def test_line_endings_preserved(self) -> None:
        html = to_html(_doc(_para(_text("one  \n  two"))))
        assert html == "<p>one\ntwo</p>\n"

    def test_empty_paragraph(self) -> None:
        assert to_html(_doc(_para())) == "<p></p>\n"


class TestHeading:
    """Heading tags follow depth."""

    @pytest.mark.parametrize("depth", [1, 2, 3, 4, 5, 6])
    def test_depth_selects_tag(self, depth: int) -> None:
        html = to_html(_doc(Heading(depth=depth, children=(_text("foo"),))))
        assert html == f"<h{depth}>foo</h{depth}>\n"

    def test_depth_out_of_range_rejected(self) -> None:
        with pytest.raises(InvalidNodeError):
            Heading(depth=7, children=(_text("foo"),))


class TestBlockquote:
    """Blockquote uses block layout."""

    def test_render_blockquote(self) -> None:
        html = to_html(_doc(Blockquote(children=(_para(_text("foo")),))))
        assert html == "<blockquote>\n<p>foo</p>\n</blockquote>\n"

    def test_multiple_children(self) -> None:
        html = to_html(_doc(Blockquote(children=(_para(_text("a")), Rule()))))
        assert html == "<blockquote>\n<p>a</p>\n<hr>\n</blockquote>\n"

    def test_empty_blockquote(self) -> None:
        assert to_html(_doc(Blockquote())) == "<blockquote>\n</blockquote>\n"


class TestList:
    """List tags, start attribute, and tight/loose items."""

    def test_tight_item_unwraps_paragraph(self) -> None:
        tree = _doc(List(loose=False, children=(_item(_para(_text("foo"))),)))
        assert to_html(tree) == "<ul>\n<li>foo</li>\n</ul>\n"

    def test_loose_item_keeps_paragraph(self) -> None:
        tree = _doc(List(loose=True, children=(_item(_para(_text("foo"))),)))
        assert to_html(tree) == "<ul>\n<li>\n<p>foo</p>\n</li>\n</ul>\n"

    def test_tight_item_with_several_blocks(self) -> None:
        tree = _doc(List(children=(_item(_para(_text("a")), _para(_text("b"))),)))
        assert to_html(tree) == "<ul>\n<li>\n<p>a</p>\n<p>b</p>\n</li>\n</ul>\n"

    def test_tight_item_with_empty_paragraph_not_unwrapped(self) -> None:
        tree = _doc(List(children=(_item(_para()),)))
        assert to_html(tree) == "<ul>\n<li>\n<p></p>\n</li>\n</ul>\n"

    def test_tight_item_unwraps_sole_block_container(self) -> None:
        """The container's own children render directly inside the item."""
        quote = Blockquote(children=(_para(_text("q")),))
        tree = _doc(List(children=(_item(quote),)))
        assert to_html(tree) == "<ul>\n<li><p>q</p></li>\n</ul>\n"

    def test_tight_item_with_sole_table(self) -> None:
        table = Table(align=("left",), children=(_row("a"), _row("1")))
        tree = _doc(List(children=(_item(table),)))
        assert to_html(tree) == (
            "<ul>\n<li><tr>\n<td>a</td>\n</tr><tr>\n<td>1</td>\n</tr></li>\n</ul>\n"
        )

    def test_nested_list(self) -> None:
        inner = List(children=(_item(_para(_text("b"))),))
        tree = _doc(List(children=(_item(_para(_text("a")), inner),)))
        assert to_html(tree) == (
            "<ul>\n<li>\n<p>a</p>\n<ul>\n<li>b</li>\n</ul>\n</li>\n</ul>\n"
        )

    def test_ordered_list(self) -> None:
        tree = _doc(List(ordered=True, start=1, children=(_item(_para(_text("a"))),)))
        assert to_html(tree) == "<ol>\n<li>a</li>\n</ol>\n"

    def test_ordered_start_attribute(self) -> None:
        tree = _doc(List(ordered=True, start=3, children=(_item(_para(_text("a"))),)))
        assert to_html(tree) == '<ol start="3">\n<li>a</li>\n</ol>\n'

    def test_ordered_start_zero_is_emitted(self) -> None:
        tree = _doc(List(ordered=True, start=0, children=(_item(_para(_text("a"))),)))
        assert to_html(tree).startswith('<ol start="0">')

    def test_unordered_list_ignores_start(self) -> None:
        tree = _doc(List(ordered=False, start=3, children=(_item(_para(_text("a"))),)))
        assert to_html(tree).startswith("<ul>\n")

    def test_list_rejects_non_item_children(self) -> None:
        with pytest.raises(InvalidNodeError, match="listItem"):
            List(children=(_para(_text("a")),))  # type: ignore[arg-type]


class TestCode:
    """Code blocks."""

    def test_language_class_from_first_word(self) -> None:
        html = to_html(_doc(Code(lang="js highlight-lines", value="x")))
        assert html == '<pre><code class="language-js">x\n</code></pre>\n'

    def test_no_language(self) -> None:
        assert to_html(_doc(Code(value="x"))) == "<pre><code>x\n</code></pre>\n"

    def test_empty_value(self) -> None:
        assert to_html(_doc(Code(lang="py", value=""))) == (
            '<pre><code class="language-py"></code></pre>\n'
        )

    def test_exactly_one_trailing_newline(self) -> None:
        assert to_html(_doc(Code(value="x\n\n\n"))) == "<pre><code>x\n</code></pre>\n"

    def test_tabs_expanded(self) -> None:
        assert to_html(_doc(Code(value="a\tb"))) == "<pre><code>a   b\n</code></pre>\n"

    def test_content_escaped(self) -> None:
        html = to_html(_doc(Code(value="<x> & y")))
        assert html == "<pre><code>&lt;x&gt; &amp; y\n</code></pre>\n"

    def test_leading_space_in_lang_gives_no_class(self) -> None:
        assert 'class="' not in to_html(_doc(Code(lang=" js", value="x")))


class TestTable:
    """Table sections and column alignment."""

    def test_alignment_and_sections(self) -> None:
        table = Table(align=("left", "right"), children=(_row("a", "b"), _row("1", "2")))
        assert to_html(_doc(table)) == (
            "<table>\n"
            "<thead>\n"
            "<tr>\n"
            '<th align="left">a</th>\n'
            '<th align="right">b</th>\n'
            "</tr>\n"
            "</thead>\n"
            "<tbody>\n"
            "<tr>\n"
            '<td align="left">1</td>\n'
            '<td align="right">2</td>\n'
            "</tr>\n"
            "</tbody>\n"
            "</table>\n"
        )

    def test_short_row_padded_with_aligned_empty_cells(self) -> None:
        table = Table(align=("left", "center"), children=(_row("a", "b"), _row("1")))
        html = to_html(_doc(table))
        assert '<td align="left">1</td>\n<td align="center"></td>' in html

    def test_missing_alignment_omits_attribute(self) -> None:
        table = Table(align=(None, "center"), children=(_row("a", "b"),))
        html = to_html(_doc(table))
        assert "<th>a</th>" in html
        assert '<th align="center">b</th>' in html

    def test_header_only_has_empty_body(self) -> None:
        table = Table(align=("left",), children=(_row("a"),))
        assert "</thead>\n<tbody>\n</tbody>\n</table>" in to_html(_doc(table))

    def test_row_order_preserved(self) -> None:
        table = Table(align=(None,), children=(_row("h"), _row("1"), _row("2"), _row("3")))
        html = to_html(_doc(table))
        assert html.index(">1<") < html.index(">2<") < html.index(">3<")

    def test_cells_beyond_alignment_dropped(self) -> None:
        table = Table(align=("left",), children=(_row("a", "x"), _row("1", "2")))
        html = to_html(_doc(table))
        assert '<tr>\n<th align="left">a</th>\n</tr>' in html
        assert '<tr>\n<td align="left">1</td>\n</tr>' in html
        assert ">x<" not in html
        assert ">2<" not in html

    def test_cell_children_joined_by_newline(self) -> None:
        cell = TableCell(children=(_text("a"), Emphasis(children=(_text("b"),))))
        table = Table(align=("left",), children=(TableRow(children=(cell,)),))
        assert '<th align="left">a\n<em>b</em></th>' in to_html(_doc(table))

    def test_table_rejects_non_row_children(self) -> None:
        with pytest.raises(InvalidNodeError):
            Table(children=(_item(),))  # type: ignore[arg-type]


class TestHtmlAndRule:
    """Raw HTML passthrough and thematic breaks."""

    def test_html_passthrough(self) -> None:
        assert to_html(_doc(Html(value="<i>italic</i>"))) == "<i>italic</i>\n"

    def test_html_sanitized(self) -> None:
        html = HtmlCompiler(CompileConfig(sanitize=True)).compile(
            _doc(Html(value="<script>x</script>"))
        )
        assert html == "&lt;script&gt;x&lt;/script&gt;\n"

    def test_rule(self) -> None:
        assert to_html(_doc(Rule())) == "<hr>\n"

    def test_rule_xhtml(self) -> None:
        assert to_html(_doc(Rule()), xhtml=True) == "<hr />\n"

    def test_node_attributes_merged(self) -> None:
        assert to_html(_doc(Rule(attributes={"class": "sep"}))) == '<hr class="sep">\n'
