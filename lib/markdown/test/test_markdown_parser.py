"""
End-to-end tests for the Markdown to HTML converter.

Covers the public API, the rendering conventions (no separators between
blocks or inline fragments, `[x]`/`[ ]` task markers) and the guarantee
that malformed markup is preserved as literal text.
"""

import re
import unittest

from lib.markdown import (
    HTMLRenderer,
    MarkdownParser,
    MDDocument,
    markdown_to_html,
    normalize_markdown,
    parse_markdown,
    render_document,
)

TAG_PATTERN = re.compile(r"<[^>]+>")


def stripTags(html):
    return TAG_PATTERN.sub("", html)


class TestScenarios(unittest.TestCase):
    """Reference conversions."""

    def test_heading(self):
        self.assertEqual(render_document("## Hi there"), "<h2>Hi there</h2>")

    def test_nested_emphasis(self):
        self.assertEqual(render_document("**_word_**"), "<p><strong><i>word</i></strong></p>")

    def test_link(self):
        self.assertEqual(
            render_document("[Google](https://example.test)"),
            '<p><a href="https://example.test">Google</a></p>',
        )

    def test_malformed_link(self):
        self.assertEqual(
            render_document("[title]https://example.test"),
            "<p>[title]https://example.test</p>",
        )

    def test_mixed_document(self):
        self.assertEqual(
            render_document("Hello, World!\n## Hi there\n#Hi"),
            "<p>Hello, World!</p><h2>Hi there</h2><p>#Hi</p>",
        )

    def test_emphasis_document(self):
        self.assertEqual(
            render_document("*Hi* **there**\n# *Hi there**"),
            "<p><i>Hi</i> <strong>there</strong></p><h1><i>Hi there</i>*</h1>",
        )

    def test_headings_with_emphasis(self):
        self.assertEqual(
            render_document("# heading\n### heading3\nplain\n# **heading**\n***paragraph***"),
            "<h1>heading</h1><h3>heading3</h3><p>plain</p>"
            "<h1><strong>heading</strong></h1><p><strong><i>paragraph</i></strong></p>",
        )


class TestLists(unittest.TestCase):
    """List grouping as rendered HTML."""

    def test_ordered_list(self):
        self.assertEqual(render_document("1. first\n2. second"), "<ol><li>first</li><li>second</li></ol>")

    def test_ordered_list_followed_by_heading(self):
        self.assertEqual(
            render_document("1. first\n2. second\n# heading"),
            "<ol><li>first</li><li>second</li></ol><h1>heading</h1>",
        )

    def test_ordered_list_gap(self):
        """Test the out-of-sequence line is rendered separately, not absorbed or dropped."""
        html = render_document("1. a\n2. b\n4. c")

        self.assertTrue(html.startswith("<ol><li>a</li><li>b</li></ol>"))
        self.assertEqual(html, '<ol><li>a</li><li>b</li></ol><ol start="4"><li>c</li></ol>')

    def test_unordered_list(self):
        self.assertEqual(render_document("- a\n- *b*"), "<ul><li>a</li><li><i>b</i></li></ul>")

    def test_task_list(self):
        self.assertEqual(
            render_document("- [x] done\n- [ ] todo"),
            "<ul><li>[x] done</li><li>[ ] todo</li></ul>",
        )

    def test_golden_document(self):
        markdown = (
            "# Title\n"
            "Some *text* here\n"
            "1. one\n"
            "2. two\n"
            "- [x] done\n"
            "- [ ] todo\n"
            "- bullet\n"
            "\n"
            "[link](http://x.y)\n"
        )
        expected = (
            "<h1>Title</h1>"
            "<p>Some <i>text</i> here</p>"
            "<ol><li>one</li><li>two</li></ol>"
            "<ul><li>[x] done</li><li>[ ] todo</li></ul>"
            "<ul><li>bullet</li></ul>"
            "<p></p>"
            '<p><a href="http://x.y">link</a></p>'
        )
        self.assertEqual(render_document(markdown), expected)


class TestLiteralPreservation(unittest.TestCase):
    """Malformed markup must come out as its original characters."""

    def test_mismatched_emphasis_conserves_markers(self):
        html = render_document("**word*")

        self.assertEqual(html, "<p>*<i>word</i></p>")
        self.assertEqual(stripTags(html).count("*"), 1)

    def test_malformed_constructs_are_kept(self):
        cases = [
            "*",
            "**",
            "****",
            "__",
            "*text",
            "text*",
            "**text",
            "_a *b",
            "[",
            "]",
            "[text",
            "[text]",
            "[text](",
            "[text](url",
            "(url)",
            "#Hi",
            "####### seven",
            "1.no space",
            "1 no dot",
            "-no space",
            "a - b 1. c # d",
        ]
        for markdown in cases:
            with self.subTest(markdown=markdown):
                html = render_document(markdown)
                self.assertEqual(html, f"<p>{markdown}</p>")

    def test_marker_count_is_conserved(self):
        cases = {
            "**a* b": 2,
            "*a** b": 2,
            "***a* *b***": 4,
            "_a __b_": 4,
        }
        for markdown, consumed in cases.items():
            with self.subTest(markdown=markdown):
                html = render_document(markdown)
                literal = stripTags(html)
                original = sum(markdown.count(c) for c in "*_")
                self.assertEqual(sum(literal.count(c) for c in "*_") + consumed, original)

    def test_text_is_not_escaped(self):
        self.assertEqual(render_document("a <b> & c"), "<p>a <b> & c</p>")


class TestMarkdownParser(unittest.TestCase):
    """Test the parser API."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = MarkdownParser()

    def test_parse_returns_document(self):
        document = self.parser.parse("# a\nb")

        self.assertIsInstance(document, MDDocument)
        self.assertEqual(len(document.children), 2)

    def test_rejects_non_string(self):
        with self.assertRaises(ValueError):
            self.parser.parse(None)  # type: ignore

    def test_deterministic(self):
        markdown = "# a\n1. **b**\n2. _c_\n- [x] d\n[e](f)"

        self.assertEqual(self.parser.parse_to_html(markdown), self.parser.parse_to_html(markdown))
        self.assertEqual(render_document(markdown), markdown_to_html(markdown))

    def test_stats(self):
        self.parser.parse("1. a\n2. b\nc")
        stats = self.parser.get_stats()

        self.assertEqual(stats["tokens_processed"], 11)
        self.assertEqual(stats["lines_parsed"], 3)
        self.assertEqual(stats["blocks_parsed"], 2)
        self.assertEqual(stats["lists_parsed"], 1)

    def test_get_ast_json(self):
        ast = self.parser.get_ast_json("## *x*")

        self.assertEqual(
            ast,
            {
                "type": "document",
                "children": [
                    {
                        "type": "header",
                        "level": 2,
                        "body": {
                            "type": "emphasis",
                            "emphasis_type": "italic",
                            "child": {"type": "text", "content": "x"},
                        },
                    }
                ],
            },
        )

    def test_block_separator_option(self):
        html = markdown_to_html("# a\n\nb", html_options={"block_separator": "\n"})

        self.assertEqual(html, "<h1>a</h1>\n<p></p>\n<p>b</p>")

    def test_set_option(self):
        self.parser.set_option("html_block_separator", "\n")
        self.parser.set_option("html_checkbox_checked", "&#9745;")

        self.assertEqual(self.parser.get_option("html_options"), {"block_separator": "\n", "checkbox_checked": "&#9745;"})
        self.assertEqual(self.parser.parse_to_html("a\n- [x] b"), "<p>a</p>\n<ul><li>&#9745; b</li></ul>")

    def test_max_heading_level_option(self):
        self.assertEqual(render_document("### a", max_heading_level=2), "<p>### a</p>")

    def test_parse_markdown(self):
        document = parse_markdown("- a")

        self.assertEqual(len(document.statements()), 1)


class TestRenderers(unittest.TestCase):
    """Test renderer details."""

    def test_html_renderer_requires_document(self):
        with self.assertRaises(ValueError):
            HTMLRenderer().render(None)  # type: ignore

    def test_blank_lines_render_empty_paragraphs(self):
        self.assertEqual(render_document("a\n\nb"), "<p>a</p><p></p><p>b</p>")
        self.assertEqual(
            render_document("\n\na\n\n\nb\n"),
            "<p></p><p></p><p>a</p><p></p><p></p><p>b</p>",
        )

    def test_blank_and_whitespace_lines_are_both_paragraphs(self):
        self.assertEqual(render_document("\n   "), "<p></p><p>   </p>")

    def test_empty_input(self):
        self.assertEqual(render_document(""), "")
        self.assertEqual(render_document("\n"), "<p></p>")

    def test_empty_list_item(self):
        self.assertEqual(render_document("- "), "<ul><li></li></ul>")

    def test_normalize_markdown(self):
        self.assertEqual(
            normalize_markdown("__a__ and _b_\n3. x\n4. y\n- [x] t\n#  h"),
            "**a** and *b*\n3. x\n4. y\n- [x] t\n#  h",
        )

    def test_normalize_keeps_literal_markers(self):
        self.assertEqual(normalize_markdown("**word*"), "**word*")

    def test_normalize_underscore_style(self):
        self.assertEqual(
            normalize_markdown("***a***", markdown_options={"emphasis_style": "underscore"}),
            "___a___",
        )


if __name__ == "__main__":
    unittest.main()
