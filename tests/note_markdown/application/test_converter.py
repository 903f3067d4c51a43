"""Tests for the conversion engine."""
import pytest

from note_markdown import InvalidInputError, MarkdownConverter, convert


class TestMarkdownConverter:
    """Test MarkdownConverter."""

    @pytest.fixture
    def converter(self):
        """Create converter."""
        return MarkdownConverter()

    def test_plain_text_is_one_paragraph(self, converter):
        """Test text without block markup is wrapped once and escaped."""
        assert converter.convert("a < b > c & d") == "<p>a &lt; b &gt; c &amp; d</p>"

    def test_ampersand_not_double_escaped(self, converter):
        """Test entities produced for < and > are not re-escaped."""
        assert converter.convert("A & B") == "<p>A &amp; B</p>"

    def test_empty_input(self, converter):
        """Test empty and blank input give an empty result."""
        assert converter.convert("") == ""
        assert converter.convert("  \n\n \r\n") == ""

    @pytest.mark.parametrize("value", [None, 42, b"bytes", ["list"]])
    def test_non_text_input_is_rejected(self, converter, value):
        """Test non-string input fails before the pipeline runs."""
        with pytest.raises(InvalidInputError):
            converter.convert(value)
        assert converter.count == 0

    @pytest.mark.parametrize(
        "source, expected",
        [
            ("# Title\n\n", "<h1>Title</h1>"),
            ("Title\n=====\n\n", "<h1>Title</h1>"),
            ("Title\n-----\n\n", "<h2>Title</h2>"),
            ("### Deep ###", "<h3>Deep</h3>"),
        ],
    )
    def test_headings(self, converter, source, expected):
        """Test the three heading notations."""
        assert converter.convert(source) == expected

    @pytest.mark.parametrize(
        "source, expected",
        [
            ("* a\n* b\n\n", "<ul><li>a</li><li>b</li></ul>"),
            ("1. a\n2. b\n\n", "<ol><li>a</li><li>b</li></ol>"),
        ],
    )
    def test_lists(self, converter, source, expected):
        """Test list grouping."""
        assert converter.convert(source) == expected

    def test_emphasis_precedence(self, converter):
        """Test strong runs before emphasis."""
        result = converter.convert("**bold** and *em*")
        assert result == "<p><strong>bold</strong> and <em>em</em></p>"

    def test_sentinel_characters_survive(self, converter):
        """Test literal tildes and dollar signs come back unchanged."""
        assert converter.convert("Cost: $5 ~ roughly") == "<p>Cost: $5 ~ roughly</p>"
        assert converter.convert("~D and ~T") == "<p>~D and ~T</p>"

    def test_blockquote_recursion(self, converter):
        """Test quoted lines become a paragraph inside the quote."""
        result = converter.convert("> line one\n> line two\n\n")
        assert result == "<blockquote><p>line one\nline two</p></blockquote>"

    def test_code_block_boundary(self, converter):
        """Test only the indented run becomes code."""
        source = "Intro\n\n    if a < b:\n        *keep*\n\nOutro"
        assert converter.convert(source) == (
            "<p>Intro</p>\n"
            "<pre><code>    if a &lt; b:\n        *keep*</code></pre>\n"
            "<p>Outro</p>"
        )

    def test_code_next_to_text(self, converter):
        """Test text right after code is its own paragraph."""
        result = converter.convert("    code\ntext")
        assert result == "<pre><code>    code</code></pre>\n<p>text</p>"

    @pytest.mark.parametrize(
        "source, expected",
        [
            ("* item\n    continued wrap", "<ul><li>item</li></ul>\n<p>continued wrap</p>"),
            ("# Heading\n    indented", "<h1>Heading</h1>\n<p>indented</p>"),
            ("# Heading\n\n    code", "<h1>Heading</h1>\n<pre><code>    code</code></pre>"),
        ],
    )
    def test_code_needs_an_authored_blank_line(self, converter, source, expected):
        """Test indented text directly under a heading or list is not code."""
        assert converter.convert(source) == expected

    def test_emphasis_across_soft_line_break(self, converter):
        """Test spans continue over a line break inside one paragraph."""
        result = converter.convert("some **bold\nacross** lines")
        assert result == "<p>some <strong>bold\nacross</strong> lines</p>"

    def test_horizontal_rule(self, converter):
        """Test rule lines, including the spaced asterisk form."""
        assert converter.convert("above\n\n* * *\n\nbelow") == "<p>above</p>\n<hr />\n<p>below</p>"

    def test_reference_link(self, converter):
        """Test a definition anywhere in the note resolves a later link."""
        source = 'See [ref](ignored).\n\n[ref]: http://example.com "Example"\n'
        result = converter.convert(source)
        assert result == '<p>See <a href="http://example.com" title="Example">ref</a>.</p>'

    def test_reference_definition_is_removed(self, converter):
        """Test definitions do not render as text."""
        assert converter.convert("[ref]: http://example.com\n") == ""

    def test_inline_formatting_in_blocks(self, converter):
        """Test headings, list items and quotes get inline markup."""
        assert converter.convert("# *Hello*") == "<h1><em>Hello</em></h1>"
        assert converter.convert("* **a**") == "<ul><li><strong>a</strong></li></ul>"
        assert converter.convert("> [x](http://x)") == (
            '<blockquote><p><a href="http://x">x</a></p></blockquote>'
        )

    def test_full_document(self, converter):
        """Test a note mixing every block kind."""
        source = "\r\n".join(
            [
                "Shopping",
                "========",
                "",
                "1. eggs",
                "2. milk",
                "",
                "---",
                "",
                "> remember the [shop]",
                "",
                "Visit [shop](x) for $3 deals.",
                "",
                "[shop]: http://shop.example",
            ]
        )
        assert converter.convert(source) == (
            "<h1>Shopping</h1>\n"
            "<ol><li>eggs</li><li>milk</li></ol>\n"
            "<hr />\n"
            "<blockquote><p>remember the [shop]</p></blockquote>\n"
            '<p>Visit <a href="http://shop.example">shop</a> for $3 deals.</p>'
        )

    def test_references_persist_until_reset(self, converter):
        """Test the registry outlives a call and reset clears it."""
        converter.convert("[r]: http://a.example\n")

        assert converter.convert("[r](x)") == '<p><a href="http://a.example">r</a></p>'
        converter.reset()
        assert converter.convert("[r](x)") == '<p><a href="x">r</a></p>'

    def test_count_increments_per_call(self, converter):
        """Test the generation counter advances once per conversion."""
        converter.convert("one")
        converter.convert("two")
        converter.reset()
        assert converter.count == 2

    def test_module_level_convert_is_isolated(self):
        """Test the convenience function uses a fresh registry each call."""
        convert("[r]: http://a.example\n")
        assert convert("[r](x)") == '<p><a href="x">r</a></p>'
