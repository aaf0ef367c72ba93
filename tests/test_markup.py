"""Tests for the description markup-to-Markdown converter."""

import pytest

from dojo.common.markup import to_markdown


class TestToMarkdown:
    """Tests for to_markdown()."""

    @pytest.mark.parametrize("markup", ["", "   ", "\n\t"])
    def test_blank_input(self, markup):
        """Empty or whitespace-only markup shall yield an empty string."""
        assert to_markdown(markup) == ""

    def test_plain_text_passes_through(self):
        """Markup without tags shall come back as its text."""
        assert to_markdown("Just text") == "Just text"

    def test_paragraphs_are_separated_by_blank_line(self):
        """Paragraph-level blocks shall be separated by one blank line."""
        assert to_markdown("<p>First</p><p>Second</p>") == "First\n\nSecond"

    def test_line_break(self):
        """br shall produce a plain line break."""
        assert to_markdown("Line one<br>Line two") == "Line one\nLine two"

    def test_list_items(self):
        """List items shall each start a line with a dash."""
        markup = "<ul>\n  <li>One</li>\n  <li>Two</li>\n</ul>"
        assert to_markdown(markup) == "- One\n- Two"

    def test_headings_use_hash_marks(self):
        markup = "<h2>Task</h2><p>Do it.</p>"
        assert to_markdown(markup) == "## Task\n\nDo it."

    def test_inline_code_and_emphasis(self):
        markup = "<p>Return <code>sum</code> of <em>all</em> values.</p>"
        assert to_markdown(markup) == "Return `sum` of *all* values."

    def test_links_keep_their_target(self):
        markup = '<p>See <a href="https://en.wikipedia.org/wiki/Summation">summation</a>.</p>'
        assert to_markdown(markup) == (
            "See [summation](https://en.wikipedia.org/wiki/Summation)."
        )

    def test_identifiers_are_not_escaped(self):
        """Underscores and asterisks in prose shall be kept as written."""
        assert to_markdown("<p>sum_array returns a*b</p>") == "sum_array returns a*b"

    def test_code_block_is_fenced(self):
        """pre blocks shall become fenced code, keeping indentation."""
        markup = (
            "<p>Example:</p>"
            "<pre><code>def f():\n    return 1</code></pre>"
            "<p>Done.</p>"
        )
        assert to_markdown(markup) == (
            "Example:\n\n```\ndef f():\n    return 1\n```\n\nDone."
        )

    def test_code_block_language_from_class(self):
        """A language-* class on the code element shall tag the fence."""
        markup = (
            "<h2>Task</h2>"
            "<p>Return <code>sum(arr)</code>, see "
            '<a href="https://en.wikipedia.org/wiki/Summation">summation</a>.</p>'
            '<pre><code class="language-python">sum_array([1, 2]) # 3</code></pre>'
        )
        assert to_markdown(markup) == (
            "## Task\n\n"
            "Return `sum(arr)`, see "
            "[summation](https://en.wikipedia.org/wiki/Summation).\n\n"
            "```python\nsum_array([1, 2]) # 3\n```"
        )

    def test_table_rows(self):
        markup = (
            "<table><tr><th>n</th><th>result</th></tr>"
            "<tr><td>1</td><td>2</td></tr></table>"
        )
        result = to_markdown(markup)
        assert "| n | result |" in result
        assert "| 1 | 2 |" in result

    def test_inline_whitespace_is_collapsed(self):
        """Runs of spaces inside inline text shall become one space."""
        assert to_markdown("<p>  lots   of   space  </p>") == "lots of space"

    def test_script_and_style_are_dropped(self):
        """Script and style content shall be removed, keeping tail text."""
        markup = (
            "<p>Keep<script>alert(1)</script> this</p>"
            "<style>p { color: red; }</style><p>and this</p>"
        )
        assert to_markdown(markup) == "Keep this\n\nand this"

    def test_comments_are_dropped(self):
        """HTML comments shall not appear in the output."""
        assert to_markdown("<p>a<!-- hidden -->b</p>") == "ab"

    def test_deterministic(self):
        """The same input shall always give the same output."""
        markup = "<div><p>x</p><ul><li>y</li></ul></div>"
        assert to_markdown(markup) == to_markdown(markup)
