"""Tests for the HTML description conversions."""

from unittest.mock import patch

from bs4 import ParserRejectedMarkup

from noderef_richtext import (
    ESCAPED_NEWLINE,
    escape_text,
    iter_tokens,
    strip_trailing_newlines,
    to_doc_comment,
    to_inline_comment,
    to_plain_summary,
)


class TestIterTokens:
    """Test the HTML token stream."""

    def test_tokens_in_document_order(self):
        """Test start/text/end tokens are produced without the synthetic root."""
        tokens = list(iter_tokens("<p>Hello <code>x</code></p>"))

        assert tokens == [
            ("start", "p"),
            ("text", "Hello "),
            ("start", "code"),
            ("text", "x"),
            ("end", "code"),
            ("end", "p"),
        ]

    def test_bare_text_fragment(self):
        """Test a fragment without any markup."""
        assert list(iter_tokens("plain")) == [("text", "plain")]

    def test_missing_closing_tag_is_tolerated(self):
        """Test an unclosed element still yields its text and an end token."""
        tokens = list(iter_tokens("<p>unclosed"))

        assert ("text", "unclosed") in tokens
        assert tokens[-1] == ("end", "p")

    def test_entities_are_decoded(self):
        """Test character references arrive decoded in text tokens."""
        assert list(iter_tokens("a &lt; b")) == [("text", "a < b")]

    def test_comments_and_formatting_whitespace_skipped(self):
        """Test HTML comments and newline-only whitespace between blocks are dropped."""
        tokens = list(iter_tokens("<p>a</p>\n<!-- note -->\n<p>b</p>"))

        texts = [value for kind, value in tokens if kind == "text"]
        assert texts == ["a", "b"]


class TestInlineComment:
    """Test flattening descriptions to a single escaped line."""

    def test_paragraphs_joined_with_escaped_newline(self):
        """Test paragraphs are separated by the escaped newline marker and trailing markers trimmed."""
        assert to_inline_comment("<p>First.</p>\n<p>Second.</p>\n") == "First." + ESCAPED_NEWLINE + "Second."

    def test_list_items_are_prefixed(self):
        """Test list items get a bullet marker."""
        result = to_inline_comment("<ul>\n<li>one</li>\n<li>two</li>\n</ul>")

        assert result == "* one" + ESCAPED_NEWLINE + "* two"

    def test_headings_terminate_with_newline(self):
        """Test headings h1 to h5 are block elements."""
        for level in range(1, 6):
            assert to_inline_comment(f"<h{level}>Title</h{level}>text") == "Title" + ESCAPED_NEWLINE + "text"

    def test_quotes_backslashes_and_newlines_escaped(self):
        """Test text is safe inside a double-quoted literal."""
        result = to_inline_comment('<p>say "hi" \\ there\r\nnext\nline</p>')

        assert result == 'say \\"hi\\" \\\\ there\\r\\nnext\\r\\nline'

    def test_no_raw_newlines_or_unescaped_quotes(self):
        """Test paragraph-only fragments never produce raw newlines or bare quotes."""
        fragments = [
            '<p>"a"</p>\n<p>b\n"c"</p>',
            '<p>\n\n"</p>',
            'x"y\n<p>z</p>',
        ]
        for html in fragments:
            result = to_inline_comment(html)
            assert "\n" not in result
            assert "\r" not in result
            stripped = result.replace('\\\\', "").replace('\\"', "")
            assert '"' not in stripped

    def test_empty_description(self):
        """Test an empty fragment gives an empty string."""
        assert to_inline_comment("") == ""

    def test_unparseable_fragment_degrades_to_empty(self, capsys):
        """Test a parser failure is reported and replaced by an empty string."""
        with patch("noderef_richtext.BeautifulSoup", side_effect=ParserRejectedMarkup("bad markup")):
            assert to_inline_comment("<p>broken</p>") == ""

        assert "Unable to parse description fragment" in capsys.readouterr().err


class TestHelpers:
    """Test the smaller conversion helpers."""

    def test_escape_text(self):
        """Test escaping order keeps inserted backslashes intact."""
        assert escape_text('a\\b"c\r\nd\ne') == 'a\\\\b\\"c\\r\\nd\\r\\ne'

    def test_strip_trailing_newlines(self):
        """Test every trailing marker is removed, and only those."""
        text = "body" + ESCAPED_NEWLINE * 3
        assert strip_trailing_newlines(text) == "body"
        assert strip_trailing_newlines("body\\") == "body\\"

    def test_plain_summary_truncates_at_first_newline(self):
        """Test the summary keeps the first line and marks the truncation."""
        assert to_plain_summary("<p>Emitted on data.\nMore.</p>") == "Emitted on data. ..."

    def test_plain_summary_without_newline(self):
        """Test a single-line description is returned without paragraph tags."""
        assert to_plain_summary("<p>Emitted on <code>end</code>.</p>") == "Emitted on <code>end</code>."

    def test_doc_comment_encodes_newlines(self):
        """Test descriptions fit on one comment line."""
        assert to_doc_comment("<p>a</p>\n<p>b</p>\r\n") == "<p>a</p>&#10;<p>b</p>&#10;"
