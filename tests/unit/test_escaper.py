"""Unit tests for SQL string literal escaping."""

import pytest

from sqlinline.escaper import quote_string


class TestQuoteString:
    """Tests for each escape rule."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("hello world", "'hello world'"),
            ("hello's world", "'hello''s world'"),
            ("hello\\world", "'hello\\\\world'"),
            ('hello"world', "'hello\\\"world'"),
            ("hello\nworld", "'hello\\nworld'"),
            ("hello\tworld", "'hello\\tworld'"),
            ("hello\rworld", "'hello\\rworld'"),
            ("hello\x00world", "'hello\\0world'"),
            ("hello\x1aworld", "'hello\\Zworld'"),
            ("", "''"),
        ],
    )
    def test_escape_rules(self, text, expected):
        """Each special character gets its escaped form."""
        assert quote_string(text) == expected

    def test_backslash_escaped_before_other_rules(self):
        """Backslashes added by later rules are not escaped again."""
        # A literal backslash followed by a newline
        assert quote_string("a\\\nb") == "'a\\\\\\nb'"

    def test_quote_then_backslash(self):
        """A backslash-quote pair cannot close the literal."""
        result = quote_string("\\'")
        assert result == "'\\\\'''"

    def test_only_outer_quotes_unpaired(self):
        """After escaping, every inner single quote is doubled."""
        result = quote_string("it's 'quoted' text '")
        inner = result[1:-1]
        assert inner.replace("''", "").count("'") == 0

    def test_non_ascii_preserved(self):
        """Non-ASCII text passes through unchanged."""
        assert quote_string("北京朝阳区") == "'北京朝阳区'"
