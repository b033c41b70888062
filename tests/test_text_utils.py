"""Tests for text normalisation and wrapping."""

from evidence_report.text_utils import collapse_whitespace, normalize_text, wrap_text


class TestNormalizeText:
    """Tests for normalize_text."""

    def test_smart_quotes(self):
        """Test that typographic quotes are folded to ASCII."""
        text = chr(0x201C) + "Hi" + chr(0x201D) + " it" + chr(0x2019) + "s"
        assert normalize_text(text) == "\"Hi\" it's"

    def test_dashes_and_ellipsis(self):
        """Test dash and ellipsis replacement."""
        text = "a" + chr(0x2014) + "b" + chr(0x2026)
        assert normalize_text(text) == "a-b..."

    def test_line_endings(self):
        """Test that CRLF and CR become LF."""
        assert normalize_text("a\r\nb\rc") == "a\nb\nc"

    def test_empty(self):
        """Test that None and empty input yield an empty string."""
        assert normalize_text(None) == ""
        assert normalize_text("") == ""


class TestWrapText:
    """Tests for wrap_text."""

    def test_short_text_single_line(self):
        """Test that text narrower than the column is not wrapped."""
        assert wrap_text("Hello world", "Helvetica", 10, 170) == ["Hello world"]

    def test_long_text_wraps(self):
        """Test that long text is split into several lines within the width."""
        text = " ".join(["evidence"] * 60)
        lines = wrap_text(text, "Helvetica", 10, 80)
        assert len(lines) > 1
        assert " ".join(lines) == text

    def test_explicit_newlines_kept(self):
        """Test that explicit and blank lines survive wrapping."""
        assert wrap_text("one\n\ntwo", "Helvetica", 10, 170) == ["one", "", "two"]

    def test_long_word_not_split(self):
        """Test that a word wider than the column stays whole."""
        word = "x" * 200
        assert wrap_text(word, "Helvetica", 10, 20) == [word]

    def test_empty_text(self):
        """Test that empty text yields no lines."""
        assert wrap_text("", "Helvetica", 10, 170) == []


def test_collapse_whitespace():
    """Test whitespace collapsing."""
    assert collapse_whitespace("  a \n\t b  ") == "a b"
