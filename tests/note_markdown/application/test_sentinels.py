"""Tests for sentinel encoding."""
import pytest

from note_markdown.application.sentinels import SentinelCodec


class TestSentinelCodec:
    """Test SentinelCodec."""

    @pytest.fixture
    def codec(self):
        """Create codec."""
        return SentinelCodec()

    def test_normalize_encodes_tilde_and_dollar(self, codec):
        """Test reserved characters become two-character sentinels."""
        assert codec.normalize("a~b$c") == "\n\na~Tb~Dc\n\n"

    def test_normalize_unifies_line_endings(self, codec):
        """Test CRLF and lone CR both become LF."""
        assert codec.normalize("a\r\nb\rc\n") == "\n\na\nb\nc\n\n\n"

    def test_normalize_empty(self, codec):
        """Test empty text is still padded."""
        assert codec.normalize("") == "\n\n\n\n"

    def test_restore_reverses_normalize(self, codec):
        """Test restore brings back the original characters."""
        for text in ["~", "$", "~D", "$~T$", "cost: $5 ~ approx"]:
            assert codec.restore(codec.normalize(text)).strip("\n") == text

    def test_restore_leaves_other_text(self, codec):
        """Test text without sentinels is untouched."""
        assert codec.restore("<p>plain</p>") == "<p>plain</p>"
