"""
Unit tests for document title extraction.
"""
import pytest

from adoclinks.extractors.titles import extract_title, truncate_title


class TestExtractTitle:
    """Tests for extract_title function."""

    def test_basic_title(self):
        assert extract_title("= Hello World\nbody") == "Hello World"

    def test_truncated(self):
        assert extract_title("= Hello World\nbody", max_length=5) == "Hello..."

    def test_no_title(self):
        assert extract_title("Just some text\nwithout a heading") is None
        assert extract_title("") is None

    def test_section_heading_is_not_a_title(self):
        """Level-1 headings ("==") do not count."""
        assert extract_title("== Section\ntext") is None

    def test_marker_needs_space(self):
        assert extract_title("=NoSpace\n") is None

    def test_title_not_on_first_line(self):
        content = ":author: Someone\n:toc:\n\n= Late Title\n"
        assert extract_title(content) == "Late Title"

    def test_first_match_wins(self):
        assert extract_title("= First\n\n= Second\n") == "First"

    def test_must_start_line(self):
        assert extract_title("text = Not a title\n") is None

    def test_whitespace_stripped(self):
        assert extract_title("=    Padded Title   \r\n") == "Padded Title"

    def test_blank_title(self):
        """A marker followed only by spaces is not a title."""
        assert extract_title("=    \nbody") is None

    def test_truncation_disabled(self):
        title = "A fairly long document title"
        assert extract_title(f"= {title}", max_length=0) == title
        assert extract_title(f"= {title}", max_length=-1) == title


class TestTruncateTitle:
    """Tests for truncate_title function."""

    def test_exact_boundary_not_truncated(self):
        assert truncate_title("Hello", 5) == "Hello"

    def test_one_over_boundary(self):
        assert truncate_title("Hello!", 5) == "Hello..."

    def test_shorter_unchanged(self):
        assert truncate_title("Hi", 5) == "Hi"

    @pytest.mark.parametrize("max_length", [0, -3])
    def test_non_positive_disables(self, max_length):
        assert truncate_title("Hello World", max_length) == "Hello World"
