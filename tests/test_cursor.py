"""
Tests for the line cursor.

These tests verify:
    - Whitespace-delimited label detection
    - Label consumption and re-anchoring
    - Token extraction from a fixed anchor
    - End-of-line handling for optional and mandatory labels
"""

import pytest
from datline.cursor import LineCursor
from datline.errors import RequiredFieldMissing


class TestLabels:
    """Test label search."""

    def test_label_in_middle(self):
        assert LineCursor("A B C").has_label("B")

    def test_label_at_line_boundaries(self):
        cursor = LineCursor("A B C")
        assert cursor.has_label("A")
        assert cursor.has_label("C")

    def test_label_must_be_whole_token(self):
        cursor = LineCursor("ManifoldConditionID 1 ABC")
        assert not cursor.has_label("ConditionID")
        assert not cursor.has_label("AB")

    def test_label_with_regex_characters(self):
        cursor = LineCursor("K_R 1 E- 2")
        assert cursor.find_label("E-") == 6

    def test_missing_label(self):
        assert LineCursor("A B").find_label("Z") is None


class TestConsumeLabel:
    """Test removing labels from the line."""

    def test_consume_removes_label_and_anchors(self):
        cursor = LineCursor("X 1 ONOFF 1 0")
        assert cursor.consume_label("ONOFF") is True
        assert cursor.line == "X 1  1 0"
        assert cursor.position == 4
        assert not cursor.has_label("ONOFF")

    def test_optional_missing_label_seeks_end(self):
        cursor = LineCursor("X 1")
        assert cursor.consume_label("FUNCT", optional=True) is False
        assert cursor.at_end()
        assert cursor.line == "X 1"

    def test_mandatory_missing_label_fails(self):
        cursor = LineCursor("X 1")
        with pytest.raises(RequiredFieldMissing) as exc:
            cursor.consume_label("FUNCT", section="SEC")
        assert exc.value.field == "FUNCT"
        assert exc.value.section == "SEC"


class TestTokens:
    """Test reading tokens from the anchor."""

    def test_successive_reads_from_same_anchor(self):
        """Each read excises its token; the anchor does not move."""
        cursor = LineCursor("X 1 ONOFF 1 0")
        cursor.consume_label("ONOFF")

        assert cursor.read_token() == "1"
        assert cursor.line == "X 1   0"
        assert cursor.position == 4

        assert cursor.read_token() == "0"
        assert cursor.line == "X 1   "
        assert cursor.position == 4

    def test_read_past_last_token(self):
        cursor = LineCursor("A   ")
        assert cursor.read_token() == "A"
        assert cursor.read_token() is None
        assert not cursor.at_end()

    def test_peek_does_not_mutate(self):
        cursor = LineCursor("  a b")
        assert cursor.peek_token() == "a"
        assert cursor.line == "  a b"
        assert cursor.position == 0

    def test_read_on_empty_line(self):
        cursor = LineCursor("")
        assert cursor.at_end()
        assert cursor.read_token() is None


class TestPosition:
    """Test the position invariant."""

    def test_position_cannot_exceed_line(self):
        cursor = LineCursor("abc")
        with pytest.raises(ValueError):
            cursor.position = 4

    def test_position_cannot_be_negative(self):
        cursor = LineCursor("abc")
        with pytest.raises(ValueError):
            cursor.position = -1

    def test_seek_end(self):
        cursor = LineCursor("abc")
        cursor.seek_end()
        assert cursor.position == 3
        assert cursor.at_end()
