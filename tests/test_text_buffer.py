"""Test the character-indexed text buffer."""

import pytest
from emed.buffer import TextBuffer


def test_empty_buffer_has_one_empty_line():
    """An empty buffer still has a line for the cursor to sit on."""
    buf = TextBuffer()
    assert buf.line_count() == 1
    assert buf.last_line_index() == 0
    assert buf.line_text(0) == ""
    assert buf.total_char_count() == 0


def test_last_line_index_is_lines_minus_one():
    """Four lines without a trailing newline give last index 3."""
    buf = TextBuffer("one\ntwo\nthree\nfour")
    assert buf.line_count() == 4
    assert buf.last_line_index() == 3


def test_trailing_newline_starts_empty_last_line():
    """A trailing separator opens a final empty line."""
    buf = TextBuffer("one\ntwo\n")
    assert buf.line_count() == 3
    assert buf.line_text(0) == "one\n"
    assert buf.line_text(1) == "two\n"
    assert buf.line_text(2) == ""


def test_line_length_excludes_trailing_newline():
    buf = TextBuffer("abc\nde")
    assert buf.line_length_excluding_trailing_newline(0) == 3
    assert buf.line_length_excluding_trailing_newline(1) == 2
    assert buf.line_chars(0) == "abc"


def test_absolute_index_of():
    """Absolute index is line start plus column."""
    buf = TextBuffer("ab\ncde\nXYZ")
    assert buf.absolute_index_of(0, 0) == 0
    assert buf.absolute_index_of(1, 0) == 3
    assert buf.absolute_index_of(2, 2) == 9


def test_counts_characters_not_bytes():
    """Offsets count code points, so multi-byte characters count once."""
    buf = TextBuffer("héllo 世界\n")
    assert buf.total_char_count() == 9
    assert buf.line_length_excluding_trailing_newline(0) == 8


def test_insert_and_remove_reindex_lines():
    buf = TextBuffer("ab\ncd")
    buf.insert(2, "X\nY")
    assert buf.text == "abX\nY\ncd"
    assert buf.line_count() == 3
    buf.remove(3, 4)
    assert buf.text == "abXY\ncd"
    assert buf.line_count() == 2
    assert buf.line_start(1) == 5


def test_out_of_range_edits_raise():
    buf = TextBuffer("ab")
    with pytest.raises(IndexError):
        buf.insert(3, "x")
    with pytest.raises(IndexError):
        buf.remove(1, 3)
