"""Tests for layout – word wrap, cursor placement and the scrolling window."""

from __future__ import annotations

from layout import Cell, CellStyle, TypingLayout, display_word, wrap_lines


def row_text(frame, y: int) -> str:
    return "".join(cell.char for cell in frame.lines[y])


def row_styles(frame, y: int) -> list[CellStyle]:
    return [cell.style for cell in frame.lines[y]]


# ---------------------------------------------------------------------------
# display_word / wrap_lines
# ---------------------------------------------------------------------------

class TestDisplayWord:
    def test_untyped_word(self):
        assert display_word("hello", None) == "hello"

    def test_partially_typed(self):
        assert display_word("hello", "hx") == "hxllo"

    def test_extra_characters_stay_visible(self):
        assert display_word("hi", "hiya") == "hiya"


class TestWrapLines:
    def test_breaks_when_word_does_not_fit(self):
        lines = wrap_lines(["aa", "bb", "cc", "dd"], [""], 5, stop_after=3)
        assert lines == [(0, [(0, 0), (1, 3)]), (2, [(2, 0), (3, 3)])]

    def test_long_word_gets_its_own_line(self):
        lines = wrap_lines(["a", "abcdefgh", "b"], [""], 5, stop_after=5)
        assert [start for start, _ in lines] == [0, 1, 2]

    def test_typed_overflow_pushes_next_word(self):
        lines = wrap_lines(["aa", "bb"], ["aaaa", ""], 6, stop_after=3)
        assert [start for start, _ in lines] == [0, 1]


# ---------------------------------------------------------------------------
# TypingLayout.render
# ---------------------------------------------------------------------------

class TestRender:
    def test_basic_layout(self):
        frame = TypingLayout().render(["aa", "bb", "cc", "dd"], [""], 5, 3)
        assert row_text(frame, 0) == "aa bb"
        assert row_text(frame, 1) == "cc dd"
        assert frame.cursor == (0, 0)
        assert frame.row_starts == [0, 2]

    def test_styles_follow_typed_chars(self):
        frame = TypingLayout().render(["ab", "cd"], ["abxx", "c"], 10, 3)
        assert row_text(frame, 0) == "abxx cd   "
        assert row_styles(frame, 0)[:7] == [
            CellStyle.CORRECT,
            CellStyle.CORRECT,
            CellStyle.INCORRECT,
            CellStyle.INCORRECT,
            CellStyle.UNTYPED,
            CellStyle.CORRECT,
            CellStyle.UNTYPED,
        ]

    def test_wrong_char_inside_word(self):
        frame = TypingLayout().render(["cat"], ["cot"], 10, 3)
        assert row_styles(frame, 0)[:3] == [
            CellStyle.CORRECT,
            CellStyle.INCORRECT,
            CellStyle.CORRECT,
        ]

    def test_cursor_after_typed_chars(self):
        frame = TypingLayout().render(["ab", "cd"], ["ab", "c"], 10, 3)
        assert frame.cursor == (4, 0)
        assert frame.lines[0][4] == Cell("d", CellStyle.UNTYPED, cursor=True)

    def test_cursor_wraps_at_width(self):
        frame = TypingLayout().render(["abc", "de"], ["abc"], 3, 3)
        assert frame.cursor == (0, 1)
        assert frame.lines[1][0].cursor

    def test_only_one_cursor_cell(self):
        frame = TypingLayout().render(["ab", "cd", "ef"], ["ab", "c"], 6, 3)
        assert sum(cell.cursor for line in frame.lines for cell in line) == 1

    def test_rows_are_width_cells_wide(self):
        frame = TypingLayout().render(["a", "b"], [""], 7, 3)
        assert all(len(line) == 7 for line in frame.lines)

    def test_empty_word_list(self):
        frame = TypingLayout().render([], [""], 10, 3)
        assert frame.lines == []
        assert frame.cursor is None

    def test_height_limits_rows(self):
        frame = TypingLayout().render(["aa"] * 20, [""], 5, 3)
        assert len(frame.lines) == 3


# ---------------------------------------------------------------------------
# Scrolling
# ---------------------------------------------------------------------------

WORDS = ["aa"] * 10


class TestScrolling:
    def test_no_scroll_on_second_row(self):
        layout = TypingLayout()
        frame = layout.render(WORDS, ["aa", "aa", ""], 5, 3)
        assert frame.row_starts == [0, 2, 4]
        assert frame.cursor == (0, 1)

    def test_scrolls_when_active_reaches_third_row(self):
        layout = TypingLayout()
        layout.render(WORDS, [""], 5, 3)
        frame = layout.render(WORDS, ["aa"] * 4 + [""], 5, 3)
        assert frame.row_starts == [2, 4, 6]
        assert frame.cursor == (0, 1)

    def test_scrolls_back_when_word_is_reopened(self):
        layout = TypingLayout()
        layout.render(WORDS, ["aa"] * 4 + [""], 5, 3)
        frame = layout.render(WORDS, ["aa", "a"], 5, 3)
        assert frame.row_starts == [0, 2, 4]
        assert frame.cursor == (4, 0)

    def test_render_is_idempotent(self):
        layout = TypingLayout()
        inputs = ["aa"] * 6 + ["a"]
        first = layout.render(WORDS, inputs, 5, 3)
        second = layout.render(WORDS, inputs, 5, 3)
        assert first == second
        assert layout.rows == first.row_starts

    def test_active_word_visible_after_resize(self):
        layout = TypingLayout()
        inputs = ["aa"] * 4 + [""]
        layout.render(WORDS, inputs, 5, 3)
        frame = layout.render(WORDS, inputs, 8, 3)
        assert frame.row_starts == [0, 3, 6]
        assert frame.cursor == (3, 1)

    def test_single_row_viewport_follows_active_line(self):
        layout = TypingLayout()
        frame = layout.render(WORDS, ["aa"] * 3 + [""], 5, 1)
        assert frame.row_starts == [2]
        assert frame.cursor == (3, 0)
