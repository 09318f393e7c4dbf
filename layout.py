from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Sequence

from metrics import CharDiffKind, word_difference


# the active line is kept on the second visible row once typing reaches row 3
SCROLL_ROW = 2


class CellStyle(enum.Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    UNTYPED = "untyped"


@dataclass(frozen=True)
class Cell:
    char: str
    style: CellStyle = CellStyle.UNTYPED
    cursor: bool = False


@dataclass(frozen=True)
class Frame:
    lines: list[list[Cell]]
    cursor: tuple[int, int] | None
    row_starts: list[int] = field(default_factory=list)


def display_word(word: str, typed: str | None) -> str:
    """The text shown for a word: typed characters first, extra ones included."""
    if typed is None:
        return word
    if len(word) > len(typed):
        return typed + word[len(typed):]
    return typed


def wrap_lines(
    words: Sequence[str], inputs: Sequence[str], width: int, stop_after: int
) -> list[tuple[int, list[tuple[int, int]]]]:
    """Greedy word wrap starting at word 0.

    Returns one ``(first_word_index, [(word_index, column), ...])`` entry per
    line. Wrapping stops once ``stop_after`` lines exist counting from the
    line of the active word.
    """
    lines: list[tuple[int, list[tuple[int, int]]]] = []
    active = len(inputs) - 1
    active_line = 0
    x = 0
    for index, word in enumerate(words):
        typed = inputs[index] if index < len(inputs) else None
        length = len(display_word(word, typed))
        if not lines or (x > 0 and x + length > width):
            if index > active and len(lines) - active_line >= stop_after:
                break
            lines.append((index, []))
            x = 0
        if index == active:
            active_line = len(lines) - 1
        lines[-1][1].append((index, x))
        x += length + 1
    return lines


class TypingLayout:
    """Lays the word list out in a viewport and tracks which lines are visible.

    The list of visible row starts is the only state kept between renders.
    """

    def __init__(self) -> None:
        self.rows: list[int] = [0]

    def render(
        self,
        words: Sequence[str],
        inputs: Sequence[str],
        width: int,
        height: int,
    ) -> Frame:
        width = max(width, 1)
        height = max(height, 1)
        active = len(inputs) - 1
        assert active < len(words) or not words, "active word is past the end of the list"

        lines = wrap_lines(words, inputs, width, stop_after=height)
        if not lines:
            self.rows = [0]
            return Frame(lines=[], cursor=None, row_starts=list(self.rows))

        active_line = _line_of(lines, active)
        top = _line_of(lines, self.rows[0] if self.rows else 0)
        scroll_row = max(1, min(SCROLL_ROW, height - 1))
        if active_line < top:
            top = active_line
        elif active_line - top >= scroll_row:
            top = active_line - scroll_row + 1

        visible = lines[top : top + height]
        self.rows = [start for start, _ in visible]

        grid: list[list[Cell]] = []
        cursor = None
        for y, (_, placed) in enumerate(visible):
            row = [Cell(" ") for _ in range(width)]
            for index, x in placed:
                typed = inputs[index] if index < len(inputs) else None
                _paint_word(row, x, words[index], typed)
                if index == active:
                    cursor = _cursor_cell(x + len(typed or ""), y, width)
            grid.append(row)

        if cursor is not None and cursor[1] < len(grid):
            cx, cy = cursor
            grid[cy][cx] = Cell(grid[cy][cx].char, grid[cy][cx].style, cursor=True)

        return Frame(lines=grid, cursor=cursor, row_starts=list(self.rows))


def _line_of(lines: Sequence[tuple[int, list[tuple[int, int]]]], word_index: int) -> int:
    line = 0
    for number, (start, _) in enumerate(lines):
        if start > word_index:
            break
        line = number
    return line


def _cursor_cell(x: int, y: int, width: int) -> tuple[int, int]:
    if x >= width:
        return 0, y + 1
    return x, y


def _paint_word(row: list[Cell], x: int, word: str, typed: str | None) -> None:
    text = display_word(word, typed)
    styles = [CellStyle.UNTYPED] * len(text)
    if typed is not None:
        if typed == word:
            styles = [CellStyle.CORRECT] * len(text)
        else:
            # live styling only covers what has been typed so far
            diff = word_difference(word, typed)
            for position, kind in zip(range(len(typed)), diff):
                styles[position] = (
                    CellStyle.CORRECT
                    if kind is CharDiffKind.CORRECT
                    else CellStyle.INCORRECT
                )
    for offset, (char, style) in enumerate(zip(text, styles)):
        if x + offset < len(row):
            row[x + offset] = Cell(char, style)
