from __future__ import annotations

import enum
import itertools
import math
from dataclasses import dataclass
from typing import Iterator, Sequence

from keystrokes import Correct, Incorrect, KeyStroke, Space


CHARS_PER_WORD = 5.0
MIN_TIME_STEP = 0.5
CHART_POINTS = 20


class CharDiffKind(enum.Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    EXTRA = "extra"
    MISSED = "missed"


def word_difference(target: str, typed: str) -> Iterator[CharDiffKind]:
    for position in range(max(len(target), len(typed))):
        if position >= len(target):
            yield CharDiffKind.EXTRA
        elif position >= len(typed):
            yield CharDiffKind.MISSED
        elif target[position] == typed[position]:
            yield CharDiffKind.CORRECT
        else:
            yield CharDiffKind.INCORRECT


def normalize_wpm(char_count: float, seconds: float) -> float:
    if seconds <= 0:
        return 0.0
    return char_count / CHARS_PER_WORD * (60.0 / seconds)


@dataclass(frozen=True)
class FinalStats:
    wpm: float = 0.0
    raw_wpm: float = 0.0
    correct: int = 0
    incorrect: int = 0
    extra: int = 0
    missed: int = 0

    @classmethod
    def calculate(
        cls,
        typed_words: Sequence[str],
        target_words: Sequence[str],
        seconds: float,
    ) -> FinalStats:
        """Score a finished session.

        ``wpm`` counts characters of fully correct words (plus one for the
        separator), ``raw_wpm`` counts every typed character. The last word
        is only compared against as much of its target as was typed, so a
        session cut off mid-word is not charged for the rest of it.
        """
        wpm_chars = 0.0
        raw_chars = 0.0
        counts = dict.fromkeys(CharDiffKind, 0)
        last = len(typed_words) - 1

        for index, (typed, target) in enumerate(zip(typed_words, target_words)):
            if typed == target:
                wpm_chars += len(typed) + 1
            elif index == last and target.startswith(typed):
                wpm_chars += len(typed)
                raw_chars -= 1
            raw_chars += len(typed) + 1

            if index == last:
                target = target[: len(typed)]
            for kind in word_difference(target, typed):
                counts[kind] += 1

        return cls(
            wpm=normalize_wpm(wpm_chars, seconds),
            raw_wpm=normalize_wpm(raw_chars, seconds),
            correct=counts[CharDiffKind.CORRECT],
            incorrect=counts[CharDiffKind.INCORRECT],
            extra=counts[CharDiffKind.EXTRA],
            missed=counts[CharDiffKind.MISSED],
        )


def calculate_accuracy(key_strokes: Sequence[KeyStroke]) -> float:
    """Share of correct key strokes; 0.0 when nothing was typed.

    A word closed with missing or extra characters counts as one mistake,
    a clean word boundary is not counted at all.
    """
    correct = 0
    incorrect = 0
    for stroke in key_strokes:
        kind = stroke.kind
        if isinstance(kind, Correct):
            correct += 1
        elif isinstance(kind, Incorrect):
            incorrect += 1
        elif isinstance(kind, Space) and kind.overflow != 0:
            incorrect += 1
    total = correct + incorrect
    return correct / total if total else 0.0


def time_step_for(seconds: float) -> float:
    return max(seconds / CHART_POINTS, MIN_TIME_STEP)


def batch_key_strokes(
    key_strokes: Sequence[KeyStroke], time_step: float
) -> list[tuple[float, int, int]]:
    """Group the log into windows of ``time_step`` seconds.

    Returns ``(window_end, strokes, errors)`` for every window that saw at
    least one key stroke. The log is time ordered, so grouping consecutive
    entries by window is enough.
    """
    batches = []
    for key, group in itertools.groupby(
        key_strokes, key=lambda stroke: math.ceil(stroke.elapsed / time_step)
    ):
        strokes = 0
        errors = 0
        for stroke in group:
            strokes += 1
            if isinstance(stroke.kind, Incorrect):
                errors += 1
        batches.append((key * time_step, strokes, errors))
    return batches


def wpm_series(
    batches: Sequence[tuple[float, int, int]], time_step: float
) -> list[tuple[float, float]]:
    return [(end, normalize_wpm(strokes, time_step)) for end, strokes, _ in batches]


def error_series(
    batches: Sequence[tuple[float, int, int]], time_step: float
) -> list[tuple[float, float]]:
    return [
        (end, normalize_wpm(errors, time_step))
        for end, _, errors in batches
        if errors
    ]


def dense_series(
    series: Sequence[tuple[float, float]], time_step: float, duration: float
) -> list[float]:
    """Spread a ``(window_end, value)`` series over every window of the test.

    Windows with no entry read ``0.0``, so pauses show up as gaps on a chart.
    A stroke at exactly zero seconds belongs to the first window.
    """
    count = max(1, math.ceil(duration / time_step - 1e-9))
    values = [0.0] * count
    for end, value in series:
        index = min(max(round(end / time_step), 1), count)
        values[index - 1] += value
    return values
