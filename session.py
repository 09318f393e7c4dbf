from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence, Union

from keystrokes import KeyPress, KeyStroke, boundary, classify_char
from metrics import (
    FinalStats,
    batch_key_strokes,
    calculate_accuracy,
    error_series,
    time_step_for,
    wpm_series,
)
from wordlist import fit_to_count


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DurationMode:
    seconds: float


@dataclass(frozen=True)
class WordsMode:
    count: int


TestMode = Union[DurationMode, WordsMode]


class TypingState:
    """The active phase of a session: word buffers, key stroke log, timer."""

    def __init__(self, words: Sequence[str], mode: TestMode) -> None:
        if isinstance(mode, WordsMode):
            words = fit_to_count(words, mode.count)
        self.words: list[str] = list(words)
        self._source_words = list(words)
        self.mode = mode
        self.written_words: list[str] = [""]
        self.key_strokes: list[KeyStroke] = []
        self.start_time: float | None = None

    @property
    def finished(self) -> bool:
        return False

    @property
    def active_index(self) -> int:
        return len(self.written_words) - 1

    def target_word(self, index: int) -> str:
        assert index < len(self.words), f"word {index} is past the end of the list"
        return self.words[index] if index < len(self.words) else ""

    def elapsed(self, now: float) -> float:
        if self.start_time is None:
            return 0.0
        return now - self.start_time

    def handle_event(self, key: KeyPress, now: float) -> State:
        if not key.pressed:
            return self

        char = key.typed_char
        if key.is_word_delete:
            self._remove_word()
        elif key.is_backspace:
            self._remove_char()
        elif key.is_space:
            self._start(now)
            self._add_space(now)
        elif char is not None:
            self._start(now)
            self._add_char(char, now)
        return self

    def update(self, now: float) -> State:
        if self.start_time is None:
            return self
        if isinstance(self.mode, DurationMode):
            if self.elapsed(now) > self.mode.seconds:
                return StatsState.from_session(self, self.mode.seconds)
        elif len(self.written_words) > self.mode.count:
            return StatsState.from_session(self, self.elapsed(now))
        return self

    def progress(self, now: float) -> float:
        if isinstance(self.mode, DurationMode):
            ratio = self.elapsed(now) / self.mode.seconds if self.mode.seconds else 1.0
        else:
            ratio = self.active_index / self.mode.count if self.mode.count else 1.0
        return min(max(ratio, 0.0), 1.0)

    def progress_label(self, now: float) -> str:
        if self.start_time is None:
            return "Start typing to begin."
        if isinstance(self.mode, DurationMode):
            return f"{self.elapsed(now):.1f}/{self.mode.seconds:.1f}s"
        return f"{self.active_index}/{self.mode.count}"

    def _start(self, now: float) -> None:
        if self.start_time is None:
            self.start_time = now
            logger.info("Session started (%s)", self.mode)

    def _add_char(self, char: str, now: float) -> None:
        index = self.active_index
        typed = self.written_words[index]
        kind = classify_char(self.target_word(index), len(typed), char)
        self.key_strokes.append(KeyStroke(self.elapsed(now), kind))
        self.written_words[index] = typed + char

    def _add_space(self, now: float) -> None:
        index = self.active_index
        kind = boundary(self.written_words[index], self.target_word(index))
        self.key_strokes.append(KeyStroke(self.elapsed(now), kind))
        self.written_words.append("")
        self._extend_words()

    def _extend_words(self) -> None:
        # timed sessions never run out of words; repeat the original list
        if not isinstance(self.mode, DurationMode) or not self._source_words:
            return
        while len(self.words) - self.active_index < 2:
            self.words.extend(self._source_words)

    def _reopen_previous(self) -> None:
        # a previous word that was typed correctly stays closed
        if len(self.written_words) < 2:
            return
        index = len(self.written_words) - 2
        if self.written_words[index] != self.target_word(index):
            self.written_words.pop()

    def _remove_char(self) -> None:
        if self.written_words[-1]:
            self.written_words[-1] = self.written_words[-1][:-1]
        else:
            self._reopen_previous()

    def _remove_word(self) -> None:
        if not self.written_words[-1]:
            self._reopen_previous()
        self.written_words[-1] = ""


@dataclass(frozen=True)
class StatsState:
    """The finished phase: every figure the results view shows."""

    final_stats: FinalStats
    accuracy: float
    raw_wpms: list[tuple[float, float]]
    error_wpms: list[tuple[float, float]]
    test_duration: float
    time_step: float
    mode: TestMode
    key_strokes: list[KeyStroke] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        return True

    @classmethod
    def from_session(cls, state: TypingState, test_duration: float) -> StatsState:
        time_step = time_step_for(test_duration)
        batches = batch_key_strokes(state.key_strokes, time_step)
        stats = cls(
            final_stats=FinalStats.calculate(
                state.written_words, state.words, test_duration
            ),
            accuracy=calculate_accuracy(state.key_strokes),
            raw_wpms=wpm_series(batches, time_step),
            error_wpms=error_series(batches, time_step),
            test_duration=test_duration,
            time_step=time_step,
            mode=state.mode,
            key_strokes=list(state.key_strokes),
        )
        logger.info(
            "Session finished after %.1fs: %s, accuracy %.3f",
            test_duration,
            stats.final_stats,
            stats.accuracy,
        )
        return stats

    def handle_event(self, key: KeyPress, now: float) -> State:
        return self

    def update(self, now: float) -> State:
        return self


State = Union[TypingState, StatsState]
