from __future__ import annotations

import logging
import sys
import time
from typing import Callable, Sequence

from rich.console import Group
from rich.style import Style
from rich.table import Table
from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widget import Widget
from textual.widgets import Footer, Header, ProgressBar, Sparkline, Static

from config import Settings, configure_logging, parse_args
from keystrokes import KeyPress
from layout import CellStyle, TypingLayout
from metrics import dense_series
from session import State, StatsState, TestMode, TypingState
from wikipedia import article_word_list, fetch_random_article
from wordlist import WordList, WordListError, load_word_list, make_rng, prepare_words


logger = logging.getLogger(__name__)

REFRESH_INTERVAL = 1 / 60

CELL_STYLES = {
    CellStyle.CORRECT: Style(color="green"),
    CellStyle.INCORRECT: Style(color="red"),
    CellStyle.UNTYPED: Style(color="bright_black"),
}
CURSOR_STYLE = Style(reverse=True)


def key_press_from_event(event: events.Key) -> KeyPress:
    ctrl = event.key.startswith("ctrl+")
    name = event.key[len("ctrl+"):] if ctrl else event.key
    character = event.character if event.is_printable else None
    return KeyPress(key=name, character=character, ctrl=ctrl)


class TypingView(Widget):
    """Word-wrapped target text with the typed characters coloured in."""

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self.typing_layout = TypingLayout()

    def render(self) -> Text:
        state = self.app.session
        text = Text(no_wrap=True, overflow="crop")
        if not isinstance(state, TypingState):
            return text

        frame = self.typing_layout.render(
            state.words, state.written_words, self.size.width, self.size.height
        )
        for y, line in enumerate(frame.lines):
            if y:
                text.append("\n")
            for cell in line:
                style = CELL_STYLES[cell.style]
                if cell.cursor:
                    style = style + CURSOR_STYLE
                text.append(cell.char, style=style)
        return text


class TypingScreen(Screen):
    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="typing"):
            yield Static("Start typing to begin.", id="progress-label")
            yield ProgressBar(total=100, show_eta=False, show_percentage=False, id="progress")
            yield TypingView(id="typing-view")
        yield Footer()

    def on_key(self, event: events.Key) -> None:
        event.stop()
        self.app.apply_key(key_press_from_event(event))

    def refresh_view(self, state: TypingState, now: float) -> None:
        self.query_one("#progress-label", Static).update(state.progress_label(now))
        self.query_one("#progress", ProgressBar).update(progress=state.progress(now) * 100)
        self.query_one("#typing-view", TypingView).refresh()


def stats_table(stats: StatsState) -> Table:
    final = stats.final_stats
    table = Table(show_header=False, box=None, show_edge=False, pad_edge=False)
    table.add_column("Stat", style="yellow", no_wrap=True)
    table.add_column("Value", justify="right", no_wrap=True)
    table.add_row("wpm", f"{final.wpm:.0f}")
    table.add_row("raw", f"{final.raw_wpm:.0f}")
    table.add_row("acc", f"{stats.accuracy * 100.0:.0f}%")
    table.add_row("", "")
    table.add_row("correct", str(final.correct))
    table.add_row("incorrect", str(final.incorrect))
    table.add_row("extra", str(final.extra))
    table.add_row("missed", str(final.missed))
    return table


def wpm_by_window(stats: StatsState) -> list[float]:
    return dense_series(stats.raw_wpms, stats.time_step, stats.test_duration)


def errors_by_window(stats: StatsState) -> list[float]:
    return dense_series(stats.error_wpms, stats.time_step, stats.test_duration)


class ResultsScreen(Screen):
    BINDINGS = [("q", "quit", "Quit")]

    def __init__(self, stats: StatsState) -> None:
        super().__init__()
        self.stats = stats

    def compose(self) -> ComposeResult:
        raw = wpm_by_window(self.stats)
        peak = max(raw, default=0.0)
        yield Header()
        with Horizontal(id="results"):
            yield Static(Group(Text("Results", style="bold"), stats_table(self.stats)), id="summary")
            with Vertical(id="charts"):
                yield Static(f"raw wpm over time (peak {peak:.0f})", classes="chart-title")
                yield Sparkline(raw, summary_function=max, id="wpm-chart")
                yield Static("errors", classes="chart-title")
                yield Sparkline(errors_by_window(self.stats), summary_function=max, id="error-chart")
                yield Static(
                    f"time (s): 0 .. {self.stats.test_duration / 2:.0f} .. {self.stats.test_duration:.0f}",
                    id="time-axis",
                )
        yield Footer()

    def action_quit(self) -> None:
        self.app.exit()


class TaplineApp(App):
    CSS = """
    #typing {
        padding: 1 2;
    }

    #progress-label {
        content-align: center middle;
        color: $warning;
    }

    #progress {
        width: 100%;
        margin-bottom: 1;
    }

    #progress Bar {
        width: 1fr;
    }

    #typing-view {
        height: 3;
        margin: 4 8;
    }

    #results {
        padding: 1 2;
    }

    #summary {
        width: 20;
    }

    #charts {
        width: 1fr;
    }

    .chart-title {
        text-style: bold;
        margin-top: 1;
    }

    #wpm-chart {
        height: 8;
    }

    #error-chart {
        height: 3;
    }

    #error-chart > .sparkline--max-color {
        color: $error;
    }

    #time-axis {
        color: $text-muted;
    }
    """

    TITLE = "tapline"

    BINDINGS = [
        Binding("escape", "quit", "Quit", priority=True),
        Binding("ctrl+c", "quit", "Quit", priority=True, show=False),
    ]

    def __init__(
        self,
        words: Sequence[str],
        mode: TestMode,
        seed: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        self.session: State = TypingState(words, mode)
        self.seed = seed
        self.clock = clock
        if seed is not None:
            self.sub_title = f"seed {seed}"

    def on_mount(self) -> None:
        self.push_screen(TypingScreen())
        self.set_interval(REFRESH_INTERVAL, self.tick)

    def apply_key(self, key: KeyPress) -> None:
        now = self.clock()
        self.session = self.session.handle_event(key, now)
        self._advance(now)

    def tick(self) -> None:
        self._advance(self.clock())

    def _advance(self, now: float) -> None:
        previous = self.session
        self.session = self.session.update(now)
        if isinstance(self.session, StatsState):
            if previous is not self.session:
                self.push_screen(ResultsScreen(self.session))
            return
        if isinstance(self.screen, TypingScreen):
            self.screen.refresh_view(self.session, now)


def load_words(settings: Settings) -> WordList:
    if settings.wikipedia:
        return article_word_list(fetch_random_article())
    return load_word_list(settings.words_file)


def main(argv: Sequence[str] | None = None) -> None:
    settings = parse_args(argv)
    configure_logging(settings.log_level)
    rng, seed = make_rng(settings.seed)

    try:
        word_list = load_words(settings)
    except WordListError as exc:
        print(f"tapline: {exc}", file=sys.stderr)
        sys.exit(1)
    logger.info("Using word list %r", word_list.name)

    words = prepare_words(
        word_list,
        rng,
        settings.words_needed(),
        punctuation=settings.punctuate,
        shuffle=not settings.wikipedia,
    )
    TaplineApp(words, settings.mode(), seed=seed).run()
    print("seed:")
    print(seed)


if __name__ == "__main__":
    main()
