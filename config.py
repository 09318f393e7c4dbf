from __future__ import annotations

import argparse
import logging
import math
from dataclasses import dataclass
from typing import Sequence

from textual.logging import TextualHandler

from session import DurationMode, TestMode, WordsMode
from wordlist import WORDS_PER_SECOND


DEFAULT_DURATION = 30
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    words: int | None = None
    duration: int | None = None
    words_file: str | None = None
    wikipedia: bool = False
    punctuate: bool = False
    seed: int | None = None
    log_level: str = "WARNING"

    def mode(self) -> TestMode:
        if self.words is not None:
            return WordsMode(self.words)
        return DurationMode(float(self.duration or DEFAULT_DURATION))

    def words_needed(self) -> int:
        mode = self.mode()
        if isinstance(mode, WordsMode):
            return mode.count
        return math.ceil(mode.seconds * WORDS_PER_SECOND)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a whole number")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value!r} must be greater than zero")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tapline",
        description="Terminal typing test: words per minute and accuracy.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-w", "--words", type=_positive_int, help="end the test after this many words")
    mode.add_argument(
        "-d",
        "--duration",
        type=_positive_int,
        help=f"end the test after this many seconds (default {DEFAULT_DURATION})",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--words-file", help='JSON file shaped like {"name": ..., "words": [...]}')
    source.add_argument("--wikipedia", action="store_true", help="type a random Wikipedia summary")
    parser.add_argument("-p", "--punctuate", action="store_true", help="add punctuation and capitals")
    parser.add_argument("-s", "--seed", type=int, help="seed for shuffling and punctuation")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    args = build_parser().parse_args(argv)
    return Settings(
        words=args.words,
        duration=args.duration,
        words_file=args.words_file,
        wikipedia=args.wikipedia,
        punctuate=args.punctuate,
        seed=args.seed,
        log_level=args.log_level,
    )


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=LOG_FORMAT,
        handlers=[TextualHandler()],
    )
