from __future__ import annotations

from dataclasses import dataclass
from typing import Union


WORD_DELETE_KEYS = frozenset({"backspace", "h", "w"})


@dataclass(frozen=True)
class KeyPress:
    """A key event, detached from whichever terminal library produced it."""

    key: str
    character: str | None = None
    ctrl: bool = False
    pressed: bool = True

    @property
    def is_space(self) -> bool:
        return self.key == "space" or self.character == " "

    @property
    def is_word_delete(self) -> bool:
        return self.ctrl and self.key in WORD_DELETE_KEYS

    @property
    def is_backspace(self) -> bool:
        return not self.ctrl and self.key == "backspace"

    @property
    def typed_char(self) -> str | None:
        if self.ctrl or self.character is None or len(self.character) != 1:
            return None
        if not self.character.isprintable() or self.character.isspace():
            return None
        return self.character


@dataclass(frozen=True)
class Correct:
    char: str


@dataclass(frozen=True)
class Incorrect:
    char: str


@dataclass(frozen=True)
class Space:
    # typed length minus target length of the word just closed
    overflow: int


KeyStrokeKind = Union[Correct, Incorrect, Space]


@dataclass(frozen=True)
class KeyStroke:
    elapsed: float
    kind: KeyStrokeKind


def classify_char(target: str, position: int, char: str) -> Correct | Incorrect:
    if position < len(target) and target[position] == char:
        return Correct(char)
    return Incorrect(char)


def boundary(typed: str, target: str) -> Space:
    return Space(len(typed) - len(target))
