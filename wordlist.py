from __future__ import annotations

import itertools
import json
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence


logger = logging.getLogger(__name__)

# duration sessions get enough words for 300 wpm
WORDS_PER_SECOND = 5

ENGLISH_200 = [
    "the", "be", "of", "and", "a", "to", "in", "he", "have", "it",
    "that", "for", "they", "with", "as", "not", "on", "she", "at", "by",
    "this", "we", "you", "do", "but", "from", "or", "which", "one", "would",
    "all", "will", "there", "say", "who", "make", "when", "can", "more", "if",
    "no", "man", "out", "other", "so", "what", "time", "up", "go", "about",
    "than", "into", "could", "state", "only", "new", "year", "some", "take", "come",
    "these", "know", "see", "use", "get", "like", "then", "first", "any", "work",
    "now", "may", "such", "give", "over", "think", "most", "even", "find", "day",
    "also", "after", "way", "many", "must", "look", "before", "great", "back", "through",
    "long", "where", "much", "should", "well", "people", "down", "own", "just", "because",
    "good", "each", "those", "feel", "seem", "how", "high", "too", "place", "little",
    "world", "very", "still", "nation", "hand", "old", "life", "tell", "write", "become",
    "here", "show", "house", "both", "between", "need", "mean", "call", "develop", "under",
    "last", "right", "move", "thing", "general", "school", "never", "same", "another", "begin",
    "while", "number", "part", "turn", "real", "leave", "might", "want", "point", "form",
    "off", "child", "few", "small", "since", "against", "ask", "late", "home", "interest",
    "large", "person", "end", "open", "public", "follow", "during", "present", "without", "again",
    "hold", "govern", "around", "possible", "head", "consider", "word", "program", "problem", "however",
    "lead", "system", "set", "order", "eye", "plan", "run", "keep", "face", "fact",
    "group", "play", "stand", "increase", "early", "course", "change", "help", "line", "city",
]

PUNCTUATION_WEIGHTS = {
    "period": 3,
    "comma": 2,
    "hyphen": 2,
    "parentheses": 2,
    "exclamation": 2,
    "semicolon": 1,
    "colon": 2,
    "double_quotes": 2,
    "quotes": 2,
}

SUFFIX_MARKS = {
    "period": ".",
    "comma": ",",
    "exclamation": "!",
    "semicolon": ";",
    "colon": ":",
}

SENTENCE_ENDS = {"period", "exclamation"}


class WordListError(Exception):
    """The word list could not be loaded or is unusable."""


@dataclass
class WordList:
    name: str
    words: list[str]

    @classmethod
    def from_json(cls, text: str) -> WordList:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise WordListError(f"word list is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise WordListError("word list must be a JSON object")

        name = data.get("name")
        words = data.get("words")
        if not isinstance(name, str):
            raise WordListError("word list needs a string 'name'")
        if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
            raise WordListError("word list needs a list of strings in 'words'")

        words = [w.strip() for w in words if w.strip()]
        if not words:
            raise WordListError(f"word list {name!r} has no words")
        return cls(name=name, words=words)


def default_word_list() -> WordList:
    return WordList(name="english_200", words=list(ENGLISH_200))


def load_word_list(path: str | Path | None = None) -> WordList:
    if path is None:
        return default_word_list()
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise WordListError(f"cannot read word list {path}: {exc.strerror}") from exc
    word_list = WordList.from_json(text)
    logger.info("Loaded word list %r (%d words) from %s", word_list.name, len(word_list.words), path)
    return word_list


def make_rng(seed: int | None = None) -> tuple[random.Random, int]:
    if seed is None:
        seed = random.SystemRandom().getrandbits(64)
    logger.info("Using seed %d", seed)
    return random.Random(seed), seed


def shuffle_words(words: Sequence[str], rng: random.Random) -> list[str]:
    shuffled = list(words)
    rng.shuffle(shuffled)
    return shuffled


def punctuate(
    words: Sequence[str],
    rng: random.Random,
    jump: tuple[int, int] = (2, 4),
) -> list[str]:
    """Capitalise sentences and sprinkle punctuation every few words.

    The gap between two marks is drawn from ``jump`` (inclusive). A hyphen
    is inserted as a word of its own.
    """
    kinds = list(PUNCTUATION_WEIGHTS)
    weights = list(PUNCTUATION_WEIGHTS.values())
    capitalize_next = True
    next_index = rng.randint(*jump)
    result: list[str] = []

    for index, word in enumerate(words):
        if capitalize_next:
            capitalize_next = False
            word = word[:1].upper() + word[1:]
        if index == next_index:
            next_index += rng.randint(*jump)
            kind = rng.choices(kinds, weights=weights)[0]
            if kind in SENTENCE_ENDS:
                capitalize_next = True
            if kind == "double_quotes":
                word = f'"{word}"'
            elif kind == "quotes":
                word = f"'{word}'"
            elif kind == "parentheses":
                word = f"({word})"
            elif kind == "hyphen":
                result.append("-")
            else:
                word += SUFFIX_MARKS[kind]
        result.append(word)
    return result


def fit_to_count(words: Sequence[str], count: int) -> list[str]:
    """Exactly ``count`` words, repeating the list if it is too short."""
    if count <= 0:
        return []
    if not words:
        raise WordListError("cannot build a session from an empty word list")
    return list(itertools.islice(itertools.cycle(words), count))


def ensure_length(words: Sequence[str], minimum: int) -> list[str]:
    if len(words) >= minimum:
        return list(words)
    return fit_to_count(words, minimum)


def prepare_words(
    word_list: WordList,
    rng: random.Random,
    count: int,
    punctuation: bool = False,
    shuffle: bool = True,
) -> list[str]:
    """Shuffle, optionally punctuate, and size the words for a session."""
    words = list(word_list.words)
    if shuffle:
        words = shuffle_words(words, rng)
    if punctuation:
        words = punctuate(words, rng)
    return ensure_length(words, count)
