"""Tests for wordlist – loading, shuffling, punctuation and sizing."""

from __future__ import annotations

import json
import random

import pytest

from wordlist import (
    ENGLISH_200,
    PUNCTUATION_WEIGHTS,
    WordList,
    WordListError,
    ensure_length,
    fit_to_count,
    load_word_list,
    make_rng,
    prepare_words,
    punctuate,
    shuffle_words,
)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

class TestFromJson:
    def test_valid(self):
        wl = WordList.from_json(json.dumps({"name": "tiny", "words": ["a", "b"]}))
        assert wl == WordList(name="tiny", words=["a", "b"])

    def test_blank_words_are_dropped(self):
        wl = WordList.from_json(json.dumps({"name": "x", "words": ["a", " ", ""]}))
        assert wl.words == ["a"]

    def test_invalid_json(self):
        with pytest.raises(WordListError):
            WordList.from_json("{not json")

    def test_not_an_object(self):
        with pytest.raises(WordListError):
            WordList.from_json("[1, 2]")

    def test_missing_name(self):
        with pytest.raises(WordListError):
            WordList.from_json(json.dumps({"words": ["a"]}))

    def test_words_must_be_strings(self):
        with pytest.raises(WordListError):
            WordList.from_json(json.dumps({"name": "x", "words": ["a", 3]}))

    def test_empty_list(self):
        with pytest.raises(WordListError):
            WordList.from_json(json.dumps({"name": "x", "words": []}))


class TestLoadWordList:
    def test_default_list(self):
        wl = load_word_list()
        assert wl.name == "english_200"
        assert wl.words == ENGLISH_200
        assert len(wl.words) == 200

    def test_from_file(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text(json.dumps({"name": "file", "words": ["one", "two"]}))
        assert load_word_list(path).words == ["one", "two"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(WordListError):
            load_word_list(tmp_path / "missing.json")


# ---------------------------------------------------------------------------
# Randomness
# ---------------------------------------------------------------------------

class TestRng:
    def test_seed_is_reported(self):
        _, seed = make_rng(42)
        assert seed == 42

    def test_random_seed_when_none(self):
        _, seed = make_rng()
        assert isinstance(seed, int)

    def test_same_seed_same_shuffle(self):
        a = shuffle_words(ENGLISH_200, make_rng(7)[0])
        b = shuffle_words(ENGLISH_200, make_rng(7)[0])
        assert a == b
        assert sorted(a) == sorted(ENGLISH_200)

    def test_shuffle_leaves_input_alone(self):
        words = ["a", "b", "c"]
        shuffle_words(words, random.Random(1))
        assert words == ["a", "b", "c"]


class TestPunctuate:
    def test_first_word_is_capitalised(self):
        result = punctuate(["hello", "world"], random.Random(3))
        assert result[0] == "Hello"

    def test_deterministic(self):
        words = ENGLISH_200[:50]
        assert punctuate(words, random.Random(9)) == punctuate(words, random.Random(9))

    def test_adds_marks(self):
        result = punctuate(["word"] * 100, random.Random(5))
        marked = [w for w in result if w != "word"]
        assert len(marked) >= 20

    def test_hyphen_is_its_own_word(self):
        result = punctuate(["word"] * 400, random.Random(11))
        assert "-" in result
        assert not any(w != "-" and "-" in w for w in result)

    def test_capital_after_sentence_end(self):
        result = punctuate(["word"] * 400, random.Random(13))
        for previous, current in zip(result, result[1:]):
            if previous.endswith((".", "!")):
                assert current[:2] in ("Wo", "-", "\"W", "'W", "(W")

    def test_weight_table(self):
        assert PUNCTUATION_WEIGHTS["period"] == 3
        assert PUNCTUATION_WEIGHTS["semicolon"] == 1
        assert len(PUNCTUATION_WEIGHTS) == 9


# ---------------------------------------------------------------------------
# Sizing
# ---------------------------------------------------------------------------

class TestSizing:
    def test_truncate(self):
        assert fit_to_count(["a", "b", "c"], 2) == ["a", "b"]

    def test_repeat(self):
        assert fit_to_count(["a", "b"], 5) == ["a", "b", "a", "b", "a"]

    def test_empty_list_cannot_be_sized(self):
        with pytest.raises(WordListError):
            fit_to_count([], 3)

    def test_ensure_length_keeps_long_lists(self):
        assert ensure_length(["a", "b", "c"], 2) == ["a", "b", "c"]

    def test_ensure_length_repeats(self):
        assert ensure_length(["a"], 3) == ["a", "a", "a"]

    def test_prepare_words(self):
        wl = WordList(name="x", words=["a", "b", "c"])
        words = prepare_words(wl, random.Random(0), 10)
        assert len(words) == 10
        assert set(words) == {"a", "b", "c"}

    def test_prepare_words_without_shuffle(self):
        wl = WordList(name="x", words=["a", "b", "c"])
        assert prepare_words(wl, random.Random(0), 3, shuffle=False) == ["a", "b", "c"]
