from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import requests

from wordlist import WordList, WordListError


logger = logging.getLogger(__name__)

WIKI_RANDOM_SUMMARY_URL = "https://en.wikipedia.org/api/rest_v1/page/random/summary"


@dataclass
class Article:
    title: str
    url: str
    text: str


def _clean_text(text: str) -> str:
    text = re.sub(r"\[\d+\]", "", text)
    text = re.sub(r"\s+", " ", text).strip()
    return text


def _is_ascii(text: str) -> bool:
    try:
        text.encode("ascii")
        return True
    except UnicodeEncodeError:
        return False


def fetch_random_article(min_words: int = 60, tries: int = 5) -> Article:
    last_article = None
    for _ in range(tries):
        try:
            response = requests.get(
                WIKI_RANDOM_SUMMARY_URL,
                timeout=8,
                allow_redirects=True,
                headers={
                    "User-Agent": "tapline/0.1 (terminal typing test; python requests)",
                    "Accept": "application/json",
                },
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise WordListError(f"could not fetch a Wikipedia article: {exc}") from exc

        text = _clean_text(data.get("extract") or "")
        if not text or not _is_ascii(text):
            continue

        last_article = Article(
            title=data.get("title") or "Unknown Title",
            url=(
                data.get("content_urls", {})
                .get("desktop", {})
                .get("page", "https://en.wikipedia.org")
            ),
            text=text,
        )
        logger.debug("Fetched %r (%d chars)", last_article.title, len(text))
        if len(text.split()) >= min_words:
            return last_article

    if last_article is None:
        raise WordListError(f"no usable Wikipedia article after {tries} tries")
    return last_article


def article_word_list(article: Article) -> WordList:
    return WordList(name=f"wikipedia: {article.title}", words=article.text.split())
