"""Analyzer utilities for the prefix search engine.

Text is split on single spaces, every piece is run through the word
normalizer, and pieces that come out shorter than the minimum word length
are dropped. The composable tokenizer/filter layout keeps each step small
enough to test on its own.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol


DEFAULT_STOPWORDS = [
    "at",
    "to",
    "we",
    "my",
    "as",
    "is",
    "in",
    "am",
    "i",
    "he",
    "she",
    "that",
    "the",
    "them",
    "a",
]

DEFAULT_MIN_WORD_LENGTH = 2

# Anything outside lowercase ascii letters, digits, underscore, hyphen and whitespace
_DISALLOWED_CHARS = re.compile(r"[^a-z0-9_\-\s]")


@dataclass
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    position: int
    start_char: int
    end_char: int


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class SpaceTokenizer:
    """Splits on every single space.

    Runs of spaces are not collapsed, so they yield empty tokens which the
    filters downstream discard.
    """

    def __call__(self, text: str) -> Iterator[Token]:
        start = 0
        for position, piece in enumerate(text.split(" ")):
            yield Token(text=piece, position=position, start_char=start, end_char=start + len(piece))
            start += len(piece) + 1


class Normalizer:
    """Turns a raw token into its indexing key.

    Returns an empty string when the token should be discarded.
    """

    def __init__(self, stopwords: Sequence[str] | None = None) -> None:
        vocab = stopwords if stopwords is not None else DEFAULT_STOPWORDS
        self.stopwords = frozenset(word.lower() for word in vocab)

    def __call__(self, word: str) -> str:
        word = _DISALLOWED_CHARS.sub("", word.lower()).strip()
        if word in self.stopwords:
            return ""
        return word


class NormalizeFilter:
    """Filter that replaces token text with its normalized form."""

    def __init__(self, normalizer: Normalizer) -> None:
        self.normalizer = normalizer

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            token.text = self.normalizer(token.text)
            yield token


class MinLengthFilter:
    """Drops tokens shorter than ``min_length`` characters."""

    def __init__(self, min_length: int = DEFAULT_MIN_WORD_LENGTH) -> None:
        if min_length < 1:
            raise ValueError(f"min_length must be at least 1, got {min_length}")
        self.min_length = min_length

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if len(token.text) >= self.min_length:
                yield token


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        return list(stream)


class WordAnalyzer:
    """Default analyzer used for both documents and queries."""

    def __init__(
        self,
        *,
        stopwords: Sequence[str] | None = None,
        min_length: int = DEFAULT_MIN_WORD_LENGTH,
    ) -> None:
        self.normalizer = Normalizer(stopwords)
        self.min_length = min_length
        self.pipeline = AnalyzerPipeline(
            SpaceTokenizer(),
            [NormalizeFilter(self.normalizer), MinLengthFilter(min_length)],
        )

    def __call__(self, text: str | None) -> list[Token]:
        if not text:
            return []
        return self.pipeline(text)


_default_normalizer = Normalizer()


def normalize(word: str) -> str:
    """Normalize ``word`` against the default stop list."""

    return _default_normalizer(word)
